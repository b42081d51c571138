"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for users, attendance, departments, positions
  and camps (ports).
- Keep the application/domain independent from infrastructure (PostgreSQL,
  in-memory).
- Enable dependency inversion and straightforward unit testing.

Collaborators
- identity.users: User, UserRole, UserStatus
- domain.entities: Attendance, Department, Position, Camp, statistics
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no SQL.
- Writes that would violate a unique index or foreign key MUST raise
  crosscutting.exceptions.ConstraintViolationError (the store is the final
  arbiter of uniqueness; use cases only pre-check).
- Default read paths exclude soft-deleted rows.
- State-dependent writes (exit once, tombstones with dependents) are
  conditional at the store: the precondition is re-checked in the same
  statement or transaction that writes.

Notes
- typing.Protocol for structural subtyping.
- Listings return crosscutting.pagination.Page.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import List, Optional, Protocol, Sequence
from uuid import UUID

from ..crosscutting.pagination import Page, PageRequest
from ..identity.users import User, UserRole, UserStatus
from .entities import (
    Attendance,
    AttendanceStatus,
    AttendanceStatusCounts,
    Camp,
    CampStatistics,
    DailyAttendanceStatistics,
    Department,
    DepartmentStatistics,
    OperationalStatus,
    Position,
    PositionStatistics,
)

# =============================================================================
# Filtros de listados
# =============================================================================


@dataclass(frozen=True)
class UserFilter:
    statuses: Sequence[UserStatus] = (UserStatus.ACTIVE, UserStatus.INACTIVE)
    role: Optional[UserRole] = None
    position_id: Optional[UUID] = None
    search: Optional[str] = None  # R: substring (case-insensitive) en name/email


@dataclass(frozen=True)
class AttendanceFilter:
    """
    Filtros de lectura de asistencias (siempre sobre registros vivos).

    order_by_employee_name=True ordena por nombre del empleado (listado por
    fecha); caso contrario date DESC, entry_time DESC.
    """

    employee_id: Optional[UUID] = None
    on_date: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[AttendanceStatus] = None
    employee_name: Optional[str] = None
    order_by_employee_name: bool = False


@dataclass(frozen=True)
class CampFilter:
    employee_id: Optional[UUID] = None
    status: Optional[OperationalStatus] = None
    search: Optional[str] = None  # R: name/description OR nombre del empleado


# =============================================================================
# Users (credential store)
# =============================================================================


class UserRepository(Protocol):
    """R: Persistence contract for users. Never hard-deletes."""

    def get_user(self, user_id: UUID) -> Optional[User]:
        """R: Any status (callers decide whether deleted counts as missing)."""
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Exact match on the normalized email, any status."""
        ...

    def create_user(self, user: User) -> User:
        """
        R: Insert. Raises ConstraintViolationError on duplicate email or when a
        live user points at a missing or soft-deleted position (checked under
        a row lock on the position).
        """
        ...

    def update_user(self, user: User) -> Optional[User]:
        """R: Full-row save. Returns None if the row vanished. Same FK rule as create."""
        ...

    def list_users(self, filters: UserFilter, page: PageRequest) -> Page[User]:
        """R: Ordered by created_at DESC."""
        ...

    def count_users_by_position(
        self, position_id: UUID, statuses: Sequence[UserStatus]
    ) -> int: ...

    def ping(self) -> bool: ...


# =============================================================================
# Attendance
# =============================================================================


class AttendanceRepository(Protocol):
    """R: Attendance ledger persistence (soft delete via record_status)."""

    def create_attendance(self, attendance: Attendance) -> Attendance:
        """R: Raises ConstraintViolationError if (employee, date) already live."""
        ...

    def get_attendance(
        self, attendance_id: UUID, *, include_deleted: bool = False
    ) -> Optional[Attendance]:
        """R: Returns the record with the employee summary joined."""
        ...

    def exists_live_for_day(
        self, employee_id: UUID, day: date, *, exclude_id: UUID | None = None
    ) -> bool: ...

    def update_attendance(
        self, attendance: Attendance, *, protect_exit: bool = False
    ) -> Optional[Attendance]:
        """
        R: Saves a live record. Returns None if it is missing or deleted at
        write time. exit_time=None keeps the stored exit; protect_exit only
        writes when the stored exit is unset or already equal.
        Raises ConstraintViolationError on uniqueness.
        """
        ...

    def set_exit_time(self, attendance_id: UUID, exit_time: time) -> Optional[Attendance]:
        """R: Check-and-set: only a live record without exit. None otherwise."""
        ...

    def soft_delete_attendance(self, attendance_id: UUID) -> Optional[Attendance]:
        """R: record_status -> deleted, only from a live state. None otherwise."""
        ...

    def list_attendances(
        self, filters: AttendanceFilter, page: PageRequest
    ) -> Page[Attendance]: ...

    def count_by_status(
        self, *, employee_id: UUID | None = None
    ) -> AttendanceStatusCounts: ...

    def daily_statistics(
        self, start_date: date, end_date: date
    ) -> List[DailyAttendanceStatistics]:
        """R: One entry per date with records, ordered by date DESC."""
        ...


# =============================================================================
# Departments
# =============================================================================


class DepartmentRepository(Protocol):
    def create_department(self, department: Department) -> Department: ...

    def get_department(
        self, department_id: UUID, *, include_deleted: bool = False
    ) -> Optional[Department]: ...

    def get_department_by_name(self, name: str) -> Optional[Department]:
        """R: withDeleted lookup: also sees soft-deleted rows."""
        ...

    def update_department(self, department: Department) -> Optional[Department]:
        """R: Saves a live department (never tombstones nor revives one)."""
        ...

    def soft_delete_department(self, department_id: UUID) -> Optional[Department]:
        """
        R: Tombstone only if the department is live and has no live positions,
        checked under a row lock. None otherwise (caller re-reads to tell
        missing from blocked). Position writes lock the department row, so
        they cannot slip in between the check and the tombstone.
        """
        ...

    def list_departments(
        self,
        page: PageRequest,
        *,
        search: str | None = None,
        include_deleted: bool = False,
    ) -> Page[Department]:
        """R: Ordered by name ASC. search matches name or description."""
        ...

    def count_live_positions(self, department_id: UUID) -> int:
        """R: Positions of the department that are not soft-deleted."""
        ...

    def statistics(self) -> DepartmentStatistics: ...


# =============================================================================
# Positions
# =============================================================================


class PositionRepository(Protocol):
    def create_position(self, position: Position) -> Position: ...

    def get_position(
        self, position_id: UUID, *, include_deleted: bool = False
    ) -> Optional[Position]:
        """R: Returns the position with its department summary joined."""
        ...

    def update_position(self, position: Position) -> Optional[Position]:
        """R: Saves a live position. A missing/deleted department raises FK violation."""
        ...

    def soft_delete_position(
        self, position_id: UUID, blocking_statuses: Sequence[UserStatus]
    ) -> Optional[Position]:
        """
        R: Tombstone only if the position is live and no user with one of
        blocking_statuses references it, checked under a row lock. None
        otherwise. User writes lock the position row they reference.
        """
        ...

    def list_positions(
        self,
        page: PageRequest,
        *,
        department_id: UUID | None = None,
        search: str | None = None,
        include_deleted: bool = False,
    ) -> Page[Position]:
        """
        R: Ordered by name ASC. search matches name/description OR the
        department name in a single query (no in-process merge).
        """
        ...

    def statistics(self) -> PositionStatistics: ...


# =============================================================================
# Camps
# =============================================================================


class CampRepository(Protocol):
    def create_camp(self, camp: Camp) -> Camp: ...

    def get_camp(self, camp_id: UUID) -> Optional[Camp]: ...

    def get_camp_by_name(self, name: str) -> Optional[Camp]: ...

    def update_camp(self, camp: Camp) -> Optional[Camp]: ...

    def delete_camp(self, camp_id: UUID) -> bool:
        """R: Hard delete. True if a row was removed."""
        ...

    def list_camps(self, filters: CampFilter, page: PageRequest) -> Page[Camp]:
        """R: Ordered by name ASC, employee summary joined."""
        ...

    def statistics(self) -> CampStatistics: ...
