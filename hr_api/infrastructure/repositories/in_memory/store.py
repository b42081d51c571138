"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/store.py
============================================================
Class: InMemoryStore

Responsibilities:
  - Hold every "table" (users, attendances, departments, positions, camps)
    behind a single lock, so cross-table reads (joins, dependent counts) and
    constraint checks are consistent.
  - Emulate the storage constraints of the PostgreSQL schema:
      * uq users.email
      * partial unique (attendances.employee_id, date) for live records
      * uq departments.name, uq camps.name
      * FKs attendance->user, position->department, user->position,
        camp->user (a soft-deleted parent counts as missing for live children)
    raising ConstraintViolationError exactly like the Postgres repositories.

Collaborators:
  - in_memory/* repositories (views over this store)
  - crosscutting.exceptions.ConstraintViolationError

Constraints / Notes:
  - Used in tests / APP_ENV=test. Not a production store.
  - Entities are copied on the way in and out (no aliasing with callers).
============================================================
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from threading import RLock
from typing import Dict, Optional, TypeVar
from uuid import UUID

from ....crosscutting.exceptions import ConstraintKind, ConstraintViolationError
from ....domain.entities import (
    LIVE_RECORD_STATUSES,
    Attendance,
    Camp,
    Department,
    DepartmentSummary,
    EmployeeSummary,
    Position,
)
from ....identity.users import LIVE_USER_STATUSES, User

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def clone(value: T) -> T:
    """R: Copia defensiva (dataclasses mutables)."""
    return copy.copy(value)


def contains(haystack: Optional[str], needle: str) -> bool:
    """R: Substring case-insensitive (emula ILIKE '%q%')."""
    return needle.lower() in (haystack or "").lower()


class InMemoryStore:
    """Tablas en memoria + constraints, protegidas por un único RLock."""

    def __init__(self) -> None:
        self.lock = RLock()
        self.users: Dict[UUID, User] = {}
        self.attendances: Dict[UUID, Attendance] = {}
        self.departments: Dict[UUID, Department] = {}
        self.positions: Dict[UUID, Position] = {}
        self.camps: Dict[UUID, Camp] = {}

    # =========================================================
    # Joins de lectura
    # =========================================================
    def employee_summary(self, user_id: Optional[UUID]) -> Optional[EmployeeSummary]:
        user = self.users.get(user_id) if user_id else None
        if user is None:
            return None
        return EmployeeSummary(
            id=user.id, name=user.name, email=user.email, role=user.role
        )

    def department_summary(self, department_id: UUID) -> Optional[DepartmentSummary]:
        department = self.departments.get(department_id)
        if department is None:
            return None
        return DepartmentSummary(id=department.id, name=department.name)

    # =========================================================
    # Constraints (emulan unique index / foreign key)
    # =========================================================
    @staticmethod
    def _violation(kind: ConstraintKind, constraint: str) -> ConstraintViolationError:
        return ConstraintViolationError(
            f"constraint violated: {constraint}", kind=kind, constraint=constraint
        )

    def check_user(self, user: User) -> None:
        for other in self.users.values():
            if other.id != user.id and other.email == user.email:
                raise self._violation(ConstraintKind.UNIQUE, "uq_users_email")
        if user.position_id is None:
            return
        # R: Un usuario vivo sólo puede apuntar a un cargo vivo.
        position = self.positions.get(user.position_id)
        if position is None or (
            position.is_deleted and user.status in LIVE_USER_STATUSES
        ):
            raise self._violation(
                ConstraintKind.FOREIGN_KEY, "fk_users_position_id__positions"
            )

    def check_attendance(self, attendance: Attendance) -> None:
        if attendance.employee_id not in self.users:
            raise self._violation(
                ConstraintKind.FOREIGN_KEY, "fk_attendances_employee_id__users"
            )
        if attendance.record_status not in LIVE_RECORD_STATUSES:
            return
        for other in self.attendances.values():
            if (
                other.id != attendance.id
                and other.employee_id == attendance.employee_id
                and other.date == attendance.date
                and other.record_status in LIVE_RECORD_STATUSES
            ):
                raise self._violation(
                    ConstraintKind.UNIQUE, "uq_attendances_employee_date_live"
                )

    def check_department(self, department: Department) -> None:
        for other in self.departments.values():
            if other.id != department.id and other.name == department.name:
                raise self._violation(ConstraintKind.UNIQUE, "uq_departments_name")

    def check_position(self, position: Position) -> None:
        department = self.departments.get(position.department_id)
        if department is None or department.is_deleted:
            raise self._violation(
                ConstraintKind.FOREIGN_KEY, "fk_positions_department_id__departments"
            )

    def check_camp(self, camp: Camp) -> None:
        for other in self.camps.values():
            if other.id != camp.id and other.name == camp.name:
                raise self._violation(ConstraintKind.UNIQUE, "uq_camps_name")
        if camp.employee_id is not None and camp.employee_id not in self.users:
            raise self._violation(
                ConstraintKind.FOREIGN_KEY, "fk_camps_employee_id__users"
            )
