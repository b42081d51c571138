"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Attendance, Department, Position, Camp + estadísticas)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Brindar helpers mínimos (métodos) para mantener invariantes simples.
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases: construyen/consumen estas entidades.
    - identity.users: User (dueño de Attendance/Camp, referencia a Position).

Principios:
    - Sin dependencias a DB/FastAPI.
    - Department/Position separan el estado operativo (status) del ciclo de
      vida (deleted_at): "inactivo" y "borrado" no comparten campo.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from uuid import UUID

from ..identity.users import UserRole


def _utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Enums compartidos
# ---------------------------------------------------------------------------


class OperationalStatus(str, Enum):
    """Estado operativo de Department / Position / Camp."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    JUSTIFIED = "justified"


class RecordStatus(str, Enum):
    """Ciclo de vida del registro de asistencia."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"


# Registros que cuentan para la unicidad (employee, date) y para las lecturas.
LIVE_RECORD_STATUSES: tuple[RecordStatus, ...] = (
    RecordStatus.ACTIVE,
    RecordStatus.INACTIVE,
)


# ---------------------------------------------------------------------------
# Resúmenes embebidos en respuestas
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EmployeeSummary:
    """Datos públicos del empleado adjuntos a asistencias y camps."""

    id: UUID
    name: str
    email: str
    role: UserRole


@dataclass(frozen=True)
class DepartmentSummary:
    id: UUID
    name: str


# ---------------------------------------------------------------------------
# Attendance
# ---------------------------------------------------------------------------


@dataclass
class Attendance:
    """
    Registro diario de asistencia.

    Invariantes:
      - A lo sumo un registro vivo (active/inactive) por (employee_id, date).
      - exit_time se escribe una sola vez por register_exit.
      - "deleted" es un estado, no un borrado de fila.
    """

    id: UUID
    employee_id: UUID
    date: date
    entry_time: Optional[time] = None
    exit_time: Optional[time] = None
    status: AttendanceStatus = AttendanceStatus.PRESENT
    observations: Optional[str] = None
    record_status: RecordStatus = RecordStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Join de lectura (no se persiste)
    employee: Optional[EmployeeSummary] = None

    @property
    def is_deleted(self) -> bool:
        return self.record_status == RecordStatus.DELETED

    @property
    def has_exit(self) -> bool:
        return self.exit_time is not None

    def mark_deleted(self) -> None:
        """Soft delete."""
        self.record_status = RecordStatus.DELETED
        self.updated_at = _utcnow()


# ---------------------------------------------------------------------------
# Department
# ---------------------------------------------------------------------------


@dataclass
class Department:
    id: UUID
    name: str
    description: Optional[str] = None
    status: OperationalStatus = OperationalStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        """True si está soft-deleted."""
        return self.deleted_at is not None

    def mark_deleted(self, *, at: datetime | None = None) -> None:
        self.deleted_at = at or _utcnow()
        self.updated_at = self.deleted_at


# ---------------------------------------------------------------------------
# Position
# ---------------------------------------------------------------------------


@dataclass
class Position:
    id: UUID
    name: str
    department_id: UUID
    description: Optional[str] = None
    base_salary: Decimal = Decimal("0.00")
    status: OperationalStatus = OperationalStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    department: Optional[DepartmentSummary] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def mark_deleted(self, *, at: datetime | None = None) -> None:
        self.deleted_at = at or _utcnow()
        self.updated_at = self.deleted_at


# ---------------------------------------------------------------------------
# Camp
# ---------------------------------------------------------------------------


@dataclass
class Camp:
    """Sitio de trabajo. Se borra físicamente (sin soft delete)."""

    id: UUID
    name: str
    employee_id: Optional[UUID] = None
    description: Optional[str] = None
    status: OperationalStatus = OperationalStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    employee: Optional[EmployeeSummary] = None


# ---------------------------------------------------------------------------
# Estadísticas
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AttendanceStatusCounts:
    """Conteo por status de asistencia (solo registros vivos)."""

    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    justified: int = 0


@dataclass(frozen=True)
class DailyAttendanceStatistics:
    date: date
    counts: AttendanceStatusCounts


@dataclass(frozen=True)
class DepartmentPositionCount:
    id: UUID
    name: str
    position_count: int


@dataclass(frozen=True)
class DepartmentStatistics:
    total: int = 0
    active: int = 0
    inactive: int = 0
    deleted: int = 0
    positions_per_department: List[DepartmentPositionCount] = field(
        default_factory=list
    )


@dataclass(frozen=True)
class PositionStatistics:
    total: int = 0
    active: int = 0
    inactive: int = 0
    deleted: int = 0


@dataclass(frozen=True)
class CampStatistics:
    total: int = 0
    active: int = 0
    inactive: int = 0
    with_employee: int = 0
    without_employee: int = 0
