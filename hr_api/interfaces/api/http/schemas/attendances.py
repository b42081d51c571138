"""
===============================================================================
TARJETA CRC — schemas/attendances.py
===============================================================================

Módulo:
    Schemas HTTP para el ledger de asistencia

Responsabilidades:
    - Requests de create / entry / exit / update (fechas y horas validadas
      por regex).
    - AttendanceRes con worked_hours derivado (null si falta entrada o salida).
    - DTOs de estadísticas (general, por empleado, por día).
===============================================================================
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from .....application.usecases.attendance import EmployeeAttendanceStatistics
from .....domain.entities import (
    Attendance,
    AttendanceStatus,
    AttendanceStatusCounts,
    DailyAttendanceStatistics,
    RecordStatus,
)
from .....domain.worked_hours import WorkedHours, worked_hours_for
from .common import DateField, EmployeeSummaryRes, TimeField

# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class CreateAttendanceReq(BaseModel):
    employee_id: UUID
    date: DateField
    entry_time: TimeField | None = None
    exit_time: TimeField | None = None
    status: AttendanceStatus | None = None
    observations: str | None = Field(default=None, max_length=500)


class RegisterEntryReq(BaseModel):
    employee_id: UUID
    date: DateField
    entry_time: TimeField


class RegisterExitReq(BaseModel):
    exit_time: TimeField


class UpdateAttendanceReq(BaseModel):
    """Patch parcial. record_status no acepta "deleted" (usar DELETE)."""

    date: DateField | None = None
    entry_time: TimeField | None = None
    exit_time: TimeField | None = None
    status: AttendanceStatus | None = None
    observations: str | None = Field(default=None, max_length=500)
    record_status: Literal["active", "inactive"] | None = None


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class WorkedHoursRes(BaseModel):
    hours: int
    minutes: int
    total_minutes: int
    total_hours: str

    @classmethod
    def from_worked_hours(cls, value: WorkedHours | None) -> "WorkedHoursRes | None":
        if value is None:
            return None
        return cls(
            hours=value.hours,
            minutes=value.minutes,
            total_minutes=value.total_minutes,
            total_hours=value.total_hours,
        )


class AttendanceRes(BaseModel):
    id: UUID
    employee_id: UUID
    date: date
    entry_time: time | None = None
    exit_time: time | None = None
    status: AttendanceStatus
    observations: str | None = None
    record_status: RecordStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
    employee: EmployeeSummaryRes | None = None
    worked_hours: WorkedHoursRes | None = None

    @classmethod
    def from_entity(cls, attendance: Attendance) -> "AttendanceRes":
        return cls(
            id=attendance.id,
            employee_id=attendance.employee_id,
            date=attendance.date,
            entry_time=attendance.entry_time,
            exit_time=attendance.exit_time,
            status=attendance.status,
            observations=attendance.observations,
            record_status=attendance.record_status,
            created_at=attendance.created_at,
            updated_at=attendance.updated_at,
            employee=EmployeeSummaryRes.from_summary(attendance.employee),
            worked_hours=WorkedHoursRes.from_worked_hours(
                worked_hours_for(attendance.entry_time, attendance.exit_time)
            ),
        )


class AttendanceGeneralStatsRes(BaseModel):
    total_records: int
    present: int
    absent: int
    late: int
    justified: int

    @classmethod
    def from_counts(cls, counts: AttendanceStatusCounts) -> "AttendanceGeneralStatsRes":
        return cls(
            total_records=counts.total,
            present=counts.present,
            absent=counts.absent,
            late=counts.late,
            justified=counts.justified,
        )


class EmployeeAttendanceStatsRes(BaseModel):
    employee_id: UUID
    total_days: int
    days_present: int
    days_absent: int
    days_late: int
    days_justified: int
    attendance_percentage: str

    @classmethod
    def from_stats(
        cls, stats: EmployeeAttendanceStatistics
    ) -> "EmployeeAttendanceStatsRes":
        return cls(
            employee_id=stats.employee_id,
            total_days=stats.counts.total,
            days_present=stats.counts.present,
            days_absent=stats.counts.absent,
            days_late=stats.counts.late,
            days_justified=stats.counts.justified,
            attendance_percentage=stats.attendance_percentage,
        )


class DailyAttendanceStatsRes(BaseModel):
    date: date
    total: int
    present: int
    absent: int
    late: int
    justified: int

    @classmethod
    def from_daily(cls, daily: DailyAttendanceStatistics) -> "DailyAttendanceStatsRes":
        return cls(
            date=daily.date,
            total=daily.counts.total,
            present=daily.counts.present,
            absent=daily.counts.absent,
            late=daily.counts.late,
            justified=daily.counts.justified,
        )
