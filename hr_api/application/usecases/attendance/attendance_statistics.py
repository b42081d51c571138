"""
===============================================================================
USE CASES: Attendance Statistics
===============================================================================

Business Goal:
    Conteos por status de asistencia (solo registros vivos):
      - generales
      - por empleado (con porcentaje de presentismo)
      - por día dentro de un rango

Notas:
    - attendance_percentage = present / total * 100, string con 2 decimales;
      "0.00" cuando el empleado no tiene registros.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List
from uuid import UUID

from ....domain.entities import AttendanceStatusCounts, DailyAttendanceStatistics
from ....domain.repositories import AttendanceRepository
from ..results import ErrorCode, Result, failure, success
from .attendance_queries import MSG_INVALID_RANGE


@dataclass(frozen=True)
class EmployeeAttendanceStatistics:
    employee_id: UUID
    counts: AttendanceStatusCounts
    attendance_percentage: str


def attendance_percentage(counts: AttendanceStatusCounts) -> str:
    if counts.total <= 0:
        return "0.00"
    return f"{counts.present / counts.total * 100:.2f}"


class GetAttendanceStatisticsUseCase:
    def __init__(self, attendances: AttendanceRepository) -> None:
        self._attendances = attendances

    def general(self) -> Result[AttendanceStatusCounts]:
        return success(self._attendances.count_by_status())

    def for_employee(self, employee_id: UUID) -> Result[EmployeeAttendanceStatistics]:
        counts = self._attendances.count_by_status(employee_id=employee_id)
        return success(
            EmployeeAttendanceStatistics(
                employee_id=employee_id,
                counts=counts,
                attendance_percentage=attendance_percentage(counts),
            )
        )

    def by_date_range(
        self, start_date: date, end_date: date
    ) -> Result[List[DailyAttendanceStatistics]]:
        if start_date > end_date:
            return failure(ErrorCode.VALIDATION_ERROR, MSG_INVALID_RANGE)
        return success(self._attendances.daily_statistics(start_date, end_date))
