"""
===============================================================================
USE CASES: Attendance Queries
===============================================================================

Business Goal:
    Lecturas paginadas del ledger de asistencia (siempre registros vivos):
    por id, listado general, por empleado, por fecha, rango, status y
    búsqueda por nombre de empleado.

Collaborators:
    - AttendanceRepository (AttendanceFilter + PageRequest)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.pagination import Page, PageRequest
from ....domain.entities import Attendance
from ....domain.repositories import AttendanceFilter, AttendanceRepository
from ..results import ErrorCode, Result, failure, success
from .register_exit import MSG_ATTENDANCE_NOT_FOUND

MSG_INVALID_RANGE = "La fecha de inicio no puede ser posterior a la fecha de fin"
MSG_SEARCH_REQUIRED = "Parámetro de búsqueda requerido"


class GetAttendanceUseCase:
    def __init__(self, attendances: AttendanceRepository) -> None:
        self._attendances = attendances

    def execute(self, attendance_id: UUID) -> Result[Attendance]:
        attendance = self._attendances.get_attendance(attendance_id)
        if attendance is None:
            return failure(ErrorCode.NOT_FOUND, MSG_ATTENDANCE_NOT_FOUND)
        return success(attendance)


class ListAttendancesUseCase:
    """
    Listado con filtros combinables.

    - on_date sin otros filtros ordena por nombre de empleado.
    - Rango invertido (start > end) => VALIDATION_ERROR.
    - employee_name vacío (búsqueda) => VALIDATION_ERROR.
    """

    def __init__(self, attendances: AttendanceRepository) -> None:
        self._attendances = attendances

    def execute(
        self, filters: AttendanceFilter, page: PageRequest
    ) -> Result[Page[Attendance]]:
        if (
            filters.start_date is not None
            and filters.end_date is not None
            and filters.start_date > filters.end_date
        ):
            return failure(ErrorCode.VALIDATION_ERROR, MSG_INVALID_RANGE)
        if filters.employee_name is not None and not filters.employee_name.strip():
            return failure(ErrorCode.VALIDATION_ERROR, MSG_SEARCH_REQUIRED)

        return success(self._attendances.list_attendances(filters, page))
