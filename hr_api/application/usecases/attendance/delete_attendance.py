"""
===============================================================================
USE CASE: Delete Attendance (soft)
===============================================================================

Business Goal:
    Borrado lógico: record_status pasa a "deleted". La fila queda para
    auditoría y libera la fecha para un nuevo registro del empleado.

Error Mapping:
    - NOT_FOUND: registro inexistente o ya borrado.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.entities import Attendance
from ....domain.repositories import AttendanceRepository
from ..results import ErrorCode, Result, failure, success
from .register_exit import MSG_ATTENDANCE_NOT_FOUND


class DeleteAttendanceUseCase:
    def __init__(self, attendances: AttendanceRepository) -> None:
        self._attendances = attendances

    def execute(self, attendance_id: UUID) -> Result[Attendance]:
        deleted = self._attendances.soft_delete_attendance(attendance_id)
        if deleted is None:
            return failure(ErrorCode.NOT_FOUND, MSG_ATTENDANCE_NOT_FOUND)
        return success(deleted)
