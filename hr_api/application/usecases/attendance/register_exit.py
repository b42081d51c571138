"""
===============================================================================
USE CASE: Register Exit
===============================================================================

Business Goal:
    Registrar la hora de salida de un registro existente. La salida se escribe
    una sola vez por esta operación.

Why (Context / Intención):
    - La lectura previa sólo da el error temprano; la garantía la da la
      escritura condicional del repositorio (exit_time IS NULL y registro
      vivo en el mismo statement).
    - Si la escritura no aplica, se relee para distinguir borrado de
      salida ya registrada.

Error Mapping:
    - NOT_FOUND: registro inexistente o borrado.
    - CONFLICT: la salida ya estaba registrada.
===============================================================================
"""

from __future__ import annotations

from datetime import time
from uuid import UUID

from ....domain.entities import Attendance
from ....domain.repositories import AttendanceRepository
from ..results import ErrorCode, Result, failure, success

MSG_ATTENDANCE_NOT_FOUND = "Registro de asistencia no encontrado"
MSG_EXIT_ALREADY_SET = "La salida ya fue registrada"


class RegisterExitUseCase:
    def __init__(self, attendances: AttendanceRepository) -> None:
        self._attendances = attendances

    def execute(self, attendance_id: UUID, exit_time: time) -> Result[Attendance]:
        attendance = self._attendances.get_attendance(attendance_id)
        if attendance is None:
            return failure(ErrorCode.NOT_FOUND, MSG_ATTENDANCE_NOT_FOUND)
        if attendance.has_exit:
            return failure(ErrorCode.CONFLICT, MSG_EXIT_ALREADY_SET)

        updated = self._attendances.set_exit_time(attendance_id, exit_time)
        if updated is not None:
            return success(updated)

        # R: Otra request ganó entre la lectura y la escritura.
        if self._attendances.get_attendance(attendance_id) is None:
            return failure(ErrorCode.NOT_FOUND, MSG_ATTENDANCE_NOT_FOUND)
        return failure(ErrorCode.CONFLICT, MSG_EXIT_ALREADY_SET)
