"""
===============================================================================
USE CASE: Update Attendance
===============================================================================

Business Goal:
    Corrección administrativa de un registro de asistencia (patch parcial).

Why (Context / Intención):
    - Es la vía de escape administrativa: puede reescribir entry/exit.
    - La política sobre pisar una salida ya registrada es configurable
      (allow_exit_overwrite). Con False, un patch que cambia una salida
      existente se rechaza.
    - Cambiar la fecha re-verifica la unicidad (employee, date).
    - El guardado sólo aplica sobre un registro vivo y nunca borra una salida
      registrada en paralelo (exit_time None conserva la almacenada).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    UpdateAttendanceUseCase

Collaborators:
    - AttendanceRepository

Error Mapping:
    - NOT_FOUND: registro inexistente o borrado.
    - VALIDATION_ERROR: record_status=deleted (usar delete), salida protegida.
    - CONFLICT: otra asistencia viva en la nueva fecha.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, time
from uuid import UUID

from ....crosscutting.exceptions import ConstraintViolationError
from ....domain.entities import Attendance, AttendanceStatus, RecordStatus
from ....domain.repositories import AttendanceRepository
from ..results import ErrorCode, Result, failure, from_constraint, success
from .create_attendance import MSG_DUPLICATE_DAY
from .register_exit import MSG_ATTENDANCE_NOT_FOUND

MSG_EXIT_LOCKED = "La hora de salida ya fue registrada y no puede modificarse"
MSG_DELETED_NOT_ALLOWED = "Para eliminar un registro use la operación de borrado"


@dataclass(frozen=True)
class UpdateAttendanceInput:
    """Patch parcial: None significa "sin cambios"."""

    attendance_id: UUID
    date: date | None = None
    entry_time: time | None = None
    exit_time: time | None = None
    status: AttendanceStatus | None = None
    observations: str | None = None
    record_status: RecordStatus | None = None


class UpdateAttendanceUseCase:
    def __init__(
        self,
        attendances: AttendanceRepository,
        *,
        allow_exit_overwrite: bool = True,
    ) -> None:
        self._attendances = attendances
        self._allow_exit_overwrite = allow_exit_overwrite

    def execute(self, input_data: UpdateAttendanceInput) -> Result[Attendance]:
        current = self._attendances.get_attendance(input_data.attendance_id)
        if current is None:
            return failure(ErrorCode.NOT_FOUND, MSG_ATTENDANCE_NOT_FOUND)

        if input_data.record_status == RecordStatus.DELETED:
            return failure(ErrorCode.VALIDATION_ERROR, MSG_DELETED_NOT_ALLOWED)

        if (
            not self._allow_exit_overwrite
            and current.has_exit
            and input_data.exit_time is not None
            and input_data.exit_time != current.exit_time
        ):
            return failure(ErrorCode.VALIDATION_ERROR, MSG_EXIT_LOCKED)

        if input_data.date is not None and input_data.date != current.date:
            if self._attendances.exists_live_for_day(
                current.employee_id, input_data.date, exclude_id=current.id
            ):
                return failure(ErrorCode.CONFLICT, MSG_DUPLICATE_DAY)

        changes: dict[str, object] = {}
        for field_name in (
            "date",
            "entry_time",
            "exit_time",
            "status",
            "observations",
            "record_status",
        ):
            value = getattr(input_data, field_name)
            if value is not None:
                changes[field_name] = value

        # R: La política de salida se re-verifica en la escritura.
        protect_exit = not self._allow_exit_overwrite and input_data.exit_time is not None

        try:
            updated = self._attendances.update_attendance(
                replace(current, **changes), protect_exit=protect_exit
            )
        except ConstraintViolationError as exc:
            return from_constraint(
                exc,
                conflict_message=MSG_DUPLICATE_DAY,
                missing_message=MSG_ATTENDANCE_NOT_FOUND,
            )
        if updated is not None:
            return success(updated)

        if protect_exit and self._attendances.get_attendance(current.id) is not None:
            return failure(ErrorCode.VALIDATION_ERROR, MSG_EXIT_LOCKED)
        return failure(ErrorCode.NOT_FOUND, MSG_ATTENDANCE_NOT_FOUND)
