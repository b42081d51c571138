"""
===============================================================================
USE CASE: Create Attendance / Register Entry
===============================================================================

Business Goal:
    Registrar la asistencia diaria de un empleado garantizando a lo sumo UN
    registro vivo (active/inactive) por (employee, date).

Why (Context / Intención):
    - El pre-check (exists_live_for_day) da un mensaje claro en el caso común.
    - El índice único parcial del storage es el árbitro final: si dos requests
      concurrentes pasan el pre-check, la segunda escritura termina en
      ConstraintViolationError y se informa como CONFLICT.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    CreateAttendanceUseCase, RegisterEntryUseCase

Responsibilities:
    - Validar que el empleado exista (y no esté borrado).
    - Verificar unicidad (employee, date) sobre registros vivos.
    - Construir la entidad con record_status=active y status por defecto
      present.

Collaborators:
    - AttendanceRepository, UserRepository

Error Mapping:
    - NOT_FOUND: empleado inexistente / borrado.
    - CONFLICT: ya existe un registro vivo para (employee, date).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from uuid import UUID, uuid4

from ....crosscutting.exceptions import ConstraintViolationError
from ....crosscutting.logger import logger
from ....domain.entities import Attendance, AttendanceStatus, RecordStatus
from ....domain.repositories import AttendanceRepository, UserRepository
from ..results import ErrorCode, Result, failure, from_constraint, success

MSG_EMPLOYEE_NOT_FOUND = "Empleado no encontrado"
MSG_DUPLICATE_DAY = (
    "Ya existe un registro de asistencia para este empleado en esta fecha"
)
MSG_DUPLICATE_ENTRY = "La entrada ya fue registrada para este empleado en esta fecha"


@dataclass(frozen=True)
class CreateAttendanceInput:
    employee_id: UUID
    date: date
    entry_time: time | None = None
    exit_time: time | None = None
    status: AttendanceStatus | None = None
    observations: str | None = None


class CreateAttendanceUseCase:
    def __init__(
        self, attendances: AttendanceRepository, users: UserRepository
    ) -> None:
        self._attendances = attendances
        self._users = users

    def execute(
        self,
        input_data: CreateAttendanceInput,
        *,
        duplicate_message: str = MSG_DUPLICATE_DAY,
    ) -> Result[Attendance]:
        employee = self._users.get_user(input_data.employee_id)
        if employee is None or employee.is_deleted:
            return failure(ErrorCode.NOT_FOUND, MSG_EMPLOYEE_NOT_FOUND)

        if self._attendances.exists_live_for_day(
            input_data.employee_id, input_data.date
        ):
            return failure(ErrorCode.CONFLICT, duplicate_message)

        attendance = Attendance(
            id=uuid4(),
            employee_id=input_data.employee_id,
            date=input_data.date,
            entry_time=input_data.entry_time,
            exit_time=input_data.exit_time,
            status=input_data.status or AttendanceStatus.PRESENT,
            observations=input_data.observations,
            record_status=RecordStatus.ACTIVE,
        )
        try:
            created = self._attendances.create_attendance(attendance)
        except ConstraintViolationError as exc:
            logger.info(
                "Asistencia duplicada detectada por el storage",
                extra={"constraint": exc.constraint},
            )
            return from_constraint(
                exc,
                conflict_message=duplicate_message,
                missing_message=MSG_EMPLOYEE_NOT_FOUND,
            )
        return success(created)


@dataclass(frozen=True)
class RegisterEntryInput:
    employee_id: UUID
    date: date
    entry_time: time


class RegisterEntryUseCase:
    """Marca de entrada: crea el registro del día con status present."""

    def __init__(self, create: CreateAttendanceUseCase) -> None:
        self._create = create

    def execute(self, input_data: RegisterEntryInput) -> Result[Attendance]:
        return self._create.execute(
            CreateAttendanceInput(
                employee_id=input_data.employee_id,
                date=input_data.date,
                entry_time=input_data.entry_time,
                exit_time=None,
                status=AttendanceStatus.PRESENT,
            ),
            duplicate_message=MSG_DUPLICATE_ENTRY,
        )
