"""
===============================================================================
USE CASES: Position Management (create / update / delete)
===============================================================================

Business Goal:
    Alta, modificación y baja lógica de cargos.

Why (Context / Intención):
    - Un cargo pertenece a un departamento vivo (no borrado).
    - No se borra un cargo mientras haya usuarios active/inactive que lo
      referencien.
      El repositorio lo re-verifica bajo lock en el mismo write.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    CreatePositionUseCase, UpdatePositionUseCase, DeletePositionUseCase

Collaborators:
    - PositionRepository, DepartmentRepository, UserRepository

Error Mapping:
    - VALIDATION_ERROR: nombre vacío / salario negativo.
    - NOT_FOUND: cargo o departamento inexistente / borrado.
    - CONFLICT: cargo con empleados asignados.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from uuid import UUID, uuid4

from ....crosscutting.exceptions import ConstraintViolationError
from ....domain.entities import OperationalStatus, Position
from ....domain.repositories import (
    DepartmentRepository,
    PositionRepository,
    UserRepository,
)
from ....identity.users import LIVE_USER_STATUSES
from ..results import ErrorCode, Result, failure, from_constraint, success

MSG_POSITION_NOT_FOUND = "Cargo no encontrado"
MSG_DEPARTMENT_NOT_FOUND = "Departamento no encontrado"
MSG_NAME_REQUIRED = "El nombre del cargo es requerido"
MSG_NEGATIVE_SALARY = "El salario base no puede ser negativo"
MSG_HAS_EMPLOYEES = (
    "No se puede eliminar el cargo porque tiene empleados asignados"
)


@dataclass(frozen=True)
class CreatePositionInput:
    name: str
    department_id: UUID
    description: str | None = None
    base_salary: Decimal = Decimal("0.00")
    status: OperationalStatus = OperationalStatus.ACTIVE


class CreatePositionUseCase:
    def __init__(
        self, positions: PositionRepository, departments: DepartmentRepository
    ) -> None:
        self._positions = positions
        self._departments = departments

    def execute(self, input_data: CreatePositionInput) -> Result[Position]:
        name = (input_data.name or "").strip()
        if not name:
            return failure(ErrorCode.VALIDATION_ERROR, MSG_NAME_REQUIRED)
        if input_data.base_salary < 0:
            return failure(ErrorCode.VALIDATION_ERROR, MSG_NEGATIVE_SALARY)

        if self._departments.get_department(input_data.department_id) is None:
            return failure(ErrorCode.NOT_FOUND, MSG_DEPARTMENT_NOT_FOUND)

        position = Position(
            id=uuid4(),
            name=name,
            department_id=input_data.department_id,
            description=input_data.description,
            base_salary=input_data.base_salary,
            status=input_data.status,
        )
        try:
            return success(self._positions.create_position(position))
        except ConstraintViolationError as exc:
            return from_constraint(
                exc,
                conflict_message=MSG_POSITION_NOT_FOUND,
                missing_message=MSG_DEPARTMENT_NOT_FOUND,
            )


@dataclass(frozen=True)
class UpdatePositionInput:
    position_id: UUID
    name: str | None = None
    department_id: UUID | None = None
    description: str | None = None
    base_salary: Decimal | None = None
    status: OperationalStatus | None = None


class UpdatePositionUseCase:
    def __init__(
        self, positions: PositionRepository, departments: DepartmentRepository
    ) -> None:
        self._positions = positions
        self._departments = departments

    def execute(self, input_data: UpdatePositionInput) -> Result[Position]:
        position = self._positions.get_position(input_data.position_id)
        if position is None:
            return failure(ErrorCode.NOT_FOUND, MSG_POSITION_NOT_FOUND)

        changes: dict[str, object] = {}
        if input_data.name is not None:
            name = input_data.name.strip()
            if not name:
                return failure(ErrorCode.VALIDATION_ERROR, MSG_NAME_REQUIRED)
            changes["name"] = name
        if (
            input_data.department_id is not None
            and input_data.department_id != position.department_id
        ):
            if self._departments.get_department(input_data.department_id) is None:
                return failure(ErrorCode.NOT_FOUND, MSG_DEPARTMENT_NOT_FOUND)
            changes["department_id"] = input_data.department_id
        if input_data.description is not None:
            changes["description"] = input_data.description
        if input_data.base_salary is not None:
            if input_data.base_salary < 0:
                return failure(ErrorCode.VALIDATION_ERROR, MSG_NEGATIVE_SALARY)
            changes["base_salary"] = input_data.base_salary
        if input_data.status is not None:
            changes["status"] = input_data.status

        try:
            updated = self._positions.update_position(replace(position, **changes))
        except ConstraintViolationError as exc:
            return from_constraint(
                exc,
                conflict_message=MSG_POSITION_NOT_FOUND,
                missing_message=MSG_DEPARTMENT_NOT_FOUND,
            )
        if updated is None:
            return failure(ErrorCode.NOT_FOUND, MSG_POSITION_NOT_FOUND)
        return success(updated)


class DeletePositionUseCase:
    def __init__(self, positions: PositionRepository, users: UserRepository) -> None:
        self._positions = positions
        self._users = users

    def execute(self, position_id: UUID) -> Result[Position]:
        position = self._positions.get_position(position_id)
        if position is None:
            return failure(ErrorCode.NOT_FOUND, MSG_POSITION_NOT_FOUND)

        if self._users.count_users_by_position(position_id, LIVE_USER_STATUSES) > 0:
            return failure(ErrorCode.CONFLICT, MSG_HAS_EMPLOYEES)

        deleted = self._positions.soft_delete_position(position_id, LIVE_USER_STATUSES)
        if deleted is not None:
            return success(deleted)
        if self._positions.get_position(position_id) is None:
            return failure(ErrorCode.NOT_FOUND, MSG_POSITION_NOT_FOUND)
        return failure(ErrorCode.CONFLICT, MSG_HAS_EMPLOYEES)
