"""
===============================================================================
USE CASES: Camp Management (create / update / delete / assign / remove)
===============================================================================

Business Goal:
    Administrar sitios de trabajo (camps) y su empleado asignado.

Why (Context / Intención):
    - El nombre del camp es único.
    - Solo se asignan usuarios con rol employee y status active.
    - Borrado físico (no hay soft delete para camps).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    CreateCampUseCase, UpdateCampUseCase, DeleteCampUseCase,
    AssignCampEmployeeUseCase, RemoveCampEmployeeUseCase

Collaborators:
    - CampRepository, UserRepository

Error Mapping:
    - VALIDATION_ERROR: nombre vacío; remover sin empleado asignado.
    - NOT_FOUND: camp inexistente; empleado inexistente / no apto.
    - CONFLICT: nombre duplicado.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from uuid import UUID, uuid4

from ....crosscutting.exceptions import ConstraintViolationError
from ....domain.entities import Camp, OperationalStatus
from ....domain.repositories import CampRepository, UserRepository
from ....identity.users import UserRole, UserStatus
from ..results import (
    ErrorCode,
    Result,
    UseCaseError,
    failure,
    from_constraint,
    success,
)

MSG_CAMP_NOT_FOUND = "Campamento no encontrado"
MSG_NAME_TAKEN = "El nombre del campamento ya existe"
MSG_NAME_REQUIRED = "El nombre del campamento es requerido"
MSG_EMPLOYEE_NOT_ELIGIBLE = "Empleado no encontrado o inactivo"
MSG_NO_EMPLOYEE = "El campamento no tiene un empleado asignado"


def check_assignable_employee(
    users: UserRepository, employee_id: UUID
) -> UseCaseError | None:
    """Solo usuarios con rol employee y status active."""
    user = users.get_user(employee_id)
    if user is None or user.role != UserRole.EMPLOYEE or user.status != UserStatus.ACTIVE:
        return UseCaseError(ErrorCode.NOT_FOUND, MSG_EMPLOYEE_NOT_ELIGIBLE)
    return None


def _constraint_result(exc: ConstraintViolationError) -> Result[Camp]:
    return from_constraint(
        exc,
        conflict_message=MSG_NAME_TAKEN,
        missing_message=MSG_EMPLOYEE_NOT_ELIGIBLE,
    )


@dataclass(frozen=True)
class CreateCampInput:
    name: str
    employee_id: UUID | None = None
    description: str | None = None
    status: OperationalStatus = OperationalStatus.ACTIVE


class CreateCampUseCase:
    def __init__(self, camps: CampRepository, users: UserRepository) -> None:
        self._camps = camps
        self._users = users

    def execute(self, input_data: CreateCampInput) -> Result[Camp]:
        name = (input_data.name or "").strip()
        if not name:
            return failure(ErrorCode.VALIDATION_ERROR, MSG_NAME_REQUIRED)

        if self._camps.get_camp_by_name(name) is not None:
            return failure(ErrorCode.CONFLICT, MSG_NAME_TAKEN)

        if input_data.employee_id is not None:
            employee_error = check_assignable_employee(self._users, input_data.employee_id)
            if employee_error is not None:
                return Result(error=employee_error)

        camp = Camp(
            id=uuid4(),
            name=name,
            employee_id=input_data.employee_id,
            description=input_data.description,
            status=input_data.status,
        )
        try:
            return success(self._camps.create_camp(camp))
        except ConstraintViolationError as exc:
            return _constraint_result(exc)


@dataclass(frozen=True)
class UpdateCampInput:
    camp_id: UUID
    name: str | None = None
    employee_id: UUID | None = None
    description: str | None = None
    status: OperationalStatus | None = None


class UpdateCampUseCase:
    def __init__(self, camps: CampRepository, users: UserRepository) -> None:
        self._camps = camps
        self._users = users

    def execute(self, input_data: UpdateCampInput) -> Result[Camp]:
        camp = self._camps.get_camp(input_data.camp_id)
        if camp is None:
            return failure(ErrorCode.NOT_FOUND, MSG_CAMP_NOT_FOUND)

        changes: dict[str, object] = {}
        if input_data.name is not None:
            name = input_data.name.strip()
            if not name:
                return failure(ErrorCode.VALIDATION_ERROR, MSG_NAME_REQUIRED)
            if name != camp.name and self._camps.get_camp_by_name(name) is not None:
                return failure(ErrorCode.CONFLICT, MSG_NAME_TAKEN)
            changes["name"] = name
        if (
            input_data.employee_id is not None
            and input_data.employee_id != camp.employee_id
        ):
            employee_error = check_assignable_employee(self._users, input_data.employee_id)
            if employee_error is not None:
                return Result(error=employee_error)
            changes["employee_id"] = input_data.employee_id
        if input_data.description is not None:
            changes["description"] = input_data.description
        if input_data.status is not None:
            changes["status"] = input_data.status

        try:
            updated = self._camps.update_camp(replace(camp, **changes))
        except ConstraintViolationError as exc:
            return _constraint_result(exc)
        if updated is None:
            return failure(ErrorCode.NOT_FOUND, MSG_CAMP_NOT_FOUND)
        return success(updated)


class DeleteCampUseCase:
    def __init__(self, camps: CampRepository) -> None:
        self._camps = camps

    def execute(self, camp_id: UUID) -> Result[bool]:
        if not self._camps.delete_camp(camp_id):
            return failure(ErrorCode.NOT_FOUND, MSG_CAMP_NOT_FOUND)
        return success(True)


class AssignCampEmployeeUseCase:
    def __init__(self, camps: CampRepository, users: UserRepository) -> None:
        self._camps = camps
        self._users = users

    def execute(self, camp_id: UUID, employee_id: UUID) -> Result[Camp]:
        camp = self._camps.get_camp(camp_id)
        if camp is None:
            return failure(ErrorCode.NOT_FOUND, MSG_CAMP_NOT_FOUND)

        employee_error = check_assignable_employee(self._users, employee_id)
        if employee_error is not None:
            return Result(error=employee_error)

        try:
            updated = self._camps.update_camp(replace(camp, employee_id=employee_id))
        except ConstraintViolationError as exc:
            return _constraint_result(exc)
        if updated is None:
            return failure(ErrorCode.NOT_FOUND, MSG_CAMP_NOT_FOUND)
        return success(updated)


class RemoveCampEmployeeUseCase:
    def __init__(self, camps: CampRepository) -> None:
        self._camps = camps

    def execute(self, camp_id: UUID) -> Result[Camp]:
        camp = self._camps.get_camp(camp_id)
        if camp is None:
            return failure(ErrorCode.NOT_FOUND, MSG_CAMP_NOT_FOUND)
        if camp.employee_id is None:
            return failure(ErrorCode.VALIDATION_ERROR, MSG_NO_EMPLOYEE)

        updated = self._camps.update_camp(replace(camp, employee_id=None, employee=None))
        if updated is None:
            return failure(ErrorCode.NOT_FOUND, MSG_CAMP_NOT_FOUND)
        return success(updated)
