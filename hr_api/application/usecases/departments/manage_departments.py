"""
===============================================================================
USE CASES: Department Management (create / update / delete)
===============================================================================

Business Goal:
    Alta, modificación y baja lógica de departamentos.

Why (Context / Intención):
    - El nombre es único en TODAS las filas (incluidas las borradas): un
      departamento borrado conserva su nombre.
    - status (active/inactive) es operativo; el borrado es un tombstone
      (deleted_at) independiente.
    - No se puede borrar un departamento con cargos vivos. El chequeo previo
      da el error temprano; el tombstone condicional del repositorio cierra
      la carrera con un alta de cargo concurrente.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    CreateDepartmentUseCase, UpdateDepartmentUseCase, DeleteDepartmentUseCase

Collaborators:
    - DepartmentRepository

Error Mapping:
    - VALIDATION_ERROR: nombre vacío.
    - NOT_FOUND: departamento inexistente / borrado.
    - CONFLICT: nombre duplicado; borrado con cargos asociados.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from uuid import UUID, uuid4

from ....crosscutting.exceptions import ConstraintViolationError
from ....domain.entities import Department, OperationalStatus
from ....domain.repositories import DepartmentRepository
from ..results import ErrorCode, Result, failure, from_constraint, success

MSG_DEPARTMENT_NOT_FOUND = "Departamento no encontrado"
MSG_NAME_TAKEN = "El nombre del departamento ya existe"
MSG_NAME_REQUIRED = "El nombre del departamento es requerido"
MSG_HAS_POSITIONS = (
    "No se puede eliminar el departamento porque tiene cargos asignados"
)


@dataclass(frozen=True)
class CreateDepartmentInput:
    name: str
    description: str | None = None
    status: OperationalStatus = OperationalStatus.ACTIVE


class CreateDepartmentUseCase:
    def __init__(self, departments: DepartmentRepository) -> None:
        self._departments = departments

    def execute(self, input_data: CreateDepartmentInput) -> Result[Department]:
        name = (input_data.name or "").strip()
        if not name:
            return failure(ErrorCode.VALIDATION_ERROR, MSG_NAME_REQUIRED)

        if self._departments.get_department_by_name(name) is not None:
            return failure(ErrorCode.CONFLICT, MSG_NAME_TAKEN)

        department = Department(
            id=uuid4(),
            name=name,
            description=input_data.description,
            status=input_data.status,
        )
        try:
            return success(self._departments.create_department(department))
        except ConstraintViolationError as exc:
            return from_constraint(
                exc,
                conflict_message=MSG_NAME_TAKEN,
                missing_message=MSG_DEPARTMENT_NOT_FOUND,
            )


@dataclass(frozen=True)
class UpdateDepartmentInput:
    department_id: UUID
    name: str | None = None
    description: str | None = None
    status: OperationalStatus | None = None


class UpdateDepartmentUseCase:
    def __init__(self, departments: DepartmentRepository) -> None:
        self._departments = departments

    def execute(self, input_data: UpdateDepartmentInput) -> Result[Department]:
        department = self._departments.get_department(input_data.department_id)
        if department is None:
            return failure(ErrorCode.NOT_FOUND, MSG_DEPARTMENT_NOT_FOUND)

        changes: dict[str, object] = {}
        if input_data.name is not None:
            name = input_data.name.strip()
            if not name:
                return failure(ErrorCode.VALIDATION_ERROR, MSG_NAME_REQUIRED)
            if name != department.name:
                # R: withDeleted: un nombre de un departamento borrado tampoco se reutiliza.
                if self._departments.get_department_by_name(name) is not None:
                    return failure(ErrorCode.CONFLICT, MSG_NAME_TAKEN)
            changes["name"] = name
        if input_data.description is not None:
            changes["description"] = input_data.description
        if input_data.status is not None:
            changes["status"] = input_data.status

        try:
            updated = self._departments.update_department(replace(department, **changes))
        except ConstraintViolationError as exc:
            return from_constraint(
                exc,
                conflict_message=MSG_NAME_TAKEN,
                missing_message=MSG_DEPARTMENT_NOT_FOUND,
            )
        if updated is None:
            return failure(ErrorCode.NOT_FOUND, MSG_DEPARTMENT_NOT_FOUND)
        return success(updated)


class DeleteDepartmentUseCase:
    def __init__(self, departments: DepartmentRepository) -> None:
        self._departments = departments

    def execute(self, department_id: UUID) -> Result[Department]:
        department = self._departments.get_department(department_id)
        if department is None:
            return failure(ErrorCode.NOT_FOUND, MSG_DEPARTMENT_NOT_FOUND)

        if self._departments.count_live_positions(department_id) > 0:
            return failure(ErrorCode.CONFLICT, MSG_HAS_POSITIONS)

        # R: El store re-verifica cargos vivos bajo lock al escribir.
        deleted = self._departments.soft_delete_department(department_id)
        if deleted is not None:
            return success(deleted)
        if self._departments.get_department(department_id) is None:
            return failure(ErrorCode.NOT_FOUND, MSG_DEPARTMENT_NOT_FOUND)
        return failure(ErrorCode.CONFLICT, MSG_HAS_POSITIONS)
