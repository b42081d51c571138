"""
===============================================================================
USE CASES: Department Queries
===============================================================================

Business Goal:
    Lecturas de departamentos: por id, listado / búsqueda (name ASC), cargos
    de un departamento y estadísticas.

Notas:
    - include_deleted habilita el modo "withDeleted" (el router lo permite
      solo a admins).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.pagination import Page, PageRequest
from ....domain.entities import Department, DepartmentStatistics, Position
from ....domain.repositories import DepartmentRepository, PositionRepository
from ..results import ErrorCode, Result, failure, success
from .manage_departments import MSG_DEPARTMENT_NOT_FOUND

MSG_SEARCH_REQUIRED = "Parámetro de búsqueda requerido"


class GetDepartmentUseCase:
    def __init__(self, departments: DepartmentRepository) -> None:
        self._departments = departments

    def execute(
        self, department_id: UUID, *, include_deleted: bool = False
    ) -> Result[Department]:
        department = self._departments.get_department(
            department_id, include_deleted=include_deleted
        )
        if department is None:
            return failure(ErrorCode.NOT_FOUND, MSG_DEPARTMENT_NOT_FOUND)
        return success(department)


class ListDepartmentsUseCase:
    def __init__(self, departments: DepartmentRepository) -> None:
        self._departments = departments

    def execute(
        self,
        page: PageRequest,
        *,
        search: str | None = None,
        include_deleted: bool = False,
    ) -> Result[Page[Department]]:
        if search is not None and not search.strip():
            return failure(ErrorCode.VALIDATION_ERROR, MSG_SEARCH_REQUIRED)
        return success(
            self._departments.list_departments(
                page, search=search, include_deleted=include_deleted
            )
        )


class ListDepartmentPositionsUseCase:
    def __init__(
        self, departments: DepartmentRepository, positions: PositionRepository
    ) -> None:
        self._departments = departments
        self._positions = positions

    def execute(self, department_id: UUID, page: PageRequest) -> Result[Page[Position]]:
        if self._departments.get_department(department_id) is None:
            return failure(ErrorCode.NOT_FOUND, MSG_DEPARTMENT_NOT_FOUND)
        return success(self._positions.list_positions(page, department_id=department_id))


class GetDepartmentStatisticsUseCase:
    def __init__(self, departments: DepartmentRepository) -> None:
        self._departments = departments

    def execute(self) -> Result[DepartmentStatistics]:
        return success(self._departments.statistics())
