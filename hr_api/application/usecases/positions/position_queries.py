"""
===============================================================================
USE CASES: Position Queries
===============================================================================

Business Goal:
    Lecturas de cargos: por id, listado / búsqueda / por departamento,
    empleados del cargo y estadísticas.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.pagination import Page, PageRequest
from ....domain.entities import Position, PositionStatistics
from ....domain.repositories import PositionRepository, UserFilter, UserRepository
from ....identity.users import LIVE_USER_STATUSES, User
from ..results import ErrorCode, Result, failure, success
from .manage_positions import MSG_POSITION_NOT_FOUND

MSG_SEARCH_REQUIRED = "Parámetro de búsqueda requerido"


class GetPositionUseCase:
    def __init__(self, positions: PositionRepository) -> None:
        self._positions = positions

    def execute(
        self, position_id: UUID, *, include_deleted: bool = False
    ) -> Result[Position]:
        position = self._positions.get_position(
            position_id, include_deleted=include_deleted
        )
        if position is None:
            return failure(ErrorCode.NOT_FOUND, MSG_POSITION_NOT_FOUND)
        return success(position)


class ListPositionsUseCase:
    def __init__(self, positions: PositionRepository) -> None:
        self._positions = positions

    def execute(
        self,
        page: PageRequest,
        *,
        department_id: UUID | None = None,
        search: str | None = None,
        include_deleted: bool = False,
    ) -> Result[Page[Position]]:
        if search is not None and not search.strip():
            return failure(ErrorCode.VALIDATION_ERROR, MSG_SEARCH_REQUIRED)
        return success(
            self._positions.list_positions(
                page,
                department_id=department_id,
                search=search,
                include_deleted=include_deleted,
            )
        )


class ListPositionEmployeesUseCase:
    """Usuarios active/inactive asignados al cargo."""

    def __init__(self, positions: PositionRepository, users: UserRepository) -> None:
        self._positions = positions
        self._users = users

    def execute(self, position_id: UUID, page: PageRequest) -> Result[Page[User]]:
        if self._positions.get_position(position_id) is None:
            return failure(ErrorCode.NOT_FOUND, MSG_POSITION_NOT_FOUND)
        return success(
            self._users.list_users(
                UserFilter(statuses=LIVE_USER_STATUSES, position_id=position_id),
                page,
            )
        )


class GetPositionStatisticsUseCase:
    def __init__(self, positions: PositionRepository) -> None:
        self._positions = positions

    def execute(self) -> Result[PositionStatistics]:
        return success(self._positions.statistics())
