"""
===============================================================================
USE CASES: Camp Queries
===============================================================================

Business Goal:
    Lecturas de camps: por id, listados filtrados (empleado, status,
    búsqueda por name/description o nombre del empleado) y estadísticas.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.pagination import Page, PageRequest
from ....domain.entities import Camp, CampStatistics
from ....domain.repositories import CampFilter, CampRepository
from ..results import ErrorCode, Result, failure, success
from .manage_camps import MSG_CAMP_NOT_FOUND

MSG_SEARCH_REQUIRED = "Parámetro de búsqueda requerido"


class GetCampUseCase:
    def __init__(self, camps: CampRepository) -> None:
        self._camps = camps

    def execute(self, camp_id: UUID) -> Result[Camp]:
        camp = self._camps.get_camp(camp_id)
        if camp is None:
            return failure(ErrorCode.NOT_FOUND, MSG_CAMP_NOT_FOUND)
        return success(camp)


class ListCampsUseCase:
    def __init__(self, camps: CampRepository) -> None:
        self._camps = camps

    def execute(self, filters: CampFilter, page: PageRequest) -> Result[Page[Camp]]:
        if filters.search is not None and not filters.search.strip():
            return failure(ErrorCode.VALIDATION_ERROR, MSG_SEARCH_REQUIRED)
        return success(self._camps.list_camps(filters, page))


class GetCampStatisticsUseCase:
    def __init__(self, camps: CampRepository) -> None:
        self._camps = camps

    def execute(self) -> Result[CampStatistics]:
        return success(self._camps.statistics())
