"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/camps.py
===============================================================================

Class/Module:
    Camps Router

Responsibilities:
    - CRUD de camps (escrituras solo admin, borrado físico).
    - Asignar / quitar el empleado responsable.
    - Listados por empleado y status, búsqueda y estadísticas.

Collaborators:
    - hr_api.application.usecases (camps)
    - hr_api.identity.dependencies
    - hr_api.container
    - schemas.organization
===============================================================================
"""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from .....application.usecases import (
    AssignCampEmployeeUseCase,
    CreateCampInput,
    CreateCampUseCase,
    DeleteCampUseCase,
    GetCampStatisticsUseCase,
    GetCampUseCase,
    ListCampsUseCase,
    RemoveCampEmployeeUseCase,
    UpdateCampInput,
    UpdateCampUseCase,
)
from .....container import (
    get_assign_camp_employee_use_case,
    get_camp_statistics_use_case,
    get_create_camp_use_case,
    get_delete_camp_use_case,
    get_get_camp_use_case,
    get_list_camps_use_case,
    get_remove_camp_employee_use_case,
    get_update_camp_use_case,
)
from .....crosscutting.envelope import Envelope, paginated, success
from .....crosscutting.pagination import PageRequest
from .....domain.entities import OperationalStatus
from .....domain.repositories import CampFilter
from .....identity.auth_users import Identity
from .....identity.dependencies import require_admin, require_user
from ..dependencies import get_page_request, get_search_term
from ..error_mapping import unwrap
from ..schemas.organization import (
    AssignEmployeeReq,
    CampRes,
    CampStatsRes,
    CreateCampReq,
    UpdateCampReq,
)

router = APIRouter()

_TAGS = ["camps"]
_MSG_LIST = "Campamentos obtenidos exitosamente"


def _list(use_case: ListCampsUseCase, filters: CampFilter, page: PageRequest):
    return unwrap(use_case.execute(filters, page)).map(CampRes.from_entity)


@router.get("/camps", response_model=Envelope[List[CampRes]], tags=_TAGS)
def list_camps(
    page: PageRequest = Depends(get_page_request),
    use_case: ListCampsUseCase = Depends(get_list_camps_use_case),
    _identity: Identity = Depends(require_user()),
):
    return paginated(_MSG_LIST, _list(use_case, CampFilter(), page))


@router.get("/camps/search", response_model=Envelope[List[CampRes]], tags=_TAGS)
def search_camps(
    q: str = Depends(get_search_term),
    page: PageRequest = Depends(get_page_request),
    use_case: ListCampsUseCase = Depends(get_list_camps_use_case),
    _identity: Identity = Depends(require_user()),
):
    return paginated(
        "Búsqueda de campamentos realizada exitosamente",
        _list(use_case, CampFilter(search=q), page),
    )


@router.get(
    "/camps/statistics/general", response_model=Envelope[CampStatsRes], tags=_TAGS
)
def camp_statistics(
    use_case: GetCampStatisticsUseCase = Depends(get_camp_statistics_use_case),
    _identity: Identity = Depends(require_user()),
):
    stats = unwrap(use_case.execute())
    return success(
        "Estadísticas de campamentos obtenidas exitosamente",
        CampStatsRes.from_stats(stats),
    )


@router.get(
    "/camps/employee/{employee_id}",
    response_model=Envelope[List[CampRes]],
    tags=_TAGS,
)
def list_camps_by_employee(
    employee_id: UUID,
    page: PageRequest = Depends(get_page_request),
    use_case: ListCampsUseCase = Depends(get_list_camps_use_case),
    _identity: Identity = Depends(require_user()),
):
    return paginated(
        _MSG_LIST, _list(use_case, CampFilter(employee_id=employee_id), page)
    )


@router.get(
    "/camps/status/{status}", response_model=Envelope[List[CampRes]], tags=_TAGS
)
def list_camps_by_status(
    status: OperationalStatus,
    page: PageRequest = Depends(get_page_request),
    use_case: ListCampsUseCase = Depends(get_list_camps_use_case),
    _identity: Identity = Depends(require_user()),
):
    return paginated(_MSG_LIST, _list(use_case, CampFilter(status=status), page))


@router.post(
    "/camps", response_model=Envelope[CampRes], status_code=201, tags=_TAGS
)
def create_camp(
    req: CreateCampReq,
    use_case: CreateCampUseCase = Depends(get_create_camp_use_case),
    _admin: Identity = Depends(require_admin()),
):
    camp = unwrap(
        use_case.execute(
            CreateCampInput(
                name=req.name,
                employee_id=req.employee_id,
                description=req.description,
                status=req.status,
            )
        )
    )
    return success("Campamento creado exitosamente", CampRes.from_entity(camp))


@router.get("/camps/{camp_id}", response_model=Envelope[CampRes], tags=_TAGS)
def get_camp(
    camp_id: UUID,
    use_case: GetCampUseCase = Depends(get_get_camp_use_case),
    _identity: Identity = Depends(require_user()),
):
    camp = unwrap(use_case.execute(camp_id))
    return success("Campamento obtenido exitosamente", CampRes.from_entity(camp))


@router.put("/camps/{camp_id}", response_model=Envelope[CampRes], tags=_TAGS)
def update_camp(
    camp_id: UUID,
    req: UpdateCampReq,
    use_case: UpdateCampUseCase = Depends(get_update_camp_use_case),
    _admin: Identity = Depends(require_admin()),
):
    camp = unwrap(
        use_case.execute(
            UpdateCampInput(
                camp_id=camp_id,
                name=req.name,
                employee_id=req.employee_id,
                description=req.description,
                status=req.status,
            )
        )
    )
    return success("Campamento actualizado exitosamente", CampRes.from_entity(camp))


@router.delete("/camps/{camp_id}", response_model=Envelope, tags=_TAGS)
def delete_camp(
    camp_id: UUID,
    use_case: DeleteCampUseCase = Depends(get_delete_camp_use_case),
    _admin: Identity = Depends(require_admin()),
):
    unwrap(use_case.execute(camp_id))
    return success("Campamento eliminado exitosamente")


@router.post(
    "/camps/{camp_id}/assign-employee",
    response_model=Envelope[CampRes],
    tags=_TAGS,
)
def assign_camp_employee(
    camp_id: UUID,
    req: AssignEmployeeReq,
    use_case: AssignCampEmployeeUseCase = Depends(get_assign_camp_employee_use_case),
    _admin: Identity = Depends(require_admin()),
):
    camp = unwrap(use_case.execute(camp_id, req.employee_id))
    return success("Empleado asignado exitosamente", CampRes.from_entity(camp))


@router.delete(
    "/camps/{camp_id}/remove-employee",
    response_model=Envelope[CampRes],
    tags=_TAGS,
)
def remove_camp_employee(
    camp_id: UUID,
    use_case: RemoveCampEmployeeUseCase = Depends(get_remove_camp_employee_use_case),
    _admin: Identity = Depends(require_admin()),
):
    camp = unwrap(use_case.execute(camp_id))
    return success("Empleado removido exitosamente", CampRes.from_entity(camp))
