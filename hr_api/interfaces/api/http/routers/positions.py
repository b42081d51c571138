"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/positions.py
===============================================================================

Class/Module:
    Positions Router

Responsibilities:
    - CRUD de cargos (escrituras solo admin).
    - Listados por departamento, empleados del cargo, búsqueda (nombre,
      descripción o nombre del departamento) y estadísticas.

Collaborators:
    - hr_api.application.usecases (positions)
    - hr_api.identity.dependencies
    - hr_api.container
    - schemas.organization / schemas.users
===============================================================================
"""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from .....application.usecases import (
    CreatePositionInput,
    CreatePositionUseCase,
    DeletePositionUseCase,
    GetPositionStatisticsUseCase,
    GetPositionUseCase,
    ListPositionEmployeesUseCase,
    ListPositionsUseCase,
    UpdatePositionInput,
    UpdatePositionUseCase,
)
from .....container import (
    get_create_position_use_case,
    get_delete_position_use_case,
    get_get_position_use_case,
    get_list_position_employees_use_case,
    get_list_positions_use_case,
    get_position_statistics_use_case,
    get_update_position_use_case,
)
from .....crosscutting.envelope import Envelope, paginated, success
from .....crosscutting.pagination import PageRequest
from .....identity.auth_users import Identity
from .....identity.dependencies import require_admin, require_user
from .....identity.users import User, to_public_user
from ..dependencies import check_include_deleted, get_page_request, get_search_term
from ..error_mapping import unwrap
from ..schemas.organization import (
    CreatePositionReq,
    PositionRes,
    PositionStatsRes,
    UpdatePositionReq,
)
from ..schemas.users import UserRes

router = APIRouter()

_TAGS = ["positions"]
_MSG_LIST = "Cargos obtenidos exitosamente"


def _to_user_res(user: User) -> UserRes:
    return UserRes.from_public(to_public_user(user))


@router.get("/positions", response_model=Envelope[List[PositionRes]], tags=_TAGS)
def list_positions(
    include_deleted: bool = Query(False),
    page: PageRequest = Depends(get_page_request),
    use_case: ListPositionsUseCase = Depends(get_list_positions_use_case),
    identity: Identity = Depends(require_user()),
):
    result = use_case.execute(
        page, include_deleted=check_include_deleted(identity, include_deleted)
    )
    return paginated(_MSG_LIST, unwrap(result).map(PositionRes.from_entity))


@router.get(
    "/positions/search", response_model=Envelope[List[PositionRes]], tags=_TAGS
)
def search_positions(
    q: str = Depends(get_search_term),
    page: PageRequest = Depends(get_page_request),
    use_case: ListPositionsUseCase = Depends(get_list_positions_use_case),
    _identity: Identity = Depends(require_user()),
):
    return paginated(
        "Búsqueda de cargos realizada exitosamente",
        unwrap(use_case.execute(page, search=q)).map(PositionRes.from_entity),
    )


@router.get(
    "/positions/statistics/general",
    response_model=Envelope[PositionStatsRes],
    tags=_TAGS,
)
def position_statistics(
    use_case: GetPositionStatisticsUseCase = Depends(get_position_statistics_use_case),
    _identity: Identity = Depends(require_user()),
):
    stats = unwrap(use_case.execute())
    return success(
        "Estadísticas de cargos obtenidas exitosamente",
        PositionStatsRes.from_stats(stats),
    )


@router.get(
    "/positions/department/{department_id}",
    response_model=Envelope[List[PositionRes]],
    tags=_TAGS,
)
def list_positions_by_department(
    department_id: UUID,
    page: PageRequest = Depends(get_page_request),
    use_case: ListPositionsUseCase = Depends(get_list_positions_use_case),
    _identity: Identity = Depends(require_user()),
):
    result = use_case.execute(page, department_id=department_id)
    return paginated(_MSG_LIST, unwrap(result).map(PositionRes.from_entity))


@router.post(
    "/positions",
    response_model=Envelope[PositionRes],
    status_code=201,
    tags=_TAGS,
)
def create_position(
    req: CreatePositionReq,
    use_case: CreatePositionUseCase = Depends(get_create_position_use_case),
    _admin: Identity = Depends(require_admin()),
):
    position = unwrap(
        use_case.execute(
            CreatePositionInput(
                name=req.name,
                department_id=req.department_id,
                description=req.description,
                base_salary=req.base_salary,
                status=req.status,
            )
        )
    )
    return success("Cargo creado exitosamente", PositionRes.from_entity(position))


@router.get(
    "/positions/{position_id}", response_model=Envelope[PositionRes], tags=_TAGS
)
def get_position(
    position_id: UUID,
    include_deleted: bool = Query(False),
    use_case: GetPositionUseCase = Depends(get_get_position_use_case),
    identity: Identity = Depends(require_user()),
):
    position = unwrap(
        use_case.execute(
            position_id,
            include_deleted=check_include_deleted(identity, include_deleted),
        )
    )
    return success("Cargo obtenido exitosamente", PositionRes.from_entity(position))


@router.get(
    "/positions/{position_id}/employees",
    response_model=Envelope[List[UserRes]],
    tags=_TAGS,
)
def list_position_employees(
    position_id: UUID,
    page: PageRequest = Depends(get_page_request),
    use_case: ListPositionEmployeesUseCase = Depends(
        get_list_position_employees_use_case
    ),
    _identity: Identity = Depends(require_user()),
):
    return paginated(
        "Empleados del cargo obtenidos exitosamente",
        unwrap(use_case.execute(position_id, page)).map(_to_user_res),
    )


@router.put(
    "/positions/{position_id}", response_model=Envelope[PositionRes], tags=_TAGS
)
def update_position(
    position_id: UUID,
    req: UpdatePositionReq,
    use_case: UpdatePositionUseCase = Depends(get_update_position_use_case),
    _admin: Identity = Depends(require_admin()),
):
    position = unwrap(
        use_case.execute(
            UpdatePositionInput(
                position_id=position_id,
                name=req.name,
                department_id=req.department_id,
                description=req.description,
                base_salary=req.base_salary,
                status=req.status,
            )
        )
    )
    return success(
        "Cargo actualizado exitosamente", PositionRes.from_entity(position)
    )


@router.delete("/positions/{position_id}", response_model=Envelope, tags=_TAGS)
def delete_position(
    position_id: UUID,
    use_case: DeletePositionUseCase = Depends(get_delete_position_use_case),
    _admin: Identity = Depends(require_admin()),
):
    unwrap(use_case.execute(position_id))
    return success("Cargo eliminado exitosamente")
