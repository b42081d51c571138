"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/departments.py
===============================================================================

Class/Module:
    Departments Router

Responsibilities:
    - CRUD de departamentos (escrituras solo admin).
    - Listado de cargos de un departamento, búsqueda y estadísticas.
    - Modo include_deleted (withDeleted) reservado a admin.

Collaborators:
    - hr_api.application.usecases (departments)
    - hr_api.identity.dependencies (require_user, require_admin)
    - hr_api.container (factories DI)
    - schemas.organization (DTOs Pydantic)
===============================================================================
"""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from .....application.usecases import (
    CreateDepartmentInput,
    CreateDepartmentUseCase,
    DeleteDepartmentUseCase,
    GetDepartmentStatisticsUseCase,
    GetDepartmentUseCase,
    ListDepartmentPositionsUseCase,
    ListDepartmentsUseCase,
    UpdateDepartmentInput,
    UpdateDepartmentUseCase,
)
from .....container import (
    get_create_department_use_case,
    get_delete_department_use_case,
    get_department_statistics_use_case,
    get_get_department_use_case,
    get_list_department_positions_use_case,
    get_list_departments_use_case,
    get_update_department_use_case,
)
from .....crosscutting.envelope import Envelope, paginated, success
from .....crosscutting.pagination import PageRequest
from .....identity.auth_users import Identity
from .....identity.dependencies import require_admin, require_user
from ..dependencies import check_include_deleted, get_page_request, get_search_term
from ..error_mapping import unwrap
from ..schemas.organization import (
    CreateDepartmentReq,
    DepartmentRes,
    DepartmentStatsRes,
    PositionRes,
    UpdateDepartmentReq,
)

router = APIRouter()

_TAGS = ["departments"]


@router.get(
    "/departments", response_model=Envelope[List[DepartmentRes]], tags=_TAGS
)
def list_departments(
    include_deleted: bool = Query(False),
    page: PageRequest = Depends(get_page_request),
    use_case: ListDepartmentsUseCase = Depends(get_list_departments_use_case),
    identity: Identity = Depends(require_user()),
):
    result = use_case.execute(
        page, include_deleted=check_include_deleted(identity, include_deleted)
    )
    return paginated(
        "Departamentos obtenidos exitosamente",
        unwrap(result).map(DepartmentRes.from_entity),
    )


@router.get(
    "/departments/search", response_model=Envelope[List[DepartmentRes]], tags=_TAGS
)
def search_departments(
    q: str = Depends(get_search_term),
    page: PageRequest = Depends(get_page_request),
    use_case: ListDepartmentsUseCase = Depends(get_list_departments_use_case),
    _identity: Identity = Depends(require_user()),
):
    return paginated(
        "Búsqueda de departamentos realizada exitosamente",
        unwrap(use_case.execute(page, search=q)).map(DepartmentRes.from_entity),
    )


@router.get(
    "/departments/statistics/general",
    response_model=Envelope[DepartmentStatsRes],
    tags=_TAGS,
)
def department_statistics(
    use_case: GetDepartmentStatisticsUseCase = Depends(
        get_department_statistics_use_case
    ),
    _identity: Identity = Depends(require_user()),
):
    stats = unwrap(use_case.execute())
    return success(
        "Estadísticas de departamentos obtenidas exitosamente",
        DepartmentStatsRes.from_stats(stats),
    )


@router.post(
    "/departments",
    response_model=Envelope[DepartmentRes],
    status_code=201,
    tags=_TAGS,
)
def create_department(
    req: CreateDepartmentReq,
    use_case: CreateDepartmentUseCase = Depends(get_create_department_use_case),
    _admin: Identity = Depends(require_admin()),
):
    department = unwrap(
        use_case.execute(
            CreateDepartmentInput(
                name=req.name, description=req.description, status=req.status
            )
        )
    )
    return success(
        "Departamento creado exitosamente", DepartmentRes.from_entity(department)
    )


@router.get(
    "/departments/{department_id}",
    response_model=Envelope[DepartmentRes],
    tags=_TAGS,
)
def get_department(
    department_id: UUID,
    include_deleted: bool = Query(False),
    use_case: GetDepartmentUseCase = Depends(get_get_department_use_case),
    identity: Identity = Depends(require_user()),
):
    department = unwrap(
        use_case.execute(
            department_id,
            include_deleted=check_include_deleted(identity, include_deleted),
        )
    )
    return success(
        "Departamento obtenido exitosamente", DepartmentRes.from_entity(department)
    )


@router.get(
    "/departments/{department_id}/positions",
    response_model=Envelope[List[PositionRes]],
    tags=_TAGS,
)
def list_department_positions(
    department_id: UUID,
    page: PageRequest = Depends(get_page_request),
    use_case: ListDepartmentPositionsUseCase = Depends(
        get_list_department_positions_use_case
    ),
    _identity: Identity = Depends(require_user()),
):
    return paginated(
        "Cargos del departamento obtenidos exitosamente",
        unwrap(use_case.execute(department_id, page)).map(PositionRes.from_entity),
    )


@router.put(
    "/departments/{department_id}",
    response_model=Envelope[DepartmentRes],
    tags=_TAGS,
)
def update_department(
    department_id: UUID,
    req: UpdateDepartmentReq,
    use_case: UpdateDepartmentUseCase = Depends(get_update_department_use_case),
    _admin: Identity = Depends(require_admin()),
):
    department = unwrap(
        use_case.execute(
            UpdateDepartmentInput(
                department_id=department_id,
                name=req.name,
                description=req.description,
                status=req.status,
            )
        )
    )
    return success(
        "Departamento actualizado exitosamente",
        DepartmentRes.from_entity(department),
    )


@router.delete("/departments/{department_id}", response_model=Envelope, tags=_TAGS)
def delete_department(
    department_id: UUID,
    use_case: DeleteDepartmentUseCase = Depends(get_delete_department_use_case),
    _admin: Identity = Depends(require_admin()),
):
    unwrap(use_case.execute(department_id))
    return success("Departamento eliminado exitosamente")
