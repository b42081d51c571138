"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/users.py
===============================================================================

Class/Module:
    Users Router

Responsibilities:
    - Exponer endpoints HTTP de administración de usuarios y perfil propio.
    - Convertir requests HTTP -> inputs de casos de uso.
    - Proyectar User -> PublicUser -> UserRes (password_hash nunca sale).
    - Enforce de roles en el borde (create/update/delete solo admin).

Collaborators:
    - hr_api.application.usecases (users)
    - hr_api.identity.dependencies (require_user, require_admin)
    - hr_api.container (factories DI)
    - schemas.users (DTOs Pydantic)

Patterns:
    - Controller / Router
    - Adapter (HTTP -> UseCase)
===============================================================================
"""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from .....application.usecases import (
    CreateUserInput,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateProfileInput,
    UpdateProfileUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
)
from .....container import (
    get_create_user_use_case,
    get_delete_user_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
    get_update_profile_use_case,
    get_update_user_use_case,
)
from .....crosscutting.envelope import Envelope, paginated, success
from .....crosscutting.pagination import PageRequest
from .....domain.repositories import UserFilter
from .....identity.auth_users import Identity
from .....identity.dependencies import require_admin, require_user
from .....identity.users import User, UserRole, UserStatus, to_public_user
from ..dependencies import get_page_request, get_search_term
from ..error_mapping import unwrap
from ..schemas.users import CreateUserReq, UpdateProfileReq, UpdateUserReq, UserRes

router = APIRouter()


def _to_user_res(user: User) -> UserRes:
    return UserRes.from_public(to_public_user(user))


def _list(use_case: ListUsersUseCase, filters: UserFilter, page: PageRequest):
    result = unwrap(use_case.execute(filters, page))
    return result.map(_to_user_res)


# =============================================================================
# Listados (rutas estáticas antes de /{user_id})
# =============================================================================


@router.get("/users", response_model=Envelope[List[UserRes]], tags=["users"])
def list_users(
    page: PageRequest = Depends(get_page_request),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
    _identity: Identity = Depends(require_user()),
):
    return paginated(
        "Usuarios obtenidos exitosamente", _list(use_case, UserFilter(), page)
    )


@router.get("/users/search", response_model=Envelope[List[UserRes]], tags=["users"])
def search_users(
    q: str = Depends(get_search_term),
    page: PageRequest = Depends(get_page_request),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
    _identity: Identity = Depends(require_user()),
):
    return paginated(
        "Búsqueda de usuarios realizada exitosamente",
        _list(use_case, UserFilter(search=q), page),
    )


@router.get(
    "/users/role/{role}", response_model=Envelope[List[UserRes]], tags=["users"]
)
def list_users_by_role(
    role: UserRole,
    page: PageRequest = Depends(get_page_request),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
    _identity: Identity = Depends(require_user()),
):
    return paginated(
        "Usuarios obtenidos exitosamente",
        _list(use_case, UserFilter(role=role), page),
    )


# =============================================================================
# CRUD
# =============================================================================


@router.post(
    "/users", response_model=Envelope[UserRes], status_code=201, tags=["users"]
)
def create_user(
    req: CreateUserReq,
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
    _admin: Identity = Depends(require_admin()),
):
    user = unwrap(
        use_case.execute(
            CreateUserInput(
                name=req.name,
                email=req.email,
                password=req.password,
                role=req.role,
                status=UserStatus(req.status),
                position_id=req.position_id,
            )
        )
    )
    return success("Usuario creado exitosamente", _to_user_res(user))


@router.get("/users/{user_id}", response_model=Envelope[UserRes], tags=["users"])
def get_user(
    user_id: UUID,
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
    _identity: Identity = Depends(require_user()),
):
    user = unwrap(use_case.execute(user_id))
    return success("Usuario obtenido exitosamente", _to_user_res(user))


@router.put("/users/{user_id}", response_model=Envelope[UserRes], tags=["users"])
def update_user(
    user_id: UUID,
    req: UpdateUserReq,
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
    _admin: Identity = Depends(require_admin()),
):
    user = unwrap(
        use_case.execute(
            UpdateUserInput(
                user_id=user_id,
                name=req.name,
                email=req.email,
                password=req.password,
                role=req.role,
                status=UserStatus(req.status) if req.status else None,
                position_id=req.position_id,
            )
        )
    )
    return success("Usuario actualizado exitosamente", _to_user_res(user))


@router.delete("/users/{user_id}", response_model=Envelope, tags=["users"])
def delete_user(
    user_id: UUID,
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
    _admin: Identity = Depends(require_admin()),
):
    unwrap(use_case.execute(user_id))
    return success("Usuario eliminado exitosamente")


# =============================================================================
# Perfil propio
# =============================================================================


@router.put("/profile", response_model=Envelope[UserRes], tags=["users"])
def update_profile(
    req: UpdateProfileReq,
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case),
    identity: Identity = Depends(require_user()),
):
    user = unwrap(
        use_case.execute(
            UpdateProfileInput(user_id=identity.id, name=req.name, email=req.email)
        )
    )
    return success("Perfil actualizado exitosamente", _to_user_res(user))
