"""
===============================================================================
USE CASES: User Queries
===============================================================================

Business Goal:
    Lecturas de usuarios: por id (perfil incluido), listado paginado con
    filtros (role, búsqueda por name/email).

Notas:
    - Los usuarios borrados no aparecen: get => NOT_FOUND, listados los
      excluyen (status active/inactive).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.pagination import Page, PageRequest
from ....domain.repositories import UserFilter, UserRepository
from ....identity.users import User
from ..results import ErrorCode, Result, failure, success
from .manage_users import MSG_USER_NOT_FOUND

MSG_SEARCH_REQUIRED = "Parámetro de búsqueda requerido"


class GetUserUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: UUID) -> Result[User]:
        user = self._users.get_user(user_id)
        if user is None or user.is_deleted:
            return failure(ErrorCode.NOT_FOUND, MSG_USER_NOT_FOUND)
        return success(user)


class ListUsersUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, filters: UserFilter, page: PageRequest) -> Result[Page[User]]:
        if filters.search is not None and not filters.search.strip():
            return failure(ErrorCode.VALIDATION_ERROR, MSG_SEARCH_REQUIRED)
        return success(self._users.list_users(filters, page))
