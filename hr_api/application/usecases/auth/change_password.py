"""
===============================================================================
USE CASE: Change Password
===============================================================================

Business Goal:
    Permitir que el usuario autenticado cambie su password, confirmando el
    actual.

Error Mapping:
    - NOT_FOUND: el usuario ya no existe (o fue borrado).
    - UNAUTHORIZED: password actual incorrecto.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ....domain.repositories import UserRepository
from ....identity.auth_users import hash_password, verify_password
from ....identity.users import User
from ..results import ErrorCode, Result, failure, success

MSG_USER_NOT_FOUND = "Usuario no encontrado"
MSG_WRONG_PASSWORD = "La contraseña actual es incorrecta"


@dataclass(frozen=True)
class ChangePasswordInput:
    user_id: UUID
    current_password: str
    new_password: str


class ChangePasswordUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, input_data: ChangePasswordInput) -> Result[User]:
        user = self._users.get_user(input_data.user_id)
        if user is None or user.is_deleted:
            return failure(ErrorCode.NOT_FOUND, MSG_USER_NOT_FOUND)

        if not verify_password(input_data.current_password, user.password_hash):
            return failure(ErrorCode.UNAUTHORIZED, MSG_WRONG_PASSWORD)

        updated = self._users.update_user(
            user.with_changes(password_hash=hash_password(input_data.new_password))
        )
        if updated is None:
            return failure(ErrorCode.NOT_FOUND, MSG_USER_NOT_FOUND)
        return success(updated)
