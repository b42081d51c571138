"""
===============================================================================
USE CASE: Verify Session Token
===============================================================================

Business Goal:
    Endpoint público que permite al frontend validar un token (body o cookie)
    y recuperar el usuario actual.

Error Mapping:
    - UNAUTHORIZED: token ausente, inválido o expirado; usuario inexistente
      o no activo.
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import UserRepository
from ....identity.tokens import TokenError, TokenService
from ....identity.users import User
from ..results import ErrorCode, Result, failure, success

MSG_TOKEN_MISSING = "Token no proporcionado"
MSG_TOKEN_INVALID = "Token inválido o expirado"
MSG_USER_INVALID = "Usuario no encontrado o inactivo"


class VerifySessionUseCase:
    def __init__(self, users: UserRepository, token_service: TokenService) -> None:
        self._users = users
        self._tokens = token_service

    def execute(self, token: str | None) -> Result[User]:
        token = (token or "").strip()
        if not token:
            return failure(ErrorCode.UNAUTHORIZED, MSG_TOKEN_MISSING)

        try:
            claims = self._tokens.verify(token)
        except TokenError:
            return failure(ErrorCode.UNAUTHORIZED, MSG_TOKEN_INVALID)

        user = self._users.get_user(claims.user_id)
        if user is None or not user.is_active:
            return failure(ErrorCode.UNAUTHORIZED, MSG_USER_INVALID)
        return success(user)
