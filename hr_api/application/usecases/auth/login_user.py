"""
===============================================================================
USE CASE: Login User
===============================================================================

Business Goal:
    Autenticar credenciales y emitir un token de sesión.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    LoginUserUseCase

Responsibilities:
    - Buscar el usuario por email normalizado.
    - Rechazar usuarios no activos y passwords incorrectos con el MISMO
      error (no filtrar qué parte falló).
    - Pagar el mismo costo de Argon2 en todas las ramas de rechazo.
    - Emitir el token (TokenService).

Collaborators:
    - UserRepository
    - identity.tokens.TokenService
    - identity.auth_users.verify_password

Error Mapping:
    - UNAUTHORIZED: email desconocido, status != active, password incorrecto.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.auth_users import hash_password, verify_password
from ....identity.tokens import IssuedToken, TokenService
from ....identity.users import User, normalize_email
from ..results import ErrorCode, Result, failure, success

MSG_INVALID_CREDENTIALS = "Credenciales inválidas"

# R: Las ramas de rechazo sin usuario activo también pagan un verify Argon2
# (tiempo uniforme entre email desconocido y password incorrecto).
_DUMMY_PASSWORD_HASH = hash_password("hr-api-login-dummy")


@dataclass(frozen=True)
class LoginOutput:
    user: User
    token: IssuedToken


class LoginUserUseCase:
    def __init__(self, users: UserRepository, token_service: TokenService) -> None:
        self._users = users
        self._tokens = token_service

    def execute(self, email: str, password: str) -> Result[LoginOutput]:
        user = self._users.get_user_by_email(normalize_email(email))
        if user is None or not user.is_active:
            verify_password(password, _DUMMY_PASSWORD_HASH)
            logger.info("Login rechazado: usuario inexistente o no activo")
            return failure(ErrorCode.UNAUTHORIZED, MSG_INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash):
            logger.info("Login rechazado: password inválido", extra={"user_id": str(user.id)})
            return failure(ErrorCode.UNAUTHORIZED, MSG_INVALID_CREDENTIALS)

        issued = self._tokens.issue(user.id, user.email, user.role)
        return success(LoginOutput(user=user, token=issued))
