"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Autenticación de Usuarios (passwords + Auth Guard + cookie de sesión)

Responsabilidades:
    - Hashear/verificar passwords (Argon2, salteado y costoso).
    - Extraer token desde cookie `token` (prioridad) o Authorization: Bearer.
    - Verificar el token vía TokenService y resolver la identidad del caller.
    - Chequear roles (ensure_role) una vez resuelta la identidad.
    - Setear / limpiar la cookie de sesión.

Colaboradores:
    - identity.tokens: TokenService / AuthConfig / TokenError.
    - crosscutting.error_responses: unauthorized (401) / forbidden (403).
    - identity.dependencies: expone el guard como dependencias FastAPI.

Decisiones de diseño:
    - Sin token => 401. Token presente pero inválido o expirado => 403.
      Son señales distintas a propósito.
    - El guard no consulta la DB: la identidad sale de los claims firmados.
    - No loguear secretos ni tokens.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
from uuid import UUID

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Request, Response

from ..context import set_user_context
from ..crosscutting.error_responses import forbidden, unauthorized
from ..crosscutting.logger import logger
from .tokens import AuthConfig, ExpiredTokenError, TokenError, TokenService
from .users import UserRole

_password_hasher = PasswordHasher()

MSG_NO_TOKEN = "No hay token, autorización denegada"
MSG_INVALID_TOKEN = "Token inválido"
MSG_FORBIDDEN_ROLE = "No tenés permisos para realizar esta acción"


# ---------------------------------------------------------------------------
# Passwords (Argon2)
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


# ---------------------------------------------------------------------------
# Identidad resuelta
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Identity:
    """Caller autenticado (derivado de los claims del token)."""

    id: UUID
    email: str
    role: UserRole

    def has_role(self, *roles: UserRole) -> bool:
        return self.role in roles


def ensure_role(identity: Identity | None, allowed: Iterable[UserRole]) -> Identity:
    """
    Role gate: corre DESPUÉS del guard.

    - Sin identidad resuelta => 401.
    - Rol fuera del set permitido => 403.
    """
    if identity is None:
        raise unauthorized(MSG_NO_TOKEN)
    allowed_roles = {UserRole(role) for role in allowed}
    if identity.role not in allowed_roles:
        logger.warning(
            "Auth: rol insuficiente",
            extra={
                "role": identity.role.value,
                "allowed": sorted(r.value for r in allowed_roles),
            },
        )
        raise forbidden(MSG_FORBIDDEN_ROLE)
    return identity


# ---------------------------------------------------------------------------
# Auth Guard
# ---------------------------------------------------------------------------


def _extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


class AuthGuard:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AuthGuard

    Responsabilidades:
      - Localizar el token (cookie > bearer)
      - Verificarlo y adjuntar Identity a request.state
      - Traducir fallas a 401 / 403

    Colaboradores:
      - TokenService
      - AuthConfig (nombre de cookie)
    ----------------------------------------------------------------------------
    """

    def __init__(self, config: AuthConfig, token_service: TokenService) -> None:
        self._config = config
        self._tokens = token_service

    def extract_token(self, request: Request) -> str | None:
        cookie_token = (request.cookies.get(self._config.cookie_name) or "").strip()
        if cookie_token:
            return cookie_token
        return _extract_bearer_token(request.headers.get("Authorization"))

    def authenticate(self, request: Request) -> Identity:
        token = self.extract_token(request)
        if not token:
            raise unauthorized(MSG_NO_TOKEN)

        try:
            claims = self._tokens.verify(token)
        except TokenError as exc:
            logger.info(
                "Auth: token rechazado",
                extra={"expired": isinstance(exc, ExpiredTokenError)},
            )
            raise forbidden(MSG_INVALID_TOKEN) from exc

        identity = Identity(id=claims.user_id, email=claims.email, role=claims.role)
        request.state.identity = identity
        set_user_context(str(identity.id))
        return identity


def current_identity(request: Request) -> Identity | None:
    """Identidad adjuntada por el guard (None si el guard no corrió)."""
    return getattr(request.state, "identity", None)


# ---------------------------------------------------------------------------
# Cookie de sesión
# ---------------------------------------------------------------------------


def set_session_cookie(response: Response, token: str, config: AuthConfig) -> None:
    response.set_cookie(
        key=config.cookie_name,
        value=token,
        httponly=True,
        secure=config.cookie_secure,
        samesite=config.cookie_samesite,
        max_age=config.cookie_max_age_seconds,
        path="/",
    )


def clear_session_cookie(response: Response, config: AuthConfig) -> None:
    """Pisa la cookie con valor vacío y expiración inmediata."""
    response.set_cookie(
        key=config.cookie_name,
        value="",
        httponly=True,
        secure=config.cookie_secure,
        samesite=config.cookie_samesite,
        max_age=0,
        expires=0,
        path="/",
    )
