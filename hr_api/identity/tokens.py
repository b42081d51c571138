"""
===============================================================================
TARJETA CRC — identity/tokens.py
===============================================================================

Módulo:
    Token Service (JWT de sesión, HS256)

Responsabilidades:
    - Emitir tokens firmados con {sub, email, role, iat, exp, typ}.
    - Verificar firma/expiración/claims y devolver TokenClaims.
    - Distinguir token expirado de token inválido (ExpiredTokenError vs
      InvalidTokenError).

Colaboradores:
    - AuthConfig: snapshot inmutable de configuración (lo construye el
      composition root una vez por proceso y lo pasa por constructor).
    - PyJWT.

Decisiones de diseño:
    - Stateless: no hay tabla de sesiones; revocar = expirar.
    - El servicio NO lee Settings globales: recibe AuthConfig.
    - Nunca loguear tokens.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable
from uuid import UUID

import jwt

from .users import UserRole

if TYPE_CHECKING:
    from ..crosscutting.config import Settings

# ---------------------------------------------------------------------------
# Constantes
# ---------------------------------------------------------------------------

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_ROLE: str = "role"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_TYP: str = "typ"

TOKEN_TYPE_ACCESS: str = "access"


# ---------------------------------------------------------------------------
# Errores
# ---------------------------------------------------------------------------


class TokenError(Exception):
    """Base de errores de verificación de token."""


class InvalidTokenError(TokenError):
    """Firma inválida, token malformado o claims incompletos."""


class ExpiredTokenError(TokenError):
    """Token bien firmado pero vencido."""


# ---------------------------------------------------------------------------
# Contratos
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """Configuración de auth (inmutable, construida una vez al arrancar)."""

    jwt_secret: str
    jwt_expires_minutes: int = 24 * 60
    cookie_name: str = "token"
    cookie_secure: bool = False
    cookie_samesite: str = "none"

    @property
    def cookie_max_age_seconds(self) -> int:
        return int(self.jwt_expires_minutes * 60)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "AuthConfig":
        return cls(
            jwt_secret=settings.jwt_secret,
            jwt_expires_minutes=settings.jwt_expires_minutes,
            cookie_name=(settings.auth_cookie_name or "").strip() or "token",
            cookie_secure=settings.cookie_secure(),
            cookie_samesite=settings.auth_cookie_samesite,
        )


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Claims mínimos que esperamos de un token de sesión."""

    user_id: UUID
    email: str
    role: UserRole


@dataclass(frozen=True, slots=True)
class IssuedToken:
    token: str
    expires_in: int


# ---------------------------------------------------------------------------
# Servicio
# ---------------------------------------------------------------------------


class TokenService:
    """Emite y verifica tokens de sesión. Función pura de (secreto, reloj)."""

    def __init__(
        self,
        config: AuthConfig,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not config.jwt_secret:
            raise ValueError("jwt_secret is required")
        self._config = config
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def config(self) -> AuthConfig:
        return self._config

    def issue(self, user_id: UUID, email: str, role: UserRole) -> IssuedToken:
        now = self._clock()
        expires_in = self._config.cookie_max_age_seconds

        payload: dict[str, object] = {
            CLAIM_SUB: str(user_id),
            CLAIM_EMAIL: email,
            CLAIM_ROLE: UserRole(role).value,
            CLAIM_IAT: int(now.timestamp()),
            CLAIM_EXP: int((now + timedelta(seconds=expires_in)).timestamp()),
            CLAIM_TYP: TOKEN_TYPE_ACCESS,
        }

        token = jwt.encode(payload, self._config.jwt_secret, algorithm=JWT_ALGORITHM)
        return IssuedToken(token=token, expires_in=expires_in)

    def verify(self, token: str) -> TokenClaims:
        """
        Decodifica y valida el token.

        Errores:
            - ExpiredTokenError si exp ya pasó.
            - InvalidTokenError ante cualquier otro problema.
        """
        if not token:
            raise InvalidTokenError("empty token")

        try:
            payload = jwt.decode(
                token,
                self._config.jwt_secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": [CLAIM_SUB, CLAIM_EMAIL, CLAIM_ROLE, CLAIM_EXP]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError("token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError(str(exc)) from exc

        token_type = payload.get(CLAIM_TYP)
        if token_type is not None and token_type != TOKEN_TYPE_ACCESS:
            raise InvalidTokenError("unexpected token type")

        try:
            user_id = UUID(str(payload[CLAIM_SUB]))
            role = UserRole(str(payload[CLAIM_ROLE]))
        except ValueError as exc:
            raise InvalidTokenError("malformed claims") from exc

        email = str(payload[CLAIM_EMAIL] or "")
        if not email:
            raise InvalidTokenError("malformed claims")

        return TokenClaims(user_id=user_id, email=email, role=role)
