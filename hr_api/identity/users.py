"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelo de Usuario (credential store) y su proyección pública

Responsabilidades:
    - Definir roles (UserRole) y estados de ciclo de vida (UserStatus).
    - Definir la entidad User (incluye password_hash).
    - Definir PublicUser: la ÚNICA forma en que un usuario sale por HTTP.
    - Normalizar emails (trim + lower) en un solo lugar.

Colaboradores:
    - identity/auth_users.py: autenticación y guard.
    - application/usecases/*: crean/actualizan usuarios.
    - interfaces/api/http/schemas: construyen DTOs desde PublicUser.

Invariantes:
    - Un User nunca se borra físicamente: status pasa a DELETED.
    - El email es único globalmente (cualquier status).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID


class UserRole(str, Enum):
    """Roles del sistema (capabilities gruesas)."""

    EMPLOYEE = "employee"
    ADMIN = "admin"
    CLIENT = "client"


class UserStatus(str, Enum):
    """Ciclo de vida del usuario."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"


# Estados visibles en listados y aceptados como "vivos".
LIVE_USER_STATUSES: tuple[UserStatus, ...] = (UserStatus.ACTIVE, UserStatus.INACTIVE)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@dataclass(frozen=True, slots=True)
class User:
    """Usuario persistido (credential store)."""

    id: UUID
    name: str
    email: str
    password_hash: str
    role: UserRole = UserRole.CLIENT
    status: UserStatus = UserStatus.ACTIVE
    position_id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    @property
    def is_deleted(self) -> bool:
        return self.status == UserStatus.DELETED

    def with_changes(self, **changes) -> "User":
        """Copia inmutable con cambios y updated_at renovado."""
        changes.setdefault("updated_at", datetime.now(timezone.utc))
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class PublicUser:
    """Vista pública de un usuario: sin secretos."""

    id: UUID
    name: str
    email: str
    role: UserRole
    status: UserStatus
    position_id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


def to_public_user(user: User) -> PublicUser:
    """Proyección explícita User -> PublicUser (campo por campo)."""
    return PublicUser(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        status=user.status,
        position_id=user.position_id,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
