"""
===============================================================================
TARJETA CRC — schemas/users.py
===============================================================================

Módulo:
    Schemas HTTP para usuarios y autenticación

Responsabilidades:
    - Requests de register/login/verify/change-password/users/profile.
    - UserRes: SIEMPRE construido desde PublicUser (nunca desde User), así
      password_hash no puede filtrarse por HTTP.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from .....identity.users import PublicUser, UserRole, UserStatus
from .common import EmailField, NameField, PasswordField

# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class UserRes(BaseModel):
    id: UUID
    name: str
    email: str
    role: UserRole
    status: UserStatus
    position_id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_public(cls, user: PublicUser) -> "UserRes":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            status=user.status,
            position_id=user.position_id,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthUserRes(BaseModel):
    user: UserRes


class LoginRes(BaseModel):
    user: UserRes
    token: str


# -----------------------------------------------------------------------------
# Requests: auth
# -----------------------------------------------------------------------------


class RegisterReq(BaseModel):
    name: NameField
    email: EmailField
    password: PasswordField
    role: UserRole = Field(default=UserRole.CLIENT)


class LoginReq(BaseModel):
    email: EmailField
    password: str = Field(..., min_length=1, max_length=50)


class VerifyTokenReq(BaseModel):
    token: str | None = Field(default=None, max_length=4096)


class ChangePasswordReq(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=50)
    new_password: PasswordField


# -----------------------------------------------------------------------------
# Requests: administración de usuarios
# -----------------------------------------------------------------------------


class CreateUserReq(BaseModel):
    name: NameField
    email: EmailField
    password: PasswordField
    role: UserRole
    status: Literal["active", "inactive"] = "active"
    position_id: UUID | None = None


class UpdateUserReq(BaseModel):
    """Patch parcial."""

    name: NameField | None = None
    email: EmailField | None = None
    password: PasswordField | None = None
    role: UserRole | None = None
    status: Literal["active", "inactive"] | None = None
    position_id: UUID | None = None


class UpdateProfileReq(BaseModel):
    name: NameField | None = None
    email: EmailField | None = None
