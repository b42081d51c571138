"""
===============================================================================
USE CASE: Register User
===============================================================================

Business Goal:
    Alta pública de usuarios (self-service) con email único global.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    RegisterUserUseCase

Responsibilities:
    - Normalizar name/email.
    - Verificar unicidad del email (cualquier status, incluso deleted).
    - Hashear el password (Argon2) y persistir con status active.

Collaborators:
    - UserRepository
    - identity.auth_users.hash_password

Error Mapping:
    - VALIDATION_ERROR: name/email vacíos.
    - CONFLICT: email ya registrado (pre-check o constraint uq_users_email).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4

from ....crosscutting.exceptions import ConstraintViolationError
from ....domain.repositories import UserRepository
from ....identity.auth_users import hash_password
from ....identity.users import User, UserRole, UserStatus, normalize_email
from ..results import ErrorCode, Result, failure, from_constraint, success

MSG_EMAIL_TAKEN = "El email ya está registrado"
MSG_POSITION_NOT_FOUND = "Cargo no encontrado"


@dataclass(frozen=True)
class RegisterUserInput:
    name: str
    email: str
    password: str
    role: UserRole = UserRole.CLIENT


class RegisterUserUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, input_data: RegisterUserInput) -> Result[User]:
        name = (input_data.name or "").strip()
        email = normalize_email(input_data.email)
        if not name or not email:
            return failure(ErrorCode.VALIDATION_ERROR, "Nombre y email son requeridos")

        if self._users.get_user_by_email(email) is not None:
            return failure(ErrorCode.CONFLICT, MSG_EMAIL_TAKEN)

        user = User(
            id=uuid4(),
            name=name,
            email=email,
            password_hash=hash_password(input_data.password),
            role=UserRole(input_data.role),
            status=UserStatus.ACTIVE,
        )
        try:
            return success(self._users.create_user(user))
        except ConstraintViolationError as exc:
            return from_constraint(
                exc,
                conflict_message=MSG_EMAIL_TAKEN,
                missing_message=MSG_POSITION_NOT_FOUND,
            )
