"""
===============================================================================
USE CASES: User Administration (create / update / delete / profile)
===============================================================================

Business Goal:
    Administración de usuarios por parte de un admin, más la edición del
    propio perfil (name/email).

Why (Context / Intención):
    - El email es único globalmente (incluye usuarios borrados).
    - El cargo (position_id), si se indica, debe existir y no estar borrado.
    - Un usuario nunca se borra físicamente: status pasa a "deleted".

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    CreateUserUseCase, UpdateUserUseCase, DeleteUserUseCase,
    UpdateProfileUseCase

Collaborators:
    - UserRepository, PositionRepository
    - identity.auth_users.hash_password

Error Mapping:
    - VALIDATION_ERROR: status inválido para la operación.
    - NOT_FOUND: usuario / cargo inexistente.
    - CONFLICT: email ya registrado por otro usuario.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from ....crosscutting.exceptions import ConstraintViolationError
from ....domain.repositories import PositionRepository, UserRepository
from ....identity.auth_users import hash_password
from ....identity.users import User, UserRole, UserStatus, normalize_email
from ..results import (
    ErrorCode,
    Result,
    UseCaseError,
    failure,
    from_constraint,
    success,
)

MSG_USER_NOT_FOUND = "Usuario no encontrado"
MSG_EMAIL_TAKEN = "El email ya está registrado"
MSG_EMAIL_TAKEN_BY_OTHER = "El email ya está registrado por otro usuario"
MSG_POSITION_NOT_FOUND = "Cargo no encontrado"
MSG_INVALID_STATUS = "Estado de usuario inválido"


def _check_position(
    positions: PositionRepository, position_id: UUID | None
) -> UseCaseError | None:
    if position_id is None:
        return None
    if positions.get_position(position_id) is None:
        return UseCaseError(ErrorCode.NOT_FOUND, MSG_POSITION_NOT_FOUND)
    return None


@dataclass(frozen=True)
class CreateUserInput:
    name: str
    email: str
    password: str
    role: UserRole
    status: UserStatus = UserStatus.ACTIVE
    position_id: UUID | None = None


class CreateUserUseCase:
    def __init__(self, users: UserRepository, positions: PositionRepository) -> None:
        self._users = users
        self._positions = positions

    def execute(self, input_data: CreateUserInput) -> Result[User]:
        if input_data.status == UserStatus.DELETED:
            return failure(ErrorCode.VALIDATION_ERROR, MSG_INVALID_STATUS)

        email = normalize_email(input_data.email)
        if self._users.get_user_by_email(email) is not None:
            return failure(ErrorCode.CONFLICT, MSG_EMAIL_TAKEN)

        position_error = _check_position(self._positions, input_data.position_id)
        if position_error is not None:
            return Result(error=position_error)

        user = User(
            id=uuid4(),
            name=input_data.name.strip(),
            email=email,
            password_hash=hash_password(input_data.password),
            role=input_data.role,
            status=input_data.status,
            position_id=input_data.position_id,
        )
        try:
            return success(self._users.create_user(user))
        except ConstraintViolationError as exc:
            return from_constraint(
                exc,
                conflict_message=MSG_EMAIL_TAKEN,
                missing_message=MSG_POSITION_NOT_FOUND,
            )


@dataclass(frozen=True)
class UpdateUserInput:
    """Patch parcial: None significa "sin cambios"."""

    user_id: UUID
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: UserRole | None = None
    status: UserStatus | None = None
    position_id: UUID | None = None


class UpdateUserUseCase:
    def __init__(self, users: UserRepository, positions: PositionRepository) -> None:
        self._users = users
        self._positions = positions

    def execute(self, input_data: UpdateUserInput) -> Result[User]:
        user = self._users.get_user(input_data.user_id)
        if user is None or user.is_deleted:
            return failure(ErrorCode.NOT_FOUND, MSG_USER_NOT_FOUND)

        changes: dict[str, object] = {}

        if input_data.name is not None:
            changes["name"] = input_data.name.strip()

        if input_data.email is not None:
            email = normalize_email(input_data.email)
            if email != user.email:
                other = self._users.get_user_by_email(email)
                if other is not None and other.id != user.id:
                    return failure(ErrorCode.CONFLICT, MSG_EMAIL_TAKEN_BY_OTHER)
            changes["email"] = email

        if input_data.password:
            changes["password_hash"] = hash_password(input_data.password)

        if input_data.role is not None:
            changes["role"] = input_data.role

        if input_data.status is not None:
            if input_data.status == UserStatus.DELETED:
                return failure(ErrorCode.VALIDATION_ERROR, MSG_INVALID_STATUS)
            changes["status"] = input_data.status

        if (
            input_data.position_id is not None
            and input_data.position_id != user.position_id
        ):
            position_error = _check_position(self._positions, input_data.position_id)
            if position_error is not None:
                return Result(error=position_error)
            changes["position_id"] = input_data.position_id

        try:
            updated = self._users.update_user(user.with_changes(**changes))
        except ConstraintViolationError as exc:
            return from_constraint(
                exc,
                conflict_message=MSG_EMAIL_TAKEN_BY_OTHER,
                missing_message=MSG_POSITION_NOT_FOUND,
            )
        if updated is None:
            return failure(ErrorCode.NOT_FOUND, MSG_USER_NOT_FOUND)
        return success(updated)


class DeleteUserUseCase:
    """Soft delete: status=deleted (el email sigue reservado)."""

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: UUID) -> Result[User]:
        user = self._users.get_user(user_id)
        if user is None or user.is_deleted:
            return failure(ErrorCode.NOT_FOUND, MSG_USER_NOT_FOUND)

        deleted = self._users.update_user(user.with_changes(status=UserStatus.DELETED))
        if deleted is None:
            return failure(ErrorCode.NOT_FOUND, MSG_USER_NOT_FOUND)
        return success(deleted)


@dataclass(frozen=True)
class UpdateProfileInput:
    user_id: UUID
    name: str | None = None
    email: str | None = None


class UpdateProfileUseCase:
    """Edición del propio perfil: solo name y email."""

    def __init__(self, update_user: UpdateUserUseCase) -> None:
        self._update_user = update_user

    def execute(self, input_data: UpdateProfileInput) -> Result[User]:
        return self._update_user.execute(
            UpdateUserInput(
                user_id=input_data.user_id,
                name=input_data.name,
                email=input_data.email,
            )
        )
