from .manage_users import (
    CreateUserInput,
    CreateUserUseCase,
    DeleteUserUseCase,
    UpdateProfileInput,
    UpdateProfileUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
)
from .user_queries import GetUserUseCase, ListUsersUseCase

__all__ = [
    "CreateUserInput",
    "CreateUserUseCase",
    "UpdateUserInput",
    "UpdateUserUseCase",
    "DeleteUserUseCase",
    "UpdateProfileInput",
    "UpdateProfileUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
]
