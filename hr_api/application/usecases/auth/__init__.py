from .change_password import ChangePasswordInput, ChangePasswordUseCase
from .login_user import LoginOutput, LoginUserUseCase
from .register_user import RegisterUserInput, RegisterUserUseCase
from .verify_session import VerifySessionUseCase

__all__ = [
    "ChangePasswordInput",
    "ChangePasswordUseCase",
    "LoginOutput",
    "LoginUserUseCase",
    "RegisterUserInput",
    "RegisterUserUseCase",
    "VerifySessionUseCase",
]
