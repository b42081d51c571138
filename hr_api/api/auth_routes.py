"""
===============================================================================
TARJETA CRC — hr_api/api/auth_routes.py (Autenticación)
===============================================================================

Responsabilidades:
  - Exponer endpoints de credenciales: register / login / logout / verify /
    profile / change-password.
  - Gestionar la cookie httpOnly de sesión de forma consistente.
  - Proyectar siempre User -> PublicUser (password_hash nunca sale).

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP <-> caso de uso.
  - Fail-safe security: si la autenticación falla, se deniega por defecto.

Colaboradores:
  - application.usecases.auth (Register/Login/VerifySession/ChangePassword)
  - identity.auth_users: set_session_cookie / clear_session_cookie
  - identity.dependencies: require_user
  - interfaces.api.http.error_mapping: unwrap
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from ..application.usecases import (
    ChangePasswordInput,
    ChangePasswordUseCase,
    GetUserUseCase,
    LoginUserUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
    VerifySessionUseCase,
)
from ..container import (
    get_auth_config,
    get_auth_guard,
    get_change_password_use_case,
    get_get_user_use_case,
    get_login_user_use_case,
    get_register_user_use_case,
    get_verify_session_use_case,
)
from ..crosscutting.envelope import Envelope, success
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..crosscutting.logger import logger
from ..identity.auth_users import (
    Identity,
    clear_session_cookie,
    set_session_cookie,
)
from ..identity.dependencies import require_user
from ..identity.users import User, to_public_user
from ..interfaces.api.http.error_mapping import unwrap
from ..interfaces.api.http.schemas.users import (
    AuthUserRes,
    ChangePasswordReq,
    LoginReq,
    LoginRes,
    RegisterReq,
    UserRes,
    VerifyTokenReq,
)

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

_TAGS = ["auth"]


def _to_user_res(user: User) -> UserRes:
    return UserRes.from_public(to_public_user(user))


# -----------------------------------------------------------------------------
# Endpoints públicos
# -----------------------------------------------------------------------------


@router.post(
    "/auth/register",
    response_model=Envelope[AuthUserRes],
    status_code=201,
    tags=_TAGS,
)
def register(
    req: RegisterReq,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    user = unwrap(
        use_case.execute(
            RegisterUserInput(
                name=req.name, email=req.email, password=req.password, role=req.role
            )
        )
    )
    logger.info(
        "Auth: usuario registrado",
        extra={"user_id": str(user.id), "role": user.role.value},
    )
    return success(
        "Usuario registrado exitosamente", AuthUserRes(user=_to_user_res(user))
    )


@router.post("/auth/login", response_model=Envelope[LoginRes], tags=_TAGS)
def login(
    req: LoginReq,
    response: Response,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
):
    """
    Inicia sesión.

    - Devuelve {user, token} y además setea la cookie httpOnly.
    """
    output = unwrap(use_case.execute(req.email, req.password))
    set_session_cookie(response, output.token.token, get_auth_config())
    return success(
        "Inicio de sesión exitoso",
        LoginRes(user=_to_user_res(output.user), token=output.token.token),
    )


@router.post("/auth/verify", response_model=Envelope[AuthUserRes], tags=_TAGS)
def verify_token(
    request: Request,
    req: VerifyTokenReq | None = None,
    use_case: VerifySessionUseCase = Depends(get_verify_session_use_case),
):
    """Token desde el body {token} o, si no viene, desde la cookie de sesión."""
    token = (req.token if req is not None else None) or get_auth_guard().extract_token(
        request
    )
    user = unwrap(use_case.execute(token))
    return success("Token válido", AuthUserRes(user=_to_user_res(user)))


# -----------------------------------------------------------------------------
# Endpoints autenticados
# -----------------------------------------------------------------------------


@router.post("/auth/logout", response_model=Envelope, tags=_TAGS)
def logout(
    response: Response,
    _identity: Identity = Depends(require_user()),
):
    clear_session_cookie(response, get_auth_config())
    return success("Sesión cerrada exitosamente")


@router.get("/auth/profile", response_model=Envelope[AuthUserRes], tags=_TAGS)
def profile(
    identity: Identity = Depends(require_user()),
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    user = unwrap(use_case.execute(identity.id))
    return success("Perfil obtenido exitosamente", AuthUserRes(user=_to_user_res(user)))


@router.post("/auth/change-password", response_model=Envelope, tags=_TAGS)
def change_password(
    req: ChangePasswordReq,
    identity: Identity = Depends(require_user()),
    use_case: ChangePasswordUseCase = Depends(get_change_password_use_case),
):
    unwrap(
        use_case.execute(
            ChangePasswordInput(
                user_id=identity.id,
                current_password=req.current_password,
                new_password=req.new_password,
            )
        )
    )
    logger.info("Auth: contraseña actualizada", extra={"user_id": str(identity.id)})
    return success("Contraseña actualizada exitosamente")
