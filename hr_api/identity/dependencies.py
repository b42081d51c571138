"""
===============================================================================
TARJETA CRC — identity/dependencies.py
===============================================================================

Responsabilidades:
  - Exponer el guard y el role gate como dependencias FastAPI.
  - require_role depende de require_user: el guard siempre corre primero
    (401/403 por token antes que 403 por rol).

Colaboradores:
  - container.get_auth_guard
  - identity.auth_users.AuthGuard / ensure_role

Notas:
  - Vive separado de auth_users.py para que identity no importe el
    container (evita ciclos de import).
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Request

from ..container import get_auth_guard
from .auth_users import Identity, ensure_role
from .users import UserRole


def require_user() -> Callable[[Request], Identity]:
    """Dependencia: request autenticado (cualquier rol)."""

    def _dep(request: Request) -> Identity:
        return get_auth_guard().authenticate(request)

    return _dep


def require_role(*roles: UserRole) -> Callable[..., Identity]:
    """Dependencia: request autenticado con uno de los roles dados."""

    allowed = tuple(roles)

    def _dep(identity: Identity = Depends(require_user())) -> Identity:
        return ensure_role(identity, allowed)

    return _dep


def require_admin() -> Callable[..., Identity]:
    return require_role(UserRole.ADMIN)


def require_staff() -> Callable[..., Identity]:
    """Admin o empleado (escrituras de asistencia)."""
    return require_role(UserRole.ADMIN, UserRole.EMPLOYEE)
