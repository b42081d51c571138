"""
===============================================================================
TARJETA CRC — hr_api/interfaces/api/http/routers/__init__.py
===============================================================================

Name:
    Routers Package (HTTP)

Responsibilities:
    - Exponer routers segmentados por recurso para ser incluidos por el
      router principal.

Notas:
    - Este archivo NO define endpoints. Solo re-exporta routers.
===============================================================================
"""

from .attendances import router as attendances_router
from .camps import router as camps_router
from .departments import router as departments_router
from .positions import router as positions_router
from .users import router as users_router

__all__ = [
    "attendances_router",
    "camps_router",
    "departments_router",
    "positions_router",
    "users_router",
]
