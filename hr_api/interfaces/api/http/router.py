"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses de error para OpenAPI.
  - Componer routers por recurso (users/attendances/departments/positions/camps).

Patrones aplicados:
  - Composition over inheritance: router raíz compone sub-routers.
  - Factory: build_router() para testear composición y evitar side-effects al importar.

Colaboradores:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.* (sub-routers por recurso)

Notas:
  - Este router se incluye desde hr_api/api/main.py con prefix="/api".
  - /api/auth vive en api/auth_routes.py (se incluye aparte).
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.attendances import router as attendances_router
from .routers.camps import router as camps_router
from .routers.departments import router as departments_router
from .routers.positions import router as positions_router
from .routers.users import router as users_router


def build_router() -> APIRouter:
    """Construye el router raíz de recursos."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(users_router)
    api_router.include_router(attendances_router)
    api_router.include_router(departments_router)
    api_router.include_router(positions_router)
    api_router.include_router(camps_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
