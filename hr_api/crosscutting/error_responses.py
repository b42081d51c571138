"""
===============================================================================
MÓDULO: Respuestas de error estándar (envelope success=false)
===============================================================================

Objetivo
--------
Uniformar TODOS los errores HTTP para que el frontend pueda manejar siempre el
mismo contrato:

    {"success": false, "message": "...", "errors": [{"path", "message"}]}

Mapeo de status:
  - 400: validación y conflictos de negocio (409 NO se usa)
  - 401: sin token / credenciales inválidas
  - 403: token inválido o rol insuficiente
  - 404: recurso inexistente
  - 500: error inesperado

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + factories + handler

Responsabilidades:
  - Definir catálogo de códigos de error (ErrorCode)
  - Proveer factories de errores frecuentes
  - Renderizar AppHTTPException como envelope JSON

Colaboradores:
  - crosscutting/envelope.py
  - api/exception_handlers.py (mapea errores internos)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from .envelope import Envelope, error_body


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


OPENAPI_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"description": "Validación o conflicto de negocio", "model": Envelope},
    401: {"description": "No autenticado", "model": Envelope},
    403: {"description": "Token inválido o rol insuficiente", "model": Envelope},
    404: {"description": "Recurso no encontrado", "model": Envelope},
    500: {"description": "Error interno", "model": Envelope},
}


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AppHTTPException

    Responsabilidades:
      - Adjuntar un ErrorCode estable
      - Transportar errores de validación (errors[] con path/message)

    Colaboradores:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.errors = errors


# ---------------------------------------------------------------------------
# Factories de error (helpers)
# ---------------------------------------------------------------------------
def validation_error(
    detail: str = "Error de validación", errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail, errors)


def not_found(detail: str) -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, detail)


def conflict(detail: str) -> AppHTTPException:
    # R: los conflictos de negocio viajan como 400 (contrato de la API).
    return AppHTTPException(400, ErrorCode.CONFLICT, detail)


def unauthorized(detail: str = "Autenticación requerida") -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.UNAUTHORIZED, detail)


def forbidden(detail: str = "Acceso denegado") -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail)


def internal_error(detail: str = "Ocurrió un error inesperado") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


# ---------------------------------------------------------------------------
# Handler FastAPI
# ---------------------------------------------------------------------------
async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Renderiza AppHTTPException como envelope (propaga headers opcionales)."""
    headers = dict(exc.headers or {})
    request_id = getattr(getattr(request, "state", None), "request_id", None)
    if request_id:
        headers.setdefault("X-Request-Id", request_id)

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), exc.errors),
        headers=headers or None,
    )
