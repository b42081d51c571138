"""
===============================================================================
TARJETA CRC — hr_api/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones de la aplicación al envelope {success:false, ...}.
  - RequestValidationError -> 400 "Error de validación" con errors[path, message].
  - ConstraintViolationError que escape a un caso de uso -> 400.
  - Centralizar logging de errores con request_id + error_id.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> INTERNAL_ERROR (con logging).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions: HRError y derivadas
  - crosscutting.config.get_settings (EXPOSE_INTERNAL_ERRORS)
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.exceptions import (
    ConstraintViolationError,
    DatabaseError,
    HRError,
)
from ..crosscutting.logger import logger

MSG_VALIDATION = "Error de validación"
MSG_CONSTRAINT = "La operación viola una restricción de integridad"
MSG_INTERNAL = "Error interno del servidor"

_STATUS_CODES: dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
}


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def _error_path(loc: tuple[Any, ...]) -> str:
    # R: se descarta el origen ("body", "query", "path") salvo que sea lo único.
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in {"body", "query", "path", "header", "cookie"}:
        parts = parts[1:]
    return ".".join(parts)


def _internal_detail(exc: Exception) -> str:
    """Texto crudo del error salvo EXPOSE_INTERNAL_ERRORS=false."""
    if not get_settings().expose_internal_errors:
        return MSG_INTERNAL
    raw = getattr(exc, "message", None) or str(exc)
    return f"{MSG_INTERNAL}: {raw}" if raw else MSG_INTERNAL


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {"path": _error_path(tuple(err.get("loc", ()))), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    app_exc = AppHTTPException(
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR,
        detail=MSG_VALIDATION,
        errors=errors,
    )
    return await app_exception_handler(request, app_exc)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """404 de rutas inexistentes, 405, etc. también viajan en el envelope."""
    if isinstance(exc, AppHTTPException):
        return await app_exception_handler(request, exc)
    app_exc = AppHTTPException(
        status_code=exc.status_code,
        code=_STATUS_CODES.get(exc.status_code, ErrorCode.INTERNAL_ERROR),
        detail=str(exc.detail),
        headers=getattr(exc, "headers", None),
    )
    return await app_exception_handler(request, app_exc)


async def constraint_violation_handler(
    request: Request, exc: ConstraintViolationError
) -> JSONResponse:
    logger.warning(
        "Constraint violada fuera de un caso de uso",
        extra={
            "constraint": exc.constraint,
            "kind": exc.kind.value,
            "error_id": exc.error_id,
        },
    )
    app_exc = AppHTTPException(
        status_code=400, code=ErrorCode.CONFLICT, detail=MSG_CONSTRAINT
    )
    return await app_exception_handler(request, app_exc)


async def _handle_service_error(
    request: Request, *, exc: HRError, code: ErrorCode
) -> JSONResponse:
    request_id = _request_id_from(request)

    logger.error(
        "Error de servicio",
        exc_info=exc.original_error or exc,
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "request_id": request_id,
        },
    )

    app_exc = AppHTTPException(
        status_code=500, code=code, detail=_internal_detail(exc)
    )
    return await app_exception_handler(request, app_exc)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return await _handle_service_error(request, exc=exc, code=ErrorCode.DATABASE_ERROR)


async def hr_error_handler(request: Request, exc: HRError) -> JSONResponse:
    return await _handle_service_error(request, exc=exc, code=ErrorCode.INTERNAL_ERROR)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Excepciones no tipadas: log completo (stacktrace) + 500."""
    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": _request_id_from(request)},
    )
    app_exc = AppHTTPException(
        status_code=500, code=ErrorCode.INTERNAL_ERROR, detail=_internal_detail(exc)
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - ConstraintViolationError antes que DatabaseError (subclase).
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ConstraintViolationError, constraint_violation_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(HRError, hr_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
