"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP envelope)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de casos de uso a AppHTTPException.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Reglas:
  - Los use cases devuelven errores tipados (code + message).
  - CONFLICT viaja como 400 (contrato de la API, 409 no se usa).

Colaboradores:
  - application.usecases.results (ErrorCode, UseCaseError, Result)
  - crosscutting.error_responses (validation_error, conflict, etc.)
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn, TypeVar

from ....application.usecases.results import ErrorCode, Result, UseCaseError
from ....crosscutting.error_responses import (
    conflict,
    forbidden,
    internal_error,
    not_found,
    unauthorized,
    validation_error,
)

T = TypeVar("T")


def raise_for_error(error: UseCaseError) -> NoReturn:
    """Traduce UseCaseError -> HTTP (el mensaje del caso de uso se preserva)."""
    if error.code == ErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == ErrorCode.NOT_FOUND:
        raise not_found(error.message)
    if error.code == ErrorCode.CONFLICT:
        raise conflict(error.message)
    if error.code == ErrorCode.UNAUTHORIZED:
        raise unauthorized(error.message)
    if error.code == ErrorCode.FORBIDDEN:
        raise forbidden(error.message)

    # Fallback: código nuevo sin mapeo explícito
    raise internal_error(error.message)


def unwrap(result: Result[T]) -> T:
    """Devuelve el value del Result o levanta el error HTTP correspondiente."""
    if result.error is not None:
        raise_for_error(result.error)
    return result.value  # type: ignore[return-value]
