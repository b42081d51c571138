"""
===============================================================================
USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Use Case Results

Business Goal:
    Proveer modelos compartidos de resultados y errores para todos los casos
    de uso (auth, users, attendance, departments, positions, camps), con un
    contrato estable y explícito para:
      - validaciones
      - autenticación / autorización
      - recursos no encontrados
      - conflictos de negocio (unicidad, dependencias)

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar excepciones
      "hacia afuera": la capa HTTP mapea códigos a status codes
      (interfaces/api/http/error_mapping.py) y los tests verifican flujos
      sin levantar FastAPI.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    results models (module)

Responsibilities:
    - Definir ErrorCode (set acotado y estable).
    - Representar UseCaseError (code + message).
    - Representar Result[T] (value | error).
    - Traducir ConstraintViolationError (storage) a UseCaseError.

Collaborators:
    - crosscutting.exceptions.ConstraintViolationError
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from ...crosscutting.exceptions import ConstraintViolationError

T = TypeVar("T")


class ErrorCode(str, Enum):
    """
    Códigos de error de casos de uso.

      - VALIDATION_ERROR: inputs inválidos o incompletos.
      - NOT_FOUND: recurso inexistente (o borrado).
      - CONFLICT: unicidad o regla de negocio (ej. departamento con cargos).
      - UNAUTHORIZED: credenciales / sesión inválidas.
      - FORBIDDEN: actor sin permisos.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"


@dataclass(frozen=True)
class UseCaseError:
    """Error de caso de uso: categoría estable + mensaje para UI/logs."""

    code: ErrorCode
    message: str


@dataclass
class Result(Generic[T]):
    """
    Resultado de un caso de uso.

    Contrato:
      - error is None  => value presente (éxito)
      - error != None  => value None (fallo)
    """

    value: T | None = None
    error: UseCaseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def success(value: T) -> Result[T]:
    return Result(value=value)


def failure(code: ErrorCode, message: str) -> Result[T]:
    return Result(error=UseCaseError(code=code, message=message))


def from_constraint(
    exc: ConstraintViolationError,
    *,
    conflict_message: str,
    missing_message: str,
) -> Result[T]:
    """
    Traduce una violación de constraint de storage.

    - unique      -> CONFLICT (otro request ganó la carrera)
    - foreign key -> NOT_FOUND (la referencia desapareció)
    """
    if exc.is_foreign_key:
        return failure(ErrorCode.NOT_FOUND, missing_message)
    return failure(ErrorCode.CONFLICT, conflict_message)
