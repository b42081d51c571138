"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message "humana"

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  HRError + subclases

Responsabilidades:
  - Estandarizar errores internos que luego se mapean a HTTP
  - Generar error_id para rastreo
  - Traducir violaciones de constraints de la DB a un tipo propio
    (ConstraintViolationError) para que los casos de uso respondan conflicto

Colaboradores:
  - api/exception_handlers.py (mapea a AppHTTPException)
  - infrastructure/repositories/* (levantan DatabaseError / ConstraintViolationError)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from uuid import uuid4


class HRError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      HRError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message

    Colaboradores:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "HR_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(HRError):
    """Errores de DB (conexión, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"


class ConstraintKind(str, Enum):
    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"


class ConstraintViolationError(DatabaseError):
    """
    Violación de unique index / foreign key detectada por el storage.

    Es la red de seguridad del check-then-write de los casos de uso: dos
    requests concurrentes pueden pasar el pre-check, pero solo una escritura
    sobrevive al constraint.
    """

    error_code: str = "CONSTRAINT_VIOLATION"

    def __init__(
        self,
        message: str,
        *,
        kind: ConstraintKind,
        constraint: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.kind = kind
        self.constraint = constraint

    @property
    def is_unique(self) -> bool:
        return self.kind == ConstraintKind.UNIQUE

    @property
    def is_foreign_key(self) -> bool:
        return self.kind == ConstraintKind.FOREIGN_KEY
