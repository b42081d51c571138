"""
===============================================================================
TARJETA CRC — schemas/common.py
===============================================================================

Módulo:
    Tipos y validadores compartidos por los schemas HTTP

Responsabilidades:
    - Fechas "YYYY-MM-DD" y horas "HH:MM[:SS]" validadas por regex antes de
      que pydantic las convierta a date/time.
    - Email con formato básico (normalizado a minúsculas).
    - Nombres (2..100, trim) y descripciones (≤ 500).
    - DTO de resumen de empleado compartido por asistencias y camps.
===============================================================================
"""

from __future__ import annotations

import re
from datetime import date, time
from typing import Annotated, Any
from uuid import UUID

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field

from .....domain.entities import EmployeeSummary
from .....identity.users import UserRole

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_date_format(value: Any) -> Any:
    if isinstance(value, str) and not _DATE_RE.match(value.strip()):
        raise ValueError("La fecha debe tener formato YYYY-MM-DD")
    return value.strip() if isinstance(value, str) else value


def _check_time_format(value: Any) -> Any:
    if isinstance(value, str) and not _TIME_RE.match(value.strip()):
        raise ValueError("La hora debe tener formato HH:MM o HH:MM:SS")
    return value.strip() if isinstance(value, str) else value


def _normalize_email(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    cleaned = value.strip().lower()
    if not _EMAIL_RE.match(cleaned):
        raise ValueError("El email no es válido")
    return cleaned


def _strip_any(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _strip(value: str) -> str:
    return value.strip()


DateField = Annotated[date, BeforeValidator(_check_date_format)]
TimeField = Annotated[time, BeforeValidator(_check_time_format)]
EmailField = Annotated[str, BeforeValidator(_normalize_email), Field(max_length=100)]
NameField = Annotated[
    str, BeforeValidator(_strip_any), Field(min_length=2, max_length=100)
]
DescriptionField = Annotated[str, AfterValidator(_strip), Field(max_length=500)]
PasswordField = Annotated[str, Field(min_length=6, max_length=50)]


class EmployeeSummaryRes(BaseModel):
    id: UUID
    name: str
    email: str
    role: UserRole

    @classmethod
    def from_summary(cls, summary: EmployeeSummary | None) -> "EmployeeSummaryRes | None":
        if summary is None:
            return None
        return cls(
            id=summary.id, name=summary.name, email=summary.email, role=summary.role
        )
