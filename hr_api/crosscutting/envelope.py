"""
===============================================================================
MÓDULO: Envelope uniforme de respuestas HTTP
===============================================================================

Contrato (éxito y error):

    {
      "success": bool,
      "message": str,
      "data": ...,                                   (opcional)
      "pagination": {total, page, limit, totalPages}, (opcional)
      "errors": [{path, message}]                    (opcional)
    }

Responsabilidades:
  - Modelos pydantic del envelope (usables como response_model genérico).
  - Omitir claves opcionales vacías al serializar (sin tocar el contenido
    de `data`, que puede tener nulls legítimos).
  - Builders para éxito / éxito paginado / error.

Colaboradores:
  - crosscutting/error_responses.py (errores -> envelope)
  - interfaces/api/http/routers/* (respuestas de éxito)
===============================================================================
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_serializer

from .pagination import Page

T = TypeVar("T")

_OPTIONAL_KEYS = ("data", "pagination", "errors")


class ErrorItem(BaseModel):
    """Detalle de un error de validación."""

    path: str
    message: str


class PaginationMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages", serialization_alias="totalPages")

    @classmethod
    def from_page(cls, page: Page[Any]) -> "PaginationMeta":
        return cls(
            total=page.total,
            page=page.page,
            limit=page.page_size,
            total_pages=page.total_pages,
        )

    @model_serializer(mode="wrap")
    def _camel_total_pages(self, handler):
        data = handler(self)
        if "total_pages" in data:
            data["totalPages"] = data.pop("total_pages")
        return data


class Envelope(BaseModel, Generic[T]):
    """Envelope estándar de la API."""

    success: bool = True
    message: str = ""
    data: Optional[T] = None
    pagination: Optional[PaginationMeta] = None
    errors: Optional[list[ErrorItem]] = None

    @model_serializer(mode="wrap")
    def _drop_empty_optionals(self, handler):
        # R: solo se omiten las claves del envelope; el contenido de data queda intacto.
        data = handler(self)
        for key in _OPTIONAL_KEYS:
            if data.get(key) is None:
                data.pop(key, None)
        return data


def success(message: str, data: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return body


def paginated(message: str, page: Page[Any]) -> dict[str, Any]:
    """Envelope paginado: data = items, pagination = metadatos de la página."""
    return {
        "success": True,
        "message": message,
        "data": page.items,
        "pagination": PaginationMeta.from_page(page),
    }


def error_body(
    message: str, errors: list[dict[str, Any]] | None = None
) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body
