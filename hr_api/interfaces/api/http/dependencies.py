"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias y helpers comunes)
===============================================================================

Responsabilidades:
  - Centralizar helpers que se repiten en routers:
      * paginación (page / limit acotado por MAX_PAGE_SIZE)
      * parámetro de búsqueda `q` obligatorio
      * modo include_deleted (solo admin)

Colaboradores:
  - crosscutting.config.get_settings
  - crosscutting.pagination.PageRequest
  - crosscutting.error_responses (validation_error, forbidden)
  - identity.auth_users.Identity
===============================================================================
"""

from __future__ import annotations

from fastapi import Query

from ....crosscutting.config import get_settings
from ....crosscutting.error_responses import forbidden, validation_error
from ....crosscutting.pagination import PageRequest
from ....identity.auth_users import Identity
from ....identity.users import UserRole

MSG_SEARCH_REQUIRED = "Parámetro de búsqueda requerido"
MSG_INCLUDE_DELETED_ADMIN = "Solo un administrador puede ver registros eliminados"


def get_page_request(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
) -> PageRequest:
    """
    page >= 1 (default 1); limit 1..MAX_PAGE_SIZE (default DEFAULT_PAGE_SIZE).

    El tope depende de Settings, por eso se valida acá y no en Query(le=...).
    """
    settings = get_settings()
    page_size = settings.default_page_size if limit is None else limit
    if page_size > settings.max_page_size:
        raise validation_error(
            errors=[
                {
                    "path": "limit",
                    "message": f"limit debe ser menor o igual a {settings.max_page_size}",
                }
            ]
        )
    return PageRequest(page=page, page_size=page_size)


def get_search_term(q: str | None = Query(None, max_length=100)) -> str:
    """`q` obligatorio y no vacío (trim)."""
    term = (q or "").strip()
    if not term:
        raise validation_error(MSG_SEARCH_REQUIRED)
    return term


def check_include_deleted(identity: Identity, include_deleted: bool) -> bool:
    """El modo withDeleted es administrativo."""
    if include_deleted and identity.role != UserRole.ADMIN:
        raise forbidden(MSG_INCLUDE_DELETED_ADMIN)
    return include_deleted
