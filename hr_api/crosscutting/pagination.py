"""
===============================================================================
MÓDULO: Paginación por página (page / page_size)
===============================================================================

Responsabilidades:
  - Representar el pedido de página (PageRequest) con offset derivado.
  - Representar el resultado (Page[T]) con total y total_pages.
  - Mantener una única fórmula de total_pages = ceil(total / page_size).

Colaboradores:
  - domain/repositories.py: los listados devuelven Page[T].
  - crosscutting/envelope.py: Page -> {"total","page","limit","totalPages"}.
===============================================================================
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_PAGE: int = 1
DEFAULT_PAGE_SIZE: int = 10


def total_pages(total: int, page_size: int) -> int:
    """Cantidad de páginas para `total` items (0 si no hay items)."""
    if page_size <= 0:
        raise ValueError("page_size must be greater than 0")
    return math.ceil(total / page_size) if total > 0 else 0


@dataclass(frozen=True)
class PageRequest:
    """Pedido de página (1-based)."""

    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


@dataclass
class Page(Generic[T]):
    """Resultado paginado."""

    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.page_size)

    @classmethod
    def from_slice(cls, items: List[T], request: PageRequest) -> "Page[T]":
        """Pagina una lista completa en memoria (repos in-memory)."""
        window = items[request.offset : request.offset + request.limit]
        return cls(
            items=list(window),
            total=len(items),
            page=request.page,
            page_size=request.page_size,
        )

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(
            items=[fn(item) for item in self.items],
            total=self.total,
            page=self.page,
            page_size=self.page_size,
        )
