"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/base.py
============================================================
Class: PostgresRepository

Responsibilities:
  - Resolve the connection pool (injected or global, lazy import).
  - Run parameterized SQL with consistent logging + DatabaseError wrapping.
  - Translate storage constraint violations (unique index / foreign key)
    into ConstraintViolationError so use cases can answer "conflict"
    instead of a 500.
  - Build paginated results from a (rows, total) pair.

Collaborators:
  - psycopg / psycopg_pool.ConnectionPool
  - infrastructure.db.pool.get_pool
  - crosscutting.exceptions.DatabaseError / ConstraintViolationError
  - crosscutting.logger

Constraints / Notes:
  - SQL parametrizado siempre (nunca interpolar input de usuario).
  - Cada helper usa su propia conexión/transacción del pool (commit al salir
    del context manager). Para varios statements en una sola transacción
    (locks de fila + chequeo + write) se pasa una función a _run().
============================================================
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, TypeVar

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import (
    ConstraintKind,
    ConstraintViolationError,
    DatabaseError,
)
from ....crosscutting.logger import logger
from ....crosscutting.pagination import Page, PageRequest

T = TypeVar("T")


def like_pattern(term: str) -> str:
    """R: Patrón ILIKE '%term%' con escape de comodines del usuario."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def lock_live_row(conn, table: str, row_id: object, *, constraint: str) -> None:
    """
    R: FK sobre filas vivas. Toma FOR SHARE sobre la fila padre no borrada
    (serializa contra el FOR UPDATE del tombstone) o falla como violación
    de FK. table es siempre una constante interna.
    """
    found = conn.execute(
        f"SELECT 1 FROM {table} WHERE id = %s AND deleted_at IS NULL FOR SHARE",
        (row_id,),
    ).fetchone()
    if found is None:
        raise ConstraintViolationError(
            f"{table} row {row_id} is missing or deleted",
            kind=ConstraintKind.FOREIGN_KEY,
            constraint=constraint,
        )


class PostgresRepository:
    """Base con helpers de ejecución para repositorios Postgres."""

    _LOG_PREFIX = "PostgresRepository"

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool
        from ...db.pool import get_pool

        return get_pool()

    # =========================================================
    # Ejecución
    # =========================================================
    def _run(
        self,
        op: str,
        fn: Callable[[Any], T],
        log_extra: dict[str, object] | None = None,
    ) -> T:
        log_msg = f"{self._LOG_PREFIX}: {op} failed"
        try:
            with self._get_pool().connection() as conn:
                return fn(conn)
        except pg_errors.UniqueViolation as exc:
            raise self._constraint_error(exc, ConstraintKind.UNIQUE) from exc
        except pg_errors.ForeignKeyViolation as exc:
            raise self._constraint_error(exc, ConstraintKind.FOREIGN_KEY) from exc
        except DatabaseError:
            raise
        except Exception as exc:
            logger.exception(log_msg, extra={**(log_extra or {}), "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}", original_error=exc) from exc

    def _constraint_error(
        self, exc: pg_errors.IntegrityError, kind: ConstraintKind
    ) -> ConstraintViolationError:
        constraint = getattr(getattr(exc, "diag", None), "constraint_name", None)
        logger.info(
            f"{self._LOG_PREFIX}: constraint violation",
            extra={"constraint": constraint, "kind": kind.value},
        )
        return ConstraintViolationError(
            str(exc), kind=kind, constraint=constraint, original_error=exc
        )

    def _fetchone(
        self,
        op: str,
        query: str,
        params: Iterable[object] = (),
        log_extra: dict[str, object] | None = None,
    ) -> Optional[tuple]:
        return self._run(
            op, lambda conn: conn.execute(query, tuple(params)).fetchone(), log_extra
        )

    def _fetchall(
        self,
        op: str,
        query: str,
        params: Iterable[object] = (),
        log_extra: dict[str, object] | None = None,
    ) -> list[tuple]:
        return self._run(
            op, lambda conn: conn.execute(query, tuple(params)).fetchall(), log_extra
        )

    def _execute(
        self,
        op: str,
        query: str,
        params: Iterable[object] = (),
        log_extra: dict[str, object] | None = None,
    ) -> int:
        """Ejecuta un write sin RETURNING y devuelve rowcount."""
        return self._run(
            op, lambda conn: conn.execute(query, tuple(params)).rowcount, log_extra
        )

    # =========================================================
    # Paginación
    # =========================================================
    def _paginate(
        self,
        op: str,
        *,
        select_sql: str,
        count_sql: str,
        params: Iterable[object],
        page: PageRequest,
        mapper: Callable[[tuple], T],
    ) -> Page[T]:
        """
        Ejecuta COUNT + SELECT paginado en la misma conexión.

        select_sql debe terminar en ORDER BY (se agrega LIMIT/OFFSET acá).
        """
        base_params = tuple(params)

        def _query(conn) -> Page[T]:
            total_row = conn.execute(count_sql, base_params).fetchone()
            rows = conn.execute(
                f"{select_sql} LIMIT %s OFFSET %s",
                (*base_params, page.limit, page.offset),
            ).fetchall()
            return Page(
                items=[mapper(row) for row in rows],
                total=int(total_row[0]) if total_row else 0,
                page=page.page,
                page_size=page.page_size,
            )

        return self._run(op, _query)
