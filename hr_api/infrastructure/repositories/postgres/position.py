"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/position.py
============================================================
Class: PostgresPositionRepository

Responsibilities:
  - CRUD de positions con soft delete (deleted_at).
  - JOIN a departments para el resumen del departamento.
  - Búsqueda en UNA query: name/description OR nombre del departamento.

Collaborators:
  - postgres.base.PostgresRepository
  - domain.entities.Position / DepartmentSummary

Constraints / Notes:
  - FK department_id -> departments (ConstraintViolationError si no existe).
  - Create/update toman FOR SHARE sobre el departamento vivo: un departamento
    borrado cuenta como FK inexistente y el tombstone concurrente espera.
  - soft_delete_position: FOR UPDATE sobre el cargo, chequeo de usuarios
    bloqueantes y tombstone en la misma transacción.
============================================================
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Sequence
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.pagination import Page, PageRequest
from ....domain.entities import (
    DepartmentSummary,
    OperationalStatus,
    Position,
    PositionStatistics,
)
from ....domain.repositories import PositionRepository
from ....identity.users import UserStatus
from .base import PostgresRepository, like_pattern, lock_live_row

_POSITION_COLUMNS = (
    "p.id, p.name, p.department_id, p.description, p.base_salary, p.status, "
    "p.created_at, p.updated_at, p.deleted_at, d.name"
)
_FROM = "FROM positions p JOIN departments d ON d.id = p.department_id"
_FK_DEPARTMENT = "fk_positions_department_id__departments"


def _row_to_position(row: tuple) -> Position:
    try:
        status = OperationalStatus(row[5])
    except ValueError as exc:
        raise DatabaseError(f"Invalid position status in database: {row[5]}") from exc
    return Position(
        id=row[0],
        name=row[1],
        department_id=row[2],
        description=row[3],
        base_salary=Decimal(row[4]) if row[4] is not None else Decimal("0.00"),
        status=status,
        created_at=row[6],
        updated_at=row[7],
        deleted_at=row[8],
        department=DepartmentSummary(id=row[2], name=row[9]),
    )
class PostgresPositionRepository(PostgresRepository, PositionRepository):
    _LOG_PREFIX = "PostgresPositionRepository"

    def create_position(self, position: Position) -> Position:
        def _insert(conn) -> Optional[tuple]:
            lock_live_row(
                conn, "departments", position.department_id, constraint=_FK_DEPARTMENT
            )
            return conn.execute(
                """
                INSERT INTO positions
                    (id, name, department_id, description, base_salary, status)
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING id
                """,
                (
                    position.id,
                    position.name,
                    position.department_id,
                    position.description,
                    position.base_salary,
                    position.status.value,
                ),
            ).fetchone()

        row = self._run(
            "create_position", _insert, {"department_id": str(position.department_id)}
        )
        if row is None:
            raise DatabaseError("Failed to create position: no row returned")
        created = self.get_position(position.id, include_deleted=True)
        if created is None:
            raise DatabaseError("Failed to reload position after insert")
        return created

    def get_position(
        self, position_id: UUID, *, include_deleted: bool = False
    ) -> Optional[Position]:
        query = f"SELECT {_POSITION_COLUMNS} {_FROM} WHERE p.id = %s"
        if not include_deleted:
            query += " AND p.deleted_at IS NULL"
        row = self._fetchone("get_position", query, [position_id])
        return _row_to_position(row) if row else None

    def update_position(self, position: Position) -> Optional[Position]:
        def _update(conn) -> Optional[tuple]:
            lock_live_row(
                conn, "departments", position.department_id, constraint=_FK_DEPARTMENT
            )
            return conn.execute(
                """
                UPDATE positions
                SET name = %s, department_id = %s, description = %s,
                    base_salary = %s, status = %s, updated_at = NOW()
                WHERE id = %s AND deleted_at IS NULL
                RETURNING id
                """,
                (
                    position.name,
                    position.department_id,
                    position.description,
                    position.base_salary,
                    position.status.value,
                    position.id,
                ),
            ).fetchone()

        row = self._run("update_position", _update, {"position_id": str(position.id)})
        if row is None:
            return None
        return self.get_position(position.id, include_deleted=True)

    def soft_delete_position(
        self, position_id: UUID, blocking_statuses: Sequence[UserStatus]
    ) -> Optional[Position]:
        statuses = [s.value for s in blocking_statuses]

        def _tombstone(conn) -> Optional[tuple]:
            locked = conn.execute(
                "SELECT id FROM positions WHERE id = %s AND deleted_at IS NULL FOR UPDATE",
                (position_id,),
            ).fetchone()
            if locked is None:
                return None
            # R: Statement nuevo => snapshot nuevo (ve users commiteados tras el lock).
            in_use = conn.execute(
                "SELECT 1 FROM users WHERE position_id = %s AND status = ANY(%s) LIMIT 1",
                (position_id, statuses),
            ).fetchone()
            if in_use is not None:
                return None
            return conn.execute(
                """
                UPDATE positions SET deleted_at = NOW(), updated_at = NOW()
                WHERE id = %s
                RETURNING id
                """,
                (position_id,),
            ).fetchone()

        row = self._run(
            "soft_delete_position", _tombstone, {"position_id": str(position_id)}
        )
        if row is None:
            return None
        return self.get_position(position_id, include_deleted=True)

    def list_positions(
        self,
        page: PageRequest,
        *,
        department_id: UUID | None = None,
        search: str | None = None,
        include_deleted: bool = False,
    ) -> Page[Position]:
        clauses: List[str] = ["TRUE"]
        params: List[object] = []
        if not include_deleted:
            clauses.append("p.deleted_at IS NULL")
        if department_id is not None:
            clauses.append("p.department_id = %s")
            params.append(department_id)
        if search:
            clauses.append(
                "(p.name ILIKE %s OR p.description ILIKE %s OR d.name ILIKE %s)"
            )
            pattern = like_pattern(search)
            params.extend([pattern, pattern, pattern])

        where = " AND ".join(clauses)
        return self._paginate(
            "list_positions",
            select_sql=(
                f"SELECT {_POSITION_COLUMNS} {_FROM} WHERE {where} "
                "ORDER BY p.name ASC, p.id ASC"
            ),
            count_sql=f"SELECT COUNT(*) {_FROM} WHERE {where}",
            params=params,
            page=page,
            mapper=_row_to_position,
        )

    def statistics(self) -> PositionStatistics:
        row = self._fetchone(
            "statistics",
            """
            SELECT
                COUNT(*),
                COUNT(*) FILTER (WHERE deleted_at IS NULL AND status = 'active'),
                COUNT(*) FILTER (WHERE deleted_at IS NULL AND status = 'inactive'),
                COUNT(*) FILTER (WHERE deleted_at IS NOT NULL)
            FROM positions
            """,
        )
        total, active, inactive, deleted = (int(v or 0) for v in (row or (0, 0, 0, 0)))
        return PositionStatistics(
            total=total, active=active, inactive=inactive, deleted=deleted
        )
