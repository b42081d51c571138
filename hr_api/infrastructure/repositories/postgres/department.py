"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/department.py
============================================================
Class: PostgresDepartmentRepository

Responsibilities:
  - CRUD de departments con soft delete (deleted_at).
  - Búsqueda por name/description (ILIKE) y listados ordenados por nombre.
  - Conteo de positions vivas y estadísticas (top 10 por cantidad).

Collaborators:
  - postgres.base.PostgresRepository
  - domain.entities.Department / DepartmentStatistics

Constraints / Notes:
  - uq_departments_name abarca filas borradas: un nombre no se reutiliza.
  - El tombstone se decide en una transacción con lock de fila: no se borra
    un departamento con positions vivas aunque se creen en paralelo.
  - update nunca toca deleted_at (ni borra ni revive).
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.pagination import Page, PageRequest
from ....domain.entities import (
    Department,
    DepartmentPositionCount,
    DepartmentStatistics,
    OperationalStatus,
)
from ....domain.repositories import DepartmentRepository
from .base import PostgresRepository, like_pattern

_DEPARTMENT_COLUMNS = (
    "id, name, description, status, created_at, updated_at, deleted_at"
)
_TOP_DEPARTMENTS = 10


def _row_to_department(row: tuple) -> Department:
    try:
        status = OperationalStatus(row[3])
    except ValueError as exc:
        raise DatabaseError(f"Invalid department status in database: {row[3]}") from exc
    return Department(
        id=row[0],
        name=row[1],
        description=row[2],
        status=status,
        created_at=row[4],
        updated_at=row[5],
        deleted_at=row[6],
    )


class PostgresDepartmentRepository(PostgresRepository, DepartmentRepository):
    _LOG_PREFIX = "PostgresDepartmentRepository"

    def create_department(self, department: Department) -> Department:
        row = self._fetchone(
            "create_department",
            f"""
            INSERT INTO departments (id, name, description, status)
            VALUES (%s, %s, %s, %s)
            RETURNING {_DEPARTMENT_COLUMNS}
            """,
            [
                department.id,
                department.name,
                department.description,
                department.status.value,
            ],
        )
        if row is None:
            raise DatabaseError("Failed to create department: no row returned")
        return _row_to_department(row)

    def get_department(
        self, department_id: UUID, *, include_deleted: bool = False
    ) -> Optional[Department]:
        query = f"SELECT {_DEPARTMENT_COLUMNS} FROM departments WHERE id = %s"
        if not include_deleted:
            query += " AND deleted_at IS NULL"
        row = self._fetchone("get_department", query, [department_id])
        return _row_to_department(row) if row else None

    def get_department_by_name(self, name: str) -> Optional[Department]:
        row = self._fetchone(
            "get_department_by_name",
            f"SELECT {_DEPARTMENT_COLUMNS} FROM departments WHERE name = %s",
            [name],
        )
        return _row_to_department(row) if row else None

    def update_department(self, department: Department) -> Optional[Department]:
        row = self._fetchone(
            "update_department",
            f"""
            UPDATE departments
            SET name = %s, description = %s, status = %s, updated_at = NOW()
            WHERE id = %s AND deleted_at IS NULL
            RETURNING {_DEPARTMENT_COLUMNS}
            """,
            [
                department.name,
                department.description,
                department.status.value,
                department.id,
            ],
            {"department_id": str(department.id)},
        )
        return _row_to_department(row) if row else None

    def soft_delete_department(self, department_id: UUID) -> Optional[Department]:
        def _tombstone(conn) -> Optional[tuple]:
            # R: FOR UPDATE espera a los writers de positions (FOR SHARE);
            # el chequeo siguiente ve sus filas ya commiteadas.
            locked = conn.execute(
                "SELECT id FROM departments WHERE id = %s AND deleted_at IS NULL FOR UPDATE",
                (department_id,),
            ).fetchone()
            if locked is None:
                return None
            blocked = conn.execute(
                "SELECT 1 FROM positions "
                "WHERE department_id = %s AND deleted_at IS NULL LIMIT 1",
                (department_id,),
            ).fetchone()
            if blocked is not None:
                return None
            return conn.execute(
                f"""
                UPDATE departments
                SET deleted_at = NOW(), updated_at = NOW()
                WHERE id = %s
                RETURNING {_DEPARTMENT_COLUMNS}
                """,
                (department_id,),
            ).fetchone()

        row = self._run(
            "soft_delete_department",
            _tombstone,
            {"department_id": str(department_id)},
        )
        return _row_to_department(row) if row else None

    def list_departments(
        self,
        page: PageRequest,
        *,
        search: str | None = None,
        include_deleted: bool = False,
    ) -> Page[Department]:
        clauses: List[str] = ["TRUE"]
        params: List[object] = []
        if not include_deleted:
            clauses.append("deleted_at IS NULL")
        if search:
            clauses.append("(name ILIKE %s OR description ILIKE %s)")
            pattern = like_pattern(search)
            params.extend([pattern, pattern])

        where = " AND ".join(clauses)
        return self._paginate(
            "list_departments",
            select_sql=(
                f"SELECT {_DEPARTMENT_COLUMNS} FROM departments WHERE {where} "
                "ORDER BY name ASC, id ASC"
            ),
            count_sql=f"SELECT COUNT(*) FROM departments WHERE {where}",
            params=params,
            page=page,
            mapper=_row_to_department,
        )

    def count_live_positions(self, department_id: UUID) -> int:
        row = self._fetchone(
            "count_live_positions",
            "SELECT COUNT(*) FROM positions WHERE department_id = %s AND deleted_at IS NULL",
            [department_id],
        )
        return int(row[0]) if row else 0

    def statistics(self) -> DepartmentStatistics:
        totals = self._fetchone(
            "statistics",
            """
            SELECT
                COUNT(*),
                COUNT(*) FILTER (WHERE deleted_at IS NULL AND status = 'active'),
                COUNT(*) FILTER (WHERE deleted_at IS NULL AND status = 'inactive'),
                COUNT(*) FILTER (WHERE deleted_at IS NOT NULL)
            FROM departments
            """,
        )
        ranking = self._fetchall(
            "statistics.positions_per_department",
            """
            SELECT d.id, d.name, COUNT(p.id) AS position_count
            FROM departments d
            LEFT JOIN positions p
                ON p.department_id = d.id AND p.deleted_at IS NULL
            WHERE d.deleted_at IS NULL
            GROUP BY d.id, d.name
            ORDER BY position_count DESC, d.name ASC
            LIMIT %s
            """,
            [_TOP_DEPARTMENTS],
        )
        total, active, inactive, deleted = (int(v or 0) for v in (totals or (0, 0, 0, 0)))
        return DepartmentStatistics(
            total=total,
            active=active,
            inactive=inactive,
            deleted=deleted,
            positions_per_department=[
                DepartmentPositionCount(id=r[0], name=r[1], position_count=int(r[2]))
                for r in ranking
            ],
        )
