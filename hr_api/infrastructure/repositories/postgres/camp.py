"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/camp.py
============================================================
Class: PostgresCampRepository

Responsibilities:
  - CRUD de camps (borrado físico).
  - LEFT JOIN a users para el resumen del empleado asignado.
  - Filtros (empleado, status, búsqueda) y estadísticas.

Collaborators:
  - postgres.base.PostgresRepository
  - domain.entities.Camp / CampStatistics
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.pagination import Page, PageRequest
from ....domain.entities import (
    Camp,
    CampStatistics,
    EmployeeSummary,
    OperationalStatus,
)
from ....domain.repositories import CampFilter, CampRepository
from ....identity.users import UserRole
from .base import PostgresRepository, like_pattern

_CAMP_COLUMNS = (
    "c.id, c.name, c.employee_id, c.description, c.status, c.created_at, "
    "c.updated_at, u.name, u.email, u.role"
)
_FROM = "FROM camps c LEFT JOIN users u ON u.id = c.employee_id"


def _row_to_camp(row: tuple) -> Camp:
    try:
        status = OperationalStatus(row[4])
    except ValueError as exc:
        raise DatabaseError(f"Invalid camp status in database: {row[4]}") from exc
    employee = None
    if row[2] is not None and row[7] is not None:
        employee = EmployeeSummary(
            id=row[2], name=row[7], email=row[8], role=UserRole(row[9])
        )
    return Camp(
        id=row[0],
        name=row[1],
        employee_id=row[2],
        description=row[3],
        status=status,
        created_at=row[5],
        updated_at=row[6],
        employee=employee,
    )


class PostgresCampRepository(PostgresRepository, CampRepository):
    _LOG_PREFIX = "PostgresCampRepository"

    def create_camp(self, camp: Camp) -> Camp:
        row = self._fetchone(
            "create_camp",
            """
            INSERT INTO camps (id, name, employee_id, description, status)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING id
            """,
            [camp.id, camp.name, camp.employee_id, camp.description, camp.status.value],
        )
        if row is None:
            raise DatabaseError("Failed to create camp: no row returned")
        created = self.get_camp(camp.id)
        if created is None:
            raise DatabaseError("Failed to reload camp after insert")
        return created

    def get_camp(self, camp_id: UUID) -> Optional[Camp]:
        row = self._fetchone(
            "get_camp", f"SELECT {_CAMP_COLUMNS} {_FROM} WHERE c.id = %s", [camp_id]
        )
        return _row_to_camp(row) if row else None

    def get_camp_by_name(self, name: str) -> Optional[Camp]:
        row = self._fetchone(
            "get_camp_by_name",
            f"SELECT {_CAMP_COLUMNS} {_FROM} WHERE c.name = %s",
            [name],
        )
        return _row_to_camp(row) if row else None

    def update_camp(self, camp: Camp) -> Optional[Camp]:
        row = self._fetchone(
            "update_camp",
            """
            UPDATE camps
            SET name = %s, employee_id = %s, description = %s, status = %s,
                updated_at = NOW()
            WHERE id = %s
            RETURNING id
            """,
            [camp.name, camp.employee_id, camp.description, camp.status.value, camp.id],
            {"camp_id": str(camp.id)},
        )
        if row is None:
            return None
        return self.get_camp(camp.id)

    def delete_camp(self, camp_id: UUID) -> bool:
        return self._execute("delete_camp", "DELETE FROM camps WHERE id = %s", [camp_id]) > 0

    def list_camps(self, filters: CampFilter, page: PageRequest) -> Page[Camp]:
        clauses: List[str] = ["TRUE"]
        params: List[object] = []
        if filters.employee_id is not None:
            clauses.append("c.employee_id = %s")
            params.append(filters.employee_id)
        if filters.status is not None:
            clauses.append("c.status = %s")
            params.append(filters.status.value)
        if filters.search:
            clauses.append(
                "(c.name ILIKE %s OR c.description ILIKE %s OR u.name ILIKE %s)"
            )
            pattern = like_pattern(filters.search)
            params.extend([pattern, pattern, pattern])

        where = " AND ".join(clauses)
        return self._paginate(
            "list_camps",
            select_sql=(
                f"SELECT {_CAMP_COLUMNS} {_FROM} WHERE {where} "
                "ORDER BY c.name ASC, c.id ASC"
            ),
            count_sql=f"SELECT COUNT(*) {_FROM} WHERE {where}",
            params=params,
            page=page,
            mapper=_row_to_camp,
        )

    def statistics(self) -> CampStatistics:
        row = self._fetchone(
            "statistics",
            """
            SELECT
                COUNT(*),
                COUNT(*) FILTER (WHERE status = 'active'),
                COUNT(*) FILTER (WHERE status = 'inactive'),
                COUNT(*) FILTER (WHERE employee_id IS NOT NULL),
                COUNT(*) FILTER (WHERE employee_id IS NULL)
            FROM camps
            """,
        )
        values = [int(v or 0) for v in (row or (0, 0, 0, 0, 0))]
        return CampStatistics(
            total=values[0],
            active=values[1],
            inactive=values[2],
            with_employee=values[3],
            without_employee=values[4],
        )
