"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/department.py
============================================================
Class: InMemoryDepartmentRepository

Responsibilities:
  - Implement DepartmentRepository over InMemoryStore.
  - Soft delete via deleted_at (tombstone); default reads exclude it.
  - The tombstone checks live positions and writes under the store lock,
    the same lock position writes take.
  - get_department_by_name sees tombstoned rows (name is unique forever).
  - Ordering: name ASC.
============================================================
"""

from __future__ import annotations

from collections import Counter
from typing import Optional
from uuid import UUID

from ....crosscutting.pagination import Page, PageRequest
from ....domain.entities import (
    Department,
    DepartmentPositionCount,
    DepartmentStatistics,
    OperationalStatus,
)
from ....domain.repositories import DepartmentRepository
from .store import InMemoryStore, clone, contains, utcnow

_TOP_DEPARTMENTS = 10


class InMemoryDepartmentRepository(DepartmentRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def create_department(self, department: Department) -> Department:
        now = utcnow()
        row = clone(department)
        row.created_at = row.created_at or now
        row.updated_at = row.updated_at or now
        with self._store.lock:
            self._store.check_department(row)
            self._store.departments[row.id] = row
        return clone(row)

    def get_department(
        self, department_id: UUID, *, include_deleted: bool = False
    ) -> Optional[Department]:
        with self._store.lock:
            row = self._store.departments.get(department_id)
        if row is None or (row.is_deleted and not include_deleted):
            return None
        return clone(row)

    def get_department_by_name(self, name: str) -> Optional[Department]:
        with self._store.lock:
            for row in self._store.departments.values():
                if row.name == name:
                    return clone(row)
        return None

    def update_department(self, department: Department) -> Optional[Department]:
        row = clone(department)
        row.updated_at = utcnow()
        with self._store.lock:
            stored = self._store.departments.get(row.id)
            if stored is None or stored.is_deleted:
                return None
            row.deleted_at = stored.deleted_at
            self._store.check_department(row)
            self._store.departments[row.id] = row
        return clone(row)

    def soft_delete_department(self, department_id: UUID) -> Optional[Department]:
        with self._store.lock:
            stored = self._store.departments.get(department_id)
            if stored is None or stored.is_deleted:
                return None
            if any(
                p.department_id == department_id and not p.is_deleted
                for p in self._store.positions.values()
            ):
                return None
            row = clone(stored)
            row.mark_deleted()
            self._store.departments[row.id] = row
        return clone(row)

    def list_departments(
        self,
        page: PageRequest,
        *,
        search: str | None = None,
        include_deleted: bool = False,
    ) -> Page[Department]:
        with self._store.lock:
            rows = [clone(d) for d in self._store.departments.values()]
        rows = [
            d
            for d in rows
            if (include_deleted or not d.is_deleted)
            and (
                not search
                or contains(d.name, search)
                or contains(d.description, search)
            )
        ]
        rows.sort(key=lambda d: (d.name, str(d.id)))
        return Page.from_slice(rows, page)

    def count_live_positions(self, department_id: UUID) -> int:
        with self._store.lock:
            return sum(
                1
                for p in self._store.positions.values()
                if p.department_id == department_id and not p.is_deleted
            )

    def statistics(self) -> DepartmentStatistics:
        with self._store.lock:
            departments = list(self._store.departments.values())
            position_counts = Counter(
                p.department_id
                for p in self._store.positions.values()
                if not p.is_deleted
            )

        live = [d for d in departments if not d.is_deleted]
        ranking = sorted(
            live, key=lambda d: (-position_counts.get(d.id, 0), d.name)
        )[:_TOP_DEPARTMENTS]

        return DepartmentStatistics(
            total=len(departments),
            active=sum(1 for d in live if d.status == OperationalStatus.ACTIVE),
            inactive=sum(1 for d in live if d.status == OperationalStatus.INACTIVE),
            deleted=len(departments) - len(live),
            positions_per_department=[
                DepartmentPositionCount(
                    id=d.id, name=d.name, position_count=position_counts.get(d.id, 0)
                )
                for d in ranking
            ],
        )
