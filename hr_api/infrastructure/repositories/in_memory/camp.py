"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/camp.py
============================================================
Class: InMemoryCampRepository

Responsibilities:
  - Implement CampRepository over InMemoryStore (hard delete).
  - Join the employee summary on reads; ordering name ASC.
============================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from ....crosscutting.pagination import Page, PageRequest
from ....domain.entities import Camp, CampStatistics, OperationalStatus
from ....domain.repositories import CampFilter, CampRepository
from .store import InMemoryStore, clone, contains, utcnow


class InMemoryCampRepository(CampRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def _hydrate(self, row: Camp) -> Camp:
        out = clone(row)
        out.employee = self._store.employee_summary(row.employee_id)
        return out

    def create_camp(self, camp: Camp) -> Camp:
        now = utcnow()
        row = clone(camp)
        row.employee = None
        row.created_at = row.created_at or now
        row.updated_at = row.updated_at or now
        with self._store.lock:
            self._store.check_camp(row)
            self._store.camps[row.id] = row
            return self._hydrate(row)

    def get_camp(self, camp_id: UUID) -> Optional[Camp]:
        with self._store.lock:
            row = self._store.camps.get(camp_id)
            return self._hydrate(row) if row else None

    def get_camp_by_name(self, name: str) -> Optional[Camp]:
        with self._store.lock:
            for row in self._store.camps.values():
                if row.name == name:
                    return self._hydrate(row)
        return None

    def update_camp(self, camp: Camp) -> Optional[Camp]:
        row = clone(camp)
        row.employee = None
        row.updated_at = utcnow()
        with self._store.lock:
            if row.id not in self._store.camps:
                return None
            self._store.check_camp(row)
            self._store.camps[row.id] = row
            return self._hydrate(row)

    def delete_camp(self, camp_id: UUID) -> bool:
        with self._store.lock:
            return self._store.camps.pop(camp_id, None) is not None

    def list_camps(self, filters: CampFilter, page: PageRequest) -> Page[Camp]:
        with self._store.lock:
            rows = [self._hydrate(c) for c in self._store.camps.values()]

        def predicate(c: Camp) -> bool:
            if filters.employee_id is not None and c.employee_id != filters.employee_id:
                return False
            if filters.status is not None and c.status != filters.status:
                return False
            if filters.search:
                employee_name = c.employee.name if c.employee else None
                return (
                    contains(c.name, filters.search)
                    or contains(c.description, filters.search)
                    or contains(employee_name, filters.search)
                )
            return True

        rows = [c for c in rows if predicate(c)]
        rows.sort(key=lambda c: (c.name, str(c.id)))
        return Page.from_slice(rows, page)

    def statistics(self) -> CampStatistics:
        with self._store.lock:
            rows = list(self._store.camps.values())
        with_employee = sum(1 for c in rows if c.employee_id is not None)
        return CampStatistics(
            total=len(rows),
            active=sum(1 for c in rows if c.status == OperationalStatus.ACTIVE),
            inactive=sum(1 for c in rows if c.status == OperationalStatus.INACTIVE),
            with_employee=with_employee,
            without_employee=len(rows) - with_employee,
        )
