"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/position.py
============================================================
Class: InMemoryPositionRepository

Responsibilities:
  - Implement PositionRepository over InMemoryStore.
  - Join the department summary on reads.
  - Search: name/description OR department name, one pass (same semantics
    as the single OR-across-join SQL query).
  - Writes validate the department is live and the tombstone checks users
    under the store lock (the lock user writes take too).
============================================================
"""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from ....crosscutting.pagination import Page, PageRequest
from ....domain.entities import OperationalStatus, Position, PositionStatistics
from ....domain.repositories import PositionRepository
from ....identity.users import UserStatus
from .store import InMemoryStore, clone, contains, utcnow


class InMemoryPositionRepository(PositionRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def _hydrate(self, row: Position) -> Position:
        out = clone(row)
        out.department = self._store.department_summary(row.department_id)
        return out

    def create_position(self, position: Position) -> Position:
        now = utcnow()
        row = clone(position)
        row.department = None
        row.created_at = row.created_at or now
        row.updated_at = row.updated_at or now
        with self._store.lock:
            self._store.check_position(row)
            self._store.positions[row.id] = row
            return self._hydrate(row)

    def get_position(
        self, position_id: UUID, *, include_deleted: bool = False
    ) -> Optional[Position]:
        with self._store.lock:
            row = self._store.positions.get(position_id)
            if row is None or (row.is_deleted and not include_deleted):
                return None
            return self._hydrate(row)

    def update_position(self, position: Position) -> Optional[Position]:
        row = clone(position)
        row.department = None
        row.updated_at = utcnow()
        with self._store.lock:
            stored = self._store.positions.get(row.id)
            if stored is None or stored.is_deleted:
                return None
            row.deleted_at = stored.deleted_at
            self._store.check_position(row)
            self._store.positions[row.id] = row
            return self._hydrate(row)

    def soft_delete_position(
        self, position_id: UUID, blocking_statuses: Sequence[UserStatus]
    ) -> Optional[Position]:
        with self._store.lock:
            stored = self._store.positions.get(position_id)
            if stored is None or stored.is_deleted:
                return None
            if any(
                u.position_id == position_id and u.status in blocking_statuses
                for u in self._store.users.values()
            ):
                return None
            row = clone(stored)
            row.mark_deleted()
            self._store.positions[row.id] = row
            return self._hydrate(row)

    def list_positions(
        self,
        page: PageRequest,
        *,
        department_id: UUID | None = None,
        search: str | None = None,
        include_deleted: bool = False,
    ) -> Page[Position]:
        with self._store.lock:
            rows = [self._hydrate(p) for p in self._store.positions.values()]

        def predicate(p: Position) -> bool:
            if p.is_deleted and not include_deleted:
                return False
            if department_id is not None and p.department_id != department_id:
                return False
            if search:
                department_name = p.department.name if p.department else None
                return (
                    contains(p.name, search)
                    or contains(p.description, search)
                    or contains(department_name, search)
                )
            return True

        rows = [p for p in rows if predicate(p)]
        rows.sort(key=lambda p: (p.name, str(p.id)))
        return Page.from_slice(rows, page)

    def statistics(self) -> PositionStatistics:
        with self._store.lock:
            rows = list(self._store.positions.values())
        live = [p for p in rows if not p.is_deleted]
        return PositionStatistics(
            total=len(rows),
            active=sum(1 for p in live if p.status == OperationalStatus.ACTIVE),
            inactive=sum(1 for p in live if p.status == OperationalStatus.INACTIVE),
            deleted=len(rows) - len(live),
        )
