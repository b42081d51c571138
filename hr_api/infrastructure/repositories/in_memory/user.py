"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Implement UserRepository over InMemoryStore (tests / APP_ENV=test).
  - Keep ordering aligned with Postgres: created_at DESC, id DESC.
  - Enforce uq users.email + FK position via the store.

Collaborators:
  - in_memory.store.InMemoryStore
  - domain.repositories.UserRepository / UserFilter
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence
from uuid import UUID

from ....crosscutting.pagination import Page, PageRequest
from ....domain.repositories import UserFilter, UserRepository
from ....identity.users import User, UserStatus
from .store import InMemoryStore, contains, utcnow

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def get_user(self, user_id: UUID) -> Optional[User]:
        with self._store.lock:
            return self._store.users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._store.lock:
            for user in self._store.users.values():
                if user.email == email:
                    return user
        return None

    def create_user(self, user: User) -> User:
        now = utcnow()
        stored = user.with_changes(
            created_at=user.created_at or now, updated_at=user.updated_at or now
        )
        with self._store.lock:
            self._store.check_user(stored)
            self._store.users[stored.id] = stored
        return stored

    def update_user(self, user: User) -> Optional[User]:
        with self._store.lock:
            if user.id not in self._store.users:
                return None
            self._store.check_user(user)
            self._store.users[user.id] = user
        return user

    def list_users(self, filters: UserFilter, page: PageRequest) -> Page[User]:
        statuses = set(filters.statuses)

        def predicate(u: User) -> bool:
            if u.status not in statuses:
                return False
            if filters.role is not None and u.role != filters.role:
                return False
            if filters.position_id is not None and u.position_id != filters.position_id:
                return False
            if filters.search and not (
                contains(u.name, filters.search) or contains(u.email, filters.search)
            ):
                return False
            return True

        with self._store.lock:
            users = [u for u in self._store.users.values() if predicate(u)]

        users.sort(key=lambda u: (u.created_at or _EPOCH, str(u.id)), reverse=True)
        return Page.from_slice(users, page)

    def count_users_by_position(
        self, position_id: UUID, statuses: Sequence[UserStatus]
    ) -> int:
        wanted = set(statuses)
        with self._store.lock:
            return sum(
                1
                for u in self._store.users.values()
                if u.position_id == position_id and u.status in wanted
            )

    def ping(self) -> bool:
        return True
