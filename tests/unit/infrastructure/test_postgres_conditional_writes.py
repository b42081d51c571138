"""
Name: Postgres Conditional Write Tests

Responsibilities:
  - Live-parent row lock (FOR SHARE) raises a foreign key violation
  - Tombstones lock the row, re-check dependents and skip the UPDATE when blocked
  - Exit write and record delete only touch live rows
"""

from datetime import time
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from hr_api.crosscutting.exceptions import ConstraintViolationError
from hr_api.domain.entities import Position
from hr_api.identity.users import User, UserRole, UserStatus
from hr_api.infrastructure.repositories.postgres.attendance import (
    PostgresAttendanceRepository,
)
from hr_api.infrastructure.repositories.postgres.base import lock_live_row
from hr_api.infrastructure.repositories.postgres.department import (
    PostgresDepartmentRepository,
)
from hr_api.infrastructure.repositories.postgres.position import (
    PostgresPositionRepository,
)
from hr_api.infrastructure.repositories.postgres.user import PostgresUserRepository

pytestmark = pytest.mark.unit


def _conn_returning(*rows):
    """Connection whose successive fetchone() calls yield rows in order."""
    conn = MagicMock()
    conn.execute.return_value.fetchone.side_effect = list(rows)
    return conn


def _pool_for(conn):
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    pool.connection.return_value.__exit__.return_value = False
    return pool


def _sql(conn, call_index: int) -> str:
    return conn.execute.call_args_list[call_index].args[0]


class TestLockLiveRow:
    def test_missing_or_deleted_parent_is_a_foreign_key_violation(self):
        conn = _conn_returning(None)

        with pytest.raises(ConstraintViolationError) as exc_info:
            lock_live_row(
                conn,
                "departments",
                uuid4(),
                constraint="fk_positions_department_id__departments",
            )

        assert exc_info.value.is_foreign_key
        assert exc_info.value.constraint == "fk_positions_department_id__departments"
        sql = _sql(conn, 0)
        assert "deleted_at IS NULL" in sql
        assert "FOR SHARE" in sql

    def test_live_parent_passes(self):
        conn = _conn_returning((1,))

        lock_live_row(conn, "positions", uuid4(), constraint="fk")

        assert conn.execute.call_count == 1


class TestDepartmentTombstone:
    def test_blocked_by_live_position_skips_update(self):
        department_id = uuid4()
        conn = _conn_returning((department_id,), (1,))
        repo = PostgresDepartmentRepository(pool=_pool_for(conn))

        assert repo.soft_delete_department(department_id) is None

        assert conn.execute.call_count == 2
        assert "FOR UPDATE" in _sql(conn, 0)
        assert "FROM positions" in _sql(conn, 1)

    def test_missing_department_stops_after_lock(self):
        conn = _conn_returning(None)
        repo = PostgresDepartmentRepository(pool=_pool_for(conn))

        assert repo.soft_delete_department(uuid4()) is None
        assert conn.execute.call_count == 1


class TestPositionWrites:
    def test_create_under_deleted_department_never_inserts(self):
        conn = _conn_returning(None)
        repo = PostgresPositionRepository(pool=_pool_for(conn))
        position = Position(id=uuid4(), name="Analista", department_id=uuid4())

        with pytest.raises(ConstraintViolationError) as exc_info:
            repo.create_position(position)

        assert exc_info.value.is_foreign_key
        assert conn.execute.call_count == 1

    def test_tombstone_blocked_by_live_user(self):
        position_id = uuid4()
        conn = _conn_returning((position_id,), (1,))
        repo = PostgresPositionRepository(pool=_pool_for(conn))

        result = repo.soft_delete_position(
            position_id, (UserStatus.ACTIVE, UserStatus.INACTIVE)
        )

        assert result is None
        assert conn.execute.call_count == 2
        assert conn.execute.call_args_list[1].args[1] == (
            position_id,
            ["active", "inactive"],
        )


class TestUserWrites:
    def _user(self, **overrides) -> User:
        fields = dict(
            id=uuid4(),
            name="Ana",
            email="ana@example.com",
            password_hash="x",
            role=UserRole.EMPLOYEE,
            status=UserStatus.ACTIVE,
            position_id=uuid4(),
        )
        fields.update(overrides)
        return User(**fields)

    def test_live_user_locks_its_position_first(self):
        conn = _conn_returning(None)
        repo = PostgresUserRepository(pool=_pool_for(conn))

        with pytest.raises(ConstraintViolationError):
            repo.create_user(self._user())

        assert "FROM positions" in _sql(conn, 0)
        assert conn.execute.call_count == 1

    def test_user_without_position_skips_the_lock(self):
        conn = _conn_returning(None)
        repo = PostgresUserRepository(pool=_pool_for(conn))

        assert repo.update_user(self._user(position_id=None)) is None

        assert conn.execute.call_count == 1
        assert _sql(conn, 0).lstrip().startswith("UPDATE users")


class TestAttendanceConditionalWrites:
    def test_exit_write_targets_live_rows_without_exit(self):
        conn = _conn_returning(None)
        repo = PostgresAttendanceRepository(pool=_pool_for(conn))

        assert repo.set_exit_time(uuid4(), time(17, 0)) is None

        sql = _sql(conn, 0)
        assert "exit_time IS NULL" in sql
        assert "record_status = ANY(%s)" in sql
        assert conn.execute.call_count == 1

    def test_delete_only_from_live_state(self):
        conn = _conn_returning(None)
        repo = PostgresAttendanceRepository(pool=_pool_for(conn))

        assert repo.soft_delete_attendance(uuid4()) is None
        assert "record_status = ANY(%s)" in _sql(conn, 0)
