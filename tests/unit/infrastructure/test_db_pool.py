"""
Name: Database Pool Tests

Responsibilities:
  - Test pool lifecycle (init, get, close, reset)
  - Test statement_timeout configuration per connection
  - Offline unit tests (no real DB)

Notes:
  - Uses mocking for ConnectionPool
  - Tests pool singleton behavior
"""

from unittest.mock import MagicMock, patch

import pytest

from hr_api.infrastructure.db.errors import (
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)
from hr_api.infrastructure.db.pool import (
    _configure_connection,
    close_pool,
    get_pool,
    init_pool,
    reset_pool,
)

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _clean_pool():
    reset_pool()
    yield
    reset_pool()


class TestPoolLifecycle:
    """Test pool initialization and cleanup."""

    def test_init_pool_creates_pool(self):
        with patch("hr_api.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            result = init_pool("postgresql://test", min_size=2, max_size=10)

            MockPool.assert_called_once()
            kwargs = MockPool.call_args.kwargs
            assert kwargs["conninfo"] == "postgresql://test"
            assert kwargs["min_size"] == 2
            assert kwargs["max_size"] == 10
            assert result is mock_pool
            assert get_pool() is mock_pool

    def test_init_pool_twice_raises_error(self):
        with patch("hr_api.infrastructure.db.pool.ConnectionPool"):
            init_pool("postgresql://test", min_size=1, max_size=2)

            with pytest.raises(PoolAlreadyInitializedError):
                init_pool("postgresql://test", min_size=1, max_size=2)

    def test_get_pool_without_init_raises_error(self):
        with pytest.raises(PoolNotInitializedError):
            get_pool()

    def test_close_pool_clears_singleton(self):
        with patch("hr_api.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool
            init_pool("postgresql://test", min_size=1, max_size=2)

            close_pool()

            mock_pool.close.assert_called_once()
            with pytest.raises(PoolNotInitializedError):
                get_pool()

    def test_close_pool_is_idempotent(self):
        close_pool()
        close_pool()

    def test_reset_pool_survives_close_failure(self):
        with patch("hr_api.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            mock_pool.close.side_effect = RuntimeError("boom")
            MockPool.return_value = mock_pool
            init_pool("postgresql://test", min_size=1, max_size=2)

            reset_pool()

            with pytest.raises(PoolNotInitializedError):
                get_pool()


class TestConfigureConnection:
    def test_sets_statement_timeout(self, monkeypatch):
        monkeypatch.setenv("DB_STATEMENT_TIMEOUT_MS", "1500")
        conn = MagicMock()

        _configure_connection(conn)

        conn.execute.assert_called_once_with("SET statement_timeout = 1500")
        conn.commit.assert_called_once()

    def test_zero_disables_timeout(self, monkeypatch):
        monkeypatch.setenv("DB_STATEMENT_TIMEOUT_MS", "0")
        conn = MagicMock()

        _configure_connection(conn)

        conn.execute.assert_not_called()
