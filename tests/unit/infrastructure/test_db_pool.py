"""
Name: Database Pool Tests

Responsibilities:
  - Test pool lifecycle (init, get, close)
  - Offline unit tests (no real DB)

Notes:
  - Uses mocking for ConnectionPool
  - Tests pool singleton behavior
"""

from unittest.mock import MagicMock, patch

import pytest
from employee_directory.infrastructure.db import (
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
    close_pool,
    get_pool,
    init_pool,
)


@pytest.fixture(autouse=True)
def clean_pool():
    close_pool()
    yield
    close_pool()


@pytest.mark.unit
class TestPoolLifecycle:
    """Test pool initialization and cleanup."""

    def test_init_pool_creates_pool(self):
        with patch("employee_directory.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            result = init_pool("postgresql://test", min_size=2, max_size=10)

            MockPool.assert_called_once()
            kwargs = MockPool.call_args.kwargs
            assert kwargs["min_size"] == 2
            assert kwargs["max_size"] == 10
            assert result is mock_pool
            assert get_pool() is mock_pool

    def test_init_pool_twice_raises_error(self):
        with patch("employee_directory.infrastructure.db.pool.ConnectionPool"):
            init_pool("postgresql://test", min_size=1, max_size=2)

            with pytest.raises(PoolAlreadyInitializedError):
                init_pool("postgresql://test", min_size=1, max_size=2)

    def test_get_pool_without_init_raises_error(self):
        with pytest.raises(PoolNotInitializedError):
            get_pool()

    def test_close_pool_clears_singleton_and_is_idempotent(self):
        with patch("employee_directory.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool
            init_pool("postgresql://test", min_size=1, max_size=2)

            close_pool()
            close_pool()

            mock_pool.close.assert_called_once()
            with pytest.raises(PoolNotInitializedError):
                get_pool()


@pytest.mark.unit
def test_new_connections_get_name_and_statement_timeout():
    from employee_directory.infrastructure.db.pool import _configure_connection

    conn = MagicMock()

    _configure_connection(conn)

    assert conn.execute.call_count == 2
    conn.commit.assert_called_once()
