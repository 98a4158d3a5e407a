"""
Name: PostgresDirectoryRepository offline tests

Responsibilities:
  - Row mapping (tuples -> Employee/User)
  - Optimistic concurrency: UPDATE affecting no row -> StaleRecordError
  - Driver failures wrapped into DatabaseError

Notes:
  - ConnectionPool is mocked; SQL against a real server lives in
    tests/integration.
"""

from dataclasses import replace
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from employee_directory.crosscutting.exceptions import DatabaseError, StaleRecordError
from employee_directory.identity.users import UserRole
from employee_directory.infrastructure.repositories import PostgresDirectoryRepository
from factories import make_employee

pytestmark = pytest.mark.unit

_EMPLOYEE_ROW = (
    7,
    "Ada",
    "Lovelace",
    "ada@corp.test",
    "Engineer",
    Decimal("1000.00"),
    "Engineering",
    "Manager",
    3,
)


def _repo_with_conn():
    conn = MagicMock()
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    return PostgresDirectoryRepository(pool=pool), conn


def test_get_employee_maps_row():
    repo, conn = _repo_with_conn()
    conn.execute.return_value.fetchone.return_value = _EMPLOYEE_ROW

    employee = repo.get_employee(7)

    assert employee.id == 7
    assert employee.role == UserRole.MANAGER
    assert employee.version == 3
    assert employee.salary == Decimal("1000.00")


def test_get_employee_missing_returns_none():
    repo, conn = _repo_with_conn()
    conn.execute.return_value.fetchone.return_value = None

    assert repo.get_employee(404) is None


def test_update_with_no_matching_row_is_stale():
    repo, conn = _repo_with_conn()
    conn.execute.return_value.fetchone.return_value = None
    employee = replace(make_employee("Ada", "Lovelace"), id=7)

    with pytest.raises(StaleRecordError):
        repo.update_employee_with_user(employee, expected_version=3, user=None)


def test_driver_failure_becomes_database_error():
    repo, conn = _repo_with_conn()
    conn.execute.side_effect = RuntimeError("connection reset")

    with pytest.raises(DatabaseError) as exc_info:
        repo.list_employees()

    assert "connection reset" in exc_info.value.message


def test_uninitialized_global_pool_becomes_database_error():
    with pytest.raises(DatabaseError):
        PostgresDirectoryRepository().ping()


def test_delete_with_no_matching_row_is_stale():
    repo, conn = _repo_with_conn()
    conn.execute.return_value.fetchone.return_value = None

    with pytest.raises(StaleRecordError):
        repo.delete_employee_with_user(7, expected_version=3)

    assert conn.execute.call_count == 1


def test_delete_removes_user_by_returned_email():
    repo, conn = _repo_with_conn()
    conn.execute.return_value.fetchone.return_value = ("ada.new@corp.test",)

    repo.delete_employee_with_user(7, expected_version=3)

    employee_sql, employee_params = conn.execute.call_args_list[0].args
    assert "version = %s" in employee_sql
    assert employee_params == (7, 3)
    assert conn.execute.call_args_list[1].args[1] == ("ada.new@corp.test",)
