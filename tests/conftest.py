"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test -> in-memory store, no pool)
  - Provide an in-memory directory with seeded Employee/User pairs
  - Provide a fast fake PasswordHasher

Collaborators:
  - pytest: Test framework
  - factories: test data builders (tests/factories.py)
  - employee_directory.infrastructure.repositories.InMemoryDirectoryRepository

Notes:
  - Fixtures are auto-discovered by pytest
  - Use @pytest.fixture(scope="function") for per-test isolation
"""

import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("JWT_SECRET", "test-secret")

TESTS_DIR = Path(__file__).resolve().parent
ROOT_DIR = TESTS_DIR.parent
for _path in (ROOT_DIR, TESTS_DIR):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from employee_directory.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from employee_directory.domain.entities import Employee  # noqa: E402
from employee_directory.identity.users import UserRole  # noqa: E402
from employee_directory.infrastructure.repositories import (  # noqa: E402
    InMemoryDirectoryRepository,
)
from factories import FakePasswordHasher, add_pair  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (require PostgreSQL)"
    )


@pytest.fixture
def password_hasher() -> FakePasswordHasher:
    return FakePasswordHasher()


@pytest.fixture
def repository() -> InMemoryDirectoryRepository:
    return InMemoryDirectoryRepository()


@pytest.fixture
def directory(repository: InMemoryDirectoryRepository) -> dict[str, Employee]:
    """
    R: Seeded directory.

    - hr: HRAdmin (HR)
    - eng_mgr / eng_mgr2: Managers (Engineering)
    - alice / bob: Employees (Engineering)
    - sales_mgr / carol: Manager + Employee (Sales)
    """
    return {
        "hr": add_pair(
            repository, "Hana", "Reyes", department="HR", role=UserRole.HR_ADMIN
        ),
        "eng_mgr": add_pair(repository, "Marta", "Zamora", role=UserRole.MANAGER),
        "eng_mgr2": add_pair(repository, "Diego", "Alvarez", role=UserRole.MANAGER),
        "alice": add_pair(repository, "Alice", "Smith"),
        "bob": add_pair(repository, "Bob", "Jones"),
        "sales_mgr": add_pair(
            repository, "Sergio", "Lopez", department="Sales", role=UserRole.MANAGER
        ),
        "carol": add_pair(repository, "Carol", "White", department="Sales"),
    }
