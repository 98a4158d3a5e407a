"""
Name: Test Data Factories

Responsibilities:
  - Build Employee entities with sensible defaults
  - Store Employee/User pairs in an in-memory directory
  - Provide a deterministic PasswordHasher fake
"""

from decimal import Decimal

from employee_directory.domain.directory_policy import DirectoryActor
from employee_directory.domain.entities import Employee
from employee_directory.identity.users import User, UserRole
from employee_directory.infrastructure.repositories import (
    InMemoryDirectoryRepository,
)


class FakePasswordHasher:
    """R: Deterministic hasher (Argon2 is slow and not the subject here)."""

    def hash(self, plaintext: str) -> str:
        return f"hashed:{plaintext}"

    def verify(self, password_hash: str, plaintext: str) -> bool:
        return password_hash == f"hashed:{plaintext}"


def make_employee(
    first_name: str,
    last_name: str,
    *,
    department: str = "Engineering",
    role: UserRole = UserRole.EMPLOYEE,
    email: str | None = None,
    job_title: str = "Engineer",
    salary: str = "50000",
) -> Employee:
    return Employee(
        id=None,
        first_name=first_name,
        last_name=last_name,
        email=email or f"{first_name.lower()}.{last_name.lower()}@corp.test",
        job_title=job_title,
        salary=Decimal(salary),
        department=department,
        role=role,
    )


def make_user(employee: Employee, *, password: str = "secret") -> User:
    return User(
        id=None,
        username=employee.derived_username(),
        email=employee.email,
        password_hash=f"hashed:{password}",
        role=employee.role,
    )


def add_pair(
    repository: InMemoryDirectoryRepository,
    first_name: str,
    last_name: str,
    *,
    password: str = "secret",
    **employee_fields,
) -> Employee:
    """R: Stores an Employee and its paired User; returns the stored Employee."""
    employee = make_employee(first_name, last_name, **employee_fields)
    created, _ = repository.create_employee_with_user(
        employee, make_user(employee, password=password)
    )
    return created


def add_orphan(
    repository: InMemoryDirectoryRepository,
    first_name: str,
    last_name: str,
    **employee_fields,
) -> Employee:
    """R: Stores an Employee whose User was removed out of band."""
    created = add_pair(repository, first_name, last_name, **employee_fields)
    user = repository.get_user_by_email(created.email)
    del repository._users[user.id]
    return created


def add_login_only(
    repository: InMemoryDirectoryRepository,
    first_name: str,
    last_name: str,
    role: UserRole,
    *,
    email: str = "ghost@corp.test",
) -> User:
    """R: Stores a User with no matching Employee (caller without record)."""
    employee = make_employee(first_name, last_name, role=role, email=email)
    created_employee, created_user = repository.create_employee_with_user(
        employee, make_user(employee)
    )
    del repository._employees[created_employee.id]
    return created_user


def actor_for(employee: Employee) -> DirectoryActor:
    return DirectoryActor(username=employee.derived_username(), role=employee.role)
