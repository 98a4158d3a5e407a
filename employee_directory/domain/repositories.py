"""
CRC — domain/repositories.py

Name
- Directory Repository Interface (Protocol)

Responsibilities
- Define the persistence contract for employees and their paired login users.
- Keep the application/domain independent from infrastructure (PostgreSQL, in-memory).
- Expose the composite writes that keep an Employee and its User in step.

Collaborators
- domain.entities: Employee
- identity.users: User
- infrastructure.repositories: postgres / in_memory implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Composite writes are atomic: both records change or neither does.

Notes
- Failures surface as crosscutting.exceptions (DatabaseError, StaleRecordError,
  DuplicateRecordError); "not found" is a None / False return, never an error.
"""

from typing import List, Optional, Protocol, Tuple

from ..identity.users import User
from .entities import Employee


class DirectoryRepository(Protocol):
    """
    R: Interface for the employee directory store.

    Implementations must provide:
      - Employee lookups (by id, by email, scan, by department)
      - User lookups (by username, by email)
      - The username -> employee join used to resolve the caller
      - Atomic Employee+User create / update / delete
    """

    def get_employee(self, employee_id: int) -> Optional[Employee]:
        """R: Fetch an employee by id."""
        ...

    def get_employee_by_email(self, email: str) -> Optional[Employee]:
        """R: Fetch an employee by its (unique) email."""
        ...

    def list_employees(self) -> List[Employee]:
        """R: All employees, ordered by id."""
        ...

    def list_employees_by_department(self, department: str) -> List[Employee]:
        """R: Employees whose department equals the given label."""
        ...

    def get_user_by_username(self, username: str) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def find_employee_for_username(self, username: str) -> Optional[Employee]:
        """
        R: Employee paired (by email) with the User holding this username.

        None when the user does not exist or has no matching employee.
        """
        ...

    def create_employee_with_user(
        self, employee: Employee, user: User
    ) -> Tuple[Employee, User]:
        """
        R: Insert the employee (assigning id and version=1), then the user.

        Raises DuplicateRecordError on any uniqueness violation.
        """
        ...

    def update_employee_with_user(
        self,
        employee: Employee,
        *,
        expected_version: int,
        user: Optional[User],
    ) -> Tuple[Employee, Optional[User]]:
        """
        R: Write the employee if its stored version matches, bump the version
        and write the given user in the same transaction.

        Raises StaleRecordError on version mismatch or vanished row.
        """
        ...

    def delete_employee_with_user(self, employee_id: int, *, expected_version: int) -> None:
        """
        R: Delete the employee if its stored version matches, and the user
        sharing the email of the deleted row, in the same transaction.

        Raises StaleRecordError on version mismatch or vanished row. A missing
        user is tolerated.
        """
        ...

    def ping(self) -> bool:
        """R: Health check."""
        ...
