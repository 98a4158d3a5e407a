"""
Unit tests for domain/directory_policy.py.

Validates:
  - can_read: HRAdmin/Manager read all; Employee only own record
  - can_write: Manager bounded to Employee role in own department
  - can_delete: Manager never deletes Managers or cross-department staff;
    Employee never deletes
  - order_department_listing: Managers first, then Employees, by name
"""

import pytest
from employee_directory.domain.directory_policy import (
    DirectoryScope,
    order_department_listing,
)
from employee_directory.domain.entities import Employee, EmployeeDraft
from employee_directory.identity.users import UserRole
from factories import make_employee

pytestmark = pytest.mark.unit


def _stored(employee: Employee, employee_id: int) -> Employee:
    return Employee(
        id=employee_id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        email=employee.email,
        job_title=employee.job_title,
        salary=employee.salary,
        department=employee.department,
        role=employee.role,
    )


def _draft(*, department: str, role: UserRole) -> EmployeeDraft:
    e = make_employee("New", "Hire", department=department, role=role)
    return EmployeeDraft(
        first_name=e.first_name,
        last_name=e.last_name,
        email=e.email,
        job_title=e.job_title,
        salary=e.salary,
        department=e.department,
        role=e.role,
    )


# =============================================================================
# can_read
# =============================================================================


@pytest.mark.parametrize("role", [UserRole.HR_ADMIN, UserRole.MANAGER])
def test_hr_admin_and_manager_read_any_record(role):
    scope = DirectoryScope(role=role, department="Engineering", employee_id=1)
    other = _stored(make_employee("X", "Y", department="Sales"), 99)

    assert scope.can_read(other) is True


def test_employee_reads_only_own_record():
    scope = DirectoryScope(role=UserRole.EMPLOYEE, employee_id=7)

    assert scope.can_read(_stored(make_employee("Me", "Self"), 7)) is True
    assert scope.can_read(_stored(make_employee("Other", "One"), 8)) is False


def test_employee_without_resolved_record_reads_nothing():
    scope = DirectoryScope(role=UserRole.EMPLOYEE)

    assert scope.can_read(_stored(make_employee("Any", "One"), 1)) is False


# =============================================================================
# can_write (create / update target state)
# =============================================================================


def test_manager_writes_employee_in_own_department():
    scope = DirectoryScope(role=UserRole.MANAGER, department="Engineering")

    assert scope.can_write(_draft(department="Engineering", role=UserRole.EMPLOYEE))


@pytest.mark.parametrize(
    "department,role",
    [
        ("Engineering", UserRole.MANAGER),
        ("Engineering", UserRole.HR_ADMIN),
        ("Sales", UserRole.EMPLOYEE),
    ],
)
def test_manager_cannot_write_outside_jurisdiction(department, role):
    scope = DirectoryScope(role=UserRole.MANAGER, department="Engineering")

    assert scope.can_write(_draft(department=department, role=role)) is False


def test_manager_without_department_cannot_write():
    scope = DirectoryScope(role=UserRole.MANAGER, department=None)

    assert scope.can_write(_draft(department="Engineering", role=UserRole.EMPLOYEE)) is False


def test_hr_admin_writes_any_target_state():
    scope = DirectoryScope(role=UserRole.HR_ADMIN)

    assert scope.can_write(_draft(department="Sales", role=UserRole.MANAGER))


# =============================================================================
# can_delete
# =============================================================================


def test_manager_deletes_employee_in_own_department():
    scope = DirectoryScope(role=UserRole.MANAGER, department="Engineering")
    target = _stored(make_employee("Bob", "Jones"), 4)

    assert scope.can_delete(target) is True


def test_manager_cannot_delete_peer_manager():
    scope = DirectoryScope(role=UserRole.MANAGER, department="Engineering")
    target = _stored(make_employee("Peer", "Boss", role=UserRole.MANAGER), 5)

    assert scope.can_delete(target) is False


def test_manager_cannot_delete_cross_department_employee():
    scope = DirectoryScope(role=UserRole.MANAGER, department="Engineering")
    target = _stored(make_employee("Carol", "White", department="Sales"), 6)

    assert scope.can_delete(target) is False


def test_hr_admin_deletes_anyone():
    scope = DirectoryScope(role=UserRole.HR_ADMIN)
    target = _stored(make_employee("Peer", "Boss", role=UserRole.MANAGER), 5)

    assert scope.can_delete(target) is True


def test_employee_role_deletes_nobody():
    scope = DirectoryScope(role=UserRole.EMPLOYEE, employee_id=4)
    target = _stored(make_employee("Hana", "Reyes", role=UserRole.HR_ADMIN), 1)

    assert scope.can_delete(target) is False
    assert scope.can_delete(_stored(make_employee("Alice", "Smith"), 4)) is False


def test_employee_role_write_is_left_to_the_http_gate():
    scope = DirectoryScope(role=UserRole.EMPLOYEE, employee_id=4)

    assert scope.can_write(_draft(department="Engineering", role=UserRole.MANAGER))


# =============================================================================
# order_department_listing
# =============================================================================


def test_department_listing_puts_managers_first_sorted_by_last_then_first():
    staff = [
        _stored(make_employee("Zoe", "Adams"), 1),
        _stored(make_employee("Marta", "Zamora", role=UserRole.MANAGER), 2),
        _stored(make_employee("Anna", "Adams"), 3),
        _stored(make_employee("Diego", "Alvarez", role=UserRole.MANAGER), 4),
        _stored(make_employee("Hana", "Reyes", role=UserRole.HR_ADMIN), 5),
    ]

    ordered = order_department_listing(staff)

    assert [e.id for e in ordered] == [4, 2, 3, 1]


def test_department_listing_of_empty_input_is_empty():
    assert order_department_listing([]) == []
