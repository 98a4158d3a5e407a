"""
Unit tests for the read side of the directory (List / Get) and caller
resolution.

Validates:
  - HRAdmin lists everything; Manager lists own department ordered
    (Managers then Employees); Employee lists only self
  - Get: NOT_FOUND before the self-only rule; Employees read only self
  - CALLER_NOT_FOUND when a role that needs its own record has none
"""

import pytest
from employee_directory.application.usecases.employees import (
    DirectoryOperation,
    EmployeeErrorCode,
    GetEmployeeUseCase,
    ListEmployeesUseCase,
    resolve_caller,
    resolve_caller_scope,
)
from employee_directory.domain.directory_policy import DirectoryActor
from employee_directory.identity.users import UserRole
from factories import actor_for, add_login_only, add_pair

pytestmark = pytest.mark.unit


# =============================================================================
# Caller resolution
# =============================================================================


def test_resolve_caller_joins_user_to_employee_by_email(repository, directory):
    me = resolve_caller(actor_for(directory["alice"]), repository)

    assert me == directory["alice"]


def test_resolve_caller_returns_none_for_login_without_record(repository):
    user = add_login_only(repository, "Ghost", "User", UserRole.MANAGER)

    assert resolve_caller(DirectoryActor(user.username, user.role), repository) is None


def test_manager_scope_carries_department(repository, directory):
    scope, error = resolve_caller_scope(
        actor_for(directory["sales_mgr"]), repository, DirectoryOperation.DELETE
    )

    assert error is None
    assert scope.department == "Sales"


def test_hr_admin_never_needs_own_record(repository):
    actor = DirectoryActor(username="Nobody_Here", role=UserRole.HR_ADMIN)

    for operation in DirectoryOperation:
        scope, error = resolve_caller_scope(actor, repository, operation)
        assert error is None
        assert scope.role == UserRole.HR_ADMIN


# =============================================================================
# List
# =============================================================================


def test_hr_admin_lists_whole_directory(repository, directory):
    result = ListEmployeesUseCase(repository).execute(actor_for(directory["hr"]))

    assert result.error is None
    assert [e.id for e in result.employees] == sorted(
        e.id for e in directory.values()
    )


def test_manager_lists_own_department_managers_first(repository, directory):
    result = ListEmployeesUseCase(repository).execute(actor_for(directory["eng_mgr"]))

    assert result.error is None
    assert [e.full_name for e in result.employees] == [
        "Diego Alvarez",
        "Marta Zamora",
        "Bob Jones",
        "Alice Smith",
    ]


def test_manager_listing_excludes_hr_admins_in_same_department(repository, directory):
    add_pair(repository, "Helen", "Admin", role=UserRole.HR_ADMIN)

    result = ListEmployeesUseCase(repository).execute(actor_for(directory["eng_mgr"]))

    assert "Helen Admin" not in [e.full_name for e in result.employees]


def test_employee_lists_only_self(repository, directory):
    result = ListEmployeesUseCase(repository).execute(actor_for(directory["alice"]))

    assert result.error is None
    assert result.employees == [directory["alice"]]


@pytest.mark.parametrize("role", [UserRole.MANAGER, UserRole.EMPLOYEE])
def test_list_without_own_record_is_caller_not_found(repository, role):
    user = add_login_only(repository, "Ghost", "User", role)

    result = ListEmployeesUseCase(repository).execute(
        DirectoryActor(user.username, user.role)
    )

    assert result.employees == []
    assert result.error.code == EmployeeErrorCode.CALLER_NOT_FOUND
    assert result.error.resource == "Caller"


def test_policy_is_recomputed_on_every_call(repository, directory):
    use_case = ListEmployeesUseCase(repository)
    actor = actor_for(directory["eng_mgr"])

    first = use_case.execute(actor)
    add_pair(repository, "Zed", "Newcomer")
    second = use_case.execute(actor)

    assert len(second.employees) == len(first.employees) + 1


# =============================================================================
# Get
# =============================================================================


def test_employee_gets_own_record(repository, directory):
    alice = directory["alice"]

    result = GetEmployeeUseCase(repository).execute(alice.id, actor_for(alice))

    assert result.error is None
    assert result.employee == alice


def test_employee_cannot_get_colleague(repository, directory):
    result = GetEmployeeUseCase(repository).execute(
        directory["bob"].id, actor_for(directory["alice"])
    )

    assert result.employee is None
    assert result.error.code == EmployeeErrorCode.FORBIDDEN


def test_missing_id_is_not_found_even_for_employee(repository, directory):
    result = GetEmployeeUseCase(repository).execute(999, actor_for(directory["alice"]))

    assert result.error.code == EmployeeErrorCode.NOT_FOUND


@pytest.mark.parametrize("who", ["hr", "eng_mgr"])
def test_hr_admin_and_manager_get_any_record(repository, directory, who):
    result = GetEmployeeUseCase(repository).execute(
        directory["carol"].id, actor_for(directory[who])
    )

    assert result.employee == directory["carol"]


def test_manager_get_does_not_require_own_record(repository, directory):
    user = add_login_only(repository, "Ghost", "Boss", UserRole.MANAGER)

    result = GetEmployeeUseCase(repository).execute(
        directory["carol"].id, DirectoryActor(user.username, user.role)
    )

    assert result.error is None


def test_employee_get_without_own_record_is_caller_not_found(repository, directory):
    user = add_login_only(repository, "Ghost", "User", UserRole.EMPLOYEE)

    result = GetEmployeeUseCase(repository).execute(
        directory["alice"].id, DirectoryActor(user.username, user.role)
    )

    assert result.error.code == EmployeeErrorCode.CALLER_NOT_FOUND
