"""
===============================================================================
USE CASE: List Employees
===============================================================================

Business Goal:
    Devolver las fichas visibles para el caller según su rol.

Reglas:
    - HRAdmin: todas las fichas.
    - Manager: su departamento; Managers (apellido, nombre) y luego Employees
      (mismo orden). Otros roles del departamento quedan fuera.
    - Employee: solo su propia ficha.
    - Caller no resoluble => CALLER_NOT_FOUND.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    ListEmployeesUseCase

Collaborators:
    - DirectoryRepository: list_employees / list_employees_by_department / get_employee
    - caller_scope.resolve_caller_scope
    - directory_policy.order_department_listing
===============================================================================
"""

from __future__ import annotations

from ....domain.directory_policy import DirectoryActor, order_department_listing
from ....domain.repositories import DirectoryRepository
from ....identity.users import UserRole
from .caller_scope import DirectoryOperation, caller_not_found, resolve_caller_scope
from .employee_results import EmployeeListResult


class ListEmployeesUseCase:
    """Use Case (Query): listado del directorio con alcance por rol."""

    def __init__(self, repository: DirectoryRepository) -> None:
        self._repository = repository

    def execute(self, actor: DirectoryActor) -> EmployeeListResult:
        scope, error = resolve_caller_scope(
            actor, self._repository, DirectoryOperation.LIST
        )
        if error is not None:
            return EmployeeListResult(error=error)

        if scope.role == UserRole.HR_ADMIN:
            return EmployeeListResult(employees=self._repository.list_employees())

        if scope.role == UserRole.MANAGER:
            staff = self._repository.list_employees_by_department(scope.department)
            return EmployeeListResult(employees=order_department_listing(staff))

        me = self._repository.get_employee(scope.employee_id)
        if me is None:
            # R: la ficha propia desapareció entre la resolución y la lectura
            return EmployeeListResult(error=caller_not_found())
        return EmployeeListResult(employees=[me])
