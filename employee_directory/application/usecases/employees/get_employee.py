"""
===============================================================================
USE CASE: Get Employee
===============================================================================

Business Goal:
    Obtener una ficha por id aplicando la policy de lectura.

Reglas:
    - NOT_FOUND se evalúa antes que la regla "solo la propia".
    - HRAdmin / Manager: cualquier ficha existente.
    - Employee: solo si id == id propio; si no => FORBIDDEN.
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.directory_policy import DirectoryActor
from ....domain.repositories import DirectoryRepository
from .caller_scope import DirectoryOperation, resolve_caller_scope
from .employee_results import EmployeeError, EmployeeErrorCode, EmployeeResult


class GetEmployeeUseCase:
    """Use Case (Query): lectura puntual de una ficha."""

    def __init__(self, repository: DirectoryRepository) -> None:
        self._repository = repository

    def execute(self, employee_id: int, actor: DirectoryActor) -> EmployeeResult:
        scope, error = resolve_caller_scope(
            actor, self._repository, DirectoryOperation.GET
        )
        if error is not None:
            return EmployeeResult(error=error)

        employee = self._repository.get_employee(employee_id)
        if employee is None:
            return self._not_found()

        if not scope.can_read(employee):
            logger.info(
                "Lectura denegada",
                extra={"username": actor.username, "employee_id": employee_id},
            )
            return self._forbidden()

        return EmployeeResult(employee=employee)

    @staticmethod
    def _not_found() -> EmployeeResult:
        return EmployeeResult(
            error=EmployeeError(
                code=EmployeeErrorCode.NOT_FOUND, message="Employee not found."
            )
        )

    @staticmethod
    def _forbidden() -> EmployeeResult:
        return EmployeeResult(
            error=EmployeeError(
                code=EmployeeErrorCode.FORBIDDEN,
                message="Employees can only view their own record.",
            )
        )
