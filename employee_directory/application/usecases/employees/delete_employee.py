"""
===============================================================================
USE CASE: Delete Employee (+ paired User)
===============================================================================

Business Goal:
    Baja de una ficha y del User que comparte su email (si existe).

Reglas:
    - Ficha inexistente => NOT_FOUND (un segundo Delete del mismo id también).
    - Manager: mismo departamento Y target role=Employee; si no => FORBIDDEN
      (un Manager nunca borra a otro Manager ni a personal de otra área).
    - Employee: nunca borra => FORBIDDEN.
    - La baja exige la version leída: si la ficha cambió entre la decisión
      de policy y la escritura => StaleRecordError => re-chequeo único:
      sigue existiendo => CONFLICT; ya no existe => NOT_FOUND.
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.exceptions import StaleRecordError
from ....crosscutting.logger import logger
from ....domain.directory_policy import DirectoryActor
from ....domain.repositories import DirectoryRepository
from ....identity.users import UserRole
from .caller_scope import DirectoryOperation, resolve_caller_scope
from .employee_results import DeleteEmployeeResult, EmployeeError, EmployeeErrorCode


class DeleteEmployeeUseCase:
    """Use Case (Command): baja de ficha + credenciales."""

    def __init__(self, repository: DirectoryRepository) -> None:
        self._repository = repository

    def execute(self, employee_id: int, actor: DirectoryActor) -> DeleteEmployeeResult:
        scope, error = resolve_caller_scope(
            actor, self._repository, DirectoryOperation.DELETE
        )
        if error is not None:
            return DeleteEmployeeResult(error=error)

        target = self._repository.get_employee(employee_id)
        if target is None:
            return self._not_found()

        if not scope.can_delete(target):
            logger.info(
                "Baja denegada",
                extra={"username": actor.username, "employee_id": employee_id},
            )
            return self._error(
                EmployeeErrorCode.FORBIDDEN,
                "Managers can only delete employees of their own department."
                if scope.role == UserRole.MANAGER
                else "Not allowed to delete employees.",
            )

        try:
            self._repository.delete_employee_with_user(
                employee_id, expected_version=target.version
            )
        except StaleRecordError:
            return self._resolve_stale(employee_id)

        logger.info("Employee eliminado", extra={"employee_id": employee_id})
        return DeleteEmployeeResult(deleted=True)

    def _resolve_stale(self, employee_id: int) -> DeleteEmployeeResult:
        """Re-chequeo único tras un conflicto de concurrencia."""
        if self._repository.get_employee(employee_id) is None:
            return self._not_found()
        logger.warning(
            "Conflicto de concurrencia en baja",
            extra={"employee_id": employee_id},
        )
        return self._error(
            EmployeeErrorCode.CONFLICT,
            "Employee was modified concurrently; reload and retry.",
        )

    @staticmethod
    def _error(code: EmployeeErrorCode, message: str) -> DeleteEmployeeResult:
        return DeleteEmployeeResult(error=EmployeeError(code=code, message=message))

    @classmethod
    def _not_found(cls) -> DeleteEmployeeResult:
        return cls._error(EmployeeErrorCode.NOT_FOUND, "Employee not found.")
