"""
===============================================================================
USE CASE: Update Employee (+ User sync + claims refresh)
===============================================================================

Name:
    Update Employee Use Case

Business Goal:
    Editar todos los campos mutables de una ficha y mantener su User
    emparejado en espejo (rol, username derivado, email), en una única
    escritura atómica con control de concurrencia optimista.

Reglas:
    - Forma inválida => VALIDATION_ERROR.
    - Ficha inexistente => NOT_FOUND.
    - Manager: el estado ENTRANTE debe ser role=Employee y department=propio
      (no puede sacar a alguien de su jurisdicción) => si no FORBIDDEN.
    - El User se busca por el email PREVIO de la ficha; si no existe se
      continúa sin error.
    - Si el username previo del User == username de la sesión del caller,
      se devuelve ClaimsRefresh(username nuevo, rol nuevo).
    - StaleRecordError => re-chequeo único: sigue existiendo => CONFLICT;
      ya no existe => NOT_FOUND.
    - Duplicados (email / username) => CONFLICT.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    UpdateEmployeeUseCase

Collaborators:
    - DirectoryRepository: get_employee, get_user_by_email,
      update_employee_with_user
    - caller_scope.resolve_caller_scope
    - employee_results: UpdateEmployeeResult, ClaimsRefresh
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.exceptions import DuplicateRecordError, StaleRecordError
from ....crosscutting.logger import logger
from ....domain.directory_policy import DirectoryActor
from ....domain.repositories import DirectoryRepository
from .caller_scope import DirectoryOperation, resolve_caller_scope
from .employee_input import EmployeeInput, to_draft
from .employee_results import (
    ClaimsRefresh,
    EmployeeError,
    EmployeeErrorCode,
    UpdateEmployeeResult,
)


class UpdateEmployeeUseCase:
    """Use Case (Command): edición de ficha con sincronización del User."""

    def __init__(self, repository: DirectoryRepository) -> None:
        self._repository = repository

    def execute(
        self, employee_id: int, data: EmployeeInput, actor: DirectoryActor
    ) -> UpdateEmployeeResult:
        draft, message = to_draft(data)
        if draft is None:
            return self._error(EmployeeErrorCode.VALIDATION_ERROR, message)

        scope, error = resolve_caller_scope(
            actor, self._repository, DirectoryOperation.UPDATE
        )
        if error is not None:
            return UpdateEmployeeResult(error=error)

        current = self._repository.get_employee(employee_id)
        if current is None:
            return self._not_found()

        if not scope.can_write(draft):
            logger.info(
                "Edición denegada",
                extra={
                    "username": actor.username,
                    "employee_id": employee_id,
                    "department": draft.department,
                    "target_role": draft.role.value,
                },
            )
            return self._error(
                EmployeeErrorCode.FORBIDDEN,
                "Managers can only keep employees of their own department.",
            )

        updated = current.with_changes(draft)

        # R: emparejado por el email previo; ausencia tolerada
        paired = self._repository.get_user_by_email(current.email)
        synced = (
            paired.mirrored(
                username=updated.derived_username(),
                email=updated.email,
                role=updated.role,
            )
            if paired is not None
            else None
        )

        try:
            saved, saved_user = self._repository.update_employee_with_user(
                updated, expected_version=current.version, user=synced
            )
        except StaleRecordError:
            return self._resolve_stale(employee_id)
        except DuplicateRecordError as exc:
            return self._error(EmployeeErrorCode.CONFLICT, exc.message)

        claims_refresh = None
        if (
            paired is not None
            and saved_user is not None
            and paired.username == actor.username
        ):
            claims_refresh = ClaimsRefresh(
                username=saved_user.username, role=saved_user.role
            )

        logger.info(
            "Employee actualizado",
            extra={
                "employee_id": saved.id,
                "version": saved.version,
                "user_synced": saved_user is not None,
                "claims_refresh": claims_refresh is not None,
            },
        )
        return UpdateEmployeeResult(
            employee=saved, user=saved_user, claims_refresh=claims_refresh
        )

    def _resolve_stale(self, employee_id: int) -> UpdateEmployeeResult:
        """Re-chequeo único tras un conflicto de concurrencia."""
        if self._repository.get_employee(employee_id) is None:
            return self._not_found()
        logger.warning(
            "Conflicto de concurrencia en edición",
            extra={"employee_id": employee_id},
        )
        return self._error(
            EmployeeErrorCode.CONFLICT,
            "Employee was modified concurrently; reload and retry.",
        )

    @staticmethod
    def _error(code: EmployeeErrorCode, message: str) -> UpdateEmployeeResult:
        return UpdateEmployeeResult(error=EmployeeError(code=code, message=message))

    @classmethod
    def _not_found(cls) -> UpdateEmployeeResult:
        return cls._error(EmployeeErrorCode.NOT_FOUND, "Employee not found.")
