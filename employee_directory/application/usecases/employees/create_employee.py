"""
===============================================================================
USE CASE: Create Employee (+ paired User)
===============================================================================

Name:
    Create Employee Use Case

Business Goal:
    Dar de alta una ficha y su User emparejado (username "First_Last",
    email/rol espejados, password hasheado) en una única escritura atómica.

Reglas:
    - Forma inválida => VALIDATION_ERROR (password requerido).
    - Manager: el alta debe ser role=Employee y department=propio; si no
      => FORBIDDEN.
    - Email de ficha, email de User o username duplicados => CONFLICT.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateEmployeeUseCase

Responsibilities:
    - Validar input (employee_input.to_draft).
    - Resolver alcance del caller y aplicar can_write sobre el estado entrante.
    - Derivar username, hashear password y persistir el par.

Collaborators:
    - DirectoryRepository.create_employee_with_user
    - PasswordHasher.hash
    - caller_scope.resolve_caller_scope
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.exceptions import DuplicateRecordError
from ....crosscutting.logger import logger
from ....domain.directory_policy import DirectoryActor
from ....domain.entities import Employee
from ....domain.repositories import DirectoryRepository
from ....domain.services import PasswordHasher
from ....identity.users import User
from .caller_scope import DirectoryOperation, resolve_caller_scope
from .employee_input import EmployeeInput, to_draft
from .employee_results import EmployeeError, EmployeeErrorCode, EmployeeResult


class CreateEmployeeUseCase:
    """Use Case (Command): alta de ficha + credenciales."""

    def __init__(
        self, repository: DirectoryRepository, password_hasher: PasswordHasher
    ) -> None:
        self._repository = repository
        self._hasher = password_hasher

    def execute(self, data: EmployeeInput, actor: DirectoryActor) -> EmployeeResult:
        draft, message = to_draft(data)
        if draft is None:
            return self._validation_error(message)
        if not data.password:
            return self._validation_error("password is required.")

        scope, error = resolve_caller_scope(
            actor, self._repository, DirectoryOperation.CREATE
        )
        if error is not None:
            return EmployeeResult(error=error)

        if not scope.can_write(draft):
            logger.info(
                "Alta denegada",
                extra={
                    "username": actor.username,
                    "department": draft.department,
                    "target_role": draft.role.value,
                },
            )
            return self._forbidden()

        employee = Employee.from_draft(draft)
        user = User(
            id=None,
            username=draft.derived_username(),
            email=draft.email,
            password_hash=self._hasher.hash(data.password),
            role=draft.role,
        )

        try:
            created, created_user = self._repository.create_employee_with_user(
                employee, user
            )
        except DuplicateRecordError as exc:
            return self._conflict(exc.message)

        logger.info(
            "Employee creado",
            extra={
                "employee_id": created.id,
                "username": created_user.username,
                "role": created.role.value,
            },
        )
        return EmployeeResult(employee=created)

    @staticmethod
    def _validation_error(message: str) -> EmployeeResult:
        return EmployeeResult(
            error=EmployeeError(
                code=EmployeeErrorCode.VALIDATION_ERROR, message=message
            )
        )

    @staticmethod
    def _forbidden() -> EmployeeResult:
        return EmployeeResult(
            error=EmployeeError(
                code=EmployeeErrorCode.FORBIDDEN,
                message="Managers can only create employees in their own department.",
            )
        )

    @staticmethod
    def _conflict(message: str) -> EmployeeResult:
        return EmployeeResult(
            error=EmployeeError(code=EmployeeErrorCode.CONFLICT, message=message)
        )
