"""
===============================================================================
CALLER SCOPE HELPERS (Identity Resolution + Scope Derivation)
===============================================================================

Name:
    Caller Scope Helpers

Business Goal:
    Resolver “quién soy en el directorio” para el principal autenticado y
    derivar UNA vez por llamada el DirectoryScope que luego aplican todas las
    operaciones (List/Get/Create/Update/Delete).

Why (Context / Intención):
    - El principal (username + rol) se vincula con su ficha por email:
      User.username == principal -> Employee.email == User.email.
    - Solo se resuelve cuando el rol lo necesita para la operación:
        * HRAdmin: nunca (alcance total)
        * Manager: List/Create/Update/Delete (departamento propio)
        * Employee: List/Get (id propio)
    - Si la resolución falla => CALLER_NOT_FOUND (distinto de NOT_FOUND).

-------------------------------------------------------------------------------
CRC CARD (Functions-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    caller_scope helpers (module-level functions)

Responsibilities:
    - resolve_caller(actor, repository) -> Employee | None
    - resolve_caller_scope(actor, repository, operation)
        -> (DirectoryScope | None, EmployeeError | None)

Collaborators:
    - DirectoryRepository.find_employee_for_username
    - domain.directory_policy: DirectoryActor, DirectoryScope
    - employee_results: EmployeeError, EmployeeErrorCode
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Tuple

from ....crosscutting.logger import logger
from ....domain.directory_policy import DirectoryActor, DirectoryScope
from ....domain.entities import Employee
from ....domain.repositories import DirectoryRepository
from ....identity.users import UserRole
from .employee_results import EmployeeError, EmployeeErrorCode

_MSG_CALLER_NOT_FOUND: Final[str] = "Caller has no directory record."


class DirectoryOperation(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# Operaciones para las que cada rol necesita su ficha propia.
_RESOLUTION_REQUIRED: Final[dict[UserRole, frozenset[DirectoryOperation]]] = {
    UserRole.HR_ADMIN: frozenset(),
    UserRole.MANAGER: frozenset(
        {
            DirectoryOperation.LIST,
            DirectoryOperation.CREATE,
            DirectoryOperation.UPDATE,
            DirectoryOperation.DELETE,
        }
    ),
    UserRole.EMPLOYEE: frozenset({DirectoryOperation.LIST, DirectoryOperation.GET}),
}


def resolve_caller(
    actor: DirectoryActor, repository: DirectoryRepository
) -> Employee | None:
    """Ficha del principal (join por email), o None si no existe el par."""
    if not actor.username:
        return None
    return repository.find_employee_for_username(actor.username)


def caller_not_found() -> EmployeeError:
    return EmployeeError(
        code=EmployeeErrorCode.CALLER_NOT_FOUND,
        message=_MSG_CALLER_NOT_FOUND,
        resource="Caller",
    )


def resolve_caller_scope(
    actor: DirectoryActor,
    repository: DirectoryRepository,
    operation: DirectoryOperation,
) -> Tuple[DirectoryScope | None, EmployeeError | None]:
    """
    Deriva el alcance del caller para `operation`.

    Retorna (scope, None) en éxito o (None, CALLER_NOT_FOUND).
    """
    if operation not in _RESOLUTION_REQUIRED[actor.role]:
        return DirectoryScope(role=actor.role), None

    me = resolve_caller(actor, repository)
    if me is None:
        logger.warning(
            "Caller sin ficha en el directorio",
            extra={
                "username": actor.username,
                "role": actor.role.value,
                "operation": operation.value,
            },
        )
        return None, caller_not_found()

    return (
        DirectoryScope(role=actor.role, department=me.department, employee_id=me.id),
        None,
    )
