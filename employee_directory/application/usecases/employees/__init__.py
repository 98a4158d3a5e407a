"""
===============================================================================
EMPLOYEE USE CASES PACKAGE (Public API / Exports)
===============================================================================

Responsibilities:
    - Re-exportar los casos de uso del directorio, sus inputs y resultados.
    - Re-exportar helpers de resolución del caller.
===============================================================================
"""

from __future__ import annotations

from .caller_scope import (
    DirectoryOperation,
    resolve_caller,
    resolve_caller_scope,
)
from .create_employee import CreateEmployeeUseCase
from .delete_employee import DeleteEmployeeUseCase
from .employee_input import EmployeeInput, to_draft
from .employee_results import (
    ClaimsRefresh,
    DeleteEmployeeResult,
    EmployeeError,
    EmployeeErrorCode,
    EmployeeListResult,
    EmployeeResult,
    UpdateEmployeeResult,
)
from .get_employee import GetEmployeeUseCase
from .list_employees import ListEmployeesUseCase
from .update_employee import UpdateEmployeeUseCase

__all__ = [
    # Use cases
    "CreateEmployeeUseCase",
    "DeleteEmployeeUseCase",
    "GetEmployeeUseCase",
    "ListEmployeesUseCase",
    "UpdateEmployeeUseCase",
    # Inputs / results
    "EmployeeInput",
    "to_draft",
    "ClaimsRefresh",
    "DeleteEmployeeResult",
    "EmployeeError",
    "EmployeeErrorCode",
    "EmployeeListResult",
    "EmployeeResult",
    "UpdateEmployeeResult",
    # Caller resolution
    "DirectoryOperation",
    "resolve_caller",
    "resolve_caller_scope",
]
