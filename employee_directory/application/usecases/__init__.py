"""
Application Use Cases.

Un caso de uso por operación; cada uno expone execute() y devuelve un
resultado tipado (nunca lanza por resultados de policy).
"""

from .employees import (
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    GetEmployeeUseCase,
    ListEmployeesUseCase,
    UpdateEmployeeUseCase,
)

__all__ = [
    "CreateEmployeeUseCase",
    "DeleteEmployeeUseCase",
    "GetEmployeeUseCase",
    "ListEmployeesUseCase",
    "UpdateEmployeeUseCase",
]
