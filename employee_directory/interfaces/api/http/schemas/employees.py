"""
===============================================================================
TARJETA CRC — schemas/employees.py
===============================================================================

Módulo:
    Schemas HTTP para el directorio de empleados

Responsabilidades:
    - Definir DTOs de request/response para /v1/employees.
    - Validar forma (campos requeridos, salary >= 0, rol del catálogo).
    - Mantener contratos estables y fáciles de versionar.

Colaboradores:
    - identity.users.UserRole
===============================================================================
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from employee_directory.identity.users import UserRole
from pydantic import BaseModel, Field, field_validator

_Name = Annotated[str, Field(min_length=1, max_length=100)]


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class EmployeeFieldsReq(BaseModel):
    """Campos editables de una ficha."""

    first_name: _Name
    last_name: _Name
    email: str = Field(..., min_length=3, max_length=320)
    job_title: str = Field(..., min_length=1, max_length=150)
    salary: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    department: str = Field(..., min_length=1, max_length=100)
    role: UserRole = Field(default=UserRole.EMPLOYEE)

    @field_validator("first_name", "last_name", "job_title", "department")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        cleaned = v.strip()
        if "@" not in cleaned:
            raise ValueError("email inválido")
        return cleaned


class CreateEmployeeReq(EmployeeFieldsReq):
    """Request para alta (incluye password inicial del login)."""

    password: str = Field(..., min_length=1, max_length=512)


class UpdateEmployeeReq(EmployeeFieldsReq):
    """Request para edición (reemplazo completo de campos editables)."""


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class EmployeeRes(BaseModel):
    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    job_title: str
    salary: Decimal
    department: str
    role: UserRole
    version: int


class EmployeesListRes(BaseModel):
    employees: list[EmployeeRes]


class SyncedUserRes(BaseModel):
    """User emparejado tras la sincronización (sin credenciales)."""

    username: str
    email: str
    role: UserRole


class UpdateEmployeeRes(BaseModel):
    employee: EmployeeRes
    user: SyncedUserRes | None = None
    session_refreshed: bool = False
    # R: token nuevo también en el body para clientes Bearer (además de la cookie)
    access_token: str | None = None
    token_type: str | None = None
    expires_in: int | None = None
