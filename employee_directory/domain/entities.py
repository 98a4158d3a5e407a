"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Employee, EmployeeDraft)

Responsabilidades:
    - Definir la ficha de personal del directorio (sin infraestructura).
    - Derivar el username del login a partir del nombre.
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - identity.users: UserRole (rol compartido con el User emparejado).
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases/employees: construyen/consumen estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - Inmutables: una edición produce una nueva instancia (replace).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal

from ..identity.users import UserRole


def derive_username(first_name: str, last_name: str) -> str:
    """Username del login: "First_Last"."""
    return f"{first_name}_{last_name}"


@dataclass(frozen=True, slots=True)
class EmployeeDraft:
    """Campos editables de una ficha (input de Create/Update)."""

    first_name: str
    last_name: str
    email: str
    job_title: str
    salary: Decimal
    department: str
    role: UserRole

    def derived_username(self) -> str:
        return derive_username(self.first_name, self.last_name)


@dataclass(frozen=True, slots=True)
class Employee:
    """
    Ficha de personal.

    - id: asignado por el store (None antes de persistir)
    - version: token de concurrencia optimista (arranca en 1)
    """

    id: int | None
    first_name: str
    last_name: str
    email: str
    job_title: str
    salary: Decimal
    department: str
    role: UserRole
    version: int = 1

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def derived_username(self) -> str:
        return derive_username(self.first_name, self.last_name)

    @classmethod
    def from_draft(cls, draft: EmployeeDraft) -> "Employee":
        """Nueva ficha (aún sin id) a partir de un draft."""
        return cls(
            id=None,
            first_name=draft.first_name,
            last_name=draft.last_name,
            email=draft.email,
            job_title=draft.job_title,
            salary=draft.salary,
            department=draft.department,
            role=draft.role,
        )

    def with_changes(self, draft: EmployeeDraft) -> "Employee":
        """Estado post-update: misma identidad y versión, campos del draft."""
        return replace(
            self,
            first_name=draft.first_name,
            last_name=draft.last_name,
            email=draft.email,
            job_title=draft.job_title,
            salary=draft.salary,
            department=draft.department,
            role=draft.role,
        )
