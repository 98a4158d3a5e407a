"""
===============================================================================
EMPLOYEE INPUT (Create / Update command payload)
===============================================================================

Name:
    EmployeeInput + normalize/validate helpers

Business Goal:
    Representar los campos editables de una ficha tal como llegan al core y
    rechazar formas inválidas antes de evaluar la policy.

Reglas de forma:
    - first_name, last_name, email, job_title, department: no vacíos (strip)
    - email: contiene "@"
    - salary: >= 0, a lo sumo 10 enteros y 2 decimales (NUMERIC(12,2))
    - role: uno de HRAdmin / Manager / Employee
    - password: requerido solo en Create (sin política de complejidad)

Collaborators:
    - domain.entities.EmployeeDraft
    - identity.users.UserRole
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from ....domain.entities import EmployeeDraft
from ....identity.users import UserRole

SALARY_MAX_DIGITS = 12
SALARY_DECIMAL_PLACES = 2
_SALARY_STEP = Decimal(1).scaleb(-SALARY_DECIMAL_PLACES)
_SALARY_LIMIT = Decimal(10) ** (SALARY_MAX_DIGITS - SALARY_DECIMAL_PLACES)


@dataclass(frozen=True)
class EmployeeInput:
    """Campos editables (Create agrega password)."""

    first_name: str
    last_name: str
    email: str
    job_title: str
    salary: Decimal | int | float | str
    department: str
    role: UserRole | str
    password: str | None = None


def to_draft(data: EmployeeInput) -> tuple[EmployeeDraft | None, str | None]:
    """
    Normaliza y valida el input.

    Retorna (draft, None) o (None, mensaje de validación).
    """
    first_name = (data.first_name or "").strip()
    last_name = (data.last_name or "").strip()
    email = (data.email or "").strip()
    job_title = (data.job_title or "").strip()
    department = (data.department or "").strip()

    for label, value in (
        ("first_name", first_name),
        ("last_name", last_name),
        ("email", email),
        ("job_title", job_title),
        ("department", department),
    ):
        if not value:
            return None, f"{label} is required."

    if "@" not in email:
        return None, "email is not a valid address."

    try:
        salary = Decimal(str(data.salary))
    except (InvalidOperation, ValueError):
        return None, "salary must be a number."
    if not salary.is_finite() or salary < 0:
        return None, "salary must be a non-negative amount."
    # R: columna NUMERIC(12,2); nada que Postgres tenga que redondear o rechazar
    if salary >= _SALARY_LIMIT or salary != salary.quantize(_SALARY_STEP):
        return None, (
            f"salary must have at most {SALARY_MAX_DIGITS - SALARY_DECIMAL_PLACES} "
            f"integer digits and {SALARY_DECIMAL_PLACES} decimals."
        )

    try:
        role = UserRole(data.role)
    except ValueError:
        return None, f"role must be one of {[r.value for r in UserRole]}."

    return (
        EmployeeDraft(
            first_name=first_name,
            last_name=last_name,
            email=email,
            job_title=job_title,
            salary=salary,
            department=department,
            role=role,
        ),
        None,
    )
