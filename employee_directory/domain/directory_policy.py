"""
===============================================================================
TARJETA CRC — domain/directory_policy.py
===============================================================================

Módulo:
    Política de Acceso al Directorio (Lectura/Alta/Edición/Baja)

Responsabilidades:
    - Definir reglas puras de acceso a fichas (sin DB, sin FastAPI).
    - Derivar un único DirectoryScope por request (rol + departamento + id propio)
      y aplicarlo igual en todas las operaciones.
    - Ordenar el listado departamental de un Manager.

Colaboradores:
    - domain.entities.Employee, EmployeeDraft
    - identity.users.UserRole (catálogo de roles)
    - application/usecases/employees: resolve_caller_scope construye el scope.

Reglas (intención):
    - HRAdmin puede todo.
    - Manager lee todo; crea/edita solo Employees de su departamento (estado
      entrante); borra solo Employees de su departamento.
    - Employee solo puede leer su propia ficha y nunca borra.
    - Las decisiones NO se cachean: se recalculan en cada llamada.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..identity.users import UserRole
from .entities import Employee, EmployeeDraft


@dataclass(frozen=True, slots=True)
class DirectoryActor:
    """Principal autenticado tal como lo ve el core (username + rol)."""

    username: str
    role: UserRole


@dataclass(frozen=True, slots=True)
class DirectoryScope:
    """
    Alcance del caller para una operación.

    - department: solo relevante para Manager (departamento propio)
    - employee_id: solo relevante para Employee (ficha propia)
    """

    role: UserRole
    department: str | None = None
    employee_id: int | None = None

    def can_read(self, target: Employee) -> bool:
        if self.role in (UserRole.HR_ADMIN, UserRole.MANAGER):
            return True
        return self.employee_id is not None and target.id == self.employee_id

    def can_write(self, target_state: Employee | EmployeeDraft) -> bool:
        """
        Alta/edición: se evalúa el estado entrante, no el previo.

        Solo Manager queda acotado aquí; un Employee que se edita a sí mismo
        (p. ej. cambio de rol con refresh de claims) pasa el core. El borde
        HTTP admite solo HRAdmin/Manager en mutaciones.
        """
        if self.role != UserRole.MANAGER:
            return True
        return _within_department(self.department, target_state)

    def can_delete(self, target: Employee) -> bool:
        if self.role == UserRole.HR_ADMIN:
            return True
        if self.role == UserRole.MANAGER:
            return _within_department(self.department, target)
        # Employee: ninguna baja
        return False


def _within_department(
    department: str | None, target: Employee | EmployeeDraft
) -> bool:
    return (
        department is not None
        and target.role == UserRole.EMPLOYEE
        and target.department == department
    )


def _by_name(employee: Employee) -> tuple[str, str]:
    return (employee.last_name, employee.first_name)


def order_department_listing(employees: Iterable[Employee]) -> list[Employee]:
    """
    Listado departamental: Managers (apellido, nombre) y luego Employees
    (mismo orden). Otros roles quedan fuera.
    """
    staff = list(employees)
    managers = sorted(
        (e for e in staff if e.role == UserRole.MANAGER), key=_by_name
    )
    employees_only = sorted(
        (e for e in staff if e.role == UserRole.EMPLOYEE), key=_by_name
    )
    return [*managers, *employees_only]
