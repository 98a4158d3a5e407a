"""
===============================================================================
EMPLOYEE USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Employee Use Case Results

Business Goal:
    Proveer modelos compartidos de resultados y errores para los casos de uso
    del directorio, con un contrato estable y explícito para:
      - validaciones
      - autorización (FORBIDDEN vs CALLER_NOT_FOUND)
      - fichas no encontradas
      - conflictos (concurrencia / unicidad)

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar excepciones
      “hacia afuera”: el borde HTTP los traduce a status codes.
    - CALLER_NOT_FOUND es distinto de NOT_FOUND: el principal está autenticado
      pero no tiene ficha (inconsistencia de datos, no una denegación normal).
    - El refresco de claims viaja como valor explícito (ClaimsRefresh) en el
      resultado de Update: el core no toca la sesión.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    employee_results models (module)

Responsibilities:
    - Definir EmployeeErrorCode y EmployeeError (code + message + resource).
    - Representar resultados:
        * EmployeeResult (single employee)
        * EmployeeListResult (list)
        * UpdateEmployeeResult (employee + user sincronizado + claims_refresh)
        * DeleteEmployeeResult (deleted flag)

Collaborators:
    - domain.entities.Employee
    - identity.users.User / UserRole
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import Employee
from ....identity.users import User, UserRole


class EmployeeErrorCode(str, Enum):
    """
    Códigos de error para casos de uso del directorio.

      - VALIDATION_ERROR: input con forma inválida.
      - FORBIDDEN: caller resuelto pero la policy deniega.
      - NOT_FOUND: la ficha objetivo no existe.
      - CALLER_NOT_FOUND: el principal no tiene ficha en el directorio.
      - CONFLICT: escritura concurrente o colisión de unicidad.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CALLER_NOT_FOUND = "CALLER_NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class EmployeeError:
    """Error de caso de uso (categoría estable + mensaje humano)."""

    code: EmployeeErrorCode
    message: str
    resource: str = "Employee"


@dataclass(frozen=True)
class ClaimsRefresh:
    """Claims nuevos a instalar en la sesión del caller (username + rol)."""

    username: str
    role: UserRole


@dataclass
class EmployeeResult:
    """
    Resultado para casos de uso que retornan una única ficha.

    Contrato:
      - error is None => employee presente
      - error != None => employee None
    """

    employee: Employee | None = None
    error: EmployeeError | None = None


@dataclass
class EmployeeListResult:
    """Resultado de List (lista posiblemente vacía en éxito)."""

    employees: List[Employee] = field(default_factory=list)
    error: EmployeeError | None = None


@dataclass
class UpdateEmployeeResult:
    """
    Resultado de Update.

    - user: el User sincronizado, o None si la ficha no tenía User emparejado
    - claims_refresh: presente solo si el caller editó su propia cuenta
    """

    employee: Employee | None = None
    user: User | None = None
    claims_refresh: ClaimsRefresh | None = None
    error: EmployeeError | None = None


@dataclass
class DeleteEmployeeResult:
    """Resultado de Delete."""

    deleted: bool = False
    error: EmployeeError | None = None
