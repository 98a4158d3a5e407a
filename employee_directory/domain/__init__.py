"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Mantener estable el “surface area” del dominio.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .directory_policy import DirectoryActor, DirectoryScope, order_department_listing
from .entities import Employee, EmployeeDraft, derive_username
from .repositories import DirectoryRepository
from .services import PasswordHasher, SessionIssuer, SessionToken

__all__ = [
    "DirectoryActor",
    "DirectoryRepository",
    "DirectoryScope",
    "Employee",
    "EmployeeDraft",
    "PasswordHasher",
    "SessionIssuer",
    "SessionToken",
    "derive_username",
    "order_department_listing",
]
