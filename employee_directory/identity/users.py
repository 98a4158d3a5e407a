"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario (credenciales + rol)

Responsabilidades:
    - Definir el enum de roles del directorio (HRAdmin / Manager / Employee).
    - Definir el dataclass User (registro de credenciales del login).
    - Mantener el contrato de datos de auth centralizado y estable.

Colaboradores:
    - identity/auth_users.py: usa User y UserRole para emitir/validar JWT.
    - domain/directory_policy.py: decide acceso según UserRole.
    - infrastructure/repositories/*: mapean filas -> User.

Notas:
    - Este módulo NO contiene lógica de negocio: solo “shapes” de datos.
    - El par User/Employee se vincula por email; username = "First_Last".
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class UserRole(str, Enum):
    """Roles del directorio (conjunto cerrado)."""

    HR_ADMIN = "HRAdmin"
    MANAGER = "Manager"
    EMPLOYEE = "Employee"


@dataclass(frozen=True, slots=True)
class User:
    """Registro de credenciales utilizado por el login (JWT)."""

    id: int | None
    username: str
    email: str
    password_hash: str
    role: UserRole

    def mirrored(self, *, username: str, email: str, role: UserRole) -> "User":
        """Copia con los campos que se sincronizan desde el Employee."""
        return replace(self, username=username, email=email, role=role)
