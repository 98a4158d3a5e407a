"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios Externos (Protocols)

Responsabilidades:
    - Definir contratos para hashing de passwords y emisión de sesión.
    - Proteger a application de detalles del proveedor (argon2, JWT).

Colaboradores:
    - infrastructure/services/argon2_password_hasher.py: PasswordHasher.
    - identity/auth_users.py: JwtSessionIssuer (SessionIssuer).
    - application/usecases/employees: consumen PasswordHasher.
    - interfaces/api/http/routers/employees.py: aplica ClaimsRefresh vía SessionIssuer.

Reglas:
    - SOLO interfaces: nada de implementación.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..identity.users import UserRole


class PasswordHasher(Protocol):
    """Contrato para hashear/verificar passwords (hash opaco)."""

    def hash(self, plaintext: str) -> str: ...

    def verify(self, password_hash: str, plaintext: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class SessionToken:
    """Sesión emitida: token firmado + TTL en segundos."""

    access_token: str
    expires_in: int


class SessionIssuer(Protocol):
    """Contrato para (re)instalar la sesión de un principal con un rol."""

    def install(self, username: str, role: UserRole) -> SessionToken: ...
