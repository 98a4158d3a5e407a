"""
===============================================================================
TARJETA CRC — infrastructure/services/argon2_password_hasher.py
===============================================================================

Clase:
    Argon2PasswordHasher

Responsabilidades:
    - Implementar el puerto PasswordHasher con argon2-cffi.
    - Tratar cualquier hash inválido/corrupto como “no coincide”.

Colaboradores:
    - domain.services.PasswordHasher (contrato)
    - argon2.PasswordHasher (librería)
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher as _Argon2
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError


class Argon2PasswordHasher:
    """Hasher Argon2id con parámetros por defecto de argon2-cffi."""

    def __init__(self, hasher: _Argon2 | None = None):
        self._hasher = hasher or _Argon2()

    def hash(self, plaintext: str) -> str:
        return self._hasher.hash(plaintext)

    def verify(self, password_hash: str, plaintext: str) -> bool:
        try:
            return self._hasher.verify(password_hash, plaintext)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False
