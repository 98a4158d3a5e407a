"""
Infrastructure Services (Facade)

Exporta los adapters concretos de los puertos de domain.services.
"""

from .argon2_password_hasher import Argon2PasswordHasher

__all__ = ["Argon2PasswordHasher"]
