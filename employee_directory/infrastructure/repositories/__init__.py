"""
============================================================
TARJETA CRC
============================================================
Class: employee_directory.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas del directory store (Postgres e InMemory)
  en un único punto de importación.

Collaborators:
- Repositorio Postgres (SQL crudo, transacciones)
- Repositorio InMemory (testing / APP_ENV=test)
============================================================
"""

from .in_memory import InMemoryDirectoryRepository
from .postgres import PostgresDirectoryRepository

__all__ = [
    "PostgresDirectoryRepository",
    "InMemoryDirectoryRepository",
]
