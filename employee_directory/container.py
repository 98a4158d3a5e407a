"""
===============================================================================
TARJETA CRC — employee_directory/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorio, hasher, session issuer, casos de uso).
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache).
  - Decidir in-memory vs PostgreSQL según Settings.

Colaboradores:
  - crosscutting.config.get_settings
  - domain.repositories / domain.services (puertos)
  - infrastructure.* (implementaciones)
  - application.usecases.employees (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    GetEmployeeUseCase,
    ListEmployeesUseCase,
    UpdateEmployeeUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import DirectoryRepository
from .domain.services import PasswordHasher, SessionIssuer
from .identity.auth_users import JwtSessionIssuer
from .infrastructure.repositories import (
    InMemoryDirectoryRepository,
    PostgresDirectoryRepository,
)
from .infrastructure.services import Argon2PasswordHasher

# =============================================================================
# Repositorios / servicios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_directory_repository() -> DirectoryRepository:
    """Directory store (in-memory en test; Postgres en runtime)."""
    if get_settings().is_test():
        return InMemoryDirectoryRepository()
    return PostgresDirectoryRepository()


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    return Argon2PasswordHasher()


@lru_cache(maxsize=1)
def get_session_issuer() -> SessionIssuer:
    return JwtSessionIssuer()


# =============================================================================
# Casos de uso (livianos: se construyen por request)
# =============================================================================


def get_list_employees_use_case() -> ListEmployeesUseCase:
    return ListEmployeesUseCase(get_directory_repository())


def get_get_employee_use_case() -> GetEmployeeUseCase:
    return GetEmployeeUseCase(get_directory_repository())


def get_create_employee_use_case() -> CreateEmployeeUseCase:
    return CreateEmployeeUseCase(get_directory_repository(), get_password_hasher())


def get_update_employee_use_case() -> UpdateEmployeeUseCase:
    return UpdateEmployeeUseCase(get_directory_repository())


def get_delete_employee_use_case() -> DeleteEmployeeUseCase:
    return DeleteEmployeeUseCase(get_directory_repository())
