# =============================================================================
# FILE: application/dev_seed_admin.py
# =============================================================================
"""
===============================================================================
TASK: Dev Seed Admin (Local-only)
===============================================================================

Qué es:
    Asegura que exista un HRAdmin (ficha + User) para desarrollo cuando está
    configurado con DEV_SEED_ADMIN=true.

Seguridad:
    - Guard estricto: solo corre en app_env == "local".

Patrones:
    - Task orchestration (seed)
    - Dependency Injection (repo + hasher)
    - Fail-fast guard (safety boundary)
    - Idempotencia (skip si la ficha ya existe)

CRC:
    Component: ensure_dev_admin
    Responsibilities:
      - Validar guard de ambiente
      - Crear el par Employee+User del admin si falta
    Collaborators:
      - DirectoryRepository
      - PasswordHasher
      - Settings
===============================================================================
"""

from __future__ import annotations

from decimal import Decimal

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.entities import Employee, derive_username
from ..domain.repositories import DirectoryRepository
from ..domain.services import PasswordHasher
from ..identity.users import User, UserRole


def _assert_allowed_environment(settings: Settings) -> None:
    env = (settings.app_env or "").strip().lower()
    if env != "local":
        raise RuntimeError(
            f"FATAL: DEV_SEED_ADMIN is enabled but ENV is '{env}' (must be 'local'). "
            "Safety guard prevents accidental overrides."
        )


def ensure_dev_admin(
    settings: Settings,
    *,
    repository: DirectoryRepository,
    password_hasher: PasswordHasher,
) -> Employee | None:
    """
    Ensure a development HRAdmin exists if configured.

    Returns the created Employee, or None when disabled / already present.
    """
    if not settings.dev_seed_admin:
        return None

    _assert_allowed_environment(settings)

    email = (settings.dev_seed_admin_email or "").strip()
    password = settings.dev_seed_admin_password or ""
    if not email or not password:
        raise ValueError("Dev seed admin is enabled but email/password are empty")

    existing = repository.get_employee_by_email(email)
    if existing is not None:
        logger.info("Dev seed admin: employee exists; skipping", extra={"email": email})
        return None

    first_name = settings.dev_seed_admin_first_name.strip()
    last_name = settings.dev_seed_admin_last_name.strip()
    employee = Employee(
        id=None,
        first_name=first_name,
        last_name=last_name,
        email=email,
        job_title="HR Administrator",
        salary=Decimal("0"),
        department=settings.dev_seed_admin_department.strip(),
        role=UserRole.HR_ADMIN,
    )
    user = User(
        id=None,
        username=derive_username(first_name, last_name),
        email=email,
        password_hash=password_hasher.hash(password),
        role=UserRole.HR_ADMIN,
    )

    created, created_user = repository.create_employee_with_user(employee, user)
    logger.info(
        "Dev seed admin: admin created",
        extra={"employee_id": created.id, "username": created_user.username},
    )
    return created
