"""
===============================================================================
TARJETA CRC — employee_directory/api/auth_routes.py (Autenticación)
===============================================================================

Responsabilidades:
  - Exponer login/logout/me con JWT.
  - Gestionar la cookie httpOnly de acceso de forma consistente.

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP ↔ identidad/repositorio.
  - Fail-safe security: si la autenticación falla, se deniega por defecto.

Colaboradores:
  - identity.auth_users: authenticate_user, create_access_token, cookies,
    require_principal
  - container: repositorio del directorio + hasher
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field, field_validator

from ..container import get_directory_repository, get_password_hasher
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES, unauthorized
from ..domain.repositories import DirectoryRepository
from ..domain.services import PasswordHasher
from ..identity.auth_users import (
    Principal,
    authenticate_user,
    clear_auth_cookie,
    create_access_token,
    require_principal,
    set_auth_cookie,
)
from ..identity.users import User, UserRole

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)


# -----------------------------------------------------------------------------
# Modelos HTTP (DTOs)
# -----------------------------------------------------------------------------


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=200)
    password: str = Field(..., min_length=1, max_length=512)

    @field_validator("username")
    @classmethod
    def normalizar_username(cls, v: str) -> str:
        return v.strip()


class UserResponse(BaseModel):
    username: str
    email: str
    role: UserRole


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class PrincipalResponse(BaseModel):
    username: str
    role: UserRole


def _to_user_response(user: User) -> UserResponse:
    return UserResponse(username=user.username, email=user.email, role=user.role)


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.post("/auth/login", response_model=LoginResponse, tags=["auth"])
def login(
    req: LoginRequest,
    response: Response,
    repository: DirectoryRepository = Depends(get_directory_repository),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    Inicia sesión y devuelve JWT.

    - También setea la cookie httpOnly de acceso.
    """
    user = authenticate_user(
        req.username,
        req.password,
        repository=repository,
        password_hasher=password_hasher,
    )
    if not user:
        raise unauthorized("Credenciales inválidas.")

    token, expires_in = create_access_token(user.username, user.role)
    set_auth_cookie(response, token, expires_in)

    return LoginResponse(
        access_token=token,
        expires_in=expires_in,
        user=_to_user_response(user),
    )


@router.post("/auth/logout", tags=["auth"])
def logout(response: Response):
    """
    Cierra sesión.

    - Siempre borra la cookie (si estaba presente).
    - No requiere autenticación: es idempotente.
    """
    clear_auth_cookie(response)
    return {"ok": True}


@router.get("/auth/me", response_model=PrincipalResponse, tags=["auth"])
def me(principal: Principal = Depends(require_principal())):
    """Devuelve los claims de la sesión actual (JWT o cookie)."""
    return PrincipalResponse(username=principal.username, role=principal.role)


__all__ = ["router"]
