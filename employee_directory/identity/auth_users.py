"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Autenticación de Usuarios (JWT)

Responsabilidades:
    - Validar credenciales (username + password) contra el directory store.
    - Emitir JWT de acceso con expiración (access token).
    - Decodificar y validar JWT (firma, exp, claims mínimos).
    - Reinstalar la sesión cuando cambian los claims (JwtSessionIssuer).
    - Exponer dependencias FastAPI (require_principal, require_roles).
    - Extraer token desde Authorization: Bearer o cookie; setear/borrar cookie.

Colaboradores:
    - crosscutting.config.get_settings: secretos, TTL, cookie settings.
    - crosscutting.error_responses: unauthorized/forbidden estándar.
    - crosscutting.logger: logging estructurado.
    - domain.repositories.DirectoryRepository: get_user_by_username.
    - domain.services.PasswordHasher / SessionToken.
    - identity.users: User / UserRole.

Decisiones de diseño:
    - La sesión es “claims-based”: el principal (username + rol) viaja en el
      token; por eso un cambio de rol propio requiere reemitir la sesión.
    - Claims mínimos: sub (username), role, iat, exp, typ.
    - No loguear secretos ni tokens; solo info mínima y segura.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt
from fastapi import Header, Request, Response

from ..context import set_principal_context
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import forbidden, unauthorized
from ..crosscutting.logger import logger
from ..domain.repositories import DirectoryRepository
from ..domain.services import PasswordHasher, SessionToken
from .users import User, UserRole

# ---------------------------------------------------------------------------
# Constantes (evitan strings mágicos)
# ---------------------------------------------------------------------------

JWT_ALGORITHM: str = "HS256"

# R: fallback si Settings no define cookie.
DEFAULT_ACCESS_TOKEN_COOKIE: str = "access_token"

CLAIM_SUB: str = "sub"
CLAIM_ROLE: str = "role"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_TYP: str = "typ"

TOKEN_TYPE_ACCESS: str = "access"


# ---------------------------------------------------------------------------
# Contratos internos
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """Settings de auth (snapshot)."""

    jwt_secret: str
    jwt_access_ttl_minutes: int
    jwt_cookie_name: str
    jwt_cookie_secure: bool


@dataclass(frozen=True, slots=True)
class Principal:
    """Principal autenticado leído del access token."""

    username: str
    role: UserRole


def get_auth_settings() -> AuthSettings:
    """Construye un snapshot de settings de auth."""
    s = get_settings()
    return AuthSettings(
        jwt_secret=s.jwt_secret,
        jwt_access_ttl_minutes=s.jwt_access_ttl_minutes,
        jwt_cookie_name=s.jwt_cookie_name,
        jwt_cookie_secure=s.jwt_cookie_secure,
    )


# ---------------------------------------------------------------------------
# Credenciales
# ---------------------------------------------------------------------------


def authenticate_user(
    username: str,
    password: str,
    *,
    repository: DirectoryRepository,
    password_hasher: PasswordHasher,
) -> User | None:
    """Valida credenciales y retorna el usuario o None.

    Seguridad:
        - No diferenciamos “usuario no existe” vs “password incorrecto”.
    """
    normalized = (username or "").strip()
    if not normalized:
        return None

    user = repository.get_user_by_username(normalized)
    if not user:
        return None

    if not password_hasher.verify(user.password_hash, password):
        logger.info("Auth falló: password inválido", extra={"username": normalized})
        return None

    return user


# ---------------------------------------------------------------------------
# Tokens JWT (emitir / decodificar)
# ---------------------------------------------------------------------------


def create_access_token(
    username: str, role: UserRole, settings: AuthSettings | None = None
) -> tuple[str, int]:
    """Crea un JWT de acceso (access token) firmado.

    Retorna:
        (token, expires_in_seconds)
    """
    auth_settings = settings or get_auth_settings()

    now = datetime.now(timezone.utc)
    expires_in = int(auth_settings.jwt_access_ttl_minutes * 60)

    payload: dict[str, object] = {
        CLAIM_SUB: username,
        CLAIM_ROLE: UserRole(role).value,
        CLAIM_IAT: int(now.timestamp()),
        CLAIM_EXP: int((now + timedelta(seconds=expires_in)).timestamp()),
        CLAIM_TYP: TOKEN_TYPE_ACCESS,
    }

    token = jwt.encode(payload, auth_settings.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, expires_in


def decode_access_token(token: str, settings: AuthSettings | None = None) -> Principal:
    """Decodifica y valida un JWT de acceso.

    Errores:
        - 401 si expiró o firma inválida.
        - 401 si faltan claims mínimos o el rol no pertenece al catálogo.
    """
    auth_settings = settings or get_auth_settings()

    try:
        payload = jwt.decode(
            token,
            auth_settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": [CLAIM_SUB, CLAIM_ROLE, CLAIM_EXP]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expirado.") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Token inválido.") from exc

    username = payload.get(CLAIM_SUB)
    role_value = payload.get(CLAIM_ROLE)
    token_type = payload.get(CLAIM_TYP)

    if not username or not role_value:
        raise unauthorized("Token inválido.")

    if token_type is not None and token_type != TOKEN_TYPE_ACCESS:
        raise unauthorized("Tipo de token inválido.")

    try:
        role = UserRole(str(role_value))
    except ValueError as exc:
        raise unauthorized("Token inválido.") from exc

    return Principal(username=str(username), role=role)


class JwtSessionIssuer:
    """
    SessionIssuer basado en JWT.

    install() emite un access token nuevo con los claims dados; el borde HTTP
    lo instala como cookie.
    """

    def __init__(self, settings: AuthSettings | None = None):
        self._settings = settings

    def install(self, username: str, role: UserRole) -> SessionToken:
        token, expires_in = create_access_token(
            username, role, settings=self._settings
        )
        logger.info(
            "Sesión reemitida",
            extra={"username": username, "role": UserRole(role).value},
        )
        return SessionToken(access_token=token, expires_in=expires_in)


# ---------------------------------------------------------------------------
# Cookie + extracción de token (header/cookie)
# ---------------------------------------------------------------------------


def _cookie_name(settings: AuthSettings) -> str:
    return (settings.jwt_cookie_name or "").strip() or DEFAULT_ACCESS_TOKEN_COOKIE


def set_auth_cookie(response: Response, token: str, expires_in: int) -> None:
    """Setea cookie httpOnly de acceso."""
    settings = get_auth_settings()
    response.set_cookie(
        key=_cookie_name(settings),
        value=token,
        httponly=True,
        secure=settings.jwt_cookie_secure,
        samesite="lax",
        max_age=expires_in,
        path="/",
    )


def clear_auth_cookie(response: Response) -> None:
    """Elimina cookie de acceso (si existe)."""
    settings = get_auth_settings()
    response.delete_cookie(
        key=_cookie_name(settings),
        path="/",
        samesite="lax",
        secure=settings.jwt_cookie_secure,
    )


def _extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


def extract_access_token(request: Request, authorization: str | None) -> str | None:
    """Resuelve token desde Authorization o cookie."""
    token = _extract_bearer_token(authorization)
    if token:
        return token
    return request.cookies.get(_cookie_name(get_auth_settings()))


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def require_principal() -> Callable:
    """Dependency FastAPI: requiere principal autenticado por JWT."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> Principal:
        token = extract_access_token(request, authorization)
        if not token:
            raise unauthorized("Falta token Bearer.")

        principal = decode_access_token(token)
        request.state.principal = principal
        set_principal_context(principal.username)
        return principal

    return dependency


def require_roles(*roles: UserRole | str) -> Callable:
    """Dependency FastAPI: requiere alguno de los roles indicados."""
    allowed = {UserRole(role) for role in roles}

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> Principal:
        principal = await require_principal()(request, authorization)
        if principal.role not in allowed:
            logger.info(
                "Rol insuficiente",
                extra={
                    "username": principal.username,
                    "role": principal.role.value,
                },
            )
            raise forbidden("Rol insuficiente.")
        return principal

    return dependency
