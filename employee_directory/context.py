"""
===============================================================================
TARJETA CRC — employee_directory/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar request_id / method / path / principal en ContextVars
    (async-safe) para que el logger los adjunte sin pasarlos por el stack.

Colaboradores:
  - crosscutting.middleware: abre y cierra el contexto del request.
  - identity.auth_users: registra el principal autenticado.
  - crosscutting.logger: lee get_context_dict().

Restricciones:
  - Solo str; "" significa "no disponible" y se omite del dict.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")
principal_var: ContextVar[str] = ContextVar("principal", default="")

# clave en el log -> variable
_FIELDS: dict[str, ContextVar[str]] = {
    "request_id": request_id_var,
    "method": http_method_var,
    "path": http_path_var,
    "principal": principal_var,
}


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    request_id_var.set(request_id or "")
    http_method_var.set(method or "")
    http_path_var.set(path or "")


def set_principal_context(username: str) -> None:
    principal_var.set(username or "")


def get_context_dict() -> dict[str, str]:
    """Contexto actual, sin claves vacías."""
    return {key: value for key, var in _FIELDS.items() if (value := var.get())}


def clear_context() -> None:
    for var in _FIELDS.values():
        var.set("")
