"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir EmployeeErrorCode a HTTP Exceptions RFC7807.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el core libre de HTTP.

Mapeo:
  - NOT_FOUND        -> 404
  - FORBIDDEN        -> 403 (code FORBIDDEN)
  - CALLER_NOT_FOUND -> 403 (code CALLER_NOT_FOUND)
  - VALIDATION_ERROR -> 422
  - CONFLICT         -> 409

Colaboradores:
  - application.usecases.employees (EmployeeError, EmployeeErrorCode)
  - crosscutting.error_responses (factories RFC7807)
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from employee_directory.application.usecases.employees import (
    EmployeeError,
    EmployeeErrorCode,
)
from employee_directory.crosscutting.error_responses import (
    caller_not_found,
    conflict,
    forbidden,
    internal_error,
    not_found,
    validation_error,
)


def raise_employee_error(
    error: EmployeeError, *, employee_id: int | None = None
) -> NoReturn:
    """Traduce EmployeeError -> HTTP (siempre lanza)."""
    if error.code == EmployeeErrorCode.NOT_FOUND:
        raise not_found(error.resource, str(employee_id if employee_id else "-"))
    if error.code == EmployeeErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if error.code == EmployeeErrorCode.CALLER_NOT_FOUND:
        raise caller_not_found(error.message)
    if error.code == EmployeeErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == EmployeeErrorCode.CONFLICT:
        raise conflict(error.message)

    # Fallback (código nuevo sin mapear)
    raise internal_error(error.message)
