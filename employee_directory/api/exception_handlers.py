"""
===============================================================================
TARJETA CRC — employee_directory/api/exception_handlers.py (Manejo Centralizado)
===============================================================================

Responsabilidades:
  - Traducir excepciones del store a respuestas HTTP RFC7807.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> INTERNAL_ERROR (con logging).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, handlers base
  - crosscutting.exceptions: DirectoryError y derivadas
  - crosscutting.config.get_settings (nivel de detalle según entorno)
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    generic_exception_handler,
    problem_response,
)
from ..crosscutting.exceptions import DatabaseError, DirectoryError
from ..crosscutting.logger import logger


def _store_error_response(
    request: Request, exc: DirectoryError, *, code: ErrorCode, status_code: int
) -> JSONResponse:
    payload = exc.to_response()

    logger.error(
        "Error de store",
        extra={
            "code": code.value,
            "error_code": payload.error_code,
            "error_id": payload.error_id,
            "error_message": payload.message,
        },
    )
    return problem_response(
        request,
        status_code=status_code,
        code=code,
        detail=payload.message,
        errors=[{"error_id": payload.error_id}],
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return _store_error_response(
        request, exc, code=ErrorCode.DATABASE_ERROR, status_code=503
    )


async def directory_error_handler(
    request: Request, exc: DirectoryError
) -> JSONResponse:
    # R: Stale/Duplicate que escapan a un caso de uso son un bug: 500.
    return _store_error_response(
        request, exc, code=ErrorCode.INTERNAL_ERROR, status_code=500
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Excepciones no tipadas: stacktrace completo al log.

    En producción la respuesta es genérica; fuera de ella incluye el mensaje.
    """
    logger.error("Excepción no controlada", exc_info=exc, extra={"error": str(exc)})

    if get_settings().is_production():
        return await generic_exception_handler(request, exc)

    return problem_response(
        request,
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=str(exc) or exc.__class__.__name__,
    )


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    DatabaseError va antes que DirectoryError (subclase más específica);
    Exception queda como fallback.
    """
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(DirectoryError, directory_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
