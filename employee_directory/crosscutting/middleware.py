# employee_directory/crosscutting/middleware.py
"""
===============================================================================
MÓDULO: Middleware HTTP de contexto de request
===============================================================================

CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  RequestContextMiddleware

Responsabilidades:
  - Aceptar X-Request-Id del cliente (o generar uno) y devolverlo siempre
  - Cargar method/path/request_id en contextvars para los logs
  - Un log de acceso por request (WARNING en 5xx, nada para /healthz)
  - clear_context() al salir, pase lo que pase

Colaboradores:
  - employee_directory/context.py
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger

REQUEST_ID_HEADER = "X-Request-Id"
_MAX_REQUEST_ID_LEN = 128
_UNLOGGED_PATHS = frozenset({"/healthz"})


def _request_id_from(request: Request) -> str:
    candidate = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if candidate and len(candidate) <= _MAX_REQUEST_ID_LEN:
        return candidate
    return uuid.uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = _request_id_from(request)
        request.state.request_id = request_id
        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            if request.url.path not in _UNLOGGED_PATHS:
                logger.log(
                    logging.WARNING if status_code >= 500 else logging.INFO,
                    "request completado",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round((time.perf_counter() - started) * 1000, 2),
                    },
                )
            clear_context()
