# employee_directory/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logger estructurado (JSON) del directorio
===============================================================================

Objetivo
--------
Una línea JSON por evento, correlacionable por request_id y sin filtrar
credenciales ni datos de nómina (salary) a los logs.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Formatear LogRecord como JSON compacto
  - Mezclar el contexto de request (context.py) con los `extra=`
  - Redactar credenciales y salary; acotar strings largos

Colaboradores:
  - employee_directory/context.py (ContextVars)
  - crosscutting/config.py (log_level / log_json)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from ..context import get_context_dict

REDACTED = "***REDACTADO***"

# R: claves de un LogRecord "vacío"; todo lo demás llegó por extra=
_RECORD_KEYS: frozenset[str] = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
}

# Credenciales + compensación: nunca se escriben en claro.
_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "password_hash",
        "jwt_secret",
        "secret",
        "token",
        "access_token",
        "authorization",
        "cookie",
        "salary",
    }
)

_MAX_STR = 4_000
_MAX_DEPTH = 3


def _redact(value: Any, key: str | None = None, depth: int = 0) -> Any:
    """Sanitiza un valor de `extra` antes de serializarlo."""
    if key is not None and key.lower() in _SENSITIVE_KEYS:
        return REDACTED
    if depth > _MAX_DEPTH:
        return "…"
    if isinstance(value, dict):
        return {str(k): _redact(v, str(k), depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_redact(v, key, depth + 1) for v in value]
    if isinstance(value, str) and len(value) > _MAX_STR:
        return value[:_MAX_STR] + "…"
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    # Decimal, Enum (UserRole), datetime...
    return str(value)


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON con contexto de request y campos extra redactados."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
            "pid": os.getpid(),
            **get_context_dict(),
        }

        payload.update(
            (k, _redact(v, k))
            for k, v in vars(record).items()
            if k not in _RECORD_KEYS
        )

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "stacktrace": "".join(traceback.format_exception(exc_type, exc, tb)),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(name: str = "employee-directory") -> logging.Logger:
    """
    Configura el logger del servicio (idempotente).

    Si Settings es inválido al importar se usa INFO + JSON; el error real se
    reporta luego al arrancar la app.
    """
    from .config import get_settings

    try:
        settings = get_settings()
        level, use_json = settings.log_level, settings.log_json
    except ValidationError:
        level, use_json = "INFO", True

    log = logging.getLogger(name)
    log.setLevel(logging.getLevelName(level))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if use_json
            else logging.Formatter("%(asctime)s %(levelname)s %(message)s")
        )
        log.addHandler(handler)

    return log


logger = setup_logger()
