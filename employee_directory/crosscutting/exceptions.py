# employee_directory/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores de persistencia)
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message “humana” (sin filtrar secretos)

Los resultados de política (NOT_FOUND / FORBIDDEN / ...) NO son excepciones:
viajan como resultados tipados de los casos de uso. Estas excepciones
representan fallas del directory store.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  DirectoryError + subclases

Responsabilidades:
  - Estandarizar errores del store que luego se mapean a HTTP
  - Generar error_id para rastreo
  - Distinguir conflicto de concurrencia y unicidad de una caída del store

Colaboradores:
  - infrastructure/repositories/* (lanzan)
  - application/usecases/employees/* (capturan Stale/Duplicate)
  - api/exception_handlers.py (mapea DatabaseError a 503)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class ErrorResponse:
    """Estructura mínima para responder errores de forma consistente."""

    error_code: str
    message: str
    error_id: str


class DirectoryError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      DirectoryError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message

    Colaboradores:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "DIRECTORY_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error_code=self.error_code, message=self.message, error_id=self.error_id
        )


class DatabaseError(DirectoryError):
    """Errores de DB (conexión, query, timeout, pool). No recuperable localmente."""

    error_code: str = "DATABASE_ERROR"


class StaleRecordError(DirectoryError):
    """El registro cambió (o desapareció) entre la lectura y la escritura."""

    error_code: str = "STALE_RECORD"


class DuplicateRecordError(DirectoryError):
    """Violación de unicidad (email de empleado, email o username de usuario)."""

    error_code: str = "DUPLICATE_RECORD"

    def __init__(self, message: str, *, field: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
