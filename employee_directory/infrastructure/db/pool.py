"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool de conexiones PostgreSQL del directory store (singleton por proceso)

Responsabilidades:
  - init_pool / get_pool / close_pool.
  - Configurar cada conexión: application_name + statement_timeout.

Colaboradores:
  - psycopg_pool.ConnectionPool
  - crosscutting/config.get_settings (timeout)
  - infrastructure/repositories/postgres (único consumidor)

Principios:
  - Fail-fast: doble init o uso sin init son errores tipados (db/errors.py).
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Optional

from psycopg import sql
from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError

APPLICATION_NAME = "employee-directory"

_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def _configure_connection(conn) -> None:
    from ...crosscutting.config import get_settings

    conn.execute(
        sql.SQL("SET application_name = {}").format(sql.Literal(APPLICATION_NAME))
    )
    timeout_ms = int(get_settings().db_statement_timeout_ms)
    if timeout_ms > 0:
        conn.execute(
            sql.SQL("SET statement_timeout = {}").format(sql.Literal(timeout_ms))
        )
    conn.commit()


def init_pool(database_url: str, min_size: int, max_size: int) -> ConnectionPool:
    """Abre el pool; llamarlo dos veces es un error."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("El pool ya fue inicializado.")

        _pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_configure_connection,
            name="directory",
            open=True,
        )
        logger.info(
            "Pool DB abierto", extra={"min_size": min_size, "max_size": max_size}
        )
        return _pool


def get_pool() -> ConnectionPool:
    if _pool is None:
        raise PoolNotInitializedError("Pool no inicializado: falta init_pool().")
    return _pool


def close_pool() -> None:
    """Cierra el pool si está abierto (idempotente)."""
    global _pool

    with _pool_lock:
        if _pool is None:
            return
        try:
            _pool.close()
        finally:
            _pool = None
        logger.info("Pool DB cerrado")
