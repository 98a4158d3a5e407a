"""
===============================================================================
TARJETA CRC — employee_directory/interfaces/api/http/routers/__init__.py
===============================================================================

Name:
    Routers Package (HTTP)

Responsibilities:
    - Exponer routers segmentados por feature para el router principal.

Notas:
    - Este archivo NO define endpoints. Solo re-exporta routers.
===============================================================================
"""

from .employees import router as employees_router

__all__ = ["employees_router"]
