"""Capa de infraestructura: DB pool, directory stores y adapters de servicios."""
