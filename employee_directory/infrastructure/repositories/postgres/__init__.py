"""
PostgreSQL Repository Implementations.

Production implementations using psycopg 3 + psycopg_pool (raw SQL).
"""

from .directory import PostgresDirectoryRepository

__all__ = ["PostgresDirectoryRepository"]
