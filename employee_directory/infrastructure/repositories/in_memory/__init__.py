"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .directory import InMemoryDirectoryRepository

__all__ = ["InMemoryDirectoryRepository"]
