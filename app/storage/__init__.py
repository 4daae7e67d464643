"""
Storage backings and the selector that routes between them.
"""

from app.storage.base import CarRepository, StorageBackend, UserRepository
from app.storage.memory import create_memory_backend
from app.storage.selector import StorageSelector
from app.storage.sql import create_sql_backend

__all__ = [
    "CarRepository",
    "UserRepository",
    "StorageBackend",
    "StorageSelector",
    "create_memory_backend",
    "create_sql_backend",
]
