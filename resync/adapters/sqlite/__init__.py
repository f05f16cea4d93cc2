"""SQLite adapters for resync record stores."""

from .base_repository import SQLiteBaseRepository
from .documents import SQLiteDocumentRegistry
from .relational import SQLiteRelationalRegistry

__all__ = [
    "SQLiteBaseRepository",
    "SQLiteDocumentRegistry",
    "SQLiteRelationalRegistry",
]
