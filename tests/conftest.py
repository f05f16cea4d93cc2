"""Pytest configuration and shared fixtures."""

import json
import sqlite3
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from resync.domain.entities import Record
from resync.ports.stores import StoreMetadata

# ============================================================================
# Config isolation
# ============================================================================
# The user's global ~/.config/resync/config.toml must never leak into tests.


@pytest.fixture(autouse=True)
def no_global_config(tmp_path: Path):
    """Point the global config path at a file that does not exist."""
    nonexistent_global = tmp_path / "nonexistent_global" / "config.toml"
    with patch(
        "resync.adapters.config.toml_config_provider.get_global_config_path",
        return_value=nonexistent_global,
    ):
        yield nonexistent_global


# ============================================================================
# Store helpers
# ============================================================================


def create_table(
    db_path: Path,
    table: str,
    columns: str,
    rows: list[tuple[Any, ...]] | None = None,
) -> None:
    """Create a table in a SQLite database and fill it.

    Args:
        db_path: Database file (created if missing).
        table: Table name.
        columns: Column definitions, e.g. "id INTEGER PRIMARY KEY, title TEXT".
        rows: Rows to insert, as tuples matching the columns.

    Example:
        create_table(db, "Book", "id INTEGER PRIMARY KEY, title TEXT",
                     [(1, "Dune"), (2, "Emma")])
    """
    conn = sqlite3.connect(db_path)
    try:
        conn.execute(f'CREATE TABLE "{table}" ({columns})')
        if rows:
            placeholders = ", ".join("?" for _ in rows[0])
            conn.executemany(f'INSERT INTO "{table}" VALUES ({placeholders})', rows)
        conn.commit()
    finally:
        conn.close()


def create_collection(
    db_path: Path, collection: str, documents: dict[str, dict[str, Any]]
) -> None:
    """Create a document collection table and fill it.

    Args:
        db_path: Document store file (created if missing).
        collection: Collection name.
        documents: Documents keyed by _id.
    """
    conn = sqlite3.connect(db_path)
    try:
        conn.execute(
            f'CREATE TABLE "{collection}" (_id TEXT PRIMARY KEY, document TEXT NOT NULL)'
        )
        conn.executemany(
            f'INSERT INTO "{collection}" VALUES (?, ?)',
            [(doc_id, json.dumps(doc)) for doc_id, doc in documents.items()],
        )
        conn.commit()
    finally:
        conn.close()


def make_records(type_name: str, count: int, start: int = 0) -> list[Record]:
    """Build `count` records with ids start..start+count-1."""
    return [
        Record(entity_type=type_name, id=str(i), fields={"id": i, "title": f"t{i}"})
        for i in range(start, start + count)
    ]


# ============================================================================
# In-memory store fakes
# ============================================================================


class FakeRepository:
    """Repository handle over an in-memory list, recording page requests."""

    def __init__(self, records: list[Record]) -> None:
        self.records = records
        self.page_requests: list[tuple[int, int]] = []

    def find_page(self, criteria, order_by, limit, offset) -> list[Record]:
        self.page_requests.append((offset, limit))
        return self.records[offset : offset + limit]

    def count(self, field: str) -> int:
        return len(self.records)


class FakeRegistry:
    """Manager registry over in-memory repositories.

    Args:
        repositories: Repositories keyed by type name. Missing types raise
            RepositoryNotFoundError.
        identifiers: Identifier fields per type (default: ("id",)).
    """

    def __init__(
        self,
        repositories: dict[str, FakeRepository],
        identifiers: dict[str, tuple[str, ...]] | None = None,
    ) -> None:
        self.repositories = repositories
        self.identifiers = identifiers or {}

    def get_repository(self, type_name: str) -> FakeRepository:
        from resync.domain.exceptions import RepositoryNotFoundError

        if type_name not in self.repositories:
            raise RepositoryNotFoundError(type_name, "relational")
        return self.repositories[type_name]

    def get_class_metadata(self, type_name: str) -> StoreMetadata:
        self.get_repository(type_name)
        return StoreMetadata(self.identifiers.get(type_name, ("id",)))


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path for a relational test database (not created)."""
    return tmp_path / "data.db"
