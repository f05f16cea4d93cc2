"""SQLite FTS5 adapter implementing the IndexClient protocol.

Documents are stored per index in a `documents` table keyed by
(index_name, doc_id), with their searchable text mirrored into the FTS5
virtual table `document_text`. Synchronizing a record replaces whatever the
index held for it.
"""

import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any

import blake3

from resync.adapters.metadata import ConfigMetadataFactory
from resync.adapters.sqlite.base_repository import SQLiteBaseRepository
from resync.domain.entities import EntityTypeDescriptor, Record
from resync.domain.exceptions import MetadataNotFoundError
from resync.domain.results import Fail, Ok

logger = logging.getLogger(__name__)


def init_index(conn: sqlite3.Connection) -> None:
    """Create the index tables if they do not exist yet.

    Args:
        conn: Open SQLite connection
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS documents (
            index_name TEXT NOT NULL,
            doc_id TEXT NOT NULL,
            entity_type TEXT NOT NULL,
            body TEXT NOT NULL,
            content_hash TEXT NOT NULL,
            indexed_at REAL NOT NULL,
            PRIMARY KEY (index_name, doc_id)
        )
    """)
    # tokenize='porter' uses Porter stemming for better English matching
    conn.execute("""
        CREATE VIRTUAL TABLE IF NOT EXISTS document_text USING fts5(
            content,
            index_name UNINDEXED,
            doc_id UNINDEXED,
            tokenize='porter unicode61'
        )
    """)
    conn.commit()


def build_text(fields: dict[str, Any], text_fields: list[str]) -> str:
    """Concatenate the text to index for a record.

    Args:
        fields: Record field values.
        text_fields: Fields to index, in order. Empty means every string field.

    Returns:
        Space-separated text of the selected, non-null values.
    """
    if text_fields:
        values = [fields.get(name) for name in text_fields]
    else:
        values = [value for value in fields.values() if isinstance(value, str)]
    return " ".join(str(value) for value in values if value is not None)


class SQLiteFTSIndex(SQLiteBaseRepository):
    """Full-text search index backed by SQLite FTS5."""

    def __init__(self, db_path: Path, metadata: ConfigMetadataFactory) -> None:
        """Initialize FTS5 index adapter.

        Args:
            db_path: Path to the SQLite file holding the index.
            metadata: Indexing metadata for entity types.
        """
        super().__init__(db_path)
        self._metadata = metadata
        self._initialized = False

    def metadata_for(self, type_name: str) -> EntityTypeDescriptor:
        """Get index metadata for an entity type.

        Raises:
            MetadataNotFoundError: If the type is not configured for indexing.
        """
        return self._metadata.load_information(type_name)

    def synchronize_index(self, record: Record) -> Ok[str] | Fail:
        """Add or replace a record's document.

        Unchanged documents (same content hash) are left as they are.

        Returns:
            Ok with the document id, or Fail if the record cannot be indexed.

        Raises:
            sqlite3.Error: If the index database cannot be written.
        """
        try:
            descriptor = self._metadata.load_information(record.entity_type)
        except MetadataNotFoundError as e:
            return Fail(e.message)

        missing = [
            name
            for name in self._metadata.fields_for(record.entity_type)
            if name not in record.fields
        ]
        if missing:
            return Fail(f"Record is missing indexed field(s): {', '.join(missing)}")

        try:
            body = json.dumps(record.fields, sort_keys=True)
        except (TypeError, ValueError) as e:
            return Fail(f"Record is not serializable: {e}")

        index_name = descriptor.index_name or record.entity_type.lower()
        content_hash = blake3.blake3(body.encode("utf-8")).hexdigest()
        text = build_text(record.fields, self._metadata.fields_for(record.entity_type))

        conn = self._connection()
        row = conn.execute(
            "SELECT content_hash FROM documents WHERE index_name = ? AND doc_id = ?",
            (index_name, record.id),
        ).fetchone()
        if row is not None and row["content_hash"] == content_hash:
            logger.debug("%s/%s unchanged", index_name, record.id)
            return Ok(record.id)

        with conn:
            conn.execute(
                """
                INSERT INTO documents (
                    index_name, doc_id, entity_type, body, content_hash, indexed_at
                )
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(index_name, doc_id) DO UPDATE SET
                    entity_type = excluded.entity_type,
                    body = excluded.body,
                    content_hash = excluded.content_hash,
                    indexed_at = excluded.indexed_at
                """,
                (index_name, record.id, record.entity_type, body, content_hash, time.time()),
            )
            conn.execute(
                "DELETE FROM document_text WHERE index_name = ? AND doc_id = ?",
                (index_name, record.id),
            )
            conn.execute(
                "INSERT INTO document_text (content, index_name, doc_id) VALUES (?, ?, ?)",
                (text, index_name, record.id),
            )
        return Ok(record.id)

    def get_document(self, index_name: str, doc_id: str) -> dict[str, Any] | None:
        """Get the stored body of a document, or None if it is not indexed."""
        row = self._connection().execute(
            "SELECT body FROM documents WHERE index_name = ? AND doc_id = ?",
            (index_name, doc_id),
        ).fetchone()
        return json.loads(row["body"]) if row else None

    def count_documents(self, index_name: str) -> int:
        row = self._connection().execute(
            "SELECT COUNT(*) FROM documents WHERE index_name = ?", (index_name,)
        ).fetchone()
        return int(row[0])

    def query(self, index_name: str, q: str, topk: int = 20) -> list[tuple[str, float]]:
        """Query one index using FTS5 full-text search.

        Args:
            index_name: Index to search.
            q: Query string (FTS5 query syntax).
            topk: Maximum number of results to return.

        Returns:
            List of (doc_id, score) tuples, most relevant first. Score is the
            negated BM25 rank (higher = more relevant).
        """
        rows = self._connection().execute(
            """
            SELECT doc_id, -rank AS score
            FROM document_text
            WHERE document_text MATCH ? AND index_name = ?
            ORDER BY rank
            LIMIT ?
            """,
            (q, index_name, topk),
        ).fetchall()
        return [(row["doc_id"], row["score"]) for row in rows]

    def _connection(self) -> sqlite3.Connection:
        conn = self._get_connection()
        if not self._initialized:
            init_index(conn)
            self._initialized = True
        return conn
