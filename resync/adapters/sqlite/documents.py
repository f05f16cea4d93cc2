"""SQLite adapter implementing the "mongodb" manager registry.

Records come from document collections: each collection is a table of
(_id TEXT PRIMARY KEY, document TEXT) rows where document holds the JSON
body. The identifier field of every collection is "_id".
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from resync.adapters.sqlite.base_repository import SQLiteBaseRepository
from resync.adapters.sqlite.relational import build_order_by, quote_identifier
from resync.domain.entities import Record
from resync.domain.exceptions import RepositoryNotFoundError
from resync.ports.stores import StoreMetadata

logger = logging.getLogger(__name__)

SOURCE_KIND = "mongodb"
ID_FIELD = "_id"
COLLECTION_COLUMNS = {ID_FIELD, "document"}


class DocumentCollectionRepository:
    """Repository handle over a single document collection."""

    def __init__(
        self, registry: "SQLiteDocumentRegistry", type_name: str, collection: str
    ) -> None:
        self._registry = registry
        self.type_name = type_name
        self.collection = collection

    def find_page(
        self,
        criteria: dict[str, Any],
        order_by: dict[str, str] | None,
        limit: int,
        offset: int,
    ) -> list[Record]:
        """Fetch one page of documents, ordered by _id unless told otherwise.

        Criteria and sort fields other than _id address top-level document
        fields.
        """
        clauses = []
        params: list[Any] = []
        for field, value in criteria.items():
            clauses.append(f"{self._field_expr(field)} = ?")
            params.append(value)
        where = " WHERE " + " AND ".join(clauses) if clauses else ""

        if order_by:
            order = self._order(order_by)
        else:
            order = build_order_by({ID_FIELD: "ASC"})

        sql = (
            f"SELECT {ID_FIELD}, document FROM {quote_identifier(self.collection)}"
            f"{where}{order} LIMIT ? OFFSET ?"
        )
        rows = self._registry._get_connection().execute(
            sql, [*params, limit, offset]
        ).fetchall()
        return [self._to_record(row) for row in rows]

    def count(self, field: str) -> int:
        row = self._registry._get_connection().execute(
            f"SELECT COUNT({self._field_expr(field)}) "
            f"FROM {quote_identifier(self.collection)}"
        ).fetchone()
        return int(row[0])

    def _order(self, order_by: Mapping[str, str]) -> str:
        parts = []
        for field, direction in order_by.items():
            direction = direction.upper()
            if direction not in ("ASC", "DESC"):
                raise ValueError(f"Invalid sort direction for {field}: {direction}")
            parts.append(f"{self._field_expr(field)} {direction}")
        return " ORDER BY " + ", ".join(parts)

    @staticmethod
    def _field_expr(field: str) -> str:
        if field == ID_FIELD:
            return ID_FIELD
        # json_extract path, with the key quoted so dots stay part of the name
        key = field.replace('"', '\\"').replace("'", "''")
        return f"json_extract(document, '$.\"{key}\"')"

    def _to_record(self, row) -> Record:
        fields = json.loads(row["document"])
        if not isinstance(fields, dict):
            fields = {"value": fields}
        fields[ID_FIELD] = row[ID_FIELD]
        return Record(entity_type=self.type_name, id=str(row[ID_FIELD]), fields=fields)


class SQLiteDocumentRegistry(SQLiteBaseRepository):
    """Manager registry over the document collections of one SQLite file."""

    def __init__(
        self, db_path: Path, collections: Mapping[str, str] | None = None
    ) -> None:
        """Initialize the registry.

        Args:
            db_path: Path to the document store file.
            collections: Entity type name to collection name overrides.
        """
        super().__init__(db_path, read_only=True)
        self._collections = dict(collections or {})

    def collection_for(self, type_name: str) -> str:
        return self._collections.get(type_name, type_name)

    def get_repository(self, type_name: str) -> DocumentCollectionRepository:
        collection = self._require_collection(type_name)
        return DocumentCollectionRepository(self, type_name, collection)

    def get_class_metadata(self, type_name: str) -> StoreMetadata:
        self._require_collection(type_name)
        return StoreMetadata((ID_FIELD,))

    def _require_collection(self, type_name: str) -> str:
        if not Path(self.db_path).exists():
            raise RepositoryNotFoundError(
                type_name, SOURCE_KIND, reason=f"database {self.db_path} does not exist"
            )
        collection = self.collection_for(type_name)
        if not self._table_exists(collection):
            raise RepositoryNotFoundError(type_name, SOURCE_KIND)
        columns = {
            row["name"]
            for row in self._get_connection().execute(
                f"PRAGMA table_info({quote_identifier(collection)})"
            )
        }
        if not COLLECTION_COLUMNS <= columns:
            logger.debug("Table %s is not a document collection", collection)
            raise RepositoryNotFoundError(
                type_name, SOURCE_KIND, reason=f"{collection} is not a document collection"
            )
        return collection
