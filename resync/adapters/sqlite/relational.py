"""SQLite adapter implementing the "relational" manager registry.

Each entity type maps to one table. Identifier fields are the table's
declared primary key columns, in key order.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from resync.adapters.sqlite.base_repository import SQLiteBaseRepository
from resync.domain.entities import Record
from resync.domain.exceptions import NoIdentifierError, RepositoryNotFoundError
from resync.ports.stores import StoreMetadata

logger = logging.getLogger(__name__)

SOURCE_KIND = "relational"
KEY_SEPARATOR = ":"


def quote_identifier(name: str) -> str:
    """Quote a table or column name for use in SQL."""
    return '"' + name.replace('"', '""') + '"'


def build_where(criteria: Mapping[str, Any]) -> tuple[str, list[Any]]:
    """Build an equality WHERE clause from field criteria."""
    if not criteria:
        return "", []
    clauses = [f"{quote_identifier(field)} = ?" for field in criteria]
    return " WHERE " + " AND ".join(clauses), list(criteria.values())


def compose_record_id(values: list[Any]) -> str:
    """Join identifier values into one record id.

    Backslashes and separators inside a value are escaped, so distinct key
    tuples always give distinct ids. A single-column key is its plain value.
    """
    if len(values) == 1:
        return str(values[0])
    return KEY_SEPARATOR.join(
        str(value).replace("\\", "\\\\").replace(KEY_SEPARATOR, "\\" + KEY_SEPARATOR)
        for value in values
    )


def build_order_by(order_by: Mapping[str, str]) -> str:
    """Build an ORDER BY clause from a field to direction mapping.

    Raises:
        ValueError: If a direction is not ASC or DESC.
    """
    parts = []
    for field, direction in order_by.items():
        direction = direction.upper()
        if direction not in ("ASC", "DESC"):
            raise ValueError(f"Invalid sort direction for {field}: {direction}")
        parts.append(f"{quote_identifier(field)} {direction}")
    return " ORDER BY " + ", ".join(parts)


class SQLiteTableRepository:
    """Repository handle over a single table."""

    def __init__(
        self,
        registry: "SQLiteRelationalRegistry",
        type_name: str,
        table: str,
        identifier_fields: tuple[str, ...],
    ) -> None:
        self._registry = registry
        self.type_name = type_name
        self.table = table
        self.identifier_fields = identifier_fields

    def find_page(
        self,
        criteria: dict[str, Any],
        order_by: dict[str, str] | None,
        limit: int,
        offset: int,
    ) -> list[Record]:
        """Fetch one page of rows as records.

        Without an explicit order, rows are ordered by primary key so
        consecutive pages do not overlap.

        Raises:
            NoIdentifierError: If the table has no primary key.
        """
        if not self.identifier_fields:
            raise NoIdentifierError(self.type_name)
        where, params = build_where(criteria)
        if order_by:
            order = build_order_by(order_by)
        else:
            order = build_order_by({field: "ASC" for field in self.identifier_fields})

        sql = (
            f"SELECT * FROM {quote_identifier(self.table)}"
            f"{where}{order} LIMIT ? OFFSET ?"
        )
        conn = self._registry._get_connection()
        rows = conn.execute(sql, [*params, limit, offset]).fetchall()
        return [self._to_record(row) for row in rows]

    def count(self, field: str) -> int:
        conn = self._registry._get_connection()
        row = conn.execute(
            f"SELECT COUNT({quote_identifier(field)}) "
            f"FROM {quote_identifier(self.table)}"
        ).fetchone()
        return int(row[0])

    def _to_record(self, row) -> Record:
        fields = dict(row)
        record_id = compose_record_id([fields[name] for name in self.identifier_fields])
        return Record(entity_type=self.type_name, id=record_id, fields=fields)


class SQLiteRelationalRegistry(SQLiteBaseRepository):
    """Manager registry over the tables of one SQLite database.

    The database is opened read-only: a sweep never writes to its source.
    """

    def __init__(self, db_path: Path, tables: Mapping[str, str] | None = None) -> None:
        """Initialize the registry.

        Args:
            db_path: Path to the SQLite database holding the entity tables.
            tables: Entity type name to table name overrides. Types not listed
                use their own name as table name.
        """
        super().__init__(db_path, read_only=True)
        self._tables = dict(tables or {})

    def table_for(self, type_name: str) -> str:
        return self._tables.get(type_name, type_name)

    def get_repository(self, type_name: str) -> SQLiteTableRepository:
        table = self._require_table(type_name)
        metadata = self.get_class_metadata(type_name)
        return SQLiteTableRepository(
            self, type_name, table, metadata.identifier_field_names
        )

    def get_class_metadata(self, type_name: str) -> StoreMetadata:
        table = self._require_table(type_name)
        rows = self._get_connection().execute(
            f"PRAGMA table_info({quote_identifier(table)})"
        ).fetchall()
        # pk is the 1-based position in the primary key, 0 for other columns
        key_columns = sorted((row["pk"], row["name"]) for row in rows if row["pk"])
        return StoreMetadata(tuple(name for _, name in key_columns))

    def _require_table(self, type_name: str) -> str:
        if not Path(self.db_path).exists():
            raise RepositoryNotFoundError(
                type_name, SOURCE_KIND, reason=f"database {self.db_path} does not exist"
            )
        table = self.table_for(type_name)
        if not self._table_exists(table):
            logger.debug("Table %s not found in %s", table, self.db_path)
            raise RepositoryNotFoundError(type_name, SOURCE_KIND)
        return table
