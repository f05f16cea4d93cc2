"""Unit tests for the relational SQLite registry."""

from pathlib import Path

import pytest

from resync.adapters.sqlite.relational import (
    SQLiteRelationalRegistry,
    build_order_by,
    build_where,
    compose_record_id,
    quote_identifier,
)
from resync.domain.exceptions import NoIdentifierError, RepositoryNotFoundError
from tests.conftest import create_table


@pytest.fixture
def books_db(db_path: Path) -> Path:
    create_table(
        db_path,
        "Book",
        "id INTEGER PRIMARY KEY, title TEXT, year INTEGER",
        [(3, "Emma", 1815), (1, "Dune", 1965), (2, "Ulysses", 1922)],
    )
    return db_path


class TestSqlHelpers:
    """Tests for SQL fragment builders."""

    def test_quote_identifier_escapes_quotes(self) -> None:
        assert quote_identifier('we"ird') == '"we""ird"'

    def test_build_where_empty(self) -> None:
        assert build_where({}) == ("", [])

    def test_build_where_equality_clauses(self) -> None:
        clause, params = build_where({"year": 1965, "title": "Dune"})
        assert clause == ' WHERE "year" = ? AND "title" = ?'
        assert params == [1965, "Dune"]

    def test_compose_record_id_single_key(self) -> None:
        assert compose_record_id([42]) == "42"

    def test_compose_record_id_escapes_separator(self) -> None:
        assert compose_record_id(["a:b", "c"]) != compose_record_id(["a", "b:c"])
        assert compose_record_id(["a:b", "c"]) == "a\\:b:c"

    def test_build_order_by_normalizes_direction(self) -> None:
        assert build_order_by({"year": "desc"}) == ' ORDER BY "year" DESC'

    def test_build_order_by_rejects_unknown_direction(self) -> None:
        with pytest.raises(ValueError, match="Invalid sort direction"):
            build_order_by({"year": "sideways"})


class TestRegistryLookup:
    """Tests for repository and metadata lookup."""

    def test_missing_database_raises_not_found(self, tmp_path: Path) -> None:
        registry = SQLiteRelationalRegistry(tmp_path / "missing.db")

        with pytest.raises(RepositoryNotFoundError, match="does not exist"):
            registry.get_repository("Book")

        assert not (tmp_path / "missing.db").exists()

    def test_missing_table_raises_not_found(self, books_db: Path) -> None:
        with SQLiteRelationalRegistry(books_db) as registry:
            with pytest.raises(RepositoryNotFoundError) as exc_info:
                registry.get_repository("Author")

        assert exc_info.value.message == 'No repository found for "Author" in relational source'

    def test_table_override(self, books_db: Path) -> None:
        with SQLiteRelationalRegistry(books_db, {"Novel": "Book"}) as registry:
            repository = registry.get_repository("Novel")
            assert repository.table == "Book"
            assert repository.type_name == "Novel"

    def test_metadata_lists_primary_key(self, books_db: Path) -> None:
        with SQLiteRelationalRegistry(books_db) as registry:
            assert registry.get_class_metadata("Book").identifier_field_names == ("id",)

    def test_composite_key_in_key_order(self, db_path: Path) -> None:
        create_table(
            db_path,
            "Edition",
            "year INTEGER, isbn TEXT, title TEXT, PRIMARY KEY (isbn, year)",
        )
        with SQLiteRelationalRegistry(db_path) as registry:
            metadata = registry.get_class_metadata("Edition")

        assert metadata.identifier_field_names == ("isbn", "year")

    def test_table_without_key_has_no_identifier(self, db_path: Path) -> None:
        create_table(db_path, "Log", "message TEXT")
        with SQLiteRelationalRegistry(db_path) as registry:
            assert registry.get_class_metadata("Log").identifier_field_names == ()


class TestTableRepository:
    """Tests for paging and counting rows."""

    def test_count_by_identifier(self, books_db: Path) -> None:
        with SQLiteRelationalRegistry(books_db) as registry:
            assert registry.get_repository("Book").count("id") == 3

    def test_pages_ordered_by_primary_key(self, books_db: Path) -> None:
        with SQLiteRelationalRegistry(books_db) as registry:
            repository = registry.get_repository("Book")
            first = repository.find_page({}, None, limit=2, offset=0)
            second = repository.find_page({}, None, limit=2, offset=2)

        assert [r.id for r in first] == ["1", "2"]
        assert [r.id for r in second] == ["3"]

    def test_record_carries_row_fields(self, books_db: Path) -> None:
        with SQLiteRelationalRegistry(books_db) as registry:
            (record,) = registry.get_repository("Book").find_page({}, None, 1, 0)

        assert record.entity_type == "Book"
        assert record.fields == {"id": 1, "title": "Dune", "year": 1965}

    def test_criteria_and_order(self, books_db: Path) -> None:
        with SQLiteRelationalRegistry(books_db) as registry:
            repository = registry.get_repository("Book")
            newest = repository.find_page({}, {"year": "DESC"}, 1, 0)
            emma = repository.find_page({"title": "Emma"}, None, 10, 0)

        assert newest[0].fields["title"] == "Dune"
        assert [r.id for r in emma] == ["3"]

    def test_offset_past_end_is_empty(self, books_db: Path) -> None:
        with SQLiteRelationalRegistry(books_db) as registry:
            assert registry.get_repository("Book").find_page({}, None, 10, 10) == []

    def test_table_without_key_cannot_be_paged(self, db_path: Path) -> None:
        create_table(db_path, "Log", "message TEXT", [("a",), ("b",)])
        with SQLiteRelationalRegistry(db_path) as registry:
            with pytest.raises(NoIdentifierError):
                registry.get_repository("Log").find_page({}, None, 10, 0)

    def test_composite_key_rows_get_distinct_ids(self, db_path: Path) -> None:
        create_table(
            db_path,
            "Line",
            "order_id INTEGER, line_no INTEGER, sku TEXT, PRIMARY KEY (order_id, line_no)",
            [(1, 2, "b"), (1, 1, "a"), (2, 1, "c")],
        )
        with SQLiteRelationalRegistry(db_path) as registry:
            records = registry.get_repository("Line").find_page({}, None, 10, 0)

        assert [r.id for r in records] == ["1:1", "1:2", "2:1"]

    def test_registry_is_read_only(self, books_db: Path) -> None:
        import sqlite3

        with SQLiteRelationalRegistry(books_db) as registry:
            registry.get_repository("Book")
            with pytest.raises(sqlite3.OperationalError):
                registry._get_connection().execute("DELETE FROM Book")
