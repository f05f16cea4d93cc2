"""Tests for config domain models."""

import pytest

from resync.domain.config import (
    SOURCE_KINDS,
    EntityConfig,
    ResyncConfig,
    SourceConfig,
    SyncConfig,
)


class TestSyncConfig:
    """Tests for SyncConfig validation."""

    def test_default_batch_size(self):
        assert SyncConfig().batch_size == 500

    @pytest.mark.parametrize("batch_size", [0, -5])
    def test_non_positive_batch_size_rejected(self, batch_size):
        with pytest.raises(ValueError, match="batch_size must be positive"):
            SyncConfig(batch_size=batch_size)


class TestEntityConfig:
    """Tests for EntityConfig defaults."""

    def test_index_and_table_default_from_name(self):
        entity = EntityConfig(name="BlogPost")
        assert entity.index_name == "blogpost"
        assert entity.table_name == "BlogPost"

    def test_explicit_index_and_table(self):
        entity = EntityConfig(name="BlogPost", index="posts", table="blog_posts")
        assert entity.index_name == "posts"
        assert entity.table_name == "blog_posts"

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            EntityConfig(name="")


def test_source_kind_not_validated_at_load():
    """Unknown kinds are reported when a run starts, not at config load."""
    assert SourceConfig(kind="cassandra").kind == "cassandra"


def test_known_source_kinds():
    assert SOURCE_KINDS == ("relational", "mongodb")


def test_default_config():
    config = ResyncConfig.default()
    assert config.source.kind == "relational"
    assert config.index.database == "index.db"
    assert config.namespaces == {}
    assert config.entities == {}
