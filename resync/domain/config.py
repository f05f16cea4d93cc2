"""Config domain models for resync.

Configuration is stored in resync.toml and describes where records are read
from, where the search index lives, and which entity types are indexable.
This module defines the domain models that represent validated configuration
state.
"""

from dataclasses import dataclass, field

SOURCE_KINDS: tuple[str, ...] = ("relational", "mongodb")
DEFAULT_BATCH_SIZE = 500


@dataclass(frozen=True)
class SourceConfig:
    """Configuration for the record store.

    The kind is deliberately not validated here: an unknown kind is reported
    by the record source at the start of a run.

    Attributes:
        kind: Default source kind - "relational" or "mongodb"
        database: Path to the relational SQLite database
        document_database: Path to the document store, or None if not configured
    """

    kind: str = "relational"
    database: str = "data.db"
    document_database: str | None = None


@dataclass(frozen=True)
class IndexConfig:
    """Configuration for the search index.

    Attributes:
        database: Path to the SQLite file holding the full-text index
    """

    database: str = "index.db"


@dataclass(frozen=True)
class SyncConfig:
    """Configuration for synchronization runs.

    Attributes:
        batch_size: Records fetched per page (default: 500)

    Raises:
        ValueError: If batch_size is not positive.
    """

    batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self) -> None:
        """Validate sync config after initialization."""
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")


@dataclass(frozen=True)
class EntityConfig:
    """Indexing settings for one entity type.

    Attributes:
        name: Entity type name
        index: Index name (defaults to the lowercased type name)
        table: Table or collection holding the records (defaults to name)
        identifier: Identifier field shown in reports (defaults to the store key)
        fields: Fields whose text is indexed; empty means all text fields

    Raises:
        ValueError: If name is empty.
    """

    name: str
    index: str | None = None
    table: str | None = None
    identifier: str | None = None
    fields: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Entity name cannot be empty")

    @property
    def index_name(self) -> str:
        return self.index or self.name.lower()

    @property
    def table_name(self) -> str:
        return self.table or self.name


@dataclass(frozen=True)
class ResyncConfig:
    """Complete resync configuration.

    Attributes:
        source: Record store configuration
        index: Search index configuration
        sync: Run configuration
        namespaces: Known type namespaces mapped to the entity names they list
        entities: Entity types configured for indexing, keyed by name
    """

    source: SourceConfig = field(default_factory=SourceConfig)
    index: IndexConfig = field(default_factory=IndexConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    namespaces: dict[str, list[str]] = field(default_factory=dict)
    entities: dict[str, EntityConfig] = field(default_factory=dict)

    @staticmethod
    def default() -> "ResyncConfig":
        """Create a config with all default values."""
        return ResyncConfig(
            source=SourceConfig(),
            index=IndexConfig(),
            sync=SyncConfig(),
        )
