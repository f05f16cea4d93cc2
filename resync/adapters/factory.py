"""Factory classes for use case and adapter instantiation.

This module centralizes the creation of the sync orchestrator and its
collaborators, keeping the CLI layer free from direct adapter imports. Every
collaborator is constructed explicitly and injected; nothing is looked up
from a global container.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Self

if TYPE_CHECKING:
    from resync.adapters.fts.sqlite_fts import SQLiteFTSIndex
    from resync.adapters.sqlite.base_repository import SQLiteBaseRepository
    from resync.core.sync import EntityTypeResolver, SyncOrchestrator
    from resync.domain.config import ResyncConfig
    from resync.ports.config import ConfigProvider
    from resync.ports.stores import ManagerRegistry

logger = logging.getLogger(__name__)


def resolve_path(base_dir: Path, value: str) -> Path:
    """Resolve a configured path relative to the config file's directory."""
    path = Path(value).expanduser()
    return path if path.is_absolute() else base_dir / path


class ConfigFactory:
    """Factory for creating configuration providers."""

    def create_config_provider(self) -> ConfigProvider:
        from resync.adapters.config.toml_config_provider import TomlConfigProvider

        return TomlConfigProvider()


class SyncFactory:
    """Factory wiring the sync core to the SQLite store and index adapters.

    Owns the SQLite connections it opens; use as a context manager or call
    close() when the run is over.

    Args:
        config: Loaded configuration.
        base_dir: Directory that relative config paths are resolved against.
    """

    def __init__(self, config: ResyncConfig, base_dir: Path) -> None:
        self._config = config
        self._base_dir = base_dir
        self._index: SQLiteFTSIndex | None = None
        self._registries: dict[str, ManagerRegistry] | None = None
        self._closeables: list[SQLiteBaseRepository] = []

    def create_resolver(self) -> EntityTypeResolver:
        from resync.adapters.metadata import ConfigMetadataFactory, ConfigNamespaces
        from resync.core.sync import EntityTypeResolver

        return EntityTypeResolver(
            ConfigNamespaces(self._config.namespaces),
            ConfigMetadataFactory(self._config.entities),
        )

    def create_index(self) -> SQLiteFTSIndex:
        """Create (once) the full-text index client."""
        from resync.adapters.fts.sqlite_fts import SQLiteFTSIndex
        from resync.adapters.metadata import ConfigMetadataFactory

        if self._index is None:
            db_path = resolve_path(self._base_dir, self._config.index.database)
            logger.debug("Using search index at %s", db_path)
            self._index = SQLiteFTSIndex(
                db_path, ConfigMetadataFactory(self._config.entities)
            )
        return self._index

    def create_registries(self) -> dict[str, ManagerRegistry]:
        """Create (once) a manager registry for each configured source kind."""
        from resync.adapters.sqlite.documents import SQLiteDocumentRegistry
        from resync.adapters.sqlite.relational import SQLiteRelationalRegistry

        if self._registries is None:
            tables = {
                name: entity.table
                for name, entity in self._config.entities.items()
                if entity.table
            }
            source = self._config.source
            relational = SQLiteRelationalRegistry(
                resolve_path(self._base_dir, source.database), tables
            )
            registries: dict[str, ManagerRegistry] = {"relational": relational}
            self._closeables.append(relational)
            if source.document_database:
                documents = SQLiteDocumentRegistry(
                    resolve_path(self._base_dir, source.document_database), tables
                )
                registries["mongodb"] = documents
                self._closeables.append(documents)
            self._registries = registries
        return self._registries

    def create_orchestrator(self, source_kind: str | None = None) -> SyncOrchestrator:
        """Create a fully wired orchestrator.

        Args:
            source_kind: Source to read from; defaults to the configured kind.

        Raises:
            UnknownSourceError: If the source kind is not recognized.
        """
        from resync.core.sync import (
            IndexSynchronizer,
            PagedRecordSource,
            SyncOrchestrator,
        )

        kind = source_kind or self._config.source.kind
        source = PagedRecordSource(kind, self.create_registries())
        index = self.create_index()
        return SyncOrchestrator(
            resolver=self.create_resolver(),
            source=source,
            synchronizer=IndexSynchronizer(index),
            index_client=index,
        )

    def close(self) -> None:
        if self._index is not None:
            self._index.close()
        for registry in self._closeables:
            registry.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
