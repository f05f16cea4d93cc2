"""Configuration I/O utilities for reading and writing TOML config files.

This module handles serialization/deserialization of ResyncConfig to/from TOML format.
"""

import os
import platform
import tomllib  # Built-in Python 3.11+
from pathlib import Path
from typing import Any

import tomli_w

from resync.domain.config import (
    EntityConfig,
    IndexConfig,
    ResyncConfig,
    SourceConfig,
    SyncConfig,
)

DEFAULT_CONFIG_NAME = "resync.toml"


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/resync/config.toml or ~/.config/resync/config.toml
    - Windows: %APPDATA%/resync/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "resync" / "config.toml"
        return Path.home() / ".config" / "resync" / "config.toml"
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg_config:
            return Path(xdg_config) / "resync" / "config.toml"
        return Path.home() / ".config" / "resync" / "config.toml"


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to a TOML config file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e


def merge_config_data(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge two config dictionaries, with override values taking precedence.

    Performs a shallow merge at the section level: keys present in an override
    section replace the same keys of the base section. For [entities] and
    [namespaces] this means a whole entity or namespace entry is replaced.

    Args:
        base: Base configuration dictionary
        override: Override configuration dictionary (takes precedence)

    Returns:
        Merged configuration dictionary
    """
    result: dict[str, Any] = {}

    for section in set(base.keys()) | set(override.keys()):
        base_section = base.get(section, {})
        override_section = override.get(section, {})

        if isinstance(base_section, dict) and isinstance(override_section, dict):
            result[section] = {**base_section, **override_section}
        elif section in override:
            result[section] = override_section
        else:
            result[section] = base_section

    return result


def _parse_namespaces(data: Any) -> dict[str, list[str]]:
    if not isinstance(data, dict):
        raise ValueError("[namespaces] must be a table of name = [entity, ...]")
    namespaces: dict[str, list[str]] = {}
    for name, entities in data.items():
        if not isinstance(entities, list) or not all(
            isinstance(entity, str) for entity in entities
        ):
            raise ValueError(f"Namespace {name} must list entity names as strings")
        namespaces[name] = entities
    return namespaces


def _parse_entities(data: Any) -> dict[str, EntityConfig]:
    if not isinstance(data, dict):
        raise ValueError("[entities] must be a table of entity sections")
    entities: dict[str, EntityConfig] = {}
    for name, settings in data.items():
        if not isinstance(settings, dict):
            raise ValueError(f"[entities.{name}] must be a table")
        entities[name] = EntityConfig(name=name, **settings)
    return entities


def config_data_to_resync_config(data: dict[str, Any]) -> ResyncConfig:
    """Convert raw config data dictionary to ResyncConfig.

    Args:
        data: Dictionary with config sections

    Returns:
        ResyncConfig instance

    Raises:
        ValueError: If a section has unknown keys or invalid values
    """
    try:
        return ResyncConfig(
            source=SourceConfig(**data.get("source", {})),
            index=IndexConfig(**data.get("index", {})),
            sync=SyncConfig(**data.get("sync", {})),
            namespaces=_parse_namespaces(data.get("namespaces", {})),
            entities=_parse_entities(data.get("entities", {})),
        )
    except TypeError as e:
        # Unknown keys surface as unexpected keyword arguments
        raise ValueError(f"Invalid config: {e}") from e


def load_config(path: Path) -> ResyncConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to a TOML config file

    Returns:
        Parsed ResyncConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    data = load_config_data(path)
    return config_data_to_resync_config(data)


def save_config(config: ResyncConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: ResyncConfig to save
        path: Destination path
    """
    source: dict[str, Any] = {
        "kind": config.source.kind,
        "database": config.source.database,
    }
    if config.source.document_database is not None:
        source["document_database"] = config.source.document_database

    entities: dict[str, Any] = {}
    for name, entity in config.entities.items():
        section: dict[str, Any] = {"fields": entity.fields}
        for key in ("index", "table", "identifier"):
            value = getattr(entity, key)
            if value is not None:
                section[key] = value
        entities[name] = section

    data: dict[str, Any] = {
        "source": source,
        "index": {"database": config.index.database},
        "sync": {"batch_size": config.sync.batch_size},
        "namespaces": config.namespaces,
        "entities": entities,
    }

    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("wb") as f:
        tomli_w.dump(data, f)


def create_default_config_file(path: Path) -> None:
    """Create a default config file with sensible defaults and comments.

    Args:
        path: Destination path for resync.toml
    """
    # Template string preserves comments and formatting
    template = """\
# resync configuration
# Created by: resync init

[source]
# Default source to read entities from: "relational" or "mongodb"
kind = "relational"

# SQLite database holding one table per entity type
database = "data.db"

# Document store holding one collection per entity type (mongodb source)
# document_database = "documents.db"

[index]
# SQLite file holding the full-text search index
database = "index.db"

[sync]
# Number of records fetched and indexed per page
batch_size = 500

[namespaces]
# Entity names scanned when no entity is given on the command line.
# Names without an [entities.<Name>] section are skipped.
app = []

# [entities.Book]
# index = "books"                # defaults to the lowercased entity name
# table = "books"                # table or collection, defaults to the entity name
# fields = ["title", "summary"]  # text to index, defaults to all text fields
"""

    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        f.write(template)
