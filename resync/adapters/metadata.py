"""Config-driven indexing metadata.

An entity type is indexable when the config has an [entities.<Type>]
section for it. Known namespaces list the entity names a full sweep scans;
names listed there without an entity section are not indexable and get
skipped during discovery.
"""

from collections.abc import Mapping

from resync.domain.config import EntityConfig
from resync.domain.entities import EntityTypeDescriptor
from resync.domain.exceptions import MetadataNotFoundError


class ConfigMetadataFactory:
    """Loads entity type descriptors from configured entity sections."""

    def __init__(self, entities: Mapping[str, EntityConfig]) -> None:
        self._entities = dict(entities)

    def load_information(self, type_name: str) -> EntityTypeDescriptor:
        """Load the descriptor for a type.

        Raises:
            MetadataNotFoundError: If the type has no entity section.
        """
        entity = self._entity(type_name)
        return EntityTypeDescriptor(
            type_name=entity.name,
            index_name=entity.index_name,
            identifier_field=entity.identifier,
        )

    def fields_for(self, type_name: str) -> list[str]:
        """Fields whose text is indexed for a type (empty: all string fields).

        Raises:
            MetadataNotFoundError: If the type has no entity section.
        """
        return list(self._entity(type_name).fields)

    def _entity(self, type_name: str) -> EntityConfig:
        entity = self._entities.get(type_name)
        if entity is None:
            raise MetadataNotFoundError(type_name)
        return entity


class ConfigNamespaces:
    """Known type namespaces, as configured in [namespaces]."""

    def __init__(self, namespaces: Mapping[str, list[str]]) -> None:
        self._namespaces = {name: list(names) for name, names in namespaces.items()}

    def entity_names(self) -> list[str]:
        """Every entity name, namespace by namespace, in config order."""
        return [name for names in self._namespaces.values() for name in names]
