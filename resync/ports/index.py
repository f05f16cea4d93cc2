"""Search index port interfaces.

Defines the index client the sweep writes to, and the metadata lookups used
to discover which entity types are indexable.
"""

from typing import Protocol

from resync.domain.entities import EntityTypeDescriptor, Record
from resync.domain.results import Fail, Ok


class IndexClient(Protocol):
    """Write interface of the search index."""

    def metadata_for(self, type_name: str) -> EntityTypeDescriptor:
        """Get index metadata for an entity type.

        Raises:
            MetadataNotFoundError: If the type is not configured for indexing.
        """
        ...

    def synchronize_index(self, record: Record) -> Ok[str] | Fail:
        """Add or replace a record in the index.

        Returns:
            Ok with the document id on success, Fail with the cause otherwise.
        """
        ...


class MetadataFactory(Protocol):
    """Loads indexing metadata for entity types."""

    def load_information(self, type_name: str) -> EntityTypeDescriptor:
        """Load the descriptor for a type.

        Raises:
            MetadataNotFoundError: If the type is not configured for indexing.
        """
        ...


class KnownNamespaces(Protocol):
    """Registry of entity names grouped by namespace."""

    def entity_names(self) -> list[str]:
        """List every registered entity name, in registration order."""
        ...
