"""Entity type resolution.

Decides which entity types a run processes: either the single type the
caller asked for, or every type registered under the known namespaces that
is configured for indexing.
"""

import logging

from resync.domain.entities import EntityTypeDescriptor
from resync.domain.exceptions import MetadataNotFoundError
from resync.ports.index import KnownNamespaces, MetadataFactory

logger = logging.getLogger(__name__)


class EntityTypeResolver:
    """Produces the ordered list of entity types to synchronize."""

    def __init__(self, namespaces: KnownNamespaces, metadata: MetadataFactory) -> None:
        """Initialize the resolver.

        Args:
            namespaces: Registry of entity names to scan when no type is given.
            metadata: Metadata factory used to keep only indexable names.
        """
        self._namespaces = namespaces
        self._metadata = metadata

    def resolve(self, explicit_type: str | None = None) -> list[EntityTypeDescriptor]:
        """Resolve the entity types to process.

        An explicit type is wrapped as-is, after trimming surrounding
        whitespace; a blank name counts as no selection. Whether the store
        knows the type is checked later, when its repository is opened.

        Args:
            explicit_type: Entity type name selected by the caller, if any.

        Returns:
            Descriptors in processing order. May be empty.
        """
        explicit_type = (explicit_type or "").strip()
        if explicit_type:
            return [EntityTypeDescriptor.unresolved(explicit_type)]

        descriptors: list[EntityTypeDescriptor] = []
        seen: set[str] = set()
        for name in self._namespaces.entity_names():
            if name in seen:
                continue
            seen.add(name)
            try:
                descriptors.append(self._metadata.load_information(name))
            except MetadataNotFoundError:
                logger.debug("Skipping %s: not configured for indexing", name)
                continue

        logger.info(
            "Resolved %d indexable type(s) from %d candidate(s)",
            len(descriptors),
            len(seen),
        )
        return descriptors
