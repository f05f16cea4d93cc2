"""Store port interfaces for reading records.

These protocols describe the data store a sweep reads from: a manager
registry selected by source kind, and the repository handles it hands out.
Implementations live in the adapters/ layer.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from resync.domain.entities import Record


@dataclass(frozen=True)
class StoreMetadata:
    """Store-side metadata for an entity type.

    Attributes:
        identifier_field_names: Identifier (primary key) fields, in key order.
    """

    identifier_field_names: tuple[str, ...] = ()


class RepositoryHandle(Protocol):
    """Access to the records of a single entity type."""

    def find_page(
        self,
        criteria: dict[str, Any],
        order_by: dict[str, str] | None,
        limit: int,
        offset: int,
    ) -> list[Record]:
        """Fetch one page of records.

        Args:
            criteria: Field equality filters (empty for all records).
            order_by: Field to direction mapping, or None for the store default.
            limit: Maximum number of records to return.
            offset: Number of records to skip.

        Returns:
            Records in store order, at most `limit` of them.
        """
        ...

    def count(self, field: str) -> int:
        """Count records with a non-null value in `field`."""
        ...


class ManagerRegistry(Protocol):
    """Object manager for one source kind."""

    def get_repository(self, type_name: str) -> RepositoryHandle:
        """Get the repository for an entity type.

        Raises:
            RepositoryNotFoundError: If the type is unknown to this store.
        """
        ...

    def get_class_metadata(self, type_name: str) -> StoreMetadata:
        """Get store metadata for an entity type.

        Raises:
            RepositoryNotFoundError: If the type is unknown to this store.
        """
        ...
