"""Core domain entities for resync.

These are the fundamental data structures that flow through the
synchronization pipeline: type descriptors, records read from a store,
per-record outcomes, and per-type summaries.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class EntityTypeDescriptor:
    """Identifies one indexable entity type.

    Descriptors built from an explicit selection only carry the type name;
    index name and identifier field are filled in when metadata is loaded.

    Attributes:
        type_name: Entity type name as known to the store (e.g., "Book").
        index_name: Name of the search index holding this type, if known.
        identifier_field: Name of the identifier field, if known.

    Raises:
        ValueError: If type_name is empty.
    """

    type_name: str
    index_name: str | None = None
    identifier_field: str | None = None

    def __post_init__(self) -> None:
        if not self.type_name or not self.type_name.strip():
            raise ValueError("type_name cannot be empty")

    @classmethod
    def unresolved(cls, type_name: str) -> "EntityTypeDescriptor":
        """Wrap a type name without consulting any metadata."""
        return cls(type_name=type_name)


@dataclass(frozen=True)
class Record:
    """A unit of data read from the store for indexing.

    Attributes:
        entity_type: Name of the entity type this record belongs to.
        id: String form of the record's identifier value.
        fields: Field values as read from the store.
    """

    entity_type: str
    id: str
    fields: dict[str, Any] = field(default_factory=dict)


class SyncStatus(str, Enum):
    """Outcome of synchronizing a single record."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class SyncOutcome:
    """Result of pushing one record into the search index.

    Attributes:
        record_id: Identifier of the record that was processed.
        status: SUCCESS or FAILURE.
        cause: Failure description. Present if and only if status is FAILURE.

    Raises:
        ValueError: If cause presence does not match status.
    """

    record_id: str
    status: SyncStatus
    cause: str | None = None

    def __post_init__(self) -> None:
        if self.status is SyncStatus.FAILURE and not self.cause:
            raise ValueError(f"Failed outcome for {self.record_id} requires a cause")
        if self.status is SyncStatus.SUCCESS and self.cause is not None:
            raise ValueError(
                f"Successful outcome for {self.record_id} cannot carry a cause"
            )

    @classmethod
    def success(cls, record_id: str) -> "SyncOutcome":
        return cls(record_id=record_id, status=SyncStatus.SUCCESS)

    @classmethod
    def failure(cls, record_id: str, cause: str) -> "SyncOutcome":
        return cls(record_id=record_id, status=SyncStatus.FAILURE, cause=cause)

    @property
    def succeeded(self) -> bool:
        return self.status is SyncStatus.SUCCESS


@dataclass(frozen=True)
class SyncSummary:
    """Aggregated counts and failure list for one entity type's run.

    Attributes:
        type_name: Entity type that was synchronized.
        index_name: Search index the records were written to.
        total_records: Record count read once at the start of the type's run.
        succeeded_count: Records indexed successfully.
        failed_count: Records that failed to index.
        failures: Failed outcomes, in the order they occurred.

    Raises:
        ValueError: If counts are negative, exceed total_records, disagree with
            the failure list, or failure ids are not unique.
    """

    type_name: str
    index_name: str
    total_records: int
    succeeded_count: int
    failed_count: int
    failures: tuple[SyncOutcome, ...] = ()

    def __post_init__(self) -> None:
        if min(self.total_records, self.succeeded_count, self.failed_count) < 0:
            raise ValueError("Summary counts cannot be negative")
        if self.succeeded_count + self.failed_count > self.total_records:
            raise ValueError(
                f"Processed {self.succeeded_count + self.failed_count} records "
                f"but only {self.total_records} were counted for {self.type_name}"
            )
        if len(self.failures) != self.failed_count:
            raise ValueError(
                f"failed_count ({self.failed_count}) does not match "
                f"failure list length ({len(self.failures)})"
            )
        ids = [outcome.record_id for outcome in self.failures]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate failure ids in summary for {self.type_name}")

    @property
    def processed_count(self) -> int:
        return self.succeeded_count + self.failed_count

    @property
    def has_errors(self) -> bool:
        return self.failed_count > 0


class SkipReason(str, Enum):
    """Why an entity type was not synchronized."""

    EMPTY = "empty"  # Nothing to index, not an error
    REPOSITORY_NOT_FOUND = "repository_not_found"
    NO_IDENTIFIER = "no_identifier"
    NO_INDEX_METADATA = "no_index_metadata"


@dataclass(frozen=True)
class TypeNotice:
    """Notice emitted when an entity type is skipped.

    Attributes:
        type_name: The skipped entity type.
        reason: Classification of the skip.
        message: Human-readable explanation.
    """

    type_name: str
    reason: SkipReason
    message: str

    @property
    def is_error(self) -> bool:
        return self.reason is not SkipReason.EMPTY
