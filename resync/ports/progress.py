"""Reporting protocol for synchronization runs.

Defines the callback interface the orchestrator uses to report progress,
skip notices, and per-type summaries, without the core depending on any
specific UI library.
"""

from typing import Protocol

from resync.domain.entities import (
    EntityTypeDescriptor,
    SyncOutcome,
    SyncSummary,
    TypeNotice,
)


class SyncReporter(Protocol):
    """Protocol for run reporting callbacks."""

    def on_type_selected(self, type_name: str) -> None:
        """Called when processing of an entity type begins."""
        ...

    def on_type_skipped(self, notice: TypeNotice) -> None:
        """Called when an entity type is skipped.

        Args:
            notice: Why the type was skipped. EMPTY notices are informational.
        """
        ...

    def on_sync_started(self, descriptor: EntityTypeDescriptor, total: int) -> None:
        """Called before the first page of a type is fetched.

        Args:
            descriptor: Resolved descriptor, with index name.
            total: Number of records to synchronize.
        """
        ...

    def on_record_processed(self, outcome: SyncOutcome) -> None:
        """Called once per record, whether it succeeded or failed."""
        ...

    def on_summary(self, summary: SyncSummary) -> None:
        """Called when a type's run is finalized."""
        ...
