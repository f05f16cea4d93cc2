"""Data types for the sync module.

Contains the request/report dataclasses passed in and out of the orchestrator.
"""

from dataclasses import dataclass, field

from resync.domain.config import DEFAULT_BATCH_SIZE
from resync.domain.entities import SyncSummary, TypeNotice


@dataclass
class SyncRequest:
    """Request to synchronize one or all indexable entity types.

    Attributes:
        entity_type: Explicit entity type name, or None to discover all types.
        batch_size: Records fetched per page.

    Raises:
        ValueError: If batch_size is not positive.
    """

    entity_type: str | None = None
    batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self) -> None:
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")


@dataclass
class RunReport:
    """Everything a run produced, in processing order.

    Attributes:
        summaries: One summary per synchronized entity type.
        notices: One notice per skipped entity type.
    """

    summaries: list[SyncSummary] = field(default_factory=list)
    notices: list[TypeNotice] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """True if any record failed or any type was skipped with an error."""
        return any(s.has_errors for s in self.summaries) or any(
            n.is_error for n in self.notices
        )

    @property
    def skipped_types(self) -> list[str]:
        return [notice.type_name for notice in self.notices]

    @property
    def succeeded_count(self) -> int:
        return sum(s.succeeded_count for s in self.summaries)

    @property
    def failed_count(self) -> int:
        return sum(s.failed_count for s in self.summaries)

    def summary_for(self, type_name: str) -> SyncSummary | None:
        for summary in self.summaries:
            if summary.type_name == type_name:
                return summary
        return None
