"""Accumulates per-record outcomes for one entity type's run."""

import logging

from resync.domain.entities import SyncOutcome

logger = logging.getLogger(__name__)


class SyncResultCollector:
    """Running success/failure counts plus the ordered failure list.

    Purely additive: entries are never changed or removed once recorded.
    Failure ids stay unique; a repeated failure for the same record (possible
    when offset pagination runs over a store that is being written to) is
    ignored.
    """

    def __init__(self) -> None:
        self._succeeded = 0
        self._failures: list[SyncOutcome] = []
        self._failed_ids: set[str] = set()

    def record(self, outcome: SyncOutcome) -> None:
        """Route an outcome to record_success or record_failure."""
        if outcome.succeeded:
            self.record_success(outcome.record_id)
        else:
            # cause is always set on failed outcomes
            self.record_failure(outcome.record_id, outcome.cause or "")

    def record_success(self, record_id: str) -> None:
        self._succeeded += 1

    def record_failure(self, record_id: str, cause: str) -> None:
        if record_id in self._failed_ids:
            logger.warning(
                "Record %s already failed in this run, ignoring repeated failure",
                record_id,
            )
            return
        self._failed_ids.add(record_id)
        self._failures.append(SyncOutcome.failure(record_id, cause))

    def has_errors(self) -> bool:
        return bool(self._failures)

    def succeeded_count(self) -> int:
        return self._succeeded

    def errored_count(self) -> int:
        return len(self._failures)

    def errors(self) -> list[tuple[str, str]]:
        """Failed records as (id, cause) pairs, in the order they were recorded."""
        return [(f.record_id, f.cause or "") for f in self._failures]

    def failures(self) -> tuple[SyncOutcome, ...]:
        return tuple(self._failures)
