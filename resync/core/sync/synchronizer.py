"""Single-record index synchronization."""

import logging

from resync.core.use_case_errors import format_error_message, log_use_case_error
from resync.domain.entities import Record, SyncOutcome
from resync.domain.results import Fail
from resync.ports.index import IndexClient

logger = logging.getLogger(__name__)


class IndexSynchronizer:
    """Pushes one record into the search index and reports the outcome.

    A failure only ever concerns the record at hand. There is no retry: one
    failed call is final for that record in this run.
    """

    def __init__(self, index_client: IndexClient) -> None:
        self._index_client = index_client

    def synchronize(self, record: Record) -> SyncOutcome:
        """Synchronize a record.

        Args:
            record: Record to add to or replace in the index.

        Returns:
            A SUCCESS outcome, or a FAILURE outcome carrying the cause. Errors
            raised by the index client are converted, never propagated.
        """
        try:
            result = self._index_client.synchronize_index(record)
        except Exception as e:
            log_use_case_error(e, "indexing")
            return SyncOutcome.failure(record.id, format_error_message(e, "indexing"))

        if isinstance(result, Fail):
            logger.warning("Record %s not indexed: %s", record.id, result.cause)
            return SyncOutcome.failure(record.id, result.cause)
        return SyncOutcome.success(record.id)
