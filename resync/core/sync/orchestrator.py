"""Sync orchestrator that coordinates the per-type synchronization pipeline.

Each entity type moves through these states:

    TypeSelected -> RepositoryResolving -> Skipped | CountResolved
    CountResolved -> Skipped | Synchronizing -> Finalized

Skipped and Finalized are terminal. A skipped type never stops the run; the
orchestrator moves on to the next resolved type.
"""

import logging

from resync.core.sync.collector import SyncResultCollector
from resync.core.sync.record_source import PagedRecordSource
from resync.core.sync.resolver import EntityTypeResolver
from resync.core.sync.synchronizer import IndexSynchronizer
from resync.core.sync.types import RunReport, SyncRequest
from resync.domain.entities import (
    EntityTypeDescriptor,
    SkipReason,
    SyncSummary,
    TypeNotice,
)
from resync.domain.exceptions import MetadataNotFoundError
from resync.domain.results import Ok, Skip
from resync.ports.index import IndexClient
from resync.ports.progress import SyncReporter

logger = logging.getLogger(__name__)


class SyncOrchestrator:
    """Runs a synchronization sweep over the resolved entity types.

    Processing is strictly sequential: one type, one page, one record at a
    time. Records are handed to the collector in the order pages return them.
    """

    def __init__(
        self,
        resolver: EntityTypeResolver,
        source: PagedRecordSource,
        synchronizer: IndexSynchronizer,
        index_client: IndexClient,
    ) -> None:
        """Initialize orchestrator with its collaborators.

        Args:
            resolver: Produces the entity types to process.
            source: Record source for the run's source kind.
            synchronizer: Pushes single records into the index.
            index_client: Provides index metadata for reporting.
        """
        self._resolver = resolver
        self._source = source
        self._synchronizer = synchronizer
        self._index_client = index_client

    def run(
        self, request: SyncRequest, reporter: SyncReporter | None = None
    ) -> RunReport:
        """Execute a complete sweep.

        Args:
            request: Entity selection and batch size.
            reporter: Optional reporter for progress, notices and summaries.

        Returns:
            RunReport with one summary per synchronized type and one notice
            per skipped type.
        """
        report = RunReport()
        descriptors = self._resolver.resolve(request.entity_type)
        if not descriptors:
            logger.info("No indexable entity types found, nothing to do")
            return report

        for descriptor in descriptors:
            result = self._process_type(descriptor, request.batch_size, reporter)
            if isinstance(result, TypeNotice):
                report.notices.append(result)
                if reporter:
                    reporter.on_type_skipped(result)
            else:
                report.summaries.append(result)
                if reporter:
                    reporter.on_summary(result)

        return report

    def _process_type(
        self,
        descriptor: EntityTypeDescriptor,
        batch_size: int,
        reporter: SyncReporter | None,
    ) -> SyncSummary | TypeNotice:
        type_name = descriptor.type_name
        logger.debug("%s: TypeSelected", type_name)
        if reporter:
            reporter.on_type_selected(type_name)

        try:
            logger.debug("%s: RepositoryResolving", type_name)
            repository = self._source.open_repository(type_name)
            if isinstance(repository, Skip):
                return self._skip(type_name, repository)

            counted = self._source.count(type_name)
            if isinstance(counted, Skip):
                return self._skip(type_name, counted)
            total = counted.value
            if total == 0:
                return self._skip(
                    type_name,
                    Skip(SkipReason.EMPTY, "No entities found for indexing"),
                )
            logger.debug("%s: CountResolved (%d records)", type_name, total)

            resolved = self._resolve_index(descriptor)
            if isinstance(resolved, Skip):
                return self._skip(type_name, resolved)

            return self._synchronize(resolved.value, total, batch_size, reporter)
        finally:
            self._source.release(type_name)

    def _resolve_index(
        self, descriptor: EntityTypeDescriptor
    ) -> Ok[EntityTypeDescriptor] | Skip:
        """Look up the index a type is written to."""
        try:
            return Ok(self._index_client.metadata_for(descriptor.type_name))
        except MetadataNotFoundError as e:
            return Skip(SkipReason.NO_INDEX_METADATA, e.message)

    def _synchronize(
        self,
        descriptor: EntityTypeDescriptor,
        total: int,
        batch_size: int,
        reporter: SyncReporter | None,
    ) -> SyncSummary:
        type_name = descriptor.type_name
        index_name = descriptor.index_name or type_name.lower()
        logger.debug("%s: Synchronizing into index %s", type_name, index_name)
        logger.info("Synchronizing %d %s record(s)", total, type_name)
        if reporter:
            reporter.on_sync_started(descriptor, total)

        collector = SyncResultCollector()
        for page in self._source.pages(type_name, batch_size, total):
            for record in page:
                outcome = self._synchronizer.synchronize(record)
                collector.record(outcome)
                if reporter:
                    reporter.on_record_processed(outcome)

        logger.debug("%s: Finalized", type_name)
        summary = SyncSummary(
            type_name=type_name,
            index_name=index_name,
            total_records=total,
            succeeded_count=collector.succeeded_count(),
            failed_count=collector.errored_count(),
            failures=collector.failures(),
        )
        if summary.processed_count < total:
            logger.info(
                "%s: %d of %d counted record(s) were not returned by the store",
                type_name,
                total - summary.processed_count,
                total,
            )
        return summary

    def _skip(self, type_name: str, skip: Skip) -> TypeNotice:
        if skip.reason is SkipReason.EMPTY:
            logger.info("%s: %s", type_name, skip.message)
        else:
            logger.warning("Skipping %s: %s", type_name, skip.message)
        logger.debug("%s: Skipped (%s)", type_name, skip.reason.value)
        return TypeNotice(type_name=type_name, reason=skip.reason, message=skip.message)
