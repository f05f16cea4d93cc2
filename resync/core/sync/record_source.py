"""Paginated record reading over the configured store.

PagedRecordSource is the only part of the core that talks to a manager
registry. It selects the registry for the run's source kind, opens one
repository per entity type, counts its records, and pages through them.
"""

import logging
from collections.abc import Iterator, Mapping

from resync.domain.config import SOURCE_KINDS
from resync.domain.entities import Record, SkipReason
from resync.domain.exceptions import (
    NoIdentifierError,
    RepositoryNotFoundError,
    UnknownSourceError,
)
from resync.domain.results import Ok, Skip
from resync.ports.stores import ManagerRegistry, RepositoryHandle

logger = logging.getLogger(__name__)


class PagedRecordSource:
    """Counts and paginates the records of one entity type at a time.

    Handles are cached between open_repository() and release() so that
    counting and page fetches reuse the same repository.
    """

    def __init__(
        self,
        source_kind: str,
        registries: Mapping[str, ManagerRegistry],
    ) -> None:
        """Select the manager registry for a run.

        Args:
            source_kind: "relational" or "mongodb".
            registries: Configured registries keyed by source kind. A
                recognized kind without a registry has no repositories.

        Raises:
            UnknownSourceError: If source_kind is not a recognized kind.
        """
        if source_kind not in SOURCE_KINDS:
            raise UnknownSourceError(source_kind, SOURCE_KINDS)
        self.source_kind = source_kind
        self._registry = registries.get(source_kind)
        self._handles: dict[str, RepositoryHandle] = {}

    def open_repository(self, type_name: str) -> Ok[RepositoryHandle] | Skip:
        try:
            handle = self._get_registry(type_name).get_repository(type_name)
        except RepositoryNotFoundError as e:
            return Skip(SkipReason.REPOSITORY_NOT_FOUND, e.message)
        self._handles[type_name] = handle
        return Ok(handle)

    def count(self, type_name: str) -> Ok[int] | Skip:
        """Count the records of an opened type.

        Returns:
            Ok with the record count, or Skip(NO_IDENTIFIER) if the type has
            no identifier field to count by.
        """
        try:
            return Ok(self.count_records(type_name))
        except NoIdentifierError as e:
            return Skip(SkipReason.NO_IDENTIFIER, e.message)

    def count_records(self, type_name: str) -> int:
        """Count records by the first identifier field.

        Raises:
            NoIdentifierError: If the store metadata lists no identifier field.
        """
        metadata = self._get_registry(type_name).get_class_metadata(type_name)
        if not metadata.identifier_field_names:
            raise NoIdentifierError(type_name)
        countable_field = metadata.identifier_field_names[0]
        return self._handle(type_name).count(countable_field)

    def fetch_page(self, type_name: str, offset: int, limit: int) -> list[Record]:
        """Fetch up to `limit` records starting at `offset`."""
        logger.debug("Fetching %s page: offset=%d limit=%d", type_name, offset, limit)
        return self._handle(type_name).find_page(
            criteria={}, order_by=None, limit=limit, offset=offset
        )

    def pages(
        self, type_name: str, batch_size: int, total: int
    ) -> Iterator[list[Record]]:
        """Yield consecutive pages until the data or the counted total runs out.

        Offsets advance in multiples of batch_size from 0. A page shorter than
        batch_size ends the sweep, as does reaching `total`; records beyond the
        counted total (rows added mid-run) are dropped.

        Args:
            type_name: Opened entity type.
            batch_size: Page size.
            total: Record count read at the start of the type's run.
        """
        offset = 0
        remaining = total
        while remaining > 0:
            page = self.fetch_page(type_name, offset, batch_size)
            if len(page) > remaining:
                logger.info(
                    "%s grew during the run, ignoring %d record(s) past the count",
                    type_name,
                    len(page) - remaining,
                )
            yield page[:remaining]
            remaining -= min(len(page), remaining)
            if len(page) < batch_size:
                return
            offset += batch_size

    def release(self, type_name: str) -> None:
        self._handles.pop(type_name, None)

    def _get_registry(self, type_name: str) -> ManagerRegistry:
        if self._registry is None:
            raise RepositoryNotFoundError(
                type_name, self.source_kind, reason="source is not configured"
            )
        return self._registry

    def _handle(self, type_name: str) -> RepositoryHandle:
        handle = self._handles.get(type_name)
        if handle is None:
            handle = self._get_registry(type_name).get_repository(type_name)
            self._handles[type_name] = handle
        return handle
