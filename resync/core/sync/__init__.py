"""Sync module for re-synchronizing store records into the search index.

Contains the orchestrator and the collaborators it composes: type
resolution, paginated reading, per-record indexing and result collection.
"""

from resync.core.sync.collector import SyncResultCollector
from resync.core.sync.orchestrator import SyncOrchestrator
from resync.core.sync.record_source import PagedRecordSource
from resync.core.sync.resolver import EntityTypeResolver
from resync.core.sync.synchronizer import IndexSynchronizer
from resync.core.sync.types import RunReport, SyncRequest

__all__ = [
    "EntityTypeResolver",
    "IndexSynchronizer",
    "PagedRecordSource",
    "RunReport",
    "SyncOrchestrator",
    "SyncRequest",
    "SyncResultCollector",
]
