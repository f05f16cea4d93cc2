"""Presentation layer for CLI output formatting.

Components:
- ConsoleSyncReporter: Run progress, skip notices and per-type summaries
- build_error_table: Table of failed records for one entity type
"""

from resync.core.presentation.reporter import ConsoleSyncReporter, build_error_table

__all__ = [
    "ConsoleSyncReporter",
    "build_error_table",
]
