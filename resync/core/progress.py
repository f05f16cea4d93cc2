"""Progress reporting utilities for CLI commands.

Provides Rich-based progress bars for visual feedback while records are
being synchronized.
"""

from collections.abc import Generator
from contextlib import contextmanager

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)


class RichProgressCallback:
    """Rich-based progress bar, one task per entity type."""

    def __init__(self, progress: Progress) -> None:
        """Initialize with a Rich Progress instance.

        Args:
            progress: Rich Progress instance to use for display.
        """
        self.progress = progress
        self.task_id: int | None = None

    def on_start(self, total: int, description: str) -> None:
        """Create a progress bar for a new entity type."""
        self.task_id = self.progress.add_task(description, total=total)

    def on_advance(self) -> None:
        """Advance the bar by one processed record."""
        if self.task_id is not None:
            self.progress.advance(self.task_id)

    def on_complete(self) -> None:
        """Remove the finished bar."""
        if self.task_id is not None:
            self.progress.remove_task(self.task_id)
            self.task_id = None


@contextmanager
def progress_context(
    quiet_mode: bool = False,
) -> Generator[RichProgressCallback | None, None, None]:
    """Context manager for creating progress bars.

    Args:
        quiet_mode: If True, yields None (no progress reporting).

    Yields:
        RichProgressCallback if not quiet, None otherwise.
    """
    if quiet_mode:
        yield None
    else:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TaskProgressColumn(),
            transient=True,
        ) as progress:
            yield RichProgressCallback(progress)
