"""Console reporter for synchronization runs.

Prints what the run is doing type by type, drives the progress bar, and
renders each type's summary with a table of failed records.
"""

import click
from rich.console import Console
from rich.table import Table

from resync.core.progress import RichProgressCallback
from resync.domain.entities import (
    EntityTypeDescriptor,
    SyncOutcome,
    SyncSummary,
    TypeNotice,
)


def build_error_table(summary: SyncSummary, id_header: str = "ID") -> Table:
    """Build a table listing each failed record and its cause.

    Args:
        summary: Finalized summary with failures.
        id_header: Column header for record identifiers.

    Returns:
        Rich table with one row per failure, in failure order.
    """
    title = f"Not synchronized: {summary.type_name}"
    # The title wraps to the table width, so the table is at least as wide
    table = Table(title=title, min_width=len(title) + 4)
    table.add_column(id_header, style="cyan", no_wrap=True)
    table.add_column("Error", style="red")
    for failure in summary.failures:
        table.add_row(failure.record_id, failure.cause or "")
    return table


class ConsoleSyncReporter:
    """SyncReporter writing to the terminal via click and rich.

    Args:
        progress: Progress bar callback, or None in quiet mode.
        console: Rich console for tables (defaults to stdout).
        quiet: Only print per-type summaries, error notices and failure tables.
    """

    def __init__(
        self,
        progress: RichProgressCallback | None = None,
        console: Console | None = None,
        quiet: bool = False,
    ) -> None:
        self._progress = progress
        self._console = console
        self._quiet = quiet
        self._id_headers: dict[str, str] = {}

    @property
    def console(self) -> Console:
        if self._console is None:
            self._console = Console(highlight=False)
        return self._console

    def on_type_selected(self, type_name: str) -> None:
        if self._quiet:
            return
        click.echo(f"Indexing: {click.style(type_name, fg='green')}")

    def on_type_skipped(self, notice: TypeNotice) -> None:
        if notice.is_error:
            click.echo(click.style(notice.message, fg="red"))
        elif self._quiet:
            return
        else:
            click.echo(click.style(notice.message, fg="yellow"))
        click.echo("")

    def on_sync_started(self, descriptor: EntityTypeDescriptor, total: int) -> None:
        if descriptor.identifier_field:
            self._id_headers[descriptor.type_name] = descriptor.identifier_field
        if self._progress:
            self._progress.on_start(total, f"Indexing {descriptor.type_name}")
        if self._quiet:
            return
        click.echo(f"Synchronize {click.style(str(total), fg='green')} entities")
        click.echo(f"Use index {click.style(descriptor.index_name or '', fg='green')}")
        click.echo("")

    def on_record_processed(self, outcome: SyncOutcome) -> None:
        if self._progress:
            self._progress.on_advance()

    def on_summary(self, summary: SyncSummary) -> None:
        if self._progress:
            self._progress.on_complete()

        if summary.has_errors:
            click.echo(click.style("Synchronization finished with errors!", fg="green"))
        else:
            click.echo(click.style("Synchronization successful", fg="green"))
        click.echo("")
        click.echo(
            f"Synchronized Documents: "
            f"{click.style(str(summary.succeeded_count), fg='green')}"
        )
        click.echo(
            f"Not Synchronized Documents: "
            f"{click.style(str(summary.failed_count), fg='green')}"
        )
        click.echo("")

        if summary.has_errors:
            id_header = self._id_headers.get(summary.type_name, "ID")
            self.console.print(build_error_table(summary, id_header))
            click.echo("")
