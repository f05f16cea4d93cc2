"""resync CLI entrypoint.

Command-line interface for re-synchronizing store records into the search index.
"""

from __future__ import annotations

import functools
import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from resync.core.sync import RunReport
    from resync.domain.config import ResyncConfig

from resync.core.errors import ResyncCliError
from resync.core.presentation import ConsoleSyncReporter
from resync.core.progress import progress_context
from resync.domain.exceptions import ResyncDomainError
from resync.shared.config_io import DEFAULT_CONFIG_NAME
from resync.version import __version__

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    ResyncCliError propagates unchanged; domain errors and store errors are
    converted to ResyncCliError with hints. Unexpected errors show a
    traceback in verbose mode.

    Args:
        command_name: Name of the command for error messages.

    Returns:
        Decorated function with error handling.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ResyncCliError:
                raise
            except ResyncDomainError as e:
                raise ResyncCliError(e.message, hint=e.hint) from e
            except sqlite3.Error as e:
                raise ResyncCliError(
                    f"Store error during {command_name}: {e}",
                    hint="Check the database paths in your config",
                ) from e
            except Exception as e:
                ctx = click.get_current_context()
                if ctx.obj.get("verbose", False):
                    import traceback

                    traceback.print_exc()
                raise ResyncCliError(
                    f"Unexpected error in {command_name}: {e}",
                    hint="Run with --verbose for more details",
                ) from e

        return wrapper

    return decorator


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


def _load_config(ctx: click.Context) -> tuple[ResyncConfig, Path]:
    """Load configuration for the current invocation.

    Returns:
        Tuple of (config, base_dir) where base_dir is the directory relative
        config paths are resolved against.
    """
    from resync.adapters.factory import ConfigFactory

    config_path: Path = ctx.obj["config_path"]
    config = ConfigFactory().create_config_provider().load(config_path)
    return config, config_path.resolve().parent


def _format_run_totals(report: RunReport) -> None:
    """Print one line totalling the whole run."""
    if not report.summaries and not report.notices:
        click.echo("No indexable entities found")
        return
    click.echo(
        f"Done: {len(report.summaries)} type(s) synchronized, "
        f"{len(report.notices)} skipped, "
        f"{report.succeeded_count} document(s) synchronized, "
        f"{report.failed_count} not synchronized"
    )


@click.group()
@click.version_option(version=__version__, prog_name="resync")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Only print summaries and errors.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_NAME,
    show_default=True,
    help="Config file to load.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, config_path: Path) -> None:
    """resync - re-synchronize store records into the search index."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path
    _configure_logging(verbose)


@cli.command()
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Overwrite an existing config file.",
)
@click.pass_context
@handle_cli_errors("init")
def init(ctx: click.Context, force: bool) -> None:
    """Write a default config file."""
    from resync.shared.config_io import create_default_config_file

    config_path: Path = ctx.obj["config_path"]
    if config_path.exists() and not force:
        raise ResyncCliError(
            f"{config_path} already exists",
            hint="Use 'resync init --force' to overwrite it",
        )
    create_default_config_file(config_path)
    if not ctx.obj.get("quiet", False):
        click.echo(f"✓ Created {config_path}")


@cli.command()
@click.argument("entity", type=str, required=False, default=None)
@click.argument(
    "flushsize",
    type=click.IntRange(min=1),
    required=False,
    default=None,
)
@click.option(
    "--source",
    type=str,
    default=None,
    help="Source to load entities from: relational or mongodb (default: from config).",
)
@click.pass_context
@handle_cli_errors("populate")
def populate(
    ctx: click.Context,
    entity: str | None,
    flushsize: int | None,
    source: str | None,
) -> None:
    """Index all entities, or only ENTITY.

    FLUSHSIZE is the number of records fetched and indexed per page
    (default: from config, 500).
    """
    from resync.adapters.factory import SyncFactory
    from resync.core.sync import SyncRequest

    config, base_dir = _load_config(ctx)
    request = SyncRequest(
        entity_type=entity,
        batch_size=flushsize or config.sync.batch_size,
    )

    with SyncFactory(config, base_dir) as factory:
        orchestrator = factory.create_orchestrator(source)
        quiet = ctx.obj.get("quiet", False)
        with progress_context(quiet_mode=quiet) as progress:
            reporter = ConsoleSyncReporter(progress, quiet=quiet)
            report = orchestrator.run(request, reporter)

    _format_run_totals(report)


@cli.command()
@click.pass_context
@handle_cli_errors("types")
def types(ctx: click.Context) -> None:
    """List the entity types a full populate run would index."""
    from resync.adapters.factory import SyncFactory

    config, base_dir = _load_config(ctx)
    with SyncFactory(config, base_dir) as factory:
        descriptors = factory.create_resolver().resolve()

    if not descriptors:
        click.echo("No indexable entities found")
        return
    for descriptor in descriptors:
        click.echo(f"{descriptor.type_name} → {descriptor.index_name}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
