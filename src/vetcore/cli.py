"""Command-line interface for vetcore"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .checkers.registry import CheckerRegistry
from .config import VetConfig, load_config
from .exceptions import VetError
from .logging_config import setup_logging
from .plugins import load_plugins
from .reporting import Reporter
from .runner import run

app = typer.Typer(
    name="vetcore",
    help="vetcore - run pluggable checkers over Go packages",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"vetcore {__version__}", highlight=False)
        raise typer.Exit()


@app.command(no_args_is_help=True)
def main(
    paths: Optional[List[str]] = typer.Argument(
        None,
        help="Go files (analyzed as one package) or directories (walked recursively)",
        show_default=False,
    ),
    enable: Optional[List[str]] = typer.Option(
        None,
        "--enable",
        "-e",
        help="Only run the named checker (repeatable)",
    ),
    plugin: Optional[List[str]] = typer.Option(
        None,
        "--plugin",
        "-p",
        help="Import MODULE and call its register(registry) (repeatable)",
    ),
    no_entry_points: bool = typer.Option(
        False,
        "--no-entry-points",
        help="Do not load checkers from installed 'vetcore.checkers' entry points",
    ),
    list_checkers: bool = typer.Option(
        False,
        "--list",
        help="List registered checkers and exit",
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML configuration file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging",
    ),
    log_file: Optional[str] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to FILE",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Check Go packages with every enabled checker.

    Each file is announced on stdout as it is checked; diagnostics go to
    stderr. The exit status is 1 if anything was reported.

    [bold cyan]Examples:[/bold cyan]

      vetcore ./cmd ./internal

      vetcore main.go util.go

      vetcore -p mycheckers -e printf src/
    """
    logger = setup_logging("verbose" if verbose else "normal")

    try:
        settings = load_config(
            config_file=Path(config) if config else None,
            enabled_checkers=list(enable) if enable else None,
            verbose=verbose,
            log_file=log_file,
        )
        if settings.verbosity != "normal" or settings.log_file:
            logger = setup_logging(settings.verbosity, settings.log_file)

        registry = CheckerRegistry()
        load_plugins(
            registry,
            modules=[*settings.plugins, *(plugin or [])],
            use_entry_points=settings.load_entry_points and not no_entry_points,
        )

        if list_checkers:
            _print_checkers(registry, settings)
            raise typer.Exit(0)

        status = run(paths or [], registry, settings, Reporter(settings.tool_name))
        raise typer.Exit(status.exit_code)

    except typer.Exit:
        raise

    except VetError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during analysis")
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)


def _print_checkers(registry: CheckerRegistry, settings: VetConfig) -> None:
    """Rich table of registered checkers, in registration order."""
    if settings.enabled_checkers is not None:
        registry.restrict(settings.enabled_checkers)

    if not len(registry):
        console.print("No checkers registered.")
        return

    table = Table(title="Registered checkers", show_lines=False)
    table.add_column("Name", style="bold")
    table.add_column("Node kinds")
    table.add_column("Enabled")
    table.add_column("Usage")
    for registration in registry.registrations():
        kinds = ", ".join(sorted(k.value for k in registration.kinds)) or "-"
        table.add_row(
            escape(registration.name),
            kinds,
            "yes" if registration.enabled else "no",
            escape(registration.usage),
        )
    console.print(table)
