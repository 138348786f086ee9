"""
FILE: protask/cli/app.py
PURPOSE: Shared Typer application, consoles and store bootstrap for CLI commands
EXPORTS:
  - app (Typer application)
  - sub_app (Typer group for sub-task commands)
  - console, error_console (Rich consoles)
  - __version__
  - open_store(filter_name, search, descending) -> TaskStore
  - report_persist_error(store) -> None
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - protask.core.service (store loading, filter parsing)
  - protask.core.exceptions (error handling)
  - protask.logging_setup (logging configuration)
NOTES:
  - Command modules import from here, never from cli.main, so running
    `python -m protask.cli.main` doesn't import the app twice
  - Row numbers refer to the list as 'ls' shows it with the same
    --filter/--search/--desc options
"""

import sys
from typing import Optional

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

import typer
from rich.console import Console

from ..core import service
from ..core.exceptions import ProTaskError, MalformedDocumentError
from ..core.models import SortOrder
from ..core.store import TaskStore
from ..logging_setup import setup_logging

# Typer app setup
app = typer.Typer(
    name="protask",
    help="Personal task list with priorities and sub-tasks",
    add_completion=False,
)

# Sub-task sub-command group
sub_app = typer.Typer(
    name="sub",
    help="Sub-task commands",
)
app.add_typer(sub_app, name="sub")

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)

# Version
__version__ = "1.0.0"


def open_store(
    filter_name: Optional[str] = None,
    search: Optional[str] = None,
    descending: bool = False,
) -> TaskStore:
    """
    Load the store and apply view options, exiting with 1 on failure.

    A corrupt task document is fatal: it is reported and nothing is
    overwritten.
    """
    try:
        store = service.open_store()
        if filter_name:
            store.set_filter(service.parse_filter(filter_name))
        if search:
            store.set_search_query(search)
        if descending and store.sort_order is SortOrder.ASCENDING:
            store.toggle_sort_order()
        return store
    except MalformedDocumentError as e:
        error_console.print(f"[red]Stored tasks are corrupt:[/red] {e}")
        raise typer.Exit(1)
    except ProTaskError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def report_persist_error(store: TaskStore) -> None:
    """Warn (without failing) when the last save didn't make it to disk."""
    if store.last_persist_error is not None:
        error_console.print(
            f"[yellow]Warning:[/yellow] change not saved: {store.last_persist_error}"
        )


@app.callback(invoke_without_command=True)
def default_command(ctx: typer.Context):
    """
    Default callback - launches REPL when no command is specified.

    If a subcommand is invoked, this only configures logging.
    """
    setup_logging()
    if ctx.invoked_subcommand is None:
        from ..repl import main as repl_main
        try:
            repl_main()
        except Exception as e:
            error_console.print(f"[red]Error starting REPL:[/red] {e}")
            raise typer.Exit(1)
