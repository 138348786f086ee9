"""
FILE: protask/repl/commands/view.py
PURPOSE: View command handlers for REPL (filter, search, sort)
NOTES:
  - These only change view parameters; nothing is saved
  - The full table is printed afterwards, so row-by-row narration from
    the reconciler is discarded
"""

from rich.markup import escape

from ..context import REPLContext
from ..display import console, display_tasks_table
from ..parser import ParseResult
from ...core import service
from ...core.exceptions import InvalidInputError
from ...core.models import FilterType, SortOrder


def _show_view(ctx: REPLContext) -> None:
    ctx.surface.discard()
    display_tasks_table(ctx.store.visible_tasks(), title=ctx.view_title())


def handle_filter_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'filter' command - set the status filter.

    Usage:
        filter              # Show current filter
        filter pending
        filter completed
        filter all
    """
    if not result.args:
        console.print(f"Current filter: [cyan]{ctx.store.filter.value}[/cyan]")
        return

    try:
        filter_type = service.parse_filter(result.args[0])
    except InvalidInputError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    ctx.store.set_filter(filter_type)
    if filter_type is FilterType.ALL:
        console.print("✓ Cleared status filter")
    else:
        console.print(f"✓ Showing [cyan]{filter_type.value}[/cyan] tasks")
    _show_view(ctx)


def handle_search_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'search' command - filter by title text.

    Usage:
        search milk
        search              # Clear the search
    """
    query = " ".join(result.args).strip()
    ctx.store.set_search_query(query)
    if query:
        console.print(f"✓ Searching for [cyan]{escape(query)}[/cyan]")
    else:
        console.print("✓ Cleared search")
    _show_view(ctx)


def handle_sort_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'sort' command - flip priority order.

    Usage:
        sort
    """
    ctx.store.toggle_sort_order()
    if ctx.store.sort_order is SortOrder.ASCENDING:
        console.print("✓ Sorting high priority first")
    else:
        console.print("✓ Sorting low priority first")
    _show_view(ctx)
