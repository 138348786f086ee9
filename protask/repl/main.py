"""
FILE: protask/repl/main.py
PURPOSE: Interactive REPL for task management with prompt-toolkit
EXPORTS:
  - main() - Entry point for REPL mode
  - run_repl() - Main REPL loop
  - execute_command(ctx, result) -> bool
DEPENDENCIES:
  - prompt_toolkit (REPL interface, history, completion)
  - rich (formatted output)
  - protask.core.service (store loading)
  - protask.core.theme (theme mode at startup)
  - protask.repl.parser (command parsing)
  - protask.repl.completer (autocomplete)
  - protask.repl.context (session state)
NOTES:
  - The store is loaded once before the first prompt; a corrupt task
    document stops the REPL instead of starting empty
  - Every handler receives the REPLContext explicitly
  - After each command the console surface prints the rows that
    appeared (+) or disappeared (-) in the visible list
  - Bottom toolbar shows pending/completed counts and rotating tips
  - Ctrl+D or "exit"/"quit" to exit
"""

import logging
import sys
import traceback

# Fix Windows console encoding for Unicode characters
# Only wrap if not already wrapped to prevent issues
if sys.platform == "win32":
    import io
    if not isinstance(sys.stdout, io.TextIOWrapper) or sys.stdout.encoding != 'utf-8':
        try:
            sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
        except (AttributeError, ValueError):
            pass  # Already wrapped or unavailable

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory

from ..core import service
from ..core import theme as theme_settings
from ..core.constants import DEFAULT_THEME_ORDINAL
from ..core.exceptions import MalformedDocumentError, PersistenceError, ProTaskError
from ..core.models import ThemeMode
from .commands import (
    handle_add_command,
    handle_ls_command,
    handle_show_command,
    handle_done_command,
    handle_edit_command,
    handle_rm_command,
    handle_undo_command,
    handle_sub_command,
    handle_filter_command,
    handle_search_command,
    handle_sort_command,
    handle_help_command,
    handle_clear_command,
    handle_theme_command,
)
from .completer import create_completer
from .context import REPLContext, create_context
from .display import console
from .parser import parse_command, ParseResult

logger = logging.getLogger(__name__)

HANDLERS = {
    "add": handle_add_command,
    "ls": handle_ls_command,
    "show": handle_show_command,
    "view": handle_show_command,
    "done": handle_done_command,
    "edit": handle_edit_command,
    "rm": handle_rm_command,
    "undo": handle_undo_command,
    "sub": handle_sub_command,
    "filter": handle_filter_command,
    "search": handle_search_command,
    "sort": handle_sort_command,
    "theme": handle_theme_command,
    "help": handle_help_command,
    "clear": handle_clear_command,
}

# Rotating tips for bottom toolbar
_TOOLBAR_TIPS = [
    "Tip: 'add \"Title\" -p high' creates a high priority task",
    "Tip: 'filter pending' hides completed tasks",
    "Tip: 'rm' can be reversed with 'undo'",
    "Tip: 'sub add <row> <title>' breaks a task down",
    "Tip: comma-separate rows for bulk operations (e.g., 'done 1,2,3')",
    "Tip: Press Ctrl+D or type 'exit' to quit",
]


def format_prompt(ctx: REPLContext) -> HTML:
    """Prompt with the active view in cyan, e.g. protask:[pending]>"""
    parts = ctx.view_parts()
    if parts:
        # HTML() needs escaping for quotes in a search term
        context_str = " | ".join(
            p.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;") for p in parts
        )
        return HTML(f"<b>protask:[<cyan>{context_str}</cyan>]&gt; </b>")
    return HTML("<b>protask&gt; </b>")


def make_bottom_toolbar(ctx: REPLContext, tip_state: dict):
    """Build the toolbar callback for a session (reads counts live)."""

    def get_bottom_toolbar() -> HTML:
        pending, completed = service.task_counts(ctx.store)
        tip = _TOOLBAR_TIPS[tip_state["index"] % len(_TOOLBAR_TIPS)]
        text = f"{pending} pending | {completed} completed | {tip}"
        text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        return HTML(f"<style bg='#444444' fg='#ffffff'> {text} </style>")

    return get_bottom_toolbar


def execute_command(ctx: REPLContext, result: ParseResult) -> bool:
    """
    Execute a parsed command.

    Returns:
        True to continue REPL loop, False to exit
    """
    command = result.command.lower()

    if command in ("exit", "quit"):
        console.print("[dim]Goodbye![/dim]")
        return False

    # Empty command (just Enter pressed)
    if not command:
        return True

    handler = HANDLERS.get(command)
    if handler:
        try:
            handler(ctx, result)
        finally:
            # Row notices belong to this command even if the handler blew up
            ctx.surface.flush()
        if ctx.store.last_persist_error is not None:
            console.print(
                f"[yellow]Warning:[/yellow] change not saved: {ctx.store.last_persist_error}"
            )
            # Reported once; the next successful save clears it anyway
            ctx.store.last_persist_error = None
        console.print()
    else:
        console.print(f"[red]Unknown command:[/red] {command}")
        console.print("[dim]Type 'help' for available commands[/dim]")
        console.print()

    return True


def load_context() -> REPLContext:
    """
    Load tasks and theme and build the session context.

    Raises:
        MalformedDocumentError: If the stored tasks can't be decoded
    """
    store = service.open_store()
    try:
        theme = theme_settings.load_theme()
    except PersistenceError as e:
        logger.warning("Could not read theme, using default: %s", e)
        theme = ThemeMode(DEFAULT_THEME_ORDINAL)
    return create_context(store, theme=theme)


def run_repl() -> None:
    """
    Main REPL loop.

    Exits on:
    - Ctrl+D (EOFError)
    - "exit" or "quit" commands
    Ctrl+C only cancels the current line.
    """
    ctx = load_context()

    has_tty = sys.stdin.isatty() and sys.stdout.isatty()
    session = None
    use_simple_input = not has_tty
    tip_state = {"index": 0}

    if has_tty:
        try:
            session = PromptSession(
                history=InMemoryHistory(),
                completer=create_completer(ctx.store),
                complete_while_typing=True,
                bottom_toolbar=make_bottom_toolbar(ctx, tip_state),
            )
        except Exception as e:
            # Fallback to simple input if prompt_toolkit can't drive the terminal
            console.print(f"[yellow]Warning:[/yellow] Running in simple input mode: {e}")
            use_simple_input = True

    console.print("[bold cyan]ProTask REPL[/bold cyan] - Type 'help' for commands, 'exit' to quit")
    if use_simple_input:
        console.print("[dim](Running in simple mode - no autocomplete)[/dim]")
    console.print()

    try:
        while True:
            try:
                if use_simple_input or session is None:
                    user_input = input(ctx.get_prompt())
                else:
                    user_input = session.prompt(format_prompt(ctx))

                if not execute_command(ctx, parse_command(user_input)):
                    break

                tip_state["index"] += 1

            except KeyboardInterrupt:
                console.print("[dim]^C (Press Ctrl+D or type 'exit' to quit)[/dim]")
                continue
            except EOFError:
                console.print()
                console.print("[dim]Goodbye![/dim]")
                break
            except ProTaskError as e:
                console.print(f"[red]Error:[/red] {e}")
            except Exception as e:
                # Unexpected error - show but don't crash
                console.print(f"[red]Unexpected error:[/red] {e}")
                console.print(traceback.format_exc(), style="dim", markup=False)
    finally:
        ctx.reconciler.detach()


def main() -> None:
    """
    Entry point for REPL mode.

    Called when user runs: protask repl (or protask with no command)
    """
    try:
        run_repl()
    except MalformedDocumentError as e:
        console.print(f"[red]Stored tasks are corrupt:[/red] {e}")
        sys.exit(1)
    except ProTaskError as e:
        console.print(f"[red]Fatal error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
