"""
FILE: protask/repl/commands/system.py
PURPOSE: System command handlers for REPL (help, clear, theme)
"""

from rich.panel import Panel

from ..context import REPLContext
from ..display import console
from ..parser import ParseResult
from ...core import theme as theme_settings
from ...core.exceptions import PersistenceError


def handle_theme_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'theme' command - show or change theme mode.

    Usage:
        theme
        theme toggle
        theme system
    """
    if not result.args:
        console.print(f"Theme: [cyan]{ctx.theme.name.lower()}[/cyan]")
        return

    action = result.args[0].lower()
    try:
        if action == "toggle":
            ctx.theme = theme_settings.toggle_theme(ctx.theme)
        elif action == "system":
            ctx.theme = theme_settings.set_system_theme()
        else:
            console.print(f"[red]Error:[/red] Unknown theme action '{action}'")
            console.print("[dim]Valid actions: toggle, system[/dim]")
            return
    except PersistenceError as e:
        console.print(f"[yellow]Warning:[/yellow] theme not saved: {e}")
        return

    console.print(f"✓ Theme set to [cyan]{ctx.theme.name.lower()}[/cyan]")


def handle_help_command(ctx: REPLContext, result: ParseResult) -> None:
    """Handle 'help' command - show available commands."""
    help_text = """
[bold cyan]Available Commands:[/bold cyan]

  [cyan]add <title> [-p <priority>][/cyan]   Create a task at the top (priority: low, medium, high)
  [cyan]ls[/cyan]                          List tasks in the current view
  [cyan]show <row>[/cyan]                  View a task with its sub-tasks
  [cyan]done <row>[,<row>...][/cyan]       Toggle task completion
  [cyan]edit <row> \\[title] [-p <p>][/cyan]  Update title and/or priority
  [cyan]rm <row>[,<row>...][/cyan]         Delete task(s)
  [cyan]undo[/cyan]                        Restore the last deleted task
  [cyan]sub add <row> <title>[/cyan]       Add a sub-task
  [cyan]sub done <row> <n>[/cyan]          Toggle sub-task n
  [cyan]sub rm <row> <n>[/cyan]            Remove sub-task n
  [cyan]filter \\[all|pending|completed][/cyan]  Set the status filter
  [cyan]search \\[text][/cyan]               Search titles (no text clears)
  [cyan]sort[/cyan]                        Flip priority order
  [cyan]theme \\[toggle|system][/cyan]       Show or change theme
  [cyan]help[/cyan]                        Show this help
  [cyan]clear[/cyan]                       Clear the screen
  [cyan]exit[/cyan] or [cyan]quit[/cyan]               Exit REPL

[bold cyan]Examples:[/bold cyan]

  [dim]add Buy milk
  add "Walk dog" -p high
  done 2
  sub add 1 Check fridge
  sub done 1 1
  filter pending
  search milk
  rm 3
  undo[/dim]

[bold yellow]Rows:[/bold yellow]
  [dim]Row numbers are positions in the list as 'ls' shows it under the
  current filter, search and sort. After a change the REPL prints which
  rows appeared (+) or disappeared (-).[/dim]
"""
    console.print(Panel(help_text, title="ProTask REPL Help", border_style="cyan"))


def handle_clear_command(ctx: REPLContext, result: ParseResult) -> None:
    """Clear the screen."""
    console.clear()
    console.print("[dim]Screen cleared[/dim]")
