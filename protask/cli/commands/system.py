"""
FILE: protask/cli/commands/system.py
PURPOSE: System commands (version, help, repl, theme)
"""

from typing import Optional

import typer
from rich.markup import escape

from ..app import app, console, error_console, __version__
from ...core import theme as theme_settings
from ...core.exceptions import ProTaskError


@app.command()
def version():
    """Show ProTask version."""
    console.print(f"ProTask v{__version__}")


@app.command()
def help():
    """Show available commands and usage."""
    console.print("\n[bold cyan]ProTask[/bold cyan] - Personal task list with priorities and sub-tasks\n")
    console.print(f"[dim]Version {__version__}[/dim]\n")

    console.print("[bold]Usage:[/bold]")
    console.print(escape("  protask [command] [options]"))
    console.print("  protask                   [dim]# Launch interactive REPL (default)[/dim]\n")

    console.print("[bold]Commands:[/bold]")

    commands = [
        ("add", "Create a new task", 'protask add "Task title" [--priority high]'),
        ("ls", "List tasks", "protask ls [--filter pending] [--search text] [--desc]"),
        ("show", "View a task and its sub-tasks", "protask show <row>"),
        ("done", "Toggle task completion", "protask done <row>[,<row>...]"),
        ("edit", "Update title and/or priority", 'protask edit <row> ["New title"] [--priority low]'),
        ("rm", "Delete task(s)", "protask rm <row>[,<row>...] [--force]"),
        ("sub add", "Add a sub-task", 'protask sub add <row> "Sub-task title"'),
        ("sub done", "Toggle a sub-task", "protask sub done <row> <number>"),
        ("sub rm", "Remove a sub-task", "protask sub rm <row> <number>"),
        ("theme", "Show or change theme", "protask theme [toggle|system]"),
        ("repl", "Launch interactive REPL", "protask repl"),
        ("version", "Show version", "protask version"),
        ("help", "Show this help message", "protask help"),
    ]

    for cmd, desc, example in commands:
        console.print(f"  [green]{cmd:9}[/green] {desc}")
        console.print(f"            [dim]{escape(example)}[/dim]\n")

    console.print("[bold]Rows:[/bold]")
    console.print("  Row numbers are positions in the list 'ls' prints. Pass the same")
    console.print("  --filter/--search/--desc options to row commands to use that view.\n")


@app.command()
def repl():
    """Launch interactive REPL mode."""
    from ...repl import main as repl_main
    repl_main()


@app.command()
def theme(
    action: Optional[str] = typer.Argument(None, help="toggle or system (omit to show)"),
):
    """
    Show or change the theme mode.

    Example:
        protask theme
        protask theme toggle
        protask theme system
    """
    try:
        current = theme_settings.load_theme()
        if action is None:
            console.print(f"Theme: [cyan]{current.name.lower()}[/cyan]")
            return

        action = action.lower()
        if action == "toggle":
            mode = theme_settings.toggle_theme(current)
        elif action == "system":
            mode = theme_settings.set_system_theme()
        else:
            error_console.print(f"[red]Error:[/red] Unknown theme action '{action}'")
            error_console.print("[dim]Valid actions: toggle, system[/dim]")
            raise typer.Exit(1)
    except ProTaskError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓ Theme set to[/green] [cyan]{mode.name.lower()}[/cyan]")
