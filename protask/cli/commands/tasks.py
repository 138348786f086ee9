"""
FILE: protask/cli/commands/tasks.py
PURPOSE: Task commands (add, ls, show, done, edit, rm)
"""

import json
from typing import Optional

import typer
from rich.markup import escape

from ..app import app, console, error_console, open_store, report_persist_error
from ...core import service
from ...core.exceptions import (
    ProTaskError,
    TaskNotFoundError,
    InvalidInputError,
)
from ...formatting import TaskFormatter, parse_rows

# Shared view options so row numbers line up with what 'ls' printed
FILTER_OPTION = typer.Option(None, "--filter", "-f", help="all, pending or completed")
SEARCH_OPTION = typer.Option(None, "--search", "-s", help="Case-insensitive title search")
DESC_OPTION = typer.Option(False, "--desc", help="Low priority first")


def _parse_rows_or_exit(rows: str):
    try:
        parsed = parse_rows(rows)
    except ValueError:
        error_console.print(f"[red]Error:[/red] Invalid row number(s): {rows}")
        raise typer.Exit(1)
    if not parsed:
        error_console.print("[red]Error:[/red] At least one row number is required")
        raise typer.Exit(1)
    return parsed


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    priority: str = typer.Option("medium", "--priority", "-p", help="low, medium or high"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Create a new task at the top of the list.

    Example:
        protask add "Buy milk"
        protask add "Walk dog" --priority high
    """
    store = open_store()
    try:
        task = service.add_task(store, title, service.parse_priority(priority))
    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    report_persist_error(store)

    if json_output:
        console.print_json(json.dumps(TaskFormatter.to_json_dict(task)))
    elif raw:
        console.print(f"{task.title} ({task.priority.label})", markup=False, highlight=False, emoji=False)
    else:
        console.print(
            f"[green]✓ Created task:[/green] {escape(task.title)} "
            f"[dim]({task.priority.label})[/dim]"
        )


@app.command()
def ls(
    filter_name: Optional[str] = FILTER_OPTION,
    search: Optional[str] = SEARCH_OPTION,
    descending: bool = DESC_OPTION,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    List tasks, highest priority first.

    Example:
        protask ls
        protask ls --filter pending
        protask ls --search milk
        protask ls --json
    """
    store = open_store(filter_name, search, descending)
    tasks = store.visible_tasks()

    if json_output:
        console.print_json(TaskFormatter.to_json_array(tasks))
        return

    if raw:
        for line in TaskFormatter.to_raw_lines(tasks):
            console.print(line, markup=False, highlight=False, emoji=False)
        return

    if not tasks:
        console.print("[dim]No tasks found[/dim]")
        return

    console.print(TaskFormatter.create_table(tasks))
    pending, completed = service.task_counts(store)
    console.print(f"\n[dim]Showing {len(tasks)} | {pending} pending, {completed} completed[/dim]")


@app.command()
def show(
    row: int = typer.Argument(..., help="Row number from 'ls'"),
    filter_name: Optional[str] = FILTER_OPTION,
    search: Optional[str] = SEARCH_OPTION,
    descending: bool = DESC_OPTION,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    View one task with its numbered sub-tasks.

    Example:
        protask show 1
    """
    store = open_store(filter_name, search, descending)
    try:
        task = service.task_at_row(store, row)
    except TaskNotFoundError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        console.print_json(json.dumps(TaskFormatter.to_json_dict(task)))
    else:
        console.print(TaskFormatter.create_detail_panel(task, row))


@app.command()
def done(
    rows: str = typer.Argument(..., help="Row number(s), comma-separated"),
    filter_name: Optional[str] = FILTER_OPTION,
    search: Optional[str] = SEARCH_OPTION,
    descending: bool = DESC_OPTION,
):
    """
    Toggle tasks between pending and completed.

    Example:
        protask done 1
        protask done 1,3
    """
    parsed = _parse_rows_or_exit(rows)
    store = open_store(filter_name, search, descending)
    try:
        tasks = service.toggle_tasks(store, parsed)
    except ProTaskError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    report_persist_error(store)
    for task in tasks:
        if task.is_done:
            console.print(f"[green]✓ Completed:[/green] {escape(task.title)}")
        else:
            console.print(f"[yellow]○ Reopened:[/yellow] {escape(task.title)}")


@app.command()
def edit(
    row: int = typer.Argument(..., help="Row number from 'ls'"),
    title: Optional[str] = typer.Argument(None, help="New title (keeps current if omitted)"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="low, medium or high"),
    filter_name: Optional[str] = FILTER_OPTION,
    search: Optional[str] = SEARCH_OPTION,
    descending: bool = DESC_OPTION,
):
    """
    Update a task's title and/or priority.

    Example:
        protask edit 2 "Buy oat milk"
        protask edit 2 --priority high
    """
    if title is None and priority is None:
        error_console.print("[red]Error:[/red] Give a new title and/or --priority")
        raise typer.Exit(1)

    store = open_store(filter_name, search, descending)
    try:
        new_priority = service.parse_priority(priority) if priority is not None else None
        task = service.edit_task(store, row, title=title, priority=new_priority)
    except ProTaskError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    report_persist_error(store)
    console.print(
        f"[green]✓ Updated:[/green] {escape(task.title)} [dim]({task.priority.label})[/dim]"
    )


@app.command()
def rm(
    rows: str = typer.Argument(..., help="Row number(s), comma-separated"),
    filter_name: Optional[str] = FILTER_OPTION,
    search: Optional[str] = SEARCH_OPTION,
    descending: bool = DESC_OPTION,
    force: bool = typer.Option(False, "--force", "-y", help="Skip confirmation"),
):
    """
    Delete tasks permanently.

    Undo is only available inside the REPL.

    Example:
        protask rm 3
        protask rm 1,2 --force
    """
    parsed = _parse_rows_or_exit(rows)
    store = open_store(filter_name, search, descending)
    try:
        targets = service.tasks_at_rows(store, parsed)
    except TaskNotFoundError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not force:
        names = ", ".join(t.title for t in targets)
        if not typer.confirm(f"Delete {len(targets)} task(s): {names}?"):
            console.print("[dim]Cancelled[/dim]")
            raise typer.Exit(0)

    removed = service.delete_tasks(store, parsed)
    report_persist_error(store)
    for task in removed:
        console.print(f"[red]✗ Deleted:[/red] {escape(task.title)}")
