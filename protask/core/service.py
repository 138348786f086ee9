"""
FILE: protask/core/service.py
PURPOSE: Caller-side validation and visible-row addressing on top of TaskStore
EXPORTS:
  - open_store(persistence) -> TaskStore
  - validate_title(title, what) -> str
  - parse_priority(value) -> Priority
  - parse_filter(value) -> FilterType
  - resolve_row(store, row) -> int
  - task_at_row(store, row) -> Task
  - add_task(store, title, priority) -> Task
  - edit_task(store, row, title, priority) -> Task
  - toggle_task(store, row) -> Task
  - delete_task(store, row) -> Task
  - tasks_at_rows(store, rows) -> List[Task]
  - toggle_tasks(store, rows) -> List[Task]
  - delete_tasks(store, rows) -> List[Task]
  - undo_delete(store) -> Task | None
  - add_sub_task(store, row, title) -> Task
  - toggle_sub_task(store, row, sub_number) -> SubTask
  - remove_sub_task(store, row, sub_number) -> SubTask
  - task_counts(store) -> tuple[int, int]
DEPENDENCIES:
  - protask.core.store (TaskStore)
  - protask.core.models (Task, SubTask, Priority, FilterType)
  - protask.core.reconcile (resolve_index)
  - protask.core.exceptions (InvalidInputError, TaskNotFoundError)
NOTES:
  - Rows and sub-task numbers are 1-based, as shown to users
  - A row is a position in the store's current visible list; it is mapped
    to a canonical index by task id before the store is called
  - Titles are stripped and must not be empty; the store itself accepts
    anything, so every UI goes through here
"""

from typing import List, Optional, Tuple

from .constants import DEFAULT_PRIORITY
from .exceptions import InvalidInputError, TaskNotFoundError
from .models import Task, SubTask, Priority, FilterType
from .reconcile import resolve_index
from .store import TaskStore


def open_store(persistence=None) -> TaskStore:
    """
    Create a store and load the persisted collection into it.

    Raises:
        MalformedDocumentError: If the stored document can't be decoded
    """
    store = TaskStore(persistence)
    store.load()
    return store


def validate_title(title: str, what: str = "Task") -> str:
    """Strip a title and reject it if nothing is left."""
    title = (title or "").strip()
    if not title:
        raise InvalidInputError(f"{what} title cannot be empty")
    return title


def parse_priority(value: str) -> Priority:
    try:
        return Priority.parse(value)
    except ValueError:
        raise InvalidInputError(
            f"Invalid priority '{value}'. Must be one of: low, medium, high"
        )


def parse_filter(value: str) -> FilterType:
    try:
        return FilterType(value.strip().lower())
    except ValueError:
        valid = ", ".join(f.value for f in FilterType)
        raise InvalidInputError(f"Invalid filter '{value}'. Must be one of: {valid}")


def resolve_row(store: TaskStore, row: int) -> int:
    """
    Map a 1-based visible row to a canonical index.

    Raises:
        TaskNotFoundError: If the row is not on screen
    """
    visible = store.visible_tasks()
    if not 1 <= row <= len(visible):
        raise TaskNotFoundError(row)

    index = resolve_index(store.tasks, visible[row - 1])
    if index is None:
        # Visible list is derived from the store, so this means a bug upstream
        raise TaskNotFoundError(row)
    return index


def task_at_row(store: TaskStore, row: int) -> Task:
    return store.tasks[resolve_row(store, row)]


def add_task(store: TaskStore, title: str, priority: Priority = DEFAULT_PRIORITY) -> Task:
    """
    Create a task with validation.

    Raises:
        InvalidInputError: If title is empty or whitespace-only
    """
    return store.add_task(validate_title(title), priority)


def edit_task(
    store: TaskStore,
    row: int,
    title: Optional[str] = None,
    priority: Optional[Priority] = None,
) -> Task:
    """
    Update title and/or priority of the task at a row.

    Fields left as None keep their current value.

    Raises:
        TaskNotFoundError: If the row doesn't exist
        InvalidInputError: If a new title is given but blank
    """
    index = resolve_row(store, row)
    task = store.tasks[index]

    new_title = validate_title(title) if title is not None else task.title
    new_priority = priority if priority is not None else task.priority

    store.update_task(index, new_title, new_priority)
    return task


def toggle_task(store: TaskStore, row: int) -> Task:
    index = resolve_row(store, row)
    task = store.tasks[index]
    store.toggle_task_status(index)
    return task


def delete_task(store: TaskStore, row: int) -> Task:
    """Delete the task at a row. It stays recoverable with undo_delete()."""
    index = resolve_row(store, row)
    return store.delete_task(index)


def tasks_at_rows(store: TaskStore, rows: List[int]) -> List[Task]:
    """
    Look up several rows at once, before anything changes.

    A row given twice yields its task once, in first-seen order.

    Raises:
        TaskNotFoundError: If any row doesn't exist (nothing is returned)
    """
    tasks = []
    seen = set()
    for row in rows:
        task = task_at_row(store, row)
        if task.id not in seen:
            seen.add(task.id)
            tasks.append(task)
    return tasks


def toggle_tasks(store: TaskStore, rows: List[int]) -> List[Task]:
    """Toggle several rows. Rows are resolved up front, so order doesn't matter."""
    tasks = tasks_at_rows(store, rows)
    for task in tasks:
        index = store.index_of(task.id)
        if index is not None:
            store.toggle_task_status(index)
    return tasks


def delete_tasks(store: TaskStore, rows: List[int]) -> List[Task]:
    """
    Delete several rows. Only the last one deleted is kept for undo.
    """
    removed = []
    for task in tasks_at_rows(store, rows):
        index = store.index_of(task.id)
        if index is None:
            continue
        deleted = store.delete_task(index)
        if deleted is not None:
            removed.append(deleted)
    return removed


def undo_delete(store: TaskStore) -> Optional[Task]:
    return store.undo_delete()


def add_sub_task(store: TaskStore, row: int, title: str) -> Task:
    """
    Append a sub-task to the task at a row.

    Raises:
        TaskNotFoundError: If the row doesn't exist
        InvalidInputError: If title is blank
    """
    title = validate_title(title, "Sub-task")
    index = resolve_row(store, row)
    store.add_sub_task(index, title)
    return store.tasks[index]


def _sub_index(task: Task, sub_number: int) -> int:
    if not 1 <= sub_number <= len(task.sub_tasks):
        raise InvalidInputError(
            f"Task '{task.title}' has no sub-task {sub_number}"
        )
    return sub_number - 1


def toggle_sub_task(store: TaskStore, row: int, sub_number: int) -> SubTask:
    index = resolve_row(store, row)
    task = store.tasks[index]
    sub_index = _sub_index(task, sub_number)
    store.toggle_sub_task_status(index, sub_index)
    return task.sub_tasks[sub_index]


def remove_sub_task(store: TaskStore, row: int, sub_number: int) -> SubTask:
    index = resolve_row(store, row)
    task = store.tasks[index]
    sub_index = _sub_index(task, sub_number)
    removed = task.sub_tasks[sub_index]
    store.remove_sub_task(index, sub_index)
    return removed


def task_counts(store: TaskStore) -> Tuple[int, int]:
    """(pending, completed) across the whole collection, ignoring view filters."""
    tasks = store.tasks
    completed = sum(1 for t in tasks if t.is_done)
    return len(tasks) - completed, completed
