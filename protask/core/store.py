"""
FILE: protask/core/store.py
PURPOSE: Owner of the canonical task collection and the view parameters
EXPORTS:
  - DeletedTask (dataclass)
  - TaskStore (class)
DEPENDENCIES:
  - logging, dataclasses, typing (stdlib)
  - protask.core.models (Task, SubTask, Priority, FilterType, SortOrder)
  - protask.core.projector (project)
  - protask.core.repository (default persistence)
  - protask.core.exceptions (PersistenceError)
NOTES:
  - Tasks are addressed by canonical index; callers re-resolve after any change
  - Out-of-range indices are silent no-ops, never errors
  - Every collection mutation saves the whole collection, then notifies
  - A failed save is logged and kept in last_persist_error; memory is
    not rolled back
  - View parameter changes notify but never save
  - One undo slot: the most recently deleted task and where it was
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from . import repository
from .constants import DEFAULT_PRIORITY
from .exceptions import PersistenceError
from .models import Task, SubTask, Priority, FilterType, SortOrder
from .projector import project

logger = logging.getLogger(__name__)

Observer = Callable[["TaskStore"], None]


@dataclass
class DeletedTask:
    """The undo slot: a removed task and the canonical index it came from."""

    task: Task
    index: int


class TaskStore:
    """
    Publish/subscribe store for the task list.

    Args:
        persistence: Object with load_tasks() and save_tasks(tasks);
            defaults to the SQLite repository module
    """

    def __init__(self, persistence=None):
        self._persistence = persistence if persistence is not None else repository
        self._tasks: List[Task] = []
        self._filter = FilterType.ALL
        self._search_query = ""
        self._sort_order = SortOrder.ASCENDING
        self._observers: List[Observer] = []
        self.last_deleted: Optional[DeletedTask] = None
        self.last_persist_error: Optional[PersistenceError] = None

    # --- Observation ---

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register a change callback. Returns a function that unregisters it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer(self)

    def _persist(self) -> None:
        try:
            self._persistence.save_tasks(self._tasks)
        except PersistenceError as e:
            logger.warning("Tasks not saved, keeping in-memory changes: %s", e)
            self.last_persist_error = e
        else:
            self.last_persist_error = None

    def _commit(self) -> None:
        self._persist()
        self._notify()

    # --- Reads ---

    @property
    def tasks(self) -> List[Task]:
        """Snapshot of the canonical collection (the list is a copy)."""
        return list(self._tasks)

    @property
    def filter(self) -> FilterType:
        return self._filter

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def sort_order(self) -> SortOrder:
        return self._sort_order

    def __len__(self) -> int:
        return len(self._tasks)

    def task_at(self, index: int) -> Optional[Task]:
        if 0 <= index < len(self._tasks):
            return self._tasks[index]
        return None

    def index_of(self, task_id: str) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def visible_tasks(self) -> List[Task]:
        """The filtered, searched and sorted projection of the collection."""
        return project(self._tasks, self._filter, self._search_query, self._sort_order)

    # --- Lifecycle ---

    def load(self) -> None:
        """
        Replace the collection with what persistence holds.

        Raises:
            MalformedDocumentError: If the stored document can't be decoded
        """
        self._tasks = list(self._persistence.load_tasks())
        self._notify()

    # --- Task mutations ---

    def add_task(self, title: str, priority: Priority = DEFAULT_PRIORITY) -> Task:
        """Create a task at the front of the collection. Title is not validated here."""
        task = Task(title=title, priority=priority)
        self._tasks.insert(0, task)
        logger.debug("Added task %s", task.id)
        self._commit()
        return task

    def update_task(self, index: int, title: str, priority: Priority) -> None:
        if not 0 <= index < len(self._tasks):
            return
        task = self._tasks[index]
        task.title = title
        task.priority = priority
        self._commit()

    def toggle_task_status(self, index: int) -> None:
        if not 0 <= index < len(self._tasks):
            return
        task = self._tasks[index]
        task.is_done = not task.is_done
        self._commit()

    def delete_task(self, index: int) -> Optional[Task]:
        """
        Remove a task and remember it for undo.

        Returns:
            The removed Task, or None if index is out of range
        """
        if not 0 <= index < len(self._tasks):
            return None
        task = self._tasks.pop(index)
        self.last_deleted = DeletedTask(task=task, index=index)
        logger.debug("Deleted task %s from index %d", task.id, index)
        self._commit()
        return task

    def insert_task(self, index: int, task: Task) -> None:
        """Put a task back at index (0..len inclusive)."""
        if not 0 <= index <= len(self._tasks):
            return
        self._tasks.insert(index, task)
        self._commit()

    def undo_delete(self) -> Optional[Task]:
        """
        Restore the most recently deleted task at its original index.

        The index is clamped to the current length, so the task comes back
        even if the list has shrunk since. Returns None if there is
        nothing to restore.
        """
        if self.last_deleted is None:
            return None
        deleted = self.last_deleted
        self.last_deleted = None
        self.insert_task(min(deleted.index, len(self._tasks)), deleted.task)
        return deleted.task

    # --- Sub-task mutations ---

    def add_sub_task(self, task_index: int, title: str) -> None:
        if not 0 <= task_index < len(self._tasks):
            return
        self._tasks[task_index].sub_tasks.append(SubTask(title=title))
        self._commit()

    def toggle_sub_task_status(self, task_index: int, sub_index: int) -> None:
        if not 0 <= task_index < len(self._tasks):
            return
        subs = self._tasks[task_index].sub_tasks
        if not 0 <= sub_index < len(subs):
            return
        subs[sub_index].is_done = not subs[sub_index].is_done
        self._commit()

    def remove_sub_task(self, task_index: int, sub_index: int) -> None:
        if not 0 <= task_index < len(self._tasks):
            return
        subs = self._tasks[task_index].sub_tasks
        if not 0 <= sub_index < len(subs):
            return
        del subs[sub_index]
        self._commit()

    # --- View parameters (no persistence) ---

    def set_filter(self, filter_type: FilterType) -> None:
        self._filter = filter_type
        self._notify()

    def set_search_query(self, query: str) -> None:
        self._search_query = query
        self._notify()

    def toggle_sort_order(self) -> None:
        self._sort_order = self._sort_order.toggled()
        self._notify()
