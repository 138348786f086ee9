"""
FILE: protask/core/reconcile.py
PURPOSE: Keep a row-based rendering surface in step with the visible task list
EXPORTS:
  - ListChange (dataclass)
  - RenderSurface (Protocol)
  - resolve_index(tasks, task) -> int | None
  - diff_visible(old, new) -> List[ListChange]
  - apply_changes(rows, changes) -> List[Task]
  - ListReconciler (class)
DEPENDENCIES:
  - difflib, dataclasses, typing (stdlib)
  - protask.core.models (Task)
NOTES:
  - Visible rows map back to canonical indices by Task.id, so two tasks
    with the same title and priority are never confused
  - diff_visible keeps the difflib matching blocks in place: removals
    first (highest position first), then insertions (lowest position
    first); applied in that order to the old list they reproduce the new one
  - A removal carries the removed task so the surface can keep drawing a
    placeholder for it while it animates out
"""

import difflib
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Sequence, Union

from .models import Task

INSERT = "insert"
REMOVE = "remove"


@dataclass(frozen=True)
class ListChange:
    """One incremental edit against a row-indexed surface."""

    kind: str
    position: int
    task: Task


class RenderSurface(Protocol):
    """Anything that draws the visible list one row at a time."""

    def insert_item(self, position: int, task: Task) -> None:
        ...

    def remove_item(self, position: int, task: Task) -> None:
        ...


def resolve_index(tasks: Sequence[Task], task: Union[Task, str]) -> Optional[int]:
    """
    Map a visible row (or a task id) back to its canonical index.

    Returns:
        Canonical index, or None if the task is no longer in the collection
    """
    task_id = task.id if isinstance(task, Task) else task
    for index, candidate in enumerate(tasks):
        if candidate.id == task_id:
            return index
    return None


def _common_ids(old_ids: List[str], new_ids: List[str]) -> set:
    """Ids that stay in place: the matching blocks between old_ids and new_ids."""
    matcher = difflib.SequenceMatcher(None, old_ids, new_ids, autojunk=False)
    common = set()
    for block in matcher.get_matching_blocks():
        common.update(old_ids[block.a:block.a + block.size])
    return common


def diff_visible(old: Sequence[Task], new: Sequence[Task]) -> List[ListChange]:
    """
    Compute the row edits that turn the old visible list into the new one.

    Tasks are matched by id. A task whose fields changed but whose row did
    not move produces no change; a task that moved produces a removal and
    an insertion.
    """
    old_ids = [t.id for t in old]
    new_ids = [t.id for t in new]
    common = _common_ids(old_ids, new_ids)

    changes: List[ListChange] = []
    for position in range(len(old) - 1, -1, -1):
        if old_ids[position] not in common:
            changes.append(ListChange(REMOVE, position, old[position]))

    for position, task in enumerate(new):
        if new_ids[position] not in common:
            changes.append(ListChange(INSERT, position, task))

    return changes


def apply_changes(rows: Sequence[Task], changes: Sequence[ListChange]) -> List[Task]:
    """Replay changes against a copy of rows, the way a surface would."""
    result = list(rows)
    for change in changes:
        if change.kind == REMOVE:
            del result[change.position]
        else:
            result.insert(change.position, change.task)
    return result


class ListReconciler:
    """
    Subscribes to a TaskStore and forwards visible-list edits to a surface.

    The reconciler keeps its own snapshot of what the surface currently
    shows; each store notification re-runs the projection and diffs the
    snapshot against it.
    """

    def __init__(self, store, surface: RenderSurface):
        self._store = store
        self._surface = surface
        self._rows: List[Task] = [t.copy() for t in store.visible_tasks()]
        self._unsubscribe: Optional[Callable[[], None]] = store.subscribe(self._on_change)

    @property
    def rows(self) -> List[Task]:
        """What the surface is showing right now."""
        return list(self._rows)

    def _on_change(self, store) -> None:
        current = store.visible_tasks()
        changes = diff_visible(self._rows, current)

        for change in changes:
            if change.kind == REMOVE:
                self._surface.remove_item(change.position, change.task)
            else:
                self._surface.insert_item(change.position, change.task)

        self._rows = [t.copy() for t in current]

    def detach(self) -> None:
        """Stop listening to the store. Safe to call twice."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
