"""
Test visible-list diffing and the reconciler's surface updates.
"""

import time

import pytest

# Path setup handled by conftest.py
from protask.core.models import FilterType, Priority, SortOrder, Task
from protask.core.reconcile import (
    INSERT,
    REMOVE,
    ListReconciler,
    apply_changes,
    diff_visible,
    resolve_index,
)
from protask.core.store import TaskStore


class RecordingSurface:
    def __init__(self):
        self.events = []

    def insert_item(self, position, task):
        self.events.append((INSERT, position, task.title))

    def remove_item(self, position, task):
        self.events.append((REMOVE, position, task.title))


def ids(tasks):
    return [t.id for t in tasks]


def make(*titles):
    return {title: Task(title) for title in titles}


@pytest.mark.parametrize("old_names, new_names", [
    ("", "abc"),
    ("abc", ""),
    ("abc", "abc"),
    ("abc", "cab"),
    ("abcde", "xbdy"),
    ("abcd", "dcba"),
    ("ab", "ba"),
])
def test_applying_diff_reproduces_new_list(old_names, new_names):
    pool = make(*"abcdexy")
    old = [pool[n] for n in old_names]
    new = [pool[n] for n in new_names]

    changes = diff_visible(old, new)

    assert ids(apply_changes(old, changes)) == ids(new)


def test_large_list_with_one_insert_diffs_quickly():
    old = [Task(f"task {n}") for n in range(2000)]
    added = Task("new")
    new = old[:1000] + [added] + old[1000:]

    started = time.perf_counter()
    changes = diff_visible(old, new)
    elapsed = time.perf_counter() - started

    assert [(c.kind, c.position) for c in changes] == [(INSERT, 1000)]
    assert ids(apply_changes(old, changes)) == ids(new)
    assert elapsed < 1.0


def test_unchanged_list_produces_no_changes():
    pool = make("a", "b")
    old = [pool["a"], pool["b"]]
    assert diff_visible(old, list(old)) == []


def test_removals_come_first_highest_position_first():
    pool = make(*"abcd")
    old = [pool[n] for n in "abcd"]
    new = [pool["b"], pool["d"], Task("e")]

    changes = diff_visible(old, new)
    kinds = [c.kind for c in changes]

    assert kinds == [REMOVE, REMOVE, INSERT]
    assert [c.position for c in changes[:2]] == [2, 0]
    assert changes[2].position == 2


def test_resolve_index_by_id_not_content():
    twin_a = Task("Same", priority=Priority.LOW)
    twin_b = Task("Same", priority=Priority.LOW)
    tasks = [twin_a, twin_b]

    assert resolve_index(tasks, twin_b) == 1
    assert resolve_index(tasks, twin_a.id) == 0
    assert resolve_index(tasks, Task("gone")) is None


def test_new_low_priority_task_inserts_at_true_position(memory):
    store = TaskStore(memory)
    store.load()
    store.add_task("Urgent", Priority.HIGH)
    store.add_task("Normal", Priority.MEDIUM)

    surface = RecordingSurface()
    reconciler = ListReconciler(store, surface)

    store.add_task("Someday", Priority.LOW)

    # Canonical index 0, but it sorts to the bottom of the visible list
    assert store.task_at(0).title == "Someday"
    assert surface.events == [(INSERT, 2, "Someday")]
    assert [t.title for t in reconciler.rows] == ["Urgent", "Normal", "Someday"]


def test_filter_change_and_delete_are_narrated(memory):
    store = TaskStore(memory)
    store.load()
    store.add_task("b")
    store.add_task("a")
    store.toggle_task_status(1)

    surface = RecordingSurface()
    ListReconciler(store, surface)

    store.set_filter(FilterType.PENDING)
    assert surface.events == [(REMOVE, 1, "b")]

    surface.events.clear()
    store.delete_task(0)
    assert surface.events == [(REMOVE, 0, "a")]

    surface.events.clear()
    store.undo_delete()
    assert surface.events == [(INSERT, 0, "a")]


def test_sort_flip_moves_rows(memory):
    store = TaskStore(memory)
    store.load()
    store.add_task("low", Priority.LOW)
    store.add_task("high", Priority.HIGH)

    surface = RecordingSurface()
    reconciler = ListReconciler(store, surface)
    store.toggle_sort_order()

    assert store.sort_order is SortOrder.DESCENDING
    assert [t.title for t in reconciler.rows] == ["low", "high"]
    assert len(surface.events) == 2


def test_edit_in_place_is_not_a_row_change(memory):
    store = TaskStore(memory)
    store.load()
    store.add_task("a", Priority.HIGH)
    store.add_task("b", Priority.LOW)

    surface = RecordingSurface()
    reconciler = ListReconciler(store, surface)
    store.update_task(0, "b renamed", Priority.LOW)

    assert surface.events == []
    # Snapshot holds copies, so it reflects the new title after the notify
    assert [t.title for t in reconciler.rows] == ["a", "b renamed"]


def test_detach_stops_updates(memory):
    store = TaskStore(memory)
    store.load()
    surface = RecordingSurface()
    reconciler = ListReconciler(store, surface)

    reconciler.detach()
    reconciler.detach()
    store.add_task("ignored")

    assert surface.events == []
