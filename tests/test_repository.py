"""
Test SQLite slot storage, task collection load/save and the theme slot.
"""

import json

import pytest

# Path setup handled by conftest.py
from protask.core import repository, theme
from protask.core.constants import TASKS_SLOT, THEME_SLOT
from protask.core.exceptions import MalformedDocumentError
from protask.core.models import Priority, SubTask, Task, ThemeMode


@pytest.fixture(autouse=True)
def temp_db(monkeypatch, tmp_path):
    """Use temporary database for all tests."""
    db_path = tmp_path / "test_protask.db"
    monkeypatch.setattr(repository, "DB_PATH", db_path)
    monkeypatch.setattr(repository, "DB_DIR", tmp_path)
    yield db_path


def test_absent_slot_loads_empty_collection():
    assert repository.get_string(TASKS_SLOT) is None
    assert repository.load_tasks() == []


def test_save_then_load_keeps_order_and_fields():
    tasks = [
        Task("Walk dog", priority=Priority.HIGH),
        Task("Buy milk", is_done=True, sub_tasks=[SubTask("Check fridge", True)]),
    ]
    repository.save_tasks(tasks)

    assert repository.load_tasks() == tasks


def test_save_overwrites_previous_document():
    repository.save_tasks([Task("one"), Task("two")])
    repository.save_tasks([Task("three")])

    loaded = repository.load_tasks()
    assert [t.title for t in loaded] == ["three"]


def test_load_tolerates_missing_sub_tasks():
    repository.set_string(TASKS_SLOT, json.dumps([
        {"title": "Legacy", "isDone": False, "priority": 0},
    ]))

    loaded = repository.load_tasks()
    assert loaded[0].title == "Legacy"
    assert loaded[0].sub_tasks == []


def test_malformed_document_is_fatal_and_left_untouched():
    repository.set_string(TASKS_SLOT, '[{"title": "ok"}, {"nope": 1}]')

    with pytest.raises(MalformedDocumentError):
        repository.load_tasks()

    # Nothing was overwritten by the failed load
    assert repository.get_string(TASKS_SLOT) == '[{"title": "ok"}, {"nope": 1}]'


def test_int_slots_and_delete():
    assert repository.get_int("counter") is None
    repository.set_int("counter", 5)
    assert repository.get_int("counter") == 5

    repository.set_string("counter", "five")
    assert repository.get_int("counter") is None

    repository.delete_slot("counter")
    repository.delete_slot("counter")
    assert repository.get_string("counter") is None


def test_theme_defaults_to_dark():
    assert theme.load_theme() is ThemeMode.DARK

    repository.set_int(THEME_SLOT, 9)
    assert theme.load_theme() is ThemeMode.DARK


def test_theme_toggle_and_system_persist():
    mode = theme.toggle_theme(ThemeMode.DARK)
    assert mode is ThemeMode.LIGHT
    assert theme.load_theme() is ThemeMode.LIGHT

    mode = theme.toggle_theme(theme.load_theme())
    assert mode is ThemeMode.DARK
    assert repository.get_int(THEME_SLOT) == 2

    assert theme.set_system_theme() is ThemeMode.SYSTEM
    assert theme.load_theme() is ThemeMode.SYSTEM
    # From system, toggling goes to light
    assert theme.toggle_theme(ThemeMode.SYSTEM) is ThemeMode.LIGHT
