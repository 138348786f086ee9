"""Test completer suggestions for commands, values and rows."""

# Path setup handled by conftest.py
from prompt_toolkit.document import Document

from protask.core.models import Priority
from protask.core.store import TaskStore
from protask.repl.completer import create_completer


def complete(completer, text):
    doc = Document(text, cursor_position=len(text))
    return [c.text for c in completer.get_completions(doc, None)]


def test_command_completion():
    completer = create_completer()

    assert "undo" in complete(completer, "u")
    texts = complete(completer, "s")
    assert {"show", "sub", "search", "sort"} <= set(texts)
    assert complete(completer, "") != []


def test_fixed_values_after_commands():
    completer = create_completer()

    assert complete(completer, "sub ") == ["add", "done", "rm"]
    assert complete(completer, "filter p") == ["pending"]
    assert complete(completer, "theme ") == ["toggle", "system"]


def test_priority_after_flag():
    completer = create_completer()

    assert complete(completer, "add Milk -p ") == ["low", "medium", "high"]
    assert complete(completer, "edit 1 --priority h") == ["high"]
    assert complete(completer, "add Milk --p") == ["--priority"]


def test_row_completion_uses_visible_list(memory):
    store = TaskStore(memory)
    store.add_task("Buy milk", Priority.MEDIUM)
    store.add_task("Walk dog", Priority.HIGH)
    completer = create_completer(store)

    doc = Document("done ", cursor_position=5)
    completions = list(completer.get_completions(doc, None))

    assert [c.text for c in completions] == ["1", "2"]
    assert "Walk dog" in completions[0].display_meta_text
    assert complete(completer, "sub done ") == ["1", "2"]


def test_no_rows_without_store():
    assert complete(create_completer(), "rm ") == []
