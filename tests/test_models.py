"""
Test task/sub-task document conversion and decode defaults.
"""

import json

import pytest

# Path setup handled by conftest.py
from protask.core.exceptions import MalformedDocumentError
from protask.core.models import (
    Priority,
    SortOrder,
    SubTask,
    Task,
    decode_tasks,
    encode_tasks,
)


def test_collection_survives_encode_decode():
    """Tasks with zero or many sub-tasks and every priority come back equal."""
    tasks = [
        Task("Plain", priority=Priority.LOW),
        Task("Done one", is_done=True, priority=Priority.HIGH),
        Task(
            "With subs",
            priority=Priority.MEDIUM,
            sub_tasks=[SubTask("a"), SubTask("b", is_done=True), SubTask("a")],
        ),
    ]

    assert decode_tasks(encode_tasks(tasks)) == tasks
    assert decode_tasks(encode_tasks([])) == []


def test_document_uses_stored_key_names():
    task = Task("Buy milk", sub_tasks=[SubTask("Check fridge")])
    data = json.loads(encode_tasks([task]))[0]

    assert set(data) == {"id", "title", "isDone", "priority", "subTasks"}
    assert data["priority"] == 1
    assert data["subTasks"] == [{"title": "Check fridge", "isDone": False}]


def test_missing_sub_tasks_decode_as_empty():
    doc = json.dumps([
        {"title": "Old record", "isDone": False, "priority": 2},
        {"title": "Null subs", "isDone": True, "priority": 0, "subTasks": None},
    ])
    tasks = decode_tasks(doc)

    assert tasks[0].sub_tasks == []
    assert tasks[1].sub_tasks == []
    assert tasks[0].priority is Priority.HIGH


def test_missing_id_gets_generated():
    tasks = decode_tasks('[{"title": "a"}, {"title": "a"}]')

    assert tasks[0].id and tasks[1].id
    assert tasks[0].id != tasks[1].id
    assert tasks[0].is_done is False


@pytest.mark.parametrize("raw", [None, 7, -1, "high", True, 1.5])
def test_unexpected_priority_decodes_as_medium(raw):
    doc = json.dumps([{"title": "x", "priority": raw}])
    assert decode_tasks(doc)[0].priority is Priority.MEDIUM


@pytest.mark.parametrize("doc", [
    "not json",
    '{"title": "object root"}',
    '[{"isDone": true}]',
    '[{"title": 3}]',
    '["just a string"]',
    '[{"title": "x", "subTasks": "nope"}]',
    '[{"title": "x", "subTasks": [{"isDone": true}]}]',
])
def test_malformed_document_fails_whole_decode(doc):
    with pytest.raises(MalformedDocumentError):
        decode_tasks(doc)


@pytest.mark.parametrize("doc", [
    '[{"title": "t", "isDone": "false"}]',
    '[{"title": "t", "isDone": 0}]',
    '[{"title": "t", "subTasks": [{"title": "s", "isDone": "no"}]}]',
    '[{"title": "t", "subTasks": [{"title": "s", "isDone": 1}]}]',
])
def test_non_boolean_done_flag_is_malformed(doc):
    with pytest.raises(MalformedDocumentError):
        decode_tasks(doc)


def test_null_done_flag_reads_as_pending():
    tasks = decode_tasks(
        '[{"title": "t", "isDone": null, "subTasks": [{"title": "s"}]}]'
    )
    assert tasks[0].is_done is False
    assert tasks[0].sub_tasks[0].is_done is False


def test_copy_does_not_share_sub_tasks():
    task = Task("Parent", sub_tasks=[SubTask("child")])
    clone = task.copy()

    clone.sub_tasks[0].is_done = True
    clone.sub_tasks.append(SubTask("extra"))

    assert task.sub_tasks == [SubTask("child")]
    assert clone.id == task.id


def test_priority_parse_accepts_names_and_ordinals():
    assert Priority.parse("High") is Priority.HIGH
    assert Priority.parse(" med ") is Priority.MEDIUM
    assert Priority.parse("0") is Priority.LOW
    with pytest.raises(ValueError):
        Priority.parse("urgent")


def test_sort_order_toggles_back_and_forth():
    assert SortOrder.ASCENDING.toggled() is SortOrder.DESCENDING
    assert SortOrder.DESCENDING.toggled() is SortOrder.ASCENDING
