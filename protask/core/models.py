"""
FILE: protask/core/models.py
PURPOSE: Domain models for tasks and sub-tasks, plus view selector enums
EXPORTS:
  - Priority (IntEnum)
  - FilterType (Enum)
  - SortOrder (Enum)
  - ThemeMode (IntEnum)
  - SubTask (dataclass)
  - Task (dataclass)
  - encode_tasks(tasks) -> str
  - decode_tasks(document) -> List[Task]
DEPENDENCIES:
  - dataclasses (stdlib)
  - enum (stdlib)
  - json (stdlib)
  - uuid (stdlib)
  - protask.core.exceptions (MalformedDocumentError)
NOTES:
  - All models have to_dict()/from_dict() for document conversion
  - Document keys keep the stored camelCase names (isDone, subTasks)
  - Decoding is default-tolerant so old records without subTasks still load
  - Task.id is a stable opaque identifier, never shown as a row number
"""

import json
import uuid
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List

from .exceptions import MalformedDocumentError


class Priority(IntEnum):
    """Task priority. Ordinals are what gets persisted and compared."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2

    @classmethod
    def from_ordinal(cls, value: Any) -> "Priority":
        """Decode a stored ordinal, falling back to MEDIUM for anything unexpected."""
        # bool is an int subclass; True must not decode as MEDIUM by accident
        if isinstance(value, bool) or not isinstance(value, int):
            return cls.MEDIUM
        try:
            return cls(value)
        except ValueError:
            return cls.MEDIUM

    @classmethod
    def parse(cls, name: str) -> "Priority":
        """Parse a user-facing name ('low', 'med', 'high') or ordinal string."""
        key = name.strip().lower()
        aliases = {
            "low": cls.LOW, "l": cls.LOW, "0": cls.LOW,
            "medium": cls.MEDIUM, "med": cls.MEDIUM, "m": cls.MEDIUM, "1": cls.MEDIUM,
            "high": cls.HIGH, "h": cls.HIGH, "2": cls.HIGH,
        }
        if key not in aliases:
            raise ValueError(f"Unknown priority '{name}'")
        return aliases[key]

    @property
    def label(self) -> str:
        return self.name.capitalize()


class FilterType(Enum):
    """Which tasks pass the status filter. Not persisted."""

    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"


class SortOrder(Enum):
    """Direction of the priority sort in the visible list."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    def toggled(self) -> "SortOrder":
        if self is SortOrder.ASCENDING:
            return SortOrder.DESCENDING
        return SortOrder.ASCENDING


class ThemeMode(IntEnum):
    """Theme preference stored in the theme slot."""

    SYSTEM = 0
    LIGHT = 1
    DARK = 2


def new_task_id() -> str:
    return uuid.uuid4().hex


def _decode_done(data: Dict[str, Any], owner: str) -> bool:
    """isDone must be a real boolean; absent or null means not done."""
    value = data.get("isDone")
    if value is None:
        return False
    if not isinstance(value, bool):
        raise MalformedDocumentError(f"isDone of '{owner}' is not a boolean: {value!r}")
    return value


@dataclass
class SubTask:
    """A checklist item owned by exactly one Task."""

    title: str
    is_done: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "isDone": self.is_done}

    @classmethod
    def from_dict(cls, data: Any) -> "SubTask":
        """Convert a stored sub-task document to SubTask."""
        if not isinstance(data, dict):
            raise MalformedDocumentError(f"Sub-task entry is not an object: {data!r}")
        title = data.get("title")
        if not isinstance(title, str):
            raise MalformedDocumentError("Sub-task entry has no title")
        return cls(title=title, is_done=_decode_done(data, title))


@dataclass
class Task:
    """A task with title, completion flag, priority and ordered sub-tasks."""

    title: str
    is_done: bool = False
    priority: Priority = Priority.MEDIUM
    sub_tasks: List[SubTask] = field(default_factory=list)
    id: str = field(default_factory=new_task_id)

    @property
    def done_sub_task_count(self) -> int:
        return sum(1 for sub in self.sub_tasks if sub.is_done)

    def copy(self) -> "Task":
        """Deep copy; the clone never shares the sub-task list."""
        return Task(
            title=self.title,
            is_done=self.is_done,
            priority=self.priority,
            sub_tasks=[SubTask(s.title, s.is_done) for s in self.sub_tasks],
            id=self.id,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to its stored document form."""
        return {
            "id": self.id,
            "title": self.title,
            "isDone": self.is_done,
            "priority": int(self.priority),
            "subTasks": [sub.to_dict() for sub in self.sub_tasks],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Task":
        """
        Convert a stored task document to Task.

        Missing or unknown priority decodes as MEDIUM, missing or null
        subTasks as an empty list, and a missing id gets a fresh one.

        Raises:
            MalformedDocumentError: If the entry is not an object or has no title
        """
        if not isinstance(data, dict):
            raise MalformedDocumentError(f"Task entry is not an object: {data!r}")

        title = data.get("title")
        if not isinstance(title, str):
            raise MalformedDocumentError("Task entry has no title")

        raw_subs = data.get("subTasks")
        if raw_subs is None:
            raw_subs = []
        if not isinstance(raw_subs, list):
            raise MalformedDocumentError(f"subTasks of '{title}' is not an array")

        task_id = data.get("id")
        if not isinstance(task_id, str) or not task_id:
            task_id = new_task_id()

        return cls(
            title=title,
            is_done=_decode_done(data, title),
            priority=Priority.from_ordinal(data.get("priority")),
            sub_tasks=[SubTask.from_dict(item) for item in raw_subs],
            id=task_id,
        )


def encode_tasks(tasks: List[Task]) -> str:
    """Serialize a whole collection to the single-slot JSON document."""
    return json.dumps([task.to_dict() for task in tasks])


def decode_tasks(document: str) -> List[Task]:
    """
    Parse a stored collection document.

    Any malformed element fails the whole decode; there is no partial recovery.

    Raises:
        MalformedDocumentError: On invalid JSON, a non-array root, or a bad entry
    """
    try:
        data = json.loads(document)
    except (TypeError, ValueError) as e:
        raise MalformedDocumentError(f"Stored tasks are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise MalformedDocumentError("Stored tasks document is not an array")

    return [Task.from_dict(item) for item in data]
