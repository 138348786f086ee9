"""
FILE: protask/repl/completer.py
PURPOSE: Autocomplete logic for REPL commands and arguments
EXPORTS:
  - ProTaskCompleter (Completer for command/arg completion)
  - create_completer(store) -> ProTaskCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
  - prompt_toolkit.document (Document)
  - typing (type hints)
  - protask.core.store (row suggestions come from the visible list)
NOTES:
  - Suggests command names when at start of line
  - Suggests sub-task actions after "sub"
  - Suggests filter values after "filter", theme actions after "theme"
  - Suggests priorities after -p/--priority
  - Suggests visible row numbers (with titles) for row commands when a
    store is attached
  - Case-insensitive matching
"""

from typing import Iterable, Optional

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document


class ProTaskCompleter(Completer):
    """
    Custom completer for the ProTask REPL.

    Args:
        store: Optional TaskStore used to suggest row numbers
    """

    COMMANDS = [
        "add", "ls", "show", "done", "edit", "rm", "undo", "sub",
        "filter", "search", "sort", "theme", "help", "clear", "exit", "quit",
    ]

    SUB_ACTIONS = ["add", "done", "rm"]
    FILTER_VALUES = ["all", "pending", "completed"]
    THEME_ACTIONS = ["toggle", "system"]
    PRIORITIES = ["low", "medium", "high"]

    COMMAND_FLAGS = {
        "add": ["--priority"],
        "edit": ["--priority"],
    }

    ROW_COMMANDS = {"show", "done", "edit", "rm"}

    def __init__(self, store=None):
        self._store = store

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on current input.

        Logic:
            1. At start -> commands
            2. After "sub" / "filter" / "theme" -> their fixed values
            3. After -p/--priority -> priority names
            4. First argument of a row command -> visible rows
            5. A word starting with "-" -> command flags
        """
        text_before_cursor = document.text_before_cursor
        words = text_before_cursor.split()
        at_new_word = text_before_cursor.endswith(" ")

        if not words or (not at_new_word and len(words) == 1):
            word = words[0] if words else ""
            yield from self._complete_from(self.COMMANDS, word, self._get_command_description)
            return

        command = words[0].lower()
        current = "" if at_new_word else words[-1]
        # Index of the argument being typed (1 = first argument)
        arg_position = len(words) if at_new_word else len(words) - 1

        previous = words[-1] if at_new_word else (words[-2] if len(words) >= 2 else "")
        if previous in ("-p", "--priority"):
            yield from self._complete_from(self.PRIORITIES, current)
            return

        if arg_position == 1:
            if command == "sub":
                yield from self._complete_from(self.SUB_ACTIONS, current)
                return
            if command == "filter":
                yield from self._complete_from(self.FILTER_VALUES, current)
                return
            if command == "theme":
                yield from self._complete_from(self.THEME_ACTIONS, current)
                return
            if command in self.ROW_COMMANDS and not current.startswith("-"):
                yield from self._complete_rows(current)
                return

        if command == "sub" and arg_position == 2:
            yield from self._complete_rows(current)
            return

        if current.startswith("-"):
            yield from self._complete_from(self.COMMAND_FLAGS.get(command, []), current)

    def _complete_from(self, options, word: str, describe=None) -> Iterable[Completion]:
        word_lower = word.lower()
        for option in options:
            if option.startswith(word_lower):
                yield Completion(
                    option,
                    start_position=-len(word),
                    display=option,
                    display_meta=describe(option) if describe else "",
                )

    def _complete_rows(self, word: str) -> Iterable[Completion]:
        """Complete row numbers, labelled with the task title."""
        if self._store is None:
            return
        for row, task in enumerate(self._store.visible_tasks()[:200], 1):
            row_str = str(row)
            if row_str.startswith(word):
                title = task.title.strip()
                display_title = title if len(title) <= 40 else title[:37] + "..."
                yield Completion(
                    row_str,
                    start_position=-len(word),
                    display=row_str,
                    display_meta=f"{display_title} [{task.priority.label}]",
                )

    @staticmethod
    def _get_command_description(command: str) -> str:
        """Get description for a command (shown in autocomplete menu)."""
        descriptions = {
            "add": "Create a new task",
            "ls": "List tasks",
            "show": "View a task and its sub-tasks",
            "done": "Toggle task completion",
            "edit": "Update title/priority",
            "rm": "Delete task",
            "undo": "Restore last deleted task",
            "sub": "Sub-task commands",
            "filter": "Set status filter",
            "search": "Search titles",
            "sort": "Flip priority order",
            "theme": "Show or change theme",
            "help": "Show available commands",
            "clear": "Clear the screen",
            "exit": "Exit REPL",
            "quit": "Exit REPL",
        }
        return descriptions.get(command, "")


def create_completer(store=None) -> ProTaskCompleter:
    """
    Create and return a ProTaskCompleter instance.

    Usage:
        completer = create_completer(ctx.store)
        session = PromptSession(completer=completer)
    """
    return ProTaskCompleter(store)
