"""
FILE: protask/repl/parser.py
PURPOSE: Parse user input into commands and arguments for REPL
EXPORTS:
  - ParseResult (dataclass for parsed commands)
  - parse_command(input_str) -> ParseResult
DEPENDENCIES:
  - shlex (for shell-like parsing with quotes)
  - dataclasses (for ParseResult)
  - typing (type hints)
NOTES:
  - Handles quoted strings: add "task with spaces"
  - Value flags: --priority high, or the short form -p high
  - A lone "-" or a negative-looking token stays positional
  - Case-insensitive command names
"""

import shlex
from dataclasses import dataclass, field
from typing import List, Dict, Union

# Short flag aliases accepted in the REPL
SHORT_FLAGS = {
    "p": "priority",
}


@dataclass
class ParseResult:
    """
    Result of parsing a REPL command.

    Attributes:
        command: The command name (e.g., "add", "ls", "done")
        args: Positional arguments (e.g., ["Buy milk"])
        flags: Flag arguments as dict (e.g., {"priority": "high"})
        raw_input: Original input string
    """
    command: str
    args: List[str] = field(default_factory=list)
    flags: Dict[str, Union[str, bool]] = field(default_factory=dict)
    raw_input: str = ""


def _flag_name(token: str):
    """Return the long flag name for a token, or None if it's positional."""
    if token.startswith("--") and len(token) > 2:
        return token[2:].lower()
    if token.startswith("-") and len(token) == 2 and token[1].isalpha():
        return SHORT_FLAGS.get(token[1].lower(), token[1].lower())
    return None


def parse_command(input_str: str) -> ParseResult:
    """
    Parse REPL input into command, args, and flags.

    Examples:
        >>> parse_command("add Buy milk")
        ParseResult(command="add", args=["Buy", "milk"], flags={})

        >>> parse_command('add "Walk dog" -p high')
        ParseResult(command="add", args=["Walk dog"], flags={"priority": "high"})

        >>> parse_command("edit 2 --priority")
        ParseResult(command="edit", args=["2"], flags={"priority": True})

    Notes:
        - Command is always the first token (case-insensitive)
        - A value flag takes the next token unless that token is itself a flag
        - Empty input returns command="" with no args/flags
    """
    input_str = input_str.strip()
    if not input_str:
        return ParseResult(command="", raw_input=input_str)

    try:
        tokens = shlex.split(input_str)
    except ValueError:
        # Unclosed quote: fall back to whitespace split
        tokens = input_str.split()

    if not tokens:
        return ParseResult(command="", raw_input=input_str)

    command = tokens[0].lower()
    args: List[str] = []
    flags: Dict[str, Union[str, bool]] = {}

    i = 1
    while i < len(tokens):
        token = tokens[i]
        name = _flag_name(token)

        if name is None:
            args.append(token)
            i += 1
            continue

        has_value = (
            i + 1 < len(tokens)
            and _flag_name(tokens[i + 1]) is None
        )
        if has_value:
            flags[name] = tokens[i + 1]
            i += 2
        else:
            flags[name] = True
            i += 1

    return ParseResult(command=command, args=args, flags=flags, raw_input=input_str)
