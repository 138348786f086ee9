"""
Test REPL input parsing and row list parsing.
"""

import pytest

# Path setup handled by conftest.py
from protask.formatting import parse_rows
from protask.repl.parser import parse_command


def test_plain_words_become_args():
    result = parse_command("add Buy milk")
    assert result.command == "add"
    assert result.args == ["Buy", "milk"]
    assert result.flags == {}


def test_quoted_title_and_short_priority_flag():
    result = parse_command('ADD "Walk dog" -p high')
    assert result.command == "add"
    assert result.args == ["Walk dog"]
    assert result.flags == {"priority": "high"}


def test_long_flag_takes_next_token():
    result = parse_command("edit 2 --priority low Renamed")
    assert result.args == ["2", "Renamed"]
    assert result.flags == {"priority": "low"}


def test_only_priority_has_a_short_alias():
    result = parse_command("add Milk -p low")
    assert result.flags == {"priority": "low"}

    # Unknown short flags keep their own letter
    result = parse_command("add Milk -f pending")
    assert result.flags == {"f": "pending"}
    assert "filter" not in result.flags


def test_flag_without_value():
    result = parse_command("edit 2 --priority")
    assert result.args == ["2"]
    assert result.flags == {"priority": True}


def test_negative_numbers_and_dash_stay_positional():
    result = parse_command("add -5 degrees - cold")
    assert result.args == ["-5", "degrees", "-", "cold"]


def test_empty_and_unbalanced_input():
    assert parse_command("   ").command == ""
    result = parse_command('add "unterminated title')
    assert result.command == "add"
    assert result.args == ['"unterminated', "title"]


def test_parse_rows():
    assert parse_rows("1,2, 3") == [1, 2, 3]
    assert parse_rows("4,") == [4]
    with pytest.raises(ValueError):
        parse_rows("1,two")
