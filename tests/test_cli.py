"""
Test CLI commands end to end, each run in a fresh process.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

# Path setup handled by conftest.py
from protask.core import repository
from protask.core.constants import TASKS_SLOT

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def temp_db(monkeypatch, tmp_path):
    """Point both this process and the CLI subprocesses at tmp_path."""
    db_path = tmp_path / "protask.db"
    monkeypatch.setattr(repository, "DB_PATH", db_path)
    monkeypatch.setattr(repository, "DB_DIR", tmp_path)
    monkeypatch.setenv("PROTASK_HOME", str(tmp_path))
    monkeypatch.setenv("PYTHONIOENCODING", "utf-8")
    yield db_path


def run_cli(*args, **kwargs):
    """Run CLI command with proper encoding for Windows."""
    kwargs.setdefault('capture_output', True)
    kwargs.setdefault('text', True)
    kwargs.setdefault('encoding', 'utf-8')
    kwargs.setdefault('errors', 'replace')
    kwargs.setdefault('cwd', PROJECT_ROOT)
    kwargs.setdefault('env', dict(os.environ))
    return subprocess.run(
        [sys.executable, "-m", "protask.cli.main", *args], **kwargs
    )


def raw_lines(*args):
    result = run_cli("ls", "--raw", *args)
    assert result.returncode == 0, result.stderr
    return result.stdout.splitlines()


def test_version():
    result = run_cli("version")
    assert result.returncode == 0
    assert "ProTask v" in result.stdout


def test_default_launches_repl():
    result = run_cli(input="exit\n")

    assert "ProTask REPL" in result.stdout, f"Expected REPL welcome message, got: {result.stdout}"
    assert "Goodbye!" in result.stdout
    assert result.returncode == 0


def test_repl_session_persists_tasks():
    result = run_cli("repl", input='add "Buy milk"\nadd Walk dog -p high\nexit\n')
    assert result.returncode == 0, result.stderr

    assert raw_lines() == [
        "1: [ ] Walk dog (High)",
        "2: [ ] Buy milk (Medium)",
    ]


def test_add_and_ls():
    result = run_cli("add", "Buy milk", "--raw")
    assert result.returncode == 0
    assert result.stdout.strip() == "Buy milk (Medium)"

    run_cli("add", "Walk dog", "--priority", "high")

    assert raw_lines() == [
        "1: [ ] Walk dog (High)",
        "2: [ ] Buy milk (Medium)",
    ]
    assert raw_lines("--search", "MILK") == ["1: [ ] Buy milk (Medium)"]
    assert raw_lines("--desc") == [
        "1: [ ] Buy milk (Medium)",
        "2: [ ] Walk dog (High)",
    ]


def test_add_rejects_blank_title_and_bad_priority():
    result = run_cli("add", "   ")
    assert result.returncode == 1
    assert "cannot be empty" in result.stderr

    result = run_cli("add", "Task", "-p", "urgent")
    assert result.returncode == 1
    assert "Invalid priority" in result.stderr
    assert raw_lines() == []


def test_done_filters_and_json():
    run_cli("add", "Buy milk")
    run_cli("add", "Walk dog", "-p", "high")

    result = run_cli("done", "2")
    assert result.returncode == 0
    assert "Completed: Buy milk" in result.stdout

    assert raw_lines("--filter", "completed") == ["1: [x] Buy milk (Medium)"]
    assert raw_lines("-f", "pending") == ["1: [ ] Walk dog (High)"]

    result = run_cli("ls", "--json")
    data = json.loads(result.stdout)
    assert [(t["title"], t["isDone"], t["priority"]) for t in data] == [
        ("Walk dog", False, 2),
        ("Buy milk", True, 1),
    ]
    assert all(t["subTasks"] == [] for t in data)


def test_rows_follow_view_options():
    run_cli("add", "Buy milk")
    run_cli("add", "Call mum")

    # Row 1 of the search result is Buy milk, not the first row overall
    result = run_cli("edit", "1", "Buy oat milk", "--search", "milk")
    assert result.returncode == 0
    assert "Updated: Buy oat milk" in result.stdout

    assert raw_lines() == [
        "1: [ ] Call mum (Medium)",
        "2: [ ] Buy oat milk (Medium)",
    ]


def test_rm_confirm_and_force():
    run_cli("add", "Keep")
    run_cli("add", "Drop")

    result = run_cli("rm", "1", input="n\n")
    assert "Cancelled" in result.stdout
    assert len(raw_lines()) == 2

    result = run_cli("rm", "1", "--force")
    assert result.returncode == 0
    assert "Deleted: Drop" in result.stdout
    assert raw_lines() == ["1: [ ] Keep (Medium)"]

    result = run_cli("rm", "4", "-y")
    assert result.returncode == 1
    assert "No task at row 4" in result.stderr


def test_sub_tasks_and_show():
    run_cli("add", "Trip")
    assert run_cli("sub", "add", "1", "Pack bags").returncode == 0
    assert run_cli("sub", "add", "1", "Book train").returncode == 0
    assert run_cli("sub", "done", "1", "2").returncode == 0

    result = run_cli("show", "1", "--json")
    data = json.loads(result.stdout)
    assert data["subTasks"] == [
        {"title": "Pack bags", "isDone": False},
        {"title": "Book train", "isDone": True},
    ]

    result = run_cli("sub", "rm", "1", "1")
    assert "Removed sub-task: Pack bags" in result.stdout

    result = run_cli("sub", "done", "1", "5")
    assert result.returncode == 1
    assert "has no sub-task 5" in result.stderr


def test_theme_command():
    result = run_cli("theme")
    assert "Theme: dark" in result.stdout

    result = run_cli("theme", "toggle")
    assert "light" in result.stdout
    assert "Theme: light" in run_cli("theme").stdout

    result = run_cli("theme", "sideways")
    assert result.returncode == 1


def test_corrupt_document_is_fatal_and_preserved():
    repository.set_string(TASKS_SLOT, "[{not json")

    result = run_cli("ls")
    assert result.returncode == 1
    assert "Stored tasks are corrupt" in result.stderr

    result = run_cli("add", "Would overwrite")
    assert result.returncode == 1
    assert repository.get_string(TASKS_SLOT) == "[{not json"
