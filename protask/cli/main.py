"""
FILE: protask/cli/main.py
PURPOSE: CLI entry point; registers every command on the shared Typer app
EXPORTS:
  - app (Typer application)
  - main() (entry point)
DEPENDENCIES:
  - protask.cli.app (app and shared consoles)
  - protask.cli.commands (command registration)
NOTES:
  - `protask` with no command launches the REPL
"""

from .app import app

# Import command modules to register commands with app
# Commands are decorated with @app.command() in their modules
from .commands import (  # noqa: F401
    # System commands
    version,
    help,
    repl,
    theme,
    # Task commands
    add,
    ls,
    show,
    done,
    edit,
    rm,
    # Sub-task commands
    sub_add,
    sub_done,
    sub_rm,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
