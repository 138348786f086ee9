"""
FILE: protask/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - ProTaskError (base exception)
  - TaskNotFoundError
  - InvalidInputError
  - MalformedDocumentError
  - PersistenceError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from ProTaskError for easy catching
  - The store never raises for stale indices; only the service layer
    raises TaskNotFoundError for row numbers typed by a user
  - Service layer raises these, UI layers catch and display
"""


class ProTaskError(Exception):
    """Base exception for all ProTask errors."""
    pass


class TaskNotFoundError(ProTaskError):
    """No task at the given visible row."""

    def __init__(self, row: int):
        self.row = row
        super().__init__(f"No task at row {row}")


class InvalidInputError(ProTaskError):
    """Input validation failed."""

    def __init__(self, message: str):
        super().__init__(message)


class MalformedDocumentError(ProTaskError):
    """The persisted task document could not be decoded."""

    def __init__(self, message: str):
        super().__init__(message)


class PersistenceError(ProTaskError):
    """Writing to or reading from durable storage failed."""

    def __init__(self, message: str):
        super().__init__(message)
