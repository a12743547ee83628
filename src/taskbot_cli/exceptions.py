"""Exceptions raised by Taskbot CLI."""

from typing import List, Optional


class InputError(Exception):
    """Exception raised when a command cannot be carried out.

    The message is meant for the user as-is. The interactive loop displays it
    and keeps accepting input.
    """

    def __init__(self, message: str, suggestions: Optional[List[str]] = None):
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(message)


class StorageError(Exception):
    """Exception raised when the save file cannot be read back."""

    def __init__(self, message: str, path=None):
        self.path = path
        super().__init__(message)
