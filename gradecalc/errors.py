"""Exceptions raised while loading data and handling user input."""

from __future__ import annotations

from typing import Any


class InvalidFilePathError(Exception):
    """A required file (font or subject data) could not be opened."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidInputError(Exception):
    """A value typed by the user was rejected.

    ``color`` is the colour the offending control should flash.
    """

    def __init__(self, color: Any) -> None:
        super().__init__(color)
        self.color = color


class InvalidFileContentError(Exception):
    """The subject data file is malformed at ``line`` (1-based)."""

    def __init__(self, message: str, line: int) -> None:
        super().__init__(message, line)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        return self.message