"""Exceptions raised while locating, reading and parsing env files."""

from __future__ import annotations

import errno


class Error(Exception):
    """Base class for every error raised by this package."""

    def not_found(self) -> bool:
        """Return True if the error means that a file could not be found."""
        return False


class LineParseError(Error):
    """A line of an env file could not be parsed.

    ``line`` is the text that failed and ``index`` the position of the
    character at which parsing stopped.
    """

    def __init__(self, line: str, index: int) -> None:
        self.line = line
        self.index = index
        super().__init__(
            f"Error parsing line: '{line}', error at line index: {index}"
        )


class IoError(Error):
    """An operating-system error met while finding or reading a file."""

    def __init__(self, cause: OSError) -> None:
        self.cause = cause
        super().__init__(str(cause))
        self.__cause__ = cause

    def __str__(self) -> str:
        return str(self.cause)

    def not_found(self) -> bool:
        return (
            isinstance(self.cause, FileNotFoundError)
            or getattr(self.cause, "errno", None) == errno.ENOENT
        )


class EnvVarError(Error):
    """An environment variable is missing or its value is not valid text."""

    def __init__(self, key: str, not_unicode: bool = False) -> None:
        self.key = key
        self.not_unicode = not_unicode
        if not_unicode:
            message = "environment variable was not valid unicode"
        else:
            message = "environment variable not found"
        super().__init__(message)