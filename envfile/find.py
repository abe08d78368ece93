"""Locating an env file in a directory or one of its parents."""

from __future__ import annotations

import errno
import os
import stat
from pathlib import Path

from envfile.errors import IoError
from envfile.iter import Iter


def find(directory: str | os.PathLike[str], filename: str | os.PathLike[str]) -> Path:
    """Search ``directory`` and its parents for a regular file ``filename``.

    Raises IoError if it is not found before the root is reached.
    """
    current = Path(directory)
    while True:
        candidate = current / filename
        try:
            info = candidate.stat()
        except FileNotFoundError:
            pass
        except OSError as error:
            raise IoError(error) from error
        else:
            if stat.S_ISREG(info.st_mode):
                return candidate
        parent = current.parent
        if parent == current:
            raise IoError(FileNotFoundError(errno.ENOENT, "path not found"))
        current = parent


class Finder:
    """Finds an env file upwards from the current directory."""

    def __init__(self, filename: str | os.PathLike[str] = ".env") -> None:
        self.filename = Path(filename)

    def find(self) -> tuple[Path, Iter]:
        """Return the path found and an Iter over the opened file."""
        try:
            directory = Path.cwd()
        except OSError as error:
            raise IoError(error) from error
        path = find(directory, self.filename)
        try:
            handle = open(path, "rb")
        except OSError as error:
            raise IoError(error) from error
        return path, Iter(handle)