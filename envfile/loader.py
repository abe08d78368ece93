"""Loading env files into the process environment."""

from __future__ import annotations

import functools
import os
from collections.abc import Iterator
from pathlib import Path
from typing import IO, AnyStr

from envfile.errors import EnvVarError, Error, IoError
from envfile.find import Finder, find
from envfile.iter import Iter

_DEFAULT_NAME = ".env"


@functools.cache
def _load_once() -> None:
    try:
        dotenv()
    except Error:
        pass


def _open(path: str | os.PathLike[str]) -> IO[bytes]:
    try:
        return open(path, "rb")
    except OSError as error:
        raise IoError(error) from error


def _locate(filename: str | os.PathLike[str]) -> Path:
    try:
        directory = Path.cwd()
    except OSError as error:
        raise IoError(error) from error
    return find(directory, filename)


def var(key: str) -> str:
    """Return an environment variable, loading ``.env`` on the first call.

    Raises EnvVarError if it is missing or not valid text.
    """
    _load_once()
    value = os.environ.get(key)
    if value is None:
        raise EnvVarError(key)
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise EnvVarError(key, not_unicode=True) from None
    return value


def vars() -> Iterator[tuple[str, str]]:
    """Return a snapshot of the environment, loading ``.env`` on the first call."""
    _load_once()
    return iter(list(os.environ.items()))


def from_path(path: str | os.PathLike[str]) -> None:
    """Load the file at ``path``, keeping variables that are already set."""
    with _open(path) as handle:
        Iter(handle).load()


def from_path_override(path: str | os.PathLike[str]) -> None:
    """Load the file at ``path``, replacing variables that are already set."""
    with _open(path) as handle:
        Iter(handle).load_override()


def from_path_iter(path: str | os.PathLike[str]) -> Iter:
    """Return an Iter over the file at ``path``."""
    return Iter(_open(path))


def from_filename(filename: str | os.PathLike[str]) -> Path:
    """Find ``filename`` upwards from the current directory and load it.

    Variables already set are kept. Returns the path of the file.
    """
    path = _locate(filename)
    with _open(path) as handle:
        Iter(handle).load()
    return path


def from_filename_override(filename: str | os.PathLike[str]) -> Path:
    """Find ``filename`` upwards from the current directory and load it.

    Variables already set are replaced. Returns the path of the file.
    """
    path = _locate(filename)
    with _open(path) as handle:
        Iter(handle).load_override()
    return path


def from_filename_iter(filename: str | os.PathLike[str]) -> Iter:
    """Find ``filename`` upwards from the current directory and iterate it."""
    _, pairs = Finder(filename).find()
    return pairs


def from_read(reader: IO[AnyStr]) -> None:
    """Load from a file-like object, keeping variables that are already set."""
    Iter(reader).load()


def from_read_override(reader: IO[AnyStr]) -> None:
    """Load from a file-like object, replacing variables that are already set."""
    Iter(reader).load_override()


def from_read_iter(reader: IO[AnyStr]) -> Iter:
    """Return an Iter over a file-like object."""
    return Iter(reader)


def dotenv() -> Path:
    """Find ``.env`` upwards from the current directory and load it.

    Variables already set are kept. Returns the path of the file.
    """
    return from_filename(_DEFAULT_NAME)


def dotenv_override() -> Path:
    """Find ``.env`` upwards from the current directory and load it.

    Variables already set are replaced. Returns the path of the file.
    """
    return from_filename_override(_DEFAULT_NAME)


def dotenv_iter() -> Iter:
    """Find ``.env`` upwards from the current directory and iterate it."""
    return from_filename_iter(_DEFAULT_NAME)