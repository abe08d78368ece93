"""Reading env files: joining quoted lines and yielding parsed pairs."""

from __future__ import annotations

import errno
import os
from collections.abc import Iterable, Iterator
from enum import Enum, auto
from typing import IO, AnyStr

from envfile.errors import IoError, LineParseError
from envfile.parse import SubstitutionData, parse_line

_BOM = "\ufeff"


class _State(Enum):
    COMPLETE = auto()
    ESCAPE = auto()
    STRONG_OPEN = auto()
    STRONG_OPEN_ESCAPE = auto()
    WEAK_OPEN = auto()
    WEAK_OPEN_ESCAPE = auto()
    COMMENT = auto()
    WHITESPACE = auto()


def _end_state(state: _State, text: str) -> tuple[int, _State]:
    """Run the quoting state machine over ``text`` starting from ``state``."""
    pos = 0
    for pos, c in enumerate(text):
        if state is _State.WHITESPACE:
            if c == "#":
                return pos, _State.COMMENT
            if c == "\\":
                state = _State.ESCAPE
            elif c == '"':
                state = _State.WEAK_OPEN
            elif c == "'":
                state = _State.STRONG_OPEN
            else:
                state = _State.COMPLETE
        elif state is _State.ESCAPE:
            state = _State.COMPLETE
        elif state is _State.COMPLETE:
            if c.isspace() and c not in "\n\r":
                state = _State.WHITESPACE
            elif c == "\\":
                state = _State.ESCAPE
            elif c == '"':
                state = _State.WEAK_OPEN
            elif c == "'":
                state = _State.STRONG_OPEN
        elif state is _State.WEAK_OPEN:
            if c == "\\":
                state = _State.WEAK_OPEN_ESCAPE
            elif c == '"':
                state = _State.COMPLETE
        elif state is _State.WEAK_OPEN_ESCAPE:
            state = _State.WEAK_OPEN
        elif state is _State.STRONG_OPEN:
            if c == "\\":
                state = _State.STRONG_OPEN_ESCAPE
            elif c == "'":
                state = _State.COMPLETE
        elif state is _State.STRONG_OPEN_ESCAPE:
            state = _State.STRONG_OPEN
    return pos, state


def _strip_newline(text: str) -> str:
    if text.endswith("\n"):
        text = text[:-1]
        if text.endswith("\r"):
            text = text[:-1]
    return text


def quoted_lines(stream: Iterable[str]) -> Iterator[str]:
    """Join physical lines into logical ones.

    ``stream`` yields lines with their line endings kept. A quoted value may
    span several lines; trailing comments are cut off, and comment lines come
    out as empty strings. Raises LineParseError if the input ends inside an
    open quote or escape.
    """
    lines = iter(stream)
    while True:
        buf = ""
        state = _State.COMPLETE
        while True:
            start = len(buf)
            chunk = next(lines, "")
            if not chunk:
                if state is _State.COMPLETE:
                    return
                raise LineParseError(buf, len(buf))
            buf += chunk
            if buf.lstrip().startswith("#"):
                yield ""
                break
            pos, state = _end_state(state, chunk)
            if state is _State.COMPLETE:
                yield _strip_newline(buf)
                break
            if state is _State.COMMENT:
                yield buf[: start + pos]
                break


class Iter:
    """Iterator over the ``(key, value)`` pairs of an env file.

    ``reader`` is a binary or text file-like object with ``readline``.
    Later lines may refer to the values of earlier ones.
    """

    def __init__(self, reader: IO[AnyStr]) -> None:
        self._reader = reader
        self._pending: list[str] = []
        self._consumed = False
        self._substitution_data: SubstitutionData = {}
        self._lines = quoted_lines(self._physical_lines())

    def __iter__(self) -> Iter:
        return self

    def __next__(self) -> tuple[str, str]:
        while True:
            line = next(self._lines)
            result = parse_line(line, self._substitution_data)
            if result is not None:
                return result

    def load(self) -> None:
        """Set every variable in the environment unless it is already set.

        Of repeated keys in the input, the first one wins.
        """
        self._remove_bom()
        for key, value in self:
            if key not in os.environ:
                os.environ[key] = value

    def load_override(self) -> None:
        """Set every variable in the environment, replacing existing values.

        Of repeated keys in the input, the last one wins.
        """
        self._remove_bom()
        for key, value in self:
            os.environ[key] = value

    def _read_line(self) -> str:
        try:
            raw = self._reader.readline()
        except OSError as error:
            raise IoError(error) from error
        if isinstance(raw, bytes):
            try:
                return raw.decode("utf-8")
            except UnicodeDecodeError as error:
                raise IoError(
                    OSError(errno.EILSEQ, "stream did not contain valid UTF-8")
                ) from error
        return raw

    def _physical_lines(self) -> Iterator[str]:
        while True:
            line = self._pending.pop() if self._pending else self._read_line()
            self._consumed = True
            if not line:
                return
            yield line

    def _remove_bom(self) -> None:
        if self._consumed or self._pending:
            return
        self._pending.append(self._read_line().removeprefix(_BOM))