"""Parsing of single env-file lines, with variable substitution."""

from __future__ import annotations

import os
import re
from enum import Enum, auto

from envfile.errors import LineParseError

SubstitutionData = dict[str, "str | None"]

_KEY = re.compile(r"[A-Za-z_][A-Za-z0-9_.]*")


def parse_line(
    line: str, substitution_data: SubstitutionData
) -> tuple[str, str] | None:
    """Parse one logical line into ``(key, value)``.

    Returns None for blank lines and comments. Every parsed key is recorded
    in ``substitution_data`` so that later lines can refer to it.
    Raises LineParseError when the line is malformed.
    """
    return _LineParser(line, substitution_data).parse()


class _LineParser:
    def __init__(self, line: str, substitution_data: SubstitutionData) -> None:
        self._original = line
        self._data = substitution_data
        self._rest = line.rstrip()
        self._pos = 0

    def _error(self) -> LineParseError:
        return LineParseError(self._original, self._pos)

    def parse(self) -> tuple[str, str] | None:
        self._skip_whitespace()
        if not self._rest or self._rest.startswith("#"):
            return None

        key = self._parse_key()
        self._skip_whitespace()

        # "export" is either an optional prefix or a key in its own right.
        if key == "export":
            if not self._accept_equal():
                key = self._parse_key()
                self._skip_whitespace()
                self._expect_equal()
        else:
            self._expect_equal()
        self._skip_whitespace()

        if not self._rest or self._rest.startswith("#"):
            self._data[key] = None
            return key, ""

        value = parse_value(self._rest, self._data)
        self._data[key] = value
        return key, value

    def _parse_key(self) -> str:
        match = _KEY.match(self._rest)
        if match is None:
            raise self._error()
        key = match.group()
        self._pos += len(key)
        self._rest = self._rest[len(key):]
        return key

    def _accept_equal(self) -> bool:
        if not self._rest.startswith("="):
            return False
        self._rest = self._rest[1:]
        self._pos += 1
        return True

    def _expect_equal(self) -> None:
        if not self._accept_equal():
            raise self._error()

    def _skip_whitespace(self) -> None:
        stripped = self._rest.lstrip()
        self._pos += len(self._rest) - len(stripped)
        self._rest = stripped


class _Substitution(Enum):
    NONE = auto()
    BLOCK = auto()
    ESCAPED_BLOCK = auto()


def _substitute(name: str, substitution_data: SubstitutionData) -> str:
    environment_value = os.environ.get(name) if name else None
    if environment_value is not None:
        return environment_value
    return substitution_data.get(name) or ""


def parse_value(value: str, substitution_data: SubstitutionData) -> str:
    """Unquote, unescape and substitute variables in the value part of a line.

    Raises LineParseError on bad escapes, unterminated quotes or blocks,
    and unexpected text after whitespace.
    """
    strong_quote = False
    weak_quote = False
    escaped = False
    expecting_end = False
    output: list[str] = []
    mode = _Substitution.NONE
    name: list[str] = []

    def flush_substitution() -> None:
        output.append(_substitute("".join(name), substitution_data))
        name.clear()

    for index, c in enumerate(value):
        # expecting_end permits "k=v #comment", keeps "k=v#comment" whole,
        # and rejects "k=v w".
        if expecting_end:
            if c in " \t":
                continue
            if c == "#":
                break
            raise LineParseError(value, index)
        elif escaped:
            if c in "\\'\"$ ":
                output.append(c)
            elif c == "n":
                output.append("\n")
            else:
                raise LineParseError(value, index)
            escaped = False
        elif strong_quote:
            if c == "'":
                strong_quote = False
            else:
                output.append(c)
        elif mode is not _Substitution.NONE:
            if c.isalnum():
                name.append(c)
            elif mode is _Substitution.BLOCK:
                if c == "{" and not name:
                    mode = _Substitution.ESCAPED_BLOCK
                else:
                    flush_substitution()
                    if c == "$":
                        mode = _Substitution.BLOCK
                    else:
                        mode = _Substitution.NONE
                        output.append(c)
            elif c == "}":
                mode = _Substitution.NONE
                flush_substitution()
            else:
                name.append(c)
        elif c == "$":
            mode = _Substitution.BLOCK
        elif weak_quote:
            if c == '"':
                weak_quote = False
            elif c == "\\":
                escaped = True
            else:
                output.append(c)
        elif c == "'":
            strong_quote = True
        elif c == '"':
            weak_quote = True
        elif c == "\\":
            escaped = True
        elif c in " \t":
            expecting_end = True
        else:
            output.append(c)

    if mode is _Substitution.ESCAPED_BLOCK or strong_quote or weak_quote:
        raise LineParseError(value, max(len(value) - 1, 0))

    flush_substitution()
    return "".join(output)