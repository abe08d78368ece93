"""Command that runs another program with the variables of an env file."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from collections.abc import Sequence
from typing import NoReturn

from envfile.errors import Error
from envfile.loader import dotenv, from_filename

_DESCRIPTION = "Run a command using the environment in a .env file"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envfile",
        description=_DESCRIPTION,
        usage="envfile <COMMAND> [ARGS]...",
    )
    parser.add_argument(
        "-f",
        "--file",
        metavar="FILE",
        help="Use a specific .env file (defaults to .env)",
    )
    parser.add_argument("command", nargs=argparse.REMAINDER, help=argparse.SUPPRESS)
    return parser


def _die(message: str) -> NoReturn:
    print(message, file=sys.stderr)
    sys.exit(1)


def main(argv: Sequence[str] | None = None) -> None:
    """Load an env file, then run the given command in that environment."""
    args = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    if not args:
        parser.print_help(sys.stderr)
        sys.exit(2)
    options = parser.parse_args(args)

    try:
        if options.file is None:
            dotenv()
        else:
            from_filename(options.file)
    except Error as error:
        _die(f"error: failed to load environment: {error}")

    if not options.command:
        _die("error: missing required argument <COMMAND>")
    name, *rest = options.command

    if sys.platform == "win32":
        try:
            completed = subprocess.run([name, *rest], check=False)
        except OSError as error:
            _die(f"fatal: {error}")
        code = completed.returncode
        sys.exit(code if code >= 0 else 1)

    try:
        os.execvp(name, [name, *rest])
    except OSError as error:
        _die(f"fatal: {error}")