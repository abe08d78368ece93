# envfile

Load environment variables from a `.env` file into the current process, or
run another command with them.

## File format

A `.env` file holds `KEY=value` lines:

```
# settings
export DATABASE_HOST=localhost
GREETING="hello world"
RAW='no $expansion here'
URL=http://${DATABASE_HOST}:5432
```

- Keys start with a letter or `_` and may contain letters, digits, `_` and
  `.`. An optional `export ` prefix is accepted; `export` on its own is also
  a valid key.
- Whitespace around `=` is ignored. An empty value (or one that is only a
  comment) gives an empty string.
- Single quotes take their contents literally.
- Double quotes and unquoted values allow the escapes `\\`, `\'`, `\"`,
  `\$`, `\ ` and `\n`; any other escape is an error.
- `${NAME}` and `$NAME` expand outside single quotes. An unbraced name ends
  at the first character that is not a letter or digit, so `$KEY_U` is
  `$KEY` followed by `_U`. A variable already in the process environment
  wins over one defined earlier in the file; an unknown name expands to an
  empty string.
- `#` starts a comment at the start of a line or after whitespace;
  `a=b#c` keeps the `#`. Unquoted text after whitespace that is not a
  comment is an error.
- A quoted value may span several lines.
- A UTF-8 byte order mark at the start of the file is ignored when loading.

## Library use

```python
from envfile.loader import dotenv, from_filename, from_path, var

dotenv()                     # find .env in the current directory or a parent
from_filename("custom.env")  # search for another file name the same way
from_path("config/.env")     # load one exact path

print(var("GREETING"))
```

`dotenv`, `from_filename`, `from_path` and `from_read` keep variables that
are already set and use the first definition in the file. The `_override`
variants (`dotenv_override`, `from_filename_override`,
`from_path_override`, `from_read_override`) replace existing variables and
use the last definition. `dotenv` and the `from_filename` functions return
the path of the file they found.

`var(key)` and `vars()` read the process environment; the first call of
either tries once to load `.env`, ignoring any error.

To inspect entries without touching the environment, iterate an
`envfile.iter.Iter`:

```python
from envfile.loader import from_path_iter

for key, value in from_path_iter(".env"):
    print(f"{key}={value}")
```

`dotenv_iter`, `from_filename_iter` and `from_read_iter` return the same
kind of iterator; its `load()` and `load_override()` methods set the
variables it yields.

Lower-level pieces: `envfile.parse.parse_line` and `parse_value` parse
single lines, `envfile.iter.quoted_lines` joins multi-line quoted values,
and `envfile.find.find` / `envfile.find.Finder` locate a file upwards from
a directory.

## Errors

Failures raise subclasses of `envfile.errors.Error`:

- `LineParseError` for a malformed line, with `line` (the offending text)
  and `index` (where parsing stopped);
- `IoError` when the file cannot be found or read; `not_found()` tells
  whether it was missing;
- `EnvVarError` from `var` when the variable is not set.

## Command line

Run a command with the environment from a `.env` file:

```
envfile some-command --its-options
envfile -f custom.env some-command
```

`-f`/`--file` chooses a file name to search for instead of `.env`.
Variables already set in the environment are kept. On POSIX systems the
command replaces the `envfile` process; on Windows it is run as a child and
its exit code is passed on. If the file cannot be loaded or the command
cannot be started, a message is printed to standard error and the exit code
is 1. Without arguments the help text is printed.