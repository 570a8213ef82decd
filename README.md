# hshell

A small command interpreter in the spirit of the classic Unix `sh`. It reads
commands from a terminal, from standard input or from a script file, expands
aliases and variables, honours quoting, and runs either its builtins or
external programs found on `PATH`.

## Installation

```
pip install .
```

## Usage

Start an interactive session (prompt `$ `, continuation prompt `> `):

```
hsh
```

Run a script file:

```
hsh script.sh
```

Commands can also be piped in:

```
echo 'echo hello; ls /tmp' | hsh
```

If the script file cannot be opened the shell reports `Can't open FILE`
and exits with status 127. At the end of input the shell exits with the
status of the last command. Pressing Ctrl-C at the prompt prints a fresh
prompt instead of ending the shell.

## Features

- Several commands on one line, separated by unquoted `;`
- Comments: a word starting with `#` ends the line; the words before it
  are kept and the rest of the line, including any further commands, is
  ignored
- Single quotes, double quotes and backslash escapes; while a quote is
  left open the next input line is read and joined to the current one
- Inside double quotes a backslash escapes only `"`, `$`, `\` and newline
- Variable expansion outside single quotes: `$NAME`, `$?` (last exit
  status) and `$$` (shell process id); unset variables expand to nothing,
  and the result is split into words again
- Aliases on the command word; an alias whose value ends in a blank also
  expands the word that follows it, and an alias is never expanded twice
  for the same word
- External commands looked up on `PATH` (an empty entry means the current
  directory); names containing `/` are used as given. Status 127 when a
  command is not found, 126 when it is found but not executable

## Builtins

| Command | Description |
|---------|-------------|
| `alias [KEY[=VALUE] ...]` | Define aliases, or print them as `KEY='VALUE'` |
| `cd [DIR]` | Change directory (default `$HOME`); `cd -` returns to `$OLDPWD` and prints it; updates `PWD` and `OLDPWD` |
| `env` | Print the environment, one `KEY=VALUE` per line |
| `exec COMMAND [ARGS ...]` | Replace the shell with the given command |
| `exit [STATUS]` | Leave the shell; a non-numeric or too large status is an error (status 2) |
| `help [BUILTIN ...]` | List builtin usages, or show the description of the named builtins |
| `setenv [NAME [VALUE]]` | Set a variable (empty value if omitted); with no arguments print the environment |
| `unsetenv NAME ...` | Remove variables from the environment |

Error messages have the form `NAME: LINE: COMMAND: message`, where `NAME`
is the name the shell was started under, for example:

```
hsh: 1: foo: not found
```

## Using it from Python

The pieces are plain modules of the `hshell` package:

- `hshell.quoting` – `QuoteState`, `quote_state`, `quote_state_len`,
  `dequote` and the character tests `is_space`, `is_quote`, `is_ident`,
  `is_number`
- `hshell.tokens` – `tokenize`, `count_tokens`, `tokenize_noquote`,
  `count_tokens_noquote`
- `hshell.commands` – `split_commands`, `command_list`, `remove_comments`
- `hshell.errors` – `report`, `report_default` (write to standard error and
  return the text written)
- `hshell.state` – `ShellState`, `create_state`, `env_to_dict`,
  `dict_to_env`, `split_path`, `search_path`
- `hshell.builtins` – `Builtin`, `ShellExit`, `get_builtins`,
  `get_builtin`, `atou` and the `builtin_*` functions
- `hshell.expand` – `expand_alias`, `expand_aliases`, `expand_token`,
  `expand_vars`
- `hshell.reader` – `InputReader` with `read_line` and `read`
- `hshell.shell` – `parse`, `execute`, `run` and `main`, the command-line
  entry point

```python
from hshell.commands import command_list
from hshell.quoting import dequote

command_list("echo 'a b'; ls")      # [["echo", "'a b'"], ["ls"]]
dequote("'a b'")                    # "a b"
```

## What it does not do

There are no pipes, redirections, `&&`/`||` lists, background jobs,
subshells, globbing, here-documents, control-flow statements or command
history. Aliases and variables set in a session are not saved anywhere.

## Running the tests

```
pip install .[test]
pytest
```