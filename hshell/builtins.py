"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from dataclasses import dataclass

from hshell.errors import report, report_default
from hshell.quoting import is_number
from hshell.state import ShellState, dict_to_env, search_path, split_path

UINT_MAX = 4294967295
INT_MAX = 2147483647

BuiltinFunc = Callable[[ShellState, list[str]], int]


class ShellExit(Exception):
    """Raised when a builtin ends the shell; carries the exit status."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


@dataclass(frozen=True)
class Builtin:
    """A builtin command with its usage line and description lines."""

    name: str
    func: BuiltinFunc
    help: str
    desc: tuple[str, ...]

    def __call__(self, state: ShellState, tokens: list[str]) -> int:
        return self.func(state, tokens)


def _out(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def atou(text: str) -> int:
    """Convert a string of digits to an unsigned int, saturating at UINT_MAX."""
    number = 0
    for char in text:
        if not "0" <= char <= "9":
            raise ValueError(f"not a digit: {char!r}")
        if UINT_MAX // 10 < number:
            return UINT_MAX
        number *= 10
        digit = ord(char) - ord("0")
        if UINT_MAX - digit < number:
            return UINT_MAX
        number += digit
    return number


def _print_alias(name: str, value: str) -> None:
    _out(f"{name}='{value}'\n")


def builtin_alias(state: ShellState, tokens: list[str]) -> int:
    """Define aliases from NAME=VALUE words and display the others."""
    state.status = 0
    args = tokens[1:]
    if not args:
        for name, value in state.aliases.items():
            _print_alias(name, value)
        return state.status
    for arg in args:
        name, sep, value = arg.partition("=")
        if sep:
            state.aliases[name] = value
        elif arg in state.aliases:
            _print_alias(arg, state.aliases[arg])
        else:
            report("not found", tokens[0], arg)
            state.status = 1
    return state.status


def _cd_success(state: ShellState) -> None:
    state.env["OLDPWD"] = state.cwd or ""
    try:
        state.cwd = os.getcwd()
    except OSError:
        state.cwd = None
    state.env["PWD"] = state.cwd or ""
    state.status = 0


def _cd_error(state: ShellState, tokens: list[str], directory: str | None) -> None:
    report_default(
        state.argv[0] if state.argv else None,
        state.lineno,
        f"can't cd to {directory or ''}",
        tokens[0],
    )
    state.status = 2


def _chdir(directory: str | None) -> bool:
    if directory is None:
        return False
    try:
        os.chdir(directory)
    except (OSError, ValueError):
        return False
    return True


def builtin_cd(state: ShellState, tokens: list[str]) -> int:
    """Change the working directory and update PWD and OLDPWD."""
    state.status = 0
    args = tokens[1:]
    directory: str | None
    ok = True
    if args:
        if args[0] == "-":
            directory = state.env.get("OLDPWD")
            if directory is None:
                directory = state.cwd
            ok = _chdir(directory)
            if ok:
                _out(f"{directory}\n")
        else:
            directory = args[0]
            ok = _chdir(directory)
    else:
        directory = state.env.get("HOME")
        if directory is not None:
            ok = _chdir(directory)
    if ok:
        _cd_success(state)
    else:
        _cd_error(state, tokens, directory)
    return state.status


def builtin_env(state: ShellState, tokens: list[str]) -> int:
    """Print the environment, one KEY=VALUE per line."""
    state.status = 0
    _out("".join(f"{key}={value}\n" for key, value in state.env.items()))
    return state.status


def builtin_exec(state: ShellState, tokens: list[str]) -> int:
    """Replace the shell with the given command."""
    args = tokens[1:]
    if not args:
        state.status = 0
        return state.status
    command = args[0]
    arg0 = state.argv[0] if state.argv else None
    exe: str | None
    if "/" not in command:
        state.path = split_path(state.env.get("PATH"))
        exe = search_path(command, state.path, state.cwd)
    else:
        exe = command
    if exe is not None and os.access(exe, os.X_OK):
        env = dict(item.split("=", 1) for item in dict_to_env(state.env))
        state.close()
        try:
            os.execve(exe, list(args), env)
        except OSError:
            pass
        report_default(arg0, state.lineno, "Not found", tokens[0], command)
        raise ShellExit(127)
    report_default(arg0, state.lineno, "Permission denied", tokens[0], command)
    state.close()
    raise ShellExit(126)


def builtin_exit(state: ShellState, tokens: list[str]) -> int:
    """Exit the shell with the given status or the last one."""
    args = tokens[1:]
    if args:
        arg = args[0]
        if is_number(arg) and atou(arg) <= INT_MAX:
            state.status = atou(arg)
        else:
            report_default(
                state.argv[0] if state.argv else None,
                state.lineno,
                arg,
                tokens[0],
                "Illegal number",
            )
            state.status = 2
            return state.status
    raise ShellExit(state.close())


def builtin_help(state: ShellState, tokens: list[str]) -> int:
    """Show usage and descriptions of builtin commands."""
    args = tokens[1:]
    if not args:
        state.status = 0
        _out("".join(f"{builtin.help}\n" for builtin in get_builtins()))
        return state.status
    state.status = 1
    for arg in args:
        builtin = get_builtin(arg)
        if builtin is None:
            continue
        lines = [f"{builtin.name}: {builtin.help}\n"]
        lines.extend(f"    {line}\n" for line in builtin.desc)
        _out("".join(lines))
        state.status = 0
    if state.status == 1:
        report_default(
            state.argv[0] if state.argv else None,
            state.lineno,
            "No topics match",
            tokens[0],
            args[-1],
        )
    return state.status


def builtin_setenv(state: ShellState, tokens: list[str]) -> int:
    """Set an environment variable, or print the environment."""
    args = tokens[1:]
    if not args:
        builtin_env(state, tokens)
        return state.status
    if len(args) > 2:
        report("Too many arguments.", tokens[0])
        state.status = 1
        return state.status
    state.env[args[0]] = args[1] if len(args) > 1 else ""
    state.status = 0
    return state.status


def builtin_unsetenv(state: ShellState, tokens: list[str]) -> int:
    """Remove variables from the environment."""
    args = tokens[1:]
    if not args:
        report("Too few arguments.", tokens[0])
        state.status = 1
        return state.status
    for name in args:
        state.env.pop(name, None)
    state.status = 0
    return state.status


_BUILTINS: tuple[Builtin, ...] = (
    Builtin(
        "alias",
        builtin_alias,
        "alias [KEY[=VALUE] ...]",
        (
            "Define and display aliases.\n",
            "If given no arguments, existing alias definitions are displayed.",
            "Otherwise, an alias is defined for each KEY=VALUE pair provided.",
            "For each KEY with no VALUE the corresponding alias is displayed.",
            "If VALUE ends with a space, the following word will be expanded.",
        ),
    ),
    Builtin(
        "cd",
        builtin_cd,
        "cd [DIR]",
        (
            "Change the current working directory to DIR.\n",
            "If DIR is omitted, it defaults to the value of the variable HOME.",
            "If DIR is -, the current directory reverts to its previous value.",
        ),
    ),
    Builtin("env", builtin_env, "env", ("Print the environment.",)),
    Builtin(
        "exec",
        builtin_exec,
        "exec COMMAND [ARGS ...]",
        (
            "Replace the shell with the given command.\n",
            "COMMAND is executed, replacing the executing shell.",
            "ARGS are passed as positional arguments to COMMAND.",
            "If the command cannot be executed, the shell exits.",
        ),
    ),
    Builtin(
        "exit",
        builtin_exit,
        "exit [STATUS]",
        (
            "Exit the shell with a status of STATUS.\n",
            "If STATUS is omitted, the exit status is that of the last command.",
        ),
    ),
    Builtin(
        "help",
        builtin_help,
        "help [BUILTIN]",
        (
            "Display information about builtin commands.\n",
            "If BUILTIN is omitted, the available commands are displayed.",
        ),
    ),
    Builtin(
        "setenv",
        builtin_setenv,
        "setenv [NAME [VALUE]]",
        (
            "Set the environment variable NAME to VALUE.\n",
            "If NAME is omitted, the shell execution environment is displayed.",
            "If VALUE is omitted, the value of NAME is set to an empty string.",
        ),
    ),
    Builtin(
        "unsetenv",
        builtin_unsetenv,
        "unsetenv NAME",
        ("Remove the variable NAME from the environment.",),
    ),
)

_BY_NAME = {builtin.name: builtin for builtin in _BUILTINS}


def get_builtins() -> tuple[Builtin, ...]:
    """Return all builtins in their fixed order."""
    return _BUILTINS


def get_builtin(name: str) -> Builtin | None:
    """Return the builtin called ``name``, or None."""
    return _BY_NAME.get(name)