"""The shell's main loop: parse input lines and run their commands."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
from types import FrameType

from hshell.builtins import ShellExit, get_builtin
from hshell.commands import command_list, remove_comments
from hshell.errors import report_default
from hshell.expand import expand_aliases, expand_vars
from hshell.quoting import dequote
from hshell.reader import InputReader
from hshell.state import ShellState, create_state, search_path, split_path


def parse(state: ShellState, line: str) -> list[list[str]]:
    """Split ``line`` into commands, expand and dequote their words.

    Empty commands are dropped. The result is also stored in
    ``state.commands``.
    """
    commands: list[list[str]] = []
    for tokens in remove_comments(command_list(line)):
        if not tokens:
            continue
        tokens = expand_aliases(state.aliases, tokens)
        if not tokens:
            continue
        tokens = expand_vars(state, tokens)
        if not tokens:
            continue
        commands.append([dequote(token) for token in tokens])
    state.commands = commands
    return commands


def _arg0(state: ShellState) -> str | None:
    return state.argv[0] if state.argv else None


def _spawn(state: ShellState, exe: str, tokens: list[str]) -> int:
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        completed = subprocess.run(tokens, executable=exe, env=dict(state.env))
    except OSError as exc:
        sys.stderr.write(f"{tokens[0]}: {exc.strerror}\n")
        sys.stderr.flush()
        state.status = 1
    else:
        code = completed.returncode
        state.status = code & 0xFF if code >= 0 else 0
    state.exe = None
    return state.status


def execute(state: ShellState, tokens: list[str]) -> int:
    """Run one command, builtin or external, and return its status."""
    command = tokens[0]
    builtin = get_builtin(command)
    if builtin is not None:
        return builtin(state, tokens)
    if "/" not in command:
        state.path = split_path(state.env.get("PATH"))
        state.exe = search_path(command, state.path, state.cwd)
    else:
        state.exe = command
    if state.exe is not None and os.access(state.exe, os.X_OK):
        return _spawn(state, state.exe, tokens)
    if state.exe is not None:
        report_default(_arg0(state), state.lineno, "Permission denied", command)
        state.status = 126
    else:
        report_default(_arg0(state), state.lineno, "not found", command)
        state.status = 127
    state.exe = None
    return state.status


def run(state: ShellState, reader: InputReader) -> int:
    """Read and run commands until the input ends; return the exit status."""
    try:
        while (line := reader.read()) is not None:
            state.lineno = reader.lineno
            state.line = line
            parse(state, line)
            while state.commands:
                state.tokens = state.commands.pop(0)
                execute(state, state.tokens)
                state.tokens = []
            state.line = None
    except ShellExit as exc:
        return exc.status
    if state.interactive:
        sys.stdout.write("\n")
        sys.stdout.flush()
    return state.close()


def _sigint(signum: int, frame: FrameType | None) -> None:
    sys.stderr.write("\n$ ")
    sys.stderr.flush()


def main(argv: list[str] | None = None) -> int:
    """Start the shell on a script named in ``argv`` or on standard input."""
    if argv is None:
        argv = sys.argv
    try:
        state = create_state(list(argv), os.environ)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1
    try:
        previous = signal.signal(signal.SIGINT, _sigint)
    except ValueError:
        previous = None
    try:
        reader = InputReader(state.fileno, interactive=state.interactive)
        return run(state, reader)
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)