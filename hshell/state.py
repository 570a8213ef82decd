"""Shell state, environment conversion and command lookup in PATH."""

from __future__ import annotations

import os
import stat
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from hshell.errors import report_default


@dataclass
class ShellState:
    """Everything the shell keeps between commands."""

    argv: list[str]
    fileno: int = 0
    file: str | None = None
    interactive: bool = False
    status: int = 0
    line: str | None = None
    lineno: int = 0
    tokens: list[str] = field(default_factory=list)
    pid: int = 0
    cwd: str | None = None
    exe: str | None = None
    env: dict[str, str] = field(default_factory=dict)
    path: list[str] = field(default_factory=list)
    aliases: dict[str, str] = field(default_factory=dict)
    commands: list[list[str]] = field(default_factory=list)
    _closed: bool = field(default=False, repr=False, compare=False)

    def close(self) -> int:
        """Close the script file, if any, drop transient data and return the status."""
        if self.file is not None and not self._closed:
            try:
                os.close(self.fileno)
            except OSError:
                pass
        self._closed = True
        self.line = None
        self.tokens = []
        self.exe = None
        self.commands = []
        return self.status

    def __enter__(self) -> ShellState:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def env_to_dict(environ: Iterable[str]) -> dict[str, str]:
    """Turn ``KEY=VALUE`` strings into a dictionary.

    The first occurrence of a key wins. Raises ValueError for an entry
    without ``=``.
    """
    env: dict[str, str] = {}
    for entry in environ:
        key, sep, value = entry.partition("=")
        if not sep:
            raise ValueError(f"environment entry without '=': {entry!r}")
        env.setdefault(key, value)
    return env


def dict_to_env(env: Mapping[str, str]) -> list[str]:
    """Turn a dictionary into a list of ``KEY=VALUE`` strings."""
    return [f"{key}={value}" for key, value in env.items()]


def split_path(value: str | None) -> list[str]:
    """Split a PATH value on colons; empty entries are kept."""
    if value is None:
        return []
    return value.split(":")


def search_path(command: str, path: Iterable[str], cwd: str | None) -> str | None:
    """Return the first ``dir/command`` that exists and is not a directory.

    An empty directory entry stands for ``cwd``.
    """
    for directory in path:
        base = directory if directory else (cwd or "")
        pathname = f"{base}/{command}"
        try:
            info = os.stat(pathname)
        except (OSError, ValueError):
            continue
        if not stat.S_ISDIR(info.st_mode):
            return pathname
    return None


def _current_directory() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


def create_state(
    argv: list[str], environ: Mapping[str, str] | Iterable[str]
) -> ShellState:
    """Build the initial shell state.

    If ``argv`` names a script it is opened for reading; when that fails
    an error is reported and SystemExit(127) is raised.
    """
    argv = list(argv)
    state = ShellState(argv=argv)
    if len(argv) > 1:
        state.file = argv[1]
        try:
            state.fileno = os.open(state.file, os.O_RDONLY)
        except OSError:
            report_default(
                argv[0] if argv else None, state.lineno, f"Can't open {state.file}"
            )
            state.status = 127
            state.file = None
            raise SystemExit(state.close())
    try:
        state.interactive = os.isatty(state.fileno)
    except OSError:
        state.interactive = False
    state.pid = os.getpid()
    state.cwd = _current_directory()
    if isinstance(environ, Mapping):
        state.env = dict(environ)
    else:
        state.env = env_to_dict(environ)
    return state