"""Line input from a file descriptor, joining lines with open quotes."""

from __future__ import annotations

import os
import sys

from hshell.quoting import QuoteState, quote_state, quote_state_len

BUFFER_SIZE = 4096

_OPENERS = QuoteState.DOUBLE | QuoteState.SINGLE | QuoteState.ESCAPE
_CLOSED = QuoteState.DOUBLE | QuoteState.SINGLE


class InputReader:
    """Reads shell input from a file descriptor, one logical line at a time."""

    def __init__(self, fd: int, interactive: bool = False) -> None:
        self.fd = fd
        self.interactive = interactive
        self.lineno = 0
        self._buffer = bytearray()
        self._quote = QuoteState.NONE

    def read_line(self) -> str | None:
        """Return the next physical line including its newline, or None at end."""
        while True:
            index = self._buffer.find(b"\n")
            if index != -1:
                data = bytes(self._buffer[:index + 1])
                del self._buffer[:index + 1]
                return data.decode("utf-8", "surrogateescape")
            try:
                chunk = os.read(self.fd, BUFFER_SIZE)
            except OSError:
                self._buffer.clear()
                return None
            if not chunk:
                if not self._buffer:
                    return None
                data = bytes(self._buffer)
                self._buffer.clear()
                return data.decode("utf-8", "surrogateescape")
            self._buffer += chunk

    def _scan(self, line: str) -> QuoteState:
        """Track the quote state through ``line``; return the state at its end."""
        state = self._quote
        index = 0
        end = len(line)
        resume = bool(state & _CLOSED)
        while True:
            if resume:
                index += quote_state_len(line[index:], state)
                if index >= end:
                    break
                if state & _CLOSED:
                    index += 1
            resume = True
            state = quote_state(line[index] if index < end else "")
            if state & _OPENERS:
                index += 1
            if index >= end:
                break
        self._quote = state
        return state

    def _prompt(self, text: str) -> None:
        if self.interactive:
            sys.stderr.write(text)
            sys.stderr.flush()

    def read(self) -> str | None:
        """Return the next logical line, joining lines while a quote is open.

        Returns None when the input is exhausted.
        """
        self._prompt("$ ")
        self.lineno += 1
        parts: list[str] = []
        while True:
            line = self.read_line()
            if line is None:
                break
            if not self._scan(line) & _OPENERS:
                break
            parts.append(line)
            self._prompt("> ")
            self.lineno += 1
        if parts:
            return "".join(parts) + (line or "")
        return line