"""Quote states, character classes and dequoting of shell words."""

from __future__ import annotations

import enum
from itertools import takewhile


class QuoteState(enum.IntFlag):
    """Lexical state of the scanner at a given character."""

    NONE = 0x0
    WORD = 0x1
    DOUBLE = 0x2
    SINGLE = 0x4
    ESCAPE = 0x8


_SPACES = frozenset(" \t\n\v\f\r")
_QUOTES = frozenset("\"'\\")
_SPECIAL_DOUBLE = frozenset('"$\\')
_DIGITS = frozenset("0123456789")
_ALPHA = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")


def is_space(char: str) -> bool:
    """Return True for a space or one of the ASCII control blanks."""
    return char in _SPACES and char != ""


def is_quote(char: str) -> bool:
    """Return True for a double quote, single quote or backslash."""
    return char in _QUOTES and char != ""


def is_ident(char: str) -> bool:
    """Return True for a character allowed in a variable name."""
    return char != "" and (char == "_" or char in _ALPHA or char in _DIGITS)


def is_number(text: str | None) -> bool:
    """Return True if ``text`` consists only of ASCII digits."""
    if text is None:
        return False
    return all(char in _DIGITS for char in text)


def _is_special_double(char: str) -> bool:
    return char != "" and char in _SPECIAL_DOUBLE


def quote_state(char: str) -> QuoteState:
    """Return the state that begins with ``char``."""
    if is_space(char):
        return QuoteState.NONE
    if char == '"':
        return QuoteState.DOUBLE
    if char == "'":
        return QuoteState.SINGLE
    if char == "\\":
        return QuoteState.ESCAPE
    return QuoteState.WORD


def _until(text: str, char: str) -> int:
    index = text.find(char)
    return len(text) if index == -1 else index


def quote_state_len(text: str, state: QuoteState) -> int:
    """Return how many leading characters of ``text`` belong to ``state``.

    For the quoting states ``text`` starts just after the opening character.
    """
    if state == QuoteState.NONE:
        return sum(1 for _ in takewhile(is_space, text))
    if state == QuoteState.WORD:
        return sum(
            1 for _ in takewhile(lambda c: not is_space(c) and not is_quote(c), text)
        )
    if state == QuoteState.DOUBLE:
        return _until(text, '"')
    if state == QuoteState.SINGLE:
        return _until(text, "'")
    if state == QuoteState.ESCAPE:
        return 1 if text else 0
    raise ValueError(f"not a single quote state: {state!r}")


_OPENERS = QuoteState.DOUBLE | QuoteState.SINGLE | QuoteState.ESCAPE


def _dequote_double(text: str, pos: int, out: list[str]) -> int:
    """Copy a double-quoted section starting at ``pos``; return the new position."""
    end = len(text)
    while pos < end and text[pos] != '"':
        char = text[pos]
        pos += 1
        if char == "\\" and pos < end:
            following = text[pos]
            if following == "\n":
                pos += 1
                continue
            if _is_special_double(following):
                out.append(following)
                pos += 1
                continue
        out.append(char)
    if pos < end:
        pos += 1
    return pos


def dequote(text: str) -> str:
    """Return ``text`` with quoting characters removed."""
    out: list[str] = []
    pos = 0
    end = len(text)
    while pos < end:
        state = quote_state(text[pos])
        if state & _OPENERS:
            pos += 1
        if state == QuoteState.DOUBLE:
            pos = _dequote_double(text, pos, out)
            continue
        length = quote_state_len(text[pos:], state)
        out.append(text[pos:pos + length])
        pos += length
        if pos < end and state & QuoteState.SINGLE:
            pos += 1
    return "".join(out)