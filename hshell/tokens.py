"""Splitting of command text into words."""

from __future__ import annotations

import re
from collections.abc import Iterator

from hshell.quoting import QuoteState, quote_state, quote_state_len

_OPENERS = QuoteState.DOUBLE | QuoteState.SINGLE | QuoteState.ESCAPE
_CLOSED = QuoteState.DOUBLE | QuoteState.SINGLE
_BARE_WORD = re.compile(r"[^ \t\n\v\f\r]+")


def _token_spans(text: str) -> Iterator[tuple[int, int]]:
    """Yield the (start, end) of each quote-aware word in ``text``."""
    pos = 0
    end = len(text)
    while True:
        pos += quote_state_len(text[pos:], QuoteState.NONE)
        if pos >= end:
            return
        start = pos
        while pos < end and (state := quote_state(text[pos])) != QuoteState.NONE:
            if state & _OPENERS:
                pos += quote_state_len(text[pos + 1:], state) + 1
            else:
                pos += quote_state_len(text[pos:], state)
            if pos < end and state & _CLOSED:
                pos += 1
        yield start, pos


def tokenize(text: str) -> list[str]:
    """Split ``text`` into words, keeping quoted blanks inside a word.

    The words keep their quoting characters.
    """
    return [text[start:stop] for start, stop in _token_spans(text)]


def count_tokens(text: str) -> int:
    """Return the number of words :func:`tokenize` finds in ``text``."""
    return sum(1 for _ in _token_spans(text))


def tokenize_noquote(text: str) -> list[str]:
    """Split ``text`` on blanks, ignoring quotes."""
    return _BARE_WORD.findall(text)


def count_tokens_noquote(text: str) -> int:
    """Return the number of words :func:`tokenize_noquote` finds in ``text``."""
    return sum(1 for _ in _BARE_WORD.finditer(text))