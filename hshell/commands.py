"""Splitting a command line into separate commands."""

from __future__ import annotations

from collections.abc import Iterable

from hshell.quoting import QuoteState, quote_state, quote_state_len
from hshell.tokens import tokenize

_CLOSED = QuoteState.DOUBLE | QuoteState.SINGLE


def split_commands(line: str) -> list[str]:
    """Split ``line`` on unquoted semicolons.

    Unquoted backslash-newline pairs are removed. A trailing semicolon
    yields a final empty command.
    """
    segments: list[str] = []
    current: list[str] = []
    pos = 0
    end = len(line)
    while pos < end:
        state = quote_state(line[pos])
        if state == QuoteState.NONE:
            current.append(line[pos])
            pos += 1
        elif state == QuoteState.WORD:
            length = quote_state_len(line[pos:], state)
            word = line[pos:pos + length]
            sep = word.find(";")
            if sep == -1:
                current.append(word)
                pos += length
            else:
                current.append(word[:sep])
                segments.append("".join(current))
                current = []
                pos += sep + 1
        elif state == QuoteState.ESCAPE:
            following = line[pos + 1:pos + 2]
            if following == "\n":
                pos += 2
            else:
                current.append(line[pos:pos + 2])
                pos += 1 + len(following)
        else:
            stop = pos + 1 + quote_state_len(line[pos + 1:], state)
            if stop < end and state & _CLOSED:
                stop += 1
            current.append(line[pos:stop])
            pos = stop
    segments.append("".join(current))
    return segments


def command_list(line: str) -> list[list[str]]:
    """Return the tokens of each command in ``line``."""
    return [tokenize(segment) for segment in split_commands(line)]


def remove_comments(commands: Iterable[list[str]]) -> list[list[str]]:
    """Drop everything from the first word starting with ``#`` onwards.

    The command holding the comment keeps the words before it; all later
    commands are discarded. The input is left unchanged.
    """
    result: list[list[str]] = []
    for tokens in commands:
        for index, token in enumerate(tokens):
            if token.startswith("#"):
                result.append(list(tokens[:index]))
                return result
        result.append(list(tokens))
    return result