"""Alias and variable expansion of command words."""

from __future__ import annotations

from collections.abc import Mapping

from hshell.quoting import QuoteState, is_ident, is_space, quote_state, quote_state_len
from hshell.state import ShellState
from hshell.tokens import tokenize

_OPENERS = QuoteState.DOUBLE | QuoteState.SINGLE | QuoteState.ESCAPE
_CLOSED = QuoteState.DOUBLE | QuoteState.SINGLE


def expand_alias(
    aliases: Mapping[str, str], tokens: list[str]
) -> tuple[str | None, list[str]]:
    """Expand the first word of ``tokens`` once if it names an alias.

    Returns the alias name (or None when nothing was expanded) and the
    resulting words.
    """
    if not tokens:
        return None, list(tokens)
    name = tokens[0]
    if name not in aliases:
        return None, list(tokens)
    return name, tokenize(aliases[name]) + list(tokens[1:])


def _expand_aliases(
    aliases: Mapping[str, str], tokens: list[str], seen: set[str]
) -> list[str]:
    while True:
        if tokens and tokens[0] in seen:
            return tokens
        name, tokens = expand_alias(aliases, tokens)
        if name is None:
            return tokens
        seen.add(name)
        value = aliases[name]
        if value and is_space(value[-1]) and tokens:
            tokens = tokens[:1] + _expand_aliases(aliases, tokens[1:], set(seen))
        if not tokens or tokens[0] in seen:
            return tokens


def expand_aliases(aliases: Mapping[str, str], tokens: list[str]) -> list[str]:
    """Expand aliases in the command word until no further expansion applies.

    An alias whose value ends in a blank also expands the word after it.
    An alias is never expanded twice for the same word, so cycles end.
    """
    return _expand_aliases(aliases, list(tokens), set())


def _is_digit(char: str) -> bool:
    return char != "" and "0" <= char <= "9"


def expand_token(state: ShellState, token: str) -> list[str]:
    """Expand ``$$``, ``$?`` and ``$NAME`` in one word and split the result."""
    tok = token
    pos = 0
    qstate = QuoteState.NONE

    def at(index: int) -> str:
        return tok[index] if index < len(tok) else ""

    while pos < len(tok):
        var_len = val_len = 1
        if quote_state_len(tok[pos:], qstate) == 0:
            if qstate & _CLOSED:
                pos += 1
                if pos >= len(tok):
                    break
            qstate = quote_state(tok[pos])
            if qstate & _OPENERS:
                pos += 1
            continue
        if qstate & QuoteState.DOUBLE and tok[pos] == "\\" or qstate & QuoteState.ESCAPE:
            pos += 2
            if pos >= len(tok):
                break
            qstate = quote_state(tok[pos])
            if qstate & _OPENERS:
                pos += 1
            continue
        if qstate & QuoteState.SINGLE:
            pos += quote_state_len(tok[pos:], qstate)
            if pos < len(tok):
                pos += 1
            continue
        if tok[pos] != "$":
            pos += 1
            continue
        following = at(pos + 1)
        value: str | None = None
        if following == "$":
            value = str(state.pid)
        elif following == "?":
            value = str(state.status)
        elif is_ident(following) and not _is_digit(following):
            while is_ident(at(pos + var_len + 1)):
                var_len += 1
            value = state.env.get(tok[pos + 1:pos + 1 + var_len], "")
        if value is not None:
            val_len = len(value)
            tok = tok[:pos] + value + tok[pos + var_len + 1:]
        pos += val_len
    return tokenize(tok)


def expand_vars(state: ShellState, tokens: list[str]) -> list[str]:
    """Expand variables in every word and return the split result."""
    return [word for token in tokens for word in expand_token(state, token)]