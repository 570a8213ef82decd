"""Formatted diagnostics written to standard error."""

from __future__ import annotations

import sys


def _format(message: str | None, context: tuple[str, ...]) -> str:
    prefix = "".join(f"{item}: " for item in context)
    return f"{prefix}{message or ''}\n"


def report(message: str | None, *args: str) -> str:
    """Write ``ctx1: ctx2: ...: message`` to standard error.

    The context strings in ``args`` come first, each followed by ``": "``.
    Returns the text that was written.
    """
    text = _format(message, args)
    sys.stderr.write(text)
    sys.stderr.flush()
    return text


def report_default(
    arg0: str | None, lineno: int, message: str | None, *args: str
) -> str:
    """Write ``arg0: lineno: ctx...: message`` to standard error.

    Returns the text that was written.
    """
    return report(message, arg0 or "", str(lineno), *args)