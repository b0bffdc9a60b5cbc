"""Placeholder syntax in template strings.

Placeholders are written ``%1`` .. ``%13`` (1-based). ``%0`` is invalid. A
backtick escapes a literal percent: ``"100`%"`` is the text ``"100%"``.
``"%14"`` reads as placeholder ``%1`` followed by the text ``"4"``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re

from l10nmark.constants import ESCAPE_CHAR
from l10nmark.diagnostics import CompileError, ErrorTemplate

from .nodes import Placeholder

__all__ = ["split_args"]

_ARG_TOKEN = re.compile(re.escape(ESCAPE_CHAR) + r"%|%(1[0-3]|[0-9])")


def split_args(template: str) -> tuple[str | Placeholder, ...]:
    """Split a template string into literal text and placeholders.

    Single pass over the string. Escaped percents are unescaped into the
    surrounding literal text; empty literal segments are dropped.

    Raises:
        CompileError: If the template contains the invalid placeholder %0

    Example:
        >>> split_args("Hi %1, 50`% off")
        ('Hi ', Placeholder(index=0), ', 50% off')
    """
    parts: list[str | Placeholder] = []
    literal: list[str] = []
    pos = 0
    for m in _ARG_TOKEN.finditer(template):
        literal.append(template[pos:m.start()])
        pos = m.end()
        number = m.group(1)
        if number is None:
            literal.append("%")
            continue
        if number == "0":
            raise CompileError(ErrorTemplate.placeholder_zero(template))
        if text := "".join(literal):
            parts.append(text)
        literal.clear()
        parts.append(Placeholder(int(number) - 1))
    literal.append(template[pos:])
    if text := "".join(literal):
        parts.append(text)
    return tuple(parts)
