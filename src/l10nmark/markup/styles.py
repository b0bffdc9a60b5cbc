"""Conservative inline markup styling.

Recognizes a small, markdown-like set of inline styles on a single line:

    **text**   strong          __text__   b
    *text*     em              _text_     i
    ~~text~~   mark
    ~1~text~1~ span.variant-1  ~2~text~2~ span.variant-2

Styles are matched in that precedence order, non-greedily, never across a
line break, and never recursively: the content of a match is not scanned
again. A backtick escapes a delimiter character (`` `* ``, `` `_ ``,
`` `~ ``); escaped delimiters are emitted as the bare character and never
take part in a match.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from l10nmark.constants import ESCAPE_CHAR
from l10nmark.enums import MarkupTag

__all__ = ["StyledPart", "Splitter", "split_styles"]

type StyledPart = str | tuple[str, str]
"""Plain text, or a (tag, content) pair."""

type Splitter = Callable[[str], tuple[StyledPart, ...]]

# Private-use code points stand in for escaped delimiters and extracted
# matches while the patterns run.
_PROTECT = {"*": "\ue000", "_": "\ue001", "~": "\ue002"}
_RESTORE = str.maketrans({v: k for k, v in _PROTECT.items()})
_ESCAPED = re.compile(re.escape(ESCAPE_CHAR) + r"([*_~])")
_TOKEN_OPEN = "\ue003"
_TOKEN_CLOSE = "\ue004"
_TOKEN_SPLIT = re.compile(f"{_TOKEN_OPEN}(\\d+){_TOKEN_CLOSE}")

_CONTENT = f"([^\\n{_TOKEN_OPEN}{_TOKEN_CLOSE}]+?)"


def _style(delimiter: str, tag: MarkupTag) -> tuple[re.Pattern[str], MarkupTag]:
    d = re.escape(delimiter)
    return re.compile(d + _CONTENT + d), tag


_STYLES: tuple[tuple[re.Pattern[str], MarkupTag], ...] = (
    # Bold
    _style("**", MarkupTag.STRONG),
    _style("__", MarkupTag.BOLD),
    # Italic
    _style("*", MarkupTag.EMPHASIS),
    _style("_", MarkupTag.ITALIC),
    # Specials
    _style("~~", MarkupTag.MARK),
    _style("~1~", MarkupTag.SPAN_VARIANT_1),
    _style("~2~", MarkupTag.SPAN_VARIANT_2),
)

_DELIMITERS = frozenset("*_~")


def split_styles(text: str) -> tuple[StyledPart, ...]:
    """Split a string into plain segments and styled (tag, content) pairs.

    Parts are ordered by their position in the original string. Empty plain
    segments are dropped, so "" yields an empty tuple.

    Example:
        >>> split_styles("a *b* c")
        ('a ', ('em', 'b'), ' c')
        >>> split_styles("`*x`*")
        ('*x*',)
    """
    if not _DELIMITERS.intersection(text):
        return (text,) if text else ()

    work = _ESCAPED.sub(lambda m: _PROTECT[m.group(1)], text)
    matches: list[tuple[MarkupTag, str]] = []

    for pattern, tag in _STYLES:

        def stash(m: re.Match[str], tag: MarkupTag = tag) -> str:
            matches.append((tag, m.group(1)))
            return f"{_TOKEN_OPEN}{len(matches) - 1}{_TOKEN_CLOSE}"

        work = pattern.sub(stash, work)

    parts: list[StyledPart] = []
    for i, piece in enumerate(_TOKEN_SPLIT.split(work)):
        if i % 2:
            tag, content = matches[int(piece)]
            parts.append((tag.value, content.translate(_RESTORE)))
        elif piece:
            parts.append(piece.translate(_RESTORE))
    return tuple(parts)
