"""Enumerations for l10nmark type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum

__all__ = ["MarkupTag"]


class MarkupTag(StrEnum):
    """Tags produced by inline markup styling.

    StrEnum provides automatic string conversion: str(MarkupTag.STRONG) == "strong".
    Dotted values use hiccup shorthand: "span.variant-1" is a span element
    carrying class "variant-1".
    """

    STRONG = "strong"
    """Bold: **text**"""

    BOLD = "b"
    """Bold: __text__"""

    EMPHASIS = "em"
    """Italic: *text*"""

    ITALIC = "i"
    """Italic: _text_"""

    MARK = "mark"
    """Highlight: ~~text~~"""

    SPAN_VARIANT_1 = "span.variant-1"
    """Custom span: ~1~text~1~"""

    SPAN_VARIANT_2 = "span.variant-2"
    """Custom span: ~2~text~2~"""
