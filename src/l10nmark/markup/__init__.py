"""Inline markup styling and markup tree transformations.

Python 3.13+.
"""

from .styles import StyledPart, split_styles
from .tree import (
    escape_html,
    explode_args_in_strings,
    explode_styles_in_strings,
    to_default_tagged,
)

__all__ = [
    "StyledPart",
    "escape_html",
    "explode_args_in_strings",
    "explode_styles_in_strings",
    "split_styles",
    "to_default_tagged",
]
