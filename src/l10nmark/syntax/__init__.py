"""Template syntax package.

Provides the markup tree node types and the hiccup list notation used to
write trees as plain data.

Python 3.13+.
"""

from .hiccup import from_hiccup, parse_symbol, parse_tag, to_hiccup
from .nodes import (
    AttrValue,
    Child,
    Fragment,
    Node,
    Placeholder,
    Pointer,
    Template,
    Tree,
    arg,
)
from .placeholders import split_args

__all__ = [
    "AttrValue",
    "Child",
    "Fragment",
    "Node",
    "Placeholder",
    "Pointer",
    "Template",
    "Tree",
    "arg",
    "from_hiccup",
    "parse_symbol",
    "parse_tag",
    "split_args",
    "to_hiccup",
]
