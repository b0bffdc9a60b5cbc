"""Template and markup tree node definitions.

Templates are plain strings, markup trees, or tag-less fragments. Markup
trees form a closed union: every child is a string leaf, a Placeholder leaf,
or a Node with its own children.

Includes type guards as static methods (eliminates circular imports).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeIs

from l10nmark.constants import MAX_PLACEHOLDER, PATH_DELIMITERS

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Leaves and nodes
    "Placeholder",
    "Pointer",
    "Node",
    "arg",
    # Type aliases
    "AttrValue",
    "Child",
    "Fragment",
    "Template",
    "Tree",
]

_PATH_SPLIT = re.compile(f"[{re.escape(PATH_DELIMITERS)}]")


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Positional argument reference inside a markup tree.

    Stores the 0-based argument index; the template syntax is 1-based, so
    ``%1`` is ``Placeholder(0)``.

    Attributes:
        index: 0-based position in the argument list
    """

    index: int

    def __post_init__(self) -> None:
        """Validate index range."""
        if not 0 <= self.index < MAX_PLACEHOLDER:
            msg = f"Placeholder index must be in 0..{MAX_PLACEHOLDER - 1}, got {self.index}"
            raise ValueError(msg)

    @property
    def number(self) -> int:
        """1-based placeholder number as written in templates."""
        return self.index + 1

    @property
    def token(self) -> str:
        """Template syntax for this placeholder, e.g. '%1'."""
        return f"%{self.number}"

    @staticmethod
    def guard(value: object) -> TypeIs[Placeholder]:
        """Type guard for Placeholder."""
        return isinstance(value, Placeholder)


def arg(number: int) -> Placeholder:
    """Build the placeholder written as ``%number`` in templates.

    Example:
        >>> Node("p", None, ("Hello ", arg(1)))
    """
    return Placeholder(number - 1)


@dataclass(frozen=True, slots=True)
class Pointer:
    """Dictionary leaf referencing another dictionary path.

    Paths start at the dictionary root and are delimited by '.', ':' or '/':
    ``Pointer("en.example/greeting")`` points at
    ``dictionary["en"]["example"]["greeting"]``.

    Attributes:
        path: Delimited path text
    """

    path: str

    def __post_init__(self) -> None:
        """Validate that the path names at least one segment."""
        if not self.segments:
            msg = f"Pointer path must name at least one segment, got {self.path!r}"
            raise ValueError(msg)

    @property
    def segments(self) -> tuple[str, ...]:
        """Path split into non-empty segments."""
        return tuple(s for s in _PATH_SPLIT.split(self.path) if s)

    @staticmethod
    def guard(value: object) -> TypeIs[Pointer]:
        """Type guard for Pointer."""
        return isinstance(value, Pointer)


@dataclass(frozen=True, slots=True)
class Node:
    """Tagged markup element.

    Attributes are frozen into a read-only mapping and children into a tuple
    at construction, so nodes are immutable and hashable (attributes do not
    take part in the hash, only in equality).

    Example:
        Node("p", {"class": "lead"}, ("Hello, ", Node("strong", None, ("world",))))

    Attributes:
        tag: Element name
        attrs: Attribute mapping, or None
        children: Ordered child leaves and nodes
    """

    tag: str
    attrs: Mapping[str, AttrValue] | None = field(default=None, hash=False)
    children: tuple[Child, ...] = ()

    def __post_init__(self) -> None:
        """Freeze attrs and children; validate tag."""
        if not isinstance(self.tag, str) or not self.tag:
            msg = f"Node tag must be a non-empty string, got {self.tag!r}"
            raise ValueError(msg)
        if self.attrs is not None and not isinstance(self.attrs, MappingProxyType):
            object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def with_children(self, children: Iterable[Child]) -> Node:
        """Return a copy of this node with different children."""
        return Node(self.tag, self.attrs, tuple(children))

    def with_attrs(self, attrs: Mapping[str, AttrValue] | None) -> Node:
        """Return a copy of this node with different attributes."""
        return Node(self.tag, attrs, self.children)

    @staticmethod
    def guard(value: object) -> TypeIs[Node]:
        """Type guard for Node."""
        return isinstance(value, Node)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type AttrValue = str | int | float | bool | Placeholder | None
"""Attribute value; Placeholders are substituted at render time."""

type Child = str | Placeholder | Node
"""Any element of a Node's children."""

type Fragment = tuple[Child, ...]
"""Tag-less sequence of children."""

type Template = str | Node | Fragment
"""Compiled dictionary value."""

type Tree = str | Placeholder | Node | Fragment
"""Input accepted by the recursive tree operations."""
