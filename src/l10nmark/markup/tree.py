"""Recursive markup tree transformations.

Each operation is one recursive traversal over the closed tree union
(str | Placeholder | Node | fragment tuple). Structure and child ordering are
preserved; string leaves that expand into several parts are spliced into the
parent's children.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable

from l10nmark.syntax.hiccup import parse_tag
from l10nmark.syntax.placeholders import split_args
from l10nmark.syntax.nodes import Child, Node, Tree

from .styles import Splitter, split_styles

__all__ = [
    "escape_html",
    "explode_args_in_strings",
    "explode_styles_in_strings",
    "to_default_tagged",
]


def _splice(results: Iterable[Tree]) -> tuple[Child, ...]:
    children: list[Child] = []
    for result in results:
        if isinstance(result, tuple):
            children.extend(result)
        else:
            children.append(result)
    return tuple(children)


def explode_args_in_strings(tree: Tree) -> Tree:
    """Replace %N placeholders inside string leaves with Placeholder leaves.

    A string root that contains placeholders becomes a fragment tuple.

    Raises:
        CompileError: If a string contains %0

    Example:
        >>> explode_args_in_strings(Node("p", None, ("Hi %1!",)))
        Node(tag='p', attrs=None, children=('Hi ', Placeholder(index=0), '!'))
    """
    match tree:
        case str():
            parts = split_args(tree)
            return tree if parts == (tree,) else parts
        case Node(children=children):
            return tree.with_children(_splice(explode_args_in_strings(c) for c in children))
        case tuple():
            return _splice(explode_args_in_strings(c) for c in tree)
    return tree


def _styled_node(tag: str, content: str) -> Node:
    name, attrs = parse_tag(tag)
    return Node(name, attrs or None, (content,))


def explode_styles_in_strings(tree: Tree, splitter: Splitter = split_styles) -> Tree:
    """Replace inline markup in string leaves with styled child nodes.

    Args:
        tree: Tree to transform
        splitter: Function splitting a string into plain and (tag, content)
            parts (default: split_styles)

    Example:
        >>> explode_styles_in_strings("a **b**")
        ('a ', Node(tag='strong', attrs=None, children=('b',)))
    """
    match tree:
        case str():
            parts = splitter(tree)
            if not tree or parts == (tree,):
                return tree
            return tuple(
                part if isinstance(part, str) else _styled_node(*part) for part in parts
            )
        case Node(children=children):
            return tree.with_children(
                _splice(explode_styles_in_strings(c, splitter) for c in children)
            )
        case tuple():
            return _splice(explode_styles_in_strings(c, splitter) for c in tree)
    return tree


def to_default_tagged(tree: Tree, default_tag: str) -> Node:
    """Wrap an untagged tree in a default element.

    Nodes pass through unchanged; strings, placeholders and fragments become
    the children of ``Node(default_tag)``.
    """
    match tree:
        case Node():
            return tree
        case tuple():
            return Node(default_tag, None, tree)
    return Node(default_tag, None, (tree,))


def _escape(text: str) -> str:
    # Ampersand first so the entities inserted below are not re-escaped.
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def escape_html(tree: Tree) -> Tree:
    """HTML-escape every string leaf and string attribute value.

    Escapes ``&``, ``<``, ``>`` and ``"``. Not idempotent: escaping
    already-escaped text escapes its ampersands again.

    Example:
        >>> escape_html(Node("a", {"title": '"x"'}, ("a < b",)))
        Node(tag='a', attrs=mappingproxy({'title': '&quot;x&quot;'}), children=('a &lt; b',))
    """
    match tree:
        case str():
            return _escape(tree)
        case Node(tag=tag, attrs=attrs, children=children):
            if attrs:
                attrs = {k: _escape(v) if isinstance(v, str) else v for k, v in attrs.items()}
            return Node(tag, attrs, tuple(escape_html(c) for c in children))
        case tuple():
            return tuple(escape_html(c) for c in tree)
    return tree
