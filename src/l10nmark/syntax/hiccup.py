"""Hiccup-style list syntax for markup templates.

Dictionaries written as plain data (Python literals, JSON fragments) express
markup trees as nested lists. The first element of a list is a tag when it
is a colon-prefixed symbol; otherwise the list is a tag-less fragment:

    [":p", {"class": "lead"}, "Hello ", [":strong", ":%1"], "!"]
    ["Plain text and ", [":em", "emphasis"]]

Colon-prefixed strings are symbolic tokens:

    ":%1"               Placeholder (first argument)
    ":en.example/hi"    Pointer (dictionary leaves only)
    "::literal"         Escaped colon, the string ":literal"

Tags accept shorthand for ids and classes: ":span.variant-1",
":div#main.wide".

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from l10nmark.constants import SYMBOL_PREFIX
from l10nmark.diagnostics import CompileError, ErrorTemplate

from .nodes import AttrValue, Child, Node, Placeholder, Pointer, Template

__all__ = [
    "from_hiccup",
    "parse_symbol",
    "parse_tag",
    "to_hiccup",
]

_PLACEHOLDER_SYMBOL = re.compile(r":%(\d+)")
_NAME_SYMBOL = re.compile(r":([A-Za-z_][\w\-.:/]*)")
_TAG_SYMBOL = re.compile(r":([A-Za-z][\w\-]*(?:[#.][\w\-]+)*)")
_TAG_SHORTHAND = re.compile(r"([#.])([^#.]+)")


def parse_symbol(text: str) -> str | Placeholder | Pointer:
    """Interpret a string that may be a symbolic token.

    Args:
        text: Raw string from a dictionary or hiccup list

    Returns:
        Placeholder for ":%N", Pointer for ":path", the unescaped string
        for "::text", and the string itself otherwise

    Raises:
        CompileError: If the symbol is the invalid placeholder ":%0"
    """
    if not text.startswith(SYMBOL_PREFIX):
        return text
    if text.startswith(SYMBOL_PREFIX * 2):
        return text[1:]
    if m := _PLACEHOLDER_SYMBOL.fullmatch(text):
        number = int(m.group(1))
        if number == 0:
            raise CompileError(ErrorTemplate.placeholder_zero(text))
        try:
            return Placeholder(number - 1)
        except ValueError:
            return text
    if m := _NAME_SYMBOL.fullmatch(text):
        return Pointer(m.group(1))
    return text


def parse_tag(tag: str) -> tuple[str, dict[str, str]]:
    """Split hiccup tag shorthand into an element name and attributes.

    Example:
        >>> parse_tag("span.variant-1")
        ('span', {'class': 'variant-1'})
        >>> parse_tag("div#main.a.b")
        ('div', {'id': 'main', 'class': 'a b'})
    """
    name = re.split(r"[#.]", tag, maxsplit=1)[0]
    rest = tag[len(name):]
    attrs: dict[str, str] = {}
    classes: list[str] = []
    for marker, value in _TAG_SHORTHAND.findall(rest):
        if marker == "#":
            attrs["id"] = value
        else:
            classes.append(value)
    if classes:
        attrs["class"] = " ".join(classes)
    return name, attrs


def _is_tag(value: object) -> bool:
    return isinstance(value, str) and _TAG_SYMBOL.fullmatch(value) is not None


def _convert_attr(value: object) -> AttrValue:
    if isinstance(value, str):
        parsed = parse_symbol(value)
        return value if isinstance(parsed, Pointer) else parsed
    if value is None or isinstance(value, (int, float, bool, Placeholder)):
        return value
    raise CompileError(ErrorTemplate.template_invalid(value, "an attribute value"))


def _convert_children(items: Any) -> list[Child]:
    children: list[Child] = []
    for item in items:
        converted = from_hiccup(item)
        if isinstance(converted, tuple):
            children.extend(converted)
        else:
            children.append(converted)
    return children


def from_hiccup(value: object) -> Template | Placeholder:
    """Convert hiccup list data into a markup tree.

    Nodes and Placeholders pass through unchanged. Fragments nested inside a
    list are spliced into the enclosing children.

    Args:
        value: String, Node, Placeholder or (nested) list/tuple

    Returns:
        String, Placeholder, Node, or fragment tuple

    Raises:
        CompileError: For pointers inside markup, invalid placeholders or
            unsupported value types
    """
    match value:
        case Node() | Placeholder():
            return value
        case str():
            parsed = parse_symbol(value)
            if isinstance(parsed, Pointer):
                raise CompileError(
                    ErrorTemplate.template_invalid(value, "markup content, not a pointer")
                )
            return parsed
        case list() | tuple():
            if value and _is_tag(value[0]):
                name, attrs = parse_tag(value[0][1:])
                rest = value[1:]
                if rest and isinstance(rest[0], Mapping):
                    attrs.update({str(k): _convert_attr(v) for k, v in rest[0].items()})
                    rest = rest[1:]
                return Node(name, attrs or None, tuple(_convert_children(rest)))
            return tuple(_convert_children(value))
        case _:
            raise CompileError(ErrorTemplate.template_invalid(value, "a string or markup list"))


def _escape(value: object) -> object:
    if isinstance(value, str) and value.startswith(SYMBOL_PREFIX):
        return SYMBOL_PREFIX + value
    return value


def to_hiccup(tree: Template | Placeholder) -> Any:
    """Convert a markup tree back into hiccup list data.

    The result is JSON-serializable when attribute values are.

    Example:
        >>> to_hiccup(Node("p", None, ("Hi ", Placeholder(0))))
        [':p', 'Hi ', ':%1']
    """
    match tree:
        case str():
            return _escape(tree)
        case Placeholder():
            return SYMBOL_PREFIX + tree.token
        case Node(tag=tag, attrs=attrs, children=children):
            out: list[Any] = [SYMBOL_PREFIX + tag]
            if attrs:
                out.append({
                    k: SYMBOL_PREFIX + v.token if isinstance(v, Placeholder) else _escape(v)
                    for k, v in attrs.items()
                })
            out.extend(to_hiccup(child) for child in children)
            return out
        case tuple():
            return [to_hiccup(child) for child in tree]
    msg = f"Not a markup tree: {tree!r}"
    raise TypeError(msg)
