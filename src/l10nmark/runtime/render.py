"""Template compilation pipelines.

Wires interpolation, inline styling and escaping into reusable render
functions. Compile once, render many times:

    >>> render = compile_markup("Hello **%1** & welcome", default_tag="p")
    >>> render(["<Anna>"])
    Node(tag='p', attrs=None, children=('Hello ', Node(tag='strong', attrs=None,
    children=('&lt;Anna&gt;',)), ' &amp; welcome'))
    >>> render_to_html(render(["Anna"]))
    '<p>Hello <strong>Anna</strong> &amp; welcome</p>'

Markup pipeline order: inline styles are split first (so placeholders can
sit inside styled text), then placeholders are exploded into Placeholder
leaves, then template text is HTML-escaped. Argument values are never
styled; string arguments are escaped at render time.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable

from l10nmark.diagnostics import CompileError, ErrorTemplate
from l10nmark.markup.tree import (
    escape_html,
    explode_args_in_strings,
    explode_styles_in_strings,
    to_default_tagged,
)
from l10nmark.syntax.nodes import Node, Placeholder, Template, Tree

from .interpolation import Args, Transform, compile_string, compile_tree

__all__ = [
    "compile_markup",
    "compile_template",
    "compile_text",
    "render_text",
    "render_to_html",
]

_VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
})


def compile_text(template: str, transform: Transform | None = None) -> Callable[[Args], str]:
    """Compile a string template into a plain-text render function.

    No styling or escaping is applied.

    Raises:
        CompileError: If the template is not a string, or contains %0
    """
    if not isinstance(template, str):
        raise CompileError(ErrorTemplate.template_invalid(template, "a string template"))
    return compile_string(template, transform)


def compile_template(
    template: Template, transform: Transform | None = None
) -> Callable[[Args], Tree | object]:
    """Compile any template: strings interpolate, trees substitute in place."""
    if isinstance(template, str):
        return compile_string(template, transform)
    if isinstance(template, (Node, tuple, Placeholder)):
        return compile_tree(explode_args_in_strings(template), transform)
    raise CompileError(ErrorTemplate.template_invalid(template, "a string or markup tree"))


def compile_markup(
    template: Template,
    *,
    default_tag: str | None = None,
    styles: bool = True,
    escape: bool = True,
    transform: Transform | None = None,
) -> Callable[[Args], Tree | object]:
    """Compile a template into a markup-tree render function.

    Args:
        template: String, Node or fragment
        default_tag: Wrap untagged results in this element (optional)
        styles: Split inline markup (**bold**, *em*, ~~mark~~, ...) in text
        escape: HTML-escape template text and argument values; Node and
            fragment arguments are inserted as markup
        transform: Applied to each argument value (default: identity)

    Raises:
        CompileError: If the template is not a string or tree, or contains %0
    """
    if not isinstance(template, (str, Node, tuple, Placeholder)):
        raise CompileError(ErrorTemplate.template_invalid(template, "a string or markup tree"))

    tree: Tree = template
    if styles:
        tree = explode_styles_in_strings(tree)
    tree = explode_args_in_strings(tree)
    if escape:
        tree = escape_html(tree)
    if default_tag:
        tree = to_default_tagged(tree, default_tag)

    if not escape:
        return compile_tree(tree, transform)

    def escaping_transform(value: object) -> object:
        if transform is not None:
            value = transform(value)
        match value:
            case None | Node() | tuple():
                return value
        return escape_html(str(value))

    return compile_tree(tree, escaping_transform)


def render_text(template: str, args: Args = None, transform: Transform | None = None) -> str:
    """Compile and render a string template in one call."""
    return compile_text(template, transform)(args)


def _attr(name: str, value: object) -> str:
    if value is True:
        return f" {name}"
    if isinstance(value, Placeholder):
        value = value.token
    return f' {name}="{value}"'


def render_to_html(tree: Tree | object) -> str:
    """Serialize a rendered markup tree to an HTML string.

    Text is written as-is: escape it first (compile_markup does so by
    default). Attributes set to None or False are omitted; True renders a
    bare attribute name.
    """
    match tree:
        case str():
            return tree
        case Placeholder():
            return tree.token
        case Node(tag=tag, attrs=attrs, children=children):
            rendered_attrs = "".join(
                _attr(k, v) for k, v in (attrs or {}).items() if v is not None and v is not False
            )
            if tag in _VOID_ELEMENTS and not children:
                return f"<{tag}{rendered_attrs}>"
            inner = "".join(render_to_html(child) for child in children)
            return f"<{tag}{rendered_attrs}>{inner}</{tag}>"
        case tuple():
            return "".join(render_to_html(child) for child in tree)
        case None:
            return ""
    return str(tree)
