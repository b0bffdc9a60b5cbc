"""Positional argument interpolation.

Compiles templates into reusable render functions. Placeholders are written
``%1`` .. ``%13`` (1-based) in strings, or appear as Placeholder leaves in
markup trees. ``%0`` is rejected at compile time. A backtick escapes a
literal percent: ``"100`%"`` renders as ``"100%"``.

Render functions accept either an argument list (0-based internally) or an
argument map keyed by positive integers:

    >>> render = compile_string("Hello %1, you have %2 messages")
    >>> render(["Anna", 3])
    'Hello Anna, you have 3 messages'
    >>> render({2: 3})
    'Hello , you have 3 messages'

Arguments beyond the supplied list resolve to an empty value; rendering never
fails on a short argument list.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Final

from l10nmark.constants import MAX_PLACEHOLDER
from l10nmark.diagnostics import ArgError, ErrorTemplate
from l10nmark.syntax.nodes import Node, Placeholder, Tree
from l10nmark.syntax.placeholders import split_args

__all__ = [
    "ABSENT",
    "ArgList",
    "Args",
    "Transform",
    "compile_string",
    "compile_tree",
    "normalize_args",
    "split_args",
]

type ArgList = Sequence[object]
"""0-based positional argument values."""

type Args = ArgList | Mapping[int, object] | None
"""Argument forms accepted by render functions."""

type Transform = Callable[[object], object]
"""Applied to every argument value before it is placed in the output."""


class _Absent:
    """Marker for holes in a normalized argument map."""

    __slots__ = ()
    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = _Absent()


def _identity(value: object) -> object:
    return value


def _stringify(value: object) -> str:
    if value is None or value is ABSENT:
        return ""
    return value if isinstance(value, str) else str(value)


def _nth(args: ArgList, index: int) -> object:
    value = args[index] if index < len(args) else None
    return None if value is ABSENT else value


def normalize_args(args: Args) -> tuple[object, ...]:
    """Normalize the accepted argument forms into a dense tuple.

    Args:
        args: None, a sequence of values, or a mapping of 1-based positions
            to values

    Returns:
        Tuple of values; holes in a mapping are filled with ABSENT and keys
        above MAX_PLACEHOLDER are dropped

    Raises:
        ArgError: If a mapping key is not a positive integer
        TypeError: If args is a string or another unsupported type

    Example:
        >>> normalize_args({1: "a", 2: "b", 5: "d"})
        ('a', 'b', ABSENT, ABSENT, 'd')
    """
    match args:
        case None:
            return ()
        case tuple():
            return args
        case Mapping():
            for key in args:
                if not isinstance(key, int) or isinstance(key, bool) or key <= 0:
                    raise ArgError(ErrorTemplate.arg_key_invalid(key), key=key)
            # keys past %13 are unreachable
            dense: list[object] = [ABSENT] * min(max(args, default=0), MAX_PLACEHOLDER)
            for key, value in args.items():
                if key <= MAX_PLACEHOLDER:
                    dense[key - 1] = value
            return tuple(dense)
        case str() | bytes():
            msg = f"Arguments must be a sequence or mapping, not {type(args).__name__}"
            raise TypeError(msg)
        case Sequence():
            return tuple(args)
    msg = f"Arguments must be a sequence or mapping, not {type(args).__name__}"
    raise TypeError(msg)


def compile_string(
    template: str, transform: Transform | None = None
) -> Callable[[Args], str]:
    """Compile a template string into a render function.

    Args:
        template: Template text with %N placeholders
        transform: Applied to each argument value (default: identity).
            Missing arguments reach the transform as None.

    Returns:
        Function mapping arguments to the rendered string

    Raises:
        CompileError: If the template contains %0
    """
    parts = split_args(template)
    xf = transform or _identity
    placeholders = [p for p in parts if isinstance(p, Placeholder)]

    if not placeholders:
        constant = "".join(p for p in parts if isinstance(p, str))

        def render_constant(args: Args = None) -> str:
            return constant

        return render_constant

    if len(parts) == 1:
        index = placeholders[0].index

        def render_single(args: Args = None) -> str:
            return _stringify(xf(_nth(normalize_args(args), index)))

        return render_single

    def render_parts(args: Args = None) -> str:
        values = normalize_args(args)
        return "".join(
            p if isinstance(p, str) else _stringify(xf(_nth(values, p.index)))
            for p in parts
        )

    return render_parts


type _Render = Callable[[ArgList], object]


def _build(tree: Tree | object, xf: Transform) -> _Render | None:
    """Build a renderer for a subtree, or None when it holds no placeholders."""
    match tree:
        case Placeholder(index=index):

            def render_placeholder(args: ArgList) -> object:
                value = xf(_nth(args, index))
                return "" if value is None else value

            return render_placeholder
        case Node(tag=tag, attrs=attrs, children=children):
            attr_fns = {}
            if attrs:
                attr_fns = {k: fn for k, v in attrs.items() if (fn := _build(v, xf))}
            child_fns = _build_children(children, xf)
            if not attr_fns and child_fns is None:
                return None

            def render_node(args: ArgList) -> Node:
                new_attrs = attrs
                if attr_fns and attrs:
                    new_attrs = {
                        k: attr_fns[k](args) if k in attr_fns else v for k, v in attrs.items()
                    }
                new_children = children if child_fns is None else child_fns(args)
                return Node(tag, new_attrs, new_children)

            return render_node
        case tuple():
            return _build_children(tree, xf)
    return None


def _build_children(children: tuple[object, ...], xf: Transform) -> _Render | None:
    fns = [_build(child, xf) for child in children]
    if not any(fns):
        return None

    def render_children(args: ArgList) -> tuple[object, ...]:
        out: list[object] = []
        for child, fn in zip(children, fns, strict=True):
            value = child if fn is None else fn(args)
            if isinstance(value, tuple):
                out.extend(value)
            else:
                out.append(value)
        return tuple(out)

    return render_children


def compile_tree(
    tree: Tree, transform: Transform | None = None
) -> Callable[[Args], Tree | object]:
    """Compile a markup tree into a render function.

    The render function rebuilds the tree, substituting the transformed
    argument at each Placeholder leaf and attribute value. Subtrees without
    placeholders are shared between renders; structure and ordering are
    preserved. Fragment values returned by the transform are spliced into
    the enclosing children.

    Args:
        tree: String, Placeholder, Node or fragment tuple
        transform: Applied to each argument value (default: identity)

    Returns:
        Function mapping arguments to the rendered tree
    """
    renderer = _build(tree, transform or _identity)

    if renderer is None:

        def render_constant(args: Args = None) -> Tree:
            return tree

        return render_constant

    def render(args: Args = None) -> Tree | object:
        return renderer(normalize_args(args))

    return render
