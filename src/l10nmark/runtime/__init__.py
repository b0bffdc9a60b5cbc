"""Runtime package: search, interpolation and render pipelines.

Depends on the syntax, markup and compiler packages.

Python 3.13+.
"""

from .interpolation import (
    ABSENT,
    ArgList,
    Args,
    Transform,
    compile_string,
    compile_tree,
    normalize_args,
)
from .render import compile_markup, compile_template, compile_text, render_text, render_to_html
from .search import NOT_FOUND, SearchHit, candidate_keys, find, search

__all__ = [
    "ABSENT",
    "NOT_FOUND",
    "ArgList",
    "Args",
    "SearchHit",
    "Transform",
    "candidate_keys",
    "compile_markup",
    "compile_string",
    "compile_template",
    "compile_text",
    "compile_tree",
    "find",
    "normalize_args",
    "render_text",
    "render_to_html",
    "search",
]
