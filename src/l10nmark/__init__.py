"""l10nmark - Compiled translation dictionaries with markup templates.

Compiles nested translation dictionaries into flat lookup tables, searches
them along locale fallback chains, and renders positional-argument
templates to strings or to markup trees with lightweight inline styling.

Public API:
    compile_dictionary - Compile a nested dictionary (shared cache)
    DictionaryCompiler - Compiler with its own loader, config and cache
    expand_locales - Requested locales to fallback chains
    search - Highest-priority template for candidate resource ids
    compile_text - String template to plain-text render function
    compile_markup - Template to markup-tree render function
    render_to_html - Serialize a rendered tree to HTML
    Node, Placeholder, Pointer - Markup tree and dictionary leaf types

Exceptions:
    L10nError - Base exception class
    CompileError - Dictionary or template compilation failed
    CyclicPointerError - Pointer chain loops back onto itself
    ArgError - Invalid argument map key

Submodules:
    l10nmark.syntax - Node types, hiccup list notation, placeholder syntax
    l10nmark.markup - Inline styles and tree transformations
    l10nmark.compiler - Dictionary compilation, resource loaders, cache
    l10nmark.runtime - Search, interpolation and render pipelines
    l10nmark.diagnostics - Error codes, diagnostics and formatting
"""

from .compiler import (
    CompiledDictionary,
    DictionaryCompiler,
    MappingResourceLoader,
    PathResourceLoader,
    ResourceLoader,
    compile_dictionary,
    merge_key,
)
from .config import CompilerConfig
from .diagnostics import ArgError, CompileError, CyclicPointerError, L10nError
from .locale_utils import expand_locale, expand_locales, normalize_locale
from .runtime import (
    ABSENT,
    NOT_FOUND,
    SearchHit,
    compile_markup,
    compile_string,
    compile_text,
    compile_tree,
    find,
    normalize_args,
    render_text,
    render_to_html,
    search,
)
from .syntax import Node, Placeholder, Pointer, arg, from_hiccup, to_hiccup

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("l10nmark")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ABSENT",
    "NOT_FOUND",
    "ArgError",
    "CompileError",
    "CompiledDictionary",
    "CompilerConfig",
    "CyclicPointerError",
    "DictionaryCompiler",
    "L10nError",
    "MappingResourceLoader",
    "Node",
    "PathResourceLoader",
    "Placeholder",
    "Pointer",
    "ResourceLoader",
    "SearchHit",
    "__version__",
    "arg",
    "compile_dictionary",
    "compile_markup",
    "compile_string",
    "compile_text",
    "compile_tree",
    "expand_locale",
    "expand_locales",
    "find",
    "from_hiccup",
    "merge_key",
    "normalize_args",
    "normalize_locale",
    "render_text",
    "render_to_html",
    "search",
    "to_hiccup",
]
