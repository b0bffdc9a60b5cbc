"""Translation dictionary compilation.

Turns a nested translation dictionary into a flat, read-only lookup table:

    {
        "en": {
            "greeting": "Hello, %1!",
            "nav": {"home": "Home", "start": ":en.nav.home"},
            "help": {"__load-resource": "en/help.json"},
        },
        "en-GB": {"nav": {"home": "Home page"}},
    }

compiles to

    {
        ("en", "greeting"): "Hello, %1!",
        ("en", "nav", "home"): "Home",
        ("en", "nav", "start"): "Home",
        ("en", "help", ...): ...,
        ("en-gb", "nav", "home"): "Home page",
    }

Compilation has two stages:

preprocess
    Pointers (Pointer leaves or colon-prefixed strings) are replaced by the
    preprocessed value at their target path; resource marker sub-maps are
    replaced by the loaded fragment; hiccup lists become markup trees.
    Cyclic pointers raise CyclicPointerError.

flatten
    Every leaf path becomes a ResourceKey: the normalized locale followed by
    the scope and resource id segments.

Compilation either returns a complete table or raises CompileError.

Python 3.13+.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import cast

from l10nmark.config import CompilerConfig
from l10nmark.core.depth_guard import DepthGuard
from l10nmark.diagnostics import CompileError, CyclicPointerError, ErrorTemplate
from l10nmark.locale_utils import normalize_locale
from l10nmark.syntax.hiccup import from_hiccup, parse_symbol
from l10nmark.syntax.nodes import Node, Placeholder, Pointer, Template
from l10nmark.syntax.placeholders import split_args
from l10nmark.types import Dictionary, LocaleCode, ResourceId, ResourceKey

from .cache import DictionaryCache
from .keys import merge_key, split_key
from .loading import ResourceLoader

__all__ = [
    "CompiledDictionary",
    "DictionaryCompiler",
    "clear_shared_cache",
    "compile_dictionary",
]

logger = logging.getLogger(__name__)

type _Path = tuple[str, ...]


class CompiledDictionary(Mapping[ResourceKey, Template]):
    """Read-only flat lookup table produced by DictionaryCompiler.

    Built once during compilation and shared read-only afterwards; the
    underlying dict is only reachable through a MappingProxyType.

    Example:
        >>> compiled = compile_dictionary({"en": {"hi": "Hello"}})
        >>> compiled[("en", "hi")]
        'Hello'
        >>> compiled.lookup("EN", "hi")
        'Hello'
    """

    __slots__ = ("_entries", "_locales")

    def __init__(self, entries: dict[ResourceKey, Template]) -> None:
        self._entries = MappingProxyType(entries)
        self._locales = frozenset(key[0] for key in entries)

    def __getitem__(self, key: ResourceKey) -> Template:
        return self._entries[key]

    def __iter__(self) -> Iterator[ResourceKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CompiledDictionary(entries={len(self._entries)}, locales={sorted(self._locales)})"

    @property
    def locales(self) -> frozenset[str]:
        """Normalized locales with at least one entry."""
        return self._locales

    def lookup(
        self, locale: LocaleCode, resid: ResourceId, scope: str | None = None
    ) -> Template | None:
        """Exact lookup of one resource in one locale (no fallback)."""
        return self._entries.get(merge_key(locale, scope, resid))


def _dotted(path: _Path) -> str:
    return ".".join(path)


def _same_locale(a: str, b: str) -> bool:
    try:
        return normalize_locale(a) == normalize_locale(b)
    except ValueError:
        return False


def _check_placeholders(template: object, path: _Path) -> None:
    """Reject %0 in every string of a template at compile time."""
    match template:
        case str():
            try:
                split_args(template)
            except CompileError as e:
                diagnostic = e.diagnostic or ErrorTemplate.placeholder_zero(template)
                raise CompileError(dataclasses.replace(diagnostic, path=path)) from e
        case Node(children=children):
            for child in children:
                _check_placeholders(child, path)
        case tuple():
            for child in template:
                _check_placeholders(child, path)


class _Preprocessor:
    """Single-use pointer and resource resolver for one dictionary."""

    __slots__ = ("_active", "_done", "_guard", "_loader", "_resource_key", "_root")

    def __init__(
        self, root: Mapping[str, object], loader: ResourceLoader | None, config: CompilerConfig
    ) -> None:
        self._root = root
        self._loader = loader
        self._resource_key = config.resource_key
        self._guard = DepthGuard(max_depth=config.max_depth)
        self._done: dict[_Path, object] = {}
        self._active: list[_Path] = []

    def run(self) -> dict[str, object]:
        return cast(dict[str, object], self._node(self._root, ()))

    # ------------------------------------------------------------------
    # Recursive walk
    # ------------------------------------------------------------------

    def _node(self, value: object, path: _Path) -> object:
        if path in self._done:
            return self._done[path]
        if path in self._active:
            start = self._active.index(path)
            cycle = tuple(_dotted(p) for p in (*self._active[start:], path))
            raise CyclicPointerError(ErrorTemplate.pointer_cycle(cycle), cycle=cycle)

        self._active.append(path)
        try:
            with self._guard.at(path):
                result = self._convert(value, path)
        finally:
            self._active.pop()
        self._done[path] = result
        return result

    def _convert(self, value: object, path: _Path) -> object:
        match value:
            case Mapping():
                expanded = self._expand(value, path)
                result: dict[str, object] = {}
                for key, child in expanded.items():
                    if not isinstance(key, str):
                        raise CompileError(
                            ErrorTemplate.dictionary_malformed(path, f"non-string key {key!r}")
                        )
                    result[key] = self._node(child, (*path, key))
                return result
            case Pointer():
                return self._follow(value, path)
            case str():
                parsed = parse_symbol(value)
                if isinstance(parsed, Pointer):
                    return self._follow(parsed, path)
                if isinstance(parsed, Placeholder):
                    return (parsed,)
                _check_placeholders(parsed, path)
                return parsed
            case Placeholder():
                return (value,)
            case Node() | list() | tuple():
                template = from_hiccup(value)
                if isinstance(template, Placeholder):
                    template = (template,)
                _check_placeholders(template, path)
                return template
        raise CompileError(
            ErrorTemplate.dictionary_malformed(
                path, f"unsupported value of type {type(value).__name__}"
            )
        )

    def _expand(self, node: Mapping[str, object], path: _Path) -> Mapping[str, object]:
        """Replace resource marker sub-maps by their loaded fragments.

        Keys next to the marker override keys of the loaded fragment.
        """
        seen: list[str] = []
        while self._resource_key in node:
            name = node[self._resource_key]
            if not isinstance(name, str):
                raise CompileError(
                    ErrorTemplate.dictionary_malformed(
                        path, f"resource name must be a string, got {name!r}"
                    )
                )
            if name in seen:
                cycle = (*seen, name)
                raise CyclicPointerError(ErrorTemplate.pointer_cycle(cycle), cycle=cycle)
            seen.append(name)
            fragment = self._load(name)
            siblings = {k: v for k, v in node.items() if k != self._resource_key}
            node = {**fragment, **siblings}
        return node

    def _load(self, name: str) -> Mapping[str, object]:
        if self._loader is None:
            raise CompileError(
                ErrorTemplate.resource_unreadable(name, "no resource loader configured")
            )
        fragment = self._loader.load(name)
        if not isinstance(fragment, Mapping):
            raise CompileError(
                ErrorTemplate.resource_malformed(name, f"got {type(fragment).__name__}")
            )
        return fragment

    # ------------------------------------------------------------------
    # Pointer resolution
    # ------------------------------------------------------------------

    def _follow(self, pointer: Pointer, path: _Path) -> object:
        """Resolve a pointer to the preprocessed value at its target path."""
        segments = pointer.segments
        node: object = self._root
        target: _Path = ()
        processed = False
        i = 0
        while i < len(segments):
            if not processed and not isinstance(node, Mapping):
                # Pointer to a pointer: navigate inside its resolved value
                node = self._node(node, target)
                processed = True
            if not isinstance(node, Mapping):
                raise CompileError(ErrorTemplate.pointer_unresolved(pointer.path, path))
            if not processed:
                node = self._expand(node, target)
            found = self._child(node, segments, i, locale_level=not target)
            if found is None:
                raise CompileError(ErrorTemplate.pointer_unresolved(pointer.path, path))
            key, node, i = found
            target = (*target, key)

        if processed:
            return node
        return self._node(node, target)

    @staticmethod
    def _child(
        node: Mapping[str, object], segments: tuple[str, ...], i: int, *, locale_level: bool
    ) -> tuple[str, object, int] | None:
        """Find the child addressed by segments[i:], allowing dotted keys."""
        if locale_level:
            for key, child in node.items():
                if isinstance(key, str) and _same_locale(key, segments[i]):
                    return key, child, i + 1
            return None
        if segments[i] in node:
            return segments[i], node[segments[i]], i + 1
        for key, child in node.items():
            if not isinstance(key, str):
                continue
            parts = split_key(key)
            if len(parts) > 1 and segments[i:i + len(parts)] == parts:
                return key, child, i + len(parts)
        return None


def _flatten(tree: Mapping[str, object]) -> dict[ResourceKey, Template]:
    table: dict[ResourceKey, Template] = {}

    def walk(node: Mapping[str, object], prefix: ResourceKey, path: _Path) -> None:
        for key, value in node.items():
            child_path = (*path, key)
            if prefix:
                segments = split_key(key)
            else:
                try:
                    segments = (normalize_locale(key),)
                except ValueError:
                    segments = ()
            if not segments:
                raise CompileError(ErrorTemplate.dictionary_malformed(child_path, "empty key"))
            if isinstance(value, Mapping):
                walk(value, (*prefix, *segments), child_path)
                continue
            resource_key = (*prefix, *segments)
            if len(resource_key) < 2:
                raise CompileError(ErrorTemplate.leaf_too_shallow(child_path))
            if resource_key in table:
                raise CompileError(ErrorTemplate.duplicate_key(resource_key))
            table[resource_key] = value  # type: ignore[assignment]

    walk(tree, (), ())
    return table


class DictionaryCompiler:
    """Compiles nested translation dictionaries into flat lookup tables.

    Holds the resource loader used for external fragments and an LRU cache
    of compiled results keyed by dictionary content.

    Example:
        >>> compiler = DictionaryCompiler(PathResourceLoader("locales"))
        >>> compiled = compiler.compile({"en": {"hi": "Hello %1"}})
        >>> compiled[("en", "hi")]
        'Hello %1'
        >>> compiler.get_cache_stats()["size"]
        1
    """

    __slots__ = ("_cache", "_config", "_loader")

    def __init__(
        self,
        loader: ResourceLoader | None = None,
        *,
        config: CompilerConfig | None = None,
    ) -> None:
        """Initialize compiler.

        Args:
            loader: Loader for resource marker sub-maps (optional; markers
                raise CompileError without one)
            config: Compiler configuration (default: CompilerConfig())
        """
        self._loader = loader
        self._config = config or CompilerConfig()
        self._cache = DictionaryCache(self._config.cache_size)

    @property
    def config(self) -> CompilerConfig:
        """Compiler configuration."""
        return self._config

    @property
    def loader(self) -> ResourceLoader | None:
        """Resource loader for external fragments."""
        return self._loader

    def preprocess(self, dictionary: Dictionary) -> dict[str, object]:
        """Resolve pointers and external resources; convert markup lists.

        Raises:
            CompileError: Malformed structure, unresolved pointer or
                unloadable resource
            CyclicPointerError: Pointer chain loops back onto itself
        """
        if not isinstance(dictionary, Mapping):
            raise CompileError(
                ErrorTemplate.dictionary_malformed(
                    (), f"expected a mapping, got {type(dictionary).__name__}"
                )
            )
        return _Preprocessor(dictionary, self._loader, self._config).run()

    @staticmethod
    def flatten(tree: Mapping[str, object]) -> dict[ResourceKey, Template]:
        """Flatten a preprocessed dictionary into ResourceKey -> Template.

        Raises:
            CompileError: Empty keys, templates without a resource id, or
                two leaves normalizing to the same key
        """
        return _flatten(tree)

    def compile(self, dictionary: Dictionary) -> CompiledDictionary:
        """Compile a dictionary, reusing a cached result for equal content.

        Raises:
            CompileError: If the dictionary cannot be compiled. No partial
                result is ever returned.
        """
        key = self._cache.make_key(dictionary)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Dictionary cache hit (%d entries)", len(cached))
            return cached

        compiled = CompiledDictionary(self.flatten(self.preprocess(dictionary)))
        self._cache.put(key, compiled)
        logger.info(
            "Compiled dictionary: %d entries across %d locale(s)",
            len(compiled),
            len(compiled.locales),
        )
        return compiled

    def clear_cache(self) -> None:
        """Drop all cached compiled dictionaries."""
        self._cache.clear()
        logger.debug("Dictionary cache cleared")

    def get_cache_stats(self) -> dict[str, int | float]:
        """Get cache statistics (see DictionaryCache.get_stats)."""
        return self._cache.get_stats()


_shared_compiler = DictionaryCompiler()


def compile_dictionary(
    dictionary: Dictionary, loader: ResourceLoader | None = None
) -> CompiledDictionary:
    """Compile a dictionary.

    Without a loader, a shared module-level compiler (and its cache) is used.
    With a loader, compilation goes through a fresh, uncached compiler;
    keep a DictionaryCompiler instance to cache results in that case.
    """
    if loader is None:
        return _shared_compiler.compile(dictionary)
    return DictionaryCompiler(loader).compile(dictionary)


def clear_shared_cache() -> None:
    """Drop every dictionary cached by compile_dictionary()."""
    _shared_compiler.clear_cache()
