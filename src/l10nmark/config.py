"""Compiler configuration.

Provides a single frozen dataclass that encapsulates the tunables of
dictionary compilation: cache size, depth limit and the external resource
marker key.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from l10nmark.constants import DEFAULT_DICTIONARY_CACHE_SIZE, MAX_DEPTH, RESOURCE_KEY

__all__ = ["CompilerConfig"]


@dataclass(frozen=True, slots=True)
class CompilerConfig:
    """Immutable configuration for DictionaryCompiler.

    All fields have sensible defaults; ``CompilerConfig()`` with no arguments
    produces a usable configuration.

    Attributes:
        cache_size: Maximum compiled dictionaries kept in the LRU cache
            (default: 64).
        max_depth: Maximum dictionary nesting and pointer chain depth
            (default: 100).
        resource_key: Sub-map key naming an external fragment to splice in
            (default: "__load-resource").

    Example:
        >>> from l10nmark import DictionaryCompiler
        >>> from l10nmark.config import CompilerConfig
        >>> compiler = DictionaryCompiler(config=CompilerConfig(cache_size=8))
        >>> compiler.config.cache_size
        8
    """

    cache_size: int = DEFAULT_DICTIONARY_CACHE_SIZE
    max_depth: int = MAX_DEPTH
    resource_key: str = RESOURCE_KEY

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If cache_size or max_depth is not positive, or
                resource_key is empty.
        """
        if self.cache_size <= 0:
            msg = "cache_size must be positive"
            raise ValueError(msg)
        if self.max_depth <= 0:
            msg = "max_depth must be positive"
            raise ValueError(msg)
        if not self.resource_key:
            msg = "resource_key must be a non-empty string"
            raise ValueError(msg)
