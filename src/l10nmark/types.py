"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user code
when annotating call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "Dictionary",
    "LocaleChain",
    "LocaleCode",
    "ResourceId",
    "ResourceKey",
]

type LocaleCode = str
"""Locale token (e.g., 'en', 'en-GB', 'en-GB-var1'); case-insensitive."""

type LocaleChain = tuple[LocaleCode, ...]
"""Variants of one locale, most specific first (e.g., ('en-GB', 'en'))."""

type ResourceId = str
"""Resource identifier, optionally path-qualified (e.g., 'greeting', 'nav.home')."""

type ResourceKey = tuple[str, ...]
"""Compiled lookup key: normalized locale followed by scope and resid segments."""

type Dictionary = Mapping[str, object]
"""Nested translation dictionary keyed by locale, scope and resource id."""
