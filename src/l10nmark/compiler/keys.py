"""Composite lookup keys.

A compiled dictionary is keyed by tuples: the normalized locale followed by
every scope and resource id segment. Tuples keep segments apart, so two
distinct (locale, scope path, resid path) triples can never merge into the
same key. Dotted or slashed ids are paths: scope "nav" with resid "home"
and resid "nav.home" without a scope address the same resource.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from l10nmark.constants import KEY_DELIMITERS
from l10nmark.locale_utils import normalize_locale
from l10nmark.types import LocaleCode, ResourceId, ResourceKey

__all__ = ["merge_key", "split_key"]

_KEY_SPLIT = re.compile(f"[{re.escape(KEY_DELIMITERS)}]")


def split_key(value: str | Iterable[str] | None) -> tuple[str, ...]:
    """Split a scope or resource id into path segments.

    Example:
        >>> split_key("nav.home")
        ('nav', 'home')
        >>> split_key(["nav", "menu/home"])
        ('nav', 'menu', 'home')
        >>> split_key(None)
        ()
    """
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(s for s in _KEY_SPLIT.split(value) if s)
    return tuple(s for part in value for s in split_key(part))


def merge_key(
    locale: LocaleCode,
    scope: str | Iterable[str] | None,
    resid: ResourceId | Iterable[str],
) -> ResourceKey:
    """Merge locale, optional scope and resource id into a lookup key.

    Raises:
        ValueError: If the locale or resource id is empty

    Example:
        >>> merge_key("en-GB", "nav", "home")
        ('en-gb', 'nav', 'home')
    """
    segments = split_key(resid)
    if not segments:
        msg = f"Resource id must contain at least one segment, got {resid!r}"
        raise ValueError(msg)
    return (normalize_locale(locale), *split_key(scope), *segments)
