"""Locale normalization and fallback chain expansion.

Locales are opaque, case-insensitive tokens whose segments are separated by
'-' or '_'. A locale expands into a chain of progressively more general
variants; a list of requested locales expands into one chain per distinct
base language.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from l10nmark.constants import LOCALE_DELIMITERS
from l10nmark.types import LocaleChain, LocaleCode

__all__ = [
    "expand_locale",
    "expand_locales",
    "locale_segments",
    "normalize_locale",
]

_LOCALE_SPLIT = re.compile(f"[{re.escape(LOCALE_DELIMITERS)}]")


def locale_segments(locale: LocaleCode) -> list[str]:
    """Split a locale into its non-empty segments.

    Raises:
        ValueError: If the locale has no segments
    """
    segments = [s for s in _LOCALE_SPLIT.split(locale.strip()) if s]
    if not segments:
        msg = f"Locale must contain at least one segment, got {locale!r}"
        raise ValueError(msg)
    return segments


def normalize_locale(locale: LocaleCode) -> str:
    """Canonical form used in compiled lookup keys.

    Lowercases the locale and joins its segments with hyphens, so "en_GB",
    "EN-gb" and "en-GB" all normalize to "en-gb".

    Example:
        >>> normalize_locale("en_GB")
        'en-gb'
    """
    return "-".join(locale_segments(locale)).lower()


def expand_locale(locale: LocaleCode) -> LocaleChain:
    """Expand a locale into its fallback chain, most specific first.

    Segment case is preserved; segments are rejoined with hyphens.

    Example:
        >>> expand_locale("en-GB-var1")
        ('en-GB-var1', 'en-GB', 'en')
        >>> expand_locale("en")
        ('en',)
    """
    segments = locale_segments(locale)
    return tuple("-".join(segments[:n]) for n in range(len(segments), 0, -1))


def expand_locales(locales: Iterable[LocaleCode] | LocaleCode) -> tuple[LocaleChain, ...]:
    """Expand requested locales into fallback chains.

    Chains keep the input order. Variants already present in an earlier
    chain (compared case-insensitively) are removed from later chains, and a
    chain left empty is dropped entirely: a locale whose base was already
    included through a more specific locale adds nothing.

    Example:
        >>> expand_locales(["fr-FR", "en-GB", "fr", "en-US"])
        (('fr-FR', 'fr'), ('en-GB', 'en'), ('en-US',))
    """
    if isinstance(locales, str):
        locales = (locales,)
    seen: set[str] = set()
    chains: list[LocaleChain] = []
    for locale in locales:
        chain = tuple(v for v in expand_locale(locale) if v.lower() not in seen)
        if not chain:
            continue
        seen.update(v.lower() for v in chain)
        chains.append(chain)
    return tuple(chains)
