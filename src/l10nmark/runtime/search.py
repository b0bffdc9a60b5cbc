"""Resource search across locale fallback chains.

Scans a compiled dictionary for the first of several candidate resource ids
along ordered locale chains. Priority, highest first:

    1. locale chain, in caller order
    2. resource id, in caller order
    3. locale variant within the chain, most specific first

All candidate keys are precomputed into one ordered sequence; the first key
present in the table wins and ends the whole search.

Absence is a value (NOT_FOUND), not an error: choosing a fallback text is up
to the caller.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from l10nmark.compiler.keys import merge_key
from l10nmark.locale_utils import expand_locales
from l10nmark.syntax.nodes import Template
from l10nmark.types import LocaleChain, LocaleCode, ResourceId, ResourceKey

__all__ = [
    "NOT_FOUND",
    "SearchHit",
    "candidate_keys",
    "find",
    "search",
]

logger = logging.getLogger(__name__)


class _NotFound:
    """Result of a search that matched nothing."""

    __slots__ = ()
    _instance: _NotFound | None = None

    def __new__(cls) -> _NotFound:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND: Final = _NotFound()


@dataclass(frozen=True, slots=True)
class SearchHit:
    """Where a search found its template.

    Attributes:
        template: The matched template
        locale: Locale variant that held it (as written in the chain)
        resid: Candidate resource id that matched
        key: Compiled dictionary key
        chain_index: Position of the matching chain in the request
    """

    template: Template
    locale: LocaleCode
    resid: ResourceId
    key: ResourceKey
    chain_index: int


def _as_chains(
    chains: Sequence[LocaleChain] | Iterable[LocaleCode] | LocaleCode,
) -> tuple[LocaleChain, ...]:
    if isinstance(chains, str):
        return expand_locales(chains)
    items = tuple(chains)
    if all(isinstance(c, str) for c in items):
        return expand_locales(items)
    return items  # type: ignore[return-value]


def candidate_keys(
    chains: Sequence[LocaleChain] | Iterable[LocaleCode] | LocaleCode,
    resids: Iterable[ResourceId] | ResourceId,
    scope: str | None = None,
) -> Iterator[tuple[int, ResourceId, LocaleCode, ResourceKey]]:
    """Yield (chain_index, resid, variant, key) in search priority order.

    Chains may be given precomputed (sequences of locale tuples) or as
    locale strings, which are expanded with expand_locales().
    """
    if isinstance(resids, str):
        resids = (resids,)
    resids = tuple(resids)
    for chain_index, chain in enumerate(_as_chains(chains)):
        for resid in resids:
            for variant in chain:
                yield chain_index, resid, variant, merge_key(variant, scope, resid)


def find(
    table: Mapping[ResourceKey, Template],
    chains: Sequence[LocaleChain] | Iterable[LocaleCode] | LocaleCode,
    resids: Iterable[ResourceId] | ResourceId,
    scope: str | None = None,
) -> SearchHit | _NotFound:
    """Search and report where the template was found.

    Returns:
        SearchHit for the highest-priority match, or NOT_FOUND
    """
    for chain_index, resid, variant, key in candidate_keys(chains, resids, scope):
        template = table.get(key)
        if template is not None:
            return SearchHit(template, variant, resid, key, chain_index)
    logger.debug("No template found for %r (scope=%r)", resids, scope)
    return NOT_FOUND


def search(
    table: Mapping[ResourceKey, Template],
    chains: Sequence[LocaleChain] | Iterable[LocaleCode] | LocaleCode,
    resids: Iterable[ResourceId] | ResourceId,
    scope: str | None = None,
) -> Template | _NotFound:
    """Find the highest-priority template for the candidate resource ids.

    Args:
        table: Compiled dictionary
        chains: Locale chains (from expand_locales) or locale strings
        resids: Candidate resource ids, most preferred first
        scope: Optional scope prepended to every resource id

    Returns:
        The matched template, or NOT_FOUND

    Example:
        >>> table = compile_dictionary({"en": {"hi": "Hello"}, "fr": {"hi": "Salut"}})
        >>> search(table, expand_locales(["fr-CA", "en"]), ["hi"])
        'Salut'
    """
    hit = find(table, chains, resids, scope)
    return hit.template if isinstance(hit, SearchHit) else NOT_FOUND
