"""Tests for locale normalization and fallback chain expansion.

Python 3.13+.
"""

import string

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from l10nmark.locale_utils import (
    expand_locale,
    expand_locales,
    locale_segments,
    normalize_locale,
)

_segment = st.text(alphabet=string.ascii_letters + string.digits, min_size=1, max_size=8)
_locale = st.lists(_segment, min_size=1, max_size=4).flatmap(
    lambda parts: st.sampled_from(["-", "_"]).map(lambda sep: sep.join(parts))
)


class TestNormalizeLocale:
    """normalize_locale lowercases and joins segments with hyphens."""

    def test_underscore_to_hyphen(self) -> None:
        """POSIX separators become hyphens."""
        assert normalize_locale("en_GB") == "en-gb"

    def test_uppercase_lowercased(self) -> None:
        """Locale comparison is case-insensitive."""
        assert normalize_locale("EN-gb") == normalize_locale("en-GB") == "en-gb"

    def test_simple_locale(self) -> None:
        """Single-segment locale is only lowercased."""
        assert normalize_locale("De") == "de"

    def test_empty_segments_dropped(self) -> None:
        """Repeated separators do not create empty segments."""
        assert normalize_locale("en--GB_") == "en-gb"

    def test_empty_locale_rejected(self) -> None:
        """A locale must have at least one segment."""
        with pytest.raises(ValueError, match="at least one segment"):
            normalize_locale("")

    def test_separators_only_rejected(self) -> None:
        """Separator-only input has no segments."""
        with pytest.raises(ValueError, match="at least one segment"):
            locale_segments("-_")


class TestExpandLocale:
    """expand_locale builds most-specific-first prefixes."""

    def test_three_segments(self) -> None:
        """Every cumulative prefix appears, longest first."""
        assert expand_locale("en-GB-var1") == ("en-GB-var1", "en-GB", "en")

    def test_single_segment(self) -> None:
        """Single-segment locale yields a singleton chain."""
        assert expand_locale("en") == ("en",)

    def test_underscore_input_rejoined_with_hyphens(self) -> None:
        """Segments split on '_' are rejoined with '-' and keep their case."""
        assert expand_locale("pt_BR") == ("pt-BR", "pt")

    @given(_locale)
    def test_chain_shape(self, locale: str) -> None:
        """Chain length equals segment count and each entry prefixes the previous."""
        chain = expand_locale(locale)
        event(f"segments={len(chain)}")
        assert len(chain) == len(locale_segments(locale))
        for longer, shorter in zip(chain, chain[1:], strict=False):
            assert longer.startswith(shorter + "-")


class TestExpandLocales:
    """expand_locales de-duplicates variants across chains."""

    def test_mixed_request(self) -> None:
        """Later duplicate bases are suppressed; surviving order matches input."""
        chains = expand_locales(["en-US-var1", "fr-FR", "fr", "en-GB", "de-DE"])
        assert len(chains) == 4
        assert chains == (
            ("en-US-var1", "en-US", "en"),
            ("fr-FR", "fr"),
            ("en-GB",),
            ("de-DE", "de"),
        )

    def test_plain_duplicate_dropped(self) -> None:
        """The same locale twice produces one chain."""
        assert expand_locales(["fr", "fr"]) == (("fr",),)

    def test_duplicates_case_insensitive(self) -> None:
        """Variants are compared case-insensitively."""
        assert expand_locales(["en-GB", "EN-gb", "EN"]) == (("en-GB", "en"),)

    def test_single_string_accepted(self) -> None:
        """A bare string is one requested locale."""
        assert expand_locales("en-GB") == (("en-GB", "en"),)

    def test_empty_request(self) -> None:
        """No locales, no chains."""
        assert expand_locales([]) == ()

    @given(st.lists(_locale, max_size=6))
    def test_variants_unique_across_chains(self, locales: list[str]) -> None:
        """No variant appears in more than one chain, and no chain is empty."""
        chains = expand_locales(locales)
        flat = [v.lower() for chain in chains for v in chain]
        event(f"chains={len(chains)}")
        assert len(flat) == len(set(flat))
        assert all(chains)
