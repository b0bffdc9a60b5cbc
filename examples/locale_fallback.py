"""Locale Fallback Example - Search Across Locale Chains.

Demonstrates how requested locales expand into fallback chains and how
search() picks a template when translations are incomplete.

Scenarios covered:
1. Regional variants falling back to their base language
2. Several candidate resource ids
3. Dictionaries split into fragments on disk (JSON and gettext .po)

Python 3.13+.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

from babel.messages.catalog import Catalog
from babel.messages.pofile import write_po

from l10nmark import DictionaryCompiler, PathResourceLoader, compile_text, expand_locales, find


def example_1_regional_fallback() -> None:
    """Example 1: en-GB falls back to en, then to the next requested locale."""
    print("=" * 60)
    print("Example 1: Regional Fallback (lv-LV -> lv, en-GB -> en)")
    print("=" * 60)

    compiler = DictionaryCompiler()
    table = compiler.compile({
        "lv": {"cart": "Grozs", "checkout": "Kase"},
        "en": {"cart": "Cart", "checkout": "Checkout", "paid": "Payment successful!"},
        "en-GB": {"checkout": "Till"},
    })
    chains = expand_locales(["lv-LV", "en-GB"])
    print(f"\nChains: {chains}")

    for resid in ("cart", "checkout", "paid"):
        hit = find(table, chains, resid)
        print(f"  {resid}: {hit.template!r} (from {hit.locale})")  # type: ignore[union-attr]


def example_2_candidate_resids() -> None:
    """Example 2: the first resid present in a chain wins before the next chain."""
    print("\n" + "=" * 60)
    print("Example 2: Candidate Resource Ids")
    print("=" * 60)

    compiler = DictionaryCompiler()
    table = compiler.compile({
        "de": {"error": {"generic": "Fehler"}},
        "en": {"error": {"timeout": "The request timed out", "generic": "Error"}},
    })
    hit = find(table, expand_locales(["de", "en"]), ["timeout", "generic"], scope="error")
    print(f"\n  {hit.template!r} from {hit.locale} via {hit.resid}")  # type: ignore[union-attr]
    # German generic text beats the English specific one: chains come first.


def example_3_disk_fragments(tmp_path: Path) -> None:
    """Example 3: fragments loaded from disk through resource markers."""
    print("\n" + "=" * 60)
    print("Example 3: Disk Fragments")
    print("=" * 60)

    (tmp_path / "en").mkdir()
    (tmp_path / "en" / "help.json").write_text(
        json.dumps({"faq": "Frequently asked questions", "contact": "Write to %1"}),
        encoding="utf-8",
    )
    catalog = Catalog(locale="fr")
    catalog.add("faq", "Questions fréquentes", context="help")
    with (tmp_path / "fr.po").open("wb") as f:
        write_po(f, catalog)

    compiler = DictionaryCompiler(PathResourceLoader(tmp_path))
    table = compiler.compile({
        "en": {"help": {"__load-resource": "en/help.json"}},
        "fr": {"__load-resource": "fr.po"},
    })
    chains = expand_locales(["fr-CA", "en"])
    for resid in ("faq", "contact"):
        hit = find(table, chains, resid, scope="help")
        text = compile_text(hit.template)(["help@example.com"])  # type: ignore[union-attr]
        print(f"  help.{resid}: {text}")


if __name__ == "__main__":
    example_1_regional_fallback()
    example_2_candidate_resids()

    with tempfile.TemporaryDirectory() as tmp_dir_main:
        example_3_disk_fragments(Path(tmp_dir_main))

    print("\n" + "=" * 60)
    print("[SUCCESS] All examples complete!")
    print("=" * 60)
