"""Tests for external resource loaders.

Python 3.13+.
"""

import json
import logging
from pathlib import Path

import pytest
from babel.messages.catalog import Catalog
from babel.messages.pofile import write_po

from l10nmark.compiler import DictionaryCompiler, MappingResourceLoader, PathResourceLoader
from l10nmark.compiler.loading import _MemoizedLoader
from l10nmark.diagnostics import CompileError, DiagnosticCode
from l10nmark.syntax.nodes import Node


def _code(error: CompileError) -> DiagnosticCode:
    assert error.diagnostic is not None
    return error.diagnostic.code


def _write_json(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


def _write_catalog(path: Path, catalog: Catalog) -> None:
    with path.open("wb") as f:
        write_po(f, catalog)


@pytest.fixture
def german_catalog() -> Catalog:
    catalog = Catalog(locale="de")
    catalog.add("greeting", "Hallo, %1!")
    catalog.add("home", "Startseite", context="nav")
    catalog.add("draft", "Entwurf", flags=["fuzzy"])
    catalog.add("untranslated", "")
    catalog.add(("apple", "apples"), ("Apfel", "Äpfel"))
    return catalog


class TestPathResourceLoaderJson:
    """JSON fragments on disk."""

    def test_load(self, tmp_path: Path) -> None:
        """JSON objects load as fragments."""
        _write_json(tmp_path / "en" / "help.json", {"faq": "FAQ"})
        loader = PathResourceLoader(tmp_path)
        assert loader.load("en/help.json") == {"faq": "FAQ"}

    def test_compile_with_markup(self, tmp_path: Path) -> None:
        """Hiccup lists in JSON fragments compile to trees."""
        _write_json(
            tmp_path / "en" / "help.json",
            {"faq": "FAQ", "intro": [":p", "Read ", [":b", "this"]]},
        )
        compiler = DictionaryCompiler(PathResourceLoader(tmp_path))
        compiled = compiler.compile({"en": {"help": {"__load-resource": "en/help.json"}}})
        assert compiled[("en", "help", "faq")] == "FAQ"
        assert compiled[("en", "help", "intro")] == Node(
            "p", None, ("Read ", Node("b", None, ("this",)))
        )

    def test_missing_file(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Missing files fail with the resource name and are logged."""
        loader = PathResourceLoader(tmp_path)
        with caplog.at_level(logging.ERROR, logger="l10nmark.compiler.loading"):
            with pytest.raises(CompileError) as exc_info:
                loader.load("missing.json")
        assert exc_info.value.resource_name == "missing.json"
        assert _code(exc_info.value) == DiagnosticCode.RESOURCE_NOT_FOUND
        assert "External resource not found" in caplog.text

    def test_malformed_json(self, tmp_path: Path) -> None:
        """Undecodable JSON is malformed."""
        (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(CompileError) as exc_info:
            PathResourceLoader(tmp_path).load("bad.json")
        assert _code(exc_info.value) == DiagnosticCode.RESOURCE_MALFORMED

    def test_top_level_must_be_object(self, tmp_path: Path) -> None:
        """Fragments must decode to a mapping."""
        _write_json(tmp_path / "list.json", ["a", "b"])
        with pytest.raises(CompileError) as exc_info:
            PathResourceLoader(tmp_path).load("list.json")
        assert _code(exc_info.value) == DiagnosticCode.RESOURCE_MALFORMED

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        """Files that are not UTF-8 are unreadable."""
        (tmp_path / "latin.json").write_bytes(b'{"a": "\xe9"}')
        with pytest.raises(CompileError) as exc_info:
            PathResourceLoader(tmp_path).load("latin.json")
        assert _code(exc_info.value) == DiagnosticCode.RESOURCE_UNREADABLE

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        """Only .json and .po have decoders."""
        (tmp_path / "strings.yaml").write_text("a: b", encoding="utf-8")
        with pytest.raises(CompileError) as exc_info:
            PathResourceLoader(tmp_path).load("strings.yaml")
        assert _code(exc_info.value) == DiagnosticCode.RESOURCE_FORMAT_UNSUPPORTED

    def test_memoized_until_cleared(self, tmp_path: Path) -> None:
        """Loads are memoized by name; clear_cache forgets them."""
        path = tmp_path / "a.json"
        _write_json(path, {"v": "1"})
        loader = PathResourceLoader(tmp_path)
        first = loader.load("a.json")
        _write_json(path, {"v": "2"})
        assert loader.load("a.json") is first
        loader.clear_cache()
        assert loader.load("a.json") == {"v": "2"}

    def test_root_dir_resolved(self, tmp_path: Path) -> None:
        """The root directory is stored resolved."""
        assert PathResourceLoader(str(tmp_path)).root_dir == tmp_path.resolve()


class TestPathResourceLoaderSecurity:
    """Resource names cannot escape the root directory."""

    @pytest.mark.parametrize(
        "name",
        ["../secret.json", "en/../../secret.json", "/etc/passwd.json", " padded.json", ""],
    )
    def test_rejected_names(self, tmp_path: Path, name: str) -> None:
        """Traversal, absolute and blank names are invalid."""
        with pytest.raises(CompileError) as exc_info:
            PathResourceLoader(tmp_path).load(name)
        assert _code(exc_info.value) == DiagnosticCode.RESOURCE_NAME_INVALID

    def test_symlink_outside_root(self, tmp_path: Path) -> None:
        """Symlinks resolving outside the root are invalid."""
        root = tmp_path / "root"
        root.mkdir()
        _write_json(tmp_path / "outside.json", {"a": "b"})
        (root / "link.json").symlink_to(tmp_path / "outside.json")
        with pytest.raises(CompileError) as exc_info:
            PathResourceLoader(root).load("link.json")
        assert _code(exc_info.value) == DiagnosticCode.RESOURCE_NAME_INVALID


class TestPathResourceLoaderPo:
    """gettext catalogs read with Babel."""

    def test_entries(self, tmp_path: Path, german_catalog: Catalog) -> None:
        """msgctxt becomes a scope; fuzzy and untranslated entries are skipped."""
        _write_catalog(tmp_path / "de.po", german_catalog)
        fragment = PathResourceLoader(tmp_path).load("de.po")
        assert fragment == {
            "greeting": "Hallo, %1!",
            "nav": {"home": "Startseite"},
            "apple": "Apfel",
        }

    def test_compile(self, tmp_path: Path, german_catalog: Catalog) -> None:
        """Catalogs splice into dictionaries like JSON fragments."""
        _write_catalog(tmp_path / "de.po", german_catalog)
        compiler = DictionaryCompiler(PathResourceLoader(tmp_path))
        compiled = compiler.compile({"de": {"__load-resource": "de.po", "bye": "Tschüss"}})
        assert compiled.lookup("de", "home", scope="nav") == "Startseite"
        assert compiled.lookup("de", "bye") == "Tschüss"
        assert compiled.lookup("de", "draft") is None

    def test_context_collides_with_msgid(self, tmp_path: Path) -> None:
        """A msgctxt equal to a plain msgid cannot be represented."""
        catalog = Catalog(locale="de")
        catalog.add("nav", "Navigation")
        catalog.add("home", "Startseite", context="nav")
        _write_catalog(tmp_path / "de.po", catalog)
        with pytest.raises(CompileError) as exc_info:
            PathResourceLoader(tmp_path).load("de.po")
        assert _code(exc_info.value) == DiagnosticCode.RESOURCE_MALFORMED

    def test_colon_msgstr_is_text(self, tmp_path: Path) -> None:
        """Translations starting with a colon stay literal text."""
        catalog = Catalog(locale="de")
        catalog.add("warning", ":Achtung")
        catalog.add("quoted", "::x")
        _write_catalog(tmp_path / "de.po", catalog)
        compiler = DictionaryCompiler(PathResourceLoader(tmp_path))
        compiled = compiler.compile({"de": {"__load-resource": "de.po"}})
        assert compiled.lookup("de", "warning") == ":Achtung"
        assert compiled.lookup("de", "quoted") == "::x"

    @pytest.mark.parametrize("msgid", ["Cancel.", ".hidden", "a..b", "and/or/"])
    def test_msgid_with_empty_key_segment(self, tmp_path: Path, msgid: str) -> None:
        """msgids that would collapse onto another key are rejected by name."""
        catalog = Catalog(locale="de")
        catalog.add("Cancel", "Abbrechen")
        catalog.add(msgid, "Text")
        _write_catalog(tmp_path / "de.po", catalog)
        with pytest.raises(CompileError) as exc_info:
            PathResourceLoader(tmp_path).load("de.po")
        assert _code(exc_info.value) == DiagnosticCode.RESOURCE_MALFORMED
        assert exc_info.value.diagnostic is not None
        assert f"'{msgid}'" in exc_info.value.diagnostic.message

    def test_context_with_empty_key_segment(self, tmp_path: Path) -> None:
        """Contexts follow the same key rules as msgids."""
        catalog = Catalog(locale="de")
        catalog.add("home", "Startseite", context="nav.")
        _write_catalog(tmp_path / "de.po", catalog)
        with pytest.raises(CompileError) as exc_info:
            PathResourceLoader(tmp_path).load("de.po")
        assert _code(exc_info.value) == DiagnosticCode.RESOURCE_MALFORMED

    def test_dotted_msgid_is_a_path(self, tmp_path: Path) -> None:
        """Delimiters between non-empty segments address nested keys."""
        catalog = Catalog(locale="de")
        catalog.add("menu.open", "Öffnen")
        _write_catalog(tmp_path / "de.po", catalog)
        compiler = DictionaryCompiler(PathResourceLoader(tmp_path))
        compiled = compiler.compile({"de": {"__load-resource": "de.po"}})
        assert compiled.lookup("de", "open", scope="menu") == "Öffnen"

    def test_invalid_catalog(self, tmp_path: Path) -> None:
        """Syntax errors abort loading."""
        (tmp_path / "bad.po").write_bytes(b'msgid "a"\nmsgstr "b"\nthis is not po\n')
        with pytest.raises(CompileError) as exc_info:
            PathResourceLoader(tmp_path).load("bad.po")
        assert _code(exc_info.value) == DiagnosticCode.RESOURCE_MALFORMED


class TestMappingResourceLoader:
    """In-memory fragments."""

    def test_load(self) -> None:
        """Named fragments are served."""
        assert MappingResourceLoader({"x": {"a": "A"}}).load("x") == {"a": "A"}

    def test_missing(self) -> None:
        """Unknown names are not found."""
        with pytest.raises(CompileError) as exc_info:
            MappingResourceLoader({}).load("x")
        assert _code(exc_info.value) == DiagnosticCode.RESOURCE_NOT_FOUND

    def test_not_a_mapping(self) -> None:
        """Fragments must be mappings."""
        with pytest.raises(CompileError) as exc_info:
            MappingResourceLoader({"x": ["a"]}).load("x")  # type: ignore[dict-item]
        assert _code(exc_info.value) == DiagnosticCode.RESOURCE_MALFORMED


class TestMemoizedLoader:
    """Shared memoizing base."""

    def test_subclass_must_implement_load(self) -> None:
        """A loader without _load cannot be constructed."""

        class Incomplete(_MemoizedLoader):
            pass

        with pytest.raises(TypeError):
            Incomplete()  # type: ignore[abstract]

    def test_loads_once(self) -> None:
        """Repeated loads reuse the first result until the cache is cleared."""
        loader = MappingResourceLoader({"x": {"a": "A"}})
        first = loader.load("x")
        assert loader.load("x") is first
        loader.clear_cache()
        assert loader.load("x") == {"a": "A"}
