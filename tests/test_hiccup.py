"""Tests for symbolic tokens and the hiccup list notation.

Python 3.13+.
"""

import json

import pytest

from l10nmark.diagnostics import CompileError
from l10nmark.syntax.hiccup import from_hiccup, parse_symbol, parse_tag, to_hiccup
from l10nmark.syntax.nodes import Node, Placeholder, Pointer, arg


class TestParseSymbol:
    """Colon-prefixed strings are symbolic tokens."""

    def test_plain_string(self) -> None:
        """Strings without the prefix are returned unchanged."""
        assert parse_symbol("Hello") == "Hello"

    def test_placeholder(self) -> None:
        """':%N' is a Placeholder."""
        assert parse_symbol(":%1") == Placeholder(0)
        assert parse_symbol(":%13") == arg(13)

    def test_placeholder_out_of_range_is_text(self) -> None:
        """Placeholders above %13 are not symbols."""
        assert parse_symbol(":%14") == ":%14"

    def test_placeholder_zero_rejected(self) -> None:
        """':%0' is a compile error."""
        with pytest.raises(CompileError):
            parse_symbol(":%0")

    def test_pointer(self) -> None:
        """Any other name is a Pointer."""
        pointer = parse_symbol(":en.example/hi")
        assert pointer == Pointer("en.example/hi")
        assert isinstance(pointer, Pointer)
        assert pointer.segments == ("en", "example", "hi")

    def test_colon_delimited_pointer(self) -> None:
        """Colons also delimit pointer segments."""
        pointer = parse_symbol(":en:nav:home")
        assert isinstance(pointer, Pointer)
        assert pointer.segments == ("en", "nav", "home")

    def test_escaped_colon(self) -> None:
        """A doubled prefix is a literal colon string."""
        assert parse_symbol("::smile:") == ":smile:"

    @pytest.mark.parametrize("text", [":", ": spaced", ":-)"])
    def test_non_symbols(self, text: str) -> None:
        """Prefixed text that is not a valid name stays a string."""
        assert parse_symbol(text) == text


class TestParseTag:
    """Tag shorthand for ids and classes."""

    def test_plain(self) -> None:
        """Tags without shorthand have no attributes."""
        assert parse_tag("p") == ("p", {})

    def test_class(self) -> None:
        """A dot introduces a class."""
        assert parse_tag("span.variant-1") == ("span", {"class": "variant-1"})

    def test_id_and_classes(self) -> None:
        """Ids and several classes combine."""
        assert parse_tag("div#main.a.b") == ("div", {"id": "main", "class": "a b"})


class TestFromHiccup:
    """Hiccup lists to markup trees."""

    def test_element_with_attrs(self) -> None:
        """Tag, attribute map and children."""
        tree = from_hiccup([":p", {"class": "lead"}, "Hello ", [":strong", ":%1"], "!"])
        assert tree == Node(
            "p",
            {"class": "lead"},
            ("Hello ", Node("strong", None, (Placeholder(0),)), "!"),
        )

    def test_fragment(self) -> None:
        """Lists without a leading tag are fragments."""
        assert from_hiccup(["Plain ", [":em", "x"]]) == ("Plain ", Node("em", None, ("x",)))

    def test_nested_fragment_spliced(self) -> None:
        """Fragments inside an element are spliced into its children."""
        assert from_hiccup([":p", ["a", ["b"]], "c"]) == Node("p", None, ("a", "b", "c"))

    def test_shorthand_merged_with_attrs(self) -> None:
        """Shorthand attributes combine with the attribute map."""
        tree = from_hiccup([":div.wide", {"id": "m"}])
        assert tree == Node("div", {"class": "wide", "id": "m"}, ())

    def test_attribute_placeholder(self) -> None:
        """Attribute values may be placeholders."""
        tree = from_hiccup([":a", {"href": ":%2"}, "link"])
        assert tree == Node("a", {"href": Placeholder(1)}, ("link",))

    def test_attribute_pointer_like_text_kept(self) -> None:
        """Pointer-like attribute strings stay text."""
        tree = from_hiccup([":abbr", {"title": ":en.full"}])
        assert isinstance(tree, Node)
        assert tree.attrs == {"title": ":en.full"}

    def test_placeholder_first_is_fragment(self) -> None:
        """A leading placeholder does not make a tag."""
        assert from_hiccup([":%1", " items"]) == (Placeholder(0), " items")

    def test_pointer_in_markup_rejected(self) -> None:
        """Pointers are dictionary leaves, never markup content."""
        with pytest.raises(CompileError):
            from_hiccup([":p", ":en.other"])

    def test_unsupported_child(self) -> None:
        """Numbers are not markup content."""
        with pytest.raises(CompileError):
            from_hiccup([":p", 3.5])

    def test_nodes_pass_through(self) -> None:
        """Already-built trees are accepted."""
        node = Node("b", None, ("x",))
        assert from_hiccup(node) is node
        assert from_hiccup([":p", node]) == Node("p", None, (node,))


class TestToHiccup:
    """Markup trees back to hiccup lists."""

    def test_node(self) -> None:
        """Placeholders and tags are written as symbols."""
        assert to_hiccup(Node("p", None, ("Hi ", Placeholder(0)))) == [":p", "Hi ", ":%1"]

    def test_colon_text_escaped(self) -> None:
        """Text starting with a colon is escaped."""
        assert to_hiccup(":)") == "::)"

    def test_json_round_trip(self) -> None:
        """Hiccup output survives JSON and converts back to the same tree."""
        tree = Node("p", {"title": arg(1)}, ("::", Node("em", None, (arg(2),))))
        data = json.loads(json.dumps(to_hiccup(tree)))
        assert from_hiccup(data) == tree

    def test_not_a_tree(self) -> None:
        """Other values are rejected."""
        with pytest.raises(TypeError):
            to_hiccup(42)  # type: ignore[arg-type]
