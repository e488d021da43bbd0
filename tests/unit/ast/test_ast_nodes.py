#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the AST node model."""

import dataclasses

import pytest

from furimark.ast import ChildSequence, Document, Element, SingleChild, child_nodes, is_text


@pytest.mark.unit
class TestElementValidation:
    """Test Element construction invariants."""

    def test_empty_tag_rejected(self) -> None:
        """Test that an empty tag name raises ValueError."""
        with pytest.raises(ValueError, match="non-empty"):
            Element("")

    def test_non_string_attribute_value_rejected(self) -> None:
        """Test that attribute values must be strings."""
        with pytest.raises(ValueError, match="strings to strings"):
            Element("ol", {"start": 3})

    def test_empty_attributes_normalized_to_none(self) -> None:
        """Test that an empty attribute mapping becomes None."""
        assert Element("p", {}, ChildSequence(("x",))).attributes is None

    def test_attributes_are_read_only(self) -> None:
        """Test that stored attributes cannot be mutated."""
        source = {"href": "/a"}
        node = Element("a", source, ChildSequence(("x",)))
        source["href"] = "/b"

        assert node.get("href") == "/a"
        with pytest.raises(TypeError):
            node.attributes["href"] = "/c"

    def test_children_must_be_tagged(self) -> None:
        """Test that a bare list is not accepted as children."""
        with pytest.raises(ValueError, match="SingleChild, ChildSequence or None"):
            Element("p", None, ["x"])

    def test_element_is_frozen(self) -> None:
        """Test that element fields cannot be reassigned."""
        node = Element("hr")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.tag = "br"


@pytest.mark.unit
class TestElementBehaviour:
    """Test Element helpers, equality and hashing."""

    def test_void_element(self) -> None:
        """Test that an element without children is void."""
        node = Element("img", {"src": "a.png", "alt": "A"})
        assert node.is_void
        assert node.child_nodes == ()

    def test_single_child_shape_is_preserved(self) -> None:
        """Test that a single child stays distinct from a one-item sequence."""
        single = Element("code", None, SingleChild("x"))
        sequence = Element("code", None, ChildSequence(("x",)))

        assert single.child_nodes == sequence.child_nodes == ("x",)
        assert single != sequence

    def test_get_with_default(self) -> None:
        """Test attribute lookup with a default."""
        node = Element("a", {"href": "/x"}, ChildSequence(("x",)))
        assert node.get("href") == "/x"
        assert node.get("title") is None
        assert node.get("title", "none") == "none"
        assert Element("hr").get("class", "") == ""

    def test_equality_ignores_attribute_mapping_type(self) -> None:
        """Test that attributes compare by content."""
        a = Element("a", {"href": "/x", "title": "t"}, ChildSequence(("x",)))
        b = Element("a", {"title": "t", "href": "/x"}, ChildSequence(("x",)))
        assert a == b
        assert hash(a) == hash(b)

    def test_elements_usable_in_sets(self) -> None:
        """Test that equal elements collapse in a set."""
        nodes = {Element("br"), Element("br"), Element("hr")}
        assert len(nodes) == 2


@pytest.mark.unit
class TestContainers:
    """Test children containers and Document."""

    def test_child_sequence_converts_list_to_tuple(self) -> None:
        """Test that ChildSequence stores a tuple."""
        seq = ChildSequence(["a", Element("br")])
        assert isinstance(seq.nodes, tuple)
        assert len(seq) == 2
        assert list(seq) == ["a", Element("br")]

    def test_single_child_iterates_once(self) -> None:
        """Test that SingleChild behaves as a one-item container."""
        single = SingleChild("x")
        assert list(single) == ["x"]
        assert len(single) == 1

    def test_document_preserves_order(self) -> None:
        """Test that Document keeps block order."""
        blocks = [Element("hr"), "text", Element("br")]
        doc = Document(blocks)
        assert doc.children == tuple(blocks)
        assert list(doc) == blocks
        assert len(doc) == 3

    def test_child_nodes_function(self) -> None:
        """Test child_nodes on text leaves and elements."""
        assert child_nodes("text") == ()
        assert child_nodes(Element("p", None, ChildSequence(("a", "b")))) == ("a", "b")

    def test_is_text(self) -> None:
        """Test text leaf detection."""
        assert is_text("x")
        assert not is_text(Element("hr"))
