#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the AST builder helpers."""

import pytest

from furimark.ast import ChildSequence, Element, SingleChild, element, join, mapper, merge_text, normalize_children
from furimark.ast.builder import splice


@pytest.mark.unit
class TestMergeText:
    """Test merging of adjacent text leaves."""

    def test_adjacent_text_merged(self) -> None:
        """Test that consecutive strings become one leaf."""
        assert merge_text(["a", "b", Element("br"), "c", "d"]) == ("ab", Element("br"), "cd")

    def test_empty_text_dropped(self) -> None:
        """Test that empty strings never appear in the result."""
        assert merge_text(["", "a", "", Element("hr"), ""]) == ("a", Element("hr"))

    def test_empty_input(self) -> None:
        """Test merging nothing."""
        assert merge_text([]) == ()


@pytest.mark.unit
class TestNormalizeChildren:
    """Test conversion of loose children values."""

    def test_none_stays_none(self) -> None:
        """Test that None means a void element."""
        assert normalize_children(None) is None

    def test_single_node_becomes_single_child(self) -> None:
        """Test that one node becomes SingleChild."""
        assert normalize_children("x") == SingleChild("x")
        assert normalize_children(Element("br")) == SingleChild(Element("br"))

    def test_sequence_becomes_child_sequence(self) -> None:
        """Test that a list becomes a merged ChildSequence."""
        assert normalize_children(["a", "b"]) == ChildSequence(("ab",))

    def test_tagged_values_pass_through(self) -> None:
        """Test that already tagged children are returned unchanged."""
        seq = ChildSequence(("a",))
        assert normalize_children(seq) is seq

    def test_invalid_item_rejected(self) -> None:
        """Test that non-node items raise TypeError."""
        with pytest.raises(TypeError):
            normalize_children(["a", 3])

    def test_invalid_value_rejected(self) -> None:
        """Test that unsupported values raise TypeError."""
        with pytest.raises(TypeError):
            normalize_children(3.5)


@pytest.mark.unit
class TestMapperAndJoin:
    """Test the helpers handed to plugins."""

    def test_mapper_wraps_children(self) -> None:
        """Test that mapper builds an element around its children."""
        wrap = mapper("span", {"class": "note"})
        assert wrap(["a", Element("br")]) == Element(
            "span", {"class": "note"}, ChildSequence(("a", Element("br")))
        )

    def test_mapper_copies_attributes(self) -> None:
        """Test that later changes to the attribute dict do not leak."""
        attrs = {"class": "a"}
        wrap = mapper("span", attrs)
        attrs["class"] = "b"
        assert wrap("x").get("class") == "a"

    def test_mapper_without_children_builds_void(self) -> None:
        """Test that calling the mapper with no children builds a void element."""
        assert mapper("hr")() == Element("hr")

    def test_element_helper(self) -> None:
        """Test the element convenience constructor."""
        assert element("em", None, "x") == Element("em", None, SingleChild("x"))

    def test_join_all_text(self) -> None:
        """Test that joining only strings returns a string."""
        assert join(["a", "b", ["c", "d"]]) == "abcd"

    def test_join_mixed(self) -> None:
        """Test that joining with elements returns a node tuple."""
        assert join(["a", Element("br"), "b", None]) == ("a", Element("br"), "b")

    def test_join_flattens_children(self) -> None:
        """Test that tagged children containers are flattened."""
        assert join([ChildSequence(("a", Element("hr"))), "b"]) == ("a", Element("hr"), "b")

    def test_join_empty(self) -> None:
        """Test that joining nothing returns an empty string."""
        assert join([]) == ""

    def test_join_rejects_unknown(self) -> None:
        """Test that non-node values raise TypeError."""
        with pytest.raises(TypeError):
            join([object()])


@pytest.mark.unit
class TestSplice:
    """Test normalization of plugin results."""

    def test_string_result(self) -> None:
        """Test that a string becomes a one-item tuple."""
        assert splice("x") == ("x",)

    def test_empty_string_result(self) -> None:
        """Test that an empty string splices nothing."""
        assert splice("") == ()

    def test_sequence_result(self) -> None:
        """Test that a sequence is merged and kept in order."""
        assert splice(["a", "b", Element("hr")]) == ("ab", Element("hr"))

    def test_invalid_result(self) -> None:
        """Test that unsupported results raise TypeError."""
        with pytest.raises(TypeError):
            splice(42)
        with pytest.raises(TypeError):
            splice(["a", 1])
