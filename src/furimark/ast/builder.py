#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/ast/builder.py
"""Helpers for assembling canonical AST nodes.

The block segmenter, the inline scanner and plugins all produce loose
values: lists of nodes, single nodes, runs of adjacent strings. The
functions here fold those values into the canonical node shape so the
export strategies only ever see well-formed elements.

Examples
--------
Build a paragraph from scanner output:

    >>> from furimark.ast.builder import element
    >>> element("p", None, ["Hello ", "world"])
    Element(tag='p', attributes=None, children=ChildSequence(nodes=('Hello world',)))

Build a wrapping element from a plugin:

    >>> wrap = mapper("span", {"class": "note"})
    >>> wrap(["text"])

"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Union

from furimark.ast.nodes import ChildSequence, Children, Element, Node, SingleChild

ChildrenValue = Union[None, Node, Children, Sequence[Node]]
ElementMapper = Callable[[str, Optional[Mapping[str, str]]], Callable[[ChildrenValue], Element]]


def merge_text(nodes: Iterable[Node]) -> tuple[Node, ...]:
    """Merge adjacent text leaves and drop empty ones.

    Parameters
    ----------
    nodes : iterable of Node
        Nodes in document order

    Returns
    -------
    tuple of Node
        Nodes with no two consecutive text leaves

    """
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, str):
            if not node:
                continue
            if merged and isinstance(merged[-1], str):
                merged[-1] = merged[-1] + node
                continue
        merged.append(node)
    return tuple(merged)


def normalize_children(value: ChildrenValue) -> Optional[Children]:
    """Convert a loose children value to the tagged children union.

    A single node becomes ``SingleChild``, a sequence becomes a
    ``ChildSequence`` with adjacent text merged, None stays None.

    Raises
    ------
    TypeError
        If the value is none of the accepted shapes

    """
    if value is None or isinstance(value, (SingleChild, ChildSequence)):
        return value
    if isinstance(value, (str, Element)):
        return SingleChild(value)
    if isinstance(value, (list, tuple)):
        for item in value:
            if not isinstance(item, (str, Element)):
                raise TypeError(f"Child must be a str or Element, got {type(item).__name__}")
        return ChildSequence(merge_text(value))
    raise TypeError(f"Cannot use {type(value).__name__} as element children")


def element(tag: str, attributes: Optional[Mapping[str, str]] = None, children: ChildrenValue = None) -> Element:
    """Create an element, normalizing its children."""
    return Element(tag, attributes, normalize_children(children))


def mapper(tag: str, attributes: Optional[Mapping[str, str]] = None) -> Callable[[ChildrenValue], Element]:
    """Return a function that wraps children in a ``tag`` element.

    This is the element mapper handed to plugins, so they can build
    wrapping elements without depending on the node constructors.

    Parameters
    ----------
    tag : str
        Element name
    attributes : Mapping[str, str] or None, default = None
        Attributes of the element

    Returns
    -------
    callable
        ``children -> Element``

    """
    attrs = dict(attributes) if attributes else None

    def wrap(children: ChildrenValue = None) -> Element:
        return element(tag, attrs, children)

    return wrap


def join(items: Iterable[Any]) -> Union[str, tuple[Node, ...]]:
    """Concatenate nodes and strings into one text-compatible value.

    Nested sequences are flattened. When every item is text the result is
    a single string, otherwise it is a tuple of nodes with adjacent text
    merged, suitable as element children or as a plugin result.

    """
    flat: list[Node] = []
    for item in items:
        if isinstance(item, (str, Element)):
            flat.append(item)
        elif isinstance(item, (SingleChild, ChildSequence)):
            flat.extend(item)
        elif isinstance(item, (list, tuple)):
            joined = join(item)
            if isinstance(joined, str):
                flat.append(joined)
            else:
                flat.extend(joined)
        elif item is None:
            continue
        else:
            raise TypeError(f"Cannot join value of type {type(item).__name__}")

    merged = merge_text(flat)
    if not merged:
        return ""
    if all(isinstance(node, str) for node in merged):
        return "".join(merged)  # type: ignore[arg-type]
    return merged


def splice(value: Any) -> tuple[Node, ...]:
    """Normalize a plugin return value to a tuple of nodes.

    Raises
    ------
    TypeError
        If the value is not a str, an Element, or a sequence of those

    """
    if value is None:
        return ()
    if isinstance(value, (str, Element)):
        return merge_text((value,))
    if isinstance(value, (list, tuple)):
        nodes: list[Node] = []
        for item in value:
            if not isinstance(item, (str, Element)):
                raise TypeError(f"Plugin results may contain str or Element only, got {type(item).__name__}")
            nodes.append(item)
        return merge_text(nodes)
    raise TypeError(f"Unsupported plugin result of type {type(value).__name__}")


__all__ = [
    "ChildrenValue",
    "ElementMapper",
    "merge_text",
    "normalize_children",
    "element",
    "mapper",
    "join",
    "splice",
]
