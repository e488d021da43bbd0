#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/ast/serialization.py
"""Conversion between AST nodes and their plain-data shape.

The plain-data shape is the one exposed to consumers of the AST export::

    Node = str | [tag, attributes | None, children]

where ``children`` is a single node for ``SingleChild``, a list of nodes
for ``ChildSequence`` and ``None`` for void elements. Because the shape
uses only lists, dicts, strings and None it maps directly onto JSON.

Examples
--------
    >>> from furimark.ast.builder import element
    >>> node_to_tuple(element("p", None, ["Hi"]))
    ['p', None, ['Hi']]
    >>> ast_to_json([element("hr")])
    '[["hr", null, null]]'

"""

from __future__ import annotations

import json
from typing import Any, Iterable, Optional

from furimark.ast.nodes import ChildSequence, Element, Node, SingleChild

TupleNode = Any


def node_to_tuple(node: Node) -> TupleNode:
    """Convert a node to the ``[tag, attributes, children]`` shape.

    Parameters
    ----------
    node : Node
        Text leaf or element

    Returns
    -------
    str or list
        The text itself, or a three item list

    Raises
    ------
    TypeError
        If the value is not a node

    """
    if isinstance(node, str):
        return node
    if not isinstance(node, Element):
        raise TypeError(f"Expected str or Element, got {type(node).__name__}")

    attributes = dict(node.attributes) if node.attributes else None
    children: Any
    if node.children is None:
        children = None
    elif isinstance(node.children, SingleChild):
        children = node_to_tuple(node.children.node)
    else:
        children = [node_to_tuple(child) for child in node.children.nodes]
    return [node.tag, attributes, children]


def tuple_to_node(value: TupleNode) -> Node:
    """Rebuild a node from the ``[tag, attributes, children]`` shape.

    A list in the children position becomes a ``ChildSequence``, any other
    non-null value a ``SingleChild``.

    Raises
    ------
    ValueError
        If the value does not have the expected shape

    """
    if isinstance(value, str):
        return value
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError(f"Expected a string or a [tag, attributes, children] triple, got {value!r}")

    tag, attributes, children = value
    if attributes is not None and not isinstance(attributes, dict):
        raise ValueError(f"Attributes of {tag!r} must be an object or null")

    if children is None:
        return Element(tag, attributes, None)
    if isinstance(children, list):
        return Element(tag, attributes, ChildSequence(tuple(tuple_to_node(child) for child in children)))
    return Element(tag, attributes, SingleChild(tuple_to_node(children)))


def ast_to_json(nodes: Iterable[Node], indent: Optional[int] = None) -> str:
    """Serialize a node sequence to JSON text."""
    return json.dumps([node_to_tuple(node) for node in nodes], indent=indent, ensure_ascii=False)


def json_to_ast(text: str) -> tuple[Node, ...]:
    """Deserialize JSON text produced by :func:`ast_to_json`.

    Raises
    ------
    ValueError
        If the JSON is invalid or does not describe a node list

    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of nodes")
    return tuple(tuple_to_node(item) for item in data)


__all__ = ["node_to_tuple", "tuple_to_node", "ast_to_json", "json_to_ast"]
