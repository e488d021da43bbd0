#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
walk : Iterate over every node of a tree, depth first
text_content : Extract the visible text of a node or node sequence
find_all : Collect the elements with a given tag

Examples
--------
    >>> from furimark import Parser
    >>> doc = Parser().parse_to_document("**a *b* c**")
    >>> text_content(doc)
    'a b c'

"""

from __future__ import annotations

from typing import Iterable, Iterator, Union

from furimark.ast.nodes import Document, Element, Node, child_nodes


def _roots(node_or_nodes: Union[Node, Document, Iterable[Node]]) -> Iterable[Node]:
    if isinstance(node_or_nodes, (str, Element)):
        return (node_or_nodes,)
    if isinstance(node_or_nodes, Document):
        return node_or_nodes.children
    return node_or_nodes


def walk(node_or_nodes: Union[Node, Document, Iterable[Node]]) -> Iterator[Node]:
    """Yield every node in pre-order, children in document order.

    The traversal keeps an explicit stack, so arbitrarily deep trees do
    not grow the Python call stack.

    """
    stack: list[Node] = list(reversed(tuple(_roots(node_or_nodes))))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(child_nodes(node)))


def text_content(node_or_nodes: Union[Node, Document, Iterable[Node]]) -> str:
    """Return the concatenated text leaves of a tree.

    Parameters
    ----------
    node_or_nodes : Node, Document or iterable of Node
        Tree or trees to extract text from

    Returns
    -------
    str
        Visible text in document order, without any separator

    """
    return "".join(node for node in walk(node_or_nodes) if isinstance(node, str))


def find_all(node_or_nodes: Union[Node, Document, Iterable[Node]], tag: str) -> list[Element]:
    """Return all elements named ``tag`` in pre-order."""
    return [node for node in walk(node_or_nodes) if isinstance(node, Element) and node.tag == tag]


__all__ = ["walk", "text_content", "find_all"]
