#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/ast/__init__.py
"""Abstract Syntax Tree (AST) module for parsed documents.

The module consists of several components:

- nodes: the node model (text leaves, elements, children shapes)
- builder: helpers that fold loose values into canonical nodes
- serialization: conversion to and from the ``[tag, attributes, children]`` shape
- utils: traversal and text extraction

Examples
--------
    >>> from furimark.ast import ChildSequence, Element
    >>> Element("p", None, ChildSequence(("Hello",)))

"""

from __future__ import annotations

from furimark.ast.builder import element, join, mapper, merge_text, normalize_children, splice
from furimark.ast.nodes import ChildSequence, Children, Document, Element, Node, SingleChild, child_nodes, is_text
from furimark.ast.serialization import ast_to_json, json_to_ast, node_to_tuple, tuple_to_node
from furimark.ast.utils import find_all, text_content, walk

__all__ = [
    # Nodes
    "Node",
    "Element",
    "Children",
    "SingleChild",
    "ChildSequence",
    "Document",
    "child_nodes",
    "is_text",
    # Builder
    "element",
    "mapper",
    "join",
    "merge_text",
    "normalize_children",
    "splice",
    # Serialization
    "node_to_tuple",
    "tuple_to_node",
    "ast_to_json",
    "json_to_ast",
    # Utils
    "walk",
    "text_content",
    "find_all",
]
