#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/renderers/ast.py
"""AST export strategy.

The AST export performs no escaping. With the default ``"tuple"`` shape
every node is converted to the plain ``[tag, attributes, children]``
form (see :mod:`furimark.ast.serialization`); with ``"nodes"`` the
``Element`` objects are returned unchanged.

"""

from __future__ import annotations

from typing import Any

from furimark.ast.nodes import Element
from furimark.ast.serialization import node_to_tuple
from furimark.exceptions import RenderingError
from furimark.options.ast import AstRendererOptions
from furimark.renderers.base import ExportStrategy


class AstRenderer(ExportStrategy[Any]):
    """Return the parsed nodes as a list.

    Parameters
    ----------
    options : AstRendererOptions or None, default = None
        AST export configuration

    """

    name = "ast"

    def __init__(self, options: AstRendererOptions | None = None):
        """Initialize the AST renderer with options."""
        self._validate_options_type(options, AstRendererOptions, "ast")
        options = options or AstRendererOptions()
        super().__init__(options)
        self.options: AstRendererOptions = options

    def render_text(self, text: str) -> str:
        """Text leaves are returned as-is."""
        return text

    def render_element(self, node: Element) -> Any:
        """Convert an element to the configured shape."""
        if self.options.shape == "nodes":
            return node
        try:
            return node_to_tuple(node)
        except TypeError as e:
            raise RenderingError(f"Cannot export <{node.tag}>: {e}", node_type=node.tag, original_error=e) from e

    def combine(self, rendered: list[Any]) -> list[Any]:
        """Return the top-level nodes as a list."""
        return rendered
