#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/renderers/base.py
"""Base class for export strategies.

An export strategy is the last step of a parse: it turns the finished
node tree into the caller-visible value. The set of strategies is closed
(HTML and AST) and one is selected when a ``Parser`` is constructed.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterable, TypeVar, Union

from furimark.ast.nodes import Document, Element, Node
from furimark.exceptions import InvalidOptionsError, RenderingError
from furimark.options.base import BaseRendererOptions

T = TypeVar("T")


class ExportStrategy(ABC, Generic[T]):
    """Abstract base class for export strategies.

    Subclasses implement ``render_text`` and ``render_element`` for single
    nodes and ``combine`` for a sequence of rendered top-level blocks.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Strategy-specific options

    """

    name: str = ""

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the strategy with optional configuration."""
        self.options = options

    def render(self, nodes: Union[Document, Node, Iterable[Node]]) -> T:
        """Render one node, a document or a sequence of nodes.

        Parameters
        ----------
        nodes : Document, Node or iterable of Node
            Value to export

        Returns
        -------
        T
            Exported value

        Raises
        ------
        RenderingError
            If a value in ``nodes`` is not a node

        """
        if isinstance(nodes, (str, Element)):
            nodes = (nodes,)
        return self.combine([self.render_node(node) for node in nodes])

    def render_node(self, node: Node) -> T:
        """Render a single node."""
        if isinstance(node, str):
            return self.render_text(node)
        if isinstance(node, Element):
            return self.render_element(node)
        raise RenderingError(
            f"{self.__class__.__name__} cannot render a value of type {type(node).__name__}",
            node_type=type(node).__name__,
        )

    @abstractmethod
    def render_text(self, text: str) -> T:
        """Render a text leaf."""

    @abstractmethod
    def render_element(self, node: Element) -> T:
        """Render an element and its children."""

    @abstractmethod
    def combine(self, rendered: list[T]) -> T:
        """Combine rendered top-level nodes into the exported value."""

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this strategy.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )
