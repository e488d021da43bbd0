#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/renderers/html.py
"""HTML export strategy.

Text leaves are escaped, attributes are serialized as ``key="value"``
pairs in insertion order, void elements render as a single tag and every
other element renders as an open tag, its children and a close tag.
Top-level blocks are joined with ``block_separator`` (empty by default),
so no whitespace is added beyond what the source produced.

"""

from __future__ import annotations

import logging

from furimark.ast.nodes import Element
from furimark.constants import VOID_ELEMENTS
from furimark.options.html import HtmlRendererOptions
from furimark.renderers.base import ExportStrategy
from furimark.utils.html_utils import escape_html, format_attributes

logger = logging.getLogger(__name__)


class HtmlRenderer(ExportStrategy[str]):
    """Render nodes to an HTML string.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering configuration

    Examples
    --------
        >>> from furimark.ast import element
        >>> HtmlRenderer().render(element("p", None, ["a < b"]))
        '<p>a &lt; b</p>'

    """

    name = "html"

    def __init__(self, options: HtmlRendererOptions | None = None):
        """Initialize the HTML renderer with options."""
        self._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        super().__init__(options)
        self.options: HtmlRendererOptions = options

    def render_text(self, text: str) -> str:
        """Escape a text leaf."""
        return escape_html(text)

    def render_element(self, node: Element) -> str:
        """Render an element and, recursively, its children."""
        attributes = format_attributes(node.attributes)
        if node.children is None:
            if node.tag in VOID_ELEMENTS:
                closer = " />" if self.options.void_tag_style == "xhtml" else ">"
                return f"<{node.tag}{attributes}{closer}"
            return f"<{node.tag}{attributes}></{node.tag}>"

        inner = "".join(self.render_node(child) for child in node.children)
        return f"<{node.tag}{attributes}>{inner}</{node.tag}>"

    def combine(self, rendered: list[str]) -> str:
        """Join rendered top-level blocks with the configured separator."""
        return self.options.block_separator.join(rendered)
