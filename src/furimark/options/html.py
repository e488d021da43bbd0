#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/options/html.py
"""Configuration options for the HTML export strategy."""

from __future__ import annotations

from dataclasses import dataclass, field

from furimark.constants import DEFAULT_BLOCK_SEPARATOR, DEFAULT_VOID_TAG_STYLE, VoidTagStyle
from furimark.options.base import BaseRendererOptions


@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for rendering nodes to an HTML string.

    Parameters
    ----------
    void_tag_style : {"xhtml", "html"}, default "xhtml"
        How void elements are closed: ``<img ... />`` or ``<img ...>``.
    block_separator : str, default ""
        String placed between top-level blocks. The default emits blocks
        back to back with no added whitespace.

    """

    void_tag_style: VoidTagStyle = field(
        default=DEFAULT_VOID_TAG_STYLE,
        metadata={
            "help": "Void element style: 'xhtml' renders <br />, 'html' renders <br>",
            "choices": ["xhtml", "html"],
            "importance": "core",
        },
    )
    block_separator: str = field(
        default=DEFAULT_BLOCK_SEPARATOR,
        metadata={"help": "String inserted between top-level blocks", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If void_tag_style is not a recognised style.

        """
        if self.void_tag_style not in ("xhtml", "html"):
            raise ValueError(f"void_tag_style must be 'xhtml' or 'html', got {self.void_tag_style!r}")
