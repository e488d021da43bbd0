#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/options/__init__.py
"""Options classes for the furimark parser and export strategies."""

from furimark.options.ast import AstRendererOptions
from furimark.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from furimark.options.html import HtmlRendererOptions
from furimark.options.parser import ParserOptions

__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "BaseRendererOptions",
    "ParserOptions",
    "HtmlRendererOptions",
    "AstRendererOptions",
]
