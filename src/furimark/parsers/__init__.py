#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/parsers/__init__.py
"""Parsing engine: block segmentation, inline scanning and HTML passthrough.

- Parser: the configured pipeline applied by ``furimark.parse``
- BlockSegmenter: divides text into block nodes
- InlineScanner: tokenizes block text into inline nodes
- HtmlPassthroughDetector: recognises embedded HTML elements
- ParseContext: depth-bounded recursion between the three

"""

from furimark.parsers.block import BlockSegmenter
from furimark.parsers.context import LineCursor, ParseContext, ScanResult
from furimark.parsers.html import HtmlPassthroughDetector
from furimark.parsers.inline import InlineScanner
from furimark.parsers.parser import Parser

__all__ = [
    "Parser",
    "BlockSegmenter",
    "InlineScanner",
    "HtmlPassthroughDetector",
    "ParseContext",
    "LineCursor",
    "ScanResult",
]
