#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/parsers/context.py
"""Cursor and recursion context shared by the block and inline parsers.

Block segmentation, inline scanning and HTML passthrough call each other
recursively (a blockquote holds a list holding an HTML element holding
emphasis, ...). Every recursive call goes through ``ParseContext``, which
counts the depth and raises ``NestingDepthError`` once the configured
bound is exceeded. "No match" is signalled by returning None, never by
raising.

"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, NamedTuple, Optional

from furimark.ast.nodes import Node
from furimark.exceptions import NestingDepthError
from furimark.options.parser import ParserOptions
from furimark.plugins.dispatcher import PluginDispatcher

if TYPE_CHECKING:
    from furimark.parsers.block import BlockSegmenter
    from furimark.parsers.inline import InlineScanner


class ScanResult(NamedTuple):
    """A successful match: the nodes produced and the position after the match."""

    nodes: tuple[Node, ...]
    end: int


@dataclass(frozen=True)
class ParseContext:
    """State threaded through one parse call.

    Parameters
    ----------
    options : ParserOptions
        Parser configuration
    dispatcher : PluginDispatcher
        Plugin dispatcher for ``@[name:args]`` calls
    inline : InlineScanner
        Scanner used for inline content
    blocks : BlockSegmenter
        Segmenter used for block content
    depth : int, default 0
        Current nesting depth

    """

    options: ParserOptions
    dispatcher: PluginDispatcher
    inline: InlineScanner
    blocks: BlockSegmenter
    depth: int = 0

    def descend(self) -> ParseContext:
        """Return a context one level deeper.

        Raises
        ------
        NestingDepthError
            If the new depth exceeds ``options.max_nesting_depth``

        """
        depth = self.depth + 1
        if depth > self.options.max_nesting_depth:
            raise NestingDepthError(depth, self.options.max_nesting_depth)
        return replace(self, depth=depth)

    def scan_inline(self, text: str, markup_only: bool = False) -> tuple[Node, ...]:
        """Inline-scan ``text`` one level deeper."""
        return self.inline.scan(text, self.descend(), markup_only=markup_only)

    def parse_blocks(self, text: str) -> tuple[Node, ...]:
        """Block-parse ``text`` one level deeper."""
        return self.blocks.segment(text, self.descend())


class LineCursor:
    """Position over the lines of a block-level text.

    Parameters
    ----------
    lines : list of str
        Lines without their line terminators

    """

    def __init__(self, lines: list[str]):
        """Start at the first line."""
        self.lines = lines
        self.index = 0
        self.text = "\n".join(lines)
        self._ends: list[int] = []
        end = -1
        for line in lines:
            end += len(line) + 1
            self._ends.append(end)

    @property
    def at_end(self) -> bool:
        """Whether every line has been consumed."""
        return self.index >= len(self.lines)

    @property
    def current(self) -> str:
        """The line under the cursor."""
        return self.lines[self.index]

    @property
    def offset(self) -> int:
        """Offset of the unconsumed part of the current line within ``text``."""
        return self._ends[self.index] - len(self.lines[self.index])

    def peek(self, offset: int = 1) -> Optional[str]:
        """Return the line ``offset`` lines ahead, or None past the end."""
        target = self.index + offset
        if 0 <= target < len(self.lines):
            return self.lines[target]
        return None

    def advance(self, count: int = 1) -> None:
        """Move forward ``count`` lines."""
        self.index += count

    def replace_current(self, text: str) -> None:
        """Replace the line under the cursor with the unconsumed rest of it.

        ``text`` must be a suffix of the current line, so that ``offset``
        keeps pointing into the original text.
        """
        self.lines[self.index] = text
