#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/parsers/block.py
"""Block segmentation of furimark text.

The segmenter walks the input line by line. At the start of each
unconsumed line it tries the block rules in a fixed order and the first
rule that matches consumes its lines:

1. HTML block (a block-level tag at the start of the line)
2. plugin block (``@[name:args]`` plus a body indented by two spaces)
3. fenced code block (backticks or tildes)
4. ATX heading
5. thematic break
6. blockquote
7. list
8. table
9. paragraph, which also recognises setext headings

Blank lines separate blocks and never produce nodes. Nothing here
raises for malformed input: a construct that does not match falls
through to the next rule and, ultimately, to a paragraph.

"""

from __future__ import annotations

import logging
import re
from typing import Callable, NamedTuple, Optional

from furimark.ast.nodes import ChildSequence, Element, Node, SingleChild
from furimark.constants import BLOCK_LEVEL_ELEMENTS, INDENT_UNIT
from furimark.options.parser import ParserOptions
from furimark.parsers.context import LineCursor, ParseContext
from furimark.parsers.html import HtmlPassthroughDetector, match_open_tag
from furimark.utils.security import sanitize_language_identifier

logger = logging.getLogger(__name__)

PLUGIN_BLOCK_PATTERN = re.compile(r"^@\[([A-Za-z0-9_-]+)(?::([^\]\n]*))?\][ \t]*$")
FENCE_OPEN_PATTERN = re.compile(r"^( {0,3})(`{3,}|~{3,})[ \t]*(.*?)[ \t]*$")
ATX_HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
SETEXT_UNDERLINE_PATTERN = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
THEMATIC_BREAK_PATTERN = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
BLOCKQUOTE_PATTERN = re.compile(r"^ {0,3}> ?(.*)$")
UNORDERED_ITEM_PATTERN = re.compile(r"^([-*+])(?:[ \t]+(.*))?$")
ORDERED_ITEM_PATTERN = re.compile(r"^(\d{1,9})\.(?:[ \t]+(.*))?$")
TABLE_SEPARATOR_CELL_PATTERN = re.compile(r"^:?-+:?$")
UNESCAPED_PIPE_PATTERN = re.compile(r"(?<!\\)\|")

BlockRule = Callable[[LineCursor, ParseContext], Optional[tuple[Node, ...]]]


class ListMarker(NamedTuple):
    """A list item marker at the start of a line."""

    ordered: bool
    number: Optional[int]
    text: str


def match_list_marker(line: str) -> Optional[ListMarker]:
    """Match an unordered (``-``, ``*``, ``+``) or ordered (``1.``) item marker."""
    match = UNORDERED_ITEM_PATTERN.match(line)
    if match is not None:
        return ListMarker(False, None, (match.group(2) or "").strip())
    match = ORDERED_ITEM_PATTERN.match(line)
    if match is not None:
        return ListMarker(True, int(match.group(1)), (match.group(2) or "").strip())
    return None


def split_table_row(line: str) -> list[str]:
    """Split a ``| a | b |`` row into stripped cell texts.

    Escaped pipes (``\\|``) stay inside their cell as a literal ``|``.
    """
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|") and not row.endswith("\\|"):
        row = row[:-1]
    return [cell.strip().replace("\\|", "|") for cell in UNESCAPED_PIPE_PATTERN.split(row)]


def parse_alignments(line: str) -> Optional[list[Optional[str]]]:
    """Read column alignments from a table separator row.

    Returns
    -------
    list or None
        One of ``"left"``, ``"center"``, ``"right"`` or None per column, or
        None if the line is not a separator row

    """
    if "-" not in line or "|" not in line:
        return None

    alignments: list[Optional[str]] = []
    for cell in split_table_row(line):
        if not TABLE_SEPARATOR_CELL_PATTERN.match(cell):
            return None
        if cell.startswith(":") and cell.endswith(":"):
            alignments.append("center")
        elif cell.endswith(":"):
            alignments.append("right")
        elif cell.startswith(":"):
            alignments.append("left")
        else:
            alignments.append(None)
    return alignments


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _expand_leading_tabs(line: str) -> str:
    body = line.lstrip(" \t")
    return line[: len(line) - len(body)].expandtabs(4) + body


def _dedent(lines: list[str], width: int) -> list[str]:
    return [line[min(width, _indent_width(line)) :] for line in lines]


class BlockSegmenter:
    """Divide text into an ordered sequence of block nodes.

    Parameters
    ----------
    options : ParserOptions
        Parser configuration
    html_detector : HtmlPassthroughDetector
        Detector used for HTML blocks

    """

    def __init__(self, options: ParserOptions, html_detector: HtmlPassthroughDetector):
        """Set up the block rules in classification order."""
        self.options = options
        self.html_detector = html_detector
        self._rules: tuple[BlockRule, ...] = (
            self._parse_html_block,
            self._parse_plugin_block,
            self._parse_fenced_code,
            self._parse_atx_heading,
            self._parse_thematic_break,
            self._parse_blockquote,
            self._parse_list,
            self._parse_table,
            self._parse_paragraph,
        )

    def segment(self, text: str, ctx: ParseContext) -> tuple[Node, ...]:
        """Segment ``text`` into block nodes.

        Parameters
        ----------
        text : str
            Block-level text
        ctx : ParseContext
            Recursion context for nested blocks and inline content

        Returns
        -------
        tuple of Node
            Top-level blocks in source order

        """
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        cursor = LineCursor([_expand_leading_tabs(line) for line in text.split("\n")])

        blocks: list[Node] = []
        while not cursor.at_end:
            if not cursor.current.strip():
                cursor.advance()
                continue
            for rule in self._rules:
                nodes = rule(cursor, ctx)
                if nodes is not None:
                    blocks.extend(nodes)
                    break

        return tuple(blocks)

    def starts_block(self, cursor: LineCursor) -> bool:
        """Whether the line under the cursor opens a block other than a paragraph."""
        return self._line_starts_block(cursor.current, cursor.peek())

    def _line_starts_block(self, line: str, following: Optional[str]) -> bool:
        if line.startswith("<"):
            tag = match_open_tag(line, 0)
            if tag is not None and tag.name in BLOCK_LEVEL_ELEMENTS:
                return True
        if PLUGIN_BLOCK_PATTERN.match(line) or self._match_fence_open(line) is not None:
            return True
        if ATX_HEADING_PATTERN.match(line) or THEMATIC_BREAK_PATTERN.match(line):
            return True
        if BLOCKQUOTE_PATTERN.match(line) or match_list_marker(line) is not None:
            return True
        return self._is_table_start(line, following)

    # ------------------------------------------------------------------
    # HTML and plugin blocks
    # ------------------------------------------------------------------

    def _parse_html_block(self, cursor: LineCursor, ctx: ParseContext) -> Optional[tuple[Node, ...]]:
        line = cursor.current
        if not line.startswith("<"):
            return None
        tag = match_open_tag(line, 0)
        if tag is None or tag.name not in BLOCK_LEVEL_ELEMENTS:
            return None

        source, start = cursor.text, cursor.offset
        result = self.html_detector.match(source, start, ctx, allow_blocks=True)
        if result is None:
            return None

        consumed = source.count("\n", start, result.end)
        line_end = source.find("\n", result.end)
        rest = source[result.end : line_end if line_end != -1 else len(source)]

        cursor.advance(consumed)
        if rest.strip():
            cursor.replace_current(rest.lstrip())
        else:
            cursor.advance()
        return result.nodes

    def _parse_plugin_block(self, cursor: LineCursor, ctx: ParseContext) -> Optional[tuple[Node, ...]]:
        match = PLUGIN_BLOCK_PATTERN.match(cursor.current)
        if match is None:
            return None
        call_line = cursor.current.strip()
        cursor.advance()

        body: list[str] = []
        kept = 0
        offset = 0
        while True:
            line = cursor.peek(offset)
            if line is None:
                break
            if line.strip():
                if _indent_width(line) < INDENT_UNIT:
                    break
                body.append(line[INDENT_UNIT:])
                kept = len(body)
            else:
                body.append("")
            offset += 1
        cursor.advance(kept)
        body = body[:kept]

        content = ctx.parse_blocks("\n".join(body)) if body else ()
        nodes = ctx.dispatcher.dispatch(match.group(1), match.group(2) or "", content)
        if nodes is None:
            return (Element("p", None, ChildSequence((call_line,))), *content)
        return nodes

    # ------------------------------------------------------------------
    # Code, headings, breaks
    # ------------------------------------------------------------------

    @staticmethod
    def _match_fence_open(line: str) -> Optional[re.Match]:
        match = FENCE_OPEN_PATTERN.match(line)
        if match is None:
            return None
        if match.group(2)[0] == "`" and "`" in match.group(3):
            return None
        return match

    def _parse_fenced_code(self, cursor: LineCursor, ctx: ParseContext) -> Optional[tuple[Node, ...]]:
        opening = self._match_fence_open(cursor.current)
        if opening is None:
            return None

        indent, fence, info = len(opening.group(1)), opening.group(2), opening.group(3)
        closing = re.compile(rf"^ {{0,3}}{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$")
        cursor.advance()

        body: list[str] = []
        while not cursor.at_end and not closing.match(cursor.current):
            body.append(cursor.current)
            cursor.advance()
        if cursor.at_end:
            logger.debug("Unterminated code fence, consuming to end of input")
        else:
            cursor.advance()

        language = sanitize_language_identifier(info.split()[0]) if info else ""
        attributes = {"class": f"language-{language}"} if language else None
        code = Element("code", attributes, SingleChild("\n".join(_dedent(body, indent))))
        return (Element("pre", None, SingleChild(code)),)

    def _parse_atx_heading(self, cursor: LineCursor, ctx: ParseContext) -> Optional[tuple[Node, ...]]:
        match = ATX_HEADING_PATTERN.match(cursor.current)
        if match is None:
            return None
        cursor.advance()
        level = len(match.group(1))
        return (Element(f"h{level}", None, ChildSequence(ctx.scan_inline(match.group(2)))),)

    def _parse_thematic_break(self, cursor: LineCursor, ctx: ParseContext) -> Optional[tuple[Node, ...]]:
        if not THEMATIC_BREAK_PATTERN.match(cursor.current):
            return None
        cursor.advance()
        return (Element("hr"),)

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _parse_blockquote(self, cursor: LineCursor, ctx: ParseContext) -> Optional[tuple[Node, ...]]:
        inner: list[str] = []
        while not cursor.at_end:
            match = BLOCKQUOTE_PATTERN.match(cursor.current)
            if match is None:
                break
            inner.append(match.group(1))
            cursor.advance()
        if not inner:
            return None
        return (Element("blockquote", None, ChildSequence(ctx.parse_blocks("\n".join(inner)))),)

    def _parse_list(self, cursor: LineCursor, ctx: ParseContext) -> Optional[tuple[Node, ...]]:
        first = match_list_marker(cursor.current)
        if first is None:
            return None

        items: list[Node] = []
        while not cursor.at_end:
            marker = match_list_marker(cursor.current)
            if marker is None or marker.ordered != first.ordered:
                break
            cursor.advance()

            text_lines = [marker.text] if marker.text else []
            nested: list[str] = []
            while not cursor.at_end:
                line = cursor.current
                if not line.strip():
                    break
                if _indent_width(line) >= INDENT_UNIT:
                    following = cursor.peek()
                    if nested or self._line_starts_block(line.lstrip(" "), following and following.lstrip(" ")):
                        nested.append(line)
                    else:
                        # Indented continuation of the item text
                        text_lines.append(line.strip())
                elif self.starts_block(cursor):
                    break
                elif nested:
                    # Lazy continuation of the nested content
                    nested.append(line)
                else:
                    text_lines.append(line.strip())
                cursor.advance()

            children = list(ctx.scan_inline("\n".join(text_lines))) if text_lines else []
            if nested:
                # Nested content is dedented by the indent of its first line
                width = _indent_width(nested[0])
                children.extend(ctx.parse_blocks("\n".join(_dedent(nested, width))))
            items.append(Element("li", None, ChildSequence(tuple(children))))

            if not cursor.at_end and not cursor.current.strip():
                break

        if first.ordered:
            attributes = {"start": str(first.number)} if first.number != 1 else None
            return (Element("ol", attributes, ChildSequence(tuple(items))),)
        return (Element("ul", None, ChildSequence(tuple(items))),)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    @staticmethod
    def _is_table_start(header: str, separator: Optional[str]) -> bool:
        if not header.lstrip().startswith("|") or separator is None:
            return False
        alignments = parse_alignments(separator)
        return alignments is not None and len(alignments) == len(split_table_row(header))

    def _parse_table(self, cursor: LineCursor, ctx: ParseContext) -> Optional[tuple[Node, ...]]:
        if not self._is_table_start(cursor.current, cursor.peek()):
            return None

        header = split_table_row(cursor.current)
        alignments = parse_alignments(cursor.peek())
        cursor.advance(2)

        rows: list[list[str]] = []
        while not cursor.at_end and cursor.current.lstrip().startswith("|"):
            cells = split_table_row(cursor.current)
            cells = (cells + [""] * len(header))[: len(header)]
            rows.append(cells)
            cursor.advance()

        def build_row(cells: list[str], cell_tag: str) -> Element:
            built = []
            for cell, align in zip(cells, alignments):
                attributes = {"align": align} if align else None
                built.append(Element(cell_tag, attributes, ChildSequence(ctx.scan_inline(cell))))
            return Element("tr", None, ChildSequence(tuple(built)))

        sections: list[Node] = [Element("thead", None, ChildSequence((build_row(header, "th"),)))]
        if rows:
            body_rows = tuple(build_row(cells, "td") for cells in rows)
            sections.append(Element("tbody", None, ChildSequence(body_rows)))
        return (Element("table", None, ChildSequence(tuple(sections))),)

    # ------------------------------------------------------------------
    # Paragraphs
    # ------------------------------------------------------------------

    def _parse_paragraph(self, cursor: LineCursor, ctx: ParseContext) -> tuple[Node, ...]:
        lines: list[str] = [cursor.current.lstrip()]
        cursor.advance()

        tag = "p"
        while not cursor.at_end:
            line = cursor.current
            if not line.strip():
                break
            underline = SETEXT_UNDERLINE_PATTERN.match(line)
            if underline is not None:
                cursor.advance()
                tag = "h1" if underline.group(1)[0] == "=" else "h2"
                break
            if self.starts_block(cursor):
                break
            lines.append(line.lstrip())
            cursor.advance()

        return (Element(tag, None, ChildSequence(ctx.scan_inline("\n".join(lines).rstrip()))),)
