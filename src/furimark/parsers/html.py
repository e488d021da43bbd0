#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/parsers/html.py
"""HTML passthrough detection.

At a ``<`` the detector tries to read an opening tag. Void elements and
self-closed tags are consumed on their own. Any other tag is paired with
its nearest matching closing tag, counting nested tags of the same name,
and its inner text is parsed again so Markdown keeps working inside
passthrough HTML:

- ``script`` and ``style`` keep their inner text verbatim
- ``pre``, ``code``, ``kbd``, ``samp`` and ``textarea`` recognise nested
  tags and entity references only
- inner text of a flow container (``div``, ``section``, ``blockquote``,
  ...) spanning several lines is block-parsed, but only when the element
  itself opened an HTML block
- anything else, including ``p`` and ``h1``-``h6``, is inline-scanned

A tag without a matching close is not an error: the detector reports no
match and the caller keeps ``<`` as literal text.

"""

from __future__ import annotations

import html
import logging
import re
from functools import lru_cache
from typing import NamedTuple, Optional

from furimark.ast.nodes import ChildSequence, Element, Node
from furimark.constants import FLOW_CONTAINER_ELEMENTS, RAW_TEXT_ELEMENTS, VERBATIM_ELEMENTS, VOID_ELEMENTS
from furimark.parsers.context import ParseContext, ScanResult

logger = logging.getLogger(__name__)

_ATTRIBUTE = r"""\s+[^\s"'<>/=`]+(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'=<>`]+))?"""

OPEN_TAG_PATTERN = re.compile(rf"<([A-Za-z][A-Za-z0-9-]*)((?:{_ATTRIBUTE})*)\s*(/?)>")
ATTRIBUTE_PATTERN = re.compile(r"""([^\s"'<>/=`]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?""")


class TagMatch(NamedTuple):
    """An opening tag found in the source text."""

    name: str
    attributes: dict[str, str]
    start: int
    end: int
    self_closing: bool


def parse_attributes(text: str) -> dict[str, str]:
    """Parse the attribute part of an opening tag.

    Values are entity-decoded. Attributes without a value map to an
    empty string. The first occurrence of a repeated name wins.

    """
    attributes: dict[str, str] = {}
    for match in ATTRIBUTE_PATTERN.finditer(text):
        name = match.group(1).lower()
        if name in attributes:
            continue
        raw = next((group for group in match.groups()[1:] if group is not None), "")
        attributes[name] = html.unescape(raw)
    return attributes


def match_open_tag(text: str, pos: int) -> Optional[TagMatch]:
    """Match an opening tag starting exactly at ``pos``."""
    match = OPEN_TAG_PATTERN.match(text, pos)
    if match is None:
        return None
    return TagMatch(
        name=match.group(1).lower(),
        attributes=parse_attributes(match.group(2)),
        start=match.start(),
        end=match.end(),
        self_closing=bool(match.group(3)),
    )


def find_closing_tag(text: str, name: str, start: int) -> Optional[tuple[int, int]]:
    """Find the closing tag that pairs with an opening tag ending at ``start``.

    Nested opening tags of the same name increase the depth, so
    ``<div><div></div></div>`` pairs the outer tags.

    Returns
    -------
    tuple of (int, int) or None
        Start and end offsets of the closing tag, or None if unmatched

    """
    if _last_closing_tag(text, name) < start:
        return None

    pattern = re.compile(rf"<(/?){re.escape(name)}(?=[\s/>])((?:{_ATTRIBUTE})*)\s*(/?)>", re.IGNORECASE)
    depth = 1
    for match in pattern.finditer(text, start):
        if match.group(1):
            depth -= 1
            if depth == 0:
                return match.start(), match.end()
        elif not match.group(3):
            depth += 1
    return None


@lru_cache(maxsize=32)
def _last_closing_tag(text: str, name: str) -> int:
    """Offset of the last ``</name`` in ``text``, ignoring case, or -1."""
    last = -1
    for match in re.finditer(rf"</{re.escape(name)}(?=[\s/>])", text, re.IGNORECASE):
        last = match.start()
    return last


class HtmlPassthroughDetector:
    """Recognise well-formed HTML elements and parse their content."""

    def match(self, text: str, pos: int, ctx: ParseContext, allow_blocks: bool = False) -> Optional[ScanResult]:
        """Consume an HTML element starting at ``pos``.

        Parameters
        ----------
        text : str
            Text being scanned
        pos : int
            Offset of a ``<`` character
        ctx : ParseContext
            Recursion context for the element content
        allow_blocks : bool, default False
            Whether multi-line content of a flow container may be
            block-parsed. Only the block segmenter sets this; elements met
            while inline-scanning always get inline content.

        Returns
        -------
        ScanResult or None
            The element and the offset after it, or None when the text at
            ``pos`` is not a well-formed element

        """
        tag = match_open_tag(text, pos)
        if tag is None:
            return None

        attributes = tag.attributes or None
        if tag.name in VOID_ELEMENTS or tag.self_closing:
            return ScanResult((Element(tag.name, attributes, None),), tag.end)

        closing = find_closing_tag(text, tag.name, tag.end)
        if closing is None:
            logger.debug(f"No closing tag for <{tag.name}> at offset {pos}, keeping as text")
            return None

        close_start, close_end = closing
        children = self._parse_inner(tag.name, text[tag.end : close_start], ctx, allow_blocks)
        return ScanResult((Element(tag.name, attributes, ChildSequence(children)),), close_end)

    @staticmethod
    def _parse_inner(name: str, inner: str, ctx: ParseContext, allow_blocks: bool) -> tuple[Node, ...]:
        if name in RAW_TEXT_ELEMENTS:
            return (inner,) if inner else ()
        if name in VERBATIM_ELEMENTS:
            return ctx.scan_inline(inner, markup_only=True)
        if allow_blocks and name in FLOW_CONTAINER_ELEMENTS and "\n" in inner:
            return ctx.parse_blocks(inner)
        return ctx.scan_inline(inner)
