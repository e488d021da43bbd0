#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/parsers/inline.py
"""Inline scanning of block text.

The scanner walks a text left to right. At each trigger character it
tries the rule registered for that character; the first structurally
valid match consumes its span and scanning resumes after it. Anything
that does not match is literal text, merged into as few text leaves as
possible.

Rules, in priority order:

- ruby ``｜base《reading》`` (and ``base《reading》`` after ideographs
  when ``implicit_ruby`` is on)
- HTML passthrough ``<tag ...>...</tag>``
- inline plugin call ``@[name:args]``
- strong ``**x**`` / ``__x__`` and emphasis ``*x*`` / ``_x_``
- code span ```x```
- link ``[text](url "title")``
- image ``![alt](src "title")``
- backslash escapes, entity references and hard line breaks

"""

from __future__ import annotations

import html
import logging
import re
from typing import Callable, Optional

from furimark.ast.builder import merge_text
from furimark.ast.nodes import ChildSequence, Element, Node, SingleChild
from furimark.constants import ESCAPABLE_CHARS, RUBY_OPEN, RUBY_READING_CLOSE, RUBY_READING_OPEN
from furimark.options.parser import ParserOptions
from furimark.parsers.context import ParseContext, ScanResult
from furimark.parsers.html import HtmlPassthroughDetector
from furimark.plugins.dispatcher import match_plugin_call
from furimark.utils.security import sanitize_url

logger = logging.getLogger(__name__)

_IDEOGRAPHS = "\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff々〆ヶ"
IDEOGRAPH_PATTERN = re.compile(rf"[{_IDEOGRAPHS}]")
IDEOGRAPH_RUN_PATTERN = re.compile(rf"[{_IDEOGRAPHS}]+")
# Ruby bases and readings stop at the next ruby marker or line end
_RUBY_BASE_PATTERN = re.compile(rf"[^\n{RUBY_OPEN}{RUBY_READING_OPEN}]*")
_RUBY_READING_PATTERN = re.compile(rf"[^\n{RUBY_READING_OPEN}{RUBY_READING_CLOSE}]*")

ENTITY_PATTERN = re.compile(r"&(?:#[0-9]{1,7}|#[xX][0-9a-fA-F]{1,6}|[A-Za-z][A-Za-z0-9]{1,31});")
LINK_TITLE_PATTERN = re.compile(r"""[ \t\n]+(?:"([^"]*)"|'([^']*)')""")

_BASE_TRIGGERS = RUBY_OPEN + "<@*_`[!\\&\n"
_MARKUP_TRIGGERS = "<&"

Rule = Callable[[str, int, ParseContext], Optional[ScanResult]]


def make_ruby(base: str, reading: str) -> Element:
    """Build ``<ruby>base<rt>reading</rt></ruby>``."""
    return Element("ruby", None, ChildSequence((base, Element("rt", None, SingleChild(reading)))))


class InlineScanner:
    """Tokenize a run of text into inline nodes.

    Parameters
    ----------
    options : ParserOptions
        Parser configuration
    html_detector : HtmlPassthroughDetector
        Detector used at ``<`` characters

    """

    def __init__(self, options: ParserOptions, html_detector: HtmlPassthroughDetector):
        """Build the trigger table for the configured rules."""
        self.options = options
        self.html_detector = html_detector
        self._rules: dict[str, Rule] = {
            RUBY_OPEN: self._match_ruby,
            "<": self.html_detector.match,
            "@": self._match_plugin,
            "*": self._match_emphasis,
            "_": self._match_emphasis,
            "`": self._match_code_span,
            "[": self._match_link,
            "!": self._match_image,
            "\\": self._match_escape,
            "&": self._match_entity,
            "\n": self._match_line_break,
        }
        self._markup_rules: dict[str, Rule] = {
            "<": self.html_detector.match,
            "&": self._match_entity,
        }

        triggers = re.escape(_BASE_TRIGGERS)
        if options.implicit_ruby:
            triggers += _IDEOGRAPHS
        self._trigger_pattern = re.compile(f"[{triggers}]")
        self._markup_trigger_pattern = re.compile(f"[{re.escape(_MARKUP_TRIGGERS)}]")

    def scan(self, text: str, ctx: ParseContext, markup_only: bool = False) -> tuple[Node, ...]:
        """Scan ``text`` into inline nodes.

        Parameters
        ----------
        text : str
            Inline text, possibly spanning several lines
        ctx : ParseContext
            Recursion context
        markup_only : bool, default False
            Recognise only HTML tags and entity references, as inside
            ``<pre>`` or ``<code>``

        Returns
        -------
        tuple of Node
            Inline nodes with adjacent text merged

        """
        rules = self._markup_rules if markup_only else self._rules
        triggers = self._markup_trigger_pattern if markup_only else self._trigger_pattern

        nodes: list[Node] = []
        pos = 0
        length = len(text)
        while pos < length:
            rule = rules.get(text[pos])
            if rule is None and not markup_only and self.options.implicit_ruby:
                rule = self._match_implicit_ruby if IDEOGRAPH_PATTERN.match(text, pos) else None

            result = rule(text, pos, ctx) if rule is not None else None
            if result is not None:
                if rule == self._match_line_break:
                    _strip_break_marker(nodes)
                nodes.extend(result.nodes)
                pos = result.end
                continue

            # Literal text up to the next trigger character
            following = triggers.search(text, pos + 1)
            end = following.start() if following else length
            nodes.append(text[pos:end])
            pos = end

        return merge_text(nodes)

    # ------------------------------------------------------------------
    # Ruby
    # ------------------------------------------------------------------

    def _match_ruby(self, text: str, pos: int, ctx: ParseContext) -> Optional[ScanResult]:
        open_at = _RUBY_BASE_PATTERN.match(text, pos + 1).end()
        if not text.startswith(RUBY_READING_OPEN, open_at):
            return None

        base = text[pos + 1 : open_at]
        if not base:
            return None

        return self._finish_ruby(text, base, open_at)

    def _match_implicit_ruby(self, text: str, pos: int, ctx: ParseContext) -> Optional[ScanResult]:
        if pos > 0 and IDEOGRAPH_PATTERN.match(text, pos - 1):
            return None
        run = IDEOGRAPH_RUN_PATTERN.match(text, pos)
        if run is None or not text.startswith(RUBY_READING_OPEN, run.end()):
            return None
        return self._finish_ruby(text, run.group(0), run.end())

    @staticmethod
    def _finish_ruby(text: str, base: str, open_at: int) -> Optional[ScanResult]:
        close_at = _RUBY_READING_PATTERN.match(text, open_at + 1).end()
        if not text.startswith(RUBY_READING_CLOSE, close_at):
            logger.debug("Unterminated ruby reading, keeping as text")
            return None

        reading = text[open_at + 1 : close_at]
        if not reading:
            return None
        return ScanResult((make_ruby(base, reading),), close_at + 1)

    # ------------------------------------------------------------------
    # Plugins
    # ------------------------------------------------------------------

    def _match_plugin(self, text: str, pos: int, ctx: ParseContext) -> Optional[ScanResult]:
        call = match_plugin_call(text, pos)
        if call is None:
            return None

        nodes = ctx.dispatcher.dispatch(call.name, call.args)
        if nodes is None:
            return ScanResult((call.source,), call.end)
        return ScanResult(nodes, call.end)

    # ------------------------------------------------------------------
    # Emphasis
    # ------------------------------------------------------------------

    def _match_emphasis(self, text: str, pos: int, ctx: ParseContext) -> Optional[ScanResult]:
        delimiter = text[pos]
        width = 2 if text.startswith(delimiter * 2, pos) else 1

        if delimiter == "_" and pos > 0 and text[pos - 1].isalnum():
            return None

        start = pos + width
        search_from = start
        while True:
            close = _find_closing_delimiter(text, search_from, delimiter, width)
            if close == -1:
                return None

            content = text[start:close]
            after = close + width
            if (
                content
                and not content[0].isspace()
                and not content[-1].isspace()
                and not (delimiter == "_" and after < len(text) and text[after].isalnum())
            ):
                tag = "strong" if width == 2 else "em"
                return ScanResult((Element(tag, None, ChildSequence(ctx.scan_inline(content))),), after)

            search_from = close + 1

    # ------------------------------------------------------------------
    # Code spans
    # ------------------------------------------------------------------

    def _match_code_span(self, text: str, pos: int, ctx: ParseContext) -> Optional[ScanResult]:
        run_end = pos
        while run_end < len(text) and text[run_end] == "`":
            run_end += 1
        width = run_end - pos

        search = run_end
        while True:
            close = text.find("`" * width, search)
            if close == -1:
                return ScanResult((text[pos:run_end],), run_end)

            close_end = close + width
            while close_end < len(text) and text[close_end] == "`":
                close_end += 1
            if close_end - close == width:
                break
            search = close_end

        content = text[run_end:close].replace("\n", " ")
        if len(content) > 2 and content[0] == " " and content[-1] == " " and content.strip():
            content = content[1:-1]
        return ScanResult((Element("code", None, SingleChild(content)),), close + width)

    # ------------------------------------------------------------------
    # Links and images
    # ------------------------------------------------------------------

    def _match_link(self, text: str, pos: int, ctx: ParseContext) -> Optional[ScanResult]:
        parsed = self._parse_link_parts(text, pos)
        if parsed is None:
            return None

        label, url, title, end = parsed
        if self.options.sanitize_link_urls:
            url = sanitize_url(url)

        attributes = {"href": url}
        if title is not None:
            attributes["title"] = title
        return ScanResult((Element("a", attributes, ChildSequence(ctx.scan_inline(label))),), end)

    def _match_image(self, text: str, pos: int, ctx: ParseContext) -> Optional[ScanResult]:
        if not text.startswith("[", pos + 1):
            return None

        parsed = self._parse_link_parts(text, pos + 1)
        if parsed is None:
            return None

        alt, src, title, end = parsed
        if self.options.sanitize_link_urls:
            src = sanitize_url(src)

        attributes = {"src": src, "alt": alt}
        if title is not None:
            attributes["title"] = title
        return ScanResult((Element("img", attributes, None),), end)

    @staticmethod
    def _parse_link_parts(text: str, pos: int) -> Optional[tuple[str, str, Optional[str], int]]:
        """Parse ``[label](destination "title")`` starting at the ``[``.

        Returns
        -------
        tuple or None
            ``(label, destination, title, end)``, or None if malformed

        """
        label_end = _find_matching_bracket(text, pos)
        if label_end == -1 or not text.startswith("(", label_end + 1):
            return None

        cursor = label_end + 2
        while cursor < len(text) and text[cursor] in " \t\n":
            cursor += 1

        if text.startswith("<", cursor):
            dest_end = text.find(">", cursor + 1)
            if dest_end == -1 or "\n" in text[cursor:dest_end]:
                return None
            destination = text[cursor + 1 : dest_end]
            cursor = dest_end + 1
        else:
            dest_start = cursor
            depth = 0
            while cursor < len(text):
                char = text[cursor]
                if char == "\\" and cursor + 1 < len(text):
                    cursor += 2
                    continue
                if char.isspace() or (char == ")" and depth == 0):
                    break
                if char == "(":
                    depth += 1
                elif char == ")":
                    depth -= 1
                cursor += 1
            destination = _unescape_backslashes(text[dest_start:cursor])

        title: Optional[str] = None
        title_match = LINK_TITLE_PATTERN.match(text, cursor)
        if title_match is not None:
            title = title_match.group(1) if title_match.group(1) is not None else title_match.group(2)
            cursor = title_match.end()

        while cursor < len(text) and text[cursor] in " \t\n":
            cursor += 1
        if not text.startswith(")", cursor):
            return None

        return text[pos + 1 : label_end], destination, title, cursor + 1

    # ------------------------------------------------------------------
    # Escapes, entities and line breaks
    # ------------------------------------------------------------------

    @staticmethod
    def _match_escape(text: str, pos: int, ctx: ParseContext) -> Optional[ScanResult]:
        if pos + 1 < len(text) and text[pos + 1] in ESCAPABLE_CHARS:
            return ScanResult((text[pos + 1],), pos + 2)
        return None

    @staticmethod
    def _match_entity(text: str, pos: int, ctx: ParseContext) -> Optional[ScanResult]:
        match = ENTITY_PATTERN.match(text, pos)
        if match is None:
            return None
        decoded = html.unescape(match.group(0))
        if decoded == match.group(0):
            return None
        return ScanResult((decoded,), match.end())

    def _match_line_break(self, text: str, pos: int, ctx: ParseContext) -> Optional[ScanResult]:
        if not self.options.hard_line_breaks:
            return None
        # An odd run of backslashes leaves the last one unescaped
        start = pos
        while start > 0 and text[start - 1] == "\\":
            start -= 1
        backslashes = pos - start
        if text.endswith("  ", 0, pos) or backslashes % 2 == 1:
            return ScanResult((_HARD_BREAK, "\n"), pos + 1)
        return None


_HARD_BREAK = Element("br")


def _strip_break_marker(nodes: list[Node]) -> None:
    """Drop the trailing spaces or backslash that requested a hard break."""
    if not nodes or not isinstance(nodes[-1], str):
        return
    last = nodes[-1]
    if last.endswith("\\"):
        last = last[:-1]
    nodes[-1] = last.rstrip(" ")


def _find_closing_delimiter(text: str, start: int, delimiter: str, width: int) -> int:
    """Find a closing emphasis delimiter on the same line.

    A single delimiter closes on a lone delimiter character or on the
    last character of a run of three or more; a double delimiter closes
    on the last two characters of a run of two or more.

    Returns
    -------
    int
        Offset of the closing delimiter, or -1 if there is none before the
        end of the line

    """
    pos = start
    length = len(text)
    while pos < length:
        char = text[pos]
        if char == "\n":
            return -1
        if char == "\\":
            pos += 2
            continue
        if char == delimiter:
            run_end = pos
            while run_end < length and text[run_end] == delimiter:
                run_end += 1
            run = run_end - pos
            if width == 1 and (run == 1 or run >= 3):
                return run_end - 1
            if width == 2 and run >= 2:
                return run_end - 2
            pos = run_end
            continue
        pos += 1
    return -1


def _find_matching_bracket(text: str, pos: int) -> int:
    """Return the offset of the ``]`` matching the ``[`` at ``pos``, or -1."""
    depth = 0
    index = pos
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return -1


def _unescape_backslashes(text: str) -> str:
    return re.sub(r"\\([!-/:-@\[-`{-~])", r"\1", text)
