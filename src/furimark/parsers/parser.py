#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/parsers/parser.py
"""The furimark parser.

``Parser`` wires the block segmenter, the inline scanner, the HTML
passthrough detector and the plugin dispatcher together for one set of
options, and applies the export strategy selected by ``options.export``
to every finished document.

A parser holds no per-parse state, so one instance may be reused for any
number of ``parse`` calls.

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from furimark.ast.nodes import Document
from furimark.exceptions import InputTooLargeError, InvalidOptionsError, NestingDepthError
from furimark.options.parser import ParserOptions
from furimark.parsers.block import BlockSegmenter
from furimark.parsers.context import ParseContext
from furimark.parsers.html import HtmlPassthroughDetector
from furimark.parsers.inline import InlineScanner
from furimark.plugins.dispatcher import PluginDispatcher
from furimark.renderers import resolve_export_strategy

logger = logging.getLogger(__name__)


class Parser:
    """Parse furimark text into HTML or an AST.

    Parameters
    ----------
    options : ParserOptions or None, default = None
        Parser configuration. If None, default options are used.

    Raises
    ------
    InvalidOptionsError
        If options is not a ``ParserOptions``
    ValidationError
        If ``options.export`` names no known strategy

    Examples
    --------
        >>> parser = Parser(ParserOptions(export="ast"))
        >>> parser.parse("*hi*")
        [['p', None, [['em', None, ['hi']]]]]

    """

    def __init__(self, options: Optional[ParserOptions] = None):
        """Build the parsing pipeline for the given options."""
        if options is not None and not isinstance(options, ParserOptions):
            raise InvalidOptionsError(
                component_name="Parser",
                expected_type=ParserOptions,
                received_type=type(options),
            )
        self.options = options or ParserOptions()

        self.dispatcher = PluginDispatcher(self.options.plugins, fail_on_errors=self.options.fail_on_plugin_errors)
        self.html_detector = HtmlPassthroughDetector()
        self.inline = InlineScanner(self.options, self.html_detector)
        self.blocks = BlockSegmenter(self.options, self.html_detector)
        self.export = resolve_export_strategy(self.options.export)

        logger.debug(
            f"Parser ready: export={type(self.export).__name__}, plugins={sorted(self.options.plugins)}, "
            f"max_nesting_depth={self.options.max_nesting_depth}"
        )

    def parse(self, text: str) -> Any:
        """Parse ``text`` and apply the export strategy.

        Parameters
        ----------
        text : str
            furimark source text

        Returns
        -------
        str or list
            HTML string or AST value, depending on the export strategy

        Raises
        ------
        ResourceExhaustedError
            If the input exceeds the size or nesting bounds
        PluginError
            If a plugin fails and ``fail_on_plugin_errors`` is set

        """
        document = self.parse_to_document(text)
        try:
            return self.export.render(document)
        except RecursionError as e:
            raise NestingDepthError(None, self.options.max_nesting_depth, original_error=e) from e

    def parse_to_document(self, text: str) -> Document:
        """Segment and build ``text`` without exporting it.

        Parameters
        ----------
        text : str
            furimark source text

        Returns
        -------
        Document
            Top-level blocks in source order

        """
        if not isinstance(text, str):
            raise TypeError(f"Parser input must be str, got {type(text).__name__}")

        limit = self.options.max_input_length
        if limit is not None and len(text) > limit:
            raise InputTooLargeError(len(text), limit)

        ctx = ParseContext(
            options=self.options,
            dispatcher=self.dispatcher,
            inline=self.inline,
            blocks=self.blocks,
        )
        try:
            blocks = self.blocks.segment(text, ctx)
        except RecursionError as e:
            raise NestingDepthError(None, self.options.max_nesting_depth, original_error=e) from e

        logger.debug(f"Parsed {len(text)} characters into {len(blocks)} blocks")
        return Document(blocks)
