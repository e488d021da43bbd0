#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/options/parser.py
"""Configuration options for the furimark parser.

Examples
--------
    >>> options = ParserOptions(export="ast")
    >>> options = options.create_updated(plugins={"note": note_plugin})

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from furimark.constants import (
    DEFAULT_EXPORT,
    DEFAULT_FAIL_ON_PLUGIN_ERRORS,
    DEFAULT_HARD_LINE_BREAKS,
    DEFAULT_IMPLICIT_RUBY,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_SANITIZE_LINK_URLS,
)
from furimark.options.base import BaseParserOptions
from furimark.plugins.registry import Plugin, PluginRegistry


@dataclass(frozen=True)
class ParserOptions(BaseParserOptions):
    """Configuration options for parsing furimark text.

    Parameters
    ----------
    export : {"html", "ast"} or ExportStrategy, default "html"
        Export strategy applied to the finished tree. A strategy instance
        carries its own renderer options.
    plugins : Mapping[str, Plugin] or PluginRegistry, default empty
        Plugins available to ``@[name:args]`` calls. Plain mappings are
        frozen into a ``PluginRegistry``.
    max_nesting_depth : int, default 50
        Maximum depth of nested blockquotes, lists, HTML elements, plugin
        bodies and inline constructs before ``NestingDepthError`` is raised.
    max_input_length : int or None, default None
        Reject inputs longer than this many characters with
        ``InputTooLargeError``. None disables the check.
    fail_on_plugin_errors : bool, default True
        Raise ``PluginError`` when a plugin fails. When False the failure is
        logged and the call is kept as literal text.
    implicit_ruby : bool, default False
        Also treat a run of CJK ideographs directly followed by
        ``《reading》`` as ruby, without the leading ``｜``.
    hard_line_breaks : bool, default True
        Turn two trailing spaces or a trailing backslash on a paragraph
        line into a ``br`` element.
    sanitize_link_urls : bool, default True
        Replace ``javascript:``, ``vbscript:`` and script-bearing ``data:``
        link and image targets with an empty string.

    """

    export: Any = field(
        default=DEFAULT_EXPORT,
        metadata={
            "help": "Export strategy: 'html', 'ast', or an ExportStrategy instance",
            "importance": "core",
        },
    )
    plugins: Union[PluginRegistry, Mapping[str, Plugin]] = field(
        default_factory=PluginRegistry,
        metadata={"help": "Mapping of plugin name to plugin function", "importance": "core"},
    )
    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={
            "help": "Maximum nesting depth of blocks and inlines",
            "type": int,
            "importance": "security",
        },
    )
    max_input_length: Optional[int] = field(
        default=None,
        metadata={
            "help": "Maximum input length in characters (None for no limit)",
            "type": int,
            "importance": "security",
        },
    )
    fail_on_plugin_errors: bool = field(
        default=DEFAULT_FAIL_ON_PLUGIN_ERRORS,
        metadata={
            "help": "Raise PluginError on plugin failures instead of logging and keeping the call text",
            "importance": "advanced",
        },
    )
    implicit_ruby: bool = field(
        default=DEFAULT_IMPLICIT_RUBY,
        metadata={"help": "Recognise 漢字《かんじ》 ruby without the leading ｜", "importance": "core"},
    )
    hard_line_breaks: bool = field(
        default=DEFAULT_HARD_LINE_BREAKS,
        metadata={"help": "Two trailing spaces or a trailing backslash produce <br>", "importance": "advanced"},
    )
    sanitize_link_urls: bool = field(
        default=DEFAULT_SANITIZE_LINK_URLS,
        metadata={
            "help": "Blank out javascript:, vbscript: and script-bearing data: link targets",
            "importance": "security",
        },
    )

    def __post_init__(self) -> None:
        """Validate ranges and freeze the plugin mapping.

        Raises
        ------
        ValueError
            If a numeric bound is not positive or export is an unknown name.
        ValidationError
            If the plugin mapping is invalid.

        """
        if isinstance(self.export, str) and self.export not in ("html", "ast"):
            raise ValueError(f"export must be 'html', 'ast' or an ExportStrategy, got {self.export!r}")

        if self.max_nesting_depth <= 0:
            raise ValueError(f"max_nesting_depth must be positive, got {self.max_nesting_depth}")

        if self.max_input_length is not None and self.max_input_length <= 0:
            raise ValueError(f"max_input_length must be positive or None, got {self.max_input_length}")

        object.__setattr__(self, "plugins", PluginRegistry.coerce(self.plugins))
