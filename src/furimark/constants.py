#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the furimark library.

This module centralizes the grammar tables, magic numbers and default
configuration values used across the parser and the export strategies.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Parser Defaults - Limits and behaviour switches
3. Grammar Tables - Markers, delimiters and recognised HTML tags
4. Security Constants - Link scheme filtering
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

ExportName = Literal["html", "ast"]
VoidTagStyle = Literal["xhtml", "html"]
AstShape = Literal["tuple", "nodes"]

# =============================================================================
# Parser Defaults
# =============================================================================

DEFAULT_EXPORT: ExportName = "html"
DEFAULT_MAX_NESTING_DEPTH = 50
DEFAULT_FAIL_ON_PLUGIN_ERRORS = True
DEFAULT_IMPLICIT_RUBY = False
DEFAULT_HARD_LINE_BREAKS = True
DEFAULT_SANITIZE_LINK_URLS = True

DEFAULT_VOID_TAG_STYLE: VoidTagStyle = "xhtml"
DEFAULT_BLOCK_SEPARATOR = ""
DEFAULT_AST_SHAPE: AstShape = "tuple"

PLUGIN_ENTRY_POINT_GROUP = "furimark.plugins"

# =============================================================================
# Grammar Tables
# =============================================================================

# Indentation unit for plugin bodies and nested list content
INDENT_UNIT = 2

RUBY_OPEN = "｜"
RUBY_READING_OPEN = "《"
RUBY_READING_CLOSE = "》"

# Characters a backslash may escape
ESCAPABLE_CHARS = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

# Elements that never carry a closing tag
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Passthrough elements whose inner text is kept exactly as written
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

# Passthrough elements where only nested tags and entity references are recognised
VERBATIM_ELEMENTS = frozenset({"pre", "code", "kbd", "samp", "textarea"})

# Elements that open an HTML block when they start a line
BLOCK_LEVEL_ELEMENTS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "details",
        "dialog",
        "div",
        "dl",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "script",
        "section",
        "style",
        "summary",
        "table",
        "textarea",
        "ul",
    }
)

# Passthrough elements whose multi-line content is parsed as blocks; other
# elements, such as ``p`` and headings, only ever hold inline content
FLOW_CONTAINER_ELEMENTS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "dd",
        "details",
        "dialog",
        "div",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "header",
        "li",
        "main",
        "nav",
        "section",
        "td",
        "th",
    }
)

# =============================================================================
# Security Constants
# =============================================================================

DANGEROUS_SCHEMES = (
    "javascript:",
    "vbscript:",
    "data:text/html",
    "data:text/javascript",
    "data:application/javascript",
    "data:application/x-javascript",
)

SAFE_LANGUAGE_IDENTIFIER_PATTERN = r"^[a-zA-Z0-9_+\-#.]+$"
MAX_LANGUAGE_IDENTIFIER_LENGTH = 50
