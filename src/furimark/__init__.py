#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/__init__.py
"""furimark - Markdown with Japanese ruby, HTML passthrough and plugins.

furimark converts a compact Markdown dialect into an HTML string or a
node tree. On top of the usual headings, lists, blockquotes, fenced
code, tables, emphasis, links and images it understands:

- ruby annotations, ``｜漢字《かんじ》``
- verbatim HTML, with Markdown still parsed inside it
- ``@[name:args]`` plugin calls, inline or with an indented block body

Examples
--------
    >>> from furimark import parse
    >>> parse("｜漢字《かんじ》")
    '<p><ruby>漢字<rt>かんじ</rt></ruby></p>'

"""

from furimark.api import parse
from furimark.ast import ChildSequence, Document, Element, Node, SingleChild, join, mapper
from furimark.exceptions import (
    FurimarkError,
    InputTooLargeError,
    InvalidOptionsError,
    NestingDepthError,
    PluginError,
    RenderingError,
    ResourceExhaustedError,
    ValidationError,
)
from furimark.options import AstRendererOptions, HtmlRendererOptions, ParserOptions
from furimark.parsers import Parser
from furimark.plugins import PluginDispatcher, PluginRegistry
from furimark.renderers import AstRenderer, ExportStrategy, HtmlRenderer

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "parse",
    "Parser",
    "ParserOptions",
    "HtmlRendererOptions",
    "AstRendererOptions",
    "ExportStrategy",
    "HtmlRenderer",
    "AstRenderer",
    "Node",
    "Element",
    "SingleChild",
    "ChildSequence",
    "Document",
    "PluginRegistry",
    "PluginDispatcher",
    "mapper",
    "join",
    "FurimarkError",
    "ValidationError",
    "InvalidOptionsError",
    "ResourceExhaustedError",
    "NestingDepthError",
    "InputTooLargeError",
    "PluginError",
    "RenderingError",
]
