#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/api.py
"""The top-level ``parse`` function."""

from __future__ import annotations

import logging
from typing import Any, Optional

from furimark.options.parser import ParserOptions
from furimark.parsers.parser import Parser

logger = logging.getLogger(__name__)


def parse(text: str, options: Optional[ParserOptions] = None, **kwargs: Any) -> Any:
    """Parse furimark text to HTML or an AST.

    Parameters
    ----------
    text : str
        furimark source text
    options : ParserOptions, optional
        Pre-configured parser options
    kwargs : Any
        Individual options that override fields of ``options`` (or of the
        defaults), e.g. ``export="ast"`` or ``plugins={...}``.

    Returns
    -------
    str or list
        HTML string for the ``"html"`` export, node list for ``"ast"``

    Raises
    ------
    TypeError
        If a keyword argument is not a ``ParserOptions`` field
    ResourceExhaustedError
        If the input exceeds the configured size or nesting bounds
    PluginError
        If a plugin fails and ``fail_on_plugin_errors`` is set

    Examples
    --------
        >>> parse("｜漢字《かんじ》")
        '<p><ruby>漢字<rt>かんじ</rt></ruby></p>'
        >>> parse("**a**", export="ast")
        [['p', None, [['strong', None, ['a']]]]]

    """
    options = options or ParserOptions()
    if kwargs:
        options = options.create_updated(**kwargs)
    return Parser(options).parse(text)
