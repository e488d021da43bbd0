#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/renderers/__init__.py
"""Export strategies for parsed furimark documents.

Two strategies exist and the set is closed:

- HtmlRenderer: render to an HTML string
- AstRenderer: return the node tree, as plain lists or as ``Element`` objects

Examples
--------
    >>> from furimark.renderers import resolve_export_strategy
    >>> resolve_export_strategy("html")
    <furimark.renderers.html.HtmlRenderer object at ...>

"""

from __future__ import annotations

import logging
from typing import Any

from furimark.exceptions import ValidationError
from furimark.renderers.ast import AstRenderer
from furimark.renderers.base import ExportStrategy
from furimark.renderers.html import HtmlRenderer

logger = logging.getLogger(__name__)

EXPORT_STRATEGIES: dict[str, type[ExportStrategy]] = {
    HtmlRenderer.name: HtmlRenderer,
    AstRenderer.name: AstRenderer,
}


def resolve_export_strategy(value: Any) -> ExportStrategy:
    """Turn an ``export`` option value into a strategy instance.

    Parameters
    ----------
    value : {"html", "ast"} or ExportStrategy
        Strategy name, or an already configured ``HtmlRenderer`` or
        ``AstRenderer``

    Returns
    -------
    ExportStrategy
        The strategy to apply to finished documents

    Raises
    ------
    ValidationError
        If the value names no known strategy

    """
    if isinstance(value, (HtmlRenderer, AstRenderer)):
        logger.debug(f"Using configured export strategy {type(value).__name__}")
        return value
    if isinstance(value, str) and value in EXPORT_STRATEGIES:
        logger.debug(f"Using default {value!r} export strategy")
        return EXPORT_STRATEGIES[value]()
    raise ValidationError(
        f"Unknown export strategy {value!r}; expected one of {sorted(EXPORT_STRATEGIES)} or a renderer instance",
        parameter_name="export",
        parameter_value=value,
    )


__all__ = [
    "ExportStrategy",
    "HtmlRenderer",
    "AstRenderer",
    "EXPORT_STRATEGIES",
    "resolve_export_strategy",
]
