#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/utils/html_utils.py
"""HTML-related utility helpers."""

from __future__ import annotations

from html import escape as _html_escape
from typing import Mapping, Optional


def escape_html(text: str) -> str:
    """Escape ``& < > " '`` for HTML text and attribute values."""
    return _html_escape(text, quote=True)


def format_attributes(attributes: Optional[Mapping[str, str]]) -> str:
    """Serialize attributes as ` key="value"` pairs in insertion order.

    Parameters
    ----------
    attributes : Mapping[str, str] or None
        Attributes to render

    Returns
    -------
    str
        Attribute text with a leading space per attribute, or an empty
        string when there are no attributes

    """
    if not attributes:
        return ""
    return "".join(f' {escape_html(key)}="{escape_html(value)}"' for key, value in attributes.items())
