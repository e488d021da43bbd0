#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/utils/security.py
"""Security helpers for link targets and code fence info strings."""

from __future__ import annotations

import logging
import re
from urllib.parse import urlparse

from furimark.constants import DANGEROUS_SCHEMES, MAX_LANGUAGE_IDENTIFIER_LENGTH, SAFE_LANGUAGE_IDENTIFIER_PATTERN

logger = logging.getLogger(__name__)


def is_url_scheme_dangerous(url: str) -> bool:
    """Check if a URL uses a dangerous scheme.

    Dangerous schemes include ``javascript:``, ``vbscript:`` and ``data:``
    URLs carrying HTML or script content.

    Examples
    --------
    >>> is_url_scheme_dangerous("https://example.com")
    False
    >>> is_url_scheme_dangerous("javascript:alert('xss')")
    True
    >>> is_url_scheme_dangerous("data:image/png;base64,AAAA")
    False

    """
    if not url or not url.strip():
        return False

    # Browsers ignore embedded whitespace and control characters in schemes
    url_lower = re.sub(r"[\x00-\x20]", "", url).lower()

    for dangerous_scheme in DANGEROUS_SCHEMES:
        if url_lower.startswith(dangerous_scheme):
            return True

    try:
        scheme = urlparse(url_lower).scheme
    except ValueError:
        return True

    return scheme in ("javascript", "vbscript")


def sanitize_url(url: str) -> str:
    """Return ``url`` unchanged, or an empty string for a dangerous scheme."""
    if is_url_scheme_dangerous(url):
        logger.debug(f"Blocked link target with dangerous scheme: {url[:50]}")
        return ""
    return url


def sanitize_language_identifier(language: str) -> str:
    """Validate a code fence language identifier.

    Returns
    -------
    str
        The identifier, or an empty string if it contains characters
        outside ``[A-Za-z0-9_+-#.]`` or is unreasonably long

    Examples
    --------
    >>> sanitize_language_identifier("python")
    'python'
    >>> sanitize_language_identifier('py" onclick="x')
    ''

    """
    if not language:
        return ""

    language = language.strip()

    if len(language) > MAX_LANGUAGE_IDENTIFIER_LENGTH:
        logger.debug(f"Language identifier exceeds maximum length ({MAX_LANGUAGE_IDENTIFIER_LENGTH})")
        return ""

    if not re.match(SAFE_LANGUAGE_IDENTIFIER_PATTERN, language):
        logger.debug(f"Ignoring language identifier with invalid characters: {language[:50]}")
        return ""

    return language
