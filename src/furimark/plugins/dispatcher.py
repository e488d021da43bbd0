#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/plugins/dispatcher.py
"""Resolve ``@[name:args]`` calls against a plugin registry.

Unknown names are not an error: the dispatcher reports "no match" and
the caller keeps the call text as literal text, so documents written for
a richer plugin set still render.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple, Optional

from furimark.ast.builder import join, mapper, splice
from furimark.ast.nodes import Node
from furimark.exceptions import PluginError
from furimark.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)

# @[name] or @[name:args]; args run to the first closing bracket on the line
PLUGIN_CALL_PATTERN = re.compile(r"@\[([A-Za-z0-9_-]+)(?::([^\]\n]*))?\]")


class PluginCall(NamedTuple):
    """A recognised plugin call in the source text."""

    name: str
    args: str
    start: int
    end: int
    source: str


def match_plugin_call(text: str, pos: int = 0) -> Optional[PluginCall]:
    """Match a plugin call starting exactly at ``pos``."""
    match = PLUGIN_CALL_PATTERN.match(text, pos)
    if match is None:
        return None
    return PluginCall(match.group(1), match.group(2) or "", match.start(), match.end(), match.group(0))


class PluginDispatcher:
    """Invoke registered plugins and normalize their results.

    Parameters
    ----------
    registry : PluginRegistry
        Plugins available to documents
    fail_on_errors : bool, default True
        Raise ``PluginError`` when a plugin fails. When False the failure is
        logged and the call degrades to literal text.

    """

    def __init__(self, registry: PluginRegistry, fail_on_errors: bool = True):
        """Store the registry and error policy."""
        self.registry = registry
        self.fail_on_errors = fail_on_errors

    def dispatch(self, name: str, args: str, content: tuple[Node, ...] = ()) -> Optional[tuple[Node, ...]]:
        """Call the plugin registered as ``name``.

        Parameters
        ----------
        name : str
            Plugin name from the call
        args : str
            Raw text after the colon, unparsed
        content : tuple of Node, default = empty tuple
            Parsed body of a block call; empty for inline calls

        Returns
        -------
        tuple of Node or None
            Nodes to splice in place of the call, or None when the call
            must be kept as literal text

        Raises
        ------
        PluginError
            If the plugin raises or returns an unsupported value and
            ``fail_on_errors`` is set

        """
        plugin = self.registry.get(name)
        if plugin is None:
            logger.debug(f"No plugin registered for '{name}', keeping call as text")
            return None

        try:
            result = plugin(args, content, mapper, join)
        except Exception as e:
            return self._handle_failure(name, f"Plugin '{name}' raised {type(e).__name__}: {e}", e)

        try:
            return splice(result)
        except TypeError as e:
            return self._handle_failure(name, f"Plugin '{name}' returned an unsupported value: {e}", e)

    def _handle_failure(self, name: str, message: str, error: Exception) -> None:
        if self.fail_on_errors:
            raise PluginError(message, plugin_name=name, original_error=error) from error
        logger.warning(f"{message}; keeping call as text")
        return None
