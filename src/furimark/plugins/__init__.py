#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/plugins/__init__.py
"""Plugin registry and dispatcher for ``@[name:args]`` extensions."""

from __future__ import annotations

from furimark.plugins.dispatcher import PLUGIN_CALL_PATTERN, PluginCall, PluginDispatcher, match_plugin_call
from furimark.plugins.registry import JoinFn, Plugin, PluginRegistry, PluginResult

__all__ = [
    "Plugin",
    "PluginRegistry",
    "PluginResult",
    "JoinFn",
    "PluginCall",
    "PluginDispatcher",
    "PLUGIN_CALL_PATTERN",
    "match_plugin_call",
]
