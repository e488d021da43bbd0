#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/plugins/registry.py
"""Immutable registry of ``@[name:args]`` plugins.

A plugin is any callable with the signature::

    plugin(args: str, content: tuple[Node, ...], mapper, join) -> str | Element | Sequence[str | Element]

``args`` is the raw text after the colon, ``content`` the parsed body of
a block call (empty for inline calls), ``mapper(tag, attributes)`` returns
a ``children -> Element`` function and ``join`` concatenates nodes and
strings into one value.

The registry is fixed at construction and never mutated afterwards, so a
single instance may be shared by any number of parsers.

Examples
--------
    >>> def shout(args, content, mapper, join):
    ...     return mapper("strong", None)([args.upper()])
    >>> registry = PluginRegistry({"shout": shout})
    >>> "shout" in registry
    True

Discover plugins published by installed distributions:

    >>> registry = PluginRegistry.from_entry_points()

"""

from __future__ import annotations

import importlib.metadata
import logging
import re
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, Optional, Protocol, Sequence, Union

from furimark.ast.builder import ElementMapper
from furimark.ast.nodes import Element, Node
from furimark.constants import PLUGIN_ENTRY_POINT_GROUP
from furimark.exceptions import ValidationError

logger = logging.getLogger(__name__)

PLUGIN_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

PluginResult = Union[str, Element, Sequence[Union[str, Element]]]
JoinFn = Callable[[Any], Union[str, tuple[Node, ...]]]


class Plugin(Protocol):
    """Call signature every registered plugin must accept."""

    def __call__(
        self, args: str, content: tuple[Node, ...], mapper: ElementMapper, join: JoinFn
    ) -> PluginResult:  # pragma: no cover - protocol
        ...


class PluginRegistry(Mapping[str, Plugin]):
    """Read-only mapping from plugin name to plugin function.

    Parameters
    ----------
    plugins : Mapping[str, Plugin] or None, default = None
        Plugins keyed by the name used in ``@[name:args]``

    Raises
    ------
    ValidationError
        If a name is not made of letters, digits, ``_`` and ``-``, or a
        value is not callable

    """

    def __init__(self, plugins: Optional[Mapping[str, Plugin]] = None):
        """Validate and freeze the plugin mapping."""
        entries: dict[str, Plugin] = {}
        for name, plugin in (plugins or {}).items():
            if not isinstance(name, str) or not PLUGIN_NAME_PATTERN.match(name):
                raise ValidationError(
                    f"Invalid plugin name {name!r}: use letters, digits, '_' and '-'",
                    parameter_name="plugins",
                    parameter_value=name,
                )
            if not callable(plugin):
                raise ValidationError(
                    f"Plugin {name!r} is not callable",
                    parameter_name="plugins",
                    parameter_value=plugin,
                )
            entries[name] = plugin
        self._plugins: Mapping[str, Plugin] = MappingProxyType(entries)

    @classmethod
    def coerce(cls, value: Union[None, "PluginRegistry", Mapping[str, Plugin]]) -> "PluginRegistry":
        """Return ``value`` as a registry, wrapping plain mappings."""
        if isinstance(value, PluginRegistry):
            return value
        if value is None:
            return cls()
        if not isinstance(value, Mapping):
            raise ValidationError(
                f"Plugins must be a mapping of name to plugin, got {type(value).__name__}",
                parameter_name="plugins",
                parameter_value=value,
            )
        return cls(value)

    @classmethod
    def from_entry_points(cls, group: str = PLUGIN_ENTRY_POINT_GROUP) -> "PluginRegistry":
        """Build a registry from the entry points of installed distributions.

        Each entry point name becomes the plugin name and the loaded object
        the plugin. Entry points that fail to load, or do not load a
        callable, are logged and skipped.

        Parameters
        ----------
        group : str, default "furimark.plugins"
            Entry point group to read

        Returns
        -------
        PluginRegistry
            Registry of the discovered plugins

        """
        discovered: dict[str, Plugin] = {}
        for ep in importlib.metadata.entry_points().select(group=group):
            try:
                plugin = ep.load()
            except Exception as e:
                logger.warning(f"Failed to load plugin entry point '{ep.name}': {e}")
                continue

            if not callable(plugin) or not PLUGIN_NAME_PATTERN.match(ep.name):
                logger.warning(f"Entry point '{ep.name}' is not a usable plugin, skipping")
                continue

            discovered[ep.name] = plugin
            logger.debug(f"Discovered plugin from entry point: {ep.name}")

        logger.info(f"Discovered {len(discovered)} plugin(s) from entry points")
        return cls(discovered)

    def __getitem__(self, name: str) -> Plugin:
        """Return the plugin registered under ``name``."""
        return self._plugins[name]

    def __iter__(self) -> Iterator[str]:
        """Iterate over plugin names."""
        return iter(self._plugins)

    def __len__(self) -> int:
        """Return the number of registered plugins."""
        return len(self._plugins)

    def __repr__(self) -> str:
        """Show the registered names."""
        return f"PluginRegistry({sorted(self._plugins)!r})"
