#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/options/ast.py
"""Configuration options for the AST export strategy."""

from __future__ import annotations

from dataclasses import dataclass, field

from furimark.constants import DEFAULT_AST_SHAPE, AstShape
from furimark.options.base import BaseRendererOptions


@dataclass(frozen=True)
class AstRendererOptions(BaseRendererOptions):
    """Configuration options for the AST export.

    Parameters
    ----------
    shape : {"tuple", "nodes"}, default "tuple"
        ``"tuple"`` returns plain ``[tag, attributes, children]`` lists,
        ``"nodes"`` returns the ``Element`` objects unchanged.

    """

    shape: AstShape = field(
        default=DEFAULT_AST_SHAPE,
        metadata={
            "help": "Output shape: 'tuple' for plain [tag, attrs, children] lists, 'nodes' for Element objects",
            "choices": ["tuple", "nodes"],
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Validate option values."""
        if self.shape not in ("tuple", "nodes"):
            raise ValueError(f"shape must be 'tuple' or 'nodes', got {self.shape!r}")
