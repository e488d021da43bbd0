#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/ast/nodes.py
"""AST node classes for document representation.

A node is either a text leaf or an element. Text leaves are plain ``str``
values. Elements carry a tag name, an optional attribute mapping and
their children, which are modelled as a tagged union so that the
single-child and multiple-children shapes survive export unchanged:

- ``SingleChild`` for constructs with exactly one logical child
  (``code``, ``rt``, ``pre``)
- ``ChildSequence`` for constructs with an ordered run of children
  (paragraphs, list items, emphasis, ...)
- ``None`` for void elements (``img``, ``hr``, ``br``)

Nodes never reference their parent. Every element is owned by exactly one
container and the order of children is significant.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Union


@dataclass(frozen=True)
class SingleChild:
    """Children shape for an element with exactly one logical child.

    Parameters
    ----------
    node : Node
        The only child

    """

    node: Node

    def __iter__(self) -> Iterator[Node]:
        """Iterate over the single child."""
        yield self.node

    def __len__(self) -> int:
        """Return 1."""
        return 1


@dataclass(frozen=True)
class ChildSequence:
    """Children shape for an element with an ordered run of children.

    Parameters
    ----------
    nodes : tuple of Node, default = empty tuple
        Children in document order

    """

    nodes: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        """Freeze the children into a tuple."""
        if not isinstance(self.nodes, tuple):
            object.__setattr__(self, "nodes", tuple(self.nodes))

    def __iter__(self) -> Iterator[Node]:
        """Iterate over the children in order."""
        return iter(self.nodes)

    def __len__(self) -> int:
        """Return the number of children."""
        return len(self.nodes)


Children = Union[SingleChild, ChildSequence]


@dataclass(frozen=True)
class Element:
    """A tagged element with optional attributes and children.

    Parameters
    ----------
    tag : str
        Element name, never empty
    attributes : Mapping[str, str] or None, default = None
        Attribute mapping. An empty mapping is normalized to None.
    children : SingleChild, ChildSequence or None, default = None
        Child nodes; None marks a void element

    Raises
    ------
    ValueError
        If the tag is empty or an attribute key or value is not a string

    Examples
    --------
        >>> Element("a", {"href": "/x"}, ChildSequence(("link",)))
        >>> Element("img", {"src": "a.png", "alt": "A"})

    """

    tag: str
    attributes: Optional[Mapping[str, str]] = None
    children: Optional[Children] = None

    def __post_init__(self) -> None:
        """Validate the tag and freeze the attribute mapping."""
        if not isinstance(self.tag, str) or not self.tag:
            raise ValueError(f"Element tag must be a non-empty string, got {self.tag!r}")

        if self.attributes is not None:
            for key, value in self.attributes.items():
                if not isinstance(key, str) or not isinstance(value, str):
                    raise ValueError(f"Attributes of <{self.tag}> must map strings to strings, got {key!r}={value!r}")
            frozen = MappingProxyType(dict(self.attributes)) if self.attributes else None
            object.__setattr__(self, "attributes", frozen)

        if self.children is not None and not isinstance(self.children, (SingleChild, ChildSequence)):
            raise ValueError(
                f"Children of <{self.tag}> must be SingleChild, ChildSequence or None, "
                f"got {type(self.children).__name__}"
            )

    @property
    def is_void(self) -> bool:
        """Whether the element has no children at all."""
        return self.children is None

    @property
    def child_nodes(self) -> tuple[Node, ...]:
        """Children as a tuple regardless of their shape."""
        return child_nodes(self)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return an attribute value, or ``default`` when it is not set."""
        if self.attributes is None:
            return default
        return self.attributes.get(name, default)

    def __eq__(self, other: Any) -> bool:
        """Compare structurally, treating attribute mappings by content."""
        if not isinstance(other, Element):
            return NotImplemented
        return (
            self.tag == other.tag
            and dict(self.attributes or {}) == dict(other.attributes or {})
            and self.children == other.children
        )

    def __hash__(self) -> int:
        """Hash by tag, attribute items and children."""
        attrs = tuple(sorted((self.attributes or {}).items()))
        return hash((self.tag, attrs, self.children))


Node = Union[str, Element]


@dataclass(frozen=True)
class Document:
    """Root of a parsed text: the ordered top-level block nodes.

    Parameters
    ----------
    children : tuple of Node, default = empty tuple
        Top-level blocks in document order

    """

    children: tuple[Node, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Freeze the children into a tuple."""
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def __iter__(self) -> Iterator[Node]:
        """Iterate over the top-level blocks."""
        return iter(self.children)

    def __len__(self) -> int:
        """Return the number of top-level blocks."""
        return len(self.children)


def is_text(node: Any) -> bool:
    """Return True for a text leaf."""
    return isinstance(node, str)


def child_nodes(node: Node) -> tuple[Node, ...]:
    """Return the children of a node as a tuple.

    Text leaves and void elements have no children.

    Parameters
    ----------
    node : Node
        A text leaf or an element

    Returns
    -------
    tuple of Node
        Children in order

    """
    if isinstance(node, str) or node.children is None:
        return ()
    if isinstance(node.children, SingleChild):
        return (node.children.node,)
    return node.children.nodes
