#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/toc/nodes.py
"""Data classes describing headings and the table of contents tree.

- :class:`HeadingEntry` is one heading found in the content, in document order.
- :class:`LinkDescriptor` says where a ToC entry links to.
- :class:`TocNode` is one node of the nested ToC forest.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from fieldtoc.constants import CURRENT_DOCUMENT


@dataclass(frozen=True)
class HeadingEntry:
    """A heading discovered while walking an entity.

    Parameters
    ----------
    label : str
        Display text of the heading
    anchor_id : str
        Id of the element the ToC links to
    level : int
        Zero-based nesting level (``h2`` -> 0, ``h3`` -> 1, ...)

    """

    label: str
    anchor_id: str
    level: int = 0

    def __post_init__(self) -> None:
        """Validate the level is not negative."""
        if self.level < 0:
            raise ValueError(f"Heading level must be >= 0, got {self.level}")


@dataclass(frozen=True)
class LinkDescriptor:
    """Target of a ToC link.

    Parameters
    ----------
    target_reference : str
        ``"current-document"`` for relative links, otherwise the URL of the
        page that owns the heading
    fragment : str
        Anchor id within the target page

    """

    target_reference: str
    fragment: str

    @property
    def is_relative(self) -> bool:
        """Whether the link resolves against whatever page renders it."""
        return self.target_reference == CURRENT_DOCUMENT

    @property
    def href(self) -> str:
        """Value suitable for an HTML ``href`` attribute."""
        if self.is_relative:
            return f"#{self.fragment}"
        return f"{self.target_reference}#{self.fragment}"

    @classmethod
    def relative(cls, fragment: str) -> LinkDescriptor:
        """Create a fragment-only link."""
        return cls(target_reference=CURRENT_DOCUMENT, fragment=fragment)


@dataclass
class TocNode:
    """Node of the table of contents forest.

    Placeholder nodes bridge level gaps; they have no anchor, no link and an
    empty label.

    Parameters
    ----------
    anchor_id : str or None
        Anchor the node links to, ``None`` for placeholders
    label : str
        Display text
    anchor_link : LinkDescriptor or None
        Link computed when the node was inserted
    level : int
        Depth in the tree; always the parent's level plus one
    children : list of TocNode
        Child nodes in document order

    """

    anchor_id: Optional[str]
    label: str
    anchor_link: Optional[LinkDescriptor]
    level: int
    children: list[TocNode] = field(default_factory=list)

    @classmethod
    def placeholder(cls, level: int) -> TocNode:
        """Create a label-less node used to fill a level gap."""
        return cls(anchor_id=None, label="", anchor_link=None, level=level)

    @property
    def is_placeholder(self) -> bool:
        """Whether this node was synthesized to bridge a level gap."""
        return self.anchor_id is None

    def iter_nodes(self):
        """Yield this node and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def to_dict(self) -> dict[str, Any]:
        """Convert the subtree into JSON-friendly dictionaries."""
        return {
            "anchor_id": self.anchor_id,
            "label": self.label,
            "href": self.anchor_link.href if self.anchor_link else None,
            "level": self.level,
            "children": [child.to_dict() for child in self.children],
        }


__all__ = ["HeadingEntry", "LinkDescriptor", "TocNode"]
