#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/toc/builder.py
"""Incremental construction of the ToC forest from a flat heading stream.

Headings arrive in document order as ``(label, anchor_id, level)``. The
builder keeps one insertion bucket per depth: ``_path[d]`` is the list new
level ``d`` headings are appended to, which is always the children list of
the most recently inserted node at depth ``d - 1``. A heading that skips
levels gets placeholder parents so that every child sits exactly one level
below its parent.

Examples
--------
    >>> builder = TocTreeBuilder()
    >>> _ = builder.add_heading("A", "a", 0)
    >>> _ = builder.add_heading("B", "b", 1)
    >>> _ = builder.add_heading("C", "c", 0)
    >>> [(n.label, [c.label for c in n.children]) for n in builder.to_tree()]
    [('A', ['B']), ('C', [])]

"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from fieldtoc.exceptions import ValidationError
from fieldtoc.toc.nodes import HeadingEntry, LinkDescriptor, TocNode

logger = logging.getLogger(__name__)

LinkFactory = Callable[[str], LinkDescriptor]


class TocTreeBuilder:
    """Build a nested ToC forest one heading at a time.

    Parameters
    ----------
    link_factory : callable, optional
        Turns an anchor id into a :class:`LinkDescriptor`. Defaults to
        fragment-only (relative) links.

    """

    def __init__(self, link_factory: Optional[LinkFactory] = None):
        self._link_factory: LinkFactory = link_factory or LinkDescriptor.relative
        self._roots: list[TocNode] = []
        self._path: list[list[TocNode]] = [self._roots]
        self._placeholder_count = 0

    @property
    def placeholder_count(self) -> int:
        """Number of placeholder nodes created so far."""
        return self._placeholder_count

    def add_heading(self, label: str, anchor_id: str, level: int = 0) -> TocNode:
        """Append a heading at ``level`` below the current insertion path.

        Parameters
        ----------
        label : str
            Display text
        anchor_id : str
            Anchor the new node links to
        level : int, default 0
            Zero-based nesting level

        Returns
        -------
        TocNode
            The inserted node

        Raises
        ------
        ValidationError
            If ``level`` is negative

        """
        if level < 0:
            raise ValidationError(
                f"Heading level must be >= 0, got {level}", parameter_name="level", parameter_value=level
            )

        for depth in range(level):
            bucket = self._path[depth]
            if not bucket:
                bucket.append(TocNode.placeholder(depth))
                self._placeholder_count += 1
                logger.debug("Inserted placeholder at depth %d for heading %r", depth, label)
            if len(self._path) == depth + 1:
                self._path.append(bucket[-1].children)

        node = TocNode(
            anchor_id=anchor_id,
            label=label,
            anchor_link=self._link_factory(anchor_id),
            level=level,
        )
        self._path[level].append(node)

        # Deeper buckets now hang off the new node
        del self._path[level + 1 :]
        self._path.append(node.children)
        return node

    def add_entry(self, entry: HeadingEntry) -> TocNode:
        """Append a :class:`HeadingEntry`."""
        return self.add_heading(entry.label, entry.anchor_id, entry.level)

    def extend(self, entries: Iterable[HeadingEntry]) -> None:
        """Append several entries in order."""
        for entry in entries:
            self.add_entry(entry)

    def to_tree(self) -> list[TocNode]:
        """Return the root nodes of the forest built so far."""
        return self._roots


def build_tree(entries: Iterable[HeadingEntry], link_factory: Optional[LinkFactory] = None) -> list[TocNode]:
    """Build a ToC forest from ``entries`` in one call."""
    builder = TocTreeBuilder(link_factory)
    builder.extend(entries)
    return builder.to_tree()


__all__ = ["LinkFactory", "TocTreeBuilder", "build_tree"]
