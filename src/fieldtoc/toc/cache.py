#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/toc/cache.py
"""Per-run memo of generated tables of contents.

The cache key is the top-level entity id and nothing else: a cached ToC is
returned even if it was generated with different settings. Create one cache
per processing run (for example per request) and drop it afterwards; it is
not safe to share between threads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, Optional

if TYPE_CHECKING:
    from fieldtoc.toc.table import TableOfContents


class GenerationCache:
    """Map of top-level entity id to its generated :class:`TableOfContents`."""

    def __init__(self) -> None:
        self._entries: dict[Any, TableOfContents] = {}

    def lookup(self, entity_id: Any) -> Optional[TableOfContents]:
        """Return the cached ToC for ``entity_id`` without generating one."""
        return self._entries.get(entity_id)

    def store(self, entity_id: Any, toc: TableOfContents) -> None:
        self._entries[entity_id] = toc

    def clear(self) -> None:
        """Drop every entry (and with them their patch stores)."""
        self._entries.clear()

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entries

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["GenerationCache"]
