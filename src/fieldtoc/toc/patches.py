#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/toc/patches.py
"""Replacement content recorded for field slots during a generation pass.

When the walker extracts headings from a field, the rendered output of that
field has to be swapped for the anchor-augmented version, otherwise the ToC
links would point nowhere. The store keeps one patch per
``(entity_type, entity_id, field_name, delta)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, NamedTuple, Union

logger = logging.getLogger(__name__)


class FieldKey(NamedTuple):
    """Address of one field slot of one entity."""

    entity_type: str
    entity_id: Any
    field_name: str
    delta: int


@dataclass(frozen=True)
class FragmentPatch:
    """Anchor-augmented HTML replacing a field's rendered output."""

    fragment: str


@dataclass(frozen=True)
class HeadingMarkerPatch:
    """Marks a field consumed as a pure heading; holds its anchor id."""

    anchor_id: str


FieldPatch = Union[FragmentPatch, HeadingMarkerPatch]


class FieldPatchStore:
    """Patches produced by one generation pass.

    Writes are last-writer-wins; the walker visits each field slot once, so
    an overwrite indicates the host yielded the same slot twice.
    """

    def __init__(self) -> None:
        self._patches: dict[FieldKey, FieldPatch] = {}

    def set(self, key: FieldKey, patch: FieldPatch) -> None:
        """Record ``patch`` for ``key``, replacing any earlier patch."""
        if key in self._patches:
            logger.debug("Overwriting patch for %s", key)
        self._patches[key] = patch

    def get(self, key: FieldKey) -> FieldPatch | None:
        return self._patches.get(key)

    def for_entity(self, entity_type: str, entity_id: Any) -> dict[tuple[str, int], FieldPatch]:
        """Patches of one entity keyed by ``(field_name, delta)``."""
        return {
            (key.field_name, key.delta): patch
            for key, patch in self._patches.items()
            if key.entity_type == entity_type and key.entity_id == entity_id
        }

    def items(self) -> Iterator[tuple[FieldKey, FieldPatch]]:
        return iter(self._patches.items())

    def __contains__(self, key: object) -> bool:
        return key in self._patches

    def __iter__(self) -> Iterator[FieldKey]:
        return iter(self._patches)

    def __len__(self) -> int:
        return len(self._patches)


__all__ = ["FieldKey", "FieldPatch", "FieldPatchStore", "FragmentPatch", "HeadingMarkerPatch"]
