#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/toc/walker.py
"""Recursive walk over an entity's fields collecting headings.

For every field item, in the order a reader meets them on the page, the
walker decides once what the item is (see :class:`FieldKind`) and acts on
it:

1. ``TOC_FIELD`` - the dedicated ToC field; always skipped.
2. ``SUB_ENTITY`` - a reference to an embeddable sub-entity while recursion
   is enabled; its fields are walked with the same settings and the same
   accumulators.
3. ``PURE_HEADING`` - a registered heading field; its trimmed text becomes a
   level 0 heading and a heading-marker patch is recorded.
4. ``SCANNABLE`` - a field of a scannable type; its rendered HTML goes through
   the :class:`~fieldtoc.toc.extractor.HeadingExtractor` and a fragment patch
   is recorded when headings were found.
5. ``IGNORED`` - everything else.

There is no cycle guard. Sub-entities are assumed never to reference their
own ancestors.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from fieldtoc.constants import TOC_FIELD_TYPE
from fieldtoc.exceptions import ExtractionError
from fieldtoc.host.base import FieldItem, HostAdapter, validate_field_item
from fieldtoc.options.toc import TocSettings
from fieldtoc.toc.extractor import HeadingExtractor
from fieldtoc.toc.nodes import HeadingEntry
from fieldtoc.toc.patches import FieldKey, FieldPatchStore, FragmentPatch, HeadingMarkerPatch
from fieldtoc.utils.text import AnchorRegistry, generate_anchor_id, normalize_label, truncate_label

logger = logging.getLogger(__name__)


class FieldKind(enum.Enum):
    """What a field item contributes to the table of contents."""

    TOC_FIELD = "toc_field"
    SUB_ENTITY = "sub_entity"
    PURE_HEADING = "pure_heading"
    SCANNABLE = "scannable"
    IGNORED = "ignored"


@dataclass(frozen=True)
class ClassifiedField:
    """A field item together with its resolved kind."""

    kind: FieldKind
    item: FieldItem
    sub_entity: Any = None


@dataclass
class WalkResult:
    """Accumulators shared by every level of one walk."""

    headings: list[HeadingEntry] = field(default_factory=list)
    patches: FieldPatchStore = field(default_factory=FieldPatchStore)
    registry: AnchorRegistry = field(default_factory=AnchorRegistry)


class EntityWalker:
    """Walk an entity (and its sub-entities) collecting headings and patches.

    Parameters
    ----------
    host : HostAdapter
        Source of fields, rendered HTML and sub-entities
    settings : TocSettings
        Generation settings

    """

    def __init__(self, host: HostAdapter, settings: TocSettings):
        self.host = host
        self.settings = settings

    def walk(self, entity: Any, result: Optional[WalkResult] = None) -> WalkResult:
        """Collect the headings of ``entity`` in document order.

        Parameters
        ----------
        entity : Any
            Host entity to walk
        result : WalkResult, optional
            Accumulators to append to; a new one is created when omitted

        Returns
        -------
        WalkResult
            Headings, patches and the anchor registry of the walk

        Raises
        ------
        FieldShapeError
            If the host returns something that is not a valid field item

        """
        if result is None:
            result = WalkResult(registry=AnchorRegistry(self.settings.anchor_separator))
        extractor = HeadingExtractor.from_settings(self.settings, registry=result.registry)
        self._walk_entity(entity, result, extractor)
        return result

    def _walk_entity(self, entity: Any, result: WalkResult, extractor: HeadingExtractor) -> None:
        entity_type = self.host.entity_type(entity)
        entity_id = self.host.entity_id(entity)
        bundle = self.host.bundle(entity)
        logger.debug("Walking %s %s (%s)", entity_type, entity_id, bundle)

        for item in self.ordered_items(entity):
            classified = self.classify(entity_type, bundle, item)
            key = FieldKey(entity_type, entity_id, item.name, item.delta)

            if classified.kind is FieldKind.SUB_ENTITY:
                self._walk_entity(classified.sub_entity, result, extractor)
            elif classified.kind is FieldKind.PURE_HEADING:
                self._process_heading_field(key, item, result)
            elif classified.kind is FieldKind.SCANNABLE:
                self._process_html(key, item, result, extractor)

    def ordered_items(self, entity: Any) -> list[FieldItem]:
        """Field items in display order, falling back to declaration order.

        Names listed by the host's display configuration come first in that
        order and any field missing from it is hidden. Without a display
        configuration every field is kept in the order the host declares
        them. Items of one field are sorted by delta.
        """
        grouped: dict[str, list[FieldItem]] = {}
        for raw in self.host.get_fields(entity):
            item = validate_field_item(raw)
            grouped.setdefault(item.name, []).append(item)

        order = self.host.display_order(entity)
        names = list(grouped) if order is None else [name for name in order if name in grouped]

        items: list[FieldItem] = []
        for name in names:
            items.extend(sorted(grouped[name], key=lambda i: i.delta))
        return items

    def classify(self, entity_type: str, bundle: str, item: FieldItem) -> ClassifiedField:
        """Resolve what ``item`` contributes, in precedence order."""
        if item.field_type == TOC_FIELD_TYPE:
            return ClassifiedField(FieldKind.TOC_FIELD, item)

        if self.settings.recurse_into_sub_entities:
            sub_entity = self.host.resolve_sub_entity(item)
            if sub_entity is not None and self.host.entity_type(sub_entity) in self.settings.sub_entity_types:
                return ClassifiedField(FieldKind.SUB_ENTITY, item, sub_entity)

        if self.settings.is_heading_field(entity_type, bundle, item.name):
            return ClassifiedField(FieldKind.PURE_HEADING, item)

        if item.field_type in self.settings.scannable_field_types:
            return ClassifiedField(FieldKind.SCANNABLE, item)

        return ClassifiedField(FieldKind.IGNORED, item)

    def _process_heading_field(self, key: FieldKey, item: FieldItem, result: WalkResult) -> None:
        label = truncate_label(normalize_label(item.text()), self.settings.heading_label_max_length)
        if not label:
            logger.debug("Skipping empty heading field %s", key)
            return

        anchor_id = result.registry.claim(generate_anchor_id(label, separator=self.settings.anchor_separator))
        result.headings.append(HeadingEntry(label=label, anchor_id=anchor_id, level=0))
        result.patches.set(key, HeadingMarkerPatch(anchor_id))

    def _process_html(self, key: FieldKey, item: FieldItem, result: WalkResult, extractor: HeadingExtractor) -> None:
        html = self.host.render_field(item, self.settings.view_mode)
        if not html:
            return
        if not isinstance(html, str):
            raise ExtractionError(
                f"Host rendered field '{item.name}' as {type(html).__name__}, expected a string",
                field_name=item.name,
            )

        extraction = extractor.extract(html)
        if not extraction.found:
            return

        result.headings.extend(extraction.headings)
        result.patches.set(key, FragmentPatch(extraction.fragment))
        logger.debug("Field %s contributed %d heading(s)", key, len(extraction.headings))


def walk(host: HostAdapter, entity: Any, settings: TocSettings) -> tuple[list[HeadingEntry], FieldPatchStore]:
    """Walk ``entity`` and return its headings and field patches."""
    result = EntityWalker(host, settings).walk(entity)
    return result.headings, result.patches


__all__ = ["ClassifiedField", "EntityWalker", "FieldKind", "WalkResult", "walk"]
