#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/toc/table.py
"""The result of one generation pass.

A :class:`TableOfContents` owns the heading tree and the field patches of
one top-level entity. The host uses it twice: once to render the ToC itself
(:meth:`TableOfContents.to_render_structure`) and once per rendered entity
to swap patched field slots into its output (:meth:`TableOfContents.apply_patches`).

Render output
-------------
:meth:`~TableOfContents.apply_patches` works on the host's render structure
for one entity, a mapping of the form::

    {
        "content": {
            "body": [{"markup": "<h2>Intro</h2>..."}],   # slots by delta
            "field_title": {0: {"markup": "Overview"}},  # or a delta mapping
        }
    }

Slots are mutated in place; slots without a patch are left untouched.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, MutableMapping, Optional

from fieldtoc.exceptions import ValidationError
from fieldtoc.host.base import HostAdapter
from fieldtoc.options.toc import TocSettings
from fieldtoc.toc.nodes import HeadingEntry, TocNode
from fieldtoc.toc.patches import FieldPatch, FieldPatchStore, FragmentPatch, HeadingMarkerPatch

logger = logging.getLogger(__name__)


@dataclass
class TableOfContents:
    """Generated table of contents for one top-level entity.

    Parameters
    ----------
    entity : Any
        The top-level entity the ToC was generated for
    host : HostAdapter
        Host used to identify entities when applying patches
    settings : TocSettings
        Settings the ToC was generated with
    tree : list of TocNode
        Root nodes of the heading forest
    patches : FieldPatchStore
        Field replacements recorded during the walk
    entries : list of HeadingEntry
        Flat heading stream the tree was built from

    """

    entity: Any
    host: HostAdapter
    settings: TocSettings
    tree: list[TocNode] = field(default_factory=list)
    patches: FieldPatchStore = field(default_factory=FieldPatchStore)
    entries: list[HeadingEntry] = field(default_factory=list)

    @property
    def is_relative(self) -> bool:
        return self.settings.is_relative

    @property
    def is_empty(self) -> bool:
        """Whether no heading was found."""
        return not self.tree

    def iter_nodes(self) -> Iterator[TocNode]:
        """Every node of the forest in document order."""
        for root in self.tree:
            yield from root.iter_nodes()

    def to_render_structure(self) -> dict[str, Any]:
        """Structure handed to the presentation layer."""
        return {"headings": self.tree}

    def apply_patches(self, render_output: MutableMapping[str, Any], entity: Any) -> int:
        """Substitute patched field slots in ``render_output`` for ``entity``.

        Parameters
        ----------
        render_output : MutableMapping
            Host render structure of ``entity`` (see module docstring)
        entity : Any
            The entity ``render_output`` belongs to; may be the top-level
            entity or any sub-entity that was walked

        Returns
        -------
        int
            Number of slots that were changed

        Raises
        ------
        ValidationError
            If ``render_output`` is not a mapping

        """
        if not isinstance(render_output, MutableMapping):
            raise ValidationError(
                f"render_output must be a mapping, got {type(render_output).__name__}",
                parameter_name="render_output",
                parameter_value=render_output,
            )

        entity_patches = self.patches.for_entity(self.host.entity_type(entity), self.host.entity_id(entity))
        content = render_output.get("content")
        if not entity_patches or not isinstance(content, Mapping):
            return 0

        changed = 0
        for (field_name, delta), patch in entity_patches.items():
            slot = _find_slot(content.get(field_name), delta)
            if slot is None:
                continue
            if self._apply_patch(slot, patch):
                changed += 1

        logger.debug("Applied %d patch(es) to %s", changed, self.host.entity_id(entity))
        return changed

    def _apply_patch(self, slot: MutableMapping[str, Any], patch: FieldPatch) -> bool:
        if isinstance(patch, FragmentPatch):
            slot["markup"] = patch.fragment
            return True

        if isinstance(patch, HeadingMarkerPatch):
            display = self.settings.heading_field_display
            if display == "unmodified":
                return False
            if display == "hidden":
                slot["markup"] = ""
                slot["hidden"] = True
                return True
            slot["markup"] = self.anchor_markup(patch.anchor_id) + str(slot.get("markup", ""))
            return True

        return False

    def anchor_markup(self, anchor_id: str) -> str:
        """HTML of an empty anchor marker carrying ``anchor_id``."""
        class_attr = f' class="{html.escape(self.settings.anchor_class)}"' if self.settings.anchor_class else ""
        return f'<a id="{html.escape(anchor_id)}"{class_attr}></a>'

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly summary of the tree and patches."""
        return {
            "entity_type": self.host.entity_type(self.entity),
            "entity_id": self.host.entity_id(self.entity),
            "is_relative": self.is_relative,
            "headings": [node.to_dict() for node in self.tree],
            "patches": [
                {
                    "entity_type": key.entity_type,
                    "entity_id": key.entity_id,
                    "field_name": key.field_name,
                    "delta": key.delta,
                    "kind": "fragment" if isinstance(patch, FragmentPatch) else "heading",
                }
                for key, patch in self.patches.items()
            ],
        }


def _find_slot(slots: Any, delta: int) -> Optional[MutableMapping[str, Any]]:
    if isinstance(slots, Mapping):
        slot = slots.get(delta, slots.get(str(delta)))
    elif isinstance(slots, list) and 0 <= delta < len(slots):
        slot = slots[delta]
    else:
        return None
    return slot if isinstance(slot, MutableMapping) else None


__all__ = ["TableOfContents"]
