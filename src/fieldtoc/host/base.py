#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/host/base.py
"""Contract between the ToC engine and the content framework hosting it.

The engine never enumerates entities, renders fields or builds URLs on its
own. It asks a :class:`HostAdapter` for those things. Any object providing
the methods below can be used; :mod:`fieldtoc.host.memory` ships an
in-memory implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from fieldtoc.exceptions import FieldShapeError


@dataclass(frozen=True)
class FieldItem:
    """One value (delta) of one field of an entity.

    Parameters
    ----------
    name : str
        Field machine name
    field_type : str
        Field type machine name (e.g. ``text_long``)
    delta : int
        Position of the value within the field
    value : Any
        Raw stored value; for reference fields, whatever the host needs to
        resolve the referenced entity

    """

    name: str
    field_type: str
    delta: int = 0
    value: Any = None

    def text(self) -> str:
        """Return the raw value as a string (empty for ``None``)."""
        if self.value is None:
            return ""
        return str(self.value)


def validate_field_item(item: Any) -> FieldItem:
    """Check that the host handed over a usable field item.

    Raises
    ------
    FieldShapeError
        If ``item`` is not a :class:`FieldItem` or has an invalid name,
        type, or delta

    """
    if not isinstance(item, FieldItem):
        raise FieldShapeError(f"Expected a FieldItem from the host, got {type(item).__name__}", field_item=item)
    if not isinstance(item.name, str) or not item.name:
        raise FieldShapeError(f"Field item has an invalid name: {item.name!r}", field_item=item)
    if not isinstance(item.field_type, str) or not item.field_type:
        raise FieldShapeError(f"Field '{item.name}' has an invalid field type: {item.field_type!r}", field_item=item)
    if isinstance(item.delta, bool) or not isinstance(item.delta, int) or item.delta < 0:
        raise FieldShapeError(f"Field '{item.name}' has an invalid delta: {item.delta!r}", field_item=item)
    return item


@runtime_checkable
class HostAdapter(Protocol):
    """Services the generator consumes from its host framework."""

    def entity_type(self, entity: Any) -> str:
        """Entity type machine name, e.g. ``node`` or ``paragraph``."""
        ...

    def entity_id(self, entity: Any) -> Any:
        """Stable identifier of the entity (used for patch keys and caching)."""
        ...

    def bundle(self, entity: Any) -> str:
        """Bundle (sub-type) of the entity, e.g. ``article``."""
        ...

    def get_fields(self, entity: Any) -> Sequence[FieldItem]:
        """All field items of the entity in declaration order."""
        ...

    def display_order(self, entity: Any) -> Optional[Sequence[str]]:
        """Field names in configured display order, hidden fields omitted.

        Return ``None`` when no display configuration exists.
        """
        ...

    def render_field(self, item: FieldItem, view_mode: str) -> str:
        """Rendered HTML of a single field item."""
        ...

    def resolve_sub_entity(self, item: FieldItem) -> Any:
        """Entity referenced by ``item``, or ``None`` if it references nothing."""
        ...

    def entity_url(self, entity: Any) -> str:
        """Absolute or site-relative URL of the page showing ``entity``."""
        ...


__all__ = ["FieldItem", "HostAdapter", "validate_field_item"]
