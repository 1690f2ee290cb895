#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/host/memory.py
"""In-memory host adapter backed by plain Python data.

This host is what the CLI uses and what the test-suite drives the engine
with. Entities can be built directly or loaded from JSON/YAML documents of
the form::

    type: node
    id: 1
    bundle: article
    url: /articles/1
    display: [field_title, body, field_sections]   # optional
    fields:
      - name: field_title
        type: string
        values: ["Overview"]
      - name: body
        type: text_long
        values: ["<h2>Intro</h2><p>...</p>"]
      - name: field_sections
        type: entity_reference_revisions
        values:
          - {type: paragraph, id: 10, bundle: text, fields: [...]}

Reference values may be nested entity documents or ids of entities
registered with the host.
"""

from __future__ import annotations

import html
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional, Sequence

import yaml

from fieldtoc.constants import REFERENCE_FIELD_TYPES, TOC_FIELD_TYPE
from fieldtoc.exceptions import FieldShapeError, ValidationError
from fieldtoc.host.base import FieldItem

logger = logging.getLogger(__name__)

# Field types whose stored value is plain text and must be escaped when rendered
PLAIN_TEXT_FIELD_TYPES = frozenset({"string", "string_long"})


@dataclass
class MemoryField:
    """A named, typed field holding one value per delta."""

    name: str
    field_type: str
    values: list[Any] = field(default_factory=list)


@dataclass
class MemoryEntity:
    """A content entity held in memory.

    Parameters
    ----------
    entity_type : str
        Entity type machine name
    entity_id : Any
        Identifier, unique per entity type
    bundle : str, default "default"
        Bundle machine name
    fields : list of MemoryField
        Fields in declaration order
    display : list of str or None
        Display order of visible fields; ``None`` shows every field in
        declaration order
    url : str or None
        Page URL; defaults to ``/<type>/<id>``

    """

    entity_type: str
    entity_id: Any
    bundle: str = "default"
    fields: list[MemoryField] = field(default_factory=list)
    display: Optional[list[str]] = None
    url: Optional[str] = None

    def field_items(self) -> Iterator[FieldItem]:
        for memory_field in self.fields:
            for delta, value in enumerate(memory_field.values):
                yield FieldItem(name=memory_field.name, field_type=memory_field.field_type, delta=delta, value=value)

    def iter_entities(self) -> Iterator[MemoryEntity]:
        """Yield this entity and every nested entity it references."""
        yield self
        for memory_field in self.fields:
            for value in memory_field.values:
                if isinstance(value, MemoryEntity):
                    yield from value.iter_entities()


class MemoryHost:
    """:class:`~fieldtoc.host.base.HostAdapter` over :class:`MemoryEntity` objects.

    Parameters
    ----------
    entities : sequence of MemoryEntity, optional
        Entities to register; nested entities are registered too

    """

    def __init__(self, entities: Sequence[MemoryEntity] = ()):
        self._registry: dict[tuple[str, Any], MemoryEntity] = {}
        for entity in entities:
            self.register(entity)

    def register(self, entity: MemoryEntity) -> MemoryEntity:
        """Make ``entity`` and its nested entities resolvable by id."""
        for nested in entity.iter_entities():
            self._registry[(nested.entity_type, nested.entity_id)] = nested
        return entity

    def load_entity(self, entity_id: Any, entity_type: str = "node") -> Optional[MemoryEntity]:
        """Look up a registered entity by id."""
        return self._registry.get((entity_type, entity_id))

    # HostAdapter protocol

    def entity_type(self, entity: MemoryEntity) -> str:
        return _require_entity(entity).entity_type

    def entity_id(self, entity: MemoryEntity) -> Any:
        return _require_entity(entity).entity_id

    def bundle(self, entity: MemoryEntity) -> str:
        return _require_entity(entity).bundle

    def get_fields(self, entity: MemoryEntity) -> list[FieldItem]:
        return list(_require_entity(entity).field_items())

    def display_order(self, entity: MemoryEntity) -> Optional[list[str]]:
        return _require_entity(entity).display

    def render_field(self, item: FieldItem, view_mode: str) -> str:
        if item.field_type in REFERENCE_FIELD_TYPES or item.field_type == TOC_FIELD_TYPE:
            return ""
        if item.field_type in PLAIN_TEXT_FIELD_TYPES:
            return html.escape(item.text())
        return item.text()

    def resolve_sub_entity(self, item: FieldItem) -> Optional[MemoryEntity]:
        if item.field_type not in REFERENCE_FIELD_TYPES:
            return None
        if isinstance(item.value, MemoryEntity):
            return item.value
        if isinstance(item.value, Mapping):
            return self._registry.get((str(item.value.get("type")), item.value.get("id")))
        return None

    def entity_url(self, entity: MemoryEntity) -> str:
        entity = _require_entity(entity)
        return entity.url or f"/{entity.entity_type}/{entity.entity_id}"

    # Rendering helpers

    def build_render_output(self, entity: MemoryEntity, view_mode: str = "full") -> dict[str, Any]:
        """Default render structure of ``entity``: rendered markup per slot."""
        content: dict[str, list[dict[str, Any]]] = {}
        for item in self.get_fields(entity):
            content.setdefault(item.name, []).append({"markup": self.render_field(item, view_mode)})
        return {"content": content}


def _require_entity(entity: Any) -> MemoryEntity:
    if not isinstance(entity, MemoryEntity):
        raise ValidationError(
            f"MemoryHost only handles MemoryEntity objects, got {type(entity).__name__}",
            parameter_name="entity",
            parameter_value=entity,
        )
    return entity


def entity_from_dict(data: Mapping[str, Any]) -> MemoryEntity:
    """Build a :class:`MemoryEntity` tree from a document mapping.

    Raises
    ------
    FieldShapeError
        If a field definition is malformed
    ValidationError
        If the entity itself lacks a type or id

    """
    if not isinstance(data, Mapping):
        raise ValidationError(f"Entity document must be a mapping, got {type(data).__name__}", parameter_name="entity")

    entity_type = data.get("type")
    entity_id = data.get("id")
    if not entity_type or entity_id is None:
        raise ValidationError("Entity document requires 'type' and 'id'", parameter_name="entity", parameter_value=data)

    fields: list[MemoryField] = []
    for raw_field in data.get("fields") or []:
        if not isinstance(raw_field, Mapping) or not raw_field.get("name") or not raw_field.get("type"):
            raise FieldShapeError(f"Field definition requires 'name' and 'type': {raw_field!r}", field_item=raw_field)

        values = raw_field.get("values", raw_field.get("value"))
        if values is None:
            values = []
        elif not isinstance(values, list):
            values = [values]

        field_type = str(raw_field["type"])
        if field_type in REFERENCE_FIELD_TYPES:
            values = [entity_from_dict(v) if isinstance(v, Mapping) and "fields" in v else v for v in values]
        fields.append(MemoryField(name=str(raw_field["name"]), field_type=field_type, values=values))

    display = data.get("display")
    return MemoryEntity(
        entity_type=str(entity_type),
        entity_id=entity_id,
        bundle=str(data.get("bundle") or "default"),
        fields=fields,
        display=list(display) if display is not None else None,
        url=data.get("url"),
    )


def entity_from_file(path: Path | str) -> MemoryEntity:
    """Load an entity document from a ``.json``, ``.yaml`` or ``.yml`` file.

    Raises
    ------
    ValidationError
        If the file cannot be read or parsed, or has an unsupported extension

    """
    path = Path(path)
    ext = path.suffix.lower()
    try:
        with open(path, "r", encoding="utf-8") as f:
            if ext == ".json":
                data = json.load(f)
            elif ext in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                raise ValidationError(
                    f"Unsupported content file format: {ext}. Use .json or .yaml",
                    parameter_name="input",
                    parameter_value=str(path),
                )
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValidationError(
            f"Invalid content document {path}: {e}", parameter_name="input", parameter_value=str(path), original_error=e
        ) from e
    except OSError as e:
        raise ValidationError(
            f"Cannot read content document {path}: {e}",
            parameter_name="input",
            parameter_value=str(path),
            original_error=e,
        ) from e

    logger.debug("Loaded content document %s", path)
    return entity_from_dict(data)


__all__ = [
    "MemoryEntity",
    "MemoryField",
    "MemoryHost",
    "PLAIN_TEXT_FIELD_TYPES",
    "entity_from_dict",
    "entity_from_file",
]
