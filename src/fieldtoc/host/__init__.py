"""Host framework adapters."""

from .base import FieldItem, HostAdapter, validate_field_item
from .memory import MemoryEntity, MemoryField, MemoryHost, entity_from_dict, entity_from_file

__all__ = [
    "FieldItem",
    "HostAdapter",
    "MemoryEntity",
    "MemoryField",
    "MemoryHost",
    "entity_from_dict",
    "entity_from_file",
    "validate_field_item",
]
