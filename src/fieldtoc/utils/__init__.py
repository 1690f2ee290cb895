"""Utility functions for fieldtoc."""

from .text import AnchorRegistry, generate_anchor_id, normalize_label, truncate_label

__all__ = [
    "AnchorRegistry",
    "generate_anchor_id",
    "normalize_label",
    "truncate_label",
]
