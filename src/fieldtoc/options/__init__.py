"""Options for table of contents generation and rendering."""

from .base import CloneFrozenMixin
from .render import TocRendererOptions
from .toc import HeadingFieldRef, TocSettings, multiline_to_list, parse_heading_fields

__all__ = [
    "CloneFrozenMixin",
    "HeadingFieldRef",
    "TocRendererOptions",
    "TocSettings",
    "multiline_to_list",
    "parse_heading_fields",
]
