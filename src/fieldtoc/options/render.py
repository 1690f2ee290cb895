#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for rendering a table of contents to HTML."""

from __future__ import annotations

from dataclasses import dataclass, field

from fieldtoc.constants import (
    DEFAULT_TOC_CSS_CLASS,
    DEFAULT_TOC_ERROR_MESSAGE,
    DEFAULT_TOC_LIST_TAG,
    DEFAULT_TOC_TITLE,
    ListTag,
)
from fieldtoc.exceptions import ValidationError
from fieldtoc.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class TocRendererOptions(CloneFrozenMixin):
    """Configuration options for :class:`~fieldtoc.renderers.html.HtmlTocRenderer`.

    Parameters
    ----------
    title : str, default ""
        Title rendered above the list. Leave empty to omit.
    list_tag : {"ul", "ol"}, default "ul"
        List element used for every nesting level.
    css_class : str, default "table-of-contents"
        Class attribute of the wrapping ``<nav>`` element.
    error_message : str
        Text of the placeholder shown when a ToC cannot be produced.

    """

    title: str = field(
        default=DEFAULT_TOC_TITLE,
        metadata={"help": "Title rendered above the table of contents", "importance": "core"},
    )
    list_tag: ListTag = field(
        default=DEFAULT_TOC_LIST_TAG,
        metadata={"help": "List element for each nesting level", "choices": ["ul", "ol"]},
    )
    css_class: str = field(
        default=DEFAULT_TOC_CSS_CLASS,
        metadata={"help": "CSS class of the wrapping nav element", "importance": "advanced"},
    )
    error_message: str = field(
        default=DEFAULT_TOC_ERROR_MESSAGE,
        metadata={"help": "Placeholder text used when generation fails", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the list tag."""
        if self.list_tag not in ("ul", "ol"):
            raise ValidationError(
                f"list_tag must be 'ul' or 'ol', got {self.list_tag!r}",
                parameter_name="list_tag",
                parameter_value=self.list_tag,
            )
