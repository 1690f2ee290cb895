#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for table of contents generation.

This module defines :class:`TocSettings`, the single settings object handed
to the generator and threaded unchanged through the entity walk, together
with the helpers used to parse heading field references.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from fieldtoc.constants import (
    DEFAULT_ANCHOR_CLASS,
    DEFAULT_ANCHOR_SEPARATOR,
    DEFAULT_HEADING_FIELD_DISPLAY,
    DEFAULT_HEADING_LABEL_MAX_LENGTH,
    DEFAULT_HTML_PARSER,
    DEFAULT_IS_RELATIVE,
    DEFAULT_MAX_HEADING_LEVEL,
    DEFAULT_RECURSE_INTO_SUB_ENTITIES,
    DEFAULT_SCANNABLE_FIELD_TYPES,
    DEFAULT_SUB_ENTITY_TYPES,
    DEFAULT_SUPPORTED_ENTITY_TYPES,
    DEFAULT_VIEW_MODE,
    HEADING_FIELD_DISPLAY_MODES,
    HTML_PARSERS,
    MAX_HEADING_TAG_LEVEL,
    MIN_HEADING_TAG_LEVEL,
    HeadingFieldDisplay,
    HtmlParser,
)
from fieldtoc.exceptions import ValidationError
from fieldtoc.options.base import CloneFrozenMixin

_LINE_SPLIT_RE = re.compile(r"(?:\r\n|\r|\n)+")


class HeadingFieldRef(NamedTuple):
    """Reference to a field whose whole value is a heading."""

    entity_type: str
    bundle: str
    field_name: str

    @classmethod
    def parse(cls, value: Any) -> HeadingFieldRef:
        """Parse ``"type:bundle:field"`` (or a 3-sequence) into a reference.

        Raises
        ------
        ValidationError
            If the value does not have exactly three non-empty parts

        """
        if isinstance(value, str):
            parts = [part.strip() for part in value.split(":")]
        elif isinstance(value, (tuple, list)):
            parts = [str(part).strip() for part in value]
        else:
            raise ValidationError(
                f"Heading field must be a 'type:bundle:field' string, got {type(value).__name__}",
                parameter_name="heading_fields",
                parameter_value=value,
            )

        if len(parts) != 3 or not all(parts):
            raise ValidationError(
                f"Heading field reference must look like 'type:bundle:field', got {value!r}",
                parameter_name="heading_fields",
                parameter_value=value,
            )
        return cls(*parts)

    def __str__(self) -> str:
        return f"{self.entity_type}:{self.bundle}:{self.field_name}"


def multiline_to_list(text: str) -> list[str]:
    """Split a multiline settings value into trimmed, non-empty lines."""
    return [line.strip() for line in _LINE_SPLIT_RE.split(text) if line.strip()]


def parse_heading_fields(value: Any) -> frozenset[HeadingFieldRef]:
    """Normalize heading field settings into a set of references.

    Accepts a multiline string (one reference per line), an iterable of
    ``"type:bundle:field"`` strings, or an iterable of 3-tuples.
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        value = multiline_to_list(value)
    return frozenset(HeadingFieldRef.parse(item) for item in value)


def _string_set(value: Any, name: str) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        value = multiline_to_list(value) if "\n" in value else [part.strip() for part in value.split(",")]
    try:
        return frozenset(str(item) for item in value if str(item))
    except TypeError as e:
        raise ValidationError(
            f"{name} must be a list of strings, got {type(value).__name__}",
            parameter_name=name,
            parameter_value=value,
            original_error=e,
        ) from e


@dataclass(frozen=True)
class TocSettings(CloneFrozenMixin):
    """Settings that control how a table of contents is generated.

    Parameters
    ----------
    scannable_field_types : frozenset of str
        Field types whose rendered HTML is searched for heading tags.
    heading_fields : frozenset of HeadingFieldRef
        Fields whose text value is itself a level 0 heading, regardless of
        field type. Strings of the form ``"type:bundle:field"`` and multiline
        strings are accepted and parsed.
    recurse_into_sub_entities : bool, default True
        Descend into referenced sub-entities (see ``sub_entity_types``).
    is_relative : bool, default False
        Produce fragment-only links instead of links to the owning entity.
    sub_entity_types : frozenset of str
        Entity types that count as embeddable sub-entities.
    supported_entity_types : frozenset of str
        Entity types a ToC may be generated for.
    allowed_bundles : frozenset of str
        Bundles a ToC field may target; empty allows every bundle.
    view_mode : str, default "full"
        View mode passed to the host when rendering scannable fields.
    max_heading_level : int, default 4
        Deepest heading tag scanned (``h2`` through ``h<max>``).
    heading_label_max_length : int, default 128
        Maximum length of labels taken from heading fields.
    anchor_separator : str, default "-"
        Separator used when synthesizing anchor ids.
    anchor_class : str, default "toc-anchor"
        Class attribute put on injected anchor markers (empty for none).
    html_parser : {"html.parser", "lxml", "html5lib"}, default "html.parser"
        BeautifulSoup tree builder used by the extractor.
    heading_field_display : {"anchor", "unmodified", "hidden"}, default "anchor"
        How a consumed heading field renders once patches are applied.

    """

    scannable_field_types: frozenset[str] = field(
        default=frozenset(DEFAULT_SCANNABLE_FIELD_TYPES),
        metadata={"help": "Field types whose rendered HTML is scanned for headings", "importance": "core"},
    )
    heading_fields: frozenset[HeadingFieldRef] = field(
        default_factory=frozenset,
        metadata={"help": "'type:bundle:field' references treated as pure headings", "importance": "core"},
    )
    recurse_into_sub_entities: bool = field(
        default=DEFAULT_RECURSE_INTO_SUB_ENTITIES,
        metadata={"help": "Recurse into referenced sub-entities", "importance": "core"},
    )
    is_relative: bool = field(
        default=DEFAULT_IS_RELATIVE,
        metadata={"help": "Emit fragment-only links relative to the current page", "importance": "core"},
    )
    sub_entity_types: frozenset[str] = field(
        default=frozenset(DEFAULT_SUB_ENTITY_TYPES),
        metadata={"help": "Entity types that may be recursed into", "importance": "advanced"},
    )
    supported_entity_types: frozenset[str] = field(
        default=frozenset(DEFAULT_SUPPORTED_ENTITY_TYPES),
        metadata={"help": "Top-level entity types a ToC can be generated for", "importance": "advanced"},
    )
    allowed_bundles: frozenset[str] = field(
        default_factory=frozenset,
        metadata={"help": "Bundles a ToC field may target (empty allows all)", "importance": "advanced"},
    )
    view_mode: str = field(
        default=DEFAULT_VIEW_MODE,
        metadata={"help": "View mode used to render scannable fields", "importance": "advanced"},
    )
    max_heading_level: int = field(
        default=DEFAULT_MAX_HEADING_LEVEL,
        metadata={"help": "Deepest heading tag scanned (2-6)", "type": int, "importance": "advanced"},
    )
    heading_label_max_length: int = field(
        default=DEFAULT_HEADING_LABEL_MAX_LENGTH,
        metadata={"help": "Maximum length of heading field labels", "type": int, "importance": "advanced"},
    )
    anchor_separator: str = field(
        default=DEFAULT_ANCHOR_SEPARATOR,
        metadata={"help": "Separator used in synthesized anchor ids", "importance": "advanced"},
    )
    anchor_class: str = field(
        default=DEFAULT_ANCHOR_CLASS,
        metadata={"help": "Class attribute of injected anchor markers", "importance": "advanced"},
    )
    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={"help": "BeautifulSoup parser used to read field HTML", "choices": list(HTML_PARSERS)},
    )
    heading_field_display: HeadingFieldDisplay = field(
        default=DEFAULT_HEADING_FIELD_DISPLAY,
        metadata={
            "help": "How consumed heading fields render: anchor, unmodified or hidden",
            "choices": list(HEADING_FIELD_DISPLAY_MODES),
        },
    )

    def __post_init__(self) -> None:
        """Normalize collection fields and validate ranges.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        object.__setattr__(
            self, "scannable_field_types", _string_set(self.scannable_field_types, "scannable_field_types")
        )
        object.__setattr__(self, "heading_fields", parse_heading_fields(self.heading_fields))
        object.__setattr__(self, "sub_entity_types", _string_set(self.sub_entity_types, "sub_entity_types"))
        object.__setattr__(
            self, "supported_entity_types", _string_set(self.supported_entity_types, "supported_entity_types")
        )
        object.__setattr__(self, "allowed_bundles", _string_set(self.allowed_bundles, "allowed_bundles"))

        if not MIN_HEADING_TAG_LEVEL <= self.max_heading_level <= MAX_HEADING_TAG_LEVEL:
            raise ValidationError(
                f"max_heading_level must be {MIN_HEADING_TAG_LEVEL}-{MAX_HEADING_TAG_LEVEL}, "
                f"got {self.max_heading_level}",
                parameter_name="max_heading_level",
                parameter_value=self.max_heading_level,
            )

        if self.heading_label_max_length <= 0:
            raise ValidationError(
                f"heading_label_max_length must be positive, got {self.heading_label_max_length}",
                parameter_name="heading_label_max_length",
                parameter_value=self.heading_label_max_length,
            )

        if self.html_parser not in HTML_PARSERS:
            raise ValidationError(
                f"html_parser must be one of {', '.join(HTML_PARSERS)}, got {self.html_parser!r}",
                parameter_name="html_parser",
                parameter_value=self.html_parser,
            )

        if self.heading_field_display not in HEADING_FIELD_DISPLAY_MODES:
            raise ValidationError(
                f"heading_field_display must be one of {', '.join(HEADING_FIELD_DISPLAY_MODES)}, "
                f"got {self.heading_field_display!r}",
                parameter_name="heading_field_display",
                parameter_value=self.heading_field_display,
            )

    def is_heading_field(self, entity_type: str, bundle: str, field_name: str) -> bool:
        """Check whether a field is registered as a pure heading field."""
        return HeadingFieldRef(entity_type, bundle, field_name) in self.heading_fields

    @property
    def heading_tags(self) -> list[str]:
        """Heading tag names scanned by the extractor, e.g. ``["h2", "h3", "h4"]``."""
        return [f"h{n}" for n in range(MIN_HEADING_TAG_LEVEL, self.max_heading_level + 1)]


__all__ = [
    "HeadingFieldRef",
    "TocSettings",
    "multiline_to_list",
    "parse_heading_fields",
]
