#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/formatter.py
"""Rendering of the dedicated table of contents field.

A ToC field stores whether it is enabled, which top-level entity it shows
the table of contents of (its own parent when unset), and an optional title.
:func:`render_toc_field` turns such a value into HTML: it resolves the
target, generates (or reuses) the ToC and renders it. Failures never break
the page; they are logged and replaced by the configured placeholder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from fieldtoc.exceptions import FieldTocError, UnsupportedEntityError, ValidationError
from fieldtoc.options.render import TocRendererOptions
from fieldtoc.options.toc import TocSettings
from fieldtoc.renderers.html import HtmlTocRenderer
from fieldtoc.toc.generator import TableOfContentsGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TocFieldValue:
    """Stored value of a table of contents field.

    Parameters
    ----------
    enabled : bool, default True
        A disabled value counts as empty and renders nothing
    target_id : Any, optional
        Id of the entity whose ToC is shown; ``None`` means the parent entity
    title : str, default ""
        Title shown above the list; overrides the renderer option when set

    """

    enabled: bool = True
    target_id: Any = None
    title: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.enabled

    @classmethod
    def from_value(cls, raw: Any) -> TocFieldValue:
        """Build a value from a stored field value.

        Accepts an existing :class:`TocFieldValue`, a mapping with
        ``enabled``, ``target_id`` (or ``nid``) and ``title`` keys, a bare
        boolean, or ``None`` (disabled).

        Raises
        ------
        ValidationError
            If ``raw`` has none of the accepted shapes

        """
        if isinstance(raw, TocFieldValue):
            return raw
        if raw is None:
            return cls(enabled=False)
        if isinstance(raw, bool):
            return cls(enabled=raw)
        if isinstance(raw, Mapping):
            target_id = raw.get("target_id", raw.get("nid"))
            # A stored target of 0 means "no target"
            if target_id in (0, "0", ""):
                target_id = None
            return cls(
                enabled=bool(raw.get("enabled", True)),
                target_id=target_id,
                title=str(raw.get("title") or ""),
            )
        raise ValidationError(
            f"Cannot interpret {type(raw).__name__} as a table of contents field value",
            parameter_name="value",
            parameter_value=raw,
        )


def resolve_target(generator: TableOfContentsGenerator, parent: Any, value: TocFieldValue) -> Any:
    """Return the entity whose ToC ``value`` shows.

    Raises
    ------
    UnsupportedEntityError
        If the target cannot be loaded through the host

    """
    if value.target_id is None:
        return parent

    load_entity = getattr(generator.host, "load_entity", None)
    if load_entity is None:
        raise UnsupportedEntityError(
            "unknown", message=f"Host cannot load target entity {value.target_id!r} of a table of contents field"
        )
    target = load_entity(value.target_id)
    if target is None:
        raise UnsupportedEntityError("unknown", message=f"Target entity {value.target_id!r} does not exist")
    return target


def render_toc_field(
    generator: TableOfContentsGenerator,
    parent: Any,
    value: Any,
    settings: Optional[TocSettings] = None,
    renderer_options: Optional[TocRendererOptions] = None,
) -> str:
    """Render one table of contents field item to HTML.

    Parameters
    ----------
    generator : TableOfContentsGenerator
        Generator (and cache) of the current processing run
    parent : Any
        Entity the field belongs to
    value : TocFieldValue or mapping
        Stored field value, see :meth:`TocFieldValue.from_value`
    settings : TocSettings, optional
        Generation settings; ``allowed_bundles`` is enforced here
    renderer_options : TocRendererOptions, optional
        HTML rendering options

    Returns
    -------
    str
        ToC markup, an empty string for a disabled value or an empty ToC,
        or the placeholder markup when the ToC cannot be produced

    """
    settings = settings if settings is not None else TocSettings()
    options = renderer_options if renderer_options is not None else TocRendererOptions()

    try:
        value = TocFieldValue.from_value(value)
        if value.is_empty:
            return ""

        if value.title:
            options = options.create_updated(title=value.title)
        renderer = HtmlTocRenderer(options)

        target = resolve_target(generator, parent, value)
        bundle = generator.host.bundle(target)
        if settings.allowed_bundles and bundle not in settings.allowed_bundles:
            raise UnsupportedEntityError(
                generator.host.entity_type(target), bundle=bundle, supported=settings.allowed_bundles
            )

        return renderer.render_to_string(generator.generate(target, settings))
    except FieldTocError as e:
        logger.warning("Cannot render table of contents: %s", e)
        return HtmlTocRenderer(options).render_placeholder()


__all__ = ["TocFieldValue", "render_toc_field", "resolve_target"]
