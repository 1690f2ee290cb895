#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/toc/extractor.py
"""Heading extraction from rendered HTML fragments.

The extractor parses one fragment with BeautifulSoup, finds ``h2`` through
``h<max>`` elements in document order and returns one :class:`HeadingEntry`
per non-empty heading, together with the fragment re-serialized after anchor
injection.

Anchor ids
----------
- A heading with a non-empty ``id`` attribute keeps it verbatim.
- A heading directly preceded by an empty anchor marker (``<a id="...">``
  without ``href`` or text, as injected by a previous run) reuses the
  marker's id, so extracting an already processed fragment is a no-op.
- Otherwise an id is synthesized from the label, made unique through the
  shared :class:`~fieldtoc.utils.text.AnchorRegistry`, and an empty marker
  carrying it is inserted immediately before the heading. The heading
  element itself is never modified.

Examples
--------
    >>> result = HeadingExtractor().extract("<h2>Intro</h2><p>Text</p>")
    >>> [(h.label, h.anchor_id, h.level) for h in result.headings]
    [('Intro', 'Intro', 0)]
    >>> result.fragment
    '<a id="Intro" class="toc-anchor"></a><h2>Intro</h2><p>Text</p>'

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from bs4 import BeautifulSoup, NavigableString
from bs4.builder import ParserRejectedMarkup
from bs4.element import Tag
from bs4.exceptions import FeatureNotFound

from fieldtoc.constants import (
    DEFAULT_ANCHOR_CLASS,
    DEFAULT_ANCHOR_SEPARATOR,
    DEFAULT_HTML_PARSER,
    DEFAULT_MAX_HEADING_LEVEL,
    DEPS_HTML_PARSERS,
    MAX_HEADING_TAG_LEVEL,
    MIN_HEADING_TAG_LEVEL,
)
from fieldtoc.exceptions import DependencyError, ValidationError
from fieldtoc.toc.nodes import HeadingEntry
from fieldtoc.utils.text import AnchorRegistry, generate_anchor_id, normalize_label

if TYPE_CHECKING:
    from fieldtoc.options.toc import TocSettings

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    """Headings found in a fragment and the rewritten fragment."""

    headings: list[HeadingEntry] = field(default_factory=list)
    fragment: str = ""

    @property
    def found(self) -> bool:
        """Whether at least one heading was extracted."""
        return bool(self.headings)


class HeadingExtractor:
    """Find headings in HTML fragments and inject anchor markers.

    Parameters
    ----------
    max_heading_level : int, default 4
        Deepest heading tag scanned; ``h2`` is always the shallowest
    html_parser : str, default "html.parser"
        BeautifulSoup tree builder
    anchor_class : str, default "toc-anchor"
        Class put on injected markers; empty string for none
    separator : str, default "-"
        Separator used when synthesizing ids
    registry : AnchorRegistry, optional
        Registry shared by every fragment of one page; a private one is
        created when omitted

    """

    def __init__(
        self,
        max_heading_level: int = DEFAULT_MAX_HEADING_LEVEL,
        html_parser: str = DEFAULT_HTML_PARSER,
        anchor_class: str = DEFAULT_ANCHOR_CLASS,
        separator: str = DEFAULT_ANCHOR_SEPARATOR,
        registry: Optional[AnchorRegistry] = None,
    ):
        if not MIN_HEADING_TAG_LEVEL <= max_heading_level <= MAX_HEADING_TAG_LEVEL:
            raise ValidationError(
                f"max_heading_level must be {MIN_HEADING_TAG_LEVEL}-{MAX_HEADING_TAG_LEVEL}, got {max_heading_level}",
                parameter_name="max_heading_level",
                parameter_value=max_heading_level,
            )
        self.max_heading_level = max_heading_level
        self.html_parser = html_parser
        self.anchor_class = anchor_class
        self.separator = separator
        self.registry = registry if registry is not None else AnchorRegistry(separator)
        self.heading_tags = [f"h{n}" for n in range(MIN_HEADING_TAG_LEVEL, max_heading_level + 1)]

    @classmethod
    def from_settings(cls, settings: TocSettings, registry: Optional[AnchorRegistry] = None) -> HeadingExtractor:
        """Create an extractor configured from generation settings."""
        return cls(
            max_heading_level=settings.max_heading_level,
            html_parser=settings.html_parser,
            anchor_class=settings.anchor_class,
            separator=settings.anchor_separator,
            registry=registry,
        )

    def extract(self, html: str) -> ExtractionResult:
        """Extract headings from ``html`` and inject anchors where needed.

        Parameters
        ----------
        html : str
            Rendered HTML fragment

        Returns
        -------
        ExtractionResult
            Entries in document order and the serialized fragment. When the
            fragment cannot be parsed the result is empty and ``fragment``
            is the input unchanged.

        Raises
        ------
        DependencyError
            If the configured parser is not installed

        """
        if not html or not html.strip():
            return ExtractionResult(fragment=html or "")

        soup = self._parse(html)
        if soup is None:
            return ExtractionResult(fragment=html)

        headings: list[HeadingEntry] = []
        for node in soup.find_all(self.heading_tags):
            label = normalize_label(node.get_text())
            if not label:
                continue

            anchor_id = self._resolve_anchor(soup, node, label)
            level = int(node.name[1]) - MIN_HEADING_TAG_LEVEL
            headings.append(HeadingEntry(label=label, anchor_id=anchor_id, level=level))

        if not headings:
            return ExtractionResult(fragment=html)

        logger.debug("Extracted %d heading(s) from fragment", len(headings))
        return ExtractionResult(headings=headings, fragment=self._serialize(soup, html))

    def _parse(self, html: str) -> Optional[BeautifulSoup]:
        try:
            return BeautifulSoup(html, self.html_parser)
        except FeatureNotFound as e:
            raise DependencyError(
                f"HTML parser '{self.html_parser}'",
                missing_packages=DEPS_HTML_PARSERS.get(self.html_parser, []),
                original_error=e,
            ) from e
        except (ParserRejectedMarkup, ValueError, AssertionError) as e:
            logger.warning("Could not parse HTML fragment, treating it as having no headings: %s", e)
            return None

    def _resolve_anchor(self, soup: BeautifulSoup, node: Tag, label: str) -> str:
        explicit = node.get("id")
        if isinstance(explicit, str) and explicit.strip():
            return self.registry.register(explicit)

        marker = self._preceding_marker(node)
        if marker is not None:
            return self.registry.register(str(marker["id"]))

        anchor_id = self.registry.claim(generate_anchor_id(label, separator=self.separator))
        attrs: dict[str, Any] = {"id": anchor_id}
        if self.anchor_class:
            attrs["class"] = self.anchor_class
        node.insert_before(soup.new_tag("a", attrs=attrs))
        return anchor_id

    @staticmethod
    def _preceding_marker(node: Tag) -> Optional[Tag]:
        """Return the empty anchor marker directly before ``node``, if any."""
        previous = node.previous_sibling
        while isinstance(previous, NavigableString) and not previous.strip():
            previous = previous.previous_sibling

        if not isinstance(previous, Tag) or previous.name != "a":
            return None
        anchor_id = previous.get("id")
        if not isinstance(anchor_id, str) or not anchor_id.strip():
            return None
        if previous.get("href") is not None or previous.get_text(strip=True):
            return None
        return previous

    def _serialize(self, soup: BeautifulSoup, original: str) -> str:
        # lxml and html5lib wrap fragments in <html><body>; unwrap unless the input was a full document
        if self.html_parser != "html.parser" and soup.body is not None and "<body" not in original.lower():
            return soup.body.decode_contents()
        return str(soup)


def extract_headings(html: str, **kwargs: Any) -> ExtractionResult:
    """Run a one-off :class:`HeadingExtractor` over ``html``."""
    return HeadingExtractor(**kwargs).extract(html)


__all__ = ["ExtractionResult", "HeadingExtractor", "extract_headings"]
