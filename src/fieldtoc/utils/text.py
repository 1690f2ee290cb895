#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/utils/text.py
"""Text processing utilities for heading labels and anchor ids.

Functions
---------
normalize_label : Collapse whitespace in extracted heading text
truncate_label : Bound the length of a heading label
generate_anchor_id : Convert a heading label into an identifier-safe anchor id

Classes
-------
AnchorRegistry : Track anchor ids used on one page and de-duplicate new ones

Examples
--------
Basic anchor generation:

    >>> generate_anchor_id("Getting Started (v2.0)")
    'Getting-Started-v2.0'

Unique ids within one generation pass:

    >>> registry = AnchorRegistry()
    >>> registry.claim("Intro")
    'Intro'
    >>> registry.claim("Intro")
    'Intro-2'

"""

from __future__ import annotations

import re
import unicodedata

from fieldtoc.constants import DEFAULT_ANCHOR_FALLBACK, DEFAULT_ANCHOR_SEPARATOR

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_label(text: str) -> str:
    """Trim a heading label and collapse internal runs of whitespace."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def truncate_label(text: str, max_length: int) -> str:
    """Trim ``text`` and cut it to at most ``max_length`` characters.

    Parameters
    ----------
    text : str
        Raw label text
    max_length : int
        Maximum number of characters to keep

    Returns
    -------
    str
        The trimmed, truncated label

    """
    return text.strip()[:max_length].strip()


def generate_anchor_id(
    label: str,
    separator: str = DEFAULT_ANCHOR_SEPARATOR,
    fallback: str = DEFAULT_ANCHOR_FALLBACK,
) -> str:
    """Derive an identifier-safe anchor id from a heading label.

    Accents are stripped, letters keep their case, digits and periods are
    preserved, and every run of other characters collapses to ``separator``.

    Parameters
    ----------
    label : str
        Heading label
    separator : str, default = "-"
        Replacement for runs of disallowed characters
    fallback : str, default = "heading"
        Id used when nothing identifier-safe remains

    Returns
    -------
    str
        Anchor id (never empty)

    Examples
    --------
        >>> generate_anchor_id("Café Menu")
        'Cafe-Menu'
        >>> generate_anchor_id("  !!  ")
        'heading'

    """
    # Decompose accented characters and drop the combining marks
    normalized = unicodedata.normalize("NFD", label)
    normalized = "".join(char for char in normalized if unicodedata.category(char) != "Mn")

    anchor = re.sub(r"[^0-9A-Za-z.]+", separator, normalized)
    if separator:
        anchor = anchor.strip(separator)

    return anchor or fallback


class AnchorRegistry:
    """Anchor ids already present on the page being assembled.

    Hand-authored ids are recorded verbatim through :meth:`register`;
    synthesized ids go through :meth:`claim`, which appends ``-2``, ``-3``...
    until the id no longer collides with anything seen so far.

    Parameters
    ----------
    separator : str, default = "-"
        Separator placed before numeric suffixes

    """

    def __init__(self, separator: str = DEFAULT_ANCHOR_SEPARATOR):
        self.separator = separator
        self._seen: set[str] = set()

    def __contains__(self, anchor_id: object) -> bool:
        return anchor_id in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def register(self, anchor_id: str) -> str:
        """Record an existing id without altering it."""
        self._seen.add(anchor_id)
        return anchor_id

    def claim(self, base_id: str) -> str:
        """Reserve ``base_id`` or the first free suffixed variant of it."""
        if base_id not in self._seen:
            self._seen.add(base_id)
            return base_id

        counter = 2
        while f"{base_id}{self.separator}{counter}" in self._seen:
            counter += 1

        unique_id = f"{base_id}{self.separator}{counter}"
        self._seen.add(unique_id)
        return unique_id


__all__ = [
    "AnchorRegistry",
    "generate_anchor_id",
    "normalize_label",
    "truncate_label",
]
