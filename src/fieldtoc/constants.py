#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the fieldtoc library.

This module centralizes the field type names, heading ranges, anchor
defaults and other configuration constants used across fieldtoc.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Field Types - Host field type machine names
3. Heading Extraction - Tag range, label limits, anchor defaults
4. Rendering - HTML renderer defaults
5. Configuration Files - Discovery names and environment variables
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParser = Literal["html.parser", "lxml", "html5lib"]
HeadingFieldDisplay = Literal["anchor", "unmodified", "hidden"]
ListTag = Literal["ul", "ol"]

# =============================================================================
# Field Types
# =============================================================================

# The dedicated table of contents field type; never scanned or recursed into
TOC_FIELD_TYPE = "tccl_table_of_contents"

DEFAULT_SCANNABLE_FIELD_TYPES: tuple[str, ...] = ("text_long", "text_with_summary")

# Field types whose values point at another entity
REFERENCE_FIELD_TYPES: frozenset[str] = frozenset({"entity_reference", "entity_reference_revisions"})

DEFAULT_SUB_ENTITY_TYPES: tuple[str, ...] = ("paragraph",)
DEFAULT_SUPPORTED_ENTITY_TYPES: tuple[str, ...] = ("node",)
DEFAULT_VIEW_MODE = "full"
DEFAULT_RECURSE_INTO_SUB_ENTITIES = True
DEFAULT_IS_RELATIVE = False

# =============================================================================
# Heading Extraction
# =============================================================================

# h1 is reserved for the page title and never folded into a content ToC
MIN_HEADING_TAG_LEVEL = 2
MAX_HEADING_TAG_LEVEL = 6
DEFAULT_MAX_HEADING_LEVEL = 4

DEFAULT_HEADING_LABEL_MAX_LENGTH = 128
DEFAULT_ANCHOR_SEPARATOR = "-"
DEFAULT_ANCHOR_CLASS = "toc-anchor"
DEFAULT_ANCHOR_FALLBACK = "heading"
DEFAULT_HTML_PARSER: HtmlParser = "html.parser"
DEFAULT_HEADING_FIELD_DISPLAY: HeadingFieldDisplay = "anchor"

HTML_PARSERS: tuple[str, ...] = ("html.parser", "lxml", "html5lib")
HEADING_FIELD_DISPLAY_MODES: tuple[str, ...] = ("anchor", "unmodified", "hidden")

# Link target used by relative links
CURRENT_DOCUMENT = "current-document"

# =============================================================================
# Rendering
# =============================================================================

DEFAULT_TOC_TITLE = ""
DEFAULT_TOC_LIST_TAG: ListTag = "ul"
DEFAULT_TOC_CSS_CLASS = "table-of-contents"
DEFAULT_TOC_ERROR_MESSAGE = "Cannot render table of contents for this content."

# =============================================================================
# Configuration Files
# =============================================================================

CONFIG_FILENAMES: tuple[str, ...] = (".fieldtoc.toml", ".fieldtoc.yaml", ".fieldtoc.yml", ".fieldtoc.json")
PYPROJECT_SECTION = "fieldtoc"
CONFIG_ENV_VAR = "FIELDTOC_CONFIG"

DEPS_HTML_PARSERS: dict[str, list[tuple[str, str]]] = {
    "lxml": [("lxml", "")],
    "html5lib": [("html5lib", "")],
}
