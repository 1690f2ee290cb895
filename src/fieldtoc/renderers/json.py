#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/renderers/json.py
"""JSON serialization of a table of contents.

Example output::

    {
      "entity_type": "node",
      "entity_id": 1,
      "is_relative": true,
      "headings": [
        {"anchor_id": "Intro", "label": "Intro", "href": "#Intro", "level": 0,
         "children": [...]}
      ],
      "patches": [
        {"entity_type": "node", "entity_id": 1, "field_name": "body", "delta": 0, "kind": "fragment"}
      ]
    }

"""

from __future__ import annotations

import json
from typing import Any

from fieldtoc.exceptions import RenderingError
from fieldtoc.renderers.base import BaseTocRenderer
from fieldtoc.toc.table import TableOfContents


def toc_to_dict(toc: TableOfContents) -> dict[str, Any]:
    """JSON-ready mapping of the heading tree and the patch summary."""
    return toc.to_dict()


def toc_to_json(toc: TableOfContents, indent: int | None = 2) -> str:
    """Serialize ``toc`` to a JSON string.

    Raises
    ------
    RenderingError
        If an entity id cannot be serialized

    """
    try:
        return json.dumps(toc_to_dict(toc), indent=indent, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise RenderingError(f"Failed to serialize table of contents: {e}", original_error=e) from e


class JsonTocRenderer(BaseTocRenderer):
    """Render a :class:`TableOfContents` as JSON."""

    def __init__(self, indent: int | None = 2):
        self.indent = indent

    def render_to_string(self, toc: TableOfContents) -> str:
        return toc_to_json(toc, indent=self.indent) + "\n"


__all__ = ["JsonTocRenderer", "toc_to_dict", "toc_to_json"]
