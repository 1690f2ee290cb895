#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/renderers/html.py
"""HTML rendering of a table of contents.

The tree is rendered as nested lists inside a ``<nav>`` element::

    <nav class="table-of-contents">
    <ul>
    <li><a href="#Intro">Intro</a>
    <ul>
    <li><a href="#Details">Details</a></li>
    </ul>
    </li>
    </ul>
    </nav>

Placeholder nodes render as bare ``<li>`` elements that only wrap their
children. An empty table of contents renders as an empty string.
"""

from __future__ import annotations

import logging
from html import escape

from fieldtoc.exceptions import RenderingError
from fieldtoc.options.render import TocRendererOptions
from fieldtoc.renderers.base import BaseTocRenderer
from fieldtoc.toc.nodes import TocNode
from fieldtoc.toc.table import TableOfContents

logger = logging.getLogger(__name__)


class HtmlTocRenderer(BaseTocRenderer):
    """Render a :class:`TableOfContents` as nested HTML lists.

    Parameters
    ----------
    options : TocRendererOptions, optional
        Rendering options; defaults apply when omitted

    """

    def __init__(self, options: TocRendererOptions | None = None):
        if options is not None and not isinstance(options, TocRendererOptions):
            raise TypeError(f"Expected TocRendererOptions, got {type(options).__name__}")
        self.options = options or TocRendererOptions()
        self._output: list[str] = []

    def render_to_string(self, toc: TableOfContents) -> str:
        """Render ``toc`` to an HTML string.

        Parameters
        ----------
        toc : TableOfContents
            Generated table of contents

        Returns
        -------
        str
            HTML markup, or an empty string when ``toc`` has no headings

        """
        if toc.is_empty:
            return ""

        self._output = []
        try:
            self._output.append(self._open_nav())
            if self.options.title:
                self._output.append(f"<h2>{escape(self.options.title)}</h2>\n")
            self._render_list(toc.tree)
            self._output.append("</nav>\n")
        except (AttributeError, TypeError) as e:
            raise RenderingError(f"Failed to render table of contents: {e}", original_error=e) from e

        return "".join(self._output)

    def render_placeholder(self) -> str:
        """Markup shown in place of a table of contents that could not be produced."""
        return f"{self._open_nav()}<p>{escape(self.options.error_message)}</p>\n</nav>\n"

    def _open_nav(self) -> str:
        css_class = f' class="{escape(self.options.css_class)}"' if self.options.css_class else ""
        return f"<nav{css_class}>\n"

    def _render_list(self, nodes: list[TocNode]) -> None:
        tag = self.options.list_tag
        self._output.append(f"<{tag}>\n")
        for node in nodes:
            self._render_item(node)
        self._output.append(f"</{tag}>\n")

    def _render_item(self, node: TocNode) -> None:
        self._output.append("<li>")
        if not node.is_placeholder:
            href = escape(node.anchor_link.href) if node.anchor_link else ""
            self._output.append(f'<a href="{href}">{escape(node.label)}</a>')

        if node.children:
            self._output.append("\n")
            self._render_list(node.children)

        self._output.append("</li>\n")


__all__ = ["HtmlTocRenderer"]
