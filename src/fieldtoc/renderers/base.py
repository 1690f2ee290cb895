#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/renderers/base.py
"""Base class for table of contents renderers."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from fieldtoc.toc.table import TableOfContents


class BaseTocRenderer(ABC):
    """Abstract base class for table of contents renderers.

    Subclasses implement :meth:`render_to_string`; :meth:`render` writes its
    result to a path or stream.
    """

    @abstractmethod
    def render_to_string(self, toc: TableOfContents) -> str:
        """Render ``toc`` to a string.

        Raises
        ------
        RenderingError
            If rendering fails

        """

    def render(self, toc: TableOfContents, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render ``toc`` and write the result to ``output``."""
        self.write_text_output(self.render_to_string(toc), output)

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to a file path or an open stream.

        Parameters
        ----------
        text : str
            Rendered text to write
        output : str, Path, IO[bytes], or IO[str]
            File path, binary stream (UTF-8 encoded) or text stream

        Raises
        ------
        TypeError
            If ``output`` is none of the supported destinations

        """
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
        elif isinstance(output, (io.RawIOBase, io.BufferedIOBase)) or "b" in getattr(output, "mode", ""):
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]
        elif hasattr(output, "write"):
            output.write(text)  # type: ignore[arg-type]
        else:
            raise TypeError(f"Unsupported output type: {type(output).__name__}")


__all__ = ["BaseTocRenderer"]
