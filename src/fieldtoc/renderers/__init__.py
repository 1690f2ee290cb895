"""Renderers turning a generated table of contents into output formats."""

from .base import BaseTocRenderer
from .html import HtmlTocRenderer
from .json import JsonTocRenderer, toc_to_dict, toc_to_json

__all__ = ["BaseTocRenderer", "HtmlTocRenderer", "JsonTocRenderer", "toc_to_dict", "toc_to_json"]
