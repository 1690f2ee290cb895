"""Table of contents generation engine."""

from .builder import TocTreeBuilder, build_tree
from .cache import GenerationCache
from .extractor import ExtractionResult, HeadingExtractor, extract_headings
from .generator import TableOfContentsGenerator
from .nodes import HeadingEntry, LinkDescriptor, TocNode
from .patches import FieldKey, FieldPatch, FieldPatchStore, FragmentPatch, HeadingMarkerPatch
from .table import TableOfContents
from .walker import ClassifiedField, EntityWalker, FieldKind, WalkResult, walk

__all__ = [
    "ClassifiedField",
    "EntityWalker",
    "ExtractionResult",
    "FieldKey",
    "FieldKind",
    "FieldPatch",
    "FieldPatchStore",
    "FragmentPatch",
    "GenerationCache",
    "HeadingEntry",
    "HeadingExtractor",
    "HeadingMarkerPatch",
    "LinkDescriptor",
    "TableOfContents",
    "TableOfContentsGenerator",
    "TocNode",
    "TocTreeBuilder",
    "WalkResult",
    "build_tree",
    "extract_headings",
    "walk",
]
