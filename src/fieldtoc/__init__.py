"""fieldtoc - table of contents generation for field-based content.

fieldtoc walks a content entity and the sub-entities it embeds, in the
order a reader meets them on the page, and collects every heading it finds:
``h2`` through ``h4`` (configurable) in rich-text fields, plus whole fields
registered as headings. The headings become a nested tree of links, and
the fields that produced them are patched so that every link has an anchor
to land on.

The engine knows nothing about storage or templates. It talks to its host
through the :class:`~fieldtoc.host.base.HostAdapter` protocol;
:class:`~fieldtoc.host.memory.MemoryHost` implements it over plain Python
data and JSON/YAML documents.

Examples
--------
Generating and rendering a table of contents:

    >>> from fieldtoc import MemoryHost, TableOfContentsGenerator, TocSettings, entity_from_dict
    >>> from fieldtoc.renderers import HtmlTocRenderer
    >>> node = entity_from_dict({
    ...     "type": "node", "id": 1, "bundle": "page",
    ...     "fields": [{"name": "body", "type": "text_long", "values": ["<h2>Intro</h2><h3>Details</h3>"]}],
    ... })
    >>> generator = TableOfContentsGenerator(MemoryHost([node]))
    >>> toc = generator.generate(node, TocSettings(is_relative=True))
    >>> [(n.label, [c.label for c in n.children]) for n in toc.tree]
    [('Intro', ['Details'])]
    >>> html = HtmlTocRenderer().render_to_string(toc)

Substituting the patched fields into a render structure:

    >>> output = MemoryHost([node]).build_render_output(node)
    >>> toc.apply_patches(output, node)
    1

"""

__version__ = "0.3.0"

from fieldtoc.exceptions import (
    ConfigurationError,
    DependencyError,
    ExtractionError,
    FieldShapeError,
    FieldTocError,
    RenderingError,
    UnsupportedEntityError,
    ValidationError,
)
from fieldtoc.formatter import TocFieldValue, render_toc_field
from fieldtoc.host import (
    FieldItem,
    HostAdapter,
    MemoryEntity,
    MemoryField,
    MemoryHost,
    entity_from_dict,
    entity_from_file,
)
from fieldtoc.options import HeadingFieldRef, TocRendererOptions, TocSettings
from fieldtoc.toc import (
    FieldKind,
    GenerationCache,
    HeadingEntry,
    HeadingExtractor,
    LinkDescriptor,
    TableOfContents,
    TableOfContentsGenerator,
    TocNode,
    TocTreeBuilder,
    build_tree,
    extract_headings,
    walk,
)

__all__ = [
    "__version__",
    # Generation
    "TableOfContentsGenerator",
    "TableOfContents",
    "GenerationCache",
    "TocTreeBuilder",
    "build_tree",
    "HeadingExtractor",
    "extract_headings",
    "walk",
    "FieldKind",
    "HeadingEntry",
    "LinkDescriptor",
    "TocNode",
    # Host
    "HostAdapter",
    "FieldItem",
    "MemoryEntity",
    "MemoryField",
    "MemoryHost",
    "entity_from_dict",
    "entity_from_file",
    # Options
    "TocSettings",
    "TocRendererOptions",
    "HeadingFieldRef",
    # Field formatter
    "TocFieldValue",
    "render_toc_field",
    # Exceptions
    "FieldTocError",
    "ValidationError",
    "ConfigurationError",
    "FieldShapeError",
    "UnsupportedEntityError",
    "ExtractionError",
    "RenderingError",
    "DependencyError",
]
