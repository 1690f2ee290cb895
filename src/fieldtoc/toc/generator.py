#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/toc/generator.py
"""Entry point for generating tables of contents.

Examples
--------
    >>> generator = TableOfContentsGenerator(host)
    >>> toc = generator.generate(node, TocSettings(heading_fields=["node:page:field_title"]))
    >>> [n.label for n in toc.tree]
    ['Overview', 'Intro']
    >>> generator.lookup(node) is toc
    True

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fieldtoc.exceptions import UnsupportedEntityError
from fieldtoc.host.base import HostAdapter
from fieldtoc.options.toc import TocSettings
from fieldtoc.toc.builder import LinkFactory, TocTreeBuilder
from fieldtoc.toc.cache import GenerationCache
from fieldtoc.toc.nodes import LinkDescriptor
from fieldtoc.toc.table import TableOfContents
from fieldtoc.toc.walker import EntityWalker

logger = logging.getLogger(__name__)


class TableOfContentsGenerator:
    """Generate and memoize tables of contents for top-level entities.

    Parameters
    ----------
    host : HostAdapter
        Host framework services
    cache : GenerationCache, optional
        Cache for this processing run; a fresh one is created when omitted

    """

    def __init__(self, host: HostAdapter, cache: Optional[GenerationCache] = None):
        self.host = host
        self.cache = cache if cache is not None else GenerationCache()

    def lookup(self, entity: Any) -> Optional[TableOfContents]:
        """Return the cached ToC of ``entity`` without generating one."""
        return self.cache.lookup(self.host.entity_id(entity))

    def generate(self, entity: Any, settings: Optional[TocSettings] = None, use_cache: bool = True) -> TableOfContents:
        """Generate the table of contents of ``entity``.

        Parameters
        ----------
        entity : Any
            Top-level host entity
        settings : TocSettings, optional
            Generation settings; defaults apply when omitted
        use_cache : bool, default True
            Return a previously generated ToC for the same entity id if one
            exists. Settings are not compared.

        Returns
        -------
        TableOfContents
            The (possibly cached) table of contents. A freshly generated ToC
            always replaces the cache entry.

        Raises
        ------
        UnsupportedEntityError
            If the entity type is not in ``settings.supported_entity_types``
        FieldShapeError
            If the host yields malformed field items

        """
        entity_id = self.host.entity_id(entity)
        if use_cache:
            cached = self.cache.lookup(entity_id)
            if cached is not None:
                logger.debug("Using cached table of contents for entity %s", entity_id)
                return cached

        settings = settings if settings is not None else TocSettings()

        entity_type = self.host.entity_type(entity)
        if entity_type not in settings.supported_entity_types:
            raise UnsupportedEntityError(entity_type, supported=settings.supported_entity_types)

        result = EntityWalker(self.host, settings).walk(entity)

        builder = TocTreeBuilder(self._link_factory(entity, settings))
        builder.extend(result.headings)

        toc = TableOfContents(
            entity=entity,
            host=self.host,
            settings=settings,
            tree=builder.to_tree(),
            patches=result.patches,
            entries=result.headings,
        )
        self.cache.store(entity_id, toc)

        logger.info(
            "Generated table of contents for %s %s: %d heading(s), %d placeholder(s), %d patched field(s)",
            entity_type,
            entity_id,
            len(result.headings),
            builder.placeholder_count,
            len(result.patches),
        )
        return toc

    def _link_factory(self, entity: Any, settings: TocSettings) -> LinkFactory:
        if settings.is_relative:
            return LinkDescriptor.relative

        url = self.host.entity_url(entity)

        def absolute(anchor_id: str) -> LinkDescriptor:
            return LinkDescriptor(target_reference=url, fragment=anchor_id)

        return absolute


__all__ = ["TableOfContentsGenerator"]
