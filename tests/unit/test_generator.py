#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for TableOfContentsGenerator and its per-run cache."""
import logging

import pytest
from utils import make_field, make_node, make_paragraph

from fieldtoc.exceptions import UnsupportedEntityError
from fieldtoc.host.memory import MemoryEntity, MemoryHost
from fieldtoc.options.toc import TocSettings
from fieldtoc.toc.cache import GenerationCache
from fieldtoc.toc.generator import TableOfContentsGenerator


def _shape(nodes) -> list:
    return [(node.label, _shape(node.children)) for node in nodes]


@pytest.mark.unit
class TestGenerate:
    """Test end-to-end generation over the memory host."""

    def test_intro_details_relative(self, intro_details_node: MemoryEntity) -> None:
        """Test the h2/h3 scenario with relative links."""
        generator = TableOfContentsGenerator(MemoryHost([intro_details_node]))
        toc = generator.generate(intro_details_node, TocSettings(is_relative=True))

        assert _shape(toc.tree) == [("Intro", [("Details", [])])]
        intro = toc.tree[0]
        assert intro.anchor_link.target_reference == "current-document"
        assert intro.anchor_link.fragment == "Intro"
        assert intro.children[0].anchor_link.href == "#Details"
        assert toc.is_relative

    def test_absolute_links_use_entity_url(self) -> None:
        """Test that absolute links point at the top-level entity page."""
        node = make_node(
            3,
            make_field("field_sections", "entity_reference_revisions", make_paragraph(30, "<h2>Inside</h2>")),
            url="/guides/setup",
        )
        toc = TableOfContentsGenerator(MemoryHost([node])).generate(node, TocSettings())

        assert toc.tree[0].anchor_link.target_reference == "/guides/setup"
        assert toc.tree[0].anchor_link.href == "/guides/setup#Inside"

    def test_default_url_when_none_configured(self, intro_details_node: MemoryEntity) -> None:
        """Test the memory host's default entity URL."""
        toc = TableOfContentsGenerator(MemoryHost()).generate(intro_details_node)
        assert toc.tree[0].anchor_link.href == "/node/1#Intro"

    def test_overview_heading_field_scenario(
        self, article: MemoryEntity, article_generator: TableOfContentsGenerator, article_settings: TocSettings
    ) -> None:
        """Test a heading field followed by body and paragraph headings."""
        toc = article_generator.generate(article, article_settings)

        assert _shape(toc.tree) == [
            ("Overview", []),
            ("Intro", [("Details", [])]),
            ("Usage", []),
            ("Intro", []),
        ]
        assert [n.anchor_id for n in toc.tree] == ["Overview", "Intro", "Usage", "Intro-2"]
        assert len(toc.patches) == 4
        assert len(toc.entries) == 5

    def test_toc_field_does_not_change_the_tree(self, article: MemoryEntity, article_settings: TocSettings) -> None:
        """Test that dropping the ToC field from the display leaves the result unchanged."""
        with_field = TableOfContentsGenerator(MemoryHost([article])).generate(article, article_settings)
        article.display = [name for name in article.display if name != "field_toc"]
        without_field = TableOfContentsGenerator(MemoryHost([article])).generate(article, article_settings)

        assert _shape(with_field.tree) == _shape(without_field.tree)

    def test_empty_entity(self) -> None:
        """Test that entities without headings give an empty ToC."""
        node = make_node(4, make_field("body", "text_long", "<p>No headings here.</p>"))
        toc = TableOfContentsGenerator(MemoryHost([node])).generate(node)

        assert toc.is_empty
        assert toc.tree == []
        assert len(toc.patches) == 0

    def test_placeholders_from_leading_h4(self) -> None:
        """Test that a body starting at h4 gets two placeholder ancestors."""
        node = make_node(5, make_field("body", "text_long", "<h4>Deep</h4><h2>Top</h2>"))
        toc = TableOfContentsGenerator(MemoryHost([node])).generate(node)

        assert _shape(toc.tree) == [("", [("", [("Deep", [])])]), ("Top", [])]
        assert [n.label for n in toc.iter_nodes()] == ["", "", "Deep", "Top"]

    def test_unsupported_entity_type(self) -> None:
        """Test that generating for a non-supported entity type fails."""
        paragraph = make_paragraph(6, "<h2>A</h2>")
        generator = TableOfContentsGenerator(MemoryHost([paragraph]))

        with pytest.raises(UnsupportedEntityError) as exc_info:
            generator.generate(paragraph)
        assert exc_info.value.entity_type == "paragraph"
        assert generator.lookup(paragraph) is None

    def test_supported_types_are_configurable(self) -> None:
        """Test that other top-level entity types can be enabled."""
        paragraph = make_paragraph(7, "<h2>A</h2>")
        toc = TableOfContentsGenerator(MemoryHost()).generate(
            paragraph, TocSettings(supported_entity_types=["paragraph"])
        )
        assert [n.label for n in toc.tree] == ["A"]

    def test_generation_is_logged(self, intro_details_node: MemoryEntity, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a summary is logged at info level."""
        with caplog.at_level(logging.INFO, logger="fieldtoc.toc.generator"):
            TableOfContentsGenerator(MemoryHost()).generate(intro_details_node)
        assert "2 heading(s)" in caplog.text


@pytest.mark.unit
class TestGenerationCache:
    """Test the memoization contract."""

    def test_second_call_returns_identical_object(self, intro_details_node: MemoryEntity) -> None:
        """Test that a repeated generate returns the cached ToC."""
        generator = TableOfContentsGenerator(MemoryHost())
        first = generator.generate(intro_details_node)
        second = generator.generate(intro_details_node)

        assert second is first
        assert second.tree is first.tree

    def test_lookup_without_generation(self, intro_details_node: MemoryEntity) -> None:
        """Test that lookup never generates."""
        generator = TableOfContentsGenerator(MemoryHost())

        assert generator.lookup(intro_details_node) is None
        toc = generator.generate(intro_details_node)
        assert generator.lookup(intro_details_node) is toc

    def test_settings_are_not_part_of_the_key(self, intro_details_node: MemoryEntity) -> None:
        """Test that a cached ToC is returned even for different settings."""
        generator = TableOfContentsGenerator(MemoryHost())
        first = generator.generate(intro_details_node, TocSettings(is_relative=True))
        second = generator.generate(intro_details_node, TocSettings(is_relative=False))

        assert second is first
        assert second.is_relative

    def test_use_cache_false_regenerates_and_replaces(self, intro_details_node: MemoryEntity) -> None:
        """Test that bypassing the cache regenerates and overwrites the entry."""
        generator = TableOfContentsGenerator(MemoryHost())
        first = generator.generate(intro_details_node, TocSettings(is_relative=True))
        fresh = generator.generate(intro_details_node, TocSettings(is_relative=False), use_cache=False)

        assert fresh is not first
        assert not fresh.is_relative
        assert generator.lookup(intro_details_node) is fresh

    def test_shared_cache_between_generators(self, intro_details_node: MemoryEntity) -> None:
        """Test that generators sharing a cache share results."""
        cache = GenerationCache()
        toc = TableOfContentsGenerator(MemoryHost(), cache).generate(intro_details_node)

        assert TableOfContentsGenerator(MemoryHost(), cache).lookup(intro_details_node) is toc
        assert 1 in cache
        assert list(cache) == [1]
        assert len(cache) == 1

    def test_clear(self, intro_details_node: MemoryEntity) -> None:
        """Test that clearing drops every entry."""
        generator = TableOfContentsGenerator(MemoryHost())
        generator.generate(intro_details_node)
        generator.cache.clear()

        assert len(generator.cache) == 0
        assert generator.lookup(intro_details_node) is None
