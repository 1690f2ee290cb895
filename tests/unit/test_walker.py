#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the recursive entity walk."""
import pytest
from utils import make_field, make_node, make_paragraph

from fieldtoc.constants import TOC_FIELD_TYPE
from fieldtoc.exceptions import ExtractionError, FieldShapeError
from fieldtoc.host.base import FieldItem
from fieldtoc.host.memory import MemoryEntity, MemoryHost
from fieldtoc.options.toc import TocSettings
from fieldtoc.toc.patches import FieldKey, FragmentPatch, HeadingMarkerPatch
from fieldtoc.toc.walker import EntityWalker, FieldKind, walk


def _labels(headings) -> list[tuple[str, int]]:
    return [(h.label, h.level) for h in headings]


@pytest.mark.unit
class TestFieldClassification:
    """Test the precedence of field kinds."""

    def setup_method(self) -> None:
        """Set up a host and settings shared by the classification tests."""
        self.host = MemoryHost()
        self.settings = TocSettings(heading_fields=["node:page:field_title", "node:page:field_toc"])
        self.walker = EntityWalker(self.host, self.settings)

    def test_toc_field_wins_over_everything(self) -> None:
        """Test that the ToC field type is skipped even when registered and scannable."""
        settings = self.settings.create_updated(scannable_field_types=[TOC_FIELD_TYPE])
        walker = EntityWalker(self.host, settings)
        item = FieldItem("field_toc", TOC_FIELD_TYPE, 0, {"enabled": True})

        assert walker.classify("node", "page", item).kind is FieldKind.TOC_FIELD

    def test_sub_entity_reference(self) -> None:
        """Test that references to sub-entity types are recursed into."""
        paragraph = make_paragraph(10, "<h2>P</h2>")
        item = FieldItem("field_sections", "entity_reference_revisions", 0, paragraph)
        classified = self.walker.classify("node", "page", item)

        assert classified.kind is FieldKind.SUB_ENTITY
        assert classified.sub_entity is paragraph

    def test_reference_to_other_entity_type_is_ignored(self) -> None:
        """Test that references to non sub-entity types are not followed."""
        other = MemoryEntity(entity_type="taxonomy_term", entity_id=3)
        item = FieldItem("field_tags", "entity_reference", 0, other)
        assert self.walker.classify("node", "page", item).kind is FieldKind.IGNORED

    def test_recursion_disabled(self) -> None:
        """Test that sub-entities are ignored when recursion is off."""
        walker = EntityWalker(self.host, self.settings.create_updated(recurse_into_sub_entities=False))
        item = FieldItem("field_sections", "entity_reference_revisions", 0, make_paragraph(10, "<h2>P</h2>"))
        assert walker.classify("node", "page", item).kind is FieldKind.IGNORED

    def test_heading_field_wins_over_scannable(self) -> None:
        """Test that a registered heading field of a scannable type is a pure heading."""
        item = FieldItem("field_title", "text_long", 0, "<h2>Ignored</h2>")
        assert self.walker.classify("node", "page", item).kind is FieldKind.PURE_HEADING

    def test_heading_field_is_bundle_specific(self) -> None:
        """Test that registration only matches its entity type and bundle."""
        item = FieldItem("field_title", "string", 0, "Title")
        assert self.walker.classify("node", "article", item).kind is FieldKind.IGNORED

    def test_scannable(self) -> None:
        """Test that scannable field types are scanned."""
        item = FieldItem("body", "text_with_summary", 0, "<h2>A</h2>")
        assert self.walker.classify("node", "page", item).kind is FieldKind.SCANNABLE

    def test_everything_else_is_ignored(self) -> None:
        """Test that other field types contribute nothing."""
        item = FieldItem("field_count", "integer", 0, 5)
        assert self.walker.classify("node", "page", item).kind is FieldKind.IGNORED


@pytest.mark.unit
class TestEntityWalk:
    """Test heading collection across fields and sub-entities."""

    def test_intro_details_scenario(self, intro_details_node: MemoryEntity) -> None:
        """Test an h2 followed by an h3 in one body field."""
        headings, patches = walk(MemoryHost([intro_details_node]), intro_details_node, TocSettings())

        assert [(h.label, h.anchor_id, h.level) for h in headings] == [("Intro", "Intro", 0), ("Details", "Details", 1)]
        patch = patches.get(FieldKey("node", 1, "body", 0))
        assert isinstance(patch, FragmentPatch)
        assert 'id="Intro"' in patch.fragment
        assert 'id="Details"' in patch.fragment

    def test_heading_field_then_body(self) -> None:
        """Test a registered title field followed by a body heading."""
        node = make_node(
            2,
            make_field("field_title", "string", "Overview"),
            make_field("body", "text_long", "<h2>Intro</h2>"),
        )
        settings = TocSettings(heading_fields=["node:page:field_title"])
        headings, patches = walk(MemoryHost([node]), node, settings)

        assert _labels(headings) == [("Overview", 0), ("Intro", 0)]
        assert patches.get(FieldKey("node", 2, "field_title", 0)) == HeadingMarkerPatch("Overview")
        assert isinstance(patches.get(FieldKey("node", 2, "body", 0)), FragmentPatch)

    def test_toc_field_never_contributes(self) -> None:
        """Test that a ToC field holding heading-like HTML adds nothing."""
        node = make_node(
            3,
            make_field("field_toc", TOC_FIELD_TYPE, "<h2>Not me</h2>"),
            make_field("body", "text_long", "<h2>Me</h2>"),
        )
        settings = TocSettings(scannable_field_types=["text_long", TOC_FIELD_TYPE])
        headings, patches = walk(MemoryHost([node]), node, settings)

        assert _labels(headings) == [("Me", 0)]
        assert FieldKey("node", 3, "field_toc", 0) not in patches

    def test_sub_entities_are_walked_in_place(self) -> None:
        """Test that paragraph headings appear where the paragraphs are displayed."""
        node = make_node(
            4,
            make_field("body", "text_long", "<h2>Start</h2>"),
            make_field(
                "field_sections",
                "entity_reference_revisions",
                make_paragraph(40, "<h3>Nested</h3>"),
                make_paragraph(41, "<h2>Second</h2>"),
            ),
            make_field("field_footer", "text_long", "<h2>End</h2>"),
        )
        headings, patches = walk(MemoryHost([node]), node, TocSettings())

        assert _labels(headings) == [("Start", 0), ("Nested", 1), ("Second", 0), ("End", 0)]
        assert FieldKey("paragraph", 40, "field_text", 0) in patches
        assert FieldKey("paragraph", 41, "field_text", 0) in patches
        assert FieldKey("node", 4, "field_sections", 0) not in patches

    def test_heading_field_on_sub_entity(self) -> None:
        """Test that heading fields of sub-entities are honored with their own bundle."""
        heading_paragraph = MemoryEntity(
            entity_type="paragraph",
            entity_id=50,
            bundle="heading",
            fields=[make_field("field_heading", "string", "Chapter 1")],
        )
        node = make_node(5, make_field("field_sections", "entity_reference_revisions", heading_paragraph))
        settings = TocSettings(heading_fields="paragraph:heading:field_heading")
        headings, patches = walk(MemoryHost([node]), node, settings)

        assert [(h.label, h.anchor_id) for h in headings] == [("Chapter 1", "Chapter-1")]
        assert patches.get(FieldKey("paragraph", 50, "field_heading", 0)) == HeadingMarkerPatch("Chapter-1")

    def test_recursion_disabled_skips_sub_entities(self) -> None:
        """Test that nothing is collected from paragraphs when recursion is off."""
        node = make_node(
            6,
            make_field("body", "text_long", "<h2>Top</h2>"),
            make_field("field_sections", "entity_reference_revisions", make_paragraph(60, "<h2>Inside</h2>")),
        )
        headings, patches = walk(MemoryHost([node]), node, TocSettings(recurse_into_sub_entities=False))

        assert _labels(headings) == [("Top", 0)]
        assert len(patches) == 1

    def test_display_order_is_followed(self) -> None:
        """Test that display configuration overrides declaration order and hides fields."""
        node = make_node(
            7,
            make_field("field_a", "text_long", "<h2>A</h2>"),
            make_field("field_b", "text_long", "<h2>B</h2>"),
            make_field("field_hidden", "text_long", "<h2>Hidden</h2>"),
            display=["field_b", "field_a"],
        )
        headings, patches = walk(MemoryHost([node]), node, TocSettings())

        assert _labels(headings) == [("B", 0), ("A", 0)]
        assert FieldKey("node", 7, "field_hidden", 0) not in patches

    def test_declaration_order_without_display(self) -> None:
        """Test that declaration order is used when no display configuration exists."""
        node = make_node(
            8,
            make_field("field_a", "text_long", "<h2>A</h2>"),
            make_field("field_b", "text_long", "<h2>B</h2>"),
        )
        headings, _ = walk(MemoryHost([node]), node, TocSettings())
        assert _labels(headings) == [("A", 0), ("B", 0)]

    def test_each_delta_is_patched_separately(self) -> None:
        """Test that multi-value fields get one patch per value with headings."""
        node = make_node(9, make_field("body", "text_long", "<h2>First</h2>", "<p>none</p>", "<h2>Third</h2>"))
        headings, patches = walk(MemoryHost([node]), node, TocSettings())

        assert _labels(headings) == [("First", 0), ("Third", 0)]
        assert FieldKey("node", 9, "body", 0) in patches
        assert FieldKey("node", 9, "body", 1) not in patches
        assert FieldKey("node", 9, "body", 2) in patches

    def test_anchor_ids_unique_across_fields(self) -> None:
        """Test that repeated labels in different fields and entities get distinct ids."""
        node = make_node(
            10,
            make_field("field_title", "string", "Intro"),
            make_field("body", "text_long", "<h2>Intro</h2>"),
            make_field("field_sections", "entity_reference_revisions", make_paragraph(100, "<h2>Intro</h2>")),
        )
        settings = TocSettings(heading_fields=["node:page:field_title"])
        headings, _ = walk(MemoryHost([node]), node, settings)

        assert [h.anchor_id for h in headings] == ["Intro", "Intro-2", "Intro-3"]

    def test_empty_heading_field_is_skipped(self) -> None:
        """Test that heading fields with blank values produce nothing."""
        node = make_node(11, make_field("field_title", "string", "   "))
        settings = TocSettings(heading_fields=["node:page:field_title"])
        headings, patches = walk(MemoryHost([node]), node, settings)

        assert headings == []
        assert len(patches) == 0

    def test_heading_field_label_is_truncated(self) -> None:
        """Test that heading field labels respect the maximum length."""
        node = make_node(12, make_field("field_title", "string", "A very long title"))
        settings = TocSettings(heading_fields=["node:page:field_title"], heading_label_max_length=6)
        headings, _ = walk(MemoryHost([node]), node, settings)

        assert headings[0].label == "A very"
        assert headings[0].anchor_id == "A-very"

    def test_heading_field_whitespace_is_collapsed(self) -> None:
        """Test that runs of whitespace inside heading field labels collapse to one space."""
        node = make_node(13, make_field("field_title", "string", "  Getting \n\t started  "))
        settings = TocSettings(heading_fields=["node:page:field_title"])
        headings, _ = walk(MemoryHost([node]), node, settings)

        assert headings[0].label == "Getting started"

    def test_walk_result_exposes_registry(self, intro_details_node: MemoryEntity) -> None:
        """Test that the walk result carries the ids used on the page."""
        result = EntityWalker(MemoryHost(), TocSettings()).walk(intro_details_node)

        assert "Intro" in result.registry
        assert "Details" in result.registry


class _BrokenHost(MemoryHost):
    """Host returning raw dictionaries instead of field items."""

    def get_fields(self, entity):
        return [{"name": "body", "type": "text_long"}]


class _BadDeltaHost(MemoryHost):
    """Host returning a field item with a negative delta."""

    def get_fields(self, entity):
        return [FieldItem("body", "text_long", -1, "<h2>A</h2>")]


@pytest.mark.unit
class TestMalformedHost:
    """Test rejection of malformed field items."""

    @pytest.mark.parametrize("host_class", [_BrokenHost, _BadDeltaHost])
    def test_malformed_items_raise(self, host_class) -> None:
        """Test that malformed field items raise FieldShapeError."""
        node = make_node(1)
        with pytest.raises(FieldShapeError):
            walk(host_class([node]), node, TocSettings())

    def test_non_string_markup_raises(self) -> None:
        """Test that a host rendering a field as bytes raises ExtractionError."""

        class BytesHost(MemoryHost):
            def render_field(self, item, view_mode):
                return b"<h2>A</h2>"

        node = make_node(1, make_field("body", "text_long", "<h2>A</h2>"))
        with pytest.raises(ExtractionError) as exc_info:
            walk(BytesHost([node]), node, TocSettings())
        assert exc_info.value.field_name == "body"
