"""Test utilities for the fieldtoc test suite.

This module provides builders for in-memory entities and content documents,
plus temporary directory helpers shared by the unit and integration tests.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Any, Optional

from fieldtoc.host.memory import MemoryEntity, MemoryField


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)


def make_field(name: str, field_type: str, *values: Any) -> MemoryField:
    """Create a field holding ``values`` in delta order."""
    return MemoryField(name=name, field_type=field_type, values=list(values))


def make_node(
    entity_id: Any = 1,
    *fields: MemoryField,
    bundle: str = "page",
    display: Optional[list[str]] = None,
    url: Optional[str] = None,
) -> MemoryEntity:
    """Create a top-level ``node`` entity."""
    return MemoryEntity(
        entity_type="node", entity_id=entity_id, bundle=bundle, fields=list(fields), display=display, url=url
    )


def make_paragraph(entity_id: Any, html: str, bundle: str = "text", field_name: str = "field_text") -> MemoryEntity:
    """Create a ``paragraph`` sub-entity with a single rich-text field."""
    return MemoryEntity(
        entity_type="paragraph",
        entity_id=entity_id,
        bundle=bundle,
        fields=[make_field(field_name, "text_long", html)],
    )


def article_document() -> dict:
    """Content document with a title heading field, a body and two paragraphs."""
    return {
        "type": "node",
        "id": 7,
        "bundle": "article",
        "url": "/articles/7",
        "display": ["field_title", "field_toc", "body", "field_sections"],
        "fields": [
            {"name": "field_title", "type": "string", "values": ["Overview"]},
            {"name": "field_toc", "type": "tccl_table_of_contents", "values": [{"enabled": 1, "title": "Contents"}]},
            {"name": "body", "type": "text_long", "values": ["<h2>Intro</h2><p>Welcome.</p><h3>Details</h3>"]},
            {
                "name": "field_sections",
                "type": "entity_reference_revisions",
                "values": [
                    {
                        "type": "paragraph",
                        "id": 70,
                        "bundle": "text",
                        "fields": [{"name": "field_text", "type": "text_long", "values": ["<h2>Usage</h2>"]}],
                    },
                    {
                        "type": "paragraph",
                        "id": 71,
                        "bundle": "text",
                        "fields": [{"name": "field_text", "type": "text_long", "values": ["<h2>Intro</h2>"]}],
                    },
                ],
            },
            {"name": "field_notes", "type": "text_long", "values": ["<h2>Hidden notes</h2>"]},
        ],
    }
