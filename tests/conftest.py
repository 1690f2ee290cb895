"""Pytest configuration and shared fixtures for the fieldtoc test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import article_document, cleanup_test_dir, create_test_temp_dir, make_field, make_node

from fieldtoc.host.memory import MemoryEntity, MemoryHost, entity_from_dict
from fieldtoc.options.toc import TocSettings
from fieldtoc.toc.generator import TableOfContentsGenerator

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=30)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's FIELDTOC_CONFIG from leaking into tests."""
    monkeypatch.delenv("FIELDTOC_CONFIG", raising=False)


@pytest.fixture
def intro_details_node() -> MemoryEntity:
    """Node whose body holds an h2 followed by an h3."""
    return make_node(1, make_field("body", "text_long", "<h2>Intro</h2><p>x</p><h3>Details</h3>"))


@pytest.fixture
def article() -> MemoryEntity:
    """Article entity built from :func:`utils.article_document`."""
    return entity_from_dict(article_document())


@pytest.fixture
def article_host(article: MemoryEntity) -> MemoryHost:
    """Memory host with the article registered."""
    return MemoryHost([article])


@pytest.fixture
def article_settings() -> TocSettings:
    """Settings registering the article title as a heading field."""
    return TocSettings(heading_fields=["node:article:field_title"], is_relative=True)


@pytest.fixture
def article_generator(article_host: MemoryHost) -> TableOfContentsGenerator:
    """Generator over the article host with a fresh cache."""
    return TableOfContentsGenerator(article_host)
