"""Pytest configuration and fixtures."""

from typing import Any

import pytest

from tests.factories import (
    NESTED_LISTING_URL,
    SOURCE_LISTING_URL,
    FakeContentFetcher,
    dir_entry,
    file_entry,
)


@pytest.fixture
def source_tree() -> dict[str, Any]:
    """Listings for src/ (3 files and lib/) and src/lib/ (2 files)."""
    return {
        SOURCE_LISTING_URL: [
            file_entry("a.py"),
            dir_entry("lib"),
            file_entry("b.py"),
            file_entry("c.py"),
        ],
        NESTED_LISTING_URL: [
            file_entry("d.py", "src/lib"),
            file_entry("e.py", "src/lib"),
        ],
    }


@pytest.fixture
def fake_fetcher(source_tree: dict[str, Any]) -> FakeContentFetcher:
    return FakeContentFetcher(listings=source_tree)
