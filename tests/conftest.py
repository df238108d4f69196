"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from bibsql.models import (  # noqa: E402
    BibEntry,
    EntryType,
    GroupKind,
    GroupNode,
    Library,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ARTICLE = EntryType(name="Article", required=("author", "title"))
BOOK = EntryType(name="Book", required=("title",), optional=("editor",))


@pytest.fixture
def article() -> EntryType:
    """Article type requiring author and title."""
    return ARTICLE


@pytest.fixture
def book() -> EntryType:
    """Book type requiring title, with optional editor."""
    return BOOK


@pytest.fixture
def make_entry() -> Callable[..., BibEntry]:
    """Factory for entries; defaults to an Article with no fields."""

    def _factory(
        entry_id: str = "e1",
        *,
        entry_type: EntryType = ARTICLE,
        cite_key: str | None = None,
        **fields: str | None,
    ) -> BibEntry:
        return BibEntry(
            entry_id=entry_id,
            entry_type=entry_type,
            cite_key=cite_key,
            fields=fields,
        )

    return _factory


@pytest.fixture
def group_tree() -> GroupNode:
    """Root -> {A, B}, A -> {C}; A holds e1 and e2 explicitly."""
    c = GroupNode(label="C", kind=GroupKind.EXPLICIT, members=("e2",))
    a = GroupNode(label="A", kind=GroupKind.EXPLICIT, children=(c,), members=("e1", "e2"))
    b = GroupNode(label="B", kind=GroupKind.KEYWORD)
    return GroupNode(label="Root", kind=GroupKind.ALL_ENTRIES, children=(a, b))


@pytest.fixture
def library(make_entry: Callable[..., BibEntry], group_tree: GroupNode) -> Library:
    """Two types, two entries and the standard test group tree."""
    return Library(
        entry_types=(ARTICLE, BOOK),
        entries=(
            make_entry("e2", entry_type=BOOK, cite_key="Roe2019", title="Handbook"),
            make_entry("e1", cite_key="Doe2020", author="Doe", title="Study"),
        ),
        groups=group_tree,
    )


@pytest.fixture
def sample_library_path() -> Path:
    """Path to the sample JSON library document."""
    return FIXTURES_DIR / "library" / "sample_library.json"
