"""Shared pytest fixtures for ScriptMark tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from scriptmark.config import get_settings
from scriptmark.models.document import AnnotatedDocument, StyleSpan

if TYPE_CHECKING:
    from collections.abc import Generator


# The worked example: heading, untagged action paragraph, character cue.
SCREENPLAY_TEXT = "INT. ROOM\n\nA man enters.\n\nJOHN"


@pytest.fixture
def screenplay_doc() -> AnnotatedDocument:
    """Three paragraphs: scene heading, action (untagged), character."""
    return AnnotatedDocument(
        text=SCREENPLAY_TEXT,
        spans=(
            StyleSpan(0, 9, "scene-heading"),
            StyleSpan(26, 30, "character"),
        ),
        name="pilot.fountain",
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None]:
    """Reset the cached Settings so env changes in one test do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
