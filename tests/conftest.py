"""Shared test fixtures for lyricloop.

This module provides pytest fixtures used across all tests.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock

import pytest

from lyricloop.config import LyricLoopConfig, MatchingSettings, SchedulerSettings, SessionSettings
from lyricloop.infra.memory.repository import InMemoryVocabularyRepository
from lyricloop.models.catalog import CommunityRecord, MetadataRecord
from lyricloop.models.vocabulary import SchedulingState, VocabularyItem

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


class FixedClock:
    """Clock frozen at a given time, advanced manually."""

    def __init__(self, current: datetime = NOW) -> None:
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


# Settings fixtures (explicit values, independent of any .env file)
@pytest.fixture
def matching_settings() -> MatchingSettings:
    return MatchingSettings(acceptance_threshold=50, include_community_only=False, parse_limit=10)


@pytest.fixture
def scheduler_settings() -> SchedulerSettings:
    return SchedulerSettings()


@pytest.fixture
def session_settings() -> SessionSettings:
    return SessionSettings()


@pytest.fixture
def config(
    matching_settings: MatchingSettings,
    scheduler_settings: SchedulerSettings,
    session_settings: SessionSettings,
) -> LyricLoopConfig:
    return LyricLoopConfig(
        matching=matching_settings,
        scheduler=scheduler_settings,
        session=session_settings,
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


# Mock fixtures
@pytest.fixture
def mock_storage() -> AsyncMock:
    """Create mock storage interface."""
    storage = AsyncMock()
    storage.get_vocabulary_item.return_value = None
    storage.save_vocabulary_item.return_value = "test-item-id"
    storage.save_vocabulary_scheduling_state.return_value = None
    storage.query_due_vocabulary.return_value = []
    storage.list_other_vocabulary.return_value = []
    storage.list_vocabulary.return_value = []
    return storage


# Sample data fixtures
@pytest.fixture
def make_item() -> Callable[..., VocabularyItem]:
    """Factory for VocabularyItems, due at NOW unless told otherwise."""

    def _make(
        item_id: str,
        word: str = "corazón",
        translation: str = "heart",
        *,
        owner_id: str = "learner-1",
        language: str = "es",
        context: str | None = None,
        next_review_at: datetime = NOW,
        **scheduling: Any,
    ) -> VocabularyItem:
        return VocabularyItem(
            id=item_id,
            owner_id=owner_id,
            word=word,
            translation=translation,
            language=language,
            song_name="Despacito",
            context=context,
            scheduling=SchedulingState(next_review_at=next_review_at, **scheduling),
        )

    return _make


@pytest.fixture
def spanish_items(make_item: Callable[..., VocabularyItem]) -> list[VocabularyItem]:
    """Six due Spanish words, the first three with lyric context."""
    return [
        make_item(
            "w1",
            "despacito",
            "slowly",
            context="Quiero respirar tu cuello despacito",
            next_review_at=NOW - timedelta(days=3),
        ),
        make_item(
            "w2",
            "cuello",
            "neck",
            context="Deja que te diga cosas al oído para que te acuerdes si no estás conmigo",
            next_review_at=NOW - timedelta(days=2),
        ),
        make_item(
            "w3",
            "laberinto",
            "labyrinth",
            context="Quiero ver bailar tu pelo",
            next_review_at=NOW - timedelta(days=1),
        ),
        make_item("w4", "imán", "magnet", next_review_at=NOW - timedelta(hours=5)),
        make_item("w5", "ritmo", "rhythm", next_review_at=NOW - timedelta(hours=1)),
        make_item("w6", "suave", "soft", next_review_at=NOW),
    ]


@pytest.fixture
def memory_storage(spanish_items: list[VocabularyItem]) -> InMemoryVocabularyRepository:
    return InMemoryVocabularyRepository(spanish_items)


@pytest.fixture
def metadata_record() -> MetadataRecord:
    return MetadataRecord(
        source_id="sp-despacito",
        title="Despacito",
        primary_artist="Luis Fonsi",
        duration_seconds=227,
        album="Vida",
        artists=["Luis Fonsi", "Daddy Yankee"],
    )


@pytest.fixture
def community_record() -> CommunityRecord:
    return CommunityRecord(
        source_id="yt-kJQP7kiw5Fk",
        title="despacito (Official Video)",
        primary_artist="LuisFonsiVEVO",
        duration_seconds=228,
        views=8_000_000_000,
        cover_image_url="https://i.ytimg.com/vi/kJQP7kiw5Fk/hq720.jpg",
    )


@pytest.fixture
def now() -> datetime:
    return NOW
