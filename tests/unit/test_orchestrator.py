"""Unit tests for LyricLoop orchestrator."""

from random import Random
from typing import Any, Self
from unittest.mock import MagicMock

import pytest

from lyricloop.config import LyricLoopConfig
from lyricloop.importers import CommunityCatalogAdapter, ImportAdapterRegistry
from lyricloop.infra.memory.repository import InMemoryVocabularyRepository
from lyricloop.models.catalog import CatalogSource
from lyricloop.models.session import QuizExercise, SessionMix
from lyricloop.orchestrator import LyricLoop


class ConfiguredRepository(InMemoryVocabularyRepository):
    """Repository that takes its settings from a config class."""

    config_class = MagicMock()
    created_from_config = False

    @classmethod
    async def from_config(cls, config: Any) -> Self:
        cls.created_from_config = True
        return cls()


class LocalCommunityAdapter(CommunityCatalogAdapter):
    """Stand-in community adapter a host might register."""


class ClosingRepository(InMemoryVocabularyRepository):
    """Repository recording whether it was closed."""

    closed = False

    async def close(self) -> None:
        type(self).closed = True


class TestLyricLoopInit:
    """Tests for LyricLoop instantiation."""

    @pytest.mark.asyncio
    async def test_custom_config_dict(self, config: LyricLoopConfig) -> None:
        async with LyricLoop(
            InMemoryVocabularyRepository, storage_custom_config={}, config=config
        ) as loop:
            assert loop._connected is True
        assert loop._connected is False

    @pytest.mark.asyncio
    async def test_config_class(self, config: LyricLoopConfig) -> None:
        async with LyricLoop(ConfiguredRepository, config=config):
            pass

        assert ConfiguredRepository.created_from_config is True
        ConfiguredRepository.config_class.assert_called_once()

    @pytest.mark.asyncio
    async def test_missing_custom_config(self, config: LyricLoopConfig) -> None:
        loop = LyricLoop(InMemoryVocabularyRepository, config=config)

        with pytest.raises(ValueError, match="custom_config"):
            await loop.__aenter__()

    @pytest.mark.asyncio
    async def test_storage_closed_on_exit(self, config: LyricLoopConfig) -> None:
        async with LyricLoop(ClosingRepository, storage_custom_config={}, config=config):
            assert ClosingRepository.closed is False

        assert ClosingRepository.closed is True

    def test_adapters_resolved_through_registry(self, config: LyricLoopConfig) -> None:
        builtin = ImportAdapterRegistry.unregister(CatalogSource.COMMUNITY)
        try:
            ImportAdapterRegistry.register(LocalCommunityAdapter)
            loop = LyricLoop(InMemoryVocabularyRepository, config=config)
        finally:
            ImportAdapterRegistry.unregister(CatalogSource.COMMUNITY)
            ImportAdapterRegistry.register(builtin)

        assert isinstance(loop._community_adapter, LocalCommunityAdapter)
        assert loop._community_adapter._limit == config.matching.parse_limit
        assert loop._metadata_adapter.source == CatalogSource.METADATA

    @pytest.mark.asyncio
    async def test_requires_connection(self, config: LyricLoopConfig) -> None:
        loop = LyricLoop(InMemoryVocabularyRepository, storage_custom_config={}, config=config)

        with pytest.raises(RuntimeError):
            await loop.get_due_items("learner-1")


class TestLyricLoopOperations:
    """Tests for LyricLoop operations over the in-memory repository."""

    def test_matching_works_without_connection(self, config: LyricLoopConfig) -> None:
        loop = LyricLoop(InMemoryVocabularyRepository, config=config)

        results = loop.assemble_search_results(
            {"tracks": {"items": [{"id": "t1", "name": "Hello", "artists": [{"name": "Adele"}]}]}},
            None,
        )

        assert len(results) == 1
        assert results[0].metadata_source_id == "t1"
        assert results[0].confidence == 100

    def test_both_catalogs_failed(self, config: LyricLoopConfig) -> None:
        loop = LyricLoop(InMemoryVocabularyRepository, config=config)

        assert loop.assemble_search_results(None, None) == []

    @pytest.mark.asyncio
    async def test_add_word_is_due_immediately(self, config: LyricLoopConfig, clock: Any) -> None:
        async with LyricLoop(
            InMemoryVocabularyRepository, storage_custom_config={}, config=config, clock=clock
        ) as loop:
            item = await loop.add_word("learner-1", "despacito", "slowly", "es", item_id="w1")
            due = await loop.get_due_items("learner-1")

        assert item.scheduling.next_review_at == clock.now()
        assert [d.id for d in due] == ["w1"]

    @pytest.mark.asyncio
    async def test_review_cycle(self, config: LyricLoopConfig, clock: Any) -> None:
        async with LyricLoop(
            InMemoryVocabularyRepository, storage_custom_config={}, config=config, clock=clock
        ) as loop:
            await loop.add_word("learner-1", "despacito", "slowly", "es", item_id="w1")

            first = await loop.submit_review("w1", 4)
            assert await loop.get_due_items("learner-1") == []

            clock.advance(days=1)
            second, correct = await loop.submit_answer("w1", "Slowly")
            stats = await loop.get_stats("learner-1")

        assert first.scheduling.interval_days == 1
        assert correct is True
        assert second.scheduling.interval_days == 6
        assert stats.total_words == 1
        assert stats.due_count == 0
        assert stats.streak == 1

    @pytest.mark.asyncio
    async def test_build_session(self, config: LyricLoopConfig, clock: Any) -> None:
        async with LyricLoop(
            InMemoryVocabularyRepository,
            storage_custom_config={},
            config=config,
            clock=clock,
            rng=Random(3),
        ) as loop:
            for i, (word, translation) in enumerate(
                [("ritmo", "rhythm"), ("suave", "soft"), ("imán", "magnet")]
            ):
                await loop.add_word("learner-1", word, translation, "es", item_id=f"w{i}")
                clock.advance(minutes=1)

            units = await loop.build_session("learner-1", 2, SessionMix.QUIZ)
            empty = await loop.build_session("learner-1", 0, SessionMix.QUIZ)
            stranger = await loop.build_session("someone-else", 5, SessionMix.MIXED)

        assert [u.item_ids for u in units] == [["w0"], ["w1"]]
        assert all(isinstance(u, QuizExercise) for u in units)
        assert empty == []
        assert stranger == []

    @pytest.mark.asyncio
    async def test_submit_unknown_item(self, config: LyricLoopConfig) -> None:
        async with LyricLoop(
            InMemoryVocabularyRepository, storage_custom_config={}, config=config
        ) as loop:
            with pytest.raises(KeyError):
                await loop.submit_review("missing", 3)
