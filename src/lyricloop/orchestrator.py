"""LyricLoop orchestrator for high-level operations.

This module provides the main entry point for the lyricloop package,
wiring catalog matching, review scheduling and session building over a
vocabulary storage implementation.
"""

import random
import uuid
from typing import Any

from lyricloop.config import LyricLoopConfig
from lyricloop.domain.scheduling import initial_scheduling_state
from lyricloop.importers import ImportAdapterRegistry
from lyricloop.interfaces.clock import ClockInterface
from lyricloop.interfaces.storage import VocabularyStorageInterface
from lyricloop.logging import get_logger, learner_context
from lyricloop.models.catalog import CatalogSource, CommunityRecord, MetadataRecord, UnifiedResult
from lyricloop.models.session import ExerciseUnit, SessionMix
from lyricloop.models.vocabulary import DifficultyBand, VocabularyItem, VocabularyStats
from lyricloop.services.matcher import CrossCatalogMatcher
from lyricloop.services.review_service import ReviewService
from lyricloop.services.session_builder import SessionBuilder
from lyricloop.services.similarity import SimilarityScorer
from lyricloop.utils.clock import SystemClock

__all__ = ["LyricLoop"]

logger = get_logger(__name__)


class LyricLoop:
    """Main orchestrator for lyricloop.

    Accepts a storage implementation class. Config is loaded from .env
    automatically. For custom implementations, set config_class = None
    and pass a storage_custom_config dict.

    Catalog matching is pure and works without a connection; review and
    session operations need the async context.

    Example:
        async with LyricLoop(
            storage_class=InMemoryVocabularyRepository,
            storage_custom_config={},
        ) as loop:
            results = loop.assemble_search_results(metadata_payload, community_payload)
            session = await loop.build_session(owner_id, 10, SessionMix.MIXED)
    """

    def __init__(
        self,
        storage_class: type[VocabularyStorageInterface],
        *,
        storage_custom_config: dict[str, Any] | None = None,
        config: LyricLoopConfig | None = None,
        clock: ClockInterface | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize LyricLoop with an implementation class.

        Args:
            storage_class: Storage implementation class
            storage_custom_config: Custom config dict if storage_class.config_class is None
            config: Settings (loaded from .env when omitted)
            clock: Time source (system clock when omitted)
            rng: Random source for session shuffling
        """
        self._config = config or LyricLoopConfig()
        self._storage_class = storage_class
        self._storage_custom_config = storage_custom_config
        self._clock = clock or SystemClock()
        self._rng = rng or random.Random()

        self._matcher = CrossCatalogMatcher(
            self._config.matching,
            SimilarityScorer(self._config.matching),
        )
        parse_limit = self._config.matching.parse_limit
        self._metadata_adapter = ImportAdapterRegistry.create(CatalogSource.METADATA, parse_limit)
        self._community_adapter = ImportAdapterRegistry.create(CatalogSource.COMMUNITY, parse_limit)

        # Created on connect
        self._storage: VocabularyStorageInterface | None = None
        self._review_service: ReviewService | None = None
        self._session_builder: SessionBuilder | None = None

        self._connected = False

    async def _instantiate_class(
        self,
        cls: type,
        custom_config: dict[str, Any] | None,
    ) -> Any:
        """Instantiate an implementation class.

        If cls.config_class is set, instantiate config (loads from .env).
        If cls.config_class is None, use custom_config dict.
        """
        config_class = getattr(cls, "config_class", None)

        if config_class is None:
            if custom_config is None:
                raise ValueError(
                    f"{cls.__name__} has config_class=None but no custom_config provided"
                )
            return await cls.from_dict(custom_config)
        config = config_class()
        return await cls.from_config(config)

    async def _connect(self) -> None:
        if self._connected:
            return

        self._storage = await self._instantiate_class(
            self._storage_class, self._storage_custom_config
        )
        self._review_service = ReviewService(
            self._storage,
            self._clock,
            scheduler_settings=self._config.scheduler,
            session_settings=self._config.session,
        )
        self._session_builder = SessionBuilder(self._storage, self._config.session, self._rng)

        self._connected = True
        logger.info("lyricloop_connected", storage=self._storage_class.__name__)

    async def _disconnect(self) -> None:
        if self._storage and hasattr(self._storage, "close"):
            await self._storage.close()

        self._connected = False
        logger.info("lyricloop_disconnected")

    async def __aenter__(self) -> "LyricLoop":
        """Async context manager entry - connects automatically."""
        await self._connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - disconnects automatically."""
        await self._disconnect()

    def _ensure_connected(self) -> None:
        if not self._connected:
            raise RuntimeError("LyricLoop not connected. Use 'async with LyricLoop(...) as loop:'")

    # === CATALOG MATCHING ===

    def assemble_search_results(
        self,
        raw_metadata: dict[str, Any] | list[Any] | None,
        raw_community: dict[str, Any] | list[Any] | None,
    ) -> list[UnifiedResult]:
        """Parse both catalogs' search payloads and match them.

        A catalog whose search failed is passed as None and contributes
        no records.

        Args:
            raw_metadata: Metadata catalog search payload
            raw_community: Community catalog search payload

        Returns:
            Ranked, deduplicated UnifiedResults
        """
        metadata = self._metadata_adapter.parse(raw_metadata) if raw_metadata is not None else []
        community = (
            self._community_adapter.parse(raw_community) if raw_community is not None else []
        )
        results = self._matcher.match(metadata, community)

        logger.info(
            "search_results_assembled",
            metadata_count=len(metadata),
            community_count=len(community),
            result_count=len(results),
        )
        return results

    def match(
        self,
        metadata_records: list[MetadataRecord],
        community_records: list[CommunityRecord],
    ) -> list[UnifiedResult]:
        """Match already-parsed catalog records."""
        return self._matcher.match(metadata_records, community_records)

    # === VOCABULARY REVIEW ===

    async def add_word(
        self,
        owner_id: str,
        word: str,
        translation: str,
        language: str,
        *,
        item_id: str | None = None,
        difficulty_band: DifficultyBand = DifficultyBand.A1,
        song_id: str | None = None,
        song_name: str | None = None,
        context: str | None = None,
        context_translation: str | None = None,
    ) -> VocabularyItem:
        """Save a new word, due for review immediately."""
        self._ensure_connected()
        assert self._storage is not None

        item = VocabularyItem(
            id=item_id or uuid.uuid4().hex,
            owner_id=owner_id,
            word=word,
            translation=translation,
            language=language,
            difficulty_band=difficulty_band,
            song_id=song_id,
            song_name=song_name,
            context=context,
            context_translation=context_translation,
            scheduling=initial_scheduling_state(self._clock.now(), settings=self._config.scheduler),
        )
        await self._storage.save_vocabulary_item(item)
        logger.debug("word_added", item_id=item.id, owner_id=owner_id, language=language)
        return item

    async def submit_review(self, item_id: str, quality: int) -> VocabularyItem:
        """Apply a review quality (0-5) to an item."""
        self._ensure_connected()
        assert self._review_service is not None
        return await self._review_service.submit_review(item_id, quality)

    async def submit_answer(self, item_id: str, answer: str) -> tuple[VocabularyItem, bool]:
        """Grade a multiple-choice answer and reschedule the item."""
        self._ensure_connected()
        assert self._review_service is not None
        return await self._review_service.submit_answer(item_id, answer)

    async def get_due_items(self, owner_id: str, limit: int | None = None) -> list[VocabularyItem]:
        """Get a learner's due items, most overdue first."""
        self._ensure_connected()
        assert self._review_service is not None
        return await self._review_service.get_due_items(owner_id, limit=limit)

    async def build_session(
        self,
        owner_id: str,
        session_size: int,
        mix: SessionMix = SessionMix.QUIZ,
    ) -> list[ExerciseUnit]:
        """Build a review session from the learner's due items.

        Returns:
            Exercise units; empty when the learner is caught up
        """
        self._ensure_connected()
        assert self._review_service is not None
        assert self._session_builder is not None

        if session_size <= 0:
            return []
        with learner_context(owner_id):
            due = await self._review_service.get_due_items(owner_id, limit=session_size)
            units = await self._session_builder.build_session(due, session_size, mix)
            logger.info("session_ready", mix=str(mix), unit_count=len(units))
        return units

    async def get_stats(self, owner_id: str) -> VocabularyStats:
        """Get review statistics for a learner."""
        self._ensure_connected()
        assert self._review_service is not None
        with learner_context(owner_id):
            stats = await self._review_service.get_stats(owner_id)
            logger.debug("stats_computed", total_words=stats.total_words, due_count=stats.due_count)
        return stats
