"""lyricloop - Song search reconciliation and spaced-repetition vocabulary review.

This package provides tools for:
- Parsing track search results from a metadata catalog and a community video catalog
- Matching both catalogs into one ranked, deduplicated result list
- Scheduling vocabulary reviews with an SM-2 style algorithm
- Building review sessions (quiz, matching, sentence, fill-in-the-blank)

Example usage:
    from lyricloop import InMemoryVocabularyRepository, LyricLoop, SessionMix

    async with LyricLoop(
        storage_class=InMemoryVocabularyRepository,
        storage_custom_config={},
    ) as loop:
        results = loop.assemble_search_results(metadata_payload, community_payload)
        session = await loop.build_session("learner-1", 10, SessionMix.MIXED)
"""

__version__ = "0.1.0"

from lyricloop.importers.base import CatalogImportAdapter
from lyricloop.importers.community import CommunityCatalogAdapter
from lyricloop.importers.metadata import MetadataCatalogAdapter
from lyricloop.infra.memory.repository import InMemoryVocabularyRepository
from lyricloop.interfaces.clock import ClockInterface
from lyricloop.interfaces.storage import VocabularyStorageInterface
from lyricloop.models.catalog import CommunityRecord, MetadataRecord, UnifiedResult
from lyricloop.models.session import SessionMix
from lyricloop.models.vocabulary import SchedulingState, VocabularyItem
from lyricloop.orchestrator import LyricLoop

__all__ = [  # noqa: RUF022
    # Orchestrator
    "LyricLoop",
    # Implementations
    "InMemoryVocabularyRepository",
    # Import adapters
    "CatalogImportAdapter",
    "CommunityCatalogAdapter",
    "MetadataCatalogAdapter",
    # Models
    "CommunityRecord",
    "MetadataRecord",
    "SchedulingState",
    "SessionMix",
    "UnifiedResult",
    "VocabularyItem",
    # Interfaces
    "ClockInterface",
    "VocabularyStorageInterface",
]
