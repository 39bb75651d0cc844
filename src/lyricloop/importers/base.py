"""Base import adapter for lyricloop.

This module defines the abstract base class for catalog import adapters.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, BinaryIO

from lyricloop.config import MatchingSettings
from lyricloop.models.catalog import CatalogSource, CommunityRecord, MetadataRecord

__all__ = [
    "CatalogImportAdapter",
]


class CatalogImportAdapter(ABC):
    """Abstract base class for catalog import adapters.

    Import adapters turn a catalog's raw search payload into canonical
    catalog records. Payload entries that cannot be used (no id) are
    skipped; missing optional fields get neutral defaults.

    Important: Adapters must NOT match, persist or mutate any state.
    They only normalize data.

    Example:
        class MyAdapter(CatalogImportAdapter):
            @property
            def source(self) -> CatalogSource:
                return CatalogSource.METADATA

            def parse(self, raw, limit=None) -> list[MetadataRecord]:
                ...
    """

    def __init__(self, limit: int | None = None) -> None:
        """Initialize adapter.

        Args:
            limit: Default cap on parsed records (settings value when omitted)
        """
        self._limit = limit if limit is not None else MatchingSettings().parse_limit

    @property
    @abstractmethod
    def source(self) -> CatalogSource:
        """Return the catalog this adapter parses.

        Also used as the key for adapter registry lookup.
        """
        ...

    @abstractmethod
    def parse(
        self,
        raw: dict[str, Any] | list[Any],
        limit: int | None = None,
    ) -> list[MetadataRecord] | list[CommunityRecord]:
        """Parse a raw search payload into catalog records.

        Args:
            raw: Decoded JSON payload
            limit: Maximum number of records (adapter default when omitted)

        Returns:
            Records in the catalog's relevance order

        Raises:
            ValueError: If the payload has the wrong shape
        """
        ...

    def _effective_limit(self, limit: int | None) -> int:
        return self._limit if limit is None else max(0, limit)

    def parse_file(self, path: Path | str, limit: int | None = None) -> list[Any]:
        """Parse from file path.

        Args:
            path: Path to a JSON payload file
            limit: Maximum number of records

        Returns:
            List of records
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return self.parse(data, limit)

    def parse_stream(self, stream: BinaryIO, limit: int | None = None) -> list[Any]:
        """Parse from a binary stream containing JSON."""
        data = json.load(stream)
        return self.parse(data, limit)

    def parse_string(self, json_string: str, limit: int | None = None) -> list[Any]:
        """Parse from a JSON string."""
        data = json.loads(json_string)
        return self.parse(data, limit)
