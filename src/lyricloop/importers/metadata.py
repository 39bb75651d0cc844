"""Metadata catalog import adapter for lyricloop.

This module provides an adapter for the metadata catalog's track
search payload.
"""

import math
from typing import Any

from typing_extensions import override

from lyricloop.importers.base import CatalogImportAdapter
from lyricloop.importers.registry import ImportAdapterRegistry
from lyricloop.models.catalog import CatalogSource, MetadataRecord
from lyricloop.utils.normalize import round_half_up

__all__ = [
    "UNKNOWN_ARTIST",
    "MetadataCatalogAdapter",
]

UNKNOWN_ARTIST = "Unknown Artist"

# Preferred cover sizes, largest first
_COVER_WIDTHS = (640, 300, 64)


@ImportAdapterRegistry.register
class MetadataCatalogAdapter(CatalogImportAdapter):
    """Adapter for the metadata catalog search payload.

    Payload format example:
        {
            "tracks": {
                "items": [
                    {
                        "id": "3n3Ppam7vgaVa1iaRUc9Lp",
                        "name": "Mr. Brightside",
                        "artists": [{"name": "The Killers"}],
                        "album": {
                            "name": "Hot Fuss",
                            "cover": [{"url": "https://...", "width": 640}]
                        },
                        "durationMs": 222973,
                        "explicit": false,
                        "shareUrl": "https://..."
                    }
                ]
            }
        }
    """

    @property
    @override
    def source(self) -> CatalogSource:
        return CatalogSource.METADATA

    @override
    def parse(
        self,
        raw: dict[str, Any] | list[Any],
        limit: int | None = None,
    ) -> list[MetadataRecord]:
        """Parse a track search payload.

        Args:
            raw: Payload dict with 'tracks.items', or the bare items list
            limit: Maximum number of records

        Returns:
            List of MetadataRecord objects
        """
        if isinstance(raw, list):
            items = raw
        elif isinstance(raw, dict):
            tracks = raw.get("tracks") or {}
            items = (tracks.get("items") or []) if isinstance(tracks, dict) else []
        else:
            raise ValueError(f"Unsupported metadata payload type: {type(raw).__name__}")

        records: list[MetadataRecord] = []
        for item in items:
            if len(records) >= self._effective_limit(limit):
                break
            record = self._parse_track(item)
            if record is not None:
                records.append(record)
        return records

    def _parse_track(self, track: Any) -> MetadataRecord | None:
        if not isinstance(track, dict) or not track.get("id"):
            return None

        artists = [
            a["name"] for a in track.get("artists") or [] if isinstance(a, dict) and a.get("name")
        ]
        album = track.get("album") or {}

        return MetadataRecord(
            source_id=str(track["id"]),
            title=track.get("name") or "",
            primary_artist=artists[0] if artists else UNKNOWN_ARTIST,
            duration_seconds=self._parse_duration_ms(track.get("durationMs")),
            cover_image_url=self._pick_cover(album.get("cover") or []),
            album=album.get("name"),
            explicit=bool(track.get("explicit", False)),
            share_url=track.get("shareUrl"),
            artists=artists,
        )

    def _parse_duration_ms(self, value: Any) -> int:
        """Convert milliseconds to whole seconds (0 when unknown)."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0
        if not math.isfinite(value) or value <= 0:
            return 0
        return round_half_up(value / 1000)

    def _pick_cover(self, covers: list[Any]) -> str | None:
        by_width = {
            c.get("width"): c.get("url") for c in reversed(covers) if isinstance(c, dict)
        }
        for width in _COVER_WIDTHS:
            if by_width.get(width):
                return by_width[width]
        return None
