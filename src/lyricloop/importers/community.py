"""Community catalog import adapter for lyricloop.

This module provides an adapter for the community video catalog's
search payload.
"""

from typing import Any

from typing_extensions import override

from lyricloop.importers.base import CatalogImportAdapter
from lyricloop.importers.registry import ImportAdapterRegistry
from lyricloop.models.catalog import CatalogSource, CommunityRecord

__all__ = [
    "UNKNOWN_CHANNEL",
    "CommunityCatalogAdapter",
]

UNKNOWN_CHANNEL = "Unknown Channel"


@ImportAdapterRegistry.register
class CommunityCatalogAdapter(CatalogImportAdapter):
    """Adapter for the community catalog search payload.

    Only entries of type "video" are kept; channels, playlists and
    entries without a video id are skipped.

    Payload format example:
        {
            "contents": [
                {
                    "type": "video",
                    "video": {
                        "videoId": "gGdGFtwCNBE",
                        "title": "The Killers - Mr. Brightside (Official Music Video)",
                        "author": {"title": "The Killers", "channelId": "UC..."},
                        "lengthSeconds": 227,
                        "stats": {"views": 912345678},
                        "thumbnails": [{"url": "https://..."}],
                        "badges": [],
                        "isLiveNow": false,
                        "publishedTimeText": "15 years ago"
                    }
                }
            ]
        }
    """

    @property
    @override
    def source(self) -> CatalogSource:
        return CatalogSource.COMMUNITY

    @override
    def parse(
        self,
        raw: dict[str, Any] | list[Any],
        limit: int | None = None,
    ) -> list[CommunityRecord]:
        """Parse a video search payload.

        Args:
            raw: Payload dict with 'contents', or the bare contents list
            limit: Maximum number of records

        Returns:
            List of CommunityRecord objects
        """
        if isinstance(raw, list):
            contents = raw
        elif isinstance(raw, dict):
            contents = raw.get("contents") or []
        else:
            raise ValueError(f"Unsupported community payload type: {type(raw).__name__}")

        records: list[CommunityRecord] = []
        for entry in contents:
            if len(records) >= self._effective_limit(limit):
                break
            if not isinstance(entry, dict) or entry.get("type") != "video":
                continue
            record = self._parse_video(entry.get("video"))
            if record is not None:
                records.append(record)
        return records

    def _parse_video(self, video: Any) -> CommunityRecord | None:
        if not isinstance(video, dict) or not video.get("videoId"):
            return None

        author = video.get("author") or {}
        stats = video.get("stats") or {}
        thumbnails = video.get("thumbnails") or []

        return CommunityRecord(
            source_id=str(video["videoId"]),
            title=video.get("title") or "",
            primary_artist=author.get("title") or UNKNOWN_CHANNEL,
            duration_seconds=self._to_int(video.get("lengthSeconds")),
            cover_image_url=(thumbnails[0].get("url") or None) if thumbnails else None,
            channel_id=author.get("channelId"),
            views=self._to_int(stats.get("views")),
            badges=[b for b in video.get("badges") or [] if isinstance(b, str)],
            is_live=bool(video.get("isLiveNow", False)),
            published_time=video.get("publishedTimeText"),
        )

    def _to_int(self, value: Any) -> int:
        """Coerce a count-like value to a non-negative int (0 when unusable)."""
        if isinstance(value, bool):
            return 0
        if isinstance(value, (int, float)):
            return max(0, int(value))
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return 0
