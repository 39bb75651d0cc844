"""Catalog models for lyricloop.

These models represent track search results from the two catalogs
(a metadata-rich catalog and a community video catalog) and the
unified results produced by cross-catalog matching.
"""

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

__all__ = [
    "CatalogRecord",
    "CatalogSource",
    "CommunityRecord",
    "MetadataRecord",
    "UnifiedResult",
]


class CatalogSource(StrEnum):
    """Catalog a record (or a unified result's canonical data) comes from."""

    METADATA = "metadata"
    """Structured catalog with reliable title/artist/duration"""

    COMMUNITY = "community"
    """Community video catalog; "artist" is the uploading channel"""


class _BaseRecord(BaseModel, frozen=True):
    source_id: str = Field(description="Identifier unique within its catalog")
    title: str = ""
    primary_artist: str = ""
    duration_seconds: int = Field(default=0, description="Seconds, 0 = unknown")
    cover_image_url: str | None = None
    schema_version: int = Field(default=1)

    @field_validator("duration_seconds", mode="before")
    @classmethod
    def _clamp_duration(cls, value: object) -> object:
        if value is None:
            return 0
        if isinstance(value, (int, float)) and value < 0:
            return 0
        if isinstance(value, float):
            return int(value + 0.5)
        return value


class MetadataRecord(_BaseRecord, frozen=True):
    """Track from the metadata catalog.

    Attributes:
        source_id: Catalog track ID
        title: Track title as listed
        primary_artist: First credited artist
        duration_seconds: Track length in seconds (0 = unknown)
        cover_image_url: Album cover URL
        album: Album name
        explicit: Explicit-content flag
        share_url: Public link to the track
        artists: All credited artist names
    """

    source: Literal["metadata"] = "metadata"
    album: str | None = None
    explicit: bool = False
    share_url: str | None = None
    artists: list[str] = Field(default_factory=list)


class CommunityRecord(_BaseRecord, frozen=True):
    """Video from the community catalog.

    Attributes:
        source_id: Video ID
        title: Video title (often decorated, e.g. "(Official Video)")
        primary_artist: Uploading channel name
        duration_seconds: Video length in seconds (0 = unknown)
        cover_image_url: Thumbnail URL
        channel_id: Channel identifier
        views: View count
        badges: Channel/video badges
        is_live: Whether the video is a live stream
        published_time: Human-readable publish time
    """

    source: Literal["community"] = "community"
    channel_id: str | None = None
    views: int = Field(default=0, ge=0)
    badges: list[str] = Field(default_factory=list)
    is_live: bool = False
    published_time: str | None = None


CatalogRecord = Annotated[MetadataRecord | CommunityRecord, Field(discriminator="source")]


class UnifiedResult(BaseModel, frozen=True):
    """A deduplicated search result, from one catalog or both.

    Attributes:
        title: Canonical title (from primary_source)
        artist: Canonical artist (from primary_source)
        metadata_source_id: Metadata catalog ID when matched from it
        community_source_id: Community catalog ID when matched from it
        confidence: 0-100; exactly 100 for metadata-only listings
        primary_source: Catalog that contributed title/artist
        album: Album name (metadata catalog)
        duration_seconds: Duration from the primary source
        cover_image_url: Album cover (metadata catalog)
        thumbnail_url: Video thumbnail (community catalog)
        channel: Uploading channel (community catalog)
        views: View count (community catalog)
    """

    title: str
    artist: str
    metadata_source_id: str | None = None
    community_source_id: str | None = None
    confidence: int = Field(ge=0, le=100)
    primary_source: CatalogSource
    album: str | None = None
    duration_seconds: int = Field(default=0, ge=0)
    cover_image_url: str | None = None
    thumbnail_url: str | None = None
    channel: str | None = None
    views: int | None = None
    schema_version: int = Field(default=1)

    @model_validator(mode="after")
    def _require_source(self) -> "UnifiedResult":
        if self.metadata_source_id is None and self.community_source_id is None:
            raise ValueError("UnifiedResult needs at least one source id")
        return self

    @property
    def is_matched(self) -> bool:
        """True when both catalogs contributed to this result."""
        return self.metadata_source_id is not None and self.community_source_id is not None
