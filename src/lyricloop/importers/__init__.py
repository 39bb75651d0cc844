"""Import adapters for lyricloop.

This module exports the import adapter base class, the registry and the
built-in catalog adapters.
"""

from lyricloop.importers.base import CatalogImportAdapter
from lyricloop.importers.community import UNKNOWN_CHANNEL, CommunityCatalogAdapter
from lyricloop.importers.metadata import UNKNOWN_ARTIST, MetadataCatalogAdapter
from lyricloop.importers.registry import ImportAdapterRegistry

__all__ = [
    "UNKNOWN_ARTIST",
    "UNKNOWN_CHANNEL",
    "CatalogImportAdapter",
    "CommunityCatalogAdapter",
    "ImportAdapterRegistry",
    "MetadataCatalogAdapter",
]
