"""Catalog adapter lookup for lyricloop.

Each catalog source has exactly one adapter. Adapters register
themselves with a class decorator; LyricLoop resolves its parsers
through the registry so a host can swap in its own adapter for a
source after calling unregister.
"""

from lyricloop.importers.base import CatalogImportAdapter
from lyricloop.models.catalog import CatalogSource

__all__ = [
    "ImportAdapterRegistry",
]


class ImportAdapterRegistry:
    """Maps a CatalogSource to the adapter class that parses its payloads.

    Example:
        @ImportAdapterRegistry.register
        class MetadataCatalogAdapter(CatalogImportAdapter):
            ...

        adapter = ImportAdapterRegistry.create(CatalogSource.METADATA, limit=5)
    """

    _by_source: dict[CatalogSource, type[CatalogImportAdapter]] = {}  # noqa: RUF012

    @staticmethod
    def _coerce(source: CatalogSource | str) -> CatalogSource:
        try:
            return CatalogSource(source)
        except ValueError:
            raise KeyError(f"Unknown catalog source: {source}") from None

    @classmethod
    def register(
        cls,
        adapter_cls: type[CatalogImportAdapter],
    ) -> type[CatalogImportAdapter]:
        """Class decorator binding an adapter to the source it reports.

        Raises:
            ValueError: If the source already has an adapter
        """
        source = adapter_cls().source
        existing = cls._by_source.get(source)
        if existing is not None:
            raise ValueError(
                f"{source} catalog already handled by {existing.__name__}, "
                f"cannot register {adapter_cls.__name__}"
            )
        cls._by_source[source] = adapter_cls
        return adapter_cls

    @classmethod
    def unregister(cls, source: CatalogSource | str) -> type[CatalogImportAdapter]:
        """Remove and return the adapter bound to a source."""
        return cls._by_source.pop(cls._coerce(source))

    @classmethod
    def get(cls, source: CatalogSource | str) -> type[CatalogImportAdapter]:
        """Adapter class for a source.

        Raises:
            KeyError: If the source is unknown or has no adapter
        """
        key = cls._coerce(source)
        if key not in cls._by_source:
            raise KeyError(f"No adapter registered for {key} catalog")
        return cls._by_source[key]

    @classmethod
    def create(cls, source: CatalogSource | str, limit: int | None = None) -> CatalogImportAdapter:
        """Instantiate the adapter for a source with a record limit."""
        return cls.get(source)(limit)

    @classmethod
    def sources(cls) -> list[CatalogSource]:
        return list(cls._by_source)
