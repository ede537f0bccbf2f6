"""Mutable registries filled while a document is being compiled."""

from __future__ import annotations

from tilecache.caches.base import Cache
from tilecache.config.errors import ParseError
from tilecache.config.schema import DEFAULT_LOCK_DIR, DEFAULT_MERGE_FORMAT, Config, Tileset
from tilecache.imaging.formats import ImageFormat, builtin_formats
from tilecache.sources.base import Source


class ConfigRegistry:
    """Name-keyed entity registries plus global settings.

    Sources, caches and tilesets are register-if-absent. Image formats are
    insert-or-overwrite so a document can replace the built-in ``PNG``,
    ``PNG8`` and ``JPEG`` formats by reusing their names.
    """

    def __init__(self) -> None:
        self.sources: dict[str, Source] = {}
        self.caches: dict[str, Cache] = {}
        self.tilesets: dict[str, Tileset] = {}
        self.image_formats: dict[str, ImageFormat] = {}
        for image_format in builtin_formats():
            self.add_image_format(image_format)
        self.merge_format = self.image_formats[DEFAULT_MERGE_FORMAT]
        self.lock_dir = DEFAULT_LOCK_DIR
        self.services: set[str] = set()

    def get_source(self, name: str) -> Source | None:
        return self.sources.get(name)

    def get_cache(self, name: str) -> Cache | None:
        return self.caches.get(name)

    def get_tileset(self, name: str) -> Tileset | None:
        return self.tilesets.get(name)

    def get_image_format(self, name: str) -> ImageFormat | None:
        return self.image_formats.get(name)

    def add_source(self, source: Source) -> None:
        if source.name in self.sources:
            raise ParseError(f'duplicate source with name "{source.name}"')
        self.sources[source.name] = source

    def add_cache(self, cache: Cache) -> None:
        if cache.name in self.caches:
            raise ParseError(f'duplicate cache with name "{cache.name}"')
        self.caches[cache.name] = cache

    def add_tileset(self, tileset: Tileset) -> None:
        if tileset.name in self.tilesets:
            raise ParseError(f'duplicate tileset with name "{tileset.name}"')
        self.tilesets[tileset.name] = tileset

    def add_image_format(self, image_format: ImageFormat) -> None:
        self.image_formats[image_format.name] = image_format

    def freeze(self, *, filename: str = "<memory>") -> Config:
        return Config(
            sources=self.sources,
            caches=self.caches,
            tilesets=self.tilesets,
            image_formats=self.image_formats,
            merge_format=self.merge_format,
            lock_dir=self.lock_dir,
            services=frozenset(self.services),
            filename=filename,
        )
