"""Dataclasses for the compiled tile service configuration."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from tilecache.caches.base import Cache
from tilecache.imaging.formats import ImageFormat
from tilecache.sources.base import Source


ROOT_TAG = "tilecache"
DEFAULT_LOCK_DIR = "/tmp/tilecache_locks"
DEFAULT_MERGE_FORMAT = "PNG"
LOCK_PROBE_FILENAME = "test.lock"

SERVICE_WMS = "wms"
SERVICE_TMS = "tms"
VALID_SERVICES = (SERVICE_WMS, SERVICE_TMS)

DEFAULT_TILE_SIZE = 256


@dataclass(frozen=True, slots=True)
class Tileset:
    name: str
    cache: Cache
    source: Source
    srs: str
    extent: tuple[float, float, float, float]
    resolutions: tuple[float, ...]
    format: ImageFormat | None = None
    tile_sx: int = DEFAULT_TILE_SIZE
    tile_sy: int = DEFAULT_TILE_SIZE
    metasize_x: int = 1
    metasize_y: int = 1
    metabuffer: int = 0
    expires: int = 0

    @property
    def levels(self) -> int:
        return len(self.resolutions)

    @property
    def is_metatiled(self) -> bool:
        return self.metasize_x != 1 or self.metasize_y != 1 or self.metabuffer != 0

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "cache": self.cache.name,
            "source": self.source.name,
            "format": self.format.name if self.format is not None else None,
            "srs": self.srs,
            "size": [self.tile_sx, self.tile_sy],
            "extent": list(self.extent),
            "resolutions": list(self.resolutions),
            "levels": self.levels,
            "metatile": [self.metasize_x, self.metasize_y],
            "metabuffer": self.metabuffer,
            "expires": self.expires,
        }


@dataclass(frozen=True, slots=True)
class Config:
    """Read-only snapshot produced by a successful compilation."""

    sources: Mapping[str, Source]
    caches: Mapping[str, Cache]
    tilesets: Mapping[str, Tileset]
    image_formats: Mapping[str, ImageFormat]
    merge_format: ImageFormat
    lock_dir: str
    services: frozenset[str]
    filename: str = "<memory>"

    def __post_init__(self) -> None:
        object.__setattr__(self, "sources", MappingProxyType(dict(self.sources)))
        object.__setattr__(self, "caches", MappingProxyType(dict(self.caches)))
        object.__setattr__(self, "tilesets", MappingProxyType(dict(self.tilesets)))
        object.__setattr__(self, "image_formats", MappingProxyType(dict(self.image_formats)))
        object.__setattr__(self, "services", frozenset(self.services))

    def get_source(self, name: str) -> Source | None:
        return self.sources.get(name)

    def get_cache(self, name: str) -> Cache | None:
        return self.caches.get(name)

    def get_tileset(self, name: str) -> Tileset | None:
        return self.tilesets.get(name)

    def get_image_format(self, name: str) -> ImageFormat | None:
        return self.image_formats.get(name)

    def service_enabled(self, service: str) -> bool:
        return service in self.services

    def describe(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "lock_dir": self.lock_dir,
            "merge_format": self.merge_format.name,
            "services": sorted(self.services),
            "sources": {name: item.describe() for name, item in self.sources.items()},
            "caches": {name: item.describe() for name, item in self.caches.items()},
            "formats": {name: item.describe() for name, item in self.image_formats.items()},
            "tilesets": {name: item.describe() for name, item in self.tilesets.items()},
        }

    def summary(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "lock_dir": self.lock_dir,
            "merge_format": self.merge_format.name,
            "services": sorted(self.services),
            "sources": sorted(self.sources),
            "caches": sorted(self.caches),
            "formats": sorted(self.image_formats),
            "tilesets": sorted(self.tilesets),
        }
