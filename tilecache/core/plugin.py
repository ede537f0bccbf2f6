"""Type-tag dispatch tables for source, cache and image format variants."""

from __future__ import annotations

from typing import Callable
from xml.etree.ElementTree import Element

from tilecache.caches.base import Cache
from tilecache.caches.disk import DiskCache
from tilecache.config.errors import ParseError
from tilecache.imaging.formats import ImageFormat, JPEGFormat, PNGFormat
from tilecache.sources.base import Source
from tilecache.sources.wms import WMSSource


SOURCE_TYPES: dict[str, Callable[[str], Source]] = {
    "wms": WMSSource,
}

CACHE_TYPES: dict[str, Callable[[str], Cache]] = {
    "disk": DiskCache,
}

FORMAT_TYPES: dict[str, Callable[[str, Element], ImageFormat]] = {
    "PNG": PNGFormat.from_node,
    "JPEG": JPEGFormat.from_node,
}


def create_source(type_tag: str, name: str) -> Source:
    factory = SOURCE_TYPES.get(type_tag)
    if factory is None:
        raise ParseError(f'unknown source type {type_tag} for source "{name}"')
    return factory(name)


def create_cache(type_tag: str, name: str) -> Cache:
    factory = CACHE_TYPES.get(type_tag)
    if factory is None:
        raise ParseError(f'unknown cache type {type_tag} for cache "{name}"')
    return factory(name)


def create_image_format(type_tag: str, name: str, node: Element) -> ImageFormat:
    factory = FORMAT_TYPES.get(type_tag)
    if factory is None:
        raise ParseError(f'unknown format type {type_tag} for format "{name}"')
    return factory(name, node)
