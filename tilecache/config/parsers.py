"""Parsers turning one ``<source>``, ``<cache>``, ``<format>`` or ``<tileset>`` element into a registered entity."""

from __future__ import annotations

from dataclasses import replace
from xml.etree.ElementTree import Element

from tilecache.caches.base import Cache
from tilecache.config.errors import ParseError
from tilecache.config.nodes import (
    child_elements,
    node_text,
    parse_float_list,
    parse_int,
    parse_int_list,
    require_name,
    require_type,
)
from tilecache.config.registry import ConfigRegistry
from tilecache.config.schema import DEFAULT_TILE_SIZE, Tileset
from tilecache.core.plugin import create_cache, create_image_format, create_source
from tilecache.imaging.formats import ImageFormat
from tilecache.sources.base import Source


def _expect_tag(node: Element, tag: str) -> None:
    if node.tag != tag:
        raise ParseError(f"<{node.tag}> is not a {tag} tag")


def parse_source(node: Element, registry: ConfigRegistry) -> Source:
    _expect_tag(node, "source")
    name = require_name(node, "source")
    if registry.get_source(name) is not None:
        raise ParseError(f'duplicate source with name "{name}"')
    type_tag = require_type(node, "source")
    source = create_source(type_tag, name)
    for child in child_elements(node):
        if child.tag == "srs":
            source.srs = node_text(child)
    source.configure(node)
    source.check()
    registry.add_source(source)
    return source


def parse_cache(node: Element, registry: ConfigRegistry) -> Cache:
    _expect_tag(node, "cache")
    name = require_name(node, "cache")
    if registry.get_cache(name) is not None:
        raise ParseError(f'duplicate cache with name "{name}"')
    type_tag = require_type(node, "cache")
    cache = create_cache(type_tag, name)
    cache.configure(node)
    cache.check()
    registry.add_cache(cache)
    return cache


def parse_format(node: Element, registry: ConfigRegistry) -> ImageFormat:
    _expect_tag(node, "format")
    name = require_name(node, "format")
    type_tag = require_type(node, "format")
    image_format = create_image_format(type_tag, name, node)
    registry.add_image_format(image_format)
    return image_format


def _int_pair(raw: str, *, label: str, example: str) -> tuple[int, int]:
    values = parse_int_list(raw)
    if values is None or len(values) != 2:
        raise ParseError(
            f'failed to parse {label} "{raw}" (expecting 2 space separated integers, eg {example})'
        )
    return values[0], values[1]


def _single_int(raw: str, *, label: str, example: str) -> int:
    value = parse_int(raw)
    if value is None:
        raise ParseError(f'failed to parse {label} "{raw}" (expecting an integer, eg {example})')
    return value


def parse_tileset(node: Element, registry: ConfigRegistry) -> Tileset:
    _expect_tag(node, "tileset")
    name = require_name(node, "tileset")
    if registry.get_tileset(name) is not None:
        raise ParseError(f'duplicate tileset with name "{name}"')

    cache: Cache | None = None
    source: Source | None = None
    image_format: ImageFormat | None = None
    srs: str | None = None
    tile_sx = tile_sy = DEFAULT_TILE_SIZE
    extent = (0.0, 0.0, 0.0, 0.0)
    resolutions: tuple[float, ...] = ()
    metasize_x = metasize_y = 1
    metabuffer = 0
    expires = 0

    # Unknown children are ignored here, unlike <format> which rejects them.
    for child in child_elements(node):
        value = node_text(child)
        if child.tag == "cache":
            cache = registry.get_cache(value)
            if cache is None:
                raise ParseError(f'tileset "{name}" references cache "{value}", but it is not configured')
        elif child.tag == "source":
            source = registry.get_source(value)
            if source is None:
                raise ParseError(f'tileset "{name}" references source "{value}", but it is not configured')
        elif child.tag == "format":
            image_format = registry.get_image_format(value)
            if image_format is None:
                raise ParseError(f'tileset "{name}" references format "{value}", but it is not configured')
        elif child.tag == "srs":
            srs = value
        elif child.tag == "size":
            tile_sx, tile_sy = _int_pair(value, label="size array", example="<size>256 256</size>")
        elif child.tag == "extent":
            numbers = parse_float_list(value)
            if numbers is None or len(numbers) != 4:
                raise ParseError(
                    f'failed to parse extent array "{value}" '
                    "(expecting 4 space separated numbers, eg <extent>-180 -90 180 90</extent>)"
                )
            extent = (numbers[0], numbers[1], numbers[2], numbers[3])
        elif child.tag == "resolutions":
            numbers = parse_float_list(value)
            if not numbers:
                raise ParseError(
                    f'failed to parse resolutions array "{value}" '
                    "(expecting space separated numbers, eg <resolutions>1 2 4 8 16 32</resolutions>)"
                )
            resolutions = tuple(numbers)
        elif child.tag == "metatile":
            metasize_x, metasize_y = _int_pair(value, label="metatile dimension", example="<metatile>5 5</metatile>")
        elif child.tag == "metabuffer":
            metabuffer = _single_int(value, label="metabuffer", example="<metabuffer>1</metabuffer>")
        elif child.tag == "expires":
            expires = _single_int(value, label="expires", example="<expires>3600</expires>")

    if cache is None:
        raise ParseError(f'tileset "{name}" has no cache configured. You must add a <cache> tag.')
    if source is None:
        raise ParseError(f'tileset "{name}" has no source configured. You must add a <source> tag.')
    if srs is None:
        raise ParseError(f'tileset "{name}" has no srs configured. You must add a <srs> tag.')
    if extent[0] == extent[2] or extent[1] == extent[3]:
        raise ParseError(
            f'tileset "{name}" has no (or invalid) extent configured. You must add/correct an <extent> tag.'
        )
    if not resolutions:
        raise ParseError(f'tileset "{name}" has no resolutions configured. You must add a <resolutions> tag.')

    tileset = Tileset(
        name=name,
        cache=cache,
        source=source,
        srs=srs,
        extent=extent,
        resolutions=resolutions,
        format=image_format,
        tile_sx=tile_sx,
        tile_sy=tile_sy,
        metasize_x=metasize_x,
        metasize_y=metasize_y,
        metabuffer=metabuffer,
        expires=expires,
    )
    if tileset.format is None and tileset.is_metatiled:
        tileset = replace(tileset, format=registry.merge_format)
    registry.add_tileset(tileset)
    return tileset
