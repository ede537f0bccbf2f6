"""Image format descriptions used to encode tiles and merged metatiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar
from xml.etree.ElementTree import Element

from tilecache.config.errors import ParseError
from tilecache.config.nodes import child_elements, node_text, parse_int


COMPRESSION_FAST = "fast"
COMPRESSION_BEST = "best"
COMPRESSION_DEFAULT = "default"
VALID_COMPRESSIONS = {COMPRESSION_FAST, COMPRESSION_BEST, COMPRESSION_DEFAULT}

MIN_PNG_COLORS = 2
MAX_PNG_COLORS = 256
MIN_JPEG_QUALITY = 1
MAX_JPEG_QUALITY = 100
DEFAULT_JPEG_QUALITY = 95


@dataclass(frozen=True, slots=True)
class ImageFormat:
    name: str

    type: ClassVar[str] = ""
    mime_type: ClassVar[str] = "application/octet-stream"
    extension: ClassVar[str] = ""

    def describe(self) -> dict[str, object]:
        return {
            "name": self.name,
            "type": self.type,
            "mime_type": self.mime_type,
            "extension": self.extension,
        }


@dataclass(frozen=True, slots=True)
class PNGFormat(ImageFormat):
    compression: str = COMPRESSION_DEFAULT

    type: ClassVar[str] = "PNG"
    mime_type: ClassVar[str] = "image/png"
    extension: ClassVar[str] = "png"

    def __post_init__(self) -> None:
        if self.compression not in VALID_COMPRESSIONS:
            raise ValueError(f"invalid png compression '{self.compression}'")

    def describe(self) -> dict[str, object]:
        payload = ImageFormat.describe(self)
        payload["compression"] = self.compression
        return payload

    @classmethod
    def from_node(cls, name: str, node: Element) -> PNGFormat:
        """Build a plain or quantized PNG format from a ``<format type="PNG">`` element.

        Only ``<compression>`` and ``<colors>`` children are accepted. A
        ``<colors>`` child selects the quantized variant.
        """
        compression = COMPRESSION_DEFAULT
        colors: int | None = None
        for child in child_elements(node):
            value = node_text(child)
            if child.tag == "compression":
                if value not in (COMPRESSION_FAST, COMPRESSION_BEST):
                    raise ParseError(f'unknown compression type {value} for format "{name}"')
                compression = value
            elif child.tag == "colors":
                colors = parse_int(value)
                if colors is None or colors < MIN_PNG_COLORS or colors > MAX_PNG_COLORS:
                    raise ParseError(
                        f'failed to parse colors "{value}" for format "{name}" '
                        f"(expecting an integer between {MIN_PNG_COLORS} and {MAX_PNG_COLORS}, "
                        "eg <colors>256</colors>)"
                    )
            else:
                raise ParseError(f'unknown tag {child.tag} for format "{name}"')
        if colors is None:
            return PNGFormat(name=name, compression=compression)
        return PNGQuantizedFormat(name=name, compression=compression, colors=colors)


@dataclass(frozen=True, slots=True)
class PNGQuantizedFormat(PNGFormat):
    """PNG reduced to a palette of at most ``colors`` entries."""

    colors: int = MAX_PNG_COLORS

    def __post_init__(self) -> None:
        PNGFormat.__post_init__(self)
        if self.colors < MIN_PNG_COLORS or self.colors > MAX_PNG_COLORS:
            raise ValueError(f"png colors must be between {MIN_PNG_COLORS} and {MAX_PNG_COLORS}")

    def describe(self) -> dict[str, object]:
        payload = PNGFormat.describe(self)
        payload["colors"] = self.colors
        return payload


@dataclass(frozen=True, slots=True)
class JPEGFormat(ImageFormat):
    quality: int = DEFAULT_JPEG_QUALITY

    type: ClassVar[str] = "JPEG"
    mime_type: ClassVar[str] = "image/jpeg"
    extension: ClassVar[str] = "jpg"

    def __post_init__(self) -> None:
        if self.quality < MIN_JPEG_QUALITY or self.quality > MAX_JPEG_QUALITY:
            raise ValueError(f"jpeg quality must be between {MIN_JPEG_QUALITY} and {MAX_JPEG_QUALITY}")

    def describe(self) -> dict[str, object]:
        payload = ImageFormat.describe(self)
        payload["quality"] = self.quality
        return payload

    @classmethod
    def from_node(cls, name: str, node: Element) -> JPEGFormat:
        quality = DEFAULT_JPEG_QUALITY
        for child in child_elements(node):
            if child.tag != "quality":
                raise ParseError(f'unknown tag {child.tag} for format "{name}"')
            value = node_text(child)
            parsed = parse_int(value)
            if parsed is None or parsed < MIN_JPEG_QUALITY or parsed > MAX_JPEG_QUALITY:
                raise ParseError(
                    f'failed to parse quality "{value}" for format "{name}" '
                    f"(expecting an integer between {MIN_JPEG_QUALITY} and {MAX_JPEG_QUALITY}, "
                    "eg <quality>90</quality>)"
                )
            quality = parsed
        return cls(name=name, quality=quality)


def builtin_formats() -> list[ImageFormat]:
    return [
        PNGFormat(name="PNG", compression=COMPRESSION_FAST),
        PNGQuantizedFormat(name="PNG8", compression=COMPRESSION_FAST, colors=MAX_PNG_COLORS),
        JPEGFormat(name="JPEG", quality=DEFAULT_JPEG_QUALITY),
    ]
