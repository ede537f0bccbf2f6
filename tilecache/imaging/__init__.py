"""Image format descriptions."""

from .formats import ImageFormat, JPEGFormat, PNGFormat, PNGQuantizedFormat, builtin_formats

__all__ = ["ImageFormat", "JPEGFormat", "PNGFormat", "PNGQuantizedFormat", "builtin_formats"]
