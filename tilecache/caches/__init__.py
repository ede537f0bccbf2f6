"""Tile storage backend variants."""

from .base import Cache
from .disk import DiskCache

__all__ = ["Cache", "DiskCache"]
