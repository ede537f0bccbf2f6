"""Upstream tile source variants."""

from .base import Source
from .wms import WMSSource

__all__ = ["Source", "WMSSource"]
