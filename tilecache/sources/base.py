"""Upstream source interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any
from xml.etree.ElementTree import Element


class Source(ABC):
    def __init__(self, name: str) -> None:
        self.name = name
        self.srs: str | None = None

    @property
    @abstractmethod
    def type(self) -> str: ...

    @abstractmethod
    def configure(self, node: Element) -> None:
        """Read variant specific settings from the ``<source>`` element."""

    @abstractmethod
    def check(self) -> None:
        """Raise ``ParseError`` if the configured source is unusable."""

    def describe(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "srs": self.srs}
