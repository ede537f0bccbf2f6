"""Tile cache backend interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any
from xml.etree.ElementTree import Element


class Cache(ABC):
    def __init__(self, name: str) -> None:
        self.name = name

    @property
    @abstractmethod
    def type(self) -> str: ...

    @abstractmethod
    def configure(self, node: Element) -> None:
        """Read variant specific settings from the ``<cache>`` element."""

    @abstractmethod
    def check(self) -> None:
        """Raise ``ParseError`` if the configured cache is unusable."""

    def describe(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type}
