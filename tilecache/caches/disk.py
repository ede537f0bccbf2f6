"""Filesystem backed tile cache."""

from __future__ import annotations

from typing import Any
from xml.etree.ElementTree import Element

from tilecache.caches.base import Cache
from tilecache.config.errors import ParseError
from tilecache.config.nodes import child_elements, node_text


DEFAULT_BASE_DIR = "/tmp/tilecache"


class DiskCache(Cache):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.base_dir = DEFAULT_BASE_DIR
        self.symlink_blank = False

    @property
    def type(self) -> str:
        return "disk"

    def configure(self, node: Element) -> None:
        for child in child_elements(node):
            if child.tag == "base":
                self.base_dir = node_text(child).strip()
            elif child.tag == "symlink_blank":
                self.symlink_blank = node_text(child).strip() != "false"

    def check(self) -> None:
        if not self.base_dir:
            raise ParseError(f'disk cache "{self.name}" has an empty <base> directory')

    def describe(self) -> dict[str, Any]:
        payload = super().describe()
        payload["base_dir"] = self.base_dir
        payload["symlink_blank"] = self.symlink_blank
        return payload
