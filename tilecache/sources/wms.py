"""OGC WMS upstream source."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlparse
from xml.etree.ElementTree import Element

from tilecache.config.errors import ParseError
from tilecache.config.nodes import child_elements, node_text
from tilecache.sources.base import Source


DEFAULT_WMS_PARAMS = {
    "VERSION": "1.1.1",
    "REQUEST": "GetMap",
    "SERVICE": "WMS",
    "FORMAT": "image/png",
    "STYLES": "",
}
VALID_URL_SCHEMES = {"http", "https"}


class WMSSource(Source):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.url: str | None = None
        self.wms_params: dict[str, str] = dict(DEFAULT_WMS_PARAMS)

    @property
    def type(self) -> str:
        return "wms"

    def configure(self, node: Element) -> None:
        for child in child_elements(node):
            if child.tag == "url":
                self.url = node_text(child).strip()
            elif child.tag == "wmsparams":
                for param in child_elements(child):
                    self.wms_params[param.tag.upper()] = node_text(param)
        if self.srs is not None:
            self.wms_params.setdefault("SRS", self.srs)

    def check(self) -> None:
        if self.url is None:
            return
        try:
            parsed = urlparse(self.url)
        except ValueError as exc:
            raise ParseError(f'wms source "{self.name}" has invalid url "{self.url}"') from exc
        if parsed.scheme.lower() not in VALID_URL_SCHEMES or not parsed.netloc:
            raise ParseError(f'wms source "{self.name}" has invalid url "{self.url}"')

    def describe(self) -> dict[str, Any]:
        payload = super().describe()
        payload["url"] = self.url
        payload["wms_params"] = dict(self.wms_params)
        return payload
