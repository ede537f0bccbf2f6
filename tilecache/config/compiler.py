"""Compile a parsed configuration document into a read-only ``Config``."""

from __future__ import annotations

from enum import Enum
import time
from typing import Callable
from xml.etree.ElementTree import Element

from tilecache.config.errors import ConfigError, ParseError
from tilecache.config.nodes import child_elements, node_text
from tilecache.config.parsers import parse_cache, parse_format, parse_source, parse_tileset
from tilecache.config.registry import ConfigRegistry
from tilecache.config.schema import ROOT_TAG, VALID_SERVICES, Config
from tilecache.core.lockdir import probe_lock_dir
from tilecache.core.logging import emit_metric, get_logger


class CompilerState(Enum):
    INIT = "init"
    WALK_TOP_LEVEL = "walk_top_level"
    POSTCHECK_LOCKDIR = "postcheck_lockdir"
    POSTCHECK_SERVICES = "postcheck_services"
    DONE = "done"
    FAILED = "failed"


class ConfigCompiler:
    """Single-use compiler holding the registry under construction and the first error.

    Top-level elements are handled strictly in document order and the first
    ``ConfigError`` aborts the walk and every remaining postcondition.
    """

    def __init__(
        self,
        filename: str = "<memory>",
        *,
        lock_dir_probe: Callable[[str], object] = probe_lock_dir,
    ) -> None:
        self.filename = filename
        self.registry = ConfigRegistry()
        self.state = CompilerState.INIT
        self.error: ConfigError | None = None
        self.logger = get_logger("tilecache.config.compiler")
        self._lock_dir_probe = lock_dir_probe
        self._handlers: dict[str, Callable[[Element], None]] = {
            "source": self._handle_entity(parse_source),
            "cache": self._handle_entity(parse_cache),
            "format": self._handle_entity(parse_format),
            "tileset": self._handle_entity(parse_tileset),
            "services": self._handle_services,
            "merge_format": self._handle_merge_format,
            "lock_dir": self._handle_lock_dir,
        }

    def compile(self, root: Element) -> Config:
        if self.state is not CompilerState.INIT:
            raise RuntimeError("a ConfigCompiler instance can only compile one document")
        started = time.monotonic()
        try:
            self.state = CompilerState.WALK_TOP_LEVEL
            self._walk(root)
            self.state = CompilerState.POSTCHECK_LOCKDIR
            self._lock_dir_probe(self.registry.lock_dir)
            self.state = CompilerState.POSTCHECK_SERVICES
            if not self.registry.services:
                raise ParseError(
                    "no services configured. You must add a <services> tag with <wms/> or <tms/> children"
                )
        except ConfigError as exc:
            self.logger.error(
                "configuration compile failed",
                extra={
                    "event_action": "compile",
                    "event_outcome": "failure",
                    "config_file": self.filename,
                    "payload": {"state": self.state.value, "error": str(exc)},
                },
            )
            self.error = exc
            self.state = CompilerState.FAILED
            raise

        config = self.registry.freeze(filename=self.filename)
        self.state = CompilerState.DONE
        self.logger.info(
            "configuration compiled",
            extra={
                "event_action": "compile",
                "event_outcome": "success",
                "config_file": self.filename,
                "payload": {
                    "sources": len(config.sources),
                    "caches": len(config.caches),
                    "formats": len(config.image_formats),
                    "tilesets": len(config.tilesets),
                    "services": sorted(config.services),
                },
            },
        )
        emit_metric(
            self.logger,
            name="config_compile_seconds",
            value=time.monotonic() - started,
            payload={"file": self.filename},
            level="DEBUG",
        )
        return config

    def _walk(self, root: Element) -> None:
        if root.tag != ROOT_TAG:
            raise ParseError(
                f"failed to parse tilecache config file {self.filename}: "
                f"document does not begin with <{ROOT_TAG}> tag. found <{root.tag}>"
            )
        for child in child_elements(root):
            handler = self._handlers.get(child.tag)
            if handler is None:
                raise ParseError(
                    f"failed to parse tilecache config file {self.filename}: unknown tag <{child.tag}>"
                )
            handler(child)

    def _handle_entity(self, parser: Callable[[Element, ConfigRegistry], object]) -> Callable[[Element], None]:
        def _handle(node: Element) -> None:
            parser(node, self.registry)
            self.logger.debug(
                f"registered {node.tag} {node.get('name')}",
                extra={
                    "event_action": "register",
                    "config_file": self.filename,
                    "entity": node.tag,
                    "payload": {"name": node.get("name"), "type": node.get("type")},
                },
            )

        return _handle

    def _handle_services(self, node: Element) -> None:
        for service_node in child_elements(node):
            if service_node.tag not in VALID_SERVICES:
                continue
            if node_text(service_node) != "false":
                self.registry.services.add(service_node.tag)

    def _handle_merge_format(self, node: Element) -> None:
        value = node_text(node)
        image_format = self.registry.get_image_format(value)
        if image_format is None:
            raise ParseError(f"merge_format tag references format {value} but it is not configured")
        self.registry.merge_format = image_format

    def _handle_lock_dir(self, node: Element) -> None:
        self.registry.lock_dir = node_text(node)


def compile_document(root: Element, *, filename: str = "<memory>") -> Config:
    return ConfigCompiler(filename).compile(root)
