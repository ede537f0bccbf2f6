from __future__ import annotations

from pathlib import Path
from typing import Callable
from xml.etree import ElementTree

import pytest

from tilecache.config.compiler import ConfigCompiler
from tilecache.config.schema import Config


DEFAULT_SERVICES = "<services><wms/></services>"


@pytest.fixture
def lock_dir(tmp_path: Path) -> Path:
    return tmp_path / "locks"


@pytest.fixture
def document(lock_dir: Path) -> Callable[..., str]:
    def _document(body: str, *, services: str = DEFAULT_SERVICES) -> str:
        return f"<tilecache>{body}{services}<lock_dir>{lock_dir}</lock_dir></tilecache>"

    return _document


@pytest.fixture
def compile_xml(document: Callable[..., str]) -> Callable[..., Config]:
    def _compile(body: str, *, services: str = DEFAULT_SERVICES) -> Config:
        root = ElementTree.fromstring(document(body, services=services))
        return ConfigCompiler("test.xml").compile(root)

    return _compile
