"""Document and settings loading."""

from __future__ import annotations

import os
import re
import shutil
from pathlib import Path
from typing import Any
from xml.etree import ElementTree
from xml.etree.ElementTree import Element

import yaml

from tilecache.config.compiler import ConfigCompiler
from tilecache.config.errors import ParseError
from tilecache.config.schema import Config
from tilecache.config.settings import RuntimeSettings, parse_settings


DEFAULT_CONFIG_PATH = Path(__file__).with_name("defaults.xml")
DEFAULT_SETTINGS_PATH = Path(__file__).with_name("defaults.yml")
_ENV_TOKEN_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-(.*?))?\}")


def load_document(path: Path) -> Element:
    if not path.exists():
        raise FileNotFoundError(f"config file does not exist: {path}")
    try:
        tree = ElementTree.parse(path)
    except ElementTree.ParseError as exc:
        raise ParseError(f"failed to parse file {path}. Is it valid XML? ({exc})") from exc
    root = tree.getroot()
    try:
        _interpolate_element(root)
    except ValueError as exc:
        raise ParseError(f"failed to parse file {path}: {exc}") from exc
    return root


def compile_config(path: Path) -> Config:
    root = load_document(path)
    return ConfigCompiler(str(path)).compile(root)


def load_settings(path: Path | None = None) -> RuntimeSettings:
    path = path if path is not None else DEFAULT_SETTINGS_PATH
    if not path.exists():
        raise FileNotFoundError(f"settings file does not exist: {path}")
    with path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"settings file must contain a mapping: {path}")
    raw = _interpolate_env(raw)
    return parse_settings(raw)


def initialize_config(path: Path, force: bool = False) -> Path:
    if path.exists() and not force:
        raise FileExistsError(f"config already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(DEFAULT_CONFIG_PATH, path)
    return path


def _interpolate_element(node: Element) -> None:
    for key, value in node.attrib.items():
        node.set(key, _interpolate_string(value))
    if node.text:
        node.text = _interpolate_string(node.text)
    for child in node:
        _interpolate_element(child)
        if child.tail:
            child.tail = _interpolate_string(child.tail)


def _interpolate_env(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _interpolate_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    if isinstance(value, str):
        return _interpolate_string(value)
    return value


def _interpolate_string(value: str) -> str:
    if "${" not in value:
        return value

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        default = match.group(2)
        resolved = os.environ.get(name)
        if resolved is not None:
            return resolved
        if default is not None:
            return default
        token = match.group(0)
        raise ValueError(f"missing required environment variable '{name}' referenced by '{token}'")

    return _ENV_TOKEN_RE.sub(_replace, value)
