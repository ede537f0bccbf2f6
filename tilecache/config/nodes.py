"""Helpers for reading attributes, text and numbers off document nodes."""

from __future__ import annotations

import re
from xml.etree.ElementTree import Element

from tilecache.config.errors import ParseError


_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def extract_name_and_type(node: Element) -> tuple[str | None, str | None]:
    name = node.get("name") or None
    type_tag = node.get("type") or None
    return name, type_tag


def require_name(node: Element, kind: str) -> str:
    name, _ = extract_name_and_type(node)
    if name is None:
        raise ParseError(f'mandatory attribute "name" not found in <{kind}>')
    return name


def require_type(node: Element, kind: str) -> str:
    _, type_tag = extract_name_and_type(node)
    if type_tag is None:
        raise ParseError(f'mandatory attribute "type" not found in <{kind}>')
    return type_tag


def node_text(node: Element) -> str:
    """Concatenated text of the node and all of its descendants."""
    return "".join(node.itertext())


def child_elements(node: Element) -> list[Element]:
    # ElementTree drops comments and processing instructions by default, but a
    # tree built with a custom TreeBuilder may still carry them.
    return [child for child in node if isinstance(child.tag, str)]


def parse_int(raw: str) -> int | None:
    token = raw.lstrip()
    if not _INT_RE.fullmatch(token):
        return None
    return int(token)


def parse_float(raw: str) -> float | None:
    token = raw.lstrip()
    if not _FLOAT_RE.fullmatch(token):
        return None
    return float(token)


def parse_int_list(raw: str) -> list[int] | None:
    values: list[int] = []
    for token in raw.split():
        value = parse_int(token)
        if value is None:
            return None
        values.append(value)
    return values


def parse_float_list(raw: str) -> list[float] | None:
    values: list[float] = []
    for token in raw.split():
        value = parse_float(token)
        if value is None:
            return None
        values.append(value)
    return values
