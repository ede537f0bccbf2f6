"""Error kinds raised while compiling a configuration document."""

from __future__ import annotations


class ConfigError(RuntimeError):
    pass


class ParseError(ConfigError):
    """Structural, referential or value-range violation in the document."""


class DiskError(ConfigError):
    """The lock directory could not be created or written to."""
