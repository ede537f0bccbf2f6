"""Filesystem capability probe for the lock directory."""

from __future__ import annotations

from pathlib import Path

from tilecache.config.errors import DiskError
from tilecache.config.schema import LOCK_PROBE_FILENAME


def probe_lock_dir(lock_dir: str) -> Path:
    """Create ``lock_dir`` (with parents) and check a lock file can be created and removed."""
    if not lock_dir:
        raise DiskError(f"failed to create lock directory {lock_dir!r}: empty path")
    directory = Path(lock_dir)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DiskError(f"failed to create lock directory {lock_dir}: {exc.strerror or exc}") from exc

    probe = directory / LOCK_PROBE_FILENAME
    try:
        with probe.open("w", encoding="utf-8"):
            pass
    except OSError as exc:
        raise DiskError(f"failed to create test lockfile {probe}: {exc.strerror or exc}") from exc
    try:
        probe.unlink()
    except OSError as exc:
        raise DiskError(f"failed to remove test lockfile {probe}: {exc.strerror or exc}") from exc
    return directory
