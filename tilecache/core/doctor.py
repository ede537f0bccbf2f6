"""Operational diagnostics for a compiled configuration."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any

from tilecache.caches.disk import DiskCache
from tilecache.config.errors import DiskError
from tilecache.config.schema import VALID_SERVICES, Config
from tilecache.core.lockdir import probe_lock_dir


@dataclass(slots=True)
class DoctorCheck:
    name: str
    ok: bool
    detail: str


def _nearest_existing_parent(path: Path) -> Path:
    candidate = path
    while not candidate.exists() and candidate != candidate.parent:
        candidate = candidate.parent
    return candidate


def _disk_cache_check(cache: DiskCache) -> DoctorCheck:
    base = Path(cache.base_dir)
    if base.exists():
        ok = base.is_dir() and os.access(base, os.W_OK)
        detail = f"base={base} writable" if ok else f"base={base} is not a writable directory"
    else:
        parent = _nearest_existing_parent(base)
        ok = parent.is_dir() and os.access(parent, os.W_OK)
        detail = f"base={base} will be created under {parent}" if ok else f"base={base} cannot be created"
    return DoctorCheck(name=f"cache:{cache.name}", ok=ok, detail=detail)


def run_diagnostics(config: Config) -> dict[str, Any]:
    checks: list[DoctorCheck] = []

    try:
        probe_lock_dir(config.lock_dir)
        checks.append(DoctorCheck(name="lock_dir", ok=True, detail=f"{config.lock_dir} writable"))
    except DiskError as exc:
        checks.append(DoctorCheck(name="lock_dir", ok=False, detail=str(exc)))

    enabled = [service for service in VALID_SERVICES if config.service_enabled(service)]
    checks.append(
        DoctorCheck(
            name="services",
            ok=bool(enabled),
            detail=f"enabled={','.join(enabled)}" if enabled else "no services enabled",
        )
    )

    for cache in config.caches.values():
        if isinstance(cache, DiskCache):
            checks.append(_disk_cache_check(cache))

    merged = sorted(
        name
        for name, tileset in config.tilesets.items()
        if tileset.is_metatiled and tileset.format is config.merge_format
    )
    checks.append(
        DoctorCheck(
            name="merge_format",
            ok=True,
            detail=(
                f"format={config.merge_format.name} tilesets={','.join(merged)}"
                if merged
                else f"format={config.merge_format.name} unused"
            ),
        )
    )

    return {
        "ok": all(item.ok for item in checks),
        "checks": [
            {
                "name": item.name,
                "ok": item.ok,
                "detail": item.detail,
            }
            for item in checks
        ],
    }
