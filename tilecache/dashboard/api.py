"""Read-only HTTP view over a compiled configuration."""

from __future__ import annotations

from typing import Any, Callable

try:
    from fastapi import FastAPI, HTTPException
    from starlette.middleware.trustedhost import TrustedHostMiddleware
except Exception:  # pragma: no cover - optional dependency
    FastAPI = None  # type: ignore[assignment]
    HTTPException = RuntimeError  # type: ignore[assignment]
    TrustedHostMiddleware = None  # type: ignore[assignment]

from tilecache.config.schema import Config
from tilecache.config.settings import APIConfig
from tilecache.core.doctor import run_diagnostics


def create_app(config: Config, api_config: APIConfig | None = None) -> Any:
    if FastAPI is None:
        raise RuntimeError("FastAPI is not installed. Install with: pip install 'tilecache[api]'")

    api_config = api_config or APIConfig()
    docs_enabled = bool(api_config.docs_enabled)
    trusted_hosts = list(api_config.trusted_hosts) or ["*"]

    app = FastAPI(
        title="tilecache configuration",
        version="0.1.0",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    if trusted_hosts != ["*"] and TrustedHostMiddleware is not None:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=trusted_hosts)

    def _lookup(kind: str, getter: Callable[[str], Any], name: str) -> dict[str, Any]:
        item = getter(name)
        if item is None:
            raise HTTPException(status_code=404, detail=f"{kind} '{name}' is not configured")
        return item.describe()

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/status")
    def status() -> dict[str, Any]:
        return config.summary()

    @app.get("/doctor")
    def doctor() -> dict[str, Any]:
        return run_diagnostics(config)

    @app.get("/sources")
    def list_sources() -> list[str]:
        return sorted(config.sources)

    @app.get("/sources/{name}")
    def get_source(name: str) -> dict[str, Any]:
        return _lookup("source", config.get_source, name)

    @app.get("/caches")
    def list_caches() -> list[str]:
        return sorted(config.caches)

    @app.get("/caches/{name}")
    def get_cache(name: str) -> dict[str, Any]:
        return _lookup("cache", config.get_cache, name)

    @app.get("/formats")
    def list_formats() -> list[str]:
        return sorted(config.image_formats)

    @app.get("/formats/{name}")
    def get_format(name: str) -> dict[str, Any]:
        return _lookup("format", config.get_image_format, name)

    @app.get("/tilesets")
    def list_tilesets() -> list[str]:
        return sorted(config.tilesets)

    @app.get("/tilesets/{name}")
    def get_tileset(name: str) -> dict[str, Any]:
        return _lookup("tileset", config.get_tileset, name)

    return app
