"""Dataclasses for process level runtime settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
VALID_LOG_FORMATS = {"ecs_json", "text"}
VALID_LOG_SINKS = {"stdout", "file"}


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"
    fmt: str = "ecs_json"
    sink: str = "stdout"
    file_path: str | None = None
    service_name: str = "tilecache"


@dataclass(slots=True)
class APIConfig:
    host: str = "127.0.0.1"
    port: int = 8080
    docs_enabled: bool = False
    trusted_hosts: list[str] = field(default_factory=lambda: ["*"])


@dataclass(slots=True)
class RuntimeSettings:
    config_path: str = "tilecache.xml"
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    api: APIConfig = field(default_factory=APIConfig)


def _parse_bool_value(raw: Any, *, field_name: str, default: bool) -> bool:
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"'{field_name}' must be a boolean")


def _parse_host_list(raw: Any, *, field_name: str) -> list[str]:
    if raw is None:
        return ["*"]
    if not isinstance(raw, list):
        raise ValueError(f"'{field_name}' must be a list")
    values: list[str] = []
    for item in raw:
        normalized = str(item).strip()
        if not normalized or normalized in values:
            continue
        if " " in normalized:
            raise ValueError(f"'{field_name}' entries must not include spaces")
        values.append(normalized)
    if not values:
        raise ValueError(f"'{field_name}' must contain at least one non-empty value")
    return values


def parse_settings(data: dict[str, Any]) -> RuntimeSettings:
    config_path = str(data.get("config_path", "tilecache.xml")).strip()
    if not config_path:
        raise ValueError("'config_path' must not be empty")

    logging_raw = data.get("logging", {}) or {}
    if not isinstance(logging_raw, dict):
        raise ValueError("'logging' must be an object")
    level = str(logging_raw.get("level", "INFO")).upper()
    if level not in VALID_LOG_LEVELS:
        raise ValueError(f"invalid log level '{level}'")
    log_format = str(logging_raw.get("format", "ecs_json"))
    if log_format not in VALID_LOG_FORMATS:
        raise ValueError(f"invalid log format '{log_format}'")
    sink = str(logging_raw.get("sink", "stdout"))
    if sink not in VALID_LOG_SINKS:
        raise ValueError(f"invalid log sink '{sink}'")
    file_path = logging_raw.get("file_path")
    if sink == "file" and not file_path:
        raise ValueError("'logging.file_path' is required when logging.sink is 'file'")
    logging_config = LoggingConfig(
        level=level,
        fmt=log_format,
        sink=sink,
        file_path=str(file_path) if file_path else None,
        service_name=str(logging_raw.get("service_name", "tilecache")).strip() or "tilecache",
    )

    api_raw = data.get("api", {}) or {}
    if not isinstance(api_raw, dict):
        raise ValueError("'api' must be an object")
    port = int(api_raw.get("port", 8080))
    if port < 1 or port > 65535:
        raise ValueError("api port must be between 1 and 65535")
    api_config = APIConfig(
        host=str(api_raw.get("host", "127.0.0.1")).strip() or "127.0.0.1",
        port=port,
        docs_enabled=_parse_bool_value(
            api_raw.get("docs_enabled"),
            field_name="api.docs_enabled",
            default=False,
        ),
        trusted_hosts=_parse_host_list(api_raw.get("trusted_hosts"), field_name="api.trusted_hosts"),
    )

    return RuntimeSettings(config_path=config_path, logging=logging_config, api=api_config)
