from pathlib import Path

import pytest

from tilecache.config.errors import ParseError
from tilecache.config.loader import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_SETTINGS_PATH,
    compile_config,
    initialize_config,
    load_document,
    load_settings,
)


def test_load_document_reports_invalid_xml(tmp_path: Path) -> None:
    path = tmp_path / "broken.xml"
    path.write_text("<tilecache><source></tilecache>", encoding="utf-8")
    with pytest.raises(ParseError, match="Is it valid XML"):
        load_document(path)


def test_load_document_requires_existing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_document(tmp_path / "missing.xml")


def test_env_tokens_are_interpolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TC_SRS", "EPSG:3857")
    monkeypatch.delenv("TC_UNSET", raising=False)
    path = tmp_path / "env.xml"
    path.write_text(
        '<tilecache><source name="${TC_NAME:-wms1}" type="wms"><srs>${TC_SRS}</srs></source>'
        "<lock_dir>${TC_UNSET:-/tmp/x}</lock_dir></tilecache>",
        encoding="utf-8",
    )
    root = load_document(path)
    source = root.find("source")
    assert source.get("name") == "wms1"
    assert source.find("srs").text == "EPSG:3857"
    assert root.find("lock_dir").text == "/tmp/x"


def test_missing_env_token_without_default_is_parse_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TC_REQUIRED", raising=False)
    path = tmp_path / "env.xml"
    path.write_text("<tilecache><lock_dir>${TC_REQUIRED}</lock_dir></tilecache>", encoding="utf-8")
    with pytest.raises(ParseError, match="TC_REQUIRED"):
        load_document(path)


def test_initialize_config_refuses_to_overwrite(tmp_path: Path) -> None:
    path = tmp_path / "conf" / "tilecache.xml"
    initialize_config(path)
    assert path.read_text(encoding="utf-8") == DEFAULT_CONFIG_PATH.read_text(encoding="utf-8")
    with pytest.raises(FileExistsError):
        initialize_config(path)
    initialize_config(path, force=True)


def test_bundled_defaults_compile(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TILECACHE_LOCK_DIR", str(tmp_path / "locks"))
    monkeypatch.setenv("TILECACHE_CACHE_DIR", str(tmp_path / "cache"))
    config = compile_config(DEFAULT_CONFIG_PATH)
    tileset = config.get_tileset("basic")
    assert tileset is not None
    assert tileset.levels == 6
    assert tileset.format is config.get_image_format("PNGQ")
    assert config.get_cache("disk").base_dir == str(tmp_path / "cache")
    assert config.services == frozenset({"wms", "tms"})
    assert config.filename == str(DEFAULT_CONFIG_PATH)


def test_load_settings_defaults_without_file(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TILECACHE_CONFIG", raising=False)
    settings = load_settings(None)
    assert settings.config_path == "tilecache.xml"
    assert settings.logging.level == "INFO"
    assert settings.api.port == 8080
    assert settings.api.trusted_hosts == ["*"]


def test_load_settings_reads_bundled_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TILECACHE_CONFIG", "/srv/tiles/tilecache.xml")
    assert DEFAULT_SETTINGS_PATH.exists()
    assert load_settings().config_path == "/srv/tiles/tilecache.xml"


def test_load_settings_from_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TC_PORT", "9090")
    path = tmp_path / "settings.yml"
    path.write_text(
        "config_path: /etc/tilecache.xml\n"
        "logging:\n  level: debug\n  format: text\n"
        "api:\n  port: ${TC_PORT}\n  docs_enabled: 'yes'\n  trusted_hosts: [tiles.example.com]\n",
        encoding="utf-8",
    )
    settings = load_settings(path)
    assert settings.config_path == "/etc/tilecache.xml"
    assert settings.logging.level == "DEBUG"
    assert settings.logging.fmt == "text"
    assert settings.api.port == 9090
    assert settings.api.docs_enabled is True
    assert settings.api.trusted_hosts == ["tiles.example.com"]


def test_load_settings_requires_mapping(tmp_path: Path) -> None:
    path = tmp_path / "settings.yml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must contain a mapping"):
        load_settings(path)
