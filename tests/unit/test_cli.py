import json
from pathlib import Path

import pytest
import yaml

from tilecache.cli import EXIT_DISK_ERROR, EXIT_PARSE_ERROR, main


def _write(path: Path, body: str, lock_dir: Path) -> Path:
    path.write_text(
        f"<tilecache>{body}<services><wms/></services><lock_dir>{lock_dir}</lock_dir></tilecache>",
        encoding="utf-8",
    )
    return path


def test_init_command_writes_config(tmp_path: Path) -> None:
    config_path = tmp_path / "tilecache.xml"
    rc = main(["init", "--config", str(config_path)])
    assert rc == 0
    assert config_path.exists()


def test_check_prints_summary(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path / "t.xml", '<cache name="c" type="disk"/>', tmp_path / "locks")
    rc = main(["check", "--config", str(path)])
    assert rc == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["caches"] == ["c"]
    assert summary["formats"] == ["JPEG", "PNG", "PNG8"]
    assert summary["services"] == ["wms"]


def test_check_reports_parse_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path / "t.xml", '<source name="s" type="tms"/>', tmp_path / "locks")
    rc = main(["check", "--config", str(path)])
    assert rc == EXIT_PARSE_ERROR
    assert 'parse error: unknown source type tms for source "s"' in capsys.readouterr().err


def test_check_reports_disk_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    path = _write(tmp_path / "t.xml", "", blocker)
    rc = main(["check", "--config", str(path)])
    assert rc == EXIT_DISK_ERROR
    assert "disk error: failed to create lock directory" in capsys.readouterr().err


def test_check_reports_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["check", "--config", str(tmp_path / "nope.xml")])
    assert rc == EXIT_PARSE_ERROR
    assert "config file does not exist" in capsys.readouterr().err


def test_show_supports_yaml(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path / "t.xml", '<source name="s" type="wms"><srs>EPSG:4326</srs></source>', tmp_path / "l")
    rc = main(["show", "--config", str(path), "--format", "yaml"])
    assert rc == 0
    payload = yaml.safe_load(capsys.readouterr().out)
    assert payload["sources"]["s"]["srs"] == "EPSG:4326"
    assert payload["formats"]["PNG8"]["colors"] == 256


def test_config_path_falls_back_to_settings(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path / "t.xml", "", tmp_path / "locks")
    settings = tmp_path / "settings.yml"
    settings.write_text(f"config_path: {path}\n", encoding="utf-8")
    rc = main(["--settings", str(settings), "show", "--format", "json"])
    assert rc == 0
    assert json.loads(capsys.readouterr().out)["filename"] == str(path)


def test_doctor_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(
        tmp_path / "t.xml",
        f'<cache name="c" type="disk"><base>{tmp_path / "tiles"}</base></cache>',
        tmp_path / "locks",
    )
    rc = main(["doctor", "--config", str(path)])
    assert rc == 0
    report = json.loads(capsys.readouterr().out)
    assert report["ok"] is True
    assert {item["name"] for item in report["checks"]} >= {"lock_dir", "services", "cache:c", "merge_format"}
