"""Unit tests for mapsize.__main__ module."""

from __future__ import annotations

from collections.abc import Generator
import json
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from pytest import CaptureFixture

from mapsize import const
from mapsize.__main__ import main, parse_args, positive_int, run_mapsize


@pytest.fixture
def mock_setup_log(monkeypatch: pytest.MonkeyPatch) -> Generator[MagicMock]:
    """Mock setup_log so tests do not reconfigure the root logger."""
    monkeypatch.delenv(const.ENV_LOG_LEVEL, raising=False)
    monkeypatch.delenv(const.ENV_VERBOSE, raising=False)
    with patch("mapsize.__main__.setup_log") as mock:
        yield mock


def test_parse_args_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(const.ENV_LOG_LEVEL, raising=False)
    monkeypatch.delenv(const.ENV_VERBOSE, raising=False)

    args = parse_args(["mapsize", "firmware.map"])

    assert args.map_file == "firmware.map"
    assert args.log_level == "INFO"
    assert args.verbose is False
    assert args.no_early_exit is False
    assert args.limit == 20
    assert args.json is None


def test_parse_args_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(const.ENV_LOG_LEVEL, "WARNING")
    monkeypatch.setenv(const.ENV_VERBOSE, "true")

    args = parse_args(["mapsize", "firmware.map"])

    assert args.log_level == "WARNING"
    assert args.verbose is True


@pytest.mark.parametrize("value", ("0", "-3", "ten"))
def test_limit_must_be_positive(value: str, capsys: CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        parse_args(["mapsize", "--limit", value, "firmware.map"])

    assert "--limit" in capsys.readouterr().err


def test_positive_int() -> None:
    assert positive_int("5") == 5


def test_analyze_prints_report(
    esp32_map: Path, mock_setup_log: MagicMock, capsys: CaptureFixture[str]
) -> None:
    result = run_mapsize(["mapsize", "--archives", str(esp32_map)])

    assert result == 0
    output = capsys.readouterr().out
    assert "Memory Region Usage" in output
    assert "Per-archive contributions" in output
    assert "Per-object file contributions" not in output
    mock_setup_log.assert_called_once_with(log_level="INFO")


@pytest.mark.parametrize(
    "flag, expected",
    (("-v", "DEBUG"), ("--quiet", "CRITICAL"), ("--log-level=ERROR", "ERROR")),
)
def test_log_level_flags(
    esp32_map: Path, mock_setup_log: MagicMock, flag: str, expected: str
) -> None:
    run_mapsize(["mapsize", flag, str(esp32_map)])

    mock_setup_log.assert_called_once_with(log_level=expected)


def test_no_early_exit(
    esp32_map: Path, mock_setup_log: MagicMock, capsys: CaptureFixture[str]
) -> None:
    result = run_mapsize(["mapsize", "--no-early-exit", str(esp32_map)])

    assert result == 0
    assert "from 83 lines" in capsys.readouterr().out


def test_json_output(esp32_map: Path, mock_setup_log: MagicMock, tmp_path: Path) -> None:
    json_path = tmp_path / "analysis.json"

    result = run_mapsize(["mapsize", "--json", str(json_path), str(esp32_map)])

    assert result == 0
    data = json.loads(json_path.read_text())
    assert data["symbol_count"] == 18
    assert data["matched_bytes"] == 8620
    assert data["early_exit"] is True
    assert data["regions"]["iram0_0_seg"]["text"] == 1360
    assert data["regions"]["iram0_0_seg"]["free"] == 0x20000 - 1360
    assert data["unclassified"]["total"] == 4660
    assert list(data["archives"]) == ["libfreertos.a", "libmain.a"]


def test_json_output_unwritable(
    esp32_map: Path,
    mock_setup_log: MagicMock,
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    json_path = tmp_path / "missing-dir" / "analysis.json"

    with caplog.at_level(logging.ERROR):
        result = run_mapsize(["mapsize", "--json", str(json_path), str(esp32_map)])

    assert result == 1
    assert "Could not write" in caplog.text


def test_config_file(
    esp32_map: Path,
    mock_setup_log: MagicMock,
    tmp_path: Path,
    capsys: CaptureFixture[str],
) -> None:
    config_path = tmp_path / "mapsize.yaml"
    config_path.write_text("early_exit: false\n")

    result = run_mapsize(["mapsize", "--config", str(config_path), str(esp32_map)])

    assert result == 0
    assert "from 83 lines" in capsys.readouterr().out


def test_invalid_config_file(
    esp32_map: Path,
    mock_setup_log: MagicMock,
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    config_path = tmp_path / "mapsize.yaml"
    config_path.write_text("object_suffixes: [o]\n")

    with caplog.at_level(logging.ERROR):
        result = run_mapsize(["mapsize", "--config", str(config_path), str(esp32_map)])

    assert result == 1
    assert "Invalid settings" in caplog.text


def test_missing_map_file(
    tmp_path: Path, mock_setup_log: MagicMock, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.ERROR):
        result = run_mapsize(["mapsize", str(tmp_path / "missing.map")])

    assert result == 1
    assert "Failed to read map file" in caplog.text


def test_main_keyboard_interrupt() -> None:
    with (
        patch("mapsize.__main__.run_mapsize", side_effect=KeyboardInterrupt),
        patch("sys.argv", ["mapsize", "firmware.map"]),
    ):
        assert main() == 1


def test_version(capsys: CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        parse_args(["mapsize", "--version"])

    assert exc_info.value.code == 0
    assert const.__version__ in capsys.readouterr().out
