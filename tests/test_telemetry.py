from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator

import pytest

from vimcore.buffer import Buffer
from vimcore.runtime import EditorSettings, telemetry


@pytest.fixture
def log_file(tmp_path: Path) -> Iterator[Path]:
    path = tmp_path / "vimcore.log"
    telemetry.configure(
        config=telemetry.TelemetryConfig(
            level="DEBUG", json_format=True, log_file=str(path)
        )
    )
    try:
        yield path
    finally:
        telemetry.configure(config=telemetry.TelemetryConfig())


def read_records(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text().splitlines() if line]


def test_record_event_writes_fields(log_file: Path) -> None:
    telemetry.record_event("file.open", data={"path": "a.txt", "lines": 3})

    records = read_records(log_file)
    assert records[-1]["event"] == "file.open"
    assert records[-1]["lines"] == "3"
    assert records[-1]["logger"] == "vimcore"


def test_span_logs_end_with_duration(log_file: Path) -> None:
    buffer = Buffer.from_text("ab", name="demo")

    buffer.insert(1, "x")

    records = read_records(log_file)
    end = [r for r in records if r.get("span") == "buffer::insert"][-1]
    assert end["message"].startswith("span::end")
    assert end["component"] == "buffer"
    assert end["buffer"] == "demo"
    assert "ms" in end


def test_span_failure_is_logged_and_reraised(log_file: Path) -> None:
    with pytest.raises(ZeroDivisionError):
        with telemetry.span("demo::fail", component=True):
            1 / 0

    records = read_records(log_file)
    failure = records[-1]
    assert failure["level"] == "ERROR"
    assert failure["span"] == "demo::fail"
    assert failure["component"] == "demo::fail"


def test_events_below_level_are_dropped(tmp_path: Path) -> None:
    path = tmp_path / "quiet.log"
    telemetry.configure(
        config=telemetry.TelemetryConfig(level="WARNING", log_file=str(path))
    )
    try:
        telemetry.record_event("noise", level="debug")
        telemetry.record_event("problem", level="warning", data={"code": 1})
    finally:
        telemetry.configure(config=telemetry.TelemetryConfig())

    text = path.read_text()
    assert "noise" not in text
    assert "event::problem" in text


def test_get_logger_prefixes_package_name() -> None:
    assert telemetry.get_logger("editor").name == "vimcore.editor"
    assert telemetry.get_logger("vimcore.view").name == "vimcore.view"
    assert telemetry.get_logger().name == "vimcore"


def test_configure_rejects_config_and_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=telemetry.TelemetryConfig(), preset="quiet")


def test_unknown_preset_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="loud")


def test_quiet_preset_has_no_output_handlers() -> None:
    try:
        config = telemetry.configure(preset="quiet")
        assert config.level == "CRITICAL"
        assert config.build_handlers() == []
    finally:
        telemetry.configure(config=telemetry.TelemetryConfig())


def test_settings_from_env() -> None:
    settings = EditorSettings.from_env(
        {
            "VIMCORE_ENCODING": "latin-1",
            "VIMCORE_COLS": "100",
            "VIMCORE_ROWS": "nope",
            "VIMCORE_SHOW_TILDES": "off",
        }
    )

    assert settings == EditorSettings(
        encoding="latin-1", cols=100, rows=24, show_tildes=False
    )


def test_settings_clamp_sizes() -> None:
    settings = EditorSettings.from_env({"VIMCORE_COLS": "0", "VIMCORE_ROWS": "-3"})

    assert (settings.cols, settings.rows) == (1, 1)
