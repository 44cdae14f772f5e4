import pytest
import structlog

from homecare.logging import LoggingSettings, _renderer


def test_json_renderer_by_default() -> None:
    assert isinstance(_renderer(LoggingSettings().log_format), structlog.processors.JSONRenderer)


def test_console_renderer_for_local_runs() -> None:
    assert isinstance(_renderer("console"), structlog.dev.ConsoleRenderer)


def test_log_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FORMAT", "console")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    settings = LoggingSettings()
    assert settings.log_format == "console"
    assert settings.log_level == "DEBUG"
