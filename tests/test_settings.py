from __future__ import annotations

import pytest
from pydantic import ValidationError

from config.settings import Settings, get_settings, load_settings
from scanner.errors import ConfigurationError


def test_defaults() -> None:
    settings = Settings()
    assert settings.log_level == "INFO"
    assert settings.scanner_address == ""
    assert settings.scanner_port is None
    assert settings.max_datagram_size == 1200
    assert settings.reuse_port is True


def test_environment_values_are_read(monkeypatch) -> None:
    monkeypatch.setenv("SCANNER_ADDRESS", " ::1 ")
    monkeypatch.setenv("SCANNER_PORT", "5004")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()
    assert settings.scanner_address == "::1"
    assert settings.scanner_port == 5004
    assert settings.log_level == "DEBUG"


def test_overrides_win_and_none_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("SCANNER_PORT", "5004")

    assert load_settings(scanner_port=6000).scanner_port == 6000
    assert load_settings(scanner_port=None).scanner_port == 5004


@pytest.mark.parametrize(
    "overrides",
    [
        {"scanner_port": 0},
        {"scanner_port": 70000},
        {"max_datagram_size": 12},
        {"log_level": "chatty"},
    ],
)
def test_invalid_values_raise_configuration_error(overrides) -> None:
    with pytest.raises(ConfigurationError):
        load_settings(**overrides)


def test_settings_are_immutable() -> None:
    settings = load_settings(scanner_port=5004)
    with pytest.raises(ValidationError):
        settings.scanner_port = 6000
