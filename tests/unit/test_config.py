"""Unit tests for VERSIONRING_* environment configuration."""

from __future__ import annotations

import pytest

from versionring.config import load_config
from versionring.models.config import VersionRingConfig


class TestLoadConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("VERSIONRING_DEFAULT_CAPACITY", raising=False)
        monkeypatch.delenv("VERSIONRING_LOG_LEVEL", raising=False)
        monkeypatch.delenv("VERSIONRING_LOG_FORMAT", raising=False)
        cfg = load_config()
        assert cfg == VersionRingConfig()
        assert cfg.ring.default_capacity == 10
        assert cfg.log.level == "info"
        assert cfg.log.format == "json"

    def test_capacity_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VERSIONRING_DEFAULT_CAPACITY", "25")
        assert load_config().ring.default_capacity == 25

    @pytest.mark.parametrize(("raw", "expected"), [("0", 1), ("-4", 1), ("99999", 10_000)])
    def test_capacity_is_clamped(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: int) -> None:
        monkeypatch.setenv("VERSIONRING_DEFAULT_CAPACITY", raw)
        assert load_config().ring.default_capacity == expected

    def test_log_level_is_lowercased(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VERSIONRING_LOG_LEVEL", "DEBUG")
        assert load_config().log.level == "debug"

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VERSIONRING_LOG_LEVEL", "verbose")
        with pytest.raises(ValueError, match="Invalid log level"):
            load_config()

    def test_log_format_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VERSIONRING_LOG_FORMAT", "Console")
        assert load_config().log.format == "console"

    def test_invalid_log_format(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VERSIONRING_LOG_FORMAT", "xml")
        with pytest.raises(ValueError, match="Invalid log format"):
            load_config()
