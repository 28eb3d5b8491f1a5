"""
Tests for Decode Configuration
==============================

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import pytest

from commlog.capture import DEFAULT_BAUD_RATE, CaptureFormat
from commlog.config import DecodeConfig
from commlog.errors import ConfigError


class TestDecodeConfig:
    """Tests for DecodeConfig defaults and environment loading."""

    def test_defaults(self):
        config = DecodeConfig()
        assert config.color == "auto"
        assert not config.raw_status
        assert config.show_descriptions
        assert not config.number_messages
        assert config.capture_format == CaptureFormat.AUTO
        assert config.idle_timeout is None
        assert config.baud_rate == DEFAULT_BAUD_RATE

    def test_empty_environment(self):
        assert DecodeConfig.from_env({}) == DecodeConfig()

    def test_color(self):
        assert DecodeConfig.from_env({"COMMLOG_COLOR": "TEXT"}).color == "text"

    def test_invalid_color(self):
        with pytest.raises(ConfigError) as exc_info:
            DecodeConfig.from_env({"COMMLOG_COLOR": "rainbow"})
        assert exc_info.value.name == "COMMLOG_COLOR"
        assert "rainbow" in str(exc_info.value)

    @pytest.mark.parametrize("value,expected", [
        ("1", True), ("yes", True), ("On", True),
        ("0", False), ("no", False), ("", False),
    ])
    def test_raw_status(self, value, expected):
        config = DecodeConfig.from_env({"COMMLOG_RAW_STATUS": value})
        assert config.raw_status is expected

    def test_invalid_bool(self):
        with pytest.raises(ConfigError):
            DecodeConfig.from_env({"COMMLOG_RAW_STATUS": "maybe"})

    def test_format(self):
        config = DecodeConfig.from_env({"COMMLOG_FORMAT": "hex"})
        assert config.capture_format == CaptureFormat.HEX

    def test_invalid_format(self):
        with pytest.raises(ConfigError):
            DecodeConfig.from_env({"COMMLOG_FORMAT": "csv"})

    def test_progress_interval(self):
        config = DecodeConfig.from_env({"COMMLOG_PROGRESS_INTERVAL": "50"})
        assert config.progress_interval == 50

    @pytest.mark.parametrize("value", ["0", "-5", "ten"])
    def test_invalid_progress_interval(self, value):
        with pytest.raises(ConfigError):
            DecodeConfig.from_env({"COMMLOG_PROGRESS_INTERVAL": value})

    def test_idle_timeout(self):
        assert DecodeConfig.from_env({"COMMLOG_IDLE_TIMEOUT": "2.5"}).idle_timeout == 2.5
        assert DecodeConfig.from_env({"COMMLOG_IDLE_TIMEOUT": "none"}).idle_timeout is None

    def test_invalid_idle_timeout(self):
        with pytest.raises(ConfigError):
            DecodeConfig.from_env({"COMMLOG_IDLE_TIMEOUT": "-1"})

    def test_baud(self):
        assert DecodeConfig.from_env({"COMMLOG_BAUD": "19200"}).baud_rate == 19200

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("COMMLOG_COLOR", "none")
        assert DecodeConfig.from_env().color == "none"
