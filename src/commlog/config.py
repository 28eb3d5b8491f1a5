"""
Decode Configuration
====================

Settings that control how a capture is read and how the transcript is
shown. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)

Environment variables (all optional):
    COMMLOG_COLOR: auto, ansi, text or none
    COMMLOG_RAW_STATUS: 1/true/yes to show raw status bytes
    COMMLOG_FORMAT: auto, binary or hex
    COMMLOG_PROGRESS_INTERVAL: records between spinner updates
    COMMLOG_IDLE_TIMEOUT: seconds of silence that end a live capture
    COMMLOG_BAUD: capture port baud rate

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from commlog.capture import DEFAULT_BAUD_RATE, CaptureFormat
from commlog.errors import ConfigError

COLOR_CHOICES = ("auto", "ansi", "text", "none")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(name, value, "a boolean")


def _parse_positive_int(name: str, value: str) -> int:
    try:
        result = int(value)
    except ValueError:
        raise ConfigError(name, value, "an integer") from None
    if result <= 0:
        raise ConfigError(name, value, "a positive integer")
    return result


def _parse_timeout(name: str, value: str) -> Optional[float]:
    if value.strip().lower() in ("", "none"):
        return None
    try:
        result = float(value)
    except ValueError:
        raise ConfigError(name, value, "a number of seconds") from None
    if result < 0:
        raise ConfigError(name, value, "a non-negative number")
    return result


@dataclass
class DecodeConfig:
    """
    Configuration for a decode run.

    Attributes:
        color: "auto" (ANSI on a terminal, plain otherwise), "ansi",
            "text" or "none"
        raw_status: Show each byte as SS:DD
        show_descriptions: Append poll descriptions to lines
        number_messages: Prefix lines with message numbers
        capture_format: Capture file layout
        progress_interval: Records between spinner updates
        idle_timeout: Seconds without data that end a live capture
            (None = run until interrupted)
        baud_rate: Capture port baud rate
    """

    color: str = "auto"
    raw_status: bool = False
    show_descriptions: bool = True
    number_messages: bool = False
    capture_format: CaptureFormat = CaptureFormat.AUTO
    progress_interval: int = 1000
    idle_timeout: Optional[float] = None
    baud_rate: int = DEFAULT_BAUD_RATE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DecodeConfig":
        """
        Create a DecodeConfig from environment variables.

        Args:
            environ: Mapping to read instead of os.environ.

        Returns:
            DecodeConfig with environment overrides applied.

        Raises:
            ConfigError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        config = cls()

        if (color := env.get("COMMLOG_COLOR")) is not None:
            color = color.strip().lower()
            if color not in COLOR_CHOICES:
                raise ConfigError("COMMLOG_COLOR", color, ", ".join(COLOR_CHOICES))
            config.color = color

        if (raw := env.get("COMMLOG_RAW_STATUS")) is not None:
            config.raw_status = _parse_bool("COMMLOG_RAW_STATUS", raw)

        if (fmt := env.get("COMMLOG_FORMAT")) is not None:
            try:
                config.capture_format = CaptureFormat(fmt.strip().lower())
            except ValueError:
                raise ConfigError("COMMLOG_FORMAT", fmt, "auto, binary or hex") from None

        if (interval := env.get("COMMLOG_PROGRESS_INTERVAL")) is not None:
            config.progress_interval = _parse_positive_int(
                "COMMLOG_PROGRESS_INTERVAL", interval
            )

        if (idle := env.get("COMMLOG_IDLE_TIMEOUT")) is not None:
            config.idle_timeout = _parse_timeout("COMMLOG_IDLE_TIMEOUT", idle)

        if (baud := env.get("COMMLOG_BAUD")) is not None:
            config.baud_rate = _parse_positive_int("COMMLOG_BAUD", baud)

        return config
