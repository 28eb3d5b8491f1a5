"""
Comm Log Error Hierarchy
========================

This module defines the exceptions raised by the comm log tools.

The decoding core (status decoding, segmentation, classification and
rendering) never raises on data: every status byte decodes, and every byte
lands in some message. Exceptions only come from the edges - reading a
capture file or port, and parsing configuration.

Exception Hierarchy
-------------------
CommLogError (base)
├── CaptureError - capture file or port cannot be read
│   └── CaptureFormatError - capture content is malformed
└── ConfigError - invalid configuration value

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class CommLogError(Exception):
    """
    Base exception for all comm log errors.

    Callers can catch every error raised by the package with one clause:

        try:
            transcript = decode(iter_capture_file("poll.cap"))
        except CommLogError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Location inside a text capture file, used for error reporting.

    Attributes:
        filename: Name of the capture file (or "<input>" for streams)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Capture Exceptions
# =============================================================================

class CaptureError(CommLogError):
    """
    Capture source cannot be opened or read.

    Raised for missing files, unreadable files and serial port failures.
    """
    pass


class CaptureFormatError(CaptureError):
    """
    Capture content does not follow the expected layout.

    Attributes:
        message: The error description
        location: Where in the capture the problem was found (optional)
    """

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        self.message = message
        self.location = location
        if location:
            super().__init__(f"{location}: error: {message}")
        else:
            super().__init__(f"error: {message}")


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigError(CommLogError):
    """
    Invalid configuration value.

    Attributes:
        name: Name of the offending setting (e.g. "COMMLOG_COLOR")
        value: The rejected value
    """

    def __init__(self, name: str, value: str, expected: str = ""):
        self.name = name
        self.value = value
        message = f"Invalid value for {name}: {value!r}"
        if expected:
            message += f" (expected {expected})"
        super().__init__(message)
