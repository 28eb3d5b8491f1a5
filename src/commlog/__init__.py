"""
Comm Log Decoder - Transcripts of Polled Serial Bus Captures
============================================================

This package decodes captured logs of a polled master/slave serial bus
(slot-accounting style) into a readable, message-by-message transcript.

Each logged byte is a (status, data) pair. The status byte, written by the
capture interface, holds the direction, UART line errors, a comment marker
and the address/command (wakeup) marker.

Main Components
---------------
- **status**: status byte decoding (StatusFlags)
- **segmenter**: message boundary state machine (Segmenter, Message)
- **classifier**: poll type and description assignment (Classifier)
- **render**: text rendering of messages (Renderer)
- **capture**: capture file and live port readers
- **labels**: command and exception label tables

Quick Start
-----------
Decode a capture file:
    >>> from commlog import Classifier, Renderer, decode, iter_capture_file
    >>> transcript = decode(iter_capture_file("poll.cap"), classifier=Classifier())
    >>> renderer = Renderer()
    >>> for line in renderer.render_all(transcript):
    ...     print(line)

Or use the command-line tool:
    $ commlog decode poll.cap

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

__version__ = "1.0.0"
__author__ = "Hugo José Pinto & Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from commlog.errors import (
    CommLogError,
    CaptureError,
    CaptureFormatError,
    ConfigError,
    SourceLocation,
)

from commlog.status import (
    Direction,
    StatusFlags,
    RawRecord,
    DecodedByte,
    decode_status,
)

from commlog.segmenter import (
    MessageKind,
    Message,
    Transcript,
    Segmenter,
    segment,
    decode,
)

from commlog.classifier import (
    PollType,
    Classifier,
    classify_request,
)

from commlog.labels import (
    LONG_POLL_LABELS,
    LONG_POLL_RESPONSE_LABELS,
    EXCEPTION_LABELS,
    build_label_table,
)

from commlog.render import (
    ColorMode,
    Renderer,
    render_message,
)

from commlog.capture import (
    CaptureFormat,
    iter_capture_file,
    iter_binary_records,
    iter_hex_records,
    iter_port_records,
    open_capture_port,
    list_capture_ports,
)

from commlog.config import DecodeConfig

__all__ = [
    "__version__",
    # Errors
    "CommLogError",
    "CaptureError",
    "CaptureFormatError",
    "ConfigError",
    "SourceLocation",
    # Status
    "Direction",
    "StatusFlags",
    "RawRecord",
    "DecodedByte",
    "decode_status",
    # Segmentation
    "MessageKind",
    "Message",
    "Transcript",
    "Segmenter",
    "segment",
    "decode",
    # Classification
    "PollType",
    "Classifier",
    "classify_request",
    # Labels
    "LONG_POLL_LABELS",
    "LONG_POLL_RESPONSE_LABELS",
    "EXCEPTION_LABELS",
    "build_label_table",
    # Rendering
    "ColorMode",
    "Renderer",
    "render_message",
    # Capture
    "CaptureFormat",
    "iter_capture_file",
    "iter_binary_records",
    "iter_hex_records",
    "iter_port_records",
    "open_capture_port",
    "list_capture_ports",
    # Configuration
    "DecodeConfig",
]
