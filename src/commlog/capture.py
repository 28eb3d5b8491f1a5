"""
Capture Sources
===============

Reads (status, data) records from a comm log capture. Three sources are
supported:

- Binary capture files: alternating status and data bytes
- Hex text capture files: whitespace separated hex tokens
- A live capture interface on a serial port, sending the same
  alternating status/data byte stream as the binary files

All readers are generators, so large captures are decoded while they are
read.

Hex Text Format
---------------
    # poll cycle 1
    20 80            ; status 20, data 80
    2001 2181 0100   ; 4-digit tokens hold status and data together

Two-digit tokens are taken in (status, data) order; four-digit tokens
hold a whole record. '#' and ';' start a comment running to end of line.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import io
import logging
import re
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Final, Iterable, Iterator, List, Optional, Union

import serial
import serial.tools.list_ports

from commlog.errors import CaptureError, CaptureFormatError, SourceLocation
from commlog.status import RawRecord

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Read size for binary captures
BLOCK_SIZE: Final[int] = 4096

# Bytes inspected when sniffing the capture format
SNIFF_SIZE: Final[int] = 4096

# Default speed of the capture interface
DEFAULT_BAUD_RATE: Final[int] = 115200

# Serial read timeout in seconds
DEFAULT_READ_TIMEOUT: Final[float] = 0.2

COMMENT_CHARS: Final[str] = "#;"

_TOKEN_RE = re.compile(r"\S+")
_HEX_TOKEN_RE = re.compile(r"[0-9A-Fa-f]{2}(?:[0-9A-Fa-f]{2})?")
_HEX_TEXT_RE = re.compile(r"[0-9A-Fa-f\s]*")


class CaptureFormat(Enum):
    """Layout of a capture file."""

    AUTO = "auto"
    BINARY = "binary"
    HEX = "hex"


# =============================================================================
# Byte Stream Pairing
# =============================================================================

def _pair_bytes(chunks: Iterable[bytes], name: str) -> Iterator[RawRecord]:
    """
    Turn a stream of byte chunks into records.

    Chunks may split a record anywhere. An odd byte left at the end of the
    stream is dropped with a warning.
    """
    pending: Optional[int] = None
    for chunk in chunks:
        if pending is not None:
            chunk = bytes([pending]) + chunk
            pending = None
        end = len(chunk) - (len(chunk) % 2)
        for i in range(0, end, 2):
            yield RawRecord(status=chunk[i], data=chunk[i + 1])
        if end < len(chunk):
            pending = chunk[-1]

    if pending is not None:
        logger.warning("%s: odd trailing byte $%02X ignored", name, pending)


def iter_binary_records(stream: BinaryIO, name: str = "<input>") -> Iterator[RawRecord]:
    """
    Read records from a binary capture stream.

    Args:
        stream: Binary file-like object positioned at the first status byte.
        name: Name used in log messages.

    Yields:
        RawRecord for each (status, data) pair.
    """
    yield from _pair_bytes(iter(lambda: stream.read(BLOCK_SIZE), b""), name)


# =============================================================================
# Hex Text Parsing
# =============================================================================

def _strip_comment(line: str) -> str:
    """Cut a line at the first comment character, keeping column positions."""
    for i, char in enumerate(line):
        if char in COMMENT_CHARS:
            return line[:i]
    return line


def iter_hex_records(lines: Iterable[str], name: str = "<input>") -> Iterator[RawRecord]:
    """
    Read records from hex text lines.

    Args:
        lines: Text lines of the capture.
        name: File name used in error locations.

    Yields:
        RawRecord for each (status, data) pair.

    Raises:
        CaptureFormatError: On a token that is not a 2 or 4 digit hex value,
            or a status byte with no data byte after it.
    """
    status: Optional[int] = None
    status_location: Optional[SourceLocation] = None

    for line_number, line in enumerate(lines, start=1):
        for match in _TOKEN_RE.finditer(_strip_comment(line)):
            token = match.group()
            location = SourceLocation(name, line_number, match.start() + 1)

            if not _HEX_TOKEN_RE.fullmatch(token):
                raise CaptureFormatError(f"invalid hex token '{token}'", location)

            if len(token) == 4:
                if status is not None:
                    raise CaptureFormatError(
                        f"record token '{token}' follows a lone status byte",
                        location,
                    )
                yield RawRecord(status=int(token[:2], 16), data=int(token[2:], 16))
                continue

            value = int(token, 16)
            if status is None:
                status = value
                status_location = location
            else:
                yield RawRecord(status=status, data=value)
                status = None

    if status is not None:
        raise CaptureFormatError("status byte without data byte", status_location)


def looks_like_hex_text(sample: bytes) -> bool:
    """
    Guess whether a capture sample is hex text.

    Args:
        sample: The first bytes of the capture.

    Returns:
        True if the sample is ASCII made only of hex digits, whitespace
        and comments, with at least one hex digit.
    """
    try:
        text = sample.decode("ascii")
    except UnicodeDecodeError:
        return False

    has_digits = False
    for line in text.splitlines():
        body = _strip_comment(line)
        if not _HEX_TEXT_RE.fullmatch(body):
            return False
        has_digits = has_digits or bool(body.strip())
    return has_digits


# =============================================================================
# Capture Files
# =============================================================================

def iter_capture_file(
    path: Union[str, Path],
    fmt: CaptureFormat = CaptureFormat.AUTO,
) -> Iterator[RawRecord]:
    """
    Read records from a capture file.

    Args:
        path: Capture file path.
        fmt: File layout; AUTO sniffs the start of the file.

    Yields:
        RawRecord for each (status, data) pair in file order.

    Raises:
        CaptureError: If the file cannot be opened.
        CaptureFormatError: If a hex text capture is malformed.
    """
    path = Path(path)
    try:
        handle = path.open("rb")
    except OSError as e:
        raise CaptureError(f"Cannot open capture {path}: {e}") from e

    with handle:
        if fmt == CaptureFormat.AUTO:
            sample = handle.read(SNIFF_SIZE)
            handle.seek(0)
            fmt = CaptureFormat.HEX if looks_like_hex_text(sample) else CaptureFormat.BINARY
            logger.debug("Detected %s capture format for %s", fmt.value, path.name)

        if fmt == CaptureFormat.BINARY:
            yield from iter_binary_records(handle, path.name)
        else:
            text = io.TextIOWrapper(handle, encoding="latin-1", newline=None)
            yield from iter_hex_records(text, path.name)


# =============================================================================
# Live Capture Port
# =============================================================================

@dataclass(frozen=True)
class PortInfo:
    """
    An available serial port.

    Attributes:
        device: System device path (e.g., '/dev/ttyUSB0', 'COM3')
        description: Human-readable description from the driver
        vid: USB Vendor ID (None for non-USB ports)
        pid: USB Product ID (None for non-USB ports)
    """

    device: str
    description: str
    vid: Optional[int]
    pid: Optional[int]

    @property
    def is_usb(self) -> bool:
        return self.vid is not None

    def __str__(self) -> str:
        if self.is_usb:
            return f"{self.device} - {self.description} [{self.vid:04X}:{self.pid or 0:04X}]"
        return f"{self.device} - {self.description}"


def list_capture_ports() -> List[PortInfo]:
    """List serial ports a capture interface could be attached to."""
    ports = [
        PortInfo(
            device=port.device,
            description=port.description or "",
            vid=port.vid,
            pid=port.pid,
        )
        for port in serial.tools.list_ports.comports()
    ]
    ports.sort(key=lambda p: p.device)
    logger.debug("Found %d serial ports", len(ports))
    return ports


def open_capture_port(
    device: str,
    baud_rate: int = DEFAULT_BAUD_RATE,
    timeout: float = DEFAULT_READ_TIMEOUT,
) -> serial.Serial:
    """
    Open the serial port of a live capture interface.

    Args:
        device: Serial port device path.
        baud_rate: Speed of the capture interface link.
        timeout: Read timeout in seconds.

    Returns:
        Opened serial.Serial object (8N1, no flow control).

    Raises:
        CaptureError: If the port cannot be opened.
    """
    logger.info("Opening capture port: %s at %d baud", device, baud_rate)
    try:
        port = serial.Serial(
            port=device,
            baudrate=baud_rate,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            timeout=timeout,
            xonxoff=False,
            rtscts=False,
        )
    except (serial.SerialException, ValueError) as e:
        raise CaptureError(f"Cannot open capture port {device}: {e}") from e

    port.reset_input_buffer()
    return port


def _read_port_chunks(port: serial.Serial, idle_timeout: Optional[float]) -> Iterator[bytes]:
    last_data = time.monotonic()
    while True:
        try:
            chunk = port.read(port.in_waiting or 1)
        except serial.SerialException as e:
            raise CaptureError(f"Capture port read error: {e}") from e

        if chunk:
            last_data = time.monotonic()
            yield chunk
        elif idle_timeout is not None and time.monotonic() - last_data >= idle_timeout:
            logger.info("Capture port idle for %.1fs, stopping", idle_timeout)
            return


def iter_port_records(
    port: serial.Serial,
    idle_timeout: Optional[float] = None,
) -> Iterator[RawRecord]:
    """
    Read records from a live capture port.

    Args:
        port: Opened capture port.
        idle_timeout: Stop after this many seconds without data
            (None reads until interrupted).

    Yields:
        RawRecord for each (status, data) pair as it arrives.

    Raises:
        CaptureError: If reading from the port fails.
    """
    yield from _pair_bytes(_read_port_chunks(port, idle_timeout), port.port or "<port>")
