"""
Capture Status Byte Decoding
============================

Every byte in a comm log is stored as a (status, data) pair. The data byte
is the value seen on the line; the status byte is written by the capture
interface and describes how the byte was seen.

Status Byte Layout
------------------
    ┌───────┬─────────┬────────┬─────────┬──────────────┬─────┐
    │ bit 7 │  bit 6  │ bit 5  │  bit 4  │   bits 3..1  │ b0  │
    │ BREAK │ FRAMING │ PARITY │ OVERRUN │   sub-code   │ DIR │
    └───────┴─────────┴────────┴─────────┴──────────────┴─────┘

- DIR: 1 = received (RX), 0 = transmitted (TX)
- sub-code: 3-bit number; 1 marks a comment byte, 0 and 2-7 are reserved
- bits 7..4: copied as-is from the UART status register

The upper four bits only mean something for received bytes, so they are
masked off for TX. The parity bit is also the protocol's address/command
marker: address and command bytes are sent with the wakeup (9th) bit set,
which the capture UART reports as a parity error.

Usage:
    flags = decode_status(0x21)
    flags.direction            # Direction.RX
    flags.is_address_or_command  # True

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from typing import Final


# =============================================================================
# Status Bit Definitions
# =============================================================================

# Bit .0 flags the direction
DIRECTION_MASK: Final[int] = 0x01

# Bits .3.2.1 form a number (shift right once to get 0-7)
SUB_CODE_MASK: Final[int] = 0x0E
SUB_CODE_SHIFT: Final[int] = 1
SUB_CODE_COMMENT: Final[int] = 1

# Bits .7.6.5.4 come from the UART status register
OVERRUN_MASK: Final[int] = 0x10
PARITY_MASK: Final[int] = 0x20
FRAMING_MASK: Final[int] = 0x40
BREAK_MASK: Final[int] = 0x80


class Direction(IntEnum):
    """Line direction as seen by the capture interface."""

    TX = 0
    RX = 1


# =============================================================================
# Decoded Flags
# =============================================================================

@dataclass(frozen=True)
class StatusFlags:
    """
    Semantic view of one raw status byte.

    Attributes:
        raw: The status byte as captured
        direction: RX or TX (bit 0)
        is_comment: True if the sub-code in bits 3..1 is the comment code
        is_address_or_command: True if bit 5 is set, in either direction
        overrun: Overrun error (RX only)
        parity_error: Parity error (RX only)
        framing_error: Framing error (RX only)
        break_error: Break condition (RX only)
    """
    raw: int
    direction: Direction
    is_comment: bool
    is_address_or_command: bool
    overrun: bool
    parity_error: bool
    framing_error: bool
    break_error: bool

    @property
    def rx(self) -> bool:
        return self.direction == Direction.RX

    @property
    def sub_code(self) -> int:
        """The 3-bit sub-code from bits 3..1."""
        return (self.raw & SUB_CODE_MASK) >> SUB_CODE_SHIFT

    @property
    def has_line_error(self) -> bool:
        """True if any of overrun, framing or break was reported."""
        return self.overrun or self.framing_error or self.break_error


@lru_cache(maxsize=256)
def decode_status(raw_status: int) -> StatusFlags:
    """
    Decode a raw status byte into StatusFlags.

    This is a pure function over 0..255 and never fails for byte values.
    Results are cached, so equal inputs return the same object.

    Args:
        raw_status: Status byte as written by the capture interface.

    Returns:
        Decoded StatusFlags.
    """
    raw_status &= 0xFF
    direction = Direction.RX if raw_status & DIRECTION_MASK else Direction.TX
    rx = direction == Direction.RX

    sub_code = (raw_status & SUB_CODE_MASK) >> SUB_CODE_SHIFT

    return StatusFlags(
        raw=raw_status,
        direction=direction,
        is_comment=sub_code == SUB_CODE_COMMENT,
        is_address_or_command=bool(raw_status & PARITY_MASK),
        # Only received bytes carry UART error status
        overrun=rx and bool(raw_status & OVERRUN_MASK),
        parity_error=rx and bool(raw_status & PARITY_MASK),
        framing_error=rx and bool(raw_status & FRAMING_MASK),
        break_error=rx and bool(raw_status & BREAK_MASK),
    )


# =============================================================================
# Records
# =============================================================================

@dataclass(frozen=True)
class RawRecord:
    """
    One logged unit: a status byte and the data byte it describes.

    Attributes:
        status: Raw status byte (0-255)
        data: Data byte seen on the line (0-255)
    """
    status: int
    data: int

    def __post_init__(self) -> None:
        if not 0 <= self.status <= 0xFF:
            raise ValueError(f"Status must be 0-255, got {self.status}")
        if not 0 <= self.data <= 0xFF:
            raise ValueError(f"Data must be 0-255, got {self.data}")

    def __repr__(self) -> str:
        return f"RawRecord(status=${self.status:02X}, data=${self.data:02X})"


@dataclass(frozen=True)
class DecodedByte:
    """A data byte together with its decoded status, as held in a Message."""
    flags: StatusFlags
    data: int

    @classmethod
    def from_record(cls, record: RawRecord) -> "DecodedByte":
        return cls(flags=decode_status(record.status), data=record.data)

    @property
    def record(self) -> RawRecord:
        """The RawRecord this byte was decoded from."""
        return RawRecord(status=self.flags.raw, data=self.data)
