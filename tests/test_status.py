"""
Unit Tests for Status Byte Decoding
===================================

This module tests decoding of capture status bytes:
- Bit extraction over the full 0-255 input range
- Masking of UART error flags on transmitted bytes
- Address/command marker in both directions
- RawRecord validation and DecodedByte round-trips

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import pytest

from commlog.status import (
    BREAK_MASK,
    FRAMING_MASK,
    OVERRUN_MASK,
    PARITY_MASK,
    DecodedByte,
    Direction,
    RawRecord,
    StatusFlags,
    decode_status,
)


# =============================================================================
# Bit Extraction Tests
# =============================================================================

class TestDecodeStatus:
    """Tests for decode_status()."""

    def test_all_status_values_decode(self):
        """Every byte value decodes with the documented direction and comment bits."""
        for raw in range(256):
            flags = decode_status(raw)
            assert isinstance(flags, StatusFlags)
            assert flags.raw == raw
            assert flags.direction == (Direction.RX if raw & 0x01 else Direction.TX)
            assert flags.is_comment == (((raw & 0x0E) >> 1) == 1)
            assert flags.sub_code == (raw >> 1) & 0x07

    def test_tx_error_flags_always_false(self):
        """TX bytes never report UART errors, whatever bits 4-7 hold."""
        for raw in range(0, 256, 2):
            flags = decode_status(raw)
            assert flags.direction == Direction.TX
            assert not flags.overrun
            assert not flags.parity_error
            assert not flags.framing_error
            assert not flags.break_error
            assert not flags.has_line_error

    def test_rx_overrun(self):
        flags = decode_status(0x01 | OVERRUN_MASK)
        assert flags.overrun
        assert not flags.parity_error
        assert not flags.framing_error
        assert not flags.break_error
        assert flags.has_line_error

    def test_rx_parity(self):
        """Parity on RX is both a line error and the address marker."""
        flags = decode_status(0x01 | PARITY_MASK)
        assert flags.parity_error
        assert flags.is_address_or_command
        assert not flags.has_line_error

    def test_rx_framing(self):
        flags = decode_status(0x01 | FRAMING_MASK)
        assert flags.framing_error
        assert flags.has_line_error

    def test_rx_break(self):
        flags = decode_status(0x01 | BREAK_MASK)
        assert flags.break_error
        assert flags.has_line_error

    def test_tx_address_marker(self):
        """The address/command marker is visible on TX bytes."""
        flags = decode_status(PARITY_MASK)
        assert flags.direction == Direction.TX
        assert flags.is_address_or_command
        assert not flags.parity_error

    def test_marker_follows_bit_5(self):
        for raw in range(256):
            assert decode_status(raw).is_address_or_command == bool(raw & 0x20)

    def test_comment_in_both_directions(self):
        assert decode_status(0x02).is_comment
        assert decode_status(0x03).is_comment
        assert decode_status(0x03).direction == Direction.RX

    def test_reserved_sub_codes_are_not_comments(self):
        for sub_code in (0, 2, 3, 4, 5, 6, 7):
            assert not decode_status(sub_code << 1).is_comment

    def test_equal_inputs_equal_flags(self):
        assert decode_status(0x21) == decode_status(0x21)
        assert decode_status(0x21) is decode_status(0x21)


# =============================================================================
# Record Tests
# =============================================================================

class TestRawRecord:
    """Tests for RawRecord and DecodedByte."""

    def test_valid_record(self):
        record = RawRecord(status=0x21, data=0xFF)
        assert record.status == 0x21
        assert record.data == 0xFF

    @pytest.mark.parametrize("status,data", [(-1, 0), (256, 0), (0, -1), (0, 256)])
    def test_out_of_range_rejected(self, status, data):
        with pytest.raises(ValueError):
            RawRecord(status=status, data=data)

    def test_repr_shows_hex(self):
        assert repr(RawRecord(0x20, 0x80)) == "RawRecord(status=$20, data=$80)"

    def test_decoded_byte_round_trip(self):
        record = RawRecord(status=0xF1, data=0x5A)
        item = DecodedByte.from_record(record)
        assert item.data == 0x5A
        assert item.flags == decode_status(0xF1)
        assert item.record == record
