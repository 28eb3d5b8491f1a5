"""
Unit Tests for Poll Classification
==================================

This module tests request and response classification:
- Broadcast, general and long poll detection from the first TX byte
- Label lookups, including codes with no label
- Response tagging of the RX message after a request
- Label table validation

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import pytest

from commlog.classifier import (
    BROADCAST_DESCRIPTION,
    Classifier,
    PollType,
    classify_request,
    general_poll_description,
)
from commlog.labels import (
    EXCEPTION_LABELS,
    LONG_POLL_LABELS,
    LONG_POLL_RESPONSE_LABELS,
    TABLE_SIZE,
    build_label_table,
)
from commlog.segmenter import MessageKind, decode
from commlog.status import RawRecord


def tx(data, marker=False):
    return RawRecord(status=0x20 if marker else 0x00, data=data)


def rx(data):
    return RawRecord(status=0x01, data=data)


def comment(text):
    return [RawRecord(status=0x02, data=ord(c)) for c in text]


# =============================================================================
# Request Classification Tests
# =============================================================================

class TestClassifyRequest:
    """Tests for classify_request()."""

    def test_broadcast(self):
        assert classify_request(0x80) == (PollType.BROADCAST, None)

    @pytest.mark.parametrize("command,address", [(0x81, 0x01), (0x95, 0x15), (0xFF, 0x7F)])
    def test_general_poll(self, command, address):
        assert classify_request(command) == (PollType.GENERAL, address)

    @pytest.mark.parametrize("command", [0x00, 0x01, 0x2A, 0x7F])
    def test_long_poll(self, command):
        assert classify_request(command) == (PollType.LONG, command)

    def test_every_byte_classifies(self):
        for command in range(256):
            poll_type, _ = classify_request(command)
            assert poll_type in PollType

    def test_general_poll_description(self):
        assert general_poll_description(0x15) == "GENERAL POLL - ADDRESS 15"


# =============================================================================
# Label Table Tests
# =============================================================================

class TestLabelTables:
    """Tests for the built-in label tables."""

    def test_table_sizes(self):
        assert len(LONG_POLL_LABELS) == TABLE_SIZE
        assert len(LONG_POLL_RESPONSE_LABELS) == TABLE_SIZE
        assert len(EXCEPTION_LABELS) == TABLE_SIZE

    def test_known_long_poll(self):
        assert LONG_POLL_LABELS[0x2A] == "LP 2A - SEND TRUE COIN IN"

    def test_uncatalogued_code_is_empty(self):
        assert LONG_POLL_LABELS[0x22] == ""

    def test_known_exception(self):
        assert EXCEPTION_LABELS[0x11] == "EXCEPTION 11 - SLOT DOOR WAS OPENED"

    def test_build_label_table(self):
        table = build_label_table({0x05: "five"})
        assert len(table) == TABLE_SIZE
        assert table[0x05] == "five"
        assert table[0x06] == ""

    def test_build_label_table_rejects_bad_code(self):
        with pytest.raises(ValueError):
            build_label_table({0x100: "too big"})


# =============================================================================
# Classifier Tests
# =============================================================================

class TestClassifier:
    """Tests for Classifier via decode()."""

    def setup_method(self):
        self.classifier = Classifier()

    def run(self, records):
        return list(decode(records, classifier=self.classifier))

    def test_broadcast_poll(self):
        messages = self.run([tx(0x80, marker=True)])
        assert messages[0].poll_type == PollType.BROADCAST
        assert messages[0].description == BROADCAST_DESCRIPTION

    def test_general_poll(self):
        messages = self.run([tx(0x95, marker=True)])
        assert messages[0].poll_type == PollType.GENERAL
        assert messages[0].poll_value == 0x15
        assert messages[0].description == "GENERAL POLL - ADDRESS 15"

    def test_long_poll(self):
        messages = self.run([tx(0x01, marker=True), tx(0x2A)])
        assert messages[0].poll_type == PollType.LONG
        assert messages[0].poll_value == 0x01
        assert messages[0].description == LONG_POLL_LABELS[0x01]

    def test_long_poll_label_lookup(self):
        messages = self.run([tx(0x2A, marker=True)])
        assert messages[0].description == "LP 2A - SEND TRUE COIN IN"

    def test_empty_table_entry(self):
        """A code with no label leaves the description empty."""
        classifier = Classifier(long_poll_labels=build_label_table({}))
        messages = list(decode([tx(0x2A, marker=True)], classifier=classifier))
        assert messages[0].poll_type == PollType.LONG
        assert messages[0].description == ""

    def test_tx_without_marker_not_classified(self):
        messages = self.run([tx(0x2A)])
        assert messages[0].poll_type is None
        assert messages[0].description == ""

    def test_long_poll_response(self):
        classifier = Classifier(
            long_poll_response_labels=build_label_table({0x2A: "TRUE COIN IN REPLY"})
        )
        records = [tx(0x2A, marker=True), rx(0x01), rx(0x2A)]
        messages = list(decode(records, classifier=classifier))
        assert messages[1].kind == MessageKind.RX
        assert messages[1].response_to == PollType.LONG
        assert messages[1].poll_value == 0x2A
        assert messages[1].description == "TRUE COIN IN REPLY"

    def test_general_poll_exception_response(self):
        messages = self.run([tx(0x81, marker=True), rx(0x11)])
        assert messages[1].response_to == PollType.GENERAL
        assert messages[1].description == "EXCEPTION 11 - SLOT DOOR WAS OPENED"

    def test_broadcast_not_answered(self):
        messages = self.run([tx(0x80, marker=True), rx(0x01)])
        assert messages[1].response_to is None
        assert messages[1].description == ""

    def test_comments_between_request_and_reply(self):
        messages = self.run([tx(0x81, marker=True), *comment("note"), rx(0x11)])
        assert messages[1].kind == MessageKind.COMMENT
        assert messages[1].description == ""
        assert messages[2].response_to == PollType.GENERAL

    def test_rx_without_request(self):
        messages = self.run([rx(0x11)])
        assert messages[0].response_to is None
        assert messages[0].description == ""

    def test_reply_bytes_stay_in_one_message(self):
        messages = self.run([tx(0x81, marker=True), rx(0x11), rx(0x12)])
        # Second RX continues the first message (same direction, no marker)
        assert len(messages) == 2

    def test_second_rx_message_untagged(self):
        records = [tx(0x81, marker=True), rx(0x11), RawRecord(0x21, 0x12)]
        messages = self.run(records)
        assert messages[1].response_to == PollType.GENERAL
        assert messages[2].response_to is None

    def test_pending_request_and_reset(self):
        self.run([tx(0x2A, marker=True)])
        assert self.classifier.pending_request == (PollType.LONG, 0x2A)
        self.classifier.reset()
        assert self.classifier.pending_request is None

    def test_table_length_validated(self):
        with pytest.raises(ValueError):
            Classifier(exception_labels=("",) * 10)
