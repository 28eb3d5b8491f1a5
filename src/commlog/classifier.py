"""
Poll Classification
===================

Assigns a poll type and a symbolic description to messages.

Host requests (TX messages whose first byte carries the address/command
marker) are classified by the value of that first byte:

    ┌─────────────┬────────────────┬──────────────────────────────┐
    │ Byte value  │ Poll type      │ Identified by                │
    ├─────────────┼────────────────┼──────────────────────────────┤
    │ $80         │ broadcast poll │ -                            │
    │ $81-$FF     │ general poll   │ device address (value & $7F) │
    │ $00-$7F     │ long poll      │ command code (value)         │
    └─────────────┴────────────────┴──────────────────────────────┘

An RX message right after a request is tagged as its response: a long
poll reply gets the long-poll response label, a general poll reply gets
the label of the exception code it carries. Broadcasts are not answered.
Comment messages between a request and its reply are ignored.

A missing label is normal; the description is then left empty.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import logging
from enum import Enum
from typing import Final, Optional, Sequence, Tuple

from commlog.labels import (
    EXCEPTION_LABELS,
    LONG_POLL_LABELS,
    LONG_POLL_RESPONSE_LABELS,
    TABLE_SIZE,
)
from commlog.segmenter import Message, MessageKind

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Poll Constants
# =============================================================================

BROADCAST_POLL: Final[int] = 0x80
POLL_MASK: Final[int] = 0x80
ADDRESS_MASK: Final[int] = 0x7F

BROADCAST_DESCRIPTION: Final[str] = "BROADCAST POLL"


class PollType(Enum):
    """Top-level classification of a host request."""

    BROADCAST = "broadcast"
    GENERAL = "general"
    LONG = "long"


def classify_request(command: int) -> Tuple[PollType, Optional[int]]:
    """
    Classify a request by its first (address/command) byte.

    Args:
        command: Unsigned byte value of the first request byte.

    Returns:
        (poll_type, value) where value is the device address for a general
        poll, the command code for a long poll and None for a broadcast.
    """
    if command == BROADCAST_POLL:
        return PollType.BROADCAST, None
    if command & POLL_MASK:
        return PollType.GENERAL, command & ADDRESS_MASK
    return PollType.LONG, command


def general_poll_description(address: int) -> str:
    return f"GENERAL POLL - ADDRESS {address:02X}"


# =============================================================================
# Classifier
# =============================================================================

class Classifier:
    """
    Stateful message classifier.

    The classifier sees messages in log order (the Segmenter calls
    classify() just before sealing each one) and remembers the last
    unanswered request so the following RX message can be tagged.

    Usage:
        classifier = Classifier()
        transcript = decode(records, classifier=classifier)
    """

    def __init__(
        self,
        long_poll_labels: Sequence[str] = LONG_POLL_LABELS,
        long_poll_response_labels: Sequence[str] = LONG_POLL_RESPONSE_LABELS,
        exception_labels: Sequence[str] = EXCEPTION_LABELS,
    ):
        """
        Initialize the classifier.

        Args:
            long_poll_labels: 256-entry table, long-poll command labels.
            long_poll_response_labels: 256-entry table, response labels.
            exception_labels: 256-entry table, exception code labels.

        Raises:
            ValueError: If a table does not have 256 entries.
        """
        for name, table in (
            ("long_poll_labels", long_poll_labels),
            ("long_poll_response_labels", long_poll_response_labels),
            ("exception_labels", exception_labels),
        ):
            if len(table) != TABLE_SIZE:
                raise ValueError(
                    f"{name} must have {TABLE_SIZE} entries, got {len(table)}"
                )
        self._long_poll_labels = long_poll_labels
        self._long_poll_response_labels = long_poll_response_labels
        self._exception_labels = exception_labels
        self._pending: Optional[Tuple[PollType, Optional[int]]] = None

    @property
    def pending_request(self) -> Optional[Tuple[PollType, Optional[int]]]:
        """The last request still waiting for a reply, if any."""
        return self._pending

    def reset(self) -> None:
        """Forget any pending request."""
        self._pending = None

    def classify(self, message: Message) -> None:
        """
        Set poll type and description on an open message.

        Args:
            message: The message about to be sealed.
        """
        if message.kind == MessageKind.TX:
            self._classify_request(message)
        elif message.kind == MessageKind.RX:
            self._classify_response(message)

    def _classify_request(self, message: Message) -> None:
        self._pending = None
        first = message.first
        if first is None or not first.flags.is_address_or_command:
            return

        poll_type, value = classify_request(first.data)
        message.poll_type = poll_type
        message.poll_value = value

        if poll_type == PollType.BROADCAST:
            message.description = BROADCAST_DESCRIPTION
        elif poll_type == PollType.GENERAL:
            message.description = general_poll_description(value)
        else:
            message.description = self._long_poll_labels[value]

        self._pending = (poll_type, value)

    def _classify_response(self, message: Message) -> None:
        pending = self._pending
        self._pending = None
        if pending is None or not message.records:
            return

        poll_type, value = pending
        if poll_type == PollType.LONG:
            message.response_to = poll_type
            message.poll_value = value
            message.description = self._long_poll_response_labels[value]
        elif poll_type == PollType.GENERAL:
            message.response_to = poll_type
            message.poll_value = value
            message.description = self._exception_labels[message.records[0].data]
        else:
            logger.debug("RX after broadcast poll, not tagged as a response")
