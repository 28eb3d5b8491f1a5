"""
Message Segmentation
====================

This module turns the flat stream of (status, data) records in a comm log
into discrete messages. It is a single-pass state machine: each decision
uses only the record just read and the message currently open, so logs of
any size can be decoded with constant extra memory.

Boundary Rules
--------------
For each record, with flags = decode_status(record.status):

1. Comment byte: belongs to a COMMENT message. A non-comment message that
   is open gets sealed first; consecutive comment bytes share one message.
2. Otherwise a new RX/TX message starts when
   - no message is open (start of stream), or
   - the direction differs from the open message, or
   - the byte carries the address/command marker.
3. Otherwise the byte is appended to the open message.

A host poll always starts with an address/command byte and a device reply
always starts on a flip to RX, so either signal alone is enough to find a
boundary. This keeps the segmenter working on ring-buffer captures that
start in the middle of a transaction.

Segmentation is total: no record is rejected, and malformed streams just
produce extra short messages.

Usage:
    segmenter = Segmenter(classifier=Classifier())
    for record in records:
        sealed = segmenter.feed(record)
        if sealed:
            print(render_message(sealed))
    last = segmenter.finish()

    # Or as a generator / batch
    for message in segment(records):
        ...
    transcript = decode(records)

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Sequence

from commlog.status import DecodedByte, Direction, RawRecord

if TYPE_CHECKING:
    from commlog.classifier import Classifier, PollType

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Message Model
# =============================================================================

class MessageKind(Enum):
    """Category of a message, fixed when the message is opened."""

    UNKNOWN = auto()
    RX = auto()
    TX = auto()
    COMMENT = auto()


_KIND_FOR_DIRECTION = {
    Direction.RX: MessageKind.RX,
    Direction.TX: MessageKind.TX,
}


@dataclass
class Message:
    """
    One segmented message.

    A message is mutable while the segmenter holds it open (bytes appended,
    description set) and becomes read-only once sealed.

    Attributes:
        kind: RX, TX, COMMENT (or UNKNOWN)
        boundary_confirmed: True if the message was opened on an
            address/command marker, a direction flip or a comment marker;
            False if it was opened only because nothing was open yet
        description: Symbolic label set by the classifier ("" if none)
        records: Decoded bytes in arrival order
        poll_type: Poll type of a classified TX request
        poll_value: Device address (general poll) or command code (long poll)
        response_to: Poll type this RX message answers, if recognised
    """
    kind: MessageKind
    boundary_confirmed: bool = False
    description: str = ""
    records: Sequence[DecodedByte] = field(default_factory=list)
    poll_type: Optional["PollType"] = None
    poll_value: Optional[int] = None
    response_to: Optional["PollType"] = None
    _sealed: bool = field(default=False, repr=False, compare=False)

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def data(self) -> bytes:
        """The data bytes of the message, without status."""
        return bytes(item.data for item in self.records)

    @property
    def first(self) -> Optional[DecodedByte]:
        return self.records[0] if self.records else None

    def append(self, item: DecodedByte) -> None:
        """Append a byte to an open message."""
        if self._sealed:
            raise RuntimeError("Cannot append to a sealed message")
        self.records.append(item)

    def seal(self) -> None:
        """Freeze the message; records become an immutable tuple."""
        if not self._sealed:
            self.records = tuple(self.records)
            self._sealed = True

    def __len__(self) -> int:
        return len(self.records)


class Transcript:
    """
    Append-only, ordered collection of sealed messages.

    The transcript is the full decode of one log. It only accepts sealed
    messages and never reorders or removes them.
    """

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def append(self, message: Message) -> None:
        if not message.sealed:
            raise ValueError("Only sealed messages can be added to a transcript")
        self._messages.append(message)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    @property
    def byte_count(self) -> int:
        """Total number of records across all messages."""
        return sum(len(message) for message in self._messages)

    def count(self, kind: MessageKind) -> int:
        """Number of messages of the given kind."""
        return sum(1 for message in self._messages if message.kind == kind)


# =============================================================================
# Segmenter State Machine
# =============================================================================

class Segmenter:
    """
    Message boundary state machine.

    The segmenter owns at most one open message. Feeding a record either
    extends that message or seals it and opens a new one; the sealed
    message is handed back to the caller, who owns it from then on.

    States:
        awaiting boundary - no message open (start of stream)
        in message(kind)  - a message of the given kind is open

    Attributes:
        records_seen: Number of records fed so far
        messages_sealed: Number of messages sealed so far
    """

    def __init__(self, classifier: Optional["Classifier"] = None):
        """
        Initialize the segmenter.

        Args:
            classifier: Optional classifier called on every message right
                before it is sealed, so descriptions are in place by the
                time the caller sees the message.
        """
        self._classifier = classifier
        self._current: Optional[Message] = None
        # Direction of the last RX/TX message, used to spot direction flips
        # across comment messages.
        self._last_direction: Optional[Direction] = None
        self.records_seen = 0
        self.messages_sealed = 0

    @property
    def current(self) -> Optional[Message]:
        """The message currently open, or None."""
        return self._current

    def feed(self, record: RawRecord) -> Optional[Message]:
        """
        Process one record.

        Args:
            record: The next record from the log.

        Returns:
            The message sealed by this record, or None if the record was
            appended to the open message (or opened the first one).
        """
        self.records_seen += 1
        item = DecodedByte.from_record(record)
        flags = item.flags
        current = self._current

        if flags.is_comment:
            if current is not None and current.kind == MessageKind.COMMENT:
                current.append(item)
                return None
            sealed = self._seal()
            self._open(MessageKind.COMMENT, item, confirmed=True)
            return sealed

        kind = _KIND_FOR_DIRECTION[flags.direction]
        if current is None or current.kind != kind or flags.is_address_or_command:
            flipped = (
                self._last_direction is not None
                and self._last_direction != flags.direction
            )
            sealed = self._seal()
            self._open(kind, item, confirmed=flags.is_address_or_command or flipped)
            return sealed

        current.append(item)
        return None

    def finish(self) -> Optional[Message]:
        """
        Seal whatever is open at end of input.

        Returns:
            The last message, or None if nothing was open.
        """
        return self._seal()

    def _open(self, kind: MessageKind, item: DecodedByte, confirmed: bool) -> None:
        logger.debug(
            "Boundary at record %d: %s message (confirmed=%s, first=$%02X)",
            self.records_seen, kind.name, confirmed, item.data
        )
        self._current = Message(kind=kind, boundary_confirmed=confirmed, records=[item])
        if kind in (MessageKind.RX, MessageKind.TX):
            self._last_direction = item.flags.direction

    def _seal(self) -> Optional[Message]:
        message = self._current
        if message is None:
            return None
        if self._classifier is not None:
            self._classifier.classify(message)
        message.seal()
        self._current = None
        self.messages_sealed += 1
        return message


# =============================================================================
# Convenience Functions
# =============================================================================

def segment(
    records: Iterable[RawRecord],
    classifier: Optional["Classifier"] = None,
) -> Iterator[Message]:
    """
    Split a stream of records into sealed messages.

    This is a generator, so messages can be rendered while the log is
    still being read.

    Args:
        records: Records in log order.
        classifier: Optional classifier (see Segmenter).

    Yields:
        Sealed messages in log order.
    """
    segmenter = Segmenter(classifier=classifier)
    for record in records:
        sealed = segmenter.feed(record)
        if sealed is not None:
            yield sealed
    last = segmenter.finish()
    if last is not None:
        yield last
    logger.debug(
        "Segmented %d records into %d messages",
        segmenter.records_seen, segmenter.messages_sealed
    )


def decode(
    records: Iterable[RawRecord],
    classifier: Optional["Classifier"] = None,
) -> Transcript:
    """
    Decode a whole log into a Transcript.

    Args:
        records: Records in log order.
        classifier: Optional classifier (see Segmenter).

    Returns:
        Transcript holding every sealed message.
    """
    transcript = Transcript()
    for message in segment(records, classifier=classifier):
        transcript.append(message)
    return transcript
