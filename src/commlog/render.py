"""
Transcript Rendering
====================

Formats sealed messages as text lines. Rendering is a pure projection:
it never changes the message.

Line Format
-----------
    RX: 01 1A 00 00 01 00 8F 3C
    TX: 01 2A  ; LP 2A - SEND TRUE COIN IN
    //free text annotation from the capture

Byte Annotation
---------------
Each byte is two upper-case hex digits. Depending on the color mode:

- ANSI: green for the address/command marker, red for overrun, framing
  or break errors (red wins when both apply)
- TEXT: plain hex followed by letters for the flags set:
  p = parity / address marker, o = overrun, f = framing, b = break
- NONE: plain hex

In raw-status mode each byte is shown as SS:DD with the raw status byte.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Final, Iterable, Iterator, Optional

import click

from commlog.segmenter import Message, MessageKind
from commlog.status import DecodedByte, StatusFlags


# =============================================================================
# Rendering Constants
# =============================================================================

class ColorMode(Enum):
    """How byte status is shown in rendered output."""

    ANSI = "ansi"
    TEXT = "text"
    NONE = "none"


MARKER_COLOR: Final[str] = "green"
ERROR_COLOR: Final[str] = "red"

DIRECTION_TAGS: Final[Dict[MessageKind, str]] = {
    MessageKind.RX: "RX:",
    MessageKind.TX: "TX:",
    MessageKind.COMMENT: "//",
    MessageKind.UNKNOWN: "??:",
}


def flag_letters(flags: StatusFlags) -> str:
    """Letters for the flags set on a byte, in p/o/f/b order."""
    letters = ""
    if flags.is_address_or_command:
        letters += "p"
    if flags.overrun:
        letters += "o"
    if flags.framing_error:
        letters += "f"
    if flags.break_error:
        letters += "b"
    return letters


# =============================================================================
# Renderer
# =============================================================================

@dataclass
class Renderer:
    """
    Renders messages as single text lines.

    Attributes:
        color_mode: How status flags are shown (ANSI, TEXT or NONE)
        raw_status: Show each byte as SS:DD instead of DD
        show_descriptions: Append "  ; description" when one is set
        number_messages: Prefix each line with a 5-digit message number
    """
    color_mode: ColorMode = ColorMode.ANSI
    raw_status: bool = False
    show_descriptions: bool = True
    number_messages: bool = False

    def render_byte(self, item: DecodedByte) -> str:
        """Render one byte with its status annotation."""
        flags = item.flags
        if self.raw_status:
            text = f"{flags.raw:02X}:{item.data:02X}"
        else:
            text = f"{item.data:02X}"

        if self.color_mode == ColorMode.TEXT:
            return text + flag_letters(flags)

        if self.color_mode == ColorMode.ANSI:
            color = None
            if flags.is_address_or_command:
                color = MARKER_COLOR
            if flags.has_line_error:
                color = ERROR_COLOR
            if color:
                return click.style(text, fg=color)

        return text

    def render(self, message: Message, index: Optional[int] = None) -> str:
        """
        Render one message as a line (without trailing newline).

        Args:
            message: The message to render.
            index: Message number, used when number_messages is set.

        Returns:
            The rendered line.
        """
        tag = DIRECTION_TAGS[message.kind]

        if message.kind == MessageKind.COMMENT:
            # Comment bytes are free text, shown as-is
            line = tag + message.data.decode("latin-1")
        else:
            parts = [tag]
            parts.extend(self.render_byte(item) for item in message.records)
            line = " ".join(parts)

        if self.show_descriptions and message.description:
            line += f"  ; {message.description}"

        if self.number_messages and index is not None:
            line = f"{index:05d} {line}"

        return line

    def render_all(self, messages: Iterable[Message], start: int = 1) -> Iterator[str]:
        """Render messages one line at a time, numbering from start."""
        for index, message in enumerate(messages, start=start):
            yield self.render(message, index)


def render_message(message: Message, color_mode: ColorMode = ColorMode.ANSI) -> str:
    """Render a single message with default settings."""
    return Renderer(color_mode=color_mode).render(message)
