"""
commlog - Comm Log Decoder Command-Line Interface
=================================================

This module implements the command-line interface for decoding captured
logs of a polled serial bus into a message-by-message transcript.

Usage Examples
--------------
Decode a capture file to the terminal:
    $ commlog decode poll.cap

Decode a hex text capture to a file, with error letters instead of color:
    $ commlog decode poll.txt --format hex --color text -o poll.lst

Show raw status bytes and message numbers:
    $ commlog decode poll.cap --raw-status --number

Decode a live capture interface until it goes quiet for 5 seconds:
    $ commlog live -p /dev/ttyUSB0 --idle-timeout 5

List serial ports:
    $ commlog ports

Exit Codes
----------
0 - Success
1 - Capture unreadable or malformed
2 - Invalid arguments or configuration error
3 - Internal error

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, TextIO

import click

from commlog import __version__
from commlog.capture import (
    CaptureFormat,
    iter_capture_file,
    iter_port_records,
    list_capture_ports,
    open_capture_port,
)
from commlog.classifier import Classifier
from commlog.cli.errors import handle_cli_exception
from commlog.config import COLOR_CHOICES, DecodeConfig
from commlog.errors import CommLogError
from commlog.render import ColorMode, Renderer
from commlog.segmenter import Message, MessageKind, Segmenter
from commlog.status import RawRecord

# Configure logging
logger = logging.getLogger(__name__)

SPINNER_CHARS = "/-\\|"


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores verbosity and the configuration loaded from the environment.
    """

    def __init__(self) -> None:
        self.verbose: bool = False
        self.config: DecodeConfig = DecodeConfig()

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.INFO
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


def update_spinner(spin_count: int) -> None:
    """Draw one spinner step on stderr."""
    click.echo(f"{SPINNER_CHARS[spin_count % len(SPINNER_CHARS)]}\r", nl=False, err=True)


def with_spinner(records: Iterable[RawRecord], interval: int) -> Iterator[RawRecord]:
    """Pass records through, turning the spinner every `interval` records."""
    count = 0
    for count, record in enumerate(records, start=1):
        if count % interval == 0:
            update_spinner(count // interval)
        yield record
    click.echo(" \r", nl=False, err=True)


def resolve_color_mode(color: str, output: Optional[Path]) -> ColorMode:
    """Map the color setting to a ColorMode; "auto" means ANSI on stdout only."""
    if color == "auto":
        return ColorMode.NONE if output else ColorMode.ANSI
    return ColorMode(color)


def output_options(func: Callable) -> Callable:
    """Options shared by the commands that print a transcript."""
    options = [
        click.option(
            "-o", "--output",
            type=click.Path(dir_okay=False, path_type=Path),
            help="Output file (default: stdout)",
        ),
        click.option(
            "--color",
            type=click.Choice(COLOR_CHOICES),
            default=None,
            help="Byte status display: auto, ansi, text or none",
        ),
        click.option(
            "--raw-status/--no-raw-status",
            default=None,
            help="Show each byte as status:data",
        ),
        click.option(
            "--descriptions/--no-descriptions",
            default=None,
            help="Append poll descriptions (default: enabled)",
        ),
        click.option(
            "-n", "--number",
            is_flag=True,
            help="Number the messages",
        ),
        click.option(
            "--progress",
            is_flag=True,
            help="Show a progress spinner on stderr",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def apply_output_options(
    config: DecodeConfig,
    color: Optional[str],
    raw_status: Optional[bool],
    descriptions: Optional[bool],
    number: bool,
) -> None:
    """Command-line options take precedence over the environment."""
    if color is not None:
        config.color = color
    if raw_status is not None:
        config.raw_status = raw_status
    if descriptions is not None:
        config.show_descriptions = descriptions
    if number:
        config.number_messages = True


def run_decode(
    records: Iterable[RawRecord],
    config: DecodeConfig,
    output: Optional[Path],
    progress: bool,
    verbose: bool,
) -> None:
    """
    Decode records and write the transcript.

    Messages are written as soon as they are sealed. An interrupt (Ctrl-C)
    stops reading but still writes the message that was open.
    """
    color_mode = resolve_color_mode(config.color, output)
    renderer = Renderer(
        color_mode=color_mode,
        raw_status=config.raw_status,
        show_descriptions=config.show_descriptions,
        number_messages=config.number_messages,
    )
    # "auto" leaves ANSI stripping to click when stdout is not a terminal
    echo_color = None if config.color == "auto" else color_mode == ColorMode.ANSI
    segmenter = Segmenter(classifier=Classifier())
    comment_count = 0

    if progress:
        records = with_spinner(records, config.progress_interval)

    stream: Optional[TextIO] = None
    if output:
        try:
            stream = output.open("w", encoding="utf-8")
        except OSError as e:
            raise click.BadParameter(f"Cannot write {output}: {e}") from e

    def emit(message: Message) -> None:
        nonlocal comment_count
        if message.kind == MessageKind.COMMENT:
            comment_count += 1
        line = renderer.render(message, segmenter.messages_sealed)
        click.echo(line, file=stream, color=echo_color)

    try:
        try:
            for record in records:
                sealed = segmenter.feed(record)
                if sealed is not None:
                    emit(sealed)
        except KeyboardInterrupt:
            logger.info("Interrupted, writing the open message")
        last = segmenter.finish()
        if last is not None:
            emit(last)
    finally:
        if stream is not None:
            stream.close()

    if verbose:
        click.echo(
            f"Records: {segmenter.records_seen}, "
            f"messages: {segmenter.messages_sealed}, "
            f"comments: {comment_count}",
            err=True,
        )
    if output:
        logger.debug("Transcript written to %s", output)


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(version=__version__, prog_name="commlog")
@pass_context
def main(ctx: Context, verbose: bool) -> None:
    """
    Decode captured logs of a polled serial bus.

    Each logged byte carries a status byte (direction, line errors,
    comment and address/command markers). The decoder splits the byte
    stream into RX, TX and comment messages and labels host polls.
    """
    ctx.verbose = verbose
    ctx.setup_logging()
    try:
        ctx.config = DecodeConfig.from_env()
    except CommLogError as e:
        handle_cli_exception(e, verbose)


# =============================================================================
# Decode Command
# =============================================================================

@main.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-f", "--format", "capture_format",
    type=click.Choice([f.value for f in CaptureFormat]),
    default=None,
    help="Capture file layout (default: auto)",
)
@output_options
@pass_context
def decode(
    ctx: Context,
    input_file: Path,
    capture_format: Optional[str],
    output: Optional[Path],
    color: Optional[str],
    raw_status: Optional[bool],
    descriptions: Optional[bool],
    number: bool,
    progress: bool,
) -> None:
    """
    Decode a capture file.

    INPUT_FILE is a binary capture (alternating status and data bytes)
    or a hex text capture.
    """
    config = ctx.config
    apply_output_options(config, color, raw_status, descriptions, number)
    if capture_format is not None:
        config.capture_format = CaptureFormat(capture_format)

    if ctx.verbose:
        click.echo(f"Input file: {input_file} ({input_file.stat().st_size} bytes)", err=True)

    try:
        records = iter_capture_file(input_file, config.capture_format)
        run_decode(records, config, output, progress, ctx.verbose)
    except (CommLogError, click.BadParameter) as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Live Command
# =============================================================================

@main.command()
@click.option(
    "-p", "--port",
    type=str,
    required=True,
    help="Serial port of the capture interface",
)
@click.option(
    "-b", "--baud",
    type=click.IntRange(min=1),
    default=None,
    help="Capture interface baud rate (default: 115200)",
)
@click.option(
    "--idle-timeout",
    type=click.FloatRange(min=0),
    default=None,
    help="Stop after this many seconds without data (default: run until Ctrl-C)",
)
@output_options
@pass_context
def live(
    ctx: Context,
    port: str,
    baud: Optional[int],
    idle_timeout: Optional[float],
    output: Optional[Path],
    color: Optional[str],
    raw_status: Optional[bool],
    descriptions: Optional[bool],
    number: bool,
    progress: bool,
) -> None:
    """
    Decode a live capture interface.

    Messages are printed as they complete. Press Ctrl-C to stop.
    """
    config = ctx.config
    apply_output_options(config, color, raw_status, descriptions, number)
    if baud is not None:
        config.baud_rate = baud
    if idle_timeout is not None:
        config.idle_timeout = idle_timeout

    try:
        serial_port = open_capture_port(port, baud_rate=config.baud_rate)
        try:
            records = iter_port_records(serial_port, idle_timeout=config.idle_timeout)
            run_decode(records, config, output, progress, ctx.verbose)
        finally:
            serial_port.close()
    except (CommLogError, click.BadParameter) as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Ports Command
# =============================================================================

@main.command()
def ports() -> None:
    """List available serial ports."""
    found = list_capture_ports()
    if not found:
        click.echo("No serial ports found.")
        return
    for info in found:
        click.echo(str(info))


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
