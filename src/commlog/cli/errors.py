"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes for the commlog CLI.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from commlog.errors import CaptureError, CommLogError, ConfigError


class ExitCode(IntEnum):
    """Standard exit codes for the CLI."""
    SUCCESS = 0
    DECODE_ERROR = 1     # Capture unreadable or malformed
    INVALID_ARGS = 2     # Invalid arguments or configuration
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Unified exception handler for CLI commands.

    Formats the error message, optionally prints a traceback in verbose
    mode, and exits with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, ConfigError):
        click.echo(f"Configuration error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, CaptureError):
        click.echo(f"Capture error: {error}", err=True)
        sys.exit(ExitCode.DECODE_ERROR)

    elif isinstance(error, CommLogError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.DECODE_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
