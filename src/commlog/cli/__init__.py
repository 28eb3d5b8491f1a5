"""
Comm Log Command-Line Interface
===============================

This package provides the `commlog` command-line tool:

- **decode**: decode a capture file
- **live**: decode a live capture interface on a serial port
- **ports**: list serial ports

The tool is a Click-based CLI application.
"""

__all__ = ["main"]
