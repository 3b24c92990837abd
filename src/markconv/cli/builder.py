#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser construction and exit codes for the markconv CLI."""

from __future__ import annotations

import argparse
from typing import Optional

from markconv.constants import CONFIG_ENV_VAR, STDIO_PATH
from markconv.exceptions import (
    ConfigError,
    DecodeError,
    EncodeError,
    FileError,
    FormatResolutionError,
    UnsupportedFormatError,
)
from markconv.registry import CodecRegistry, default_registry

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE_ERROR = 2
EXIT_CONFIG_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_FORMAT_ERROR = 5
EXIT_DECODE_ERROR = 6
EXIT_ENCODE_ERROR = 7

DESCRIPTION = f"""Simple config/markup converter.

Will read from stdin if input is unspecified or "{STDIO_PATH}".

Will write to stdout if output is unspecified or "{STDIO_PATH}".

Can be used as a pipe filter if both input and output are unspecified or "{STDIO_PATH}"."""


def _get_version() -> str:
    from markconv import __version__

    return __version__


def build_epilog(registry: CodecRegistry) -> str:
    """Describe the formats each direction supports, for the help text."""
    return (
        f"Supported formats for input decoding: {' '.join(registry.decodable_formats())}\n\n"
        f"Supported formats for output encoding: {' '.join(registry.encodable_formats())}\n\n"
        "Other commands:\n"
        "  markconv list-formats [FORMAT] [--rich]   Show registered formats"
    )


def non_negative_int(value: str) -> int:
    """Argparse type accepting integers >= 0."""
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from e
    if number < 0:
        raise argparse.ArgumentTypeError(f"value must be >= 0, got {number}")
    return number


def create_parser(registry: Optional[CodecRegistry] = None) -> argparse.ArgumentParser:
    """Create the argument parser for the conversion command.

    The ``-d`` and ``-e`` values are limited to the registry's formats, so an
    unknown format is rejected while parsing, before any file is touched.

    Parameters
    ----------
    registry : CodecRegistry, optional
        Registry whose formats are offered; defaults to the built-in registry

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    registry = registry if registry is not None else default_registry()

    parser = argparse.ArgumentParser(
        prog="markconv",
        description=DESCRIPTION,
        epilog=build_epilog(registry),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    io_group = parser.add_argument_group("conversion")
    io_group.add_argument(
        "-d",
        "--decode",
        metavar="FORMAT",
        choices=registry.decodable_formats(),
        help="Input format.",
    )
    io_group.add_argument(
        "-e",
        "--encode",
        metavar="FORMAT",
        choices=registry.encodable_formats(),
        help="Output format.",
    )
    io_group.add_argument("-i", "--input", metavar="PATH", default="", help="File to read input from.")
    io_group.add_argument("-o", "--output", metavar="PATH", default="", help="File to write output to.")

    output_group = parser.add_argument_group("output formatting")
    output_group.add_argument(
        "--indent", type=non_negative_int, default=None, help="Indentation width for the output format."
    )
    output_group.add_argument(
        "--sort-keys", action="store_true", default=None, help="Sort mapping keys in the output."
    )
    output_group.add_argument("--compact", action="store_true", help="Write JSON on a single line.")

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument(
        "--config", metavar="PATH", help=f"Configuration file (default: ${CONFIG_ENV_VAR} or auto-discovered)."
    )
    config_group.add_argument("--no-config", action="store_true", help="Ignore all configuration files.")

    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING).",
    )
    log_group.add_argument("-v", "--verbose", action="store_true", help="Shorthand for --log-level DEBUG.")
    log_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names.")
    log_group.add_argument("--log-file", metavar="PATH", help="Also write log messages to this file.")

    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_version()}")
    return parser


def get_exit_code_for_exception(exception: BaseException) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : BaseException
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, ConfigError):
        return EXIT_CONFIG_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, (FormatResolutionError, UnsupportedFormatError)):
        return EXIT_FORMAT_ERROR

    if isinstance(exception, DecodeError):
        return EXIT_DECODE_ERROR

    if isinstance(exception, EncodeError):
        return EXIT_ENCODE_ERROR

    return EXIT_ERROR
