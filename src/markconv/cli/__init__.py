"""Command-line interface for markconv.

Environment Variable Support
----------------------------
``MARKCONV_CONFIG`` names a configuration file to use when ``--config`` is
not given. ``--no-config`` disables configuration files entirely.

Examples
--------
Convert a file, inferring both formats from the extensions::

    $ markconv -i config.yaml -o config.json

Use as a pipe filter::

    $ cat Cargo.toml | markconv -d toml -e json

Force a format for a file with a misleading extension::

    $ markconv -i settings.conf -d toml -o settings.yml

"""

import argparse
import logging
import os
import sys
from dataclasses import replace
from typing import Optional

from markconv.api import convert
from markconv.cli.builder import (
    EXIT_SUCCESS,
    create_parser,
    get_exit_code_for_exception,
)
from markconv.cli.commands import dispatch_command
from markconv.cli.config import load_config_with_priority
from markconv.constants import CONFIG_ENV_VAR
from markconv.exceptions import ConfigError, MarkconvError
from markconv.logging_utils import configure_logging, resolve_log_level
from markconv.options import ConversionOptions

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser", "build_options", "report_error"]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace or (parsed_args.verbose and parsed_args.log_level == "WARNING"):
        log_level = logging.DEBUG
    else:
        log_level = resolve_log_level(parsed_args.log_level)

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def build_options(parsed_args: argparse.Namespace) -> ConversionOptions:
    """Build encoder options from configuration files and flags.

    Flags override configuration values, which override built-in defaults.

    Raises
    ------
    ConfigError
        If the configuration cannot be loaded or holds invalid options

    """
    config = {}
    if not parsed_args.no_config:
        config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))

    options = ConversionOptions.from_dict(config)
    options = options.with_overrides(indent=parsed_args.indent, sort_keys=parsed_args.sort_keys)
    if parsed_args.compact:
        options = replace(options, json=options.json.create_updated(indent=None))
    return options


def report_error(error: MarkconvError) -> None:
    """Print a one-line diagnostic naming the failed phase to stderr."""
    if error.phase:
        print(f"Error: {error.phase}: {error}", file=sys.stderr)
    else:
        print(f"Error: {error}", file=sys.stderr)


def main(args: Optional[list[str]] = None) -> int:
    """Execute the CLI and return the process exit code."""
    if args is None:
        args = sys.argv[1:]

    command_result = dispatch_command(args)
    if command_result is not None:
        return command_result

    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        options = build_options(parsed_args)
    except ConfigError as e:
        report_error(e.with_phase("configuration"))
        return get_exit_code_for_exception(e)

    try:
        convert(
            input_path=parsed_args.input,
            output_path=parsed_args.output,
            input_format=parsed_args.decode,
            output_format=parsed_args.encode,
            options=options,
        )
    except MarkconvError as e:
        logger.debug("Conversion failed", exc_info=True)
        report_error(e)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
