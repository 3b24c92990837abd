#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Subcommands of the markconv CLI.

Subcommands are recognized by their first argument before the conversion
parser runs, so they never clash with conversion flags.
"""

from __future__ import annotations

from typing import Callable, Optional

from markconv.cli.commands.formats import handle_list_formats_command

COMMANDS: dict[str, Callable[[Optional[list[str]]], int]] = {
    "list-formats": handle_list_formats_command,
}


def dispatch_command(args: Optional[list[str]]) -> Optional[int]:
    """Run a subcommand if ``args`` starts with one.

    Returns
    -------
    int or None
        The subcommand's exit code, or None if ``args`` is a conversion

    """
    if not args:
        return None
    handler = COMMANDS.get(args[0])
    if handler is None:
        return None
    return handler(args[1:])


__all__ = ["COMMANDS", "dispatch_command", "handle_list_formats_command"]
