#  Copyright (c) 2025 Tom Villani, Ph.D.
"""The ``list-formats`` command."""

from __future__ import annotations

import argparse
import sys
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from markconv.cli.builder import EXIT_FORMAT_ERROR, EXIT_SUCCESS
from markconv.codec_metadata import CodecBinding
from markconv.constants import EXTENSION_ALIASES
from markconv.registry import CodecRegistry, default_registry


def _create_list_formats_parser() -> argparse.ArgumentParser:
    """Create argparse parser for list-formats command."""
    parser = argparse.ArgumentParser(
        prog="markconv list-formats", description="Show information about the supported formats.", add_help=True
    )
    parser.add_argument("format", nargs="?", help="Show details for specific format only")
    parser.add_argument("--rich", action="store_true", help="Use rich terminal output with formatting")
    return parser


def _aliases_for(format_name: str) -> list[str]:
    return sorted(f".{alias}" for alias, target in EXTENSION_ALIASES.items() if target == format_name)


def _gather_format_info(registry: CodecRegistry, formats: list[str]) -> list[dict[str, Any]]:
    """Collect display data for each format."""
    info_list = []
    for name in formats:
        binding = registry.lookup(name)
        assert binding is not None
        extensions = list(binding.extensions)
        extensions += [alias for alias in _aliases_for(name) if alias not in extensions]
        info_list.append(
            {
                "name": name,
                "binding": binding,
                "extensions": extensions,
                "decode": binding.can_decode,
                "encode": binding.can_encode,
            }
        )
    return info_list


def _status(flag: bool, rich: bool) -> str:
    if rich:
        return "[green][OK][/green]" if flag else "[dim]N/A[/dim]"
    return "[OK]" if flag else "N/A"


def _render_plain_summary(format_info_list: list[dict[str, Any]]) -> None:
    print("\nmarkconv Supported Formats")
    print("=" * 60)
    print(f"{'Format':<10} {'Decode':<8} {'Encode':<8} {'Extensions'}")
    print("-" * 60)
    for info in format_info_list:
        decode_status = _status(info["decode"], rich=False)
        encode_status = _status(info["encode"], rich=False)
        print(f"{info['name']:<10} {decode_status:<8} {encode_status:<8} {', '.join(info['extensions'])}")
    print(f"\nTotal: {len(format_info_list)} formats")


def _render_plain_detailed(info: dict[str, Any]) -> None:
    binding: CodecBinding = info["binding"]
    print(f"\n{info['name'].upper()} Format")
    print("=" * 60)
    if binding.description:
        print(f"Description: {binding.description}")
    print(f"Extensions: {', '.join(info['extensions'])}")
    if binding.mime_types:
        print(f"MIME types: {', '.join(binding.mime_types)}")
    print(f"Decode: {_status(info['decode'], rich=False)}")
    print(f"Encode: {_status(info['encode'], rich=False)}")
    install_cmd = binding.get_install_command()
    if install_cmd:
        print(f"Requires: {install_cmd}")


def _render_rich_summary(console: Console, format_info_list: list[dict[str, Any]]) -> None:
    table = Table(title=f"markconv Supported Formats ({len(format_info_list)} formats)")
    table.add_column("Format", style="cyan", no_wrap=True)
    table.add_column("Extensions", style="yellow")
    table.add_column("Decode", style="blue")
    table.add_column("Encode", style="green")
    table.add_column("Description", style="white")

    for info in format_info_list:
        table.add_row(
            info["name"],
            ", ".join(info["extensions"]),
            _status(info["decode"], rich=True),
            _status(info["encode"], rich=True),
            info["binding"].description,
        )

    console.print(table)
    console.print("\n[dim]Use 'markconv list-formats <format>' for detailed information[/dim]")


def _render_rich_detailed(console: Console, info: dict[str, Any]) -> None:
    binding: CodecBinding = info["binding"]
    content = [
        f"[bold]Description:[/bold] {binding.description or '-'}",
        f"[bold]Extensions:[/bold] {', '.join(info['extensions'])}",
        f"[bold]MIME types:[/bold] {', '.join(binding.mime_types) or '-'}",
        f"[bold]Decode:[/bold] {_status(info['decode'], rich=True)}",
        f"[bold]Encode:[/bold] {_status(info['encode'], rich=True)}",
    ]
    install_cmd = binding.get_install_command()
    if install_cmd:
        content.append(f"[bold]Requires:[/bold] {install_cmd}")
    console.print(Panel("\n".join(content), title=f"{info['name'].upper()} Format Details"))


def handle_list_formats_command(args: Optional[list[str]] = None, registry: Optional[CodecRegistry] = None) -> int:
    """Handle the list-formats command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments after 'list-formats'
    registry : CodecRegistry, optional
        Registry to describe; defaults to the built-in registry

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parser = _create_list_formats_parser()
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    registry = registry if registry is not None else default_registry()
    formats = registry.list_formats()
    if parsed.format:
        if parsed.format not in formats:
            print(f"Error: Format '{parsed.format}' not found", file=sys.stderr)
            print(f"Available formats: {', '.join(formats)}", file=sys.stderr)
            return EXIT_FORMAT_ERROR
        formats = [parsed.format]

    format_info_list = _gather_format_info(registry, formats)

    if parsed.rich:
        console = Console()
        if parsed.format:
            _render_rich_detailed(console, format_info_list[0])
        else:
            _render_rich_summary(console, format_info_list)
    elif parsed.format:
        _render_plain_detailed(format_info_list[0])
    else:
        _render_plain_summary(format_info_list)
        print("Use 'markconv list-formats <format>' for detailed information")

    return EXIT_SUCCESS
