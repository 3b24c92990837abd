#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Codec binding definitions for the markconv registry.

A codec binding ties a format identifier to the operations that read and
write it, along with what the registry needs to describe the format.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Any, Callable, Optional

from markconv.options import BaseEncodeOptions

Decoder = Callable[[IO[bytes]], Any]
Encoder = Callable[[Any, IO[bytes], Optional[BaseEncodeOptions]], None]


@dataclass(frozen=True)
class CodecBinding:
    """Metadata and operations for one format.

    Parameters
    ----------
    format_name : str
        Unique format identifier (e.g., "json")
    extensions : list[str]
        Canonical file extensions, with leading dot (e.g., [".yaml", ".yml"])
    mime_types : list[str]
        MIME types that indicate this format
    decoder : Callable, optional
        Reads a whole binary stream and returns a generic document. None for
        write-only formats.
    encoder : Callable, optional
        Writes a generic document to a binary stream. None for read-only
        formats.
    options_class : type, optional
        Encoder options dataclass accepted by ``encoder``
    required_packages : list[tuple[str, str, str]]
        Third-party packages as (install_name, import_name, version_spec)
    description : str
        Human-readable description of the format

    """

    format_name: str
    extensions: list[str] = field(default_factory=list)
    mime_types: list[str] = field(default_factory=list)
    decoder: Optional[Decoder] = None
    encoder: Optional[Encoder] = None
    options_class: Optional[type[BaseEncodeOptions]] = None
    required_packages: list[tuple[str, str, str]] = field(default_factory=list)
    description: str = ""

    @property
    def can_decode(self) -> bool:
        return self.decoder is not None

    @property
    def can_encode(self) -> bool:
        return self.encoder is not None

    def get_install_command(self) -> str:
        """Generate a pip install command for the required packages.

        Returns
        -------
        str
            The command, or an empty string when nothing is required

        """
        if not self.required_packages:
            return ""
        packages = [f'"{name}{spec}"' if spec else name for name, _, spec in self.required_packages]
        return "pip install " + " ".join(packages)

    def get_default_extension(self) -> str:
        """Return the primary extension for this format, e.g. ".yaml"."""
        return self.extensions[0] if self.extensions else f".{self.format_name}"
