"""markconv - convert structured documents between JSON, YAML, and TOML.

markconv reads a document in one format, decodes it into a plain Python
value (the generic document), and encodes that value into another format.
Formats are given explicitly or inferred from file extensions, with the
common informal extensions ``.yml``, ``.tml`` and ``.js`` recognized.

Requirements
------------
- Python 3.10+
- PyYAML for YAML, tomli-w for writing TOML (tomli for reading it on 3.10)

Examples
--------
Convert files, inferring formats from their extensions:

    >>> from markconv import convert
    >>> convert("config.yaml", "config.json")

Transcode between streams:

    >>> import io
    >>> from markconv import transcode
    >>> out = io.BytesIO()
    >>> transcode(io.BytesIO(b"a = 1"), "toml", out, "json")
    >>> out.getvalue()
    b'{\\n  "a": 1\\n}\\n'

Resolve a format the way the CLI does:

    >>> from markconv import resolve_format
    >>> resolve_format("settings.yml", None, "reading from stdin")
    'yaml'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "markconv requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from markconv.api import convert, decode_document, encode_document, transcode
from markconv.codec_metadata import CodecBinding
from markconv.constants import EXTENSION_ALIASES, SUPPORTED_FORMATS
from markconv.document import DocumentKind, kind_of, validate_document
from markconv.exceptions import (
    ConfigError,
    DecodeError,
    DocumentTypeError,
    EncodeError,
    FileError,
    FormatResolutionError,
    MarkconvError,
    MissingFormatError,
    UnresolvableExtensionError,
    UnsupportedFormatError,
)
from markconv.options import ConversionOptions, JsonEncodeOptions, TomlEncodeOptions, YamlEncodeOptions
from markconv.registry import CodecRegistry, default_registry
from markconv.resolver import guess_format, resolve_format

__all__ = [
    "__version__",
    # Conversion
    "convert",
    "transcode",
    "decode_document",
    "encode_document",
    # Formats
    "resolve_format",
    "guess_format",
    "CodecRegistry",
    "CodecBinding",
    "default_registry",
    "SUPPORTED_FORMATS",
    "EXTENSION_ALIASES",
    # Document model
    "DocumentKind",
    "kind_of",
    "validate_document",
    # Options
    "ConversionOptions",
    "JsonEncodeOptions",
    "YamlEncodeOptions",
    "TomlEncodeOptions",
    # Errors
    "MarkconvError",
    "FormatResolutionError",
    "MissingFormatError",
    "UnresolvableExtensionError",
    "UnsupportedFormatError",
    "FileError",
    "DecodeError",
    "EncodeError",
    "DocumentTypeError",
    "ConfigError",
]
