#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markconv/codecs/toml.py
"""TOML codec.

Decoding uses the standard library ``tomllib`` (``tomli`` before Python
3.11); encoding uses ``tomli_w``. TOML documents are always tables, so a
document whose root is not a mapping cannot be encoded, and TOML has no
null value.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import tomli_w

from markconv.codec_metadata import CodecBinding
from markconv.constants import DEPS_TOML
from markconv.document import DocumentKind, kind_of
from markconv.exceptions import DecodeError, EncodeError
from markconv.options import BaseEncodeOptions, TomlEncodeOptions

logger = logging.getLogger(__name__)


def decode_toml(stream: IO[bytes]) -> Any:
    """Decode a whole TOML stream into a mapping.

    Raises
    ------
    DecodeError
        If the input is not valid TOML

    """
    try:
        return tomllib.load(stream)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise DecodeError("toml", original_error=e) from e


def _sorted_tables(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _sorted_tables(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_sorted_tables(item) for item in value]
    return value


def encode_toml(document: Any, stream: IO[bytes], options: Optional[BaseEncodeOptions] = None) -> None:
    """Encode a generic document as TOML.

    Raises
    ------
    EncodeError
        If the root is not a mapping or a value has no TOML form (e.g. null)

    """
    opts = options if isinstance(options, TomlEncodeOptions) else TomlEncodeOptions()

    root_kind = kind_of(document)
    if root_kind is not DocumentKind.MAPPING:
        raise EncodeError(
            "toml", message=f"document not representable as toml: root must be a table, got {root_kind.value}"
        )

    if opts.sort_keys:
        document = _sorted_tables(document)

    try:
        text = tomli_w.dumps(document, multiline_strings=opts.multiline_strings, indent=opts.indent)
    except (TypeError, ValueError) as e:
        raise EncodeError("toml", original_error=e) from e

    stream.write(text.encode("utf-8"))


CODEC_BINDING = CodecBinding(
    format_name="toml",
    extensions=[".toml", ".tml"],
    mime_types=["application/toml"],
    decoder=decode_toml,
    encoder=encode_toml,
    options_class=TomlEncodeOptions,
    required_packages=DEPS_TOML,
    description="Tom's Obvious Minimal Language",
)
