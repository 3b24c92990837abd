#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markconv/codecs/json.py
"""JSON codec.

Decoding accepts UTF-8, UTF-16 or UTF-32 input and rejects the non-standard
``NaN`` and ``Infinity`` literals. Encoding writes UTF-8 with a trailing
newline and fails on values JSON has no representation for, such as
date/time scalars or non-finite floats.
"""

from __future__ import annotations

import json
import logging
from typing import IO, Any, Optional

from markconv.codec_metadata import CodecBinding
from markconv.exceptions import DecodeError, EncodeError
from markconv.options import BaseEncodeOptions, JsonEncodeOptions

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name!r}")


def decode_json(stream: IO[bytes]) -> Any:
    """Decode a whole JSON stream into a generic document.

    Raises
    ------
    DecodeError
        If the input is not valid JSON text

    """
    try:
        return json.load(stream, parse_constant=_reject_constant)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise DecodeError("json", original_error=e) from e


def encode_json(document: Any, stream: IO[bytes], options: Optional[BaseEncodeOptions] = None) -> None:
    """Encode a generic document as JSON.

    Raises
    ------
    EncodeError
        If the document holds a value JSON cannot represent

    """
    opts = options if isinstance(options, JsonEncodeOptions) else JsonEncodeOptions()
    try:
        text = json.dumps(
            document,
            indent=opts.indent,
            sort_keys=opts.sort_keys,
            ensure_ascii=opts.ensure_ascii,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise EncodeError("json", original_error=e) from e

    stream.write(text.encode("utf-8") + b"\n")


CODEC_BINDING = CodecBinding(
    format_name="json",
    extensions=[".json"],
    mime_types=["application/json", "text/json"],
    decoder=decode_json,
    encoder=encode_json,
    options_class=JsonEncodeOptions,
    description="JavaScript Object Notation",
)
