#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markconv/codecs/yaml.py
"""YAML codec built on PyYAML's safe loader and dumper.

Only the first document of a multi-document stream is read; the remaining
documents are not parsed. An empty stream decodes to ``None``.

Examples
--------
Input YAML::

    ---
    server:
      host: localhost
      port: 8080
    ---
    ignored: true

Decoded document::

    {"server": {"host": "localhost", "port": 8080}}

"""

from __future__ import annotations

import logging
from typing import IO, Any, Optional

import yaml

from markconv.codec_metadata import CodecBinding
from markconv.constants import DEPS_YAML
from markconv.exceptions import DecodeError, EncodeError
from markconv.options import BaseEncodeOptions, YamlEncodeOptions

logger = logging.getLogger(__name__)


def decode_yaml(stream: IO[bytes]) -> Any:
    """Decode the first document of a YAML stream.

    Raises
    ------
    DecodeError
        If the first document is not valid YAML

    """
    documents = yaml.safe_load_all(stream)
    try:
        first = next(documents, None)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise DecodeError("yaml", original_error=e) from e
    finally:
        documents.close()

    if first is None:
        logger.debug("YAML stream held no document content")
    return first


def encode_yaml(document: Any, stream: IO[bytes], options: Optional[BaseEncodeOptions] = None) -> None:
    """Encode a generic document as a single YAML document.

    Raises
    ------
    EncodeError
        If the safe dumper cannot represent a value

    """
    opts = options if isinstance(options, YamlEncodeOptions) else YamlEncodeOptions()
    try:
        text = yaml.safe_dump(
            document,
            default_flow_style=opts.default_flow_style,
            sort_keys=opts.sort_keys,
            allow_unicode=opts.allow_unicode,
            indent=opts.indent,
            explicit_start=opts.explicit_start,
        )
    except yaml.YAMLError as e:
        raise EncodeError("yaml", original_error=e) from e

    stream.write(text.encode("utf-8"))


CODEC_BINDING = CodecBinding(
    format_name="yaml",
    extensions=[".yaml", ".yml"],
    mime_types=["application/x-yaml", "application/yaml", "text/yaml", "text/x-yaml"],
    decoder=decode_yaml,
    encoder=encode_yaml,
    options_class=YamlEncodeOptions,
    required_packages=DEPS_YAML,
    description="YAML Ain't Markup Language (first document only)",
)
