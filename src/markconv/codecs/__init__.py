#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Built-in codecs.

Each module exposes a ``CODEC_BINDING`` describing its format. The default
registry is built from ``BUILTIN_CODEC_MODULES`` in this order.
"""

from markconv.codecs.json import decode_json, encode_json
from markconv.codecs.toml import decode_toml, encode_toml
from markconv.codecs.yaml import decode_yaml, encode_yaml

BUILTIN_CODEC_MODULES = [
    "markconv.codecs.yaml",
    "markconv.codecs.json",
    "markconv.codecs.toml",
]

__all__ = [
    "BUILTIN_CODEC_MODULES",
    "decode_json",
    "encode_json",
    "decode_toml",
    "encode_toml",
    "decode_yaml",
    "encode_yaml",
]
