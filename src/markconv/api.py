#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Public conversion API for markconv.

This module performs the single decode-then-encode pass that is the whole
job of markconv. The generic document produced by the decoder is handed to
the encoder unchanged; nothing is validated against a schema or transformed
in between.

Functions
---------
- decode_document: Read a whole stream into a generic document
- encode_document: Serialize a generic document to bytes
- transcode: Decode one stream and encode the result to another
- convert: Resolve formats for two paths and transcode between them

Examples
--------
Transcode between in-memory streams:

    >>> import io
    >>> out = io.BytesIO()
    >>> transcode(io.BytesIO(b'{"a": [1, 2]}'), "json", out, "yaml")
    >>> out.getvalue()
    b'a:\\n- 1\\n- 2\\n'

Convert files, inferring formats from their extensions:

    >>> convert("config.json", "config.toml")

"""

from __future__ import annotations

import io
import logging
from typing import IO, Any, Optional

from markconv._io_utils import open_input, open_output
from markconv.document import validate_document
from markconv.exceptions import DecodeError, DocumentTypeError, EncodeError, FileError, MarkconvError
from markconv.options import ConversionOptions
from markconv.registry import CodecRegistry, default_registry
from markconv.resolver import resolve_format

logger = logging.getLogger(__name__)

STDIN_ACTION = "reading from stdin"
STDOUT_ACTION = "writing to stdout"


def _run_decoder(decoder: Any, stream: IO[bytes], format_name: str) -> Any:
    try:
        document = decoder(stream)
    except MarkconvError as e:
        raise e.with_phase("decoding")
    except OSError as e:
        raise FileError(f"reading input: {e}", action="read", original_error=e).with_phase("reading input") from e
    except Exception as e:
        raise DecodeError(format_name, original_error=e).with_phase("decoding") from e

    try:
        return validate_document(document)
    except DocumentTypeError as e:
        raise DecodeError(format_name, original_error=e).with_phase("decoding") from e


def _run_encoder(encoder: Any, document: Any, format_name: str, options: Optional[ConversionOptions]) -> bytes:
    format_options = (options or ConversionOptions()).for_format(format_name)
    buffer = io.BytesIO()
    try:
        encoder(document, buffer, format_options)
    except MarkconvError as e:
        raise e.with_phase("encoding")
    except Exception as e:
        raise EncodeError(format_name, original_error=e).with_phase("encoding") from e
    return buffer.getvalue()


def _write_all(stream: IO[bytes], data: bytes) -> None:
    try:
        stream.write(data)
    except OSError as e:
        raise FileError(f"writing output: {e}", action="write", original_error=e).with_phase("writing output") from e


def decode_document(stream: IO[bytes], format_name: str, registry: Optional[CodecRegistry] = None) -> Any:
    """Decode an entire stream into a generic document.

    Parameters
    ----------
    stream : IO[bytes]
        Binary input stream, read to the end
    format_name : str
        Format identifier of the input
    registry : CodecRegistry, optional
        Registry to look the codec up in; defaults to the built-in registry

    Returns
    -------
    Any
        The generic document

    Raises
    ------
    UnsupportedFormatError
        If ``format_name`` has no decoder
    DecodeError
        If the input is malformed or holds values outside the document model

    """
    registry = registry if registry is not None else default_registry()
    try:
        decoder = registry.get_decoder(format_name)
    except MarkconvError as e:
        raise e.with_phase("input")
    return _run_decoder(decoder, stream, format_name)


def encode_document(
    document: Any,
    format_name: str,
    registry: Optional[CodecRegistry] = None,
    options: Optional[ConversionOptions] = None,
) -> bytes:
    """Encode a generic document into bytes.

    Parameters
    ----------
    document : Any
        The generic document
    format_name : str
        Format identifier of the output
    registry : CodecRegistry, optional
        Registry to look the codec up in; defaults to the built-in registry
    options : ConversionOptions, optional
        Encoder options; defaults are used when omitted

    Returns
    -------
    bytes
        The complete encoded output

    Raises
    ------
    UnsupportedFormatError
        If ``format_name`` has no encoder
    EncodeError
        If the document holds a value the format cannot represent

    """
    registry = registry if registry is not None else default_registry()
    try:
        encoder = registry.get_encoder(format_name)
    except MarkconvError as e:
        raise e.with_phase("output")
    return _run_encoder(encoder, document, format_name, options)


def transcode(
    input_stream: IO[bytes],
    input_format: str,
    output_stream: IO[bytes],
    output_format: str,
    registry: Optional[CodecRegistry] = None,
    options: Optional[ConversionOptions] = None,
) -> None:
    """Decode ``input_stream`` and encode the document to ``output_stream``.

    Both codecs are looked up before anything is read. The encoder writes
    into memory first, so nothing reaches ``output_stream`` unless decoding
    and encoding both succeed.

    Parameters
    ----------
    input_stream : IO[bytes]
        Binary stream to read
    input_format : str
        Format identifier of the input
    output_stream : IO[bytes]
        Binary stream to write
    output_format : str
        Format identifier of the output
    registry : CodecRegistry, optional
        Registry to look codecs up in; defaults to the built-in registry
    options : ConversionOptions, optional
        Encoder options

    Raises
    ------
    UnsupportedFormatError
        If either format lacks the needed codec direction
    DecodeError
        If the input cannot be decoded
    EncodeError
        If the document cannot be encoded
    FileError
        If reading or writing a stream fails

    """
    registry = registry if registry is not None else default_registry()
    try:
        decoder = registry.get_decoder(input_format)
    except MarkconvError as e:
        raise e.with_phase("input")
    try:
        encoder = registry.get_encoder(output_format)
    except MarkconvError as e:
        raise e.with_phase("output")

    document = _run_decoder(decoder, input_stream, input_format)
    logger.debug(f"Decoded {input_format} document")
    data = _run_encoder(encoder, document, output_format, options)
    _write_all(output_stream, data)
    logger.debug(f"Wrote {len(data)} bytes of {output_format}")


def convert(
    input_path: Optional[str] = None,
    output_path: Optional[str] = None,
    input_format: Optional[str] = None,
    output_format: Optional[str] = None,
    registry: Optional[CodecRegistry] = None,
    options: Optional[ConversionOptions] = None,
) -> None:
    """Convert the document at ``input_path`` and write it to ``output_path``.

    Formats are resolved (explicit first, then by extension) and checked
    against the registry before any file is opened. The input is decoded
    and encoded completely before the output is opened, so a failed
    conversion never creates or truncates the output file, and converting
    a file in place is safe.

    Parameters
    ----------
    input_path : str, optional
        File to read; None, empty, or "-" for standard input
    output_path : str, optional
        File to write; None, empty, or "-" for standard output
    input_format : str, optional
        Explicit input format, overriding extension inference
    output_format : str, optional
        Explicit output format, overriding extension inference
    registry : CodecRegistry, optional
        Registry to resolve formats against; defaults to the built-in one
    options : ConversionOptions, optional
        Encoder options

    Raises
    ------
    MarkconvError
        Any failure; ``error.phase`` names the step that failed

    """
    registry = registry if registry is not None else default_registry()

    try:
        in_format = resolve_format(input_path, input_format, STDIN_ACTION, registry=registry)
        decoder = registry.get_decoder(in_format)
    except MarkconvError as e:
        raise e.with_phase("input")

    try:
        out_format = resolve_format(output_path, output_format, STDOUT_ACTION, registry=registry)
        encoder = registry.get_encoder(out_format)
    except MarkconvError as e:
        raise e.with_phase("output")

    logger.info(f"Converting {input_path or 'stdin'} ({in_format}) to {output_path or 'stdout'} ({out_format})")

    with open_input(input_path) as input_stream:
        document = _run_decoder(decoder, input_stream, in_format)

    data = _run_encoder(encoder, document, out_format, options)

    with open_output(output_path) as output_stream:
        _write_all(output_stream, data)

    logger.debug(f"Wrote {len(data)} bytes of {out_format}")
