#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the markconv library.

This module defines specialized exception classes for the error conditions
that can occur while resolving formats and transcoding documents. Every
error is fatal to a conversion; the CLI maps each class to an exit code.

Exception Hierarchy
-------------------
- MarkconvError (base exception)

  - FormatResolutionError (no usable format for a stream)
    - MissingFormatError (stdin/stdout without an explicit format)
    - UnresolvableExtensionError (unknown or missing file extension)

  - UnsupportedFormatError (no codec for the requested direction)

  - FileError (open, read, write, and close failures)

  - DecodeError (input does not parse or does not fit the document model)

  - EncodeError (document value not representable in the output format)

  - DocumentTypeError (value outside the generic document model)

  - ConfigError (invalid configuration file or option values)

"""

from __future__ import annotations

from typing import Any

from markconv.constants import CodecDirection


class MarkconvError(Exception):
    """Base exception class for all markconv-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable
    phase : str, optional
        Conversion phase in which the error happened (e.g. "decoding")

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any
    phase : str or None
        The failing phase, filled in by the conversion pipeline

    """

    def __init__(self, message: str, original_error: Exception | None = None, phase: str | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.phase = phase

    def with_phase(self, phase: str) -> MarkconvError:
        """Attach a phase if none has been recorded yet and return self."""
        if self.phase is None:
            self.phase = phase
        return self


class FormatResolutionError(MarkconvError):
    """Base exception for failures to determine a stream's format."""


class MissingFormatError(FormatResolutionError):
    """Exception raised when a format is needed but nothing to infer it from.

    Parameters
    ----------
    action : str
        What was being attempted, e.g. "reading from stdin"
    message : str, optional
        Custom error message

    """

    def __init__(self, action: str, message: str | None = None):
        """Initialize the missing format error."""
        if message is None:
            message = f"format is required when {action}"
        super().__init__(message)
        self.action = action


class UnresolvableExtensionError(FormatResolutionError):
    """Exception raised when a file extension does not name a known format.

    Parameters
    ----------
    file_path : str
        Path whose extension could not be resolved
    extension : str, optional
        The normalized extension that was tried (empty when missing)
    message : str, optional
        Custom error message

    """

    def __init__(self, file_path: str, extension: str | None = None, message: str | None = None):
        """Initialize the unresolvable extension error."""
        if message is None:
            message = f"can not detect format from file {file_path} extension"
        super().__init__(message)
        self.file_path = file_path
        self.extension = extension


class UnsupportedFormatError(MarkconvError):
    """Exception raised when no codec supports a format in a given direction.

    Parameters
    ----------
    format_type : str
        The requested format identifier
    direction : {"decode", "encode"}, optional
        Which operation was needed; None when the format is unknown entirely
    supported_formats : list[str], optional
        Formats that do support the direction, for the message
    message : str, optional
        Custom error message

    """

    def __init__(
        self,
        format_type: str,
        direction: CodecDirection | None = None,
        supported_formats: list[str] | None = None,
        message: str | None = None,
    ):
        """Initialize the unsupported format error."""
        if message is None:
            if direction == "decode":
                message = f"input format {format_type} not supported for decoding"
            elif direction == "encode":
                message = f"output format {format_type} not supported for encoding"
            else:
                message = f"unknown format {format_type}"
            if supported_formats:
                message += f" (supported: {', '.join(supported_formats)})"
        super().__init__(message)
        self.format_type = format_type
        self.direction = direction
        self.supported_formats = supported_formats


class FileError(MarkconvError):
    """Exception raised when a file resource cannot be opened, used, or closed.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    action : str, optional
        Attempted action, one of "open", "read", "write", "close"
    original_error : Exception, optional
        The underlying OS error

    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        action: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the file error with path and action."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path
        self.action = action


class DecodeError(MarkconvError):
    """Exception raised when input bytes cannot be decoded.

    Parameters
    ----------
    format_name : str
        Format the input was decoded as
    original_error : Exception, optional
        The codec library's exception
    message : str, optional
        Custom error message

    """

    def __init__(self, format_name: str, original_error: Exception | None = None, message: str | None = None):
        """Initialize the decode error."""
        if message is None:
            message = f"invalid {format_name} input"
            if original_error is not None:
                message += f": {original_error}"
        super().__init__(message, original_error=original_error)
        self.format_name = format_name


class EncodeError(MarkconvError):
    """Exception raised when a document cannot be encoded to the output format.

    Parameters
    ----------
    format_name : str
        Format the document was encoded as
    original_error : Exception, optional
        The codec library's exception
    message : str, optional
        Custom error message

    """

    def __init__(self, format_name: str, original_error: Exception | None = None, message: str | None = None):
        """Initialize the encode error."""
        if message is None:
            message = f"document not representable as {format_name}"
            if original_error is not None:
                message += f": {original_error}"
        super().__init__(message, original_error=original_error)
        self.format_name = format_name


class DocumentTypeError(MarkconvError):
    """Exception raised for values outside the generic document model.

    Parameters
    ----------
    message : str
        Description of the offending value
    location : str, optional
        Path of the offending node, e.g. ``$.servers[0].port``
    value : any, optional
        The offending value

    """

    def __init__(self, message: str, location: str | None = None, value: Any = None):
        """Initialize the document type error."""
        if location:
            message = f"{message} at {location}"
        super().__init__(message)
        self.location = location
        self.value = value


class ConfigError(MarkconvError):
    """Exception raised for unreadable or invalid configuration.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    file_path : str, optional
        Configuration file involved
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path
