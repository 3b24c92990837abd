#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Format resolution for input and output streams.

An explicit format always wins and is returned untouched; validating it
against the registry is left to the codec lookup. Without one, the format is
inferred from the file extension, which is why standard input and output
(which have no name) always need an explicit format.
"""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import Mapping, Optional

from markconv.constants import EXTENSION_ALIASES, STDIO_PATH
from markconv.exceptions import MissingFormatError, UnresolvableExtensionError
from markconv.registry import CodecRegistry, default_registry

logger = logging.getLogger(__name__)


def is_stdio_path(path: Optional[str]) -> bool:
    """Return True if ``path`` stands for standard input or output."""
    return not path or path == STDIO_PATH


def guess_format(
    path: str,
    registry: Optional[CodecRegistry] = None,
    aliases: Mapping[str, str] = EXTENSION_ALIASES,
) -> str:
    """Infer a format identifier from the extension of ``path``.

    Parameters
    ----------
    path : str
        File path to inspect
    registry : CodecRegistry, optional
        Registry that must contain the inferred format; defaults to the
        built-in registry
    aliases : Mapping[str, str]
        Informal extensions mapped to canonical format identifiers

    Returns
    -------
    str
        The canonical format identifier

    Raises
    ------
    UnresolvableExtensionError
        If the path has no extension or it names no registered format

    Examples
    --------
    >>> guess_format("settings.YML")
    'yaml'
    >>> guess_format("Cargo.toml")
    'toml'

    """
    registry = registry if registry is not None else default_registry()

    # Everything after the last dot of the final component, so ".yml" is yaml
    name = PurePath(path).name
    extension = name.rpartition(".")[2].lower() if "." in name else ""
    if not extension:
        raise UnresolvableExtensionError(file_path=path, extension="")

    candidate = aliases.get(extension, extension)
    if registry.lookup(candidate) is None:
        raise UnresolvableExtensionError(file_path=path, extension=extension)

    logger.debug(f"Format detected from filename {path!r}: {candidate}")
    return candidate


def resolve_format(
    path: Optional[str],
    explicit: Optional[str],
    action: str,
    registry: Optional[CodecRegistry] = None,
) -> str:
    """Determine the format of a stream.

    Parameters
    ----------
    path : str, optional
        File path of the stream; None, empty, or "-" for stdin/stdout
    explicit : str, optional
        Format given by the user. When non-empty it is returned as-is.
    action : str
        Description of the operation, used when no format can be found
        (e.g. "reading from stdin")
    registry : CodecRegistry, optional
        Registry used for extension inference

    Returns
    -------
    str
        The format identifier

    Raises
    ------
    MissingFormatError
        If there is no explicit format and the stream is stdin/stdout
    UnresolvableExtensionError
        If the extension of ``path`` names no registered format

    """
    if explicit:
        logger.debug(f"Using explicit format: {explicit}")
        return explicit

    if is_stdio_path(path):
        raise MissingFormatError(action=action)

    assert path is not None
    return guess_format(path, registry=registry)
