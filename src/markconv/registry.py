#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Codec registry mapping format identifiers to codec bindings.

A registry is an immutable value: it is built once from a collection of
``CodecBinding`` objects and then only read. The resolver and transcoder
take a registry argument, so callers (and tests) can pass a registry
holding a subset of formats or fake codecs instead of the default one.
"""

from __future__ import annotations

import importlib
import logging
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Iterator, List, Optional

from markconv.codec_metadata import CodecBinding, Decoder, Encoder
from markconv.exceptions import UnsupportedFormatError

logger = logging.getLogger(__name__)


class CodecRegistry:
    """Read-only lookup table of codec bindings.

    Parameters
    ----------
    bindings : Iterable[CodecBinding]
        Bindings to register. Format names must be unique.

    Raises
    ------
    ValueError
        If two bindings share a format name

    Examples
    --------
    >>> from markconv.codecs.json import CODEC_BINDING
    >>> registry = CodecRegistry([CODEC_BINDING])
    >>> registry.list_formats()
    ['json']
    >>> registry.lookup("yaml") is None
    True

    """

    def __init__(self, bindings: Iterable[CodecBinding]):
        """Build the registry from ``bindings``."""
        table: dict[str, CodecBinding] = {}
        for binding in bindings:
            if binding.format_name in table:
                raise ValueError(f"Duplicate codec binding for format '{binding.format_name}'")
            table[binding.format_name] = binding
            logger.debug(
                f"Registered codec: {binding.format_name} "
                f"(decode={binding.can_decode}, encode={binding.can_encode})"
            )
        self._bindings = MappingProxyType(table)

    def __contains__(self, format_name: object) -> bool:
        return format_name in self._bindings

    def __iter__(self) -> Iterator[CodecBinding]:
        return iter(self._bindings.values())

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"CodecRegistry({self.list_formats()!r})"

    def lookup(self, format_name: str) -> Optional[CodecBinding]:
        """Return the binding for ``format_name`` or None.

        The lookup is exact and case-sensitive; extension aliases are not
        applied here.
        """
        return self._bindings.get(format_name)

    def list_formats(self) -> List[str]:
        """List all registered format names, sorted."""
        return sorted(self._bindings)

    def decodable_formats(self) -> List[str]:
        """List the formats that can be decoded, sorted."""
        return sorted(name for name, binding in self._bindings.items() if binding.can_decode)

    def encodable_formats(self) -> List[str]:
        """List the formats that can be encoded, sorted."""
        return sorted(name for name, binding in self._bindings.items() if binding.can_encode)

    def get_decoder(self, format_name: str) -> Decoder:
        """Return the decode operation for ``format_name``.

        Raises
        ------
        UnsupportedFormatError
            If the format is not registered or cannot be decoded

        """
        binding = self.lookup(format_name)
        if binding is None or binding.decoder is None:
            raise UnsupportedFormatError(
                format_type=format_name, direction="decode", supported_formats=self.decodable_formats()
            )
        return binding.decoder

    def get_encoder(self, format_name: str) -> Encoder:
        """Return the encode operation for ``format_name``.

        Raises
        ------
        UnsupportedFormatError
            If the format is not registered or cannot be encoded

        """
        binding = self.lookup(format_name)
        if binding is None or binding.encoder is None:
            raise UnsupportedFormatError(
                format_type=format_name, direction="encode", supported_formats=self.encodable_formats()
            )
        return binding.encoder

    def subset(self, *format_names: str) -> CodecRegistry:
        """Return a new registry holding only the named formats.

        Raises
        ------
        UnsupportedFormatError
            If a name is not registered here

        """
        missing = [name for name in format_names if name not in self._bindings]
        if missing:
            raise UnsupportedFormatError(format_type=missing[0], supported_formats=self.list_formats())
        return CodecRegistry(self._bindings[name] for name in format_names)

    @classmethod
    def from_modules(cls, module_names: Iterable[str]) -> CodecRegistry:
        """Build a registry from modules that each expose ``CODEC_BINDING``.

        Raises
        ------
        ImportError
            If a module cannot be imported
        AttributeError
            If a module has no ``CODEC_BINDING``

        """
        bindings = []
        for module_name in module_names:
            # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
            module = importlib.import_module(module_name)
            bindings.append(module.CODEC_BINDING)
            logger.debug(f"Loaded codec module: {module_name}")
        return cls(bindings)


@lru_cache(maxsize=None)
def default_registry() -> CodecRegistry:
    """Return the registry of built-in codecs, built on first use."""
    from markconv.codecs import BUILTIN_CODEC_MODULES

    return CodecRegistry.from_modules(BUILTIN_CODEC_MODULES)
