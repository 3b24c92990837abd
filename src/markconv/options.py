#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markconv/options.py
"""Encoder options for each output format.

Options are frozen dataclasses so a single ``ConversionOptions`` value can be
built once from configuration and command-line flags and then shared by the
conversion pipeline without being mutated.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from markconv.constants import (
    DEFAULT_JSON_ENSURE_ASCII,
    DEFAULT_JSON_INDENT,
    DEFAULT_JSON_SORT_KEYS,
    DEFAULT_TOML_INDENT,
    DEFAULT_TOML_MULTILINE_STRINGS,
    DEFAULT_YAML_ALLOW_UNICODE,
    DEFAULT_YAML_DEFAULT_FLOW_STYLE,
    DEFAULT_YAML_EXPLICIT_START,
    DEFAULT_YAML_INDENT,
    DEFAULT_YAML_SORT_KEYS,
)
from markconv.exceptions import ConfigError

_BOOL_TYPES = ("bool", "Optional[bool]")


@dataclass(frozen=True)
class BaseEncodeOptions:
    """Base class for per-format encoder options."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any], section: str = "") -> Self:
        """Build options from a configuration mapping.

        Raises
        ------
        ConfigError
            If the mapping contains keys that are not option names

        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            prefix = f"[{section}] " if section else ""
            raise ConfigError(f"{prefix}unknown option(s): {', '.join(unknown)}")
        return cls(**dict(values))

    def __post_init__(self) -> None:
        indent = getattr(self, "indent", None)
        if indent is not None and (not isinstance(indent, int) or isinstance(indent, bool) or indent < 0):
            raise ConfigError(f"indent must be a non-negative integer, got {indent!r}")

        # Annotations are strings under postponed evaluation
        for f in fields(self):
            if f.type not in _BOOL_TYPES:
                continue
            value = getattr(self, f.name)
            if value is None and f.type == "Optional[bool]":
                continue
            if not isinstance(value, bool):
                raise ConfigError(f"{f.name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class JsonEncodeOptions(BaseEncodeOptions):
    """Configuration options for JSON output.

    Parameters
    ----------
    indent : int or None, default 2
        Spaces per indentation level; None writes compact single-line JSON
    sort_keys : bool, default False
        Sort mapping keys alphabetically
    ensure_ascii : bool, default False
        Escape every non-ASCII character

    """

    indent: Optional[int] = field(default=DEFAULT_JSON_INDENT, metadata={"help": "Indentation width"})
    sort_keys: bool = field(default=DEFAULT_JSON_SORT_KEYS, metadata={"help": "Sort mapping keys"})
    ensure_ascii: bool = field(default=DEFAULT_JSON_ENSURE_ASCII, metadata={"help": "Escape non-ASCII text"})


@dataclass(frozen=True)
class YamlEncodeOptions(BaseEncodeOptions):
    """Configuration options for YAML output.

    Parameters
    ----------
    indent : int, default 2
        Spaces per indentation level
    sort_keys : bool, default False
        Sort mapping keys alphabetically
    default_flow_style : bool or None, default False
        False for block style, True for inline flow style, None for automatic
    allow_unicode : bool, default True
        Write non-ASCII characters unescaped
    explicit_start : bool, default False
        Begin the document with a ``---`` marker

    """

    indent: int = field(default=DEFAULT_YAML_INDENT, metadata={"help": "Indentation width"})
    sort_keys: bool = field(default=DEFAULT_YAML_SORT_KEYS, metadata={"help": "Sort mapping keys"})
    default_flow_style: Optional[bool] = field(
        default=DEFAULT_YAML_DEFAULT_FLOW_STYLE, metadata={"help": "Use inline flow style"}
    )
    allow_unicode: bool = field(default=DEFAULT_YAML_ALLOW_UNICODE, metadata={"help": "Write unicode unescaped"})
    explicit_start: bool = field(default=DEFAULT_YAML_EXPLICIT_START, metadata={"help": "Emit '---' marker"})


@dataclass(frozen=True)
class TomlEncodeOptions(BaseEncodeOptions):
    """Configuration options for TOML output.

    Parameters
    ----------
    indent : int, default 4
        Spaces used to indent array items
    multiline_strings : bool, default False
        Write strings containing newlines as multi-line strings
    sort_keys : bool, default False
        Sort table keys alphabetically before writing

    """

    indent: int = field(default=DEFAULT_TOML_INDENT, metadata={"help": "Array indentation width"})
    multiline_strings: bool = field(
        default=DEFAULT_TOML_MULTILINE_STRINGS, metadata={"help": "Allow multi-line strings"}
    )
    sort_keys: bool = field(default=False, metadata={"help": "Sort table keys"})


_SECTION_CLASSES: dict[str, type[BaseEncodeOptions]] = {
    "json": JsonEncodeOptions,
    "yaml": YamlEncodeOptions,
    "toml": TomlEncodeOptions,
}


@dataclass(frozen=True)
class ConversionOptions:
    """Encoder options for every format, passed through a conversion."""

    json: JsonEncodeOptions = field(default_factory=JsonEncodeOptions)
    yaml: YamlEncodeOptions = field(default_factory=YamlEncodeOptions)
    toml: TomlEncodeOptions = field(default_factory=TomlEncodeOptions)

    def for_format(self, format_name: str) -> Optional[BaseEncodeOptions]:
        """Return the options for ``format_name`` or None for unknown formats."""
        return getattr(self, format_name, None) if format_name in _SECTION_CLASSES else None

    def with_overrides(self, **overrides: Any) -> ConversionOptions:
        """Apply the same field overrides to every format that has the field.

        ``None`` values are ignored so unset CLI flags leave options alone.
        """
        updated = {}
        for name in _SECTION_CLASSES:
            section = getattr(self, name)
            names = {f.name for f in fields(section)}
            changes = {k: v for k, v in overrides.items() if v is not None and k in names}
            updated[name] = section.create_updated(**changes) if changes else section
        return replace(self, **updated)

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> ConversionOptions:
        """Build options from a ``{"json": {...}, "yaml": {...}, "toml": {...}}`` mapping.

        Raises
        ------
        ConfigError
            For unknown sections, unknown keys, or invalid values

        """
        unknown = sorted(set(config) - set(_SECTION_CLASSES))
        if unknown:
            raise ConfigError(f"unknown configuration section(s): {', '.join(unknown)}")
        sections = {}
        for name, options_class in _SECTION_CLASSES.items():
            values = config.get(name, {})
            if not isinstance(values, Mapping):
                raise ConfigError(f"[{name}] must be a table, got {type(values).__name__}")
            try:
                sections[name] = options_class.from_dict(values, section=name)
            except TypeError as e:
                raise ConfigError(f"[{name}] {e}", original_error=e) from e
        return cls(**sections)
