#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for markconv.

This module centralizes the closed set of format identifiers, the extension
alias table used during format inference, and default encoder settings.

Constants are organized by category:
1. Type Definitions - Literal types for formats and directions
2. Format Identifiers and Aliases - Format detection tables
3. Encoder Defaults - Default output formatting per format
4. Configuration - Config discovery file names and environment variables
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

FormatName = Literal["json", "yaml", "toml"]
CodecDirection = Literal["decode", "encode"]

# =============================================================================
# Format Identifiers and Aliases
# =============================================================================

SUPPORTED_FORMATS: tuple[FormatName, ...] = ("json", "toml", "yaml")

# Informal file extensions mapped to their canonical format identifier.
# Only consulted when inferring a format from a file name.
EXTENSION_ALIASES: dict[str, FormatName] = {
    "js": "json",
    "tml": "toml",
    "yml": "yaml",
}

# Path value meaning standard input or standard output
STDIO_PATH = "-"

# Package requirements as (install_name, import_name, version_spec)
DEPS_YAML = [("pyyaml", "yaml", ">=6.0")]
DEPS_TOML = [("tomli-w", "tomli_w", ">=1.1.0")]

# =============================================================================
# Encoder Defaults
# =============================================================================

DEFAULT_JSON_INDENT: int | None = 2
DEFAULT_JSON_SORT_KEYS = False
DEFAULT_JSON_ENSURE_ASCII = False

DEFAULT_YAML_INDENT = 2
DEFAULT_YAML_SORT_KEYS = False
DEFAULT_YAML_DEFAULT_FLOW_STYLE = False
DEFAULT_YAML_ALLOW_UNICODE = True
DEFAULT_YAML_EXPLICIT_START = False

DEFAULT_TOML_INDENT = 4
DEFAULT_TOML_MULTILINE_STRINGS = False

# =============================================================================
# Configuration
# =============================================================================

CONFIG_FILENAMES = [".markconv.toml", ".markconv.yaml", ".markconv.yml", ".markconv.json"]
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "MARKCONV_CONFIG"
