#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the markconv CLI.

Configuration files hold encoder defaults, one table per output format::

    # .markconv.toml
    [json]
    indent = 4
    sort_keys = true

    [yaml]
    explicit_start = true

The same settings may live in ``pyproject.toml`` under ``[tool.markconv]``.
Configuration files are decoded with markconv's own codecs, so any format
markconv reads can be used.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from markconv.api import decode_document
from markconv.constants import CONFIG_FILENAMES, PYPROJECT_FILENAME
from markconv.exceptions import ConfigError, MarkconvError
from markconv.resolver import guess_format

logger = logging.getLogger(__name__)


def _decode_config(config_path: Path) -> Any:
    try:
        format_name = guess_format(str(config_path))
        with open(config_path, "rb") as f:
            return decode_document(f, format_name)
    except OSError as e:
        raise ConfigError(
            f"Error reading config file {config_path}: {e.strerror or e}",
            file_path=str(config_path),
            original_error=e,
        ) from e
    except MarkconvError as e:
        raise ConfigError(
            f"Invalid config file {config_path}: {e.message}", file_path=str(config_path), original_error=e
        ) from e


def _load_pyproject_markconv_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.markconv] section from pyproject.toml.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration from [tool.markconv], or an empty dict if absent

    Raises
    ------
    ConfigError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    data = _decode_config(pyproject_path)
    tool = data.get("tool")
    section = tool.get("markconv") if isinstance(tool, dict) else None
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"[tool.markconv] section in {pyproject_path} must be a table, got {type(section).__name__}",
            file_path=str(pyproject_path),
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` to the filesystem root, checking each
    directory for, in order: .markconv.toml, .markconv.yaml, .markconv.yml,
    .markconv.json, and pyproject.toml with a [tool.markconv] section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / PYPROJECT_FILENAME
        if pyproject_path.is_file():
            try:
                if _load_pyproject_markconv_section(pyproject_path):
                    return pyproject_path
            except ConfigError as e:
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file() -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The directory tree from the current working directory up to the root is
    searched first (see ``find_config_in_parents``), then the user's home
    directory for the dedicated config file names.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    found = find_config_in_parents()
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML, or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    ConfigError
        If the file does not exist, cannot be parsed, or is not a mapping

    Examples
    --------
    >>> config = load_config_file(".markconv.toml")
    >>> config.get("json", {}).get("indent")
    4

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", file_path=str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", file_path=str(config_path))

    if config_path.name.lower() == PYPROJECT_FILENAME:
        return _load_pyproject_markconv_section(config_path)

    config = _decode_config(config_path)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}",
            file_path=str(config_path),
        )
    logger.debug(f"Loaded configuration from {config_path}")
    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (MARKCONV_CONFIG)
    3. Auto-discovered config file

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    ConfigError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = discover_config_file()
    if discovered_path:
        logger.debug(f"Discovered configuration file: {discovered_path}")
        return load_config_file(discovered_path)

    return {}
