#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/fieldtoc/config.py
"""Configuration file discovery and loading.

Settings can be kept in ``.fieldtoc.toml``, ``.fieldtoc.yaml``/``.yml``,
``.fieldtoc.json`` or a ``[tool.fieldtoc]`` table of ``pyproject.toml``.
A configuration has two optional sections::

    [settings]
    scannable-field-types = ["text_long", "text_with_summary"]
    heading-fields = ["node:page:field_title"]
    is-relative = true

    [renderer]
    title = "On this page"
    list-tag = "ol"

``settings`` maps onto :class:`~fieldtoc.options.toc.TocSettings` and
``renderer`` onto :class:`~fieldtoc.options.render.TocRendererOptions`.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from fieldtoc.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES, PYPROJECT_SECTION
from fieldtoc.exceptions import ConfigurationError, ValidationError
from fieldtoc.options.render import TocRendererOptions
from fieldtoc.options.toc import TocSettings

logger = logging.getLogger(__name__)

CONFIG_SECTIONS = ("settings", "renderer")


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.fieldtoc]`` table of a pyproject.toml file.

    Returns an empty dict when the table is absent.

    Raises
    ------
    ConfigurationError
        If the file is not valid TOML or the table is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in pyproject.toml {pyproject_path}: {e}", config_path=str(pyproject_path), original_error=e
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Error reading pyproject.toml {pyproject_path}: {e}", config_path=str(pyproject_path), original_error=e
        ) from e

    tool = data.get("tool", {})
    if PYPROJECT_SECTION not in tool:
        return {}

    config = tool[PYPROJECT_SECTION]
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}",
            config_path=str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching ``start_dir`` and its parents.

    Each directory is checked for the dedicated config files in priority
    order, then for a ``pyproject.toml`` with a ``[tool.fieldtoc]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        First config file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigurationError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Parent directories are searched first (see :func:`find_config_in_parents`),
    then the dedicated config files in the user's home directory.
    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary

    Raises
    ------
    ConfigurationError
        If the file is missing, unreadable, malformed or of an unknown format

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration path is not a file: {config_path}", config_path=str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        config = _load_pyproject_section(config_path)
    elif ext == ".toml":
        config = _load_with(config_path, "TOML", lambda f: tomllib.load(f), binary=True)
    elif ext in (".yaml", ".yml"):
        config = _load_with(config_path, "YAML", yaml.safe_load)
    elif ext == ".json":
        config = _load_with(config_path, "JSON", json.load)
    else:
        raise ConfigurationError(
            f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", config_path=str(config_path)
        )

    logger.debug("Loaded configuration from %s", config_path)
    return config


def _load_with(config_path: Path, kind: str, loader: Any, binary: bool = False) -> Dict[str, Any]:
    try:
        if binary:
            with open(config_path, "rb") as f:
                config = loader(f)
        else:
            with open(config_path, "r", encoding="utf-8") as f:
                config = loader(f)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Invalid {kind} in config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Error reading {kind} config {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e

    # An empty YAML file loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"{kind} config file must contain a mapping at root level, got {type(config).__name__}",
            config_path=str(config_path),
        )
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge two configuration dictionaries; ``override`` wins.

    Examples
    --------
    >>> merge_configs({"settings": {"is_relative": False}}, {"settings": {"view_mode": "teaser"}})
    {'settings': {'is_relative': False, 'view_mode': 'teaser'}}

    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
    start_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Load configuration from the highest-priority source available.

    Priority order (highest to lowest):

    1. Explicit config file path (``--config``)
    2. The file named by the ``FIELDTOC_CONFIG`` environment variable
    3. An auto-discovered config file

    Parameters
    ----------
    explicit_path : str, optional
        Explicit config file path
    env_var_path : str, optional
        Config path taken from the environment; read from
        ``FIELDTOC_CONFIG`` when omitted
    start_dir : Path, optional
        Directory discovery starts from

    Returns
    -------
    dict
        Loaded configuration (empty when nothing was found)

    """
    if explicit_path:
        return load_config_file(explicit_path)

    env_var_path = env_var_path if env_var_path is not None else os.environ.get(CONFIG_ENV_VAR)
    if env_var_path:
        return load_config_file(env_var_path)

    discovered = discover_config_file(start_dir)
    if discovered:
        return load_config_file(discovered)

    return {}


def options_from_config(config: Dict[str, Any]) -> tuple[TocSettings, TocRendererOptions]:
    """Build settings and renderer options from a configuration dictionary.

    Raises
    ------
    ConfigurationError
        If the configuration has unknown sections or invalid option values

    """
    unknown = sorted(set(config) - set(CONFIG_SECTIONS))
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration section(s): {', '.join(unknown)} (expected: {', '.join(CONFIG_SECTIONS)})"
        )

    try:
        settings = TocSettings.from_mapping(config.get("settings") or {})
        renderer = TocRendererOptions.from_mapping(config.get("renderer") or {})
    except ConfigurationError:
        raise
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e.message}", original_error=e) from e

    return settings, renderer


__all__ = [
    "CONFIG_SECTIONS",
    "discover_config_file",
    "find_config_in_parents",
    "load_config_file",
    "load_config_with_priority",
    "merge_configs",
    "options_from_config",
]
