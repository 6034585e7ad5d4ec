#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the gfmhost CLI.

A configuration file holds an option record, the same mapping host scripts
pass to ``to_html``. JSON, TOML and YAML files are supported, as is a
``[tool.gfmhost]`` section in ``pyproject.toml``. When the loaded table has
a ``markdown`` sub-table, that sub-table is the record.
"""

import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from gfmhost.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = [".gfmhost.toml", ".gfmhost.yaml", ".gfmhost.yml", ".gfmhost.json"]


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.gfmhost] section from a pyproject.toml file.

    Returns an empty dict when the section is missing.
    """
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)

    config = data.get("tool", {}).get("gfmhost", {})
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.gfmhost] section in {pyproject_path} must be a table, got {type(config).__name__}",
            file_path=str(pyproject_path),
        )
    return config


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    with open(config_path, "rb") as f:
        return tomllib.load(f)


def _load_yaml_config(config_path: Path) -> Any:
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _load_json_config(config_path: Path) -> Any:
    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` (default: the current directory) to the
    filesystem root. In each directory the dedicated config files are checked
    first, then ``pyproject.toml`` when it has a ``[tool.gfmhost]`` section.

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

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except (ConfigError, tomllib.TOMLDecodeError, OSError) as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load an option record from a JSON, TOML, YAML, or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        The option record

    Raises
    ------
    ConfigError
        If the file cannot be read, parsed, or does not contain a table

    Examples
    --------
    >>> record = load_config_file(".gfmhost.toml")
    >>> record.get("default_line_ending")
    'lf'

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", file_path=str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", file_path=str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    try:
        if filename == "pyproject.toml":
            data = _load_pyproject_section(config_path)
        elif ext == ".toml":
            data = _load_toml_config(config_path)
        elif ext in (".yaml", ".yml"):
            data = _load_yaml_config(config_path)
        elif ext == ".json":
            data = _load_json_config(config_path)
        else:
            raise ConfigError(
                f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", file_path=str(config_path)
            )
    except ConfigError:
        raise
    except (OSError, ValueError, yaml.YAMLError) as e:
        # JSONDecodeError and TOMLDecodeError are ValueErrors
        raise ConfigError(
            f"Error reading config file {config_path}: {e}", file_path=str(config_path), original_error=e
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a table, got {type(data).__name__}", file_path=str(config_path)
        )

    record = data.get("markdown", data)
    if not isinstance(record, dict):
        raise ConfigError(
            f"'markdown' section in {config_path} must be a table, got {type(record).__name__}",
            file_path=str(config_path),
        )
    logger.debug("Loaded options from %s", config_path)
    return record


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load an option record with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (GFMHOST_CONFIG)
    3. Auto-discovered config file in the current directory or its parents

    Returns an empty dict when no configuration is found.
    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = find_config_in_parents()
    if discovered_path:
        return load_config_file(discovered_path)

    return {}
