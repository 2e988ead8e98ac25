#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the mdpeek CLI.

This module handles discovery of configuration files next to the document
being rendered, loading them from TOML, YAML or JSON, and checking the keys
they contain. Command line arguments always win over configuration values;
that merge happens in :mod:`mdpeek.cli`.
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

from mdpeek.constants import CONFIG_FILENAMES, PYPROJECT_SECTION
from mdpeek.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Recognized keys and the types their values must have
CONFIG_KEYS: Dict[str, tuple[type, ...]] = {
    "theme": (str,),
    "standalone": (bool,),
    "title": (str,),
    "rule_width": (int,),
    "color_system": (str,),
    "log_level": (str,),
}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.mdpeek]`` section from a pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary from the section, or empty dict if not found

    Raises
    ------
    ConfigError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    section = data.get("tool", {}).get(PYPROJECT_SECTION)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(section).__name__}",
            str(pyproject_path),
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up the directory tree from ``start_dir`` to the filesystem root,
    checking each directory for configuration files in priority order:

    1. .mdpeek.toml
    2. .mdpeek.yaml
    3. .mdpeek.yml
    4. .mdpeek.json
    5. pyproject.toml (with a [tool.mdpeek] section)

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
            except ConfigError as e:
                # A broken pyproject.toml that is not ours should not stop discovery
                logger.debug("Ignoring %s during config discovery: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name and extension. Unknown keys are
    logged and dropped; values of the wrong type raise.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary restricted to recognized keys

    Raises
    ------
    ConfigError
        If the file cannot be read, parsed, or has invalid contents

    Examples
    --------
    >>> config = load_config_file(".mdpeek.toml")
    >>> config.get("theme")
    'nord'

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        config = _load_pyproject_section(config_path)
    elif ext == ".toml":
        config = _load_toml_config(config_path)
    elif ext in (".yaml", ".yml"):
        config = _load_yaml_config(config_path)
    elif ext == ".json":
        config = _load_json_config(config_path)
    else:
        raise ConfigError(f"Unsupported config file format: {ext}. Use .toml, .yaml or .json", str(config_path))

    logger.debug("Loaded configuration from %s", config_path)
    return validate_config(config, config_path)


def validate_config(config: Dict[str, Any], config_path: Path | str | None = None) -> Dict[str, Any]:
    """Check configuration keys and value types.

    Parameters
    ----------
    config : dict
        Raw configuration mapping
    config_path : Path, str or None
        Source of the configuration, for messages

    Returns
    -------
    dict
        The recognized keys with their values

    Raises
    ------
    ConfigError
        If a recognized key has a value of the wrong type

    """
    source = str(config_path) if config_path is not None else None
    validated: Dict[str, Any] = {}
    for key, value in config.items():
        expected = CONFIG_KEYS.get(key)
        if expected is None:
            logger.warning("Ignoring unknown configuration key '%s' in %s", key, source or "configuration")
            continue
        # bool is a subclass of int; reject it where a number is expected
        if not isinstance(value, expected) or (bool not in expected and isinstance(value, bool)):
            raise ConfigError(
                f"Configuration key '{key}' must be {expected[0].__name__}, got {type(value).__name__}",
                source,
            )
        validated[key] = value
    return validated


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading TOML config {config_path}: {e}", str(config_path), e) from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading JSON config {config_path}: {e}", str(config_path), e) from e

    if not isinstance(config, dict):
        raise ConfigError(f"JSON config file must contain an object, got {type(config).__name__}", str(config_path))
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading YAML config {config_path}: {e}", str(config_path), e) from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"YAML config file must contain a mapping, got {type(config).__name__}", str(config_path))
    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
    start_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):

    1. Explicit config file path (``--config``)
    2. Environment variable config path (``MDPEEK_CONFIG``)
    3. Config file discovered upward from ``start_dir``

    Parameters
    ----------
    explicit_path : str, optional
        Explicit config file path from --config flag
    env_var_path : str, optional
        Config file path from the environment
    start_dir : Path, optional
        Directory to start discovery from (the document's directory)

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    ConfigError
        If a config file is specified or found but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = find_config_in_parents(start_dir)
    if discovered_path:
        return load_config_file(discovered_path)

    return {}
