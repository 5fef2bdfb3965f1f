#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the livefind CLI.

A configuration file holds up to two tables, ``search`` and ``editor``,
whose keys are the fields of ``SearchOptions`` and ``EditorOptions``::

    # .livefind.toml
    [search]
    case_sensitive = true
    reconcile = "remap"

    [editor]
    publish_debounce_ms = 750

The same tables may live under ``[tool.livefind]`` in ``pyproject.toml``.
"""

from __future__ import annotations

import difflib
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from livefind.constants import CONFIG_ENV_VAR
from livefind.exceptions import ParsingError, ValidationError
from livefind.options import EditorOptions, SearchOptions

logger = logging.getLogger(__name__)

DEDICATED_CONFIG_FILENAMES = (".livefind.toml", ".livefind.yaml", ".livefind.yml", ".livefind.json")
CONFIG_SECTIONS = ("search", "editor")


def _read_pyproject_section(pyproject_path: Path) -> dict[str, Any]:
    """Return the ``[tool.livefind]`` table of a pyproject file, or an empty dict."""
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ParsingError(f"Invalid TOML in {pyproject_path}: {e}", parsing_stage="config", original_error=e) from e
    except OSError as e:
        raise ParsingError(f"Cannot read {pyproject_path}: {e}", parsing_stage="config", original_error=e) from e

    section = data.get("tool", {}).get("livefind", {})
    if not isinstance(section, dict):
        raise ParsingError(
            f"[tool.livefind] in {pyproject_path} must be a table, got {type(section).__name__}",
            parsing_stage="config",
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Return the nearest configuration file from ``start_dir`` up to the filesystem root.

    In each directory the dedicated files are checked first, then a
    ``pyproject.toml`` that has a ``[tool.livefind]`` table. Unreadable
    pyproject files are skipped.
    """
    current = (start_dir or Path.cwd()).resolve()
    while True:
        for filename in DEDICATED_CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                return candidate

        pyproject = current / "pyproject.toml"
        if pyproject.is_file():
            try:
                if _read_pyproject_section(pyproject):
                    return pyproject
            except ParsingError as e:
                logger.debug("Skipping %s: %s", pyproject, e)

        if current.parent == current:
            return None
        current = current.parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file near ``start_dir``, falling back to the home directory.

    Returns
    -------
    Path or None
        First file found, or None

    """
    found = find_config_in_parents(start_dir)
    if found is not None:
        return found

    home = Path.home()
    for filename in DEDICATED_CONFIG_FILENAMES:
        candidate = home / filename
        if candidate.is_file():
            return candidate
    return None


def load_config_file(config_path: Path | str) -> dict[str, Any]:
    """Load a configuration file, choosing the parser from its name.

    Parameters
    ----------
    config_path : Path or str
        ``.toml``, ``.yaml``/``.yml``, ``.json`` or ``pyproject.toml``

    Returns
    -------
    dict
        The configuration mapping

    Raises
    ------
    ParsingError
        If the file is missing, unreadable, malformed or not a mapping

    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise ParsingError(f"Configuration file does not exist: {config_path}", parsing_stage="config")

    if config_path.name.lower() == "pyproject.toml":
        return _read_pyproject_section(config_path)

    suffix = config_path.suffix.lower()
    try:
        if suffix == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif suffix in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif suffix == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ParsingError(
                f"Unsupported config file format: {suffix or config_path.name}. Use .toml, .yaml or .json",
                parsing_stage="config",
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ParsingError(f"Invalid config file {config_path}: {e}", parsing_stage="config", original_error=e) from e
    except OSError as e:
        raise ParsingError(f"Cannot read {config_path}: {e}", parsing_stage="config", original_error=e) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ParsingError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}",
            parsing_stage="config",
        )
    return config


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Examples
    --------
        >>> merge_configs({"search": {"case_sensitive": True}}, {"search": {"reconcile": "remap"}})
        {'search': {'case_sensitive': True, 'reconcile': 'remap'}}

    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
    start_dir: Optional[Path] = None,
) -> dict[str, Any]:
    """Load the configuration that applies to this invocation.

    Priority (first match wins): ``explicit_path`` (``--config``), then
    ``env_var_path`` (``LIVEFIND_CONFIG``), then auto-discovery.
    """
    for label, path in (("--config", explicit_path), (CONFIG_ENV_VAR, env_var_path)):
        if path:
            logger.debug("Loading configuration from %s (%s)", path, label)
            return load_config_file(path)

    discovered = discover_config_file(start_dir)
    if discovered is None:
        return {}
    logger.debug("Discovered configuration file %s", discovered)
    return load_config_file(discovered)


def options_from_config(config: dict[str, Any]) -> tuple[SearchOptions, EditorOptions]:
    """Build option objects from a configuration mapping.

    Raises
    ------
    ValidationError
        For unknown sections or keys, or invalid values

    """
    for section, value in config.items():
        if section not in CONFIG_SECTIONS:
            suggestion = difflib.get_close_matches(section, CONFIG_SECTIONS, n=1)
            hint = f" Did you mean '{suggestion[0]}'?" if suggestion else ""
            raise ValidationError(f"Unknown configuration section '{section}'.{hint}", parameter_name=section)
        if not isinstance(value, dict):
            raise ValidationError(
                f"Configuration section '{section}' must be a table, got {type(value).__name__}",
                parameter_name=section,
                parameter_value=value,
            )

    search = SearchOptions.from_mapping(config.get("search", {}))
    editor = EditorOptions.from_mapping(config.get("editor", {}))
    return search, editor


def env_config_path() -> Optional[str]:
    """Return the configuration path named by ``LIVEFIND_CONFIG``, if set."""
    return os.environ.get(CONFIG_ENV_VAR) or None
