"""Loading of scan settings (extensions and load paths) from configuration files."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

try:
    import tomllib
except ImportError:
    import toml as tomllib  # type: ignore

from .errors import ConfigError

logger = logging.getLogger(__name__)


DEFAULT_EXTENSIONS = ["js", "coffee"]
CONFIG_FILENAMES = [
    "dirchain.yaml",
    "dirchain.yml",
    "dirchain.json",
    "dirchain.toml",
    "pyproject.toml",
]
PYPROJECT_TABLE = "dirchain"


@dataclass
class ScanConfig:
    """Settings for a chain scanner."""

    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    load_paths: List[str] = field(default_factory=list)


def _read_data(file_path: Path) -> Optional[Dict[str, Any]]:
    """Parse a config file by suffix. Returns None for a pyproject without our table."""
    suffix = file_path.suffix.lower()

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file '{file_path}': {e}") from e

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(content)
        elif suffix == ".json":
            data = json.loads(content)
        elif suffix == ".toml":
            data = tomllib.loads(content)
            if file_path.name == "pyproject.toml":
                data = data.get("tool", {}).get(PYPROJECT_TABLE)
                if data is None:
                    return None
        else:
            raise ConfigError(f"Unsupported config file type: '{file_path}'")
    except (yaml.YAMLError, json.JSONDecodeError, ValueError) as e:
        raise ConfigError(f"Invalid config file '{file_path}': {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{file_path}' must hold a mapping")
    return data


def _string_list(data: Dict[str, Any], key: str, file_path: Path) -> Optional[List[str]]:
    """Get an optional list of strings from config data."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{key}' in '{file_path}' must be a list of strings")
    return value


def load_config(file_path: Path) -> ScanConfig:
    """
    Load scan settings from a YAML, JSON or TOML file.

    Recognized keys are 'extensions' and 'load_paths'; a pyproject.toml
    is read from its [tool.dirchain] table. Relative load paths are kept
    as written.

    Args:
        file_path: Path to the config file.

    Returns:
        The settings, with defaults for missing keys.

    Raises:
        ConfigError: If the file cannot be read or holds invalid values.
    """
    data = _read_data(file_path) or {}
    config = ScanConfig()

    extensions = _string_list(data, "extensions", file_path)
    if extensions is not None:
        config.extensions = [ext.lstrip(".") for ext in extensions]

    load_paths = _string_list(data, "load_paths", file_path)
    if load_paths is not None:
        config.load_paths = load_paths

    logger.info("Loaded config from %s", file_path)
    return config


def find_config(start_dir: Path) -> Optional[Path]:
    """
    Find a config file in a directory.

    Returns the first existing candidate of CONFIG_FILENAMES; a
    pyproject.toml only counts if it has a [tool.dirchain] table.
    """
    for name in CONFIG_FILENAMES:
        candidate = start_dir / name
        if not candidate.is_file():
            continue
        if name == "pyproject.toml" and _read_data(candidate) is None:
            continue
        return candidate
    return None
