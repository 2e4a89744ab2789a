"""
Configuration loader for leadbook.

Store paths are resolved per field, first match wins:
  1. command-line flag (--data / --archive)
  2. environment (LEADBOOK_DATA / LEADBOOK_ARCHIVE)
  3. config.yaml (data_path / archive_path)
  4. defaults under $XDG_DATA_HOME/leadbook
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

ENV_DATA = "LEADBOOK_DATA"
ENV_ARCHIVE = "LEADBOOK_ARCHIVE"
ENV_CONFIG = "LEADBOOK_CONFIG"

DEFAULT_DATA_FILE = "leads.json"
DEFAULT_ARCHIVE_FILE = "archive.json"


@dataclass
class LeadbookConfig:
    """Where the active and archive stores live."""
    data_path: Path
    archive_path: Path
    config_file: Optional[Path] = None  # YAML file that was read, if any


def _xdg_dir(env: Mapping[str, str], var: str, fallback: str) -> Path:
    value = env.get(var)
    if value:
        return Path(value)
    return Path.home() / fallback


def default_data_dir(env: Mapping[str, str]) -> Path:
    return _xdg_dir(env, "XDG_DATA_HOME", ".local/share") / "leadbook"


def default_config_file(env: Mapping[str, str]) -> Path:
    if env.get(ENV_CONFIG):
        return Path(env[ENV_CONFIG])
    return _xdg_dir(env, "XDG_CONFIG_HOME", ".config") / "leadbook" / "config.yaml"


def load_yaml_config(config_path: Path) -> dict:
    """Read config.yaml. Missing or unreadable files give an empty dict."""
    if not config_path.exists():
        return {}

    try:
        data = yaml.safe_load(config_path.read_text())
    except (yaml.YAMLError, OSError) as e:
        logger.warning(f"Failed to parse {config_path}: {e}")
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring {config_path}: expected a mapping, got {type(data).__name__}")
        return {}
    return data


def _from_yaml(data: dict, key: str, config_path: Path) -> Optional[Path]:
    value = data.get(key)
    if not value:
        return None
    path = Path(str(value)).expanduser()
    if not path.is_absolute():
        path = config_path.parent / path
    return path


def load_config(
    data_path: Optional[str] = None,
    archive_path: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> LeadbookConfig:
    """Resolve store paths from flags, environment, config.yaml and defaults."""
    if env is None:
        env = os.environ

    config_path = default_config_file(env)
    data = load_yaml_config(config_path)
    data_dir = default_data_dir(env)

    def pick(flag: Optional[str], env_var: str, key: str, default_name: str) -> Path:
        if flag:
            return Path(flag).expanduser()
        if env.get(env_var):
            return Path(env[env_var]).expanduser()
        from_file = _from_yaml(data, key, config_path)
        if from_file is not None:
            return from_file
        return data_dir / default_name

    config = LeadbookConfig(
        data_path=pick(data_path, ENV_DATA, "data_path", DEFAULT_DATA_FILE),
        archive_path=pick(archive_path, ENV_ARCHIVE, "archive_path", DEFAULT_ARCHIVE_FILE),
        config_file=config_path if data else None,
    )
    logger.debug(f"Active store: {config.data_path}, archive: {config.archive_path}")
    return config
