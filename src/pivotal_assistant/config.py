"""Configuration loading for Pivotal Assistant.

Two YAML files are involved:
- the user file (default ~/.pivotal-assistant.yaml) holds the API token and tunables
- the repository file (.pivotal-assistant.yaml at the git root) holds the project id
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import yaml

from pivotal_assistant.logging import get_logger
from pivotal_assistant.sync.signals import DEFAULT_IDLE_TIMEOUT, DEFAULT_POLL_INTERVAL
from pivotal_assistant.tracker import DEFAULT_BASE_URL

logger = get_logger("config")

USER_CONFIG_FILE = ".pivotal-assistant.yaml"
PROJECT_CONFIG_FILE = ".pivotal-assistant.yaml"

TOKEN_ENV = "PIVOTAL_TRACKER_TOKEN"
CONFIG_PATH_ENV = "PIVOTAL_ASSISTANT_CONFIG"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class UserConfig:
    """Per-user settings."""

    token: str
    api_url: str = DEFAULT_BASE_URL
    idle_timeout: float = DEFAULT_IDLE_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserConfig:
        """Create config from dictionary.

        Raises:
            ConfigError: If the token is missing or a tunable is not a number.
        """
        token = data.get("token")
        if not token:
            raise ConfigError("Missing required field: token")
        try:
            return cls(
                token=str(token),
                api_url=str(data.get("api_url", DEFAULT_BASE_URL)),
                idle_timeout=float(data.get("idle_timeout", DEFAULT_IDLE_TIMEOUT)),
                poll_interval=float(data.get("poll_interval", DEFAULT_POLL_INTERVAL)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid user configuration: {e}") from e


@dataclass
class ProjectConfig:
    """Per-repository settings."""

    project_id: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectConfig:
        if "project_id" not in data:
            raise ConfigError("Missing required field: project_id")
        try:
            return cls(project_id=int(data["project_id"]))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid project_id: {data['project_id']!r}") from e


def user_config_path() -> Path:
    """Location of the user file, honoring PIVOTAL_ASSISTANT_CONFIG."""
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / USER_CONFIG_FILE


def project_config_path(repo_path: str | Path = ".") -> Path:
    return Path(repo_path) / PROJECT_CONFIG_FILE


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping: {path}")
    return data


def _write_yaml(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)


def load_user_config(path: Path | None = None) -> UserConfig:
    """Load the user configuration.

    The PIVOTAL_TRACKER_TOKEN environment variable takes precedence over the
    file's token; with the variable set the file is optional.

    Args:
        path: User file location. Defaults to user_config_path().

    Returns:
        Parsed configuration.

    Raises:
        ConfigError: If no token is available or the file is invalid.
    """
    if path is None:
        path = user_config_path()
    env_token = os.environ.get(TOKEN_ENV)

    if path.exists():
        data = _read_yaml(path)
    elif env_token:
        data = {}
    else:
        raise ConfigError(f"Config file not found: {path}")

    if env_token:
        data["token"] = env_token
    return UserConfig.from_dict(data)


def save_user_config(config: UserConfig, path: Path | None = None) -> Path:
    """Persist the user configuration with owner-only permissions."""
    if path is None:
        path = user_config_path()
    _write_yaml(path, asdict(config))
    path.chmod(0o600)
    logger.info("Saved user configuration to %s", path)
    return path


def load_project_config(repo_path: str | Path = ".") -> ProjectConfig:
    """Load the repository configuration.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    return ProjectConfig.from_dict(_read_yaml(project_config_path(repo_path)))


def save_project_config(config: ProjectConfig, repo_path: str | Path = ".") -> Path:
    path = project_config_path(repo_path)
    _write_yaml(path, asdict(config))
    logger.info("Saved project configuration to %s", path)
    return path
