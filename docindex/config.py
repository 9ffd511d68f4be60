"""Configuration loading for docindex (.docindex.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".docindex.yml"

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_RAW_URL = "https://raw.githubusercontent.com"
TOKEN_ENV_KEYS = ("DOCINDEX_GITHUB_TOKEN", "GITHUB_TOKEN")


@dataclass
class GitHubConfig:
    """Endpoints and credentials for GitHub access."""

    api_url: str = DEFAULT_API_URL
    raw_url: str = DEFAULT_RAW_URL
    token: Optional[str] = None


@dataclass
class TimeoutConfig:
    """Per-request timeouts in seconds."""

    tree: float = 30.0
    file: float = 15.0
    manifest: float = 30.0


@dataclass
class DocIndexConfig:
    """Represents the settings defined in .docindex.yml."""

    root: Path
    output: str = "AGENTS.md"
    docs_dir: str = ".docs"
    gitignore: bool = True
    github: GitHubConfig = field(default_factory=GitHubConfig)
    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)

    def resolve_token(self, explicit: str | None = None) -> str | None:
        """Return the bearer token: explicit value, config, then environment."""
        if explicit:
            return explicit
        if self.github.token:
            return self.github.token
        return _first_env_value(TOKEN_ENV_KEYS)


def load_config(config_path: Path) -> DocIndexConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocIndexConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = DocIndexConfig(root=root)
    config.output = _as_str(data.get("output")) or config.output
    config.docs_dir = _as_str(data.get("docs_dir")) or config.docs_dir
    gitignore = _as_bool(data.get("gitignore"))
    if gitignore is not None:
        config.gitignore = gitignore

    github_data = _as_dict(data.get("github"))
    if github_data:
        config.github = GitHubConfig(
            api_url=(_as_str(github_data.get("api_url")) or DEFAULT_API_URL).rstrip("/"),
            raw_url=(_as_str(github_data.get("raw_url")) or DEFAULT_RAW_URL).rstrip("/"),
            token=_as_str(github_data.get("token")),
        )

    timeout_data = _as_dict(data.get("timeouts"))
    if timeout_data:
        defaults = TimeoutConfig()
        config.timeouts = TimeoutConfig(
            tree=_as_positive_float(timeout_data.get("tree"), "tree") or defaults.tree,
            file=_as_positive_float(timeout_data.get("file"), "file") or defaults.file,
            manifest=_as_positive_float(timeout_data.get("manifest"), "manifest")
            or defaults.manifest,
        )

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _first_env_value(keys: Sequence[str]) -> str | None:
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_positive_float(value: Any, key: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ConfigError(f"timeouts.{key} must be a number")
    try:
        number = float(value)
    except ValueError as exc:
        raise ConfigError(f"timeouts.{key} must be a number") from exc
    if number <= 0:
        raise ConfigError(f"timeouts.{key} must be greater than zero")
    return number


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "DocIndexConfig",
    "GitHubConfig",
    "TimeoutConfig",
    "load_config",
]
