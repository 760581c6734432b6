"""Configuration management for jdktools."""

from __future__ import annotations

import os
import tomllib
from copy import deepcopy
from pathlib import Path
from typing import Any, Literal

import tomli_w
from pydantic import BaseModel, Field, ValidationError

DEFAULT_CONFIG_DIR = Path(os.environ.get("JDKTOOLS_HOME", Path.home() / ".jdktools"))
CONFIG_FILENAME = "config.toml"
PROJECT_CONFIG_FILENAME = "jdktools.toml"

Backend = Literal["subprocess", "provider"]


class ConfigurationError(RuntimeError):
    """Raised when configuration loading fails."""


class ToolsConfig(BaseModel):
    """Persisted jdktools settings."""

    config_version: int = 1
    backend: Backend = "subprocess"
    java_home: str | None = None
    executables: dict[str, str] = Field(default_factory=dict)
    terminate_grace_secs: float = 5.0
    poll_interval_secs: float = 0.1
    load_entry_points: bool = True

    def search_paths(self) -> tuple[Path, ...]:
        """Directories searched after PATH when resolving an executable."""
        if not self.java_home:
            return ()
        return (Path(self.java_home).expanduser() / "bin",)


class ConfigManager:
    """Handles loading, merging and persisting jdktools configuration."""

    def __init__(
        self,
        config_dir: Path | None = None,
        project_config_path: Path | None = None,
        override_config_path: Path | None = None,
        environ: dict[str, str] | None = None,
    ) -> None:
        self.config_dir = config_dir or DEFAULT_CONFIG_DIR
        self.config_path = self.config_dir / CONFIG_FILENAME
        self.project_config_path = project_config_path
        self.override_config_path = override_config_path
        self._environ = environ

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def load(self) -> ToolsConfig:
        """Return the merged configuration: user file, project file, override, env."""
        data: dict[str, Any] = self._read_config_dict(self.config_path)
        if self.project_config_path:
            data = self._merge_dicts(data, self._read_config_dict(self.project_config_path))
        if self.override_config_path:
            data = self._merge_dicts(data, self._read_config_dict(self.override_config_path))
        data = self._merge_dicts(data, self._env_overrides(data))
        try:
            return ToolsConfig(**data)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc

    def save(self, config: ToolsConfig) -> Path:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(tomli_w.dumps(config.model_dump(exclude_none=True)))
        return self.config_path

    def update(self, **updates: object) -> ToolsConfig:
        current = self._read_config_dict(self.config_path)
        current.update({key: value for key, value in updates.items() if value is not None})
        try:
            config = ToolsConfig(**current)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc
        self.save(config)
        return config

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _env_overrides(self, data: dict[str, Any]) -> dict[str, Any]:
        env = self._environ if self._environ is not None else os.environ
        overrides: dict[str, Any] = {}
        backend = env.get("JDKTOOLS_BACKEND")
        if backend:
            overrides["backend"] = backend.strip().lower()
        java_home = env.get("JDKTOOLS_JAVA_HOME")
        if java_home:
            overrides["java_home"] = java_home
        elif not data.get("java_home") and env.get("JAVA_HOME"):
            overrides["java_home"] = env["JAVA_HOME"]
        return overrides

    def _read_config_dict(self, path: Path | None) -> dict[str, Any]:
        if path is None:
            return {}
        if not path.exists():
            return {}
        try:
            return tomllib.loads(path.read_text())
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigurationError(f"Failed to load config from {path}: {exc}") from exc

    def _merge_dicts(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        result = deepcopy(base)
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result


def find_project_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``jdktools.toml`` at or above ``start``."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PROJECT_CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(override_config_path: Path | None = None) -> ToolsConfig:
    """Load configuration from the default locations."""
    config_dir = Path(os.environ.get("JDKTOOLS_HOME", DEFAULT_CONFIG_DIR))
    manager = ConfigManager(
        config_dir=config_dir,
        project_config_path=None if override_config_path else find_project_config(),
        override_config_path=override_config_path,
    )
    return manager.load()


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG_DIR",
    "PROJECT_CONFIG_FILENAME",
    "ConfigManager",
    "ConfigurationError",
    "ToolsConfig",
    "find_project_config",
    "load_config",
]
