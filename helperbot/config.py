"""Configuration models and loading for the helper bot."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from helperbot.models import DESCRIPTION_LIMIT, MAX_REFERENCES

CONFIG_FILENAME = ".helperbot.yaml"


class ConfigurationError(ValueError):
    """Raised when a component is started without a value it cannot run without."""


class GithubConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    repository_owner: str | None = None
    repository_name: str | None = None
    gh_bin: str = "gh"

    def require_repository(self) -> tuple[str, str]:
        owner = (self.repository_owner or "").strip()
        name = (self.repository_name or "").strip()
        if not owner:
            raise ConfigurationError("github.repository_owner is not set")
        if not name:
            raise ConfigurationError("github.repository_name is not set")
        return owner, name


class ReferencesConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    max_references: int = Field(default=MAX_REFERENCES, ge=1, le=MAX_REFERENCES)
    description_limit: int = Field(default=DESCRIPTION_LIMIT, ge=1, le=DESCRIPTION_LIMIT)


class StorageConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    sqlite_path: str = "res/database.db"


class ServerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    host: str = "127.0.0.1"
    port: int = 8080


class HelperConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    github: GithubConfig = Field(default_factory=GithubConfig)
    references: ReferencesConfig = Field(default_factory=ReferencesConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"YAML at {path} must decode to a mapping")
    return data


def load_effective_config(
    repo_path: str | Path,
    org_defaults: dict[str, Any] | None = None,
    system_defaults: dict[str, Any] | None = None,
    runtime_override: dict[str, Any] | None = None,
) -> HelperConfig:
    """Load config with precedence runtime > repo .helperbot.yaml > org > system."""
    repo_config = _load_yaml(Path(repo_path) / CONFIG_FILENAME)

    merged: dict[str, Any] = {}
    for layer in (system_defaults, org_defaults, repo_config, runtime_override):
        if layer:
            merged = _deep_merge(merged, layer)

    return HelperConfig.model_validate(merged)
