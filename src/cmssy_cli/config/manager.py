"""Configuration manager: read/write user TOML config, load project config."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomli_w

from cmssy_cli.client.errors import ConfigurationError
from cmssy_cli.config.constants import (
    CONFIG_FILE,
    DEFAULT_API_URL,
    ENV_API_TOKEN,
    ENV_API_URL,
    PROJECT_CONFIG_FILE,
)
from cmssy_cli.config.models import ApiSettings, CLIConfig, ProjectConfig

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib


class ConfigManager:
    """Manages user configuration on disk and resolves API settings."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or CONFIG_FILE
        self._config: CLIConfig | None = None

    @property
    def config(self) -> CLIConfig:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> CLIConfig:
        if not self.config_path.exists():
            return CLIConfig()
        data = tomllib.loads(self.config_path.read_bytes().decode())
        return CLIConfig(
            api_url=data.get("api_url"),
            api_token=data.get("api_token"),
        )

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        # Secure directory permissions (owner-only)
        os.chmod(self.config_path.parent, 0o700)
        data: dict[str, Any] = self.config.model_dump(exclude_none=True)
        # Atomic write: write to temp file, then rename
        temp = self.config_path.with_suffix(".tmp")
        fd = os.open(str(temp), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, tomli_w.dumps(data).encode())
        finally:
            os.close(fd)
        temp.replace(self.config_path)

    def set_value(self, key: str, value: str) -> None:
        if key not in CLIConfig.model_fields:
            raise ConfigurationError(
                f"Unknown config key '{key}'. "
                f"Valid keys: {', '.join(CLIConfig.model_fields)}"
            )
        setattr(self.config, key, value)
        self.save()

    def unset_value(self, key: str) -> bool:
        if getattr(self.config, key, None) is None:
            return False
        setattr(self.config, key, None)
        self.save()
        return True

    def resolve_api(
        self,
        url: str | None = None,
        token: str | None = None,
    ) -> ApiSettings:
        """Resolve registry API settings.

        Precedence: CLI flags > env vars > user config > default URL.
        """
        resolved_url = (
            url
            or os.environ.get(ENV_API_URL)
            or self.config.api_url
            or DEFAULT_API_URL
        )
        resolved_token = (
            token
            or os.environ.get(ENV_API_TOKEN)
            or self.config.api_token
        )
        return ApiSettings(url=resolved_url, token=resolved_token)


def load_project_config(cwd: Path) -> ProjectConfig:
    """Read cmssy.toml from the project root."""
    path = cwd / PROJECT_CONFIG_FILE
    if not path.exists():
        raise ConfigurationError(
            f"{PROJECT_CONFIG_FILE} not found. Are you in a Cmssy project?"
        )
    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid {PROJECT_CONFIG_FILE}: {exc}") from exc
    return ProjectConfig.model_validate(data)
