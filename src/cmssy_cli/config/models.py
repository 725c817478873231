"""Pydantic models for CLI and project configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from cmssy_cli.config.constants import DEFAULT_API_URL, DEFAULT_TIMEOUT


class ApiSettings(BaseModel):
    """Resolved connection settings for the Cmssy registry API."""

    url: str = Field(default=DEFAULT_API_URL, description="GraphQL endpoint URL")
    token: str | None = Field(default=None, description="API token (Bearer)")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, le=600, description="Request timeout in seconds",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")


class CLIConfig(BaseModel):
    """User-level configuration stored under the platform config dir."""

    api_url: str | None = None
    api_token: str | None = None


class BuildSettings(BaseModel):
    """The ``[build]`` table of cmssy.toml."""

    out_dir: str = "public"
    minify: bool = True
    sourcemap: bool = True
    target: str = "es2020"


class ProjectConfig(BaseModel):
    """Project configuration read from cmssy.toml."""

    framework: str = "react"
    project_name: str | None = None
    build: BuildSettings = Field(default_factory=BuildSettings)
