"""Authentication for the Cmssy registry API."""

from __future__ import annotations

from collections.abc import Generator

import httpx

from cmssy_cli.config.models import ApiSettings


class BearerTokenAuth(httpx.Auth):
    """Authenticate using a Cmssy API token (Authorization: Bearer header)."""

    def __init__(self, token: str) -> None:
        self.token = token

    def auth_flow(
        self, request: httpx.Request,
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.token}"
        yield request


def resolve_auth(settings: ApiSettings) -> httpx.Auth | None:
    """Resolve authentication from API settings."""
    if settings.token:
        return BearerTokenAuth(settings.token)
    return None
