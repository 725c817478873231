"""Cmssy registry client (GraphQL over HTTP)."""

from __future__ import annotations

import json
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cmssy_cli.client.auth import resolve_auth
from cmssy_cli.client.errors import RegistryConnectionError, RegistryError
from cmssy_cli.config.constants import DEFAULT_MAX_RETRIES
from cmssy_cli.config.models import ApiSettings
from cmssy_cli.models.field_types import FieldTypeInfo, FieldTypeVocabulary

PUBLISH_PACKAGE_MUTATION = """
  mutation PublishPackage($token: String!, $input: PublishPackageInput!) {
    publishPackage(token: $token, input: $input) {
      success
      message
      packageId
      status
    }
  }
"""

FIELD_TYPES_QUERY = """
  query FieldTypes {
    fieldTypes {
      type
      label
      category
      description
    }
  }
"""


class PublishResult(BaseModel):
    """Outcome of a publishPackage mutation."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str | None = None
    package_id: str | None = Field(default=None, alias="packageId")
    status: str | None = None


class RegistryClient:
    """Synchronous GraphQL client for the Cmssy registry."""

    def __init__(self, settings: ApiSettings) -> None:
        self.settings = settings
        transport = httpx.HTTPTransport(retries=DEFAULT_MAX_RETRIES)
        self._client = httpx.Client(
            auth=resolve_auth(settings),
            timeout=settings.timeout,
            transport=transport,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> RegistryClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _handle_response(self, response: httpx.Response) -> dict[str, Any]:
        status = response.status_code
        if status in (401, 403):
            raise RegistryError(
                "Authentication failed. Check your API token "
                "(cmssy config set api_token ...).",
                status_code=status,
            )
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise RegistryError(
                f"Registry returned {status}: {response.text}", status_code=status,
            ) from None
        if not isinstance(body, dict):
            raise RegistryError(
                f"Unexpected registry response: {response.text}", status_code=status,
            )
        if body.get("errors"):
            messages = "; ".join(
                str(err.get("message", err)) for err in body["errors"]
            )
            raise RegistryError(messages, status_code=status)
        if not response.is_success:
            raise RegistryError(
                f"Registry returned {status}: {response.text}", status_code=status,
            )
        data: dict[str, Any] = body.get("data") or {}
        return data

    def execute(
        self, query: str, variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Run a GraphQL operation and return its ``data`` object."""
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables
        try:
            response = self._client.post(self.settings.url, json=payload)
        except httpx.ConnectError as exc:
            raise RegistryConnectionError(
                f"Cannot connect to registry at {self.settings.url}: {exc}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise RegistryConnectionError(
                f"Request to {self.settings.url} timed out: {exc}"
            ) from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise RegistryConnectionError(
                f"Invalid registry URL {self.settings.url}: {exc}"
            ) from exc
        return self._handle_response(response)

    def publish(self, token: str, package_input: dict[str, Any]) -> PublishResult:
        data = self.execute(
            PUBLISH_PACKAGE_MUTATION, {"token": token, "input": package_input},
        )
        result = data.get("publishPackage")
        if result is None:
            raise RegistryError("Registry returned no publishPackage result")
        try:
            return PublishResult.model_validate(result)
        except ValidationError as exc:
            raise RegistryError(f"Unexpected publishPackage result: {result!r}") from exc

    def fetch_field_types(self) -> FieldTypeVocabulary:
        data = self.execute(FIELD_TYPES_QUERY)
        items = data.get("fieldTypes") or []
        try:
            types = tuple(FieldTypeInfo.model_validate(item) for item in items)
        except ValidationError as exc:
            raise RegistryError(f"Unexpected fieldTypes entry: {exc}") from exc
        return FieldTypeVocabulary(types=types)
