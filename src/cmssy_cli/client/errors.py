"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from rich.console import Console

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class CmssyCLIError(Exception):
    """Base exception for cmssy-cli."""

    exit_code: int = 1


class ConfigurationError(CmssyCLIError):
    """Project or user configuration is missing or invalid."""

    exit_code = 2


class ResourceNotFoundError(CmssyCLIError):
    """A block or template named on the command line does not exist."""

    exit_code = 4


class RegistryError(CmssyCLIError):
    """The Cmssy registry API returned an error."""

    exit_code = 5

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RegistryConnectionError(RegistryError):
    """Cannot reach the Cmssy registry API."""


class FieldTypesUnavailableError(RegistryError):
    """The field-type vocabulary could not be fetched."""


# Discovery errors. Raised only in strict scans.


class MigrationRequiredError(CmssyCLIError):
    """A resource still carries legacy ``cmssy`` metadata in package.json."""


class SchemaValidationError(CmssyCLIError):
    """A resource schema failed validation."""

    def __init__(self, resource: str, errors: list[str]) -> None:
        self.resource = resource
        self.errors = list(errors)
        super().__init__(f"Schema validation failed for {resource}")


class ManifestError(CmssyCLIError):
    """package.json is missing or lacks name/version."""


class ConfigLoadError(CmssyCLIError):
    """block_config.py exists but cannot be read as a declaration."""


# Per-resource processing errors. Caught and tallied by commands.


class BundlerError(CmssyCLIError):
    """The bundler failed to produce output for an entry point."""


class ArchiveError(CmssyCLIError):
    """An archive could not be written."""


class MigrationError(CmssyCLIError):
    """A legacy resource could not be migrated."""


def error_handler(func: F) -> F:
    """Decorator that catches CmssyCLIError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except CmssyCLIError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
