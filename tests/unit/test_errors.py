"""Tests for error_handler and custom exceptions."""

from __future__ import annotations

import pytest

from cmssy_cli.client.errors import (
    ArchiveError,
    BundlerError,
    CmssyCLIError,
    ConfigurationError,
    FieldTypesUnavailableError,
    RegistryConnectionError,
    RegistryError,
    ResourceNotFoundError,
    SchemaValidationError,
    error_handler,
)


class TestExceptionHierarchy:
    def test_base_error(self):
        exc = CmssyCLIError("test")
        assert str(exc) == "test"
        assert exc.exit_code == 1

    def test_configuration_error(self):
        exc = ConfigurationError("cmssy.toml not found")
        assert isinstance(exc, CmssyCLIError)
        assert exc.exit_code == 2

    def test_not_found_error(self):
        assert ResourceNotFoundError("missing").exit_code == 4

    def test_registry_errors(self):
        exc = RegistryError("boom", status_code=500)
        assert exc.exit_code == 5
        assert exc.status_code == 500
        assert isinstance(RegistryConnectionError("x"), RegistryError)
        assert isinstance(FieldTypesUnavailableError("x"), RegistryError)

    def test_schema_validation_error(self):
        exc = SchemaValidationError("hero", ["a", "b"])
        assert exc.resource == "hero"
        assert exc.errors == ["a", "b"]
        assert str(exc) == "Schema validation failed for hero"

    def test_processing_errors(self):
        assert isinstance(BundlerError("x"), CmssyCLIError)
        assert isinstance(ArchiveError("x"), CmssyCLIError)


class TestErrorHandler:
    def test_catches_cli_error(self):
        @error_handler
        def raises_not_found():
            raise ResourceNotFoundError("Block or template not found: nope")

        with pytest.raises(SystemExit) as exc_info:
            raises_not_found()
        assert exc_info.value.code == 4

    def test_catches_value_error(self):
        @error_handler
        def raises_value():
            raise ValueError("bad value")

        with pytest.raises(SystemExit) as exc_info:
            raises_value()
        assert exc_info.value.code == 1

    def test_passes_through_normal_return(self):
        @error_handler
        def returns_value():
            return 42

        assert returns_value() == 42

    def test_does_not_catch_other_exceptions(self):
        @error_handler
        def raises_type_error():
            raise TypeError("bad type")

        with pytest.raises(TypeError):
            raises_type_error()
