"""Tests for the addonbox error hierarchy."""

import pytest

from addonbox.core.errors import (
    AddonboxError,
    BuildError,
    BuildFailedError,
    FieldError,
    ManifestError,
    ManifestMissingError,
    SchemaValidationError,
    ToolchainError,
    ToolchainNotFoundError,
    UnsupportedArchitectureError,
)


class TestAddonboxError:
    def test_message_and_context(self):
        error = AddonboxError("something broke", {"path": "/tmp/x"})

        assert str(error) == "something broke"
        assert error.message == "something broke"
        assert error.context == {"path": "/tmp/x"}

    def test_default_context(self):
        assert AddonboxError("x").context == {}

    @pytest.mark.parametrize(
        "error_class, base",
        [
            (ToolchainNotFoundError, ToolchainError),
            (BuildFailedError, BuildError),
            (UnsupportedArchitectureError, BuildError),
            (ManifestMissingError, ManifestError),
            (SchemaValidationError, AddonboxError),
        ],
    )
    def test_hierarchy(self, error_class, base):
        assert issubclass(error_class, base)
        assert issubclass(error_class, AddonboxError)


class TestBuildFailedError:
    def test_return_code(self):
        error = BuildFailedError("cargo failed", 101, {"target": "release"})

        assert error.return_code == 101
        assert error.context["target"] == "release"


class TestSchemaValidationError:
    def test_lists_every_field_error(self):
        errors = [
            FieldError("missing", "targets", "field required"),
            FieldError("type", "active", "expected a string or null"),
        ]

        error = SchemaValidationError("artifacts ledger", errors)

        assert error.errors == tuple(errors)
        assert str(error) == (
            "Invalid artifacts ledger: targets: field required; "
            "active: expected a string or null"
        )

    def test_root_location(self):
        assert str(FieldError("type", "", "expected an object")) == (
            "<root>: expected an object"
        )
