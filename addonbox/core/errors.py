"""Error hierarchy for addonbox.

Every error raised by the build core derives from ``AddonboxError`` so the CLI
can map the whole family to a non-zero exit status in one place.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Literal


class AddonboxError(Exception):
    """Base class for all addonbox errors.

    Args:
        message: Human readable description
        context: Optional extra details rendered by the CLI in verbose mode
    """

    def __init__(self, message: str, context: Mapping[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        return self.message


class ConfigError(AddonboxError):
    """Invalid or unreadable user configuration."""


class ToolchainError(AddonboxError):
    """A toolchain command could not be run or returned unusable output."""


class ToolchainNotFoundError(ToolchainError):
    """The Rust compiler executable could not be located."""


class BuildError(AddonboxError):
    """Base class for errors while preparing or running a build."""


class BuildFailedError(BuildError):
    """cargo exited with a non-zero status."""

    def __init__(
        self,
        message: str,
        return_code: int,
        context: Mapping[str, Any] | None = None,
    ):
        super().__init__(message, context)
        self.return_code = return_code


class UnsupportedPlatformError(BuildError):
    """The host platform has no known dynamic library naming."""


class UnsupportedArchitectureError(BuildError):
    """A cross-compilation architecture has no known target triple."""


class InvalidTargetError(BuildError):
    """A target triple cannot be used as a target subdirectory."""


class ManifestError(AddonboxError):
    """Base class for Cargo.toml problems."""


class ManifestMissingError(ManifestError):
    """The crate has no Cargo.toml."""


class ManifestInvalidError(ManifestError):
    """Cargo.toml cannot be parsed or lacks ``[lib] name``."""


FieldErrorKind = Literal["missing", "type", "value"]


@dataclass(frozen=True)
class FieldError:
    """A single schema violation at ``location`` (dotted path)."""

    kind: FieldErrorKind
    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.location or '<root>'}: {self.message}"


class SchemaValidationError(AddonboxError):
    """Persisted data did not match its schema."""

    def __init__(self, what: str, errors: Iterable[FieldError]):
        self.errors: tuple[FieldError, ...] = tuple(errors)
        details = "; ".join(str(error) for error in self.errors)
        super().__init__(
            f"Invalid {what}: {details}" if details else f"Invalid {what}",
            {"errors": [str(error) for error in self.errors]},
        )


__all__ = [
    "AddonboxError",
    "BuildError",
    "BuildFailedError",
    "ConfigError",
    "FieldError",
    "FieldErrorKind",
    "InvalidTargetError",
    "ManifestError",
    "ManifestInvalidError",
    "ManifestMissingError",
    "SchemaValidationError",
    "ToolchainError",
    "ToolchainNotFoundError",
    "UnsupportedArchitectureError",
    "UnsupportedPlatformError",
]
