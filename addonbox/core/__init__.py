"""Core building blocks shared by every addonbox domain: errors and logging."""

from addonbox.core.errors import (
    AddonboxError,
    BuildError,
    BuildFailedError,
    ConfigError,
    FieldError,
    InvalidTargetError,
    ManifestError,
    ManifestInvalidError,
    ManifestMissingError,
    SchemaValidationError,
    ToolchainError,
    ToolchainNotFoundError,
    UnsupportedArchitectureError,
    UnsupportedPlatformError,
)
from addonbox.core.logging import get_struct_logger, setup_logging


__all__ = [
    "AddonboxError",
    "BuildError",
    "BuildFailedError",
    "ConfigError",
    "FieldError",
    "InvalidTargetError",
    "ManifestError",
    "ManifestInvalidError",
    "ManifestMissingError",
    "SchemaValidationError",
    "ToolchainError",
    "ToolchainNotFoundError",
    "UnsupportedArchitectureError",
    "UnsupportedPlatformError",
    "get_struct_logger",
    "setup_logging",
]
