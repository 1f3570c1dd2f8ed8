"""User configuration models."""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class UserConfigData(BaseSettings):
    """User configuration data model with automatic environment variable support.

    Precedence order (highest to lowest):
    1. Environment variables (``ADDONBOX_*``)
    2. Constructor arguments (file data)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="ADDONBOX_",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override values read from config files."""
        return (env_settings, init_settings)

    log_level: str = "WARNING"

    crate_subdirectory: str = Field(
        default="native",
        description="Location of the cargo crate relative to the package root",
    )
    nodefile: str = Field(
        default="index.node",
        description="Addon file name relative to the crate root",
    )
    toolchain: str | None = Field(
        default=None,
        description="rustup toolchain used when none is given on the command line",
    )

    cargo: str = Field(default="cargo", description="cargo executable")
    rustc: str = Field(default="rustc", description="rustc executable")
    host_runtime: str = Field(
        default="node", description="Executable reporting the host runtime version"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("crate_subdirectory", "nodefile")
    @classmethod
    def validate_relative_path(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("path must not be empty")
        return v.strip()

    @field_validator("toolchain", mode="before")
    @classmethod
    def normalize_toolchain(cls, v: Any) -> Any:
        # Accept the rustup "+nightly" spelling
        if isinstance(v, str):
            v = v.strip().lstrip("+")
            return v or None
        return v
