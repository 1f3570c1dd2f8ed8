"""
User configuration management for addonbox.

This module handles user-specific configuration settings with multiple sources:
1. Environment variables (highest precedence)
2. Command-line provided config file
3. Config file in current directory
4. User's XDG config directory
5. Default values (lowest precedence)
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from addonbox.config.models import UserConfigData
from addonbox.core.errors import ConfigError
from addonbox.core.logging import get_struct_logger


logger = get_struct_logger(__name__)


class UserConfig:
    """Manages user-specific configuration for addonbox using Pydantic Settings."""

    def __init__(
        self,
        cli_config_path: str | Path | None = None,
        cwd: Path | None = None,
    ):
        """
        Initialize the user configuration handler.

        Args:
            cli_config_path: Optional config file path provided via CLI
            cwd: Directory searched for project-local config files
        """
        self._cwd = cwd or Path.cwd()
        self._loaded_path: Path | None = None
        self._config_paths = self._generate_config_paths(cli_config_path)
        self._config = self._load_config(cli_config_path)

    def _generate_config_paths(self, cli_config_path: str | Path | None) -> list[Path]:
        """Generate a list of config paths to search in order of precedence."""
        config_paths = []

        if cli_config_path:
            config_paths.append(Path(cli_config_path).expanduser().resolve())

        config_paths.extend(
            [self._cwd / "addonbox.yaml", self._cwd / ".addonbox.yml"]
        )

        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        config_dir = (
            Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
        )
        config_paths.extend(
            [
                config_dir / "addonbox" / "config.yaml",
                config_dir / "addonbox" / "config.yml",
            ]
        )
        return config_paths

    def _read_config_file(self, path: Path) -> dict[str, Any]:
        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML in {path}: {e}", {"path": str(path)}
            ) from e
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}", {"path": str(path)}) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a mapping", {"path": str(path)}
            )
        return data

    def _load_config(self, cli_config_path: str | Path | None) -> UserConfigData:
        """Load the first existing config file, then apply the environment."""
        if cli_config_path and not self._config_paths[0].exists():
            raise ConfigError(
                f"Config file not found: {self._config_paths[0]}",
                {"path": str(self._config_paths[0])},
            )

        config_data: dict[str, Any] = {}
        for path in self._config_paths:
            if path.is_file():
                config_data = self._read_config_file(path)
                self._loaded_path = path
                logger.debug("config_loaded", path=str(path))
                break
        else:
            logger.debug(
                "config_defaults", searched=[str(p) for p in self._config_paths]
            )

        try:
            config = UserConfigData(**config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

        return config

    @property
    def config(self) -> UserConfigData:
        return self._config

    @property
    def loaded_path(self) -> Path | None:
        return self._loaded_path

    def get_log_level_int(self) -> int:
        return int(getattr(logging, self._config.log_level, logging.WARNING))


def create_user_config(
    cli_config_path: str | Path | None = None,
    cwd: Path | None = None,
) -> UserConfig:
    """Factory function to create a UserConfig instance."""
    return UserConfig(cli_config_path=cli_config_path, cwd=cwd)
