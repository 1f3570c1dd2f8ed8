"""User configuration."""

from addonbox.config.models import UserConfigData
from addonbox.config.user_config import UserConfig, create_user_config


__all__ = ["UserConfig", "UserConfigData", "create_user_config"]
