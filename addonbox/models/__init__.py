"""Shared Pydantic models."""

from addonbox.models.base import AddonboxBaseModel
from addonbox.models.results import BaseResult, BuildResult, CleanResult


__all__ = ["AddonboxBaseModel", "BaseResult", "BuildResult", "CleanResult"]
