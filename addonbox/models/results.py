"""Result models returned by the build and clean entry points."""

from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import Field

from addonbox.models.base import AddonboxBaseModel


class BaseResult(AddonboxBaseModel):
    """Base class for all operation results."""

    success: bool
    timestamp: datetime = Field(default_factory=datetime.now)
    messages: list[str] = Field(default_factory=list)

    def add_message(self, message: str) -> None:
        """Add an informational message."""
        self.messages.append(message)

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of the result."""
        return {
            "success": self.success,
            "timestamp": self.timestamp.isoformat(),
            "message_count": len(self.messages),
        }


class BuildResult(BaseResult):
    """Outcome of ``Project.build``."""

    target: str
    dylib_path: Path | None = None
    addon_path: Path | None = None
    forced_clean: bool = False
    duration_seconds: float = 0.0

    def get_summary(self) -> dict[str, Any]:
        summary = super().get_summary()
        summary.update(
            target=self.target,
            addon_path=str(self.addon_path) if self.addon_path else None,
            forced_clean=self.forced_clean,
            duration_seconds=round(self.duration_seconds, 3),
        )
        return summary


class CleanResult(BaseResult):
    """Outcome of ``Project.clean``."""

    removed_paths: list[Path] = Field(default_factory=list)


__all__ = ["BaseResult", "BuildResult", "CleanResult"]
