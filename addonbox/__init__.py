"""addonbox - build and activate native Node.js addons compiled with cargo."""

from importlib.metadata import distribution

from .compilation import Artifacts, BuildSettings, Crate, Project, Target
from .models.results import BuildResult, CleanResult


__version__ = distribution(__package__ or "addonbox").version

__all__ = [
    "Artifacts",
    "BuildResult",
    "BuildSettings",
    "CleanResult",
    "Crate",
    "Project",
    "Target",
    "__version__",
]
