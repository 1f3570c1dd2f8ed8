"""Build settings, targets, the artifacts ledger and build orchestration."""

from addonbox.compilation.artifacts import (
    Artifacts,
    LedgerEmpty,
    LedgerLoaded,
    LedgerLoadResult,
    parse_artifacts,
    read_artifacts,
)
from addonbox.compilation.build_settings import (
    ENV_WHITELIST,
    ENV_WHITELIST_VERSION,
    BuildSettings,
)
from addonbox.compilation.crate import Crate
from addonbox.compilation.project import LogCallback, Project
from addonbox.compilation.target import Target


__all__ = [
    "ENV_WHITELIST",
    "ENV_WHITELIST_VERSION",
    "Artifacts",
    "BuildSettings",
    "Crate",
    "LedgerEmpty",
    "LedgerLoadResult",
    "LedgerLoaded",
    "LogCallback",
    "Project",
    "Target",
    "parse_artifacts",
    "read_artifacts",
]
