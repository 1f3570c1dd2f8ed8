"""Protocol definition for Rust toolchain operations."""

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, TypeAlias, runtime_checkable


# Name of a rustup toolchain (``stable``, ``nightly``, ``1.78``...); None
# means whatever rustup resolves for the working directory.
Toolchain: TypeAlias = str | None


@runtime_checkable
class ToolchainAdapterProtocol(Protocol):
    """Protocol for the external commands a build needs."""

    def rustc_version(self, toolchain: Toolchain = None) -> str:
        """Return the first line printed by ``rustc --version``.

        Raises:
            ToolchainNotFoundError: If rustc cannot be located
            ToolchainError: If rustc could not be run successfully
        """
        ...

    def host_runtime_version(self) -> str | None:
        """Return the host runtime version (``node --version``) or None."""
        ...

    def cargo(
        self,
        args: Sequence[str],
        toolchain: Toolchain = None,
        cwd: Path | None = None,
    ) -> int:
        """Run cargo with inherited standard streams and return its exit code.

        Raises:
            ToolchainNotFoundError: If cargo cannot be located
        """
        ...
