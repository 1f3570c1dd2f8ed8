"""An addon project and the build/clean protocol over its crate."""

import time
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from addonbox.compilation.build_settings import BuildSettings
from addonbox.compilation.crate import (
    DEFAULT_NODEFILE,
    DEFAULT_SUBDIRECTORY,
    Crate,
    remove_path,
)
from addonbox.compilation.target import Target
from addonbox.core.logging import get_struct_logger
from addonbox.models.results import BuildResult, CleanResult
from addonbox.protocols.toolchain_protocol import Toolchain, ToolchainAdapterProtocol


logger = get_struct_logger(__name__)

LogCallback = Callable[[str], None]


def _log_to_logger(message: str) -> None:
    logger.info(message)


class Project:
    """A Node.js package with a native crate.

    Args:
        root: Package root directory
        crate: Crate subdirectory relative to ``root``
        nodefile: Addon file name relative to the crate root
        adapter: Toolchain adapter (defaults to the subprocess cargo adapter)
        environ: Environment to fingerprint and resolve targets from
    """

    def __init__(
        self,
        root: Path,
        crate: str = DEFAULT_SUBDIRECTORY,
        nodefile: str = DEFAULT_NODEFILE,
        adapter: ToolchainAdapterProtocol | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        if adapter is None:
            from addonbox.adapters.cargo_adapter import create_cargo_adapter

            adapter = create_cargo_adapter()

        self.root = Path(root)
        self.adapter = adapter
        self.environ = environ
        self.crate = Crate(
            self.root, subdirectory=crate, nodefile=nodefile, environ=environ
        )

    def target(self, release: bool = True, arch: str | None = None) -> Target:
        return Target(self.crate, release=release, arch=arch, environ=self.environ)

    def build(
        self,
        toolchain: Toolchain = None,
        release: bool = True,
        extra_args: Sequence[str] = (),
        arch: str | None = None,
        log: LogCallback | None = None,
    ) -> BuildResult:
        """Build the crate and install the library as the addon file.

        Progress messages go to ``log`` and are kept on the result.

        Raises:
            ToolchainNotFoundError: If rustc or cargo is not installed
            ToolchainError: If the toolchain version cannot be determined
            BuildFailedError: If cargo fails; the addon file is left alone
            UnsupportedPlatformError, UnsupportedArchitectureError: For unknown targets
            InvalidTargetError: If the target triple cannot name a target directory
            OSError: If the library cannot be copied to the addon path
        """
        log = log or _log_to_logger
        started = time.monotonic()

        settings = BuildSettings.current(toolchain, self.adapter, self.environ)
        target = self.target(release=release, arch=arch)
        result = BuildResult(
            success=True,
            target=target.subdirectory,
            dylib_path=target.dylib,
            addon_path=self.crate.addon,
        )

        def step(message: str) -> None:
            log(message)
            result.add_message(message)

        # 1. Force a rebuild if build settings have changed.
        if not target.in_state(settings):
            logger.debug(
                "target_stale",
                target=target.subdirectory,
                reasons=target.stale_reasons(settings),
            )
            step("forcing rebuild for new build settings")
            target.clean()
            result.forced_clean = True

        # 2. Build the library.
        step("running cargo")
        target.build(toolchain, settings, self.adapter, extra_args)

        # 3. Copy the library as the main addon file.
        step(f"generating {self.crate.addon_display_path}")
        self.crate.finish(target.dylib)

        result.duration_seconds = time.monotonic() - started
        return result

    def clean(self, log: LogCallback | None = None) -> CleanResult:
        """Remove every build output, the addon file and the ledger records."""
        log = log or _log_to_logger
        result = CleanResult(success=True)

        def step(message: str) -> None:
            log(message)
            result.add_message(message)

        # 1. Delete the whole target directory.
        step(f"remove {self.crate.target_directory}")
        if remove_path(self.crate.target_directory):
            result.removed_paths.append(self.crate.target_directory)

        # 2. Remove the main addon file.
        step(f"remove {self.crate.addon_display_path}")
        if self.crate.remove_addon():
            result.removed_paths.append(self.crate.addon)

        # 3. Clear the artifacts file.
        with self.crate.transaction() as artifacts:
            artifacts.reset()

        return result
