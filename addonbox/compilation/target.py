"""Build artifacts of a single (triple, profile) target of a crate."""

import os
from collections.abc import Mapping, Sequence
from pathlib import Path

from addonbox.compilation.artifacts import is_target_key
from addonbox.compilation.build_settings import BuildSettings
from addonbox.compilation.crate import Crate, remove_path
from addonbox.compilation.platforms import (
    host_arch,
    host_platform,
    library_filename,
    resolve_triple,
    target_directory_name,
)
from addonbox.core.errors import BuildFailedError, InvalidTargetError
from addonbox.core.logging import get_struct_logger
from addonbox.protocols.toolchain_protocol import Toolchain, ToolchainAdapterProtocol


logger = get_struct_logger(__name__)


class Target:
    """The cargo output directory and library for one build target.

    Args:
        crate: Crate being built
        release: Release profile if True, debug otherwise
        arch: Node.js architecture name (defaults to ``npm_config_arch`` or the host)
        platform: Node.js platform name (defaults to the host)
        environ: Environment for ``npm_config_arch`` and ``CARGO_BUILD_TARGET``
    """

    def __init__(
        self,
        crate: Crate,
        release: bool = True,
        arch: str | None = None,
        platform: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        environ = os.environ if environ is None else environ
        native_arch = host_arch()

        self.crate = crate
        self.release = release
        self.platform = platform or host_platform()
        self.arch = arch or environ.get("npm_config_arch") or native_arch
        self.triple = resolve_triple(
            self.platform,
            self.arch,
            native_arch,
            override=environ.get("CARGO_BUILD_TARGET"),
        )

        directory = target_directory_name(self.triple)
        self.subdirectory = f"{directory}/{self.profile}" if directory else self.profile
        if not is_target_key(self.subdirectory):
            raise InvalidTargetError(
                f"Target '{self.triple}' does not name a usable target directory",
                {"triple": self.triple},
            )
        self.root = crate.target_directory / Path(self.subdirectory)
        self.dylib = self.root / library_filename(self.platform, crate.name)

    @property
    def profile(self) -> str:
        return "release" if self.release else "debug"

    def in_state(self, settings: BuildSettings) -> bool:
        """Whether the recorded build of this target matches ``settings``."""
        saved = self.crate.artifacts.lookup(self.subdirectory)
        return saved is not None and saved.match(settings)

    def stale_reasons(self, settings: BuildSettings) -> list[str]:
        saved = self.crate.artifacts.lookup(self.subdirectory)
        if saved is None:
            return ["no previous build"]
        return saved.differences(settings)

    def clean(self) -> None:
        """Delete this target's output, its ledger record and, if active, the addon."""
        if remove_path(self.root):
            logger.debug("target_directory_removed", path=str(self.root))

        with self.crate.transaction() as artifacts:
            if artifacts.have_activated(self.subdirectory):
                self.crate.remove_addon()
            artifacts.delete(self.subdirectory)

    def cargo_args(self, extra_args: Sequence[str] = ()) -> list[str]:
        args = ["build"]
        if self.release:
            args.append("--release")
        if self.triple:
            args.append(f"--target={self.triple}")
        args.extend(extra_args)
        return args

    def build(
        self,
        toolchain: Toolchain,
        settings: BuildSettings,
        adapter: ToolchainAdapterProtocol,
        extra_args: Sequence[str] = (),
    ) -> None:
        """Run cargo for this target and record ``settings`` as active.

        The ledger is persisted before this returns, so it reflects the last
        successful compile even if copying the library afterwards fails.

        Raises:
            BuildFailedError: If cargo exits non-zero (the ledger is untouched)
            ToolchainNotFoundError: If cargo is not installed
        """
        args = self.cargo_args(extra_args)
        return_code = adapter.cargo(args, toolchain, cwd=self.crate.root)

        if return_code != 0:
            raise BuildFailedError(
                f"cargo build failed with exit code {return_code}",
                return_code,
                {"target": self.subdirectory, "args": args},
            )

        with self.crate.transaction() as artifacts:
            artifacts.activate(self.subdirectory, settings)
        logger.debug("target_activated", target=self.subdirectory)
