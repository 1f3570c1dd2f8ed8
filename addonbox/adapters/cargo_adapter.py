"""Adapter for the Rust toolchain (rustc, cargo) and the host Node.js runtime."""

import logging
import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path

from addonbox.core.errors import ToolchainError, ToolchainNotFoundError
from addonbox.protocols.toolchain_protocol import Toolchain, ToolchainAdapterProtocol


logger = logging.getLogger(__name__)

RUST_INSTALL_HINT = (
    "Rust is not installed or rustc is not in your PATH. "
    "Install it from https://rustup.rs and open a new shell."
)


def toolchain_prefix(toolchain: Toolchain) -> list[str]:
    """Return the rustup ``+toolchain`` argument, if a toolchain is named."""
    return [f"+{toolchain}"] if toolchain else []


class CargoAdapter:
    """Implementation of the toolchain adapter using subprocesses."""

    def __init__(
        self,
        cargo: str = "cargo",
        rustc: str = "rustc",
        host_runtime: str = "node",
    ) -> None:
        self.cargo_executable = cargo
        self.rustc_executable = rustc
        self.host_runtime_executable = host_runtime

    def rustc_version(self, toolchain: Toolchain = None) -> str:
        """Return the first line printed by ``rustc --version``."""
        cmd = [self.rustc_executable, *toolchain_prefix(toolchain), "--version"]
        cmd_str = shlex.join(cmd)

        try:
            result = subprocess.run(cmd, check=True, capture_output=True, text=True)
        except FileNotFoundError as e:
            logger.error("rustc executable not found: %s", e)
            raise ToolchainNotFoundError(
                RUST_INSTALL_HINT, {"command": cmd_str}
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip() or "unknown error"
            logger.error("rustc command failed: %s - error: %s", cmd_str, stderr)
            raise ToolchainError(
                f"'{cmd_str}' exited with status {e.returncode}: {stderr}",
                {"command": cmd_str, "return_code": e.returncode},
            ) from e
        except OSError as e:
            raise ToolchainError(
                f"Failed to run '{cmd_str}': {e}", {"command": cmd_str}
            ) from e

        lines = result.stdout.strip().splitlines()
        if not lines:
            raise ToolchainError(
                f"'{cmd_str}' printed no version", {"command": cmd_str}
            )
        logger.debug("rustc version: %s", lines[0])
        return lines[0].strip()

    def host_runtime_version(self) -> str | None:
        """Return ``node --version`` output, or None when Node.js is unavailable."""
        cmd = [self.host_runtime_executable, "--version"]

        try:
            result = subprocess.run(cmd, check=True, capture_output=True, text=True)
        except FileNotFoundError:
            logger.warning(
                "Host runtime '%s' not found in PATH", self.host_runtime_executable
            )
            return None
        except (subprocess.CalledProcessError, OSError) as e:
            logger.warning("Host runtime version query failed: %s", e)
            return None

        version = result.stdout.strip()
        return version or None

    def cargo(
        self,
        args: Sequence[str],
        toolchain: Toolchain = None,
        cwd: Path | None = None,
    ) -> int:
        """Run cargo with inherited stdio so diagnostics stream live."""
        cmd = [self.cargo_executable, *toolchain_prefix(toolchain), *args]
        cmd_str = shlex.join(cmd)
        logger.debug("cargo command: %s (cwd=%s)", cmd_str, cwd)

        try:
            completed = subprocess.run(cmd, cwd=cwd, check=False)
        except FileNotFoundError as e:
            logger.error("cargo executable not found: %s", e)
            raise ToolchainNotFoundError(
                RUST_INSTALL_HINT, {"command": cmd_str}
            ) from e

        return completed.returncode


def create_cargo_adapter(
    cargo: str = "cargo",
    rustc: str = "rustc",
    host_runtime: str = "node",
) -> ToolchainAdapterProtocol:
    """Factory function to create a CargoAdapter instance."""
    logger.debug("Creating CargoAdapter")
    return CargoAdapter(cargo=cargo, rustc=rustc, host_runtime=host_runtime)
