"""Core test fixtures for the addonbox project."""

import os
from collections.abc import Callable, Generator, Sequence
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from addonbox.compilation.build_settings import BuildSettings
from addonbox.compilation.crate import load_lib_name
from addonbox.compilation.platforms import (
    host_platform,
    library_filename,
    target_directory_name,
)


RUSTC_STABLE = "rustc 1.78.0 (9b00956e5 2024-04-29)"
RUSTC_NIGHTLY = "rustc 1.80.0-nightly (ada5e2c7b 2024-05-31)"
NODE_VERSION = "v20.11.1"

CARGO_TOML = """\
[package]
name = "my-addon"
version = "0.1.0"
edition = "2021"

[lib]
name = "my_addon"
crate-type = ["cdylib"]
"""


class FakeToolchain:
    """Stand-in for rustc/node/cargo.

    ``cargo build`` writes a fake library where cargo would put it, unless
    ``exit_code`` is non-zero. ``before_cargo`` runs before each cargo call so
    tests can inspect the file system at that moment.
    """

    def __init__(
        self,
        rustc: str = RUSTC_STABLE,
        node_version: str | None = NODE_VERSION,
        exit_code: int = 0,
    ) -> None:
        self.rustc = rustc
        self.node_version = node_version
        self.exit_code = exit_code
        self.calls: list[tuple[list[str], str | None, Path | None]] = []
        self.rustc_calls: list[str | None] = []
        self.before_cargo: Callable[[list[str]], None] | None = None

    def rustc_version(self, toolchain: str | None = None) -> str:
        self.rustc_calls.append(toolchain)
        return self.rustc

    def host_runtime_version(self) -> str | None:
        return self.node_version

    def cargo(
        self,
        args: Sequence[str],
        toolchain: str | None = None,
        cwd: Path | None = None,
    ) -> int:
        args = list(args)
        if self.before_cargo is not None:
            self.before_cargo(args)
        self.calls.append((args, toolchain, cwd))

        if self.exit_code == 0 and cwd is not None and args[:1] == ["build"]:
            self._write_library(args, cwd)
        return self.exit_code

    def _write_library(self, args: list[str], cwd: Path) -> None:
        profile = "release" if "--release" in args else "debug"
        triple = next(
            (a.split("=", 1)[1] for a in args if a.startswith("--target=")), ""
        )
        out_dir = cwd / "target" / target_directory_name(triple) / profile
        out_dir.mkdir(parents=True, exist_ok=True)
        name = load_lib_name(cwd / "Cargo.toml")
        library = out_dir / library_filename(host_platform(), name)
        library.write_bytes(f"{profile}:{self.rustc}:{len(self.calls)}".encode())


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_toolchain() -> FakeToolchain:
    return FakeToolchain()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A package root with a ``native/Cargo.toml`` declaring ``my_addon``."""
    crate_dir = tmp_path / "native"
    crate_dir.mkdir()
    (crate_dir / "Cargo.toml").write_text(CARGO_TOML)
    return tmp_path


@pytest.fixture
def empty_environ() -> dict[str, str]:
    """Environment mapping with none of the fingerprinted variables set."""
    return {}


@pytest.fixture
def make_settings() -> Callable[..., BuildSettings]:
    """Factory for BuildSettings with a full whitelist of unset variables."""

    def _make(
        rustc: str = RUSTC_STABLE,
        node_version: str | None = NODE_VERSION,
        **env: str | None,
    ) -> BuildSettings:
        return BuildSettings.current(
            adapter=FakeToolchain(rustc=rustc, node_version=node_version),
            environ={k: v for k, v in env.items() if v is not None},
        )

    return _make


@pytest.fixture
def isolated_cli_environment(
    project_root: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[dict[str, Any], None, None]:
    """Run CLI tests from ``project_root`` with no user config or env leakage."""
    original_cwd = Path.cwd()
    os.chdir(project_root)

    for key in list(os.environ):
        if key.upper().startswith("ADDONBOX_") or key.startswith("npm_config_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("CARGO_BUILD_TARGET", raising=False)
    monkeypatch.delenv("CARGO_TARGET_DIR", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(project_root / ".config"))
    monkeypatch.setenv("HOME", str(project_root))

    try:
        yield {"root": project_root, "crate": project_root / "native"}
    finally:
        os.chdir(original_cwd)


@pytest.fixture
def toolchain_factory() -> type[FakeToolchain]:
    """The FakeToolchain class, for tests needing custom versions or exit codes."""
    return FakeToolchain
