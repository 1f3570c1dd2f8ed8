"""Tests for CargoAdapter implementation."""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from addonbox.adapters.cargo_adapter import (
    CargoAdapter,
    create_cargo_adapter,
    toolchain_prefix,
)
from addonbox.core.errors import ToolchainError, ToolchainNotFoundError
from addonbox.protocols.toolchain_protocol import ToolchainAdapterProtocol


class TestToolchainPrefix:
    def test_named_toolchain(self):
        assert toolchain_prefix("nightly") == ["+nightly"]

    def test_no_toolchain(self):
        assert toolchain_prefix(None) == []
        assert toolchain_prefix("") == []


class TestRustcVersion:
    """Test CargoAdapter.rustc_version."""

    def test_success(self):
        """Test the first line of rustc output is returned."""
        adapter = CargoAdapter()
        mock_result = Mock()
        mock_result.stdout = "rustc 1.78.0 (9b00956e5 2024-04-29)\nbinary: rustc\n"

        with patch("subprocess.run", return_value=mock_result) as mock_run:
            version = adapter.rustc_version()

        assert version == "rustc 1.78.0 (9b00956e5 2024-04-29)"
        mock_run.assert_called_once_with(
            ["rustc", "--version"], check=True, capture_output=True, text=True
        )

    def test_with_toolchain(self):
        adapter = CargoAdapter()
        mock_result = Mock()
        mock_result.stdout = "rustc 1.80.0-nightly (ada5e2c7b 2024-05-31)\n"

        with patch("subprocess.run", return_value=mock_result) as mock_run:
            adapter.rustc_version("nightly")

        assert mock_run.call_args[0][0] == ["rustc", "+nightly", "--version"]

    def test_not_installed(self):
        adapter = CargoAdapter()

        with (
            patch("subprocess.run", side_effect=FileNotFoundError("rustc")),
            pytest.raises(ToolchainNotFoundError) as exc_info,
        ):
            adapter.rustc_version()

        assert "rustup.rs" in exc_info.value.message

    def test_unknown_toolchain(self):
        """Test rustup failures become ToolchainError with stderr."""
        adapter = CargoAdapter()
        error = subprocess.CalledProcessError(
            1, "rustc", stderr="error: toolchain 'foo' is not installed\n"
        )

        with (
            patch("subprocess.run", side_effect=error),
            pytest.raises(ToolchainError) as exc_info,
        ):
            adapter.rustc_version("foo")

        assert not isinstance(exc_info.value, ToolchainNotFoundError)
        assert "toolchain 'foo' is not installed" in exc_info.value.message
        assert exc_info.value.context["return_code"] == 1

    def test_empty_output(self):
        adapter = CargoAdapter()
        mock_result = Mock()
        mock_result.stdout = ""

        with (
            patch("subprocess.run", return_value=mock_result),
            pytest.raises(ToolchainError),
        ):
            adapter.rustc_version()

    def test_custom_executable(self):
        adapter = CargoAdapter(rustc="/opt/rust/bin/rustc")
        mock_result = Mock()
        mock_result.stdout = "rustc 1.78.0\n"

        with patch("subprocess.run", return_value=mock_result) as mock_run:
            adapter.rustc_version()

        assert mock_run.call_args[0][0][0] == "/opt/rust/bin/rustc"


class TestHostRuntimeVersion:
    """Test CargoAdapter.host_runtime_version."""

    def test_success(self):
        adapter = CargoAdapter()
        mock_result = Mock()
        mock_result.stdout = "v20.11.1\n"

        with patch("subprocess.run", return_value=mock_result) as mock_run:
            assert adapter.host_runtime_version() == "v20.11.1"

        mock_run.assert_called_once_with(
            ["node", "--version"], check=True, capture_output=True, text=True
        )

    def test_node_not_installed(self):
        adapter = CargoAdapter()

        with patch("subprocess.run", side_effect=FileNotFoundError("node")):
            assert adapter.host_runtime_version() is None

    def test_node_fails(self):
        adapter = CargoAdapter()

        with patch(
            "subprocess.run", side_effect=subprocess.CalledProcessError(1, "node")
        ):
            assert adapter.host_runtime_version() is None


class TestCargo:
    """Test CargoAdapter.cargo."""

    def test_returns_exit_code(self, tmp_path):
        adapter = CargoAdapter()
        completed = subprocess.CompletedProcess(args=[], returncode=101)

        with patch("subprocess.run", return_value=completed) as mock_run:
            code = adapter.cargo(["build", "--release"], "nightly", cwd=tmp_path)

        assert code == 101
        mock_run.assert_called_once_with(
            ["cargo", "+nightly", "build", "--release"], cwd=tmp_path, check=False
        )

    def test_without_toolchain(self):
        adapter = CargoAdapter()
        completed = subprocess.CompletedProcess(args=[], returncode=0)

        with patch("subprocess.run", return_value=completed) as mock_run:
            assert adapter.cargo(["build"]) == 0

        assert mock_run.call_args[0][0] == ["cargo", "build"]

    def test_not_installed(self):
        adapter = CargoAdapter()

        with (
            patch("subprocess.run", side_effect=FileNotFoundError("cargo")),
            pytest.raises(ToolchainNotFoundError),
        ):
            adapter.cargo(["build"], cwd=Path("."))


def test_create_cargo_adapter():
    """Test factory function creates a protocol-conforming adapter."""
    adapter = create_cargo_adapter(cargo="cross")

    assert isinstance(adapter, CargoAdapter)
    assert isinstance(adapter, ToolchainAdapterProtocol)
    assert adapter.cargo_executable == "cross"
