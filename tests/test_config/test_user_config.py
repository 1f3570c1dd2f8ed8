"""Tests for UserConfig file discovery, environment overrides and validation."""

import logging
import os

import pytest

from addonbox.config.models import UserConfigData
from addonbox.config.user_config import UserConfig, create_user_config
from addonbox.core.errors import ConfigError


@pytest.fixture
def clean_environment(tmp_path, monkeypatch):
    """No ADDONBOX_* variables and an empty XDG config home."""
    for key in list(os.environ):
        if key.upper().startswith("ADDONBOX_"):
            monkeypatch.delenv(key, raising=False)
    config_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def workdir(tmp_path):
    path = tmp_path / "work"
    path.mkdir()
    return path


class TestUserConfigData:
    """Tests for the UserConfigData model."""

    def test_defaults(self, clean_environment):
        config = UserConfigData()

        assert config.log_level == "WARNING"
        assert config.crate_subdirectory == "native"
        assert config.nodefile == "index.node"
        assert config.toolchain is None
        assert config.cargo == "cargo"
        assert config.rustc == "rustc"
        assert config.host_runtime == "node"

    def test_log_level_is_normalized(self, clean_environment):
        assert UserConfigData(log_level=" debug ").log_level == "DEBUG"

    def test_invalid_log_level(self, clean_environment):
        with pytest.raises(ValueError):
            UserConfigData(log_level="chatty")

    def test_toolchain_plus_prefix(self, clean_environment):
        assert UserConfigData(toolchain="+nightly").toolchain == "nightly"
        assert UserConfigData(toolchain="+").toolchain is None

    def test_empty_crate_subdirectory(self, clean_environment):
        with pytest.raises(ValueError):
            UserConfigData(crate_subdirectory="  ")

    def test_environment_beats_constructor(self, clean_environment, monkeypatch):
        monkeypatch.setenv("ADDONBOX_NODEFILE", "addon.node")

        assert UserConfigData(nodefile="from-file.node").nodefile == "addon.node"


class TestUserConfig:
    """Tests for UserConfig loading."""

    def test_no_config_files(self, clean_environment, workdir):
        config = UserConfig(cwd=workdir)

        assert config.loaded_path is None
        assert config.config.crate_subdirectory == "native"
        assert config.get_log_level_int() == logging.WARNING

    def test_project_config_file(self, clean_environment, workdir):
        path = workdir / "addonbox.yaml"
        path.write_text("crate_subdirectory: rust\nlog_level: info\n")

        config = UserConfig(cwd=workdir)

        assert config.loaded_path == path
        assert config.config.crate_subdirectory == "rust"
        assert config.get_log_level_int() == logging.INFO

    def test_project_file_beats_xdg_file(self, clean_environment, workdir):
        xdg_file = clean_environment / "addonbox" / "config.yaml"
        xdg_file.parent.mkdir(parents=True)
        xdg_file.write_text("nodefile: xdg.node\n")
        (workdir / ".addonbox.yml").write_text("nodefile: local.node\n")

        config = UserConfig(cwd=workdir)

        assert config.config.nodefile == "local.node"

    def test_xdg_config_file(self, clean_environment, workdir):
        xdg_file = clean_environment / "addonbox" / "config.yml"
        xdg_file.parent.mkdir(parents=True)
        xdg_file.write_text("toolchain: +stable\n")

        config = UserConfig(cwd=workdir)

        assert config.loaded_path == xdg_file
        assert config.config.toolchain == "stable"

    def test_cli_config_path(self, clean_environment, workdir, tmp_path):
        (workdir / "addonbox.yaml").write_text("cargo: local-cargo\n")
        explicit = tmp_path / "custom.yaml"
        explicit.write_text("cargo: cross\n")

        config = create_user_config(cli_config_path=explicit, cwd=workdir)

        assert config.config.cargo == "cross"

    def test_missing_cli_config_path(self, clean_environment, workdir, tmp_path):
        with pytest.raises(ConfigError):
            UserConfig(cli_config_path=tmp_path / "nope.yaml", cwd=workdir)

    def test_environment_override(self, clean_environment, workdir, monkeypatch):
        (workdir / "addonbox.yaml").write_text("host_runtime: node18\n")
        monkeypatch.setenv("ADDONBOX_HOST_RUNTIME", "nodejs")

        config = UserConfig(cwd=workdir)

        assert config.config.host_runtime == "nodejs"

    def test_empty_file(self, clean_environment, workdir):
        (workdir / "addonbox.yaml").write_text("")

        config = UserConfig(cwd=workdir)

        assert config.config.nodefile == "index.node"

    def test_invalid_yaml(self, clean_environment, workdir):
        (workdir / "addonbox.yaml").write_text("crate_subdirectory: [unclosed\n")

        with pytest.raises(ConfigError):
            UserConfig(cwd=workdir)

    def test_non_mapping_file(self, clean_environment, workdir):
        (workdir / "addonbox.yaml").write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            UserConfig(cwd=workdir)

    def test_invalid_values(self, clean_environment, workdir):
        (workdir / "addonbox.yaml").write_text("log_level: loud\n")

        with pytest.raises(ConfigError):
            UserConfig(cwd=workdir)
