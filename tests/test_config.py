"""Tests for sumi.config -- XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from sumi.config import (
    atomic_write,
    get_config_dir,
    get_data_dir,
    load_global_config,
    load_project_config,
    resolve_generator_config,
    save_global_config,
)
from sumi.exceptions import ConfigError
from sumi.models import GeneratorConfig, GlobalConfig, OutputConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write *data* as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sumi.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "sumi"
        assert result.is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sumi.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "custom"))

        assert get_config_dir() == tmp_path / "custom" / "sumi"

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sumi.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_data_dir() == tmp_path / ".local" / "share" / "sumi"

    def test_non_xdg_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sumi.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".sumi"
        assert get_data_dir() == tmp_path / ".sumi" / "logs"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "out" / "lib.rs"
        atomic_write(target, "mod m {}\n")
        assert target.read_text(encoding="utf-8") == "mod m {}\n"

    def test_replaces_existing(self, tmp_path: Path) -> None:
        target = tmp_path / "lib.rs"
        target.write_text("old", encoding="utf-8")
        atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "new"

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        atomic_write(tmp_path / "lib.rs", "x")
        assert [p.name for p in tmp_path.iterdir()] == ["lib.rs"]

    def test_failure_keeps_original_and_cleans_up(self, tmp_path: Path) -> None:
        target = tmp_path / "lib.rs"
        target.write_text("original", encoding="utf-8")
        with patch("sumi.config.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "original"
        assert [p.name for p in tmp_path.iterdir()] == ["lib.rs"]


# ---------------------------------------------------------------------------
# Global config
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_defaults_when_missing(self, isolated_config: Path) -> None:
        config = load_global_config()
        assert config == GlobalConfig()
        assert config.generator.evm_id == "0x0F"
        assert config.generator.module_name is None

    def test_round_trip(self, isolated_config: Path) -> None:
        config = GlobalConfig(
            generator=GeneratorConfig(module_name="erc20", evm_id="15"),
            output=OutputConfig(format="plain"),
        )
        save_global_config(config)
        assert load_global_config() == config

    def test_invalid_json(self, isolated_config: Path) -> None:
        path = isolated_config / "config" / "sumi" / "config.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()

    def test_invalid_evm_id_in_file(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "config" / "sumi" / "config.json",
            {"generator": {"evm_id": "0x100"}},
        )
        with pytest.raises(ConfigError):
            load_global_config()


# ---------------------------------------------------------------------------
# Project config
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_missing(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_loaded_from_cwd(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "sumi.json", {"module_name": "token"})
        assert load_project_config() == {"module_name": "token"}

    def test_not_an_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "sumi.json", ["token"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveGeneratorConfig:
    """CLI > env > ./sumi.json > global config > defaults."""

    def test_defaults(self, isolated_config: Path) -> None:
        settings = resolve_generator_config()
        assert settings.module_name is None
        assert settings.evm_id == "0x0F"

    def test_global_config(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(generator=GeneratorConfig(module_name="g", evm_id="1")))
        settings = resolve_generator_config()
        assert (settings.module_name, settings.evm_id) == ("g", "1")

    def test_project_over_global(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(generator=GeneratorConfig(module_name="g", evm_id="1")))
        _write_json(isolated_config / "sumi.json", {"module_name": "p"})
        settings = resolve_generator_config()
        assert (settings.module_name, settings.evm_id) == ("p", "1")

    def test_env_over_project(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_json(isolated_config / "sumi.json", {"module_name": "p", "evm_id": "2"})
        monkeypatch.setenv("SUMI_MODULE_NAME", "e")
        monkeypatch.setenv("SUMI_EVM_ID", "3")
        settings = resolve_generator_config()
        assert (settings.module_name, settings.evm_id) == ("e", "3")

    def test_cli_over_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUMI_MODULE_NAME", "e")
        monkeypatch.setenv("SUMI_EVM_ID", "3")
        settings = resolve_generator_config(cli_module_name="c", cli_evm_id="0x04")
        assert (settings.module_name, settings.evm_id) == ("c", "0x04")

    def test_evm_id_out_of_range(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="u8"):
            resolve_generator_config(cli_evm_id="256")

    def test_evm_id_not_a_number(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="integer literal"):
            resolve_generator_config(cli_evm_id="fifteen")

    def test_module_name_not_identifier(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="identifier"):
            resolve_generator_config(cli_module_name="my-token")
