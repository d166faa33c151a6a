"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for sumi:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.sumi/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~sumi.models.GlobalConfig` JSON
  file storing generator defaults and output preferences.
* **Project config** -- An optional ``./sumi.json`` pinning the module name
  and EVM id for the contracts in a repository.
* **Precedence resolution** -- :func:`resolve_generator_config` merges CLI
  flags, environment variables, project-local config, and global config
  into the effective :class:`~sumi.models.GeneratorConfig`.

All file writes -- configuration and generated sources alike -- use an
atomic temp-file-then-rename strategy (:func:`atomic_write`), so a failed
run never leaves a truncated file behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from sumi.exceptions import ConfigError
from sumi.models import GeneratorConfig, GlobalConfig

_APP_NAME = "sumi"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "sumi.json"

ENV_MODULE_NAME = "SUMI_MODULE_NAME"
ENV_EVM_ID = "SUMI_EVM_ID"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform uses the XDG Base Directory layout (Linux/BSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/sumi/`` (default ``~/.config/sumi/``).
    On macOS/Windows: ``~/.sumi/``.

    Returns:
        Absolute path to the configuration directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_CONFIG_HOME", (".config",))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/sumi/`` (default ``~/.local/share/sumi/``).
    On macOS/Windows: ``~/.sumi/logs/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On success the temp file is renamed over *path*; on any failure the temp
    file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any error (including KeyboardInterrupt).
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the XDG config directory.

    Returns:
        The deserialised :class:`~sumi.models.GlobalConfig`. If the file
        does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk.

    Args:
        config: The configuration to save.
    """
    data = config.model_dump(mode="json")
    atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./sumi.json``.

    Project-local config sits between global config and environment
    variables in the precedence chain. It may set ``module_name`` and
    ``evm_id``::

        {"module_name": "erc20", "evm_id": "0x0F"}

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_generator_config(
    cli_module_name: Optional[str] = None,
    cli_evm_id: Optional[str] = None,
) -> GeneratorConfig:
    """Resolve generator settings with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_module_name``, ``cli_evm_id``)
        2. Environment variables (``SUMI_MODULE_NAME``, ``SUMI_EVM_ID``)
        3. Project config (``./sumi.json``)
        4. User config (``~/.config/sumi/config.json``)
        5. Defaults

    Returns:
        The effective :class:`~sumi.models.GeneratorConfig`. The module name
        may still be ``None`` if no layer sets it.

    Raises:
        ConfigError: If a config file is invalid or the merged values fail
            validation (e.g. an EVM id that does not fit in a u8).
    """
    # 5 + 4. Global config (fills in defaults automatically)
    merged: dict[str, Any] = load_global_config().generator.model_dump()

    # 3. Project-local config
    project = load_project_config()
    if project is not None:
        for key in ("module_name", "evm_id"):
            if project.get(key) is not None:
                merged[key] = project[key]

    # 2. Environment variables
    env_module = os.environ.get(ENV_MODULE_NAME)
    if env_module:
        merged["module_name"] = env_module
    env_evm_id = os.environ.get(ENV_EVM_ID)
    if env_evm_id:
        merged["evm_id"] = env_evm_id

    # 1. CLI flags (highest precedence)
    if cli_module_name is not None:
        merged["module_name"] = cli_module_name
    if cli_evm_id is not None:
        merged["evm_id"] = cli_evm_id

    try:
        return GeneratorConfig.model_validate(merged)
    except ValidationError as exc:
        problems = "; ".join(err["msg"] for err in exc.errors())
        raise ConfigError(f"Invalid generator settings: {problems}") from exc
