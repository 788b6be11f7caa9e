"""Configuration loading with XDG paths, atomic writes, and precedence resolution.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.authchain/`` on macOS and Windows. See :func:`get_config_dir`.
* **Precedence** -- :func:`load_config` picks the first configuration source
  that exists:

  1. An explicit path argument (e.g. the CLI ``--config`` flag).
  2. The ``AUTHCHAIN_CONFIG`` environment variable.
  3. Project-local ``./authchain.json``.
  4. User config ``<config dir>/config.json``.
  5. Built-in defaults.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional, Union

from authchain.exceptions import ConfigError
from authchain.models import AuthChainConfig

_APP_NAME = "authchain"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "authchain.json"
CONFIG_ENV_VAR = "AUTHCHAIN_CONFIG"

PathLike = Union[str, Path]


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_config_dir() -> Path:
    """Return the user configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/authchain/`` (default
    ``~/.config/authchain/``). On macOS/Windows: ``~/.authchain/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def user_config_path() -> Path:
    """Path to the user-level config file."""
    return get_config_dir() / _CONFIG_FILENAME


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.
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
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Loading ---


def resolve_config_path(path: Optional[PathLike] = None) -> Optional[Path]:
    """Return the config file :func:`load_config` would read, or ``None`` for defaults.

    Raises:
        ConfigError: If an explicitly requested file (argument or
            ``AUTHCHAIN_CONFIG``) does not exist.
    """
    if path is not None:
        explicit = Path(path)
        if not explicit.is_file():
            raise ConfigError(f"Config file not found: {explicit}")
        return explicit

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path)
        if not explicit.is_file():
            raise ConfigError(
                f"Config file from {CONFIG_ENV_VAR} not found: {explicit}"
            )
        return explicit

    project = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if project.is_file():
        return project

    user = user_config_path()
    if user.is_file():
        return user
    return None


def load_config(path: Optional[PathLike] = None) -> AuthChainConfig:
    """Load the effective configuration following the precedence chain.

    Returns:
        The validated :class:`~authchain.models.AuthChainConfig`; defaults
        when no config file exists.

    Raises:
        ConfigError: If the chosen file is missing (when explicit), contains
            invalid JSON, or fails validation.
    """
    source = resolve_config_path(path)
    if source is None:
        return AuthChainConfig()
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
        return AuthChainConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {source}: {exc}") from exc


def save_config(config: AuthChainConfig, path: Optional[PathLike] = None) -> Path:
    """Persist *config* atomically.

    Args:
        config: The configuration to save.
        path: Target file; defaults to the user config file.

    Returns:
        The path written to.
    """
    target = Path(path) if path is not None else user_config_path()
    data = config.model_dump(mode="json")
    _atomic_write(target, json.dumps(data, indent=2) + "\n")
    return target
