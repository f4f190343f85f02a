"""Config file location and path normalization."""

from __future__ import annotations

import os
import sys
from pathlib import Path

CONFIG_FILE_NAME = "config.toml"

# Environment variable that overrides the default config file location
CONFIG_FILE_ENV = "VIMCLAP_CONFIG_FILE"


def default_config_dir() -> Path:
    """Platform application-config directory for Vim-Clap.

    - Linux: ``$XDG_CONFIG_HOME/vimclap`` or ``~/.config/vimclap``
    - macOS: ``~/Library/Application Support/org.vim.Vim-Clap``
    - Windows: ``%APPDATA%\\Vim\\Vim Clap\\config``
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
        return base / "Vim" / "Vim Clap" / "config"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "org.vim.Vim-Clap"
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "vimclap"


def default_config_file() -> Path:
    """Config file path used when none is given explicitly."""
    env_path = os.environ.get(CONFIG_FILE_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return default_config_dir() / CONFIG_FILE_NAME


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Expand ``~`` and lexically normalize a path.

    Trailing separators and ``.``/``..`` components are collapsed. Symlinks
    are not resolved, so the result does not depend on the filesystem.
    """
    return os.path.normpath(os.path.expanduser(os.fspath(path)))
