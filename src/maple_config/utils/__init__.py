"""Filesystem helpers for the maple_config package."""

from maple_config.utils.file import ensure_directory_exists, read_config_bytes
from maple_config.utils.paths import default_config_file, normalize_path

__all__ = [
    "default_config_file",
    "ensure_directory_exists",
    "normalize_path",
    "read_config_bytes",
]
