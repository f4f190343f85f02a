"""File utility functions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

logger: Final = logging.getLogger(__name__)


def ensure_directory_exists(directory: Path) -> None:
    """Create directory if it doesn't exist.

    Args:
        directory: Path to create
    """
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory: %s", directory)


def read_config_bytes(file_path: Path) -> bytes | None:
    """Read the raw config document.

    Args:
        file_path: Path to the config file

    Returns:
        File contents, or None if there is no file at the path

    Raises:
        OSError: If the file exists but cannot be read
    """
    try:
        return file_path.read_bytes()
    except FileNotFoundError:
        return None
