"""Read config.toml into a :class:`Config`.

Loading never fails: on any problem the all-defaults config is returned
together with the error, and the caller decides how to report it.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Final, Optional

from pydantic import ValidationError

from maple_config.errors import ConfigError, ConfigIOError, ConfigSchemaError
from maple_config.settings.schema import Config
from maple_config.utils.file import read_config_bytes

logger: Final = logging.getLogger(__name__)

LoadResult = tuple[Config, Optional[ConfigError]]


def parse_document(document: bytes | str, path: Optional[Path] = None) -> Config:
    """Parse and validate a TOML document.

    Fields missing from the document take their defaults.

    Args:
        document: TOML text, as bytes (UTF-8) or str
        path: File the document came from, used in error messages

    Returns:
        Validated Config

    Raises:
        ConfigSchemaError: If the document is malformed or violates the schema
    """
    if isinstance(document, bytes):
        try:
            document = document.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ConfigSchemaError(
                f"config is not valid UTF-8: {exc}",
                [(f"byte {exc.start}", exc.reason)],
                path,
                exc,
            ) from exc

    try:
        data = tomllib.loads(document)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigSchemaError(
            f"malformed TOML: {exc}", [(_toml_location(exc), str(exc))], path, exc
        ) from exc

    try:
        return Config.from_document(data)
    except ValidationError as err:
        raise ConfigSchemaError.from_validation_error(err, path) from err


def load_document(document: bytes | str | None, path: Optional[Path] = None) -> LoadResult:
    """Load a config from an in-memory document.

    Args:
        document: TOML document, or None if there is none
        path: File the document came from, used in error messages

    Returns:
        The config and the error that forced the defaults, if any
    """
    if document is None:
        return Config(), None

    try:
        return parse_document(document, path), None
    except ConfigSchemaError as exc:
        return Config(), exc


def load_config_file(path: Path) -> LoadResult:
    """Load a config from disk.

    A missing file is not an error. An unreadable file or an invalid
    document yields the defaults and the error.

    Args:
        path: Path to config.toml

    Returns:
        The config and the error that forced the defaults, if any
    """
    try:
        document = read_config_bytes(path)
    except OSError as exc:
        return Config(), ConfigIOError(f"unable to read config: {exc}", path, exc)

    if document is None:
        logger.debug("No config file at %s, using defaults", path)
        return Config(), None

    config, error = load_document(document, path)
    if error is None:
        logger.debug("Loaded configuration from %s", path)
    return config, error


def _toml_location(exc: tomllib.TOMLDecodeError) -> str:
    lineno = getattr(exc, "lineno", None)
    colno = getattr(exc, "colno", None)
    if lineno is None:
        return "<document>"
    return f"line {lineno}, column {colno}"
