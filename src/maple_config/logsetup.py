"""Logging setup driven by the ``[log]`` section."""

from __future__ import annotations

import logging
import sys
from typing import Final

from maple_config.settings.schema import LogConfig

logger: Final = logging.getLogger(__name__)

LOG_FORMAT: Final = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Handler added by the last configure_logging() call
_installed_handler: logging.Handler | None = None

# "trace" has no stdlib counterpart
_LEVELS: Final = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_level(name: str) -> int | None:
    """Map a level name (case-insensitive) to a logging level, or None."""
    return _LEVELS.get(name.strip().lower())


def parse_log_target(text: str) -> list[tuple[str | None, int]]:
    """Parse a ``target=level`` filter list.

    Targets use ``::`` or ``.`` as separator. A bare level applies to the
    root logger and is returned with a target of None. Malformed entries
    are skipped.

    Args:
        text: Filter such as ``"maple_core::stdio_server=trace,rpc=debug"``

    Returns:
        (logger name or None, level) pairs in input order
    """
    directives: list[tuple[str | None, int]] = []
    for raw in text.split(","):
        entry = raw.strip()
        if not entry:
            continue

        target, sep, level_name = entry.partition("=")
        if not sep:
            level = parse_level(entry)
            if level is None:
                logger.warning("Ignoring unknown log level in log-target: %s", entry)
                continue
            directives.append((None, level))
            continue

        level = parse_level(level_name)
        target = target.strip().replace("::", ".")
        if level is None or not target:
            logger.warning("Ignoring malformed log-target directive: %s", entry)
            continue
        directives.append((target, level))
    return directives


def configure_logging(log_config: LogConfig, *, debug: bool = False) -> None:
    """Configure the root logger from the ``[log]`` section.

    Args:
        log_config: Loaded log settings
        debug: Force the DEBUG level regardless of ``max-level``
    """
    level = parse_level(log_config.max_level)
    unknown_level = level is None
    if debug or level is None:
        level = logging.DEBUG

    handler: logging.Handler
    if log_config.log_file:
        handler = logging.FileHandler(log_config.log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    global _installed_handler
    root = logging.getLogger()
    if _installed_handler is not None:
        root.removeHandler(_installed_handler)
        _installed_handler.close()
    root.addHandler(handler)
    _installed_handler = handler
    root.setLevel(level)

    if unknown_level:
        logger.warning("Unknown max-level %r, using debug", log_config.max_level)

    for target, target_level in parse_log_target(log_config.log_target):
        if target is None:
            if not debug:
                root.setLevel(target_level)
        else:
            logging.getLogger(target).setLevel(target_level)
