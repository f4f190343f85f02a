"""Process-wide configuration, set exactly once at startup.

:class:`ConfigHolder` is a set-once cell: the first :meth:`ConfigHolder.initialize`
call loads the config file and publishes the result; every later call is
rejected. Components that can take the config explicitly should be given
the :class:`ConfigContext`; the module-level functions serve the rest.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Optional

from maple_config.errors import ConfigError, ConfigMisuseError
from maple_config.settings.loader import load_config_file
from maple_config.settings.schema import Config
from maple_config.utils.file import ensure_directory_exists
from maple_config.utils.paths import default_config_file

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigContext:
    """Result of startup loading, shared read-only with collaborators."""

    config: Config
    config_file: Path
    error: Optional[ConfigError] = None


class ConfigHolder:
    """Set-once holder of the loaded configuration.

    Examples:
        holder = ConfigHolder()
        config, err = holder.initialize()
        if err is not None:
            logger.error("Ignoring config.toml: %s", err)

        debounce = holder.config.provider_debounce("files")
    """

    def __init__(self, default_path: Callable[[], Path] = default_config_file):
        """Initialize an empty holder.

        Args:
            default_path: Supplies the config file path when initialize()
                is called without one
        """
        self._default_path = default_path
        self._lock = threading.Lock()
        self._context: Optional[ConfigContext] = None

    @property
    def is_initialized(self) -> bool:
        """Whether initialize() has published a config."""
        return self._context is not None

    def initialize(
        self, config_file: Optional[Path] = None
    ) -> tuple[Config, Optional[ConfigError]]:
        """Resolve the config file path, load it and publish the result.

        Args:
            config_file: Explicit config file, overriding the default path

        Returns:
            The loaded config and the load error, if any

        Raises:
            ConfigMisuseError: If the holder was already initialized
        """
        with self._lock:
            if self._context is not None:
                raise ConfigMisuseError(
                    f"Config already initialized from {self._context.config_file}"
                )

            path = config_file if config_file is not None else self._prepare_default_path()
            config, error = load_config_file(path)
            self._context = ConfigContext(config=config, config_file=path, error=error)

        return config, error

    def _prepare_default_path(self) -> Path:
        path = self._default_path()
        try:
            ensure_directory_exists(path.parent)
        except OSError as exc:
            logger.warning("Cannot create config directory %s: %s", path.parent, exc)
        return path

    @property
    def context(self) -> ConfigContext:
        """Published startup context.

        Raises:
            ConfigMisuseError: If accessed before initialize()
        """
        context = self._context
        if context is None:
            raise ConfigMisuseError("Config must be initialized")
        return context

    @property
    def config(self) -> Config:
        """Loaded config.

        Raises:
            ConfigMisuseError: If accessed before initialize()
        """
        return self.context.config

    @property
    def config_file(self) -> Path:
        """Path the config was loaded from, whether or not the file exists."""
        return self.context.config_file


_holder: Final = ConfigHolder()


def load_config_on_startup(
    config_file: Optional[Path] = None,
) -> tuple[Config, Optional[ConfigError]]:
    """Initialize the process-wide config. Callable once per process."""
    return _holder.initialize(config_file)


def config() -> Config:
    """Process-wide config; fails if load_config_on_startup() was not called."""
    return _holder.config


def config_file() -> Path:
    """Path the process-wide config was loaded from."""
    return _holder.config_file


def config_context() -> ConfigContext:
    """Process-wide startup context, including the load error if any."""
    return _holder.context
