"""Configuration layer of the Vim-Clap fuzzy finder."""

__version__ = "0.1.0"

from maple_config.errors import ConfigError, ConfigIOError, ConfigMisuseError, ConfigSchemaError
from maple_config.settings import (
    Config,
    ConfigHolder,
    IgnoreConfig,
    config,
    config_file,
    load_config_on_startup,
    resolve_debounce,
    resolve_ignore,
)
from maple_config.types import CriterionKind, RankCriterion, parse_criteria

__all__ = [
    "Config",
    "ConfigError",
    "ConfigHolder",
    "ConfigIOError",
    "ConfigMisuseError",
    "ConfigSchemaError",
    "CriterionKind",
    "IgnoreConfig",
    "RankCriterion",
    "config",
    "config_file",
    "load_config_on_startup",
    "parse_criteria",
    "resolve_debounce",
    "resolve_ignore",
]
