"""Configuration schema, loading and layered lookups.

This package provides:
- Config and its sections: the schema of config.toml with defaults
- load_config_file / load_document: load a document, falling back to defaults
- ConfigHolder: the set-once process-wide config
- resolve_ignore / resolve_debounce: provider > project > global lookups
"""

from maple_config.settings.holder import (
    ConfigContext,
    ConfigHolder,
    config,
    config_context,
    config_file,
    load_config_on_startup,
)
from maple_config.settings.loader import load_config_file, load_document, parse_document
from maple_config.settings.resolver import (
    DEFAULT_DEBOUNCE_MS,
    resolve_debounce,
    resolve_ignore,
)
from maple_config.settings.schema import (
    ColorizerPluginConfig,
    Config,
    CtagsPluginConfig,
    CursorWordConfig,
    EntireBufferUpToLimit,
    GitPluginConfig,
    HighlightEngine,
    IgnoreConfig,
    LinterPluginConfig,
    LogConfig,
    MarkdownPluginConfig,
    MatcherConfig,
    PluginConfig,
    ProviderConfig,
    RenderStrategy,
    SyntaxPluginConfig,
    VisualLines,
)

__all__ = [
    "DEFAULT_DEBOUNCE_MS",
    "ColorizerPluginConfig",
    "Config",
    "ConfigContext",
    "ConfigHolder",
    "CtagsPluginConfig",
    "CursorWordConfig",
    "EntireBufferUpToLimit",
    "GitPluginConfig",
    "HighlightEngine",
    "IgnoreConfig",
    "LinterPluginConfig",
    "LogConfig",
    "MarkdownPluginConfig",
    "MatcherConfig",
    "PluginConfig",
    "ProviderConfig",
    "RenderStrategy",
    "SyntaxPluginConfig",
    "VisualLines",
    "config",
    "config_context",
    "config_file",
    "load_config_file",
    "load_config_on_startup",
    "load_document",
    "parse_document",
    "resolve_debounce",
    "resolve_ignore",
]
