"""User-overridable settings read from config.toml.

Every section has a complete set of defaults, so ``Config()`` is a valid
configuration on its own. Document keys are lower-case and hyphenated
(``max-level``); unknown keys are rejected anywhere in the document.

Example::

    [log]
    max-level = "trace"
    log-target = "maple_core::stdio_server=trace,rpc=debug"

    [plugin.syntax.render-strategy]
    strategy = "visual-lines"

    [provider.debounce]
    "*" = 200
    "files" = 100
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Literal, Union

import tomli_w
from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    WrapSerializer,
    field_validator,
)

from maple_config.settings.resolver import resolve_debounce, resolve_ignore
from maple_config.types import RankCriterion, parse_criteria
from maple_config.utils.paths import normalize_path

DEFAULT_TIEBREAK = "score,-begin,-end,-length"
DEFAULT_CTAGS_MAX_FILE_SIZE = 4 * 1024 * 1024
DEFAULT_RENDER_SIZE_LIMIT = 256 * 1024


def _kebab(name: str) -> str:
    return name.replace("_", "-")


def _absolute_path(value: str) -> str:
    path = normalize_path(value)
    if not os.path.isabs(path):
        raise ValueError(f"project path must be absolute or start with '~', got {value!r}")
    return path


# Non-negative integer; booleans and numeric strings are rejected.
Count = Annotated[int, Field(strict=True, ge=0)]

# Project directory, ``~`` expanded and normalized.
AbsPath = Annotated[StrictStr, AfterValidator(_absolute_path)]


def _read_only(value: dict[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType(value)


def _serialize_mapping(value: Mapping[Any, Any], handler: Any) -> Any:
    return handler(dict(value))


def _empty_mapping() -> Mapping[Any, Any]:
    return MappingProxyType({})


# Tables published as read-only mappings.
Freeze = AfterValidator(_read_only)
Thaw = WrapSerializer(_serialize_mapping)


class Section(BaseModel):
    """Base of every configuration table.

    Documents are validated by alias only (see ``Config.from_document``);
    Python code may also use field names.
    """

    model_config = ConfigDict(
        alias_generator=_kebab,
        validate_by_alias=True,
        validate_by_name=True,
        serialize_by_alias=True,
        extra="forbid",
        frozen=True,
    )


class LogConfig(Section):
    """Logging settings."""

    log_file: StrictStr | None = Field(
        None, description="Log file path, must be an absolute path"
    )
    max_level: StrictStr = Field("debug", description="Max log level")
    log_target: StrictStr = Field(
        "",
        description="Per-target log filter, e.g. 'maple_core::stdio_server=trace,rpc=debug'",
    )


class MatcherConfig(Section):
    """Matcher settings."""

    tiebreak: StrictStr = Field(
        DEFAULT_TIEBREAK, description="Comma-separated criteria used to sort the results"
    )

    def rank_criteria(self) -> list[RankCriterion]:
        """Parse the tiebreak string.

        Unknown tokens are dropped, so a tiebreak with no valid token yields
        an empty list rather than the default criteria.

        Returns:
            Criteria in the order they appear in ``tiebreak``
        """
        criteria = (parse_criteria(token.strip()) for token in self.tiebreak.split(","))
        return [c for c in criteria if c is not None]


class CursorWordConfig(Section):
    """Cursorword plugin."""

    enable: StrictBool = False
    ignore_comment_line: StrictBool = Field(False, description="Whether to ignore the comment line")
    ignore_files: StrictStr = Field(
        "*.toml,*.json,*.yml,*.log,tmp",
        description="Disable the plugin when the file matches this pattern",
    )


class MarkdownPluginConfig(Section):
    """Markdown plugin."""

    enable: StrictBool = False


class CtagsPluginConfig(Section):
    """Ctags plugin."""

    enable: StrictBool = False
    max_file_size: Count = Field(
        DEFAULT_CTAGS_MAX_FILE_SIZE,
        description="Disable the plugin if the file size exceeds this limit (bytes)",
    )


class GitPluginConfig(Section):
    """Git plugin."""

    enable: StrictBool = True
    blame_format_string: StrictStr | None = Field(
        None, description="Format of the blame info, '(author time) summary' if unset"
    )


class ColorizerPluginConfig(Section):
    """Colorizer plugin."""

    enable: StrictBool = False


class LinterPluginConfig(Section):
    """Linter plugin."""

    enable: StrictBool = False


class VisualLines(Section):
    """Render only the visual lines."""

    strategy: Literal["visual-lines"] = "visual-lines"


class EntireBufferUpToLimit(Section):
    """Render the entire buffer until the file size exceeds the limit.

    Rendering large buffers at once is slow; for small ones it avoids
    re-rendering on every scroll.
    """

    strategy: Literal["entire-buffer-up-to-limit"] = "entire-buffer-up-to-limit"
    file_size_limit: Count = Field(..., description="File size limit in bytes")


# Tagged by ``strategy``; the payload is a sibling key in the same table.
RenderStrategy = Annotated[
    Union[VisualLines, EntireBufferUpToLimit], Field(discriminator="strategy")
]


class SyntaxPluginConfig(Section):
    """Syntax plugin (tree-sitter highlighting)."""

    render_strategy: RenderStrategy = Field(
        default_factory=lambda: EntireBufferUpToLimit(file_size_limit=DEFAULT_RENDER_SIZE_LIMIT),
        description="Strategy of tree-sitter rendering",
    )


class PluginConfig(Section):
    """Settings of the individual plugins."""

    colorizer: ColorizerPluginConfig = Field(default_factory=ColorizerPluginConfig)
    cursorword: CursorWordConfig = Field(default_factory=CursorWordConfig)
    ctags: CtagsPluginConfig = Field(default_factory=CtagsPluginConfig)
    git: GitPluginConfig = Field(default_factory=GitPluginConfig)
    linter: LinterPluginConfig = Field(default_factory=LinterPluginConfig)
    markdown: MarkdownPluginConfig = Field(default_factory=MarkdownPluginConfig)
    syntax: SyntaxPluginConfig = Field(default_factory=SyntaxPluginConfig)


class IgnoreConfig(Section):
    """Rules for excluding results.

    For instance, to exclude the results whose file path matches ``test``
    for the dumb_jump provider::

        [provider.provider-ignores.dumb_jump]
        ignore-file-path-pattern = ["test"]
    """

    ignore_comments: StrictBool = Field(
        False, description="Whether to ignore the comment line when applicable"
    )
    git_tracked_only: StrictBool = Field(
        False, description="Only include results from files tracked by git if in a git repo"
    )
    ignore_file_name_pattern: tuple[StrictStr, ...] = Field(
        default_factory=tuple,
        description="Ignore results from files whose file name matches these patterns",
    )
    ignore_file_path_pattern: tuple[StrictStr, ...] = Field(
        default_factory=tuple,
        description="Ignore results from files whose file path matches these patterns",
    )


class HighlightEngine(str, Enum):
    """Syntax highlight engine for the provider preview."""

    SUBLIME_SYNTAX = "sublime-syntax"
    TREE_SITTER = "tree-sitter"
    VIM = "vim"


class ProviderConfig(Section):
    """Provider (fuzzy picker) settings."""

    share_input_history: StrictBool = Field(
        False, description="Whether to share the input history among providers"
    )
    max_display_size: Count | None = Field(
        None, description="Maximum number of items displayed in the results window"
    )
    preview_highlight_engine: HighlightEngine = Field(
        HighlightEngine.VIM, description="Syntax highlight engine for the preview"
    )
    sublime_syntax_color_scheme: StrictStr | None = Field(
        None,
        description="Theme for the sublime-syntax engine, 'Visual Studio Dark+' if unset",
    )
    project_ignores: Annotated[dict[AbsPath, IgnoreConfig], Freeze, Thaw] = Field(
        default_factory=_empty_mapping,
        description="Ignore rules per project, keyed by absolute or '~'-relative path",
    )
    provider_ignores: Annotated[dict[StrictStr, IgnoreConfig], Freeze, Thaw] = Field(
        default_factory=_empty_mapping, description="Ignore rules per provider"
    )
    debounce: Annotated[dict[StrictStr, Count], Freeze, Thaw] = Field(
        default_factory=_empty_mapping,
        description="Delay in ms before handling the query, per provider or '*'; 200 if unset",
    )

    # ---- validators ----
    @field_validator("project_ignores", mode="before")
    @classmethod
    def check_unique_projects(cls, v: Any) -> Any:
        """Reject two keys naming the same directory, e.g. '/a' and '/a/'."""
        if isinstance(v, dict):
            seen: dict[str, Any] = {}
            for key in v:
                if not isinstance(key, str):
                    continue
                normalized = normalize_path(key)
                if normalized in seen:
                    raise ValueError(
                        f"project paths {seen[normalized]!r} and {key!r} refer to the same directory"
                    )
                seen[normalized] = key
        return v


class Config(Section):
    """Root of the configuration.

    Built once at startup and read-only afterwards.
    """

    log: LogConfig = Field(default_factory=LogConfig)
    matcher: MatcherConfig = Field(default_factory=MatcherConfig)
    plugin: PluginConfig = Field(default_factory=PluginConfig)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    global_ignore: IgnoreConfig = Field(default_factory=IgnoreConfig)

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> Config:
        """Validate a parsed TOML document.

        Only the hyphenated document keys are accepted.

        Raises:
            pydantic.ValidationError: On unknown keys or mismatched types
        """
        return cls.model_validate(data, by_alias=True, by_name=False)

    def to_document(self) -> dict[str, Any]:
        """Plain-data form with document keys; unset optional values are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_toml(self) -> str:
        """Serialize to TOML text that loads back to an equal config."""
        return tomli_w.dumps(self.to_document())

    # ---- layered overrides ----
    def ignore_config(
        self, provider_id: str, project_dir: str | os.PathLike[str] | None = None
    ) -> IgnoreConfig:
        """Ignore rules for a provider running in a project.

        Provider-specific rules win over project-specific ones, which win
        over ``global-ignore``. The winning table is used as a whole.
        """
        return resolve_ignore(self, provider_id, project_dir)

    def provider_debounce(self, provider_id: str) -> int:
        """Debounce delay in milliseconds for a provider."""
        return resolve_debounce(self, provider_id)
