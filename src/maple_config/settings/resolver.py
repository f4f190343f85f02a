"""Context-sensitive lookups over a loaded config.

Both functions are pure: the config is immutable, so they need no locking
and can be called from any thread.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Final

from maple_config.utils.paths import normalize_path

if TYPE_CHECKING:
    from maple_config.settings.schema import Config, IgnoreConfig

# Debounce used when neither the provider nor "*" is configured
DEFAULT_DEBOUNCE_MS: Final = 200

# Key of provider.debounce that applies to every provider
WILDCARD_PROVIDER: Final = "*"


def resolve_ignore(
    config: Config,
    provider_id: str,
    project_dir: str | os.PathLike[str] | None = None,
) -> IgnoreConfig:
    """Select the ignore rules for a request.

    Precedence: ``provider-ignores[provider_id]``, then
    ``project-ignores[project_dir]``, then ``global-ignore``. Exactly one
    table is returned; tables are never merged.

    Args:
        config: Loaded configuration
        provider_id: Identifier of the provider handling the request
        project_dir: Absolute project directory, compared after the same
            normalization applied to the configured keys. None skips the
            project tier

    Returns:
        The winning IgnoreConfig
    """
    provider = config.provider
    ignore = provider.provider_ignores.get(provider_id)
    if ignore is not None:
        return ignore

    if project_dir is not None:
        ignore = provider.project_ignores.get(normalize_path(project_dir))
        if ignore is not None:
            return ignore

    return config.global_ignore


def resolve_debounce(config: Config, provider_id: str) -> int:
    """Debounce delay in milliseconds for a provider.

    Falls back to the ``"*"`` entry, then to ``DEFAULT_DEBOUNCE_MS``.
    """
    debounce = config.provider.debounce
    if provider_id in debounce:
        return debounce[provider_id]
    return debounce.get(WILDCARD_PROVIDER, DEFAULT_DEBOUNCE_MS)
