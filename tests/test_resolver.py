from pathlib import Path

import pytest

from maple_config.settings.resolver import DEFAULT_DEBOUNCE_MS, resolve_debounce, resolve_ignore
from maple_config.settings.schema import Config, IgnoreConfig, ProviderConfig

PROVIDER_RULES = IgnoreConfig(ignore_comments=True)
PROJECT_RULES = IgnoreConfig(git_tracked_only=True)
GLOBAL_RULES = IgnoreConfig(ignore_file_path_pattern=["build"])


@pytest.fixture
def layered_config() -> Config:
    return Config(
        provider=ProviderConfig(
            provider_ignores={"p": PROVIDER_RULES},
            project_ignores={"/x": PROJECT_RULES},
        ),
        global_ignore=GLOBAL_RULES,
    )


def test_provider_rules_win(layered_config: Config) -> None:
    assert resolve_ignore(layered_config, "p", "/x") == PROVIDER_RULES
    assert resolve_ignore(layered_config, "p", "/y") == PROVIDER_RULES


def test_project_rules_when_no_provider_rules(layered_config: Config) -> None:
    assert resolve_ignore(layered_config, "q", "/x") == PROJECT_RULES


def test_global_rules_last(layered_config: Config) -> None:
    assert resolve_ignore(layered_config, "q", "/y") == GLOBAL_RULES


def test_rules_are_not_merged(layered_config: Config) -> None:
    rules = resolve_ignore(layered_config, "p", "/x")
    # Nothing from the project or global tables leaks in.
    assert rules.git_tracked_only is False
    assert rules.ignore_file_path_pattern == ()


def test_project_dir_normalized(layered_config: Config) -> None:
    assert resolve_ignore(layered_config, "q", "/x/") == PROJECT_RULES
    assert resolve_ignore(layered_config, "q", Path("/x/sub/..")) == PROJECT_RULES


def test_default_config_resolves_to_global() -> None:
    cfg = Config()
    assert resolve_ignore(cfg, "files", "/any") is cfg.global_ignore


def test_config_method_delegates(layered_config: Config) -> None:
    assert layered_config.ignore_config("q", "/x") == PROJECT_RULES


def test_debounce_layers() -> None:
    cfg = Config(provider=ProviderConfig(debounce={"*": 200, "files": 100}))
    assert resolve_debounce(cfg, "files") == 100
    assert resolve_debounce(cfg, "grep") == 200


def test_debounce_wildcard() -> None:
    cfg = Config(provider=ProviderConfig(debounce={"*": 30}))
    assert cfg.provider_debounce("grep") == 30


def test_debounce_default() -> None:
    assert DEFAULT_DEBOUNCE_MS == 200
    assert resolve_debounce(Config(), "anything") == 200


def test_debounce_zero_is_respected() -> None:
    cfg = Config(provider=ProviderConfig(debounce={"*": 300, "files": 0}))
    assert resolve_debounce(cfg, "files") == 0


def test_no_project_dir_skips_project_rules(layered_config: Config) -> None:
    assert resolve_ignore(layered_config, "p") == PROVIDER_RULES
    assert resolve_ignore(layered_config, "q") == GLOBAL_RULES
    assert resolve_ignore(layered_config, "q", None) == GLOBAL_RULES
    assert layered_config.ignore_config("q") == GLOBAL_RULES


def test_resolved_rules_cannot_be_modified(layered_config: Config) -> None:
    rules = resolve_ignore(layered_config, "q", "/y")
    with pytest.raises(AttributeError):
        rules.ignore_file_path_pattern.append("src")  # type: ignore[attr-defined]
    assert resolve_ignore(layered_config, "q", "/y").ignore_file_path_pattern == ("build",)
