from collections.abc import Callable
from pathlib import Path

import pytest

SAMPLE_TOML = """\
[log]
max-level = "trace"
log-file = "/tmp/clap.log"

[matcher]
tiebreak = "score,-begin,-end,-length"

[plugin.cursorword]
enable = true

[provider.debounce]
"*" = 200
"files" = 100

[global-ignore]
ignore-file-path-pattern = ["test", "build"]

[provider.provider-ignores.dumb_jump]
ignore-comments = true
"""


@pytest.fixture(autouse=True)
def isolated_config_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the default config location inside the test's tmp dir."""
    monkeypatch.delenv("VIMCLAP_CONFIG_FILE", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Write TOML text to a config.toml under tmp_path and return its path."""

    def _write(content: str, name: str = "config.toml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_toml() -> str:
    return SAMPLE_TOML
