import sys
import threading
from collections.abc import Callable
from pathlib import Path

import pytest

from maple_config.errors import ConfigError, ConfigMisuseError, ConfigSchemaError
from maple_config.settings import holder as holder_module
from maple_config.settings.holder import ConfigHolder
from maple_config.settings.schema import Config
from maple_config.utils.paths import default_config_file


def test_initialize_with_explicit_file(write_config: Callable[..., Path]) -> None:
    path = write_config("[plugin.ctags]\nenable = true\n")
    holder = ConfigHolder()
    cfg, err = holder.initialize(path)
    assert err is None
    assert cfg.plugin.ctags.enable is True
    assert holder.config is cfg
    assert holder.config_file == path
    assert holder.context.error is None


def test_initialize_reports_error_and_uses_defaults(write_config: Callable[..., Path]) -> None:
    path = write_config("[plugin.ctags]\nenabled = true\n")
    holder = ConfigHolder()
    cfg, err = holder.initialize(path)
    assert cfg == Config()
    assert isinstance(err, ConfigSchemaError)
    assert holder.context.error is err


def test_access_before_initialize() -> None:
    holder = ConfigHolder()
    assert holder.is_initialized is False
    with pytest.raises(ConfigMisuseError):
        _ = holder.config
    with pytest.raises(ConfigMisuseError):
        _ = holder.config_file


def test_second_initialize_rejected(write_config: Callable[..., Path]) -> None:
    first = write_config("[plugin.ctags]\nenable = true\n", name="first.toml")
    second = write_config("[plugin.ctags]\nenable = false\n", name="second.toml")
    holder = ConfigHolder()
    cfg, _ = holder.initialize(first)

    with pytest.raises(ConfigMisuseError):
        holder.initialize(second)
    assert holder.config is cfg
    assert holder.config_file == first


def test_misuse_is_not_a_config_error() -> None:
    assert not issubclass(ConfigMisuseError, ConfigError)


def test_default_path_parent_created(tmp_path: Path) -> None:
    path = tmp_path / "conf" / "vimclap" / "config.toml"
    holder = ConfigHolder(default_path=lambda: path)
    cfg, err = holder.initialize()
    assert path.parent.is_dir()
    assert not path.exists()
    assert cfg == Config()
    assert err is None
    assert holder.config_file == path


def test_concurrent_initialize_runs_once(write_config: Callable[..., Path]) -> None:
    path = write_config("[provider.debounce]\nfiles = 10\n")
    holder = ConfigHolder()
    barrier = threading.Barrier(8)
    results: list[Config] = []
    failures: list[BaseException] = []
    lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        try:
            cfg, _ = holder.initialize(path)
        except ConfigMisuseError as exc:
            with lock:
                failures.append(exc)
        else:
            with lock:
                results.append(cfg)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 1
    assert len(failures) == 7
    assert holder.config.provider_debounce("files") == 10


def test_module_level_api(
    monkeypatch: pytest.MonkeyPatch, write_config: Callable[..., Path]
) -> None:
    monkeypatch.setattr(holder_module, "_holder", ConfigHolder())
    with pytest.raises(ConfigMisuseError):
        holder_module.config()

    path = write_config("[log]\nmax-level = 'info'\n")
    cfg, err = holder_module.load_config_on_startup(path)
    assert err is None
    assert holder_module.config() is cfg
    assert holder_module.config_file() == path
    assert holder_module.config_context().config is cfg
    with pytest.raises(ConfigMisuseError):
        holder_module.load_config_on_startup(path)


def test_default_config_file_env_override(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("VIMCLAP_CONFIG_FILE", str(tmp_path / "custom.toml"))
    assert default_config_file() == tmp_path / "custom.toml"


@pytest.mark.skipif(sys.platform in ("win32", "darwin"), reason="XDG layout only")
def test_default_config_file_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_config_file() == tmp_path / "vimclap" / "config.toml"


def test_published_config_cannot_be_modified(write_config: Callable[..., Path]) -> None:
    path = write_config("[provider.debounce]\nfiles = 100\n")
    holder = ConfigHolder()
    holder.initialize(path)
    with pytest.raises(TypeError):
        holder.config.provider.debounce["files"] = 5  # type: ignore[index]
    assert holder.config.provider_debounce("files") == 100


def test_public_accessors_documented() -> None:
    for member in (
        ConfigHolder.is_initialized,
        ConfigHolder.config,
        ConfigHolder.config_file,
        holder_module.config_context,
    ):
        assert member.__doc__
