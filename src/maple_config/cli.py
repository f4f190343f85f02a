"""Vim-Clap config CLI.

Helpers to validate a config.toml, print the defaults and inspect the
values the layered lookups resolve to.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Final, Optional

import tomli_w
import typer

from maple_config.errors import ConfigSchemaError
from maple_config.logsetup import configure_logging
from maple_config.settings.holder import ConfigHolder
from maple_config.settings.loader import load_config_file
from maple_config.settings.schema import Config, LogConfig

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Vim-Clap config CLI", add_completion=False)

logger: Final = logging.getLogger(__name__)  # Will be "maple_config.cli"

CONFIG_OPTION = typer.Option(
    None, "--config", "-c", dir_okay=False, help="Config file (default: platform config dir)"
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
FILE_ARGUMENT = typer.Argument(..., dir_okay=False, help="config.toml to validate")
PROVIDER_ARGUMENT = typer.Argument(..., help="Provider identifier, e.g. 'files'")
PROJECT_DIR_OPTION = typer.Option(
    None, "--project-dir", "-p", help="Absolute project directory (default: cwd)"
)


def _startup(config: Optional[Path], debug: bool) -> ConfigHolder:
    """Load the config the way the server does on startup."""
    if debug:
        configure_logging(LogConfig(), debug=True)

    holder = ConfigHolder()
    _, err = holder.initialize(config)
    if err is not None:
        typer.secho(f"Using default config: {err}", fg=typer.colors.YELLOW, err=True)
    return holder


# ───────────────────────── commands ──────────────────────────────────────────
@app.command()
def validate(file: Path = FILE_ARGUMENT, debug: bool = DEBUG_OPTION) -> None:
    """Validate a config.toml against the schema."""
    if debug:
        configure_logging(LogConfig(), debug=True)

    if not file.exists():
        typer.secho(f"{file}: no such file", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    _, err = load_config_file(file)
    if err is None:
        typer.echo("✅ Config valid")
        return

    if not isinstance(err, ConfigSchemaError):
        typer.secho(str(err), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"{file}: invalid config", fg=typer.colors.RED, err=True)
    for location, message in err.details:
        typer.secho(f"  • {location} - {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command()
def defaults() -> None:
    """Print the default config as TOML."""
    typer.echo(Config().to_toml(), nl=False)


@app.command()
def show(config: Optional[Path] = CONFIG_OPTION, debug: bool = DEBUG_OPTION) -> None:
    """Print the effective config as TOML."""
    holder = _startup(config, debug)
    typer.echo(holder.config.to_toml(), nl=False)


@app.command()
def path(config: Optional[Path] = CONFIG_OPTION, debug: bool = DEBUG_OPTION) -> None:
    """Print the config file path in effect."""
    holder = _startup(config, debug)
    typer.echo(str(holder.config_file))


@app.command()
def ignore(
    provider: str = PROVIDER_ARGUMENT,
    project_dir: Optional[Path] = PROJECT_DIR_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Print the ignore rules a provider gets in a project."""
    holder = _startup(config, debug)
    directory = project_dir if project_dir is not None else Path.cwd()
    rules = holder.config.ignore_config(provider, directory)
    logger.debug("Resolved ignore rules for %s in %s", provider, directory)
    typer.echo(tomli_w.dumps(rules.model_dump(mode="json", by_alias=True)), nl=False)


@app.command()
def debounce(
    provider: str = PROVIDER_ARGUMENT,
    config: Optional[Path] = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Print the debounce delay (ms) of a provider."""
    holder = _startup(config, debug)
    typer.echo(str(holder.config.provider_debounce(provider)))


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
