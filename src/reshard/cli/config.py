"""Configuration management CLI commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.syntax import Syntax

from ..core.config import ReshardConfig
from .common_options import config_option
from .display import console, section, success, warning

app = typer.Typer(help="Show or create reshard configuration files")


@app.command()
def show(config: Optional[Path] = config_option()):
    """Display the effective configuration.

    Without --config this shows the built-in defaults.
    """
    cfg = ReshardConfig.load_or_default(config)

    yaml_content = cfg.to_yaml_string()
    syntax = Syntax(yaml_content, "yaml", theme="monokai", line_numbers=False)

    section(f"Configuration from {config}" if config else "Default configuration")
    console.print(syntax)


@app.command()
def init(
    path: Path = typer.Argument(Path("reshard.yaml"), help="File to write", dir_okay=False),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """Write a configuration file with default values.

    Example:
        reshard config init
        reshard config init ./prod.yaml --force
    """
    if path.exists() and not force:
        warning(f"{path} already exists, use --force to overwrite")
        raise typer.Exit(1)

    ReshardConfig().to_yaml(path)
    success(f"Configuration saved to {path}")
