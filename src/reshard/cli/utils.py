"""Shared utilities for CLI commands."""

import logging
from pathlib import Path

import typer

from ..core.config import ReshardConfig
from ..errors import ConfigError
from .display import error, info


def configure_logging(verbose: bool = False) -> None:
    """Set up process logging for a CLI run."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


def resolve_config(config_path: Path | None = None, **overrides) -> ReshardConfig:
    """Build the run configuration from an optional YAML file and CLI flags.

    Args:
        config_path: Optional YAML configuration file
        **overrides: CLI values; None means "not given"

    Returns:
        Resolved configuration

    Raises:
        typer.Exit: If the file or an override is invalid
    """
    config = ReshardConfig.load_or_default(config_path)
    try:
        return config.with_overrides(**overrides)
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(1)


def require_root(root: Path) -> None:
    """Exit unless the tree root is an existing directory."""
    if not root.is_dir():
        error(f"Root directory not found: {root}")
        info("Pass --root or set 'root' in the configuration file")
        raise typer.Exit(1)
