"""Common Typer options shared across CLI commands.

This module provides reusable option definitions to ensure consistency
and reduce duplication across CLI modules.
"""

import typer


def root_option(help_text: str = "Root of the tree to reshard") -> typer.Option:
    """Create a standard tree root option.

    Defaults to None so that a value from --config (or the built-in default)
    applies when the flag is not given.
    """
    return typer.Option(
        None,
        "--root",
        "-r",
        help=help_text,
        file_okay=False,
        dir_okay=True,
    )


def config_option(help_text: str = "Configuration file (YAML)") -> typer.Option:
    """Create an optional configuration file option.

    Args:
        help_text: Custom help text

    Returns:
        Configured Typer Option
    """
    return typer.Option(
        None,
        "--config",
        "-c",
        help=help_text,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    )


def log_file_option() -> typer.Option:
    return typer.Option(
        None,
        "--log-file",
        "-l",
        help="Append-only log of newly created shard directories",
        dir_okay=False,
    )


def depth_option() -> typer.Option:
    return typer.Option(None, "--depth", min=1, help="Number of shard directory levels")


def length_option() -> typer.Option:
    return typer.Option(None, "--length", min=1, help="Characters per shard directory level")


def verbose_option() -> typer.Option:
    return typer.Option(False, "--verbose", "-v", help="Log every moved file")
