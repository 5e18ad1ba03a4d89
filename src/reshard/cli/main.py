"""reshard CLI entry point."""

from pathlib import Path
from typing import List, Optional

import typer

from ..core.config import ShardLayout
from ..errors import ReshardError
from ..services import (
    DirectoryLog,
    delete_empty_dirs,
    read_sentinel,
    rename_all,
    valid_dir_structure,
)
from . import config as config_cli
from .common_options import (
    config_option,
    depth_option,
    length_option,
    log_file_option,
    root_option,
    verbose_option,
)
from .display import (
    console,
    error,
    info,
    info_dict,
    section,
    stats_table,
    success,
    warning,
)
from .utils import configure_logging, require_root, resolve_config

# Create main CLI app
app = typer.Typer(
    name="reshard",
    help="Reorganize content-addressed files into a sharded directory tree",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(config_cli.app, name="config", help="⚙️ Show or create configuration files")


@app.command()
def run(
    root: Optional[Path] = root_option(),
    log_file: Optional[Path] = log_file_option(),
    config: Optional[Path] = config_option(),
    depth: Optional[int] = depth_option(),
    length: Optional[int] = length_option(),
    verbose: bool = verbose_option(),
):
    """Move misplaced files into the shard layout, then prune empty directories.

    Safe to re-run: files already in the layout are left alone, so an
    interrupted run is resumed by running it again.

    Example:
        reshard run --root ./fs/var/skynet
        reshard run --config reshard.yaml --log-file dirpaths
    """
    configure_logging(verbose)
    cfg = resolve_config(config, root=root, log_file=log_file, depth=depth, length=length)
    require_root(cfg.root)

    section(f"Resharding {cfg.root}")
    info_dict({
        "Layout": f"{cfg.layout.depth} levels of {cfg.layout.length} characters",
        "Directory log": cfg.log_file,
    })

    try:
        with DirectoryLog.open(cfg.log_file) as log:
            state = rename_all(log, cfg.root, cfg.layout, cfg.files)
        success(f"Renamed {state.moved} files ({state.companions_moved} companions)")

        stats = delete_empty_dirs(cfg.root, cfg.files)
        success(f"Pruned {stats.dirs_removed} empty directories")
    except (ReshardError, OSError) as e:
        error(f"Error: {e}")
        raise typer.Exit(1)

    stats_table("Summary", {**state.to_dict(), **stats.to_dict()})
    if log.failures:
        warning(f"{log.failures} directories could not be written to {cfg.log_file}")


@app.command()
def prune(
    root: Optional[Path] = root_option(),
    config: Optional[Path] = config_option(),
    verbose: bool = verbose_option(),
):
    """Only prune directories holding nothing but a sentinel file.

    Example:
        reshard prune --root ./fs/var/skynet
    """
    configure_logging(verbose)
    cfg = resolve_config(config, root=root)
    require_root(cfg.root)

    section(f"Pruning {cfg.root}")
    try:
        stats = delete_empty_dirs(cfg.root, cfg.files)
    except (ReshardError, OSError) as e:
        error(f"Error: {e}")
        raise typer.Exit(1)

    success(f"Pruned {stats.dirs_removed} empty directories")
    stats_table("Summary", stats.to_dict())


@app.command()
def check(
    paths: List[str] = typer.Argument(..., help="Paths relative to the tree root"),
    depth: Optional[int] = depth_option(),
    length: Optional[int] = length_option(),
):
    """Report whether paths follow the shard layout.

    Paths ending with a separator are checked as directories. Exits with
    status 1 if any path does not conform.

    Example:
        reshard check ab/cd/ef/file.sia ab/cd/
    """
    layout = ShardLayout(
        **{k: v for k, v in {"depth": depth, "length": length}.items() if v is not None}
    )
    invalid = 0
    for path in paths:
        if valid_dir_structure(path, layout):
            console.print(f"[green]✓[/green] {path}")
        else:
            invalid += 1
            console.print(f"[red]✗[/red] {path}")

    if invalid:
        raise typer.Exit(1)


@app.command()
def inspect(
    directory: Path = typer.Argument(..., help="Directory holding a sentinel", file_okay=False),
    config: Optional[Path] = config_option(),
):
    """Show the sentinel metadata of a directory."""
    cfg = resolve_config(config)
    try:
        metadata = read_sentinel(directory, cfg.files)
    except ReshardError as e:
        error(f"Error: {e}")
        raise typer.Exit(1)

    section(f"Sentinel {directory / cfg.files.sentinel_name}")
    info_dict(metadata.model_dump(mode="json"))


@app.command()
def version():
    """Show reshard version."""
    from .. import __version__
    info(f"reshard version: {__version__}")


def main():
    """Main CLI entry point."""
    try:
        app()
    except KeyboardInterrupt:
        warning("\nInterrupted by user")
        raise typer.Exit(1)


if __name__ == "__main__":
    main()
