"""Empty-directory pruning.

A directory is empty when it holds nothing, or nothing but its sentinel
file. Removing a directory can leave its parent empty, so deletion climbs
upward until it reaches a non-empty ancestor or the tree root.
"""

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path

from ..core.config import FileConventions
from ..errors import DirectoryListFailure, RemoveFailure

logger = logging.getLogger(__name__)


@dataclass
class PruneStats:
    """Counters for one pruning pass."""

    dirs_visited: int = 0
    dirs_removed: int = 0
    sentinels_removed: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def recursive_delete(
    path: str | Path,
    conventions: FileConventions = FileConventions(),
    root: str | Path | None = None,
    stats: PruneStats | None = None,
) -> None:
    """Delete a directory and its ancestors while they are empty.

    Stops at the first directory holding anything besides the sentinel, at
    ``root`` (never deleted), at the filesystem root, or at ``.``. A
    directory that is already gone counts as deleted.

    Args:
        path: Directory to start from
        conventions: Supplies the sentinel file name
        root: Upper bound that is never deleted
        stats: Optional counters to update

    Raises:
        DirectoryListFailure: If a directory cannot be listed
        RemoveFailure: If the sentinel or directory cannot be removed
    """
    path = Path(path)
    root = Path(root) if root is not None else None
    stats = stats if stats is not None else PruneStats()

    while path != path.parent and path != Path(".") and path != root:
        try:
            entries = os.listdir(path)
        except FileNotFoundError:
            # Removed by an earlier cascade
            logger.debug(f"Directory already removed: {path}")
            return
        except OSError as e:
            raise DirectoryListFailure(f"unable to read dir {path}: {e}", path=path) from e

        if len(entries) > 1:
            return
        if len(entries) == 1:
            if entries[0] != conventions.sentinel_name:
                return
            sentinel = path / entries[0]
            try:
                sentinel.unlink()
                stats.sentinels_removed += 1
            except FileNotFoundError:
                pass
            except OSError as e:
                raise RemoveFailure(f"unable to remove sentinel {sentinel}: {e}", path=sentinel) from e

        try:
            path.rmdir()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise RemoveFailure(f"unable to remove path {path}: {e}", path=path) from e
        else:
            stats.dirs_removed += 1
            logger.debug(f"Removed empty directory {path}")

        path = path.parent


def delete_empty_dirs(
    root: str | Path,
    conventions: FileConventions = FileConventions(),
) -> PruneStats:
    """Walk the tree and prune every empty directory below root.

    The walk is bottom-up so that leaf shard directories are pruned before
    their parents are considered. Directories that vanish mid-walk are
    skipped, but a missing root fails the pass.

    Args:
        root: Tree root, which is never deleted
        conventions: Supplies the sentinel file name

    Returns:
        Counters for the pass

    Raises:
        DirectoryListFailure: If a directory cannot be listed
        RemoveFailure: If a sentinel or directory cannot be removed
    """
    root = Path(root)
    stats = PruneStats()

    def onerror(err: OSError):
        # The root itself must exist for the whole pass
        if isinstance(err, FileNotFoundError) and Path(err.filename) != root:
            logger.debug(f"Directory vanished during walk: {err.filename}")
            return
        raise DirectoryListFailure(
            f"unable to read dir {err.filename}: {err}", path=err.filename
        ) from err

    for dirpath, _dirnames, _filenames in os.walk(root, topdown=False, onerror=onerror):
        path = Path(dirpath)
        if path == root:
            continue
        stats.dirs_visited += 1
        recursive_delete(path, conventions, root=root, stats=stats)

    logger.info(
        f"Prune complete: {stats.dirs_removed} directories and "
        f"{stats.sentinels_removed} sentinels removed"
    )
    return stats


__all__ = ["PruneStats", "delete_empty_dirs", "recursive_delete"]
