"""Tree rename walker.

Walks a tree once and moves every primary file that is not already in a
shard directory to a freshly generated shard path, together with its
companion file. Files that are already correctly placed only get their
directory's sentinel ensured, which makes repeated runs safe: an interrupted
run is resumed by simply running again.
"""

import logging
import os
import secrets
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Callable, Iterator, TextIO

from ..core.config import FileConventions, ShardLayout
from ..errors import DirectoryListFailure, ReadFailure
from .layout import random_name, valid_dir_structure
from .sentinel import create_sentinel
from .storage_utils import copy_file, ensure_dir

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 1000


@dataclass
class RenameState:
    """State owned by a single rename run.

    ``dirs`` holds every shard directory already used as a destination in
    this run, so each one is created, marked and logged exactly once no
    matter how many files land in it.
    """

    dirs: set[Path] = field(default_factory=set)
    files_seen: int = 0
    already_placed: int = 0
    companions_skipped: int = 0
    moved: int = 0
    companions_moved: int = 0
    dirs_created: int = 0

    def to_dict(self) -> dict:
        d = asdict(self)
        d.pop("dirs")
        return d


class DirectoryLog:
    """Append-only log of newly used shard directories, one per line.

    Writes are best-effort: a failed write is reported as a warning and the
    run carries on, since the file moves themselves are what matter.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.failures = 0

    @classmethod
    def open(cls, path: str | Path) -> "DirectoryLog":
        """Open (creating if needed) a log file for appending."""
        return cls(open(path, "a+"))

    def record(self, directory: str | Path) -> None:
        try:
            self.stream.write(f"{directory}\n")
            self.stream.flush()
        except (OSError, ValueError) as e:
            self.failures += 1
            logger.warning(f"Unable to write dir {directory} to directory log: {e}")

    def close(self) -> None:
        self.stream.close()

    def __enter__(self) -> "DirectoryLog":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def _walk_files(root: Path) -> Iterator[Path]:
    """Yield every non-directory entry under root in sorted order.

    A missing root is an error. Only directories below it may vanish.
    """

    def onerror(err: OSError):
        if isinstance(err, FileNotFoundError) and Path(err.filename) != root:
            logger.debug(f"Directory vanished during walk: {err.filename}")
            return
        raise DirectoryListFailure(
            f"unable to read dir {err.filename}: {err}", path=err.filename
        ) from err

    for dirpath, dirnames, filenames in os.walk(root, onerror=onerror):
        dirnames.sort()
        for name in sorted(filenames):
            yield Path(dirpath) / name


def _companion_exists(path: Path) -> bool:
    try:
        path.stat()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise ReadFailure(f"unable to stat companion file {path}: {e}", path=path) from e
    return True


def rename_all(
    log_sink: DirectoryLog | TextIO,
    root: str | Path,
    layout: ShardLayout = ShardLayout(),
    conventions: FileConventions = FileConventions(),
    state: RenameState | None = None,
    token_bytes: Callable[[int], bytes] = secrets.token_bytes,
) -> RenameState:
    """Move every misplaced primary file under root into the shard layout.

    Args:
        log_sink: Receives one line per newly used shard directory
        root: Tree root
        layout: Shard shape, shared with the classifier
        conventions: Primary/companion/sentinel naming
        state: Run state; a fresh one is created when omitted
        token_bytes: Random byte source for new names

    Returns:
        The run state with the destination directory set and counters

    Raises:
        ReshardError: On the first I/O failure; the walk stops there
    """
    root = Path(root)
    state = state if state is not None else RenameState()
    log = log_sink if isinstance(log_sink, DirectoryLog) else DirectoryLog(log_sink)
    ext = conventions.primary_extension

    for path in _walk_files(root):
        if not conventions.is_primary(path.name):
            continue
        if not path.is_file():
            logger.debug(f"Skipping {path}: no longer a regular file")
            continue

        state.files_seen += 1
        if state.files_seen % PROGRESS_EVERY == 0:
            logger.info(f"{state.files_seen} files handled")

        # Already in the shard layout, only make sure the dir is marked
        if valid_dir_structure(path.relative_to(root).as_posix(), layout):
            state.already_placed += 1
            create_sentinel(path.parent, conventions)
            continue

        # Companions are moved along with their primary
        if conventions.is_companion(path):
            state.companions_skipped += 1
            continue

        new_path = root / (random_name(layout, token_bytes) + ext)
        old_companion = conventions.companion_path(path)
        new_companion = conventions.companion_path(new_path)

        new_dir = new_path.parent
        if new_dir not in state.dirs:
            log.record(new_dir)
            ensure_dir(new_dir)
            create_sentinel(new_dir, conventions)
            state.dirs.add(new_dir)
            state.dirs_created += 1

        if path == new_path:
            continue

        copy_file(path, new_path)
        state.moved += 1
        logger.debug(f"Moved {path} -> {new_path}")

        if not _companion_exists(old_companion):
            continue

        copy_file(old_companion, new_companion)
        state.companions_moved += 1
        logger.debug(f"Moved {old_companion} -> {new_companion}")

    logger.info(
        f"Rename complete: {state.files_seen} files handled, {state.moved} moved, "
        f"{state.companions_moved} companions moved"
    )
    return state


__all__ = ["DirectoryLog", "RenameState", "rename_all"]
