"""Storage utilities for atomic writes and file relocation."""

import logging
import os
import tempfile
from pathlib import Path

from ..core.paths import DEFAULT_DIR_PERM, DEFAULT_FILE_PERM
from ..errors import DirectoryCreateFailure, ReadFailure, RemoveFailure, WriteFailure

logger = logging.getLogger(__name__)


def atomic_write(path: str | Path, content: bytes, mode: int = DEFAULT_FILE_PERM) -> None:
    """Write file atomically using temp file + rename.

    Readers never see a partially written file under the final name. The
    file is written to a temporary location in the same directory, synced,
    given its final permissions and atomically renamed.

    Args:
        path: Target file path, whose parent directory must exist
        content: Bytes to write
        mode: Permission bits of the final file

    Raises:
        OSError: If write or rename fails
    """
    path = Path(path)

    with tempfile.NamedTemporaryFile(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
            os.chmod(tmp_path, mode)

            # Atomic rename (on POSIX systems)
            tmp_path.replace(path)
            logger.debug(f"Atomically wrote {len(content)} bytes to {path}")

        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise


def copy_file(old_path: str | Path, new_path: str | Path) -> None:
    """Move a file's bytes to a new path and remove the original.

    The destination is fully written before the source is removed, so an
    interruption leaves at most one extra copy of the file, never none.

    Args:
        old_path: Existing file
        new_path: Destination file, whose parent directory must exist

    Raises:
        ReadFailure: If the source cannot be read
        WriteFailure: If the destination cannot be written
        RemoveFailure: If the source cannot be removed after copying
    """
    old_path = Path(old_path)
    new_path = Path(new_path)

    try:
        data = old_path.read_bytes()
    except OSError as e:
        raise ReadFailure(f"copy_file: unable to read {old_path}: {e}", path=old_path) from e

    try:
        atomic_write(new_path, data)
    except OSError as e:
        raise WriteFailure(f"copy_file: unable to write {new_path}: {e}", path=new_path) from e

    try:
        old_path.unlink()
    except OSError as e:
        raise RemoveFailure(f"copy_file: unable to remove {old_path}: {e}", path=old_path) from e


def ensure_dir(path: str | Path, mode: int = DEFAULT_DIR_PERM) -> Path:
    """Ensure directory exists, creating parents if necessary.

    Args:
        path: Directory path
        mode: Permission bits for created directories (subject to umask)

    Returns:
        Path object for the directory

    Raises:
        DirectoryCreateFailure: If the directory cannot be created
    """
    path = Path(path)
    try:
        path.mkdir(mode=mode, parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreateFailure(f"unable to create directory {path}: {e}", path=path) from e
    return path
