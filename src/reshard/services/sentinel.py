"""Directory sentinel metadata.

Every shard directory carries a small JSON marker file (``.siadir`` by
default) describing the directory. reshard only ever creates it with default
values; an existing sentinel is never read back or rewritten during a run so
that its timestamps survive repeated runs.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.config import FileConventions
from ..core.paths import DEFAULT_DIR_PERM, SENTINEL_FILE_PERM
from ..errors import (
    PartialWriteFailure,
    ReadFailure,
    SentinelCreateFailure,
    SerializationFailure,
    SyncFailure,
    WriteFailure,
)

logger = logging.getLogger(__name__)

# Default metadata values for a directory nobody has health-checked yet
DEFAULT_DIR_HEALTH = 0.0
DEFAULT_DIR_REDUNDANCY = -1.0

# Go's zero time, used for "never checked" timestamps
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class DirMetadata(BaseModel):
    """Sentinel metadata record.

    Field aliases are the lowercase keys of the on-disk JSON format.
    """

    model_config = ConfigDict(populate_by_name=True)

    aggregate_health: float = Field(DEFAULT_DIR_HEALTH, alias="aggregatehealth")
    aggregate_last_health_check_time: datetime = Field(
        ZERO_TIME, alias="aggregatelasthealthchecktime"
    )
    aggregate_min_redundancy: float = Field(DEFAULT_DIR_REDUNDANCY, alias="aggregateminredundancy")
    aggregate_mod_time: datetime = Field(ZERO_TIME, alias="aggregatemodtime")
    aggregate_num_files: int = Field(0, alias="aggregatenumfiles")
    aggregate_num_stuck_chunks: int = Field(0, alias="aggregatenumstuckchunks")
    aggregate_num_sub_dirs: int = Field(0, alias="aggregatenumsubdirs")
    aggregate_remote_health: float = Field(DEFAULT_DIR_HEALTH, alias="aggregateremotehealth")
    aggregate_repair_size: int = Field(0, alias="aggregaterepairsize")
    aggregate_size: int = Field(0, alias="aggregatesize")
    aggregate_stuck_health: float = Field(DEFAULT_DIR_HEALTH, alias="aggregatestuckhealth")
    aggregate_stuck_size: int = Field(0, alias="aggregatestucksize")

    health: float = Field(DEFAULT_DIR_HEALTH, alias="health")
    last_health_check_time: datetime = Field(ZERO_TIME, alias="lasthealthchecktime")
    min_redundancy: float = Field(DEFAULT_DIR_REDUNDANCY, alias="minredundancy")
    mod_time: datetime = Field(ZERO_TIME, alias="modtime")
    mode: int = Field(DEFAULT_DIR_PERM, alias="mode")
    num_files: int = Field(0, alias="numfiles")
    num_stuck_chunks: int = Field(0, alias="numstuckchunks")
    num_sub_dirs: int = Field(0, alias="numsubdirs")
    remote_health: float = Field(DEFAULT_DIR_HEALTH, alias="remotehealth")
    repair_size: int = Field(0, alias="repairsize")
    size: int = Field(0, alias="size")
    stuck_health: float = Field(DEFAULT_DIR_HEALTH, alias="stuckhealth")
    stuck_size: int = Field(0, alias="stucksize")

    @classmethod
    def new(cls, now: datetime | None = None) -> "DirMetadata":
        """Default metadata for a directory created at ``now``."""
        now = now or datetime.now(timezone.utc)
        return cls(aggregate_mod_time=now, mod_time=now)


def sentinel_path(directory: str | Path, conventions: FileConventions) -> Path:
    return Path(directory) / conventions.sentinel_name


def create_sentinel(
    directory: str | Path,
    conventions: FileConventions = FileConventions(),
) -> bool:
    """Create the sentinel file in a directory if there is none.

    An existing sentinel is left untouched, including its timestamps.

    Args:
        directory: Existing directory
        conventions: Supplies the sentinel file name

    Returns:
        True if a sentinel was written, False if one was already present

    Raises:
        SerializationFailure: If the metadata cannot be serialized
        SentinelCreateFailure: If the sentinel file cannot be created
        WriteFailure: If writing the sentinel fails
        PartialWriteFailure: If only part of the metadata was written
        SyncFailure: If the sentinel cannot be flushed to disk
    """
    path = sentinel_path(directory, conventions)
    if path.exists():
        return False

    try:
        data = DirMetadata.new().model_dump_json(by_alias=True, indent=2).encode()
    except (TypeError, ValueError) as e:
        raise SerializationFailure(f"unable to marshal metadata for {path}: {e}", path=path) from e

    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, SENTINEL_FILE_PERM)
    except FileExistsError:
        # Created between the existence check and here
        return False
    except OSError as e:
        raise SentinelCreateFailure(f"unable to create sentinel {path}: {e}", path=path) from e

    try:
        try:
            n = os.write(fd, data)
        except OSError as e:
            raise WriteFailure(f"unable to write sentinel {path}: {e}", path=path) from e
        if n < len(data):
            raise PartialWriteFailure(
                f"write was only applied partially - {n} / {len(data)} to {path}", path=path
            )
        try:
            os.fsync(fd)
        except OSError as e:
            raise SyncFailure(f"unable to sync sentinel {path}: {e}", path=path) from e
    except BaseException:
        # A truncated sentinel would be trusted by every later run
        os.close(fd)
        path.unlink(missing_ok=True)
        raise

    os.close(fd)
    logger.debug(f"Created sentinel {path}")
    return True


def read_sentinel(
    directory: str | Path,
    conventions: FileConventions = FileConventions(),
) -> DirMetadata:
    """Load the sentinel metadata of a directory.

    Raises:
        ReadFailure: If the sentinel is missing, unreadable or malformed
    """
    path = sentinel_path(directory, conventions)
    try:
        return DirMetadata.model_validate_json(path.read_bytes())
    except OSError as e:
        raise ReadFailure(f"unable to read sentinel {path}: {e}", path=path) from e
    except ValidationError as e:
        raise ReadFailure(f"malformed sentinel {path}: {e}", path=path) from e
