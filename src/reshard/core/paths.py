"""Centralized defaults for reshard.

This module defines the default locations and on-disk conventions used
across all components. All such defaults should come from here.
"""

from pathlib import Path

# Tree reorganized when no root is given
DEFAULT_ROOT = Path("./fs/var/skynet")

# Append-only audit log of newly used shard directories
DEFAULT_LOG_FILE = Path("dirpaths")

# Managed file naming
PRIMARY_EXTENSION = ".sia"
COMPANION_SUFFIX = "-extended"
SENTINEL_NAME = ".siadir"

# Permissions
DEFAULT_FILE_PERM = 0o644
DEFAULT_DIR_PERM = 0o755
SENTINEL_FILE_PERM = 0o600

# Shard shape (aa/bb/cc/<26 hex chars>)
DEFAULT_DIR_DEPTH = 3
DEFAULT_DIR_LENGTH = 2
DEFAULT_STEM_LENGTH = 26
