"""Resharding services: classification, relocation, renaming and pruning."""

from .layout import random_name, valid_dir_structure
from .prune import PruneStats, delete_empty_dirs, recursive_delete
from .rename import DirectoryLog, RenameState, rename_all
from .sentinel import DirMetadata, create_sentinel, read_sentinel
from .storage_utils import copy_file

__all__ = [
    "DirMetadata",
    "DirectoryLog",
    "PruneStats",
    "RenameState",
    "copy_file",
    "create_sentinel",
    "delete_empty_dirs",
    "random_name",
    "read_sentinel",
    "recursive_delete",
    "rename_all",
    "valid_dir_structure",
]
