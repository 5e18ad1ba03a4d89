"""reshard - reorganize content-addressed files into a sharded directory tree."""

from ._version import __version__
from .core import FileConventions, ReshardConfig, ShardLayout
from .services import delete_empty_dirs, rename_all

__all__ = [
    "FileConventions",
    "ReshardConfig",
    "ShardLayout",
    "__version__",
    "delete_empty_dirs",
    "rename_all",
]
