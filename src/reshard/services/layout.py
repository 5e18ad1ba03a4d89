"""Sharded path layout: classification and random name generation.

A sharded path has ``depth`` directory levels of exactly ``length``
characters each, followed by a filename:

    valid_dir_structure("ab/cd/ef/file.sia", ShardLayout())  -> True
    random_name(ShardLayout())  -> "3f/a2/9c/0b1d...e7"  (26 char stem)

Both functions take the same ``ShardLayout`` so that every generated name is
classified as correctly placed.
"""

import os
import posixpath
import secrets
from typing import Callable

from ..core.config import ShardLayout


def _segments(path: str) -> list[str]:
    """Normalize a path and split it into segments.

    Redundant separators and ``.`` segments are collapsed and leading
    separators are stripped.
    """
    path = path.replace(os.sep, "/")
    path = posixpath.normpath(path).lstrip("/")
    return path.split("/")


def valid_dir_structure(path: str, layout: ShardLayout) -> bool:
    """Check whether a path conforms to the shard layout.

    A path that is empty or ends with a separator is checked as a directory:
    it must have exactly ``depth`` segments of ``length`` characters. Any
    other path is checked as a file: ``depth`` such segments followed by a
    filename of any length.

    Args:
        path: Path relative to the tree root, leading separators allowed
        layout: Shard shape

    Returns:
        True if the path matches the layout
    """
    path = str(path)
    is_dir = path == "" or path.endswith(("/", os.sep))
    elements = _segments(path)

    if is_dir:
        if len(elements) != layout.depth:
            return False
        return all(len(el) == layout.length for el in elements)

    if len(elements) != layout.depth + 1:
        return False
    return all(len(el) == layout.length for el in elements[: layout.depth])


def random_name(
    layout: ShardLayout,
    token_bytes: Callable[[int], bytes] = secrets.token_bytes,
) -> str:
    """Generate a random relative path following the shard layout.

    Examples:
        depth=3, length=2, stem_length=26 -> "ab/cd/ef/0123456789abcdef0123456789"

    Args:
        layout: Shard shape
        token_bytes: Random byte source taking a byte count

    Returns:
        Relative path with ``depth`` directory levels and a hex filename stem
        (no extension)
    """
    digest = token_bytes(layout.random_bytes).hex()[: layout.hex_chars]

    parts = []
    for i in range(layout.depth):
        start = i * layout.length
        parts.append(digest[start:start + layout.length])
    parts.append(digest[layout.depth * layout.length:])

    return "/".join(parts)


__all__ = ["random_name", "valid_dir_structure"]
