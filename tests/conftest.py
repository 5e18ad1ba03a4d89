"""Test configuration and shared fixtures for reshard tests."""

import itertools
import logging
from pathlib import Path

import pytest

from reshard.core.config import FileConventions, ShardLayout


def write_file(path: Path, data: bytes = b"") -> Path:
    """Create a file and any missing parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def files_under(root: Path) -> list[Path]:
    """All regular files below root, relative to it."""
    return sorted(p.relative_to(root) for p in root.rglob("*") if p.is_file())


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo logging.basicConfig calls made by CLI commands under test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def layout():
    """Default 3 level, 2 character shard layout."""
    return ShardLayout()


@pytest.fixture
def conventions():
    """Default .sia / -extended / .siadir conventions."""
    return FileConventions()


@pytest.fixture
def tree_root(tmp_path):
    """Empty tree root kept apart from other test artifacts."""
    root = tmp_path / "files"
    root.mkdir()
    return root


@pytest.fixture
def same_dir_source():
    """Random byte source that always picks the ab/cd/ef shard directory.

    The remaining bytes come from a counter so every name is still unique.
    """
    counter = itertools.count(1)

    def token_bytes(n: int) -> bytes:
        return b"\xab\xcd\xef" + next(counter).to_bytes(n - 3, "big")

    return token_bytes
