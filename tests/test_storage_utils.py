"""Tests for file relocation and atomic writes."""

import os
import stat
from pathlib import Path
from unittest import mock

import pytest

from conftest import write_file
from reshard.errors import DirectoryCreateFailure, ReadFailure, RemoveFailure, WriteFailure
from reshard.services.storage_utils import atomic_write, copy_file, ensure_dir


class TestCopyFile:
    """copy_file moves bytes to a new path and removes the source."""

    def test_moves_data(self, tmp_path):
        """Destination holds the source bytes and the source is gone."""
        data = os.urandom(100)
        old = write_file(tmp_path / "testfile.dat", data)
        new = tmp_path / "newname.dat"

        copy_file(old, new)

        assert new.read_bytes() == data
        assert not old.exists()

    def test_standard_permissions(self, tmp_path):
        """Destination gets standard file permissions."""
        old = write_file(tmp_path / "a.sia", b"x")
        new = tmp_path / "b.sia"

        copy_file(old, new)

        assert stat.S_IMODE(new.stat().st_mode) == 0o644

    def test_no_temp_files_left(self, tmp_path):
        """Only the destination remains in the target directory."""
        old = write_file(tmp_path / "src" / "a.sia", b"x")
        dest_dir = tmp_path / "dest"
        dest_dir.mkdir()

        copy_file(old, dest_dir / "b.sia")

        assert os.listdir(dest_dir) == ["b.sia"]

    def test_missing_source(self, tmp_path):
        """Unreadable source raises ReadFailure and writes nothing."""
        new = tmp_path / "new.sia"

        with pytest.raises(ReadFailure) as excinfo:
            copy_file(tmp_path / "missing.sia", new)

        assert isinstance(excinfo.value.__cause__, FileNotFoundError)
        assert excinfo.value.path == tmp_path / "missing.sia"
        assert not new.exists()

    def test_unwritable_destination_keeps_source(self, tmp_path):
        """Failed write raises WriteFailure and leaves the source intact."""
        old = write_file(tmp_path / "a.sia", b"keep me")

        with pytest.raises(WriteFailure):
            copy_file(old, tmp_path / "no" / "such" / "dir" / "b.sia")

        assert old.read_bytes() == b"keep me"

    def test_remove_failure_keeps_both_copies(self, tmp_path):
        """If the source cannot be removed both copies survive."""
        old = write_file(tmp_path / "a.sia", b"data")
        new = tmp_path / "b.sia"

        with mock.patch.object(Path, "unlink", side_effect=PermissionError(13, "denied")):
            with pytest.raises(RemoveFailure):
                copy_file(old, new)

        assert old.read_bytes() == b"data"
        assert new.read_bytes() == b"data"


class TestAtomicWrite:
    """atomic_write never leaves a partial file behind."""

    def test_writes_content(self, tmp_path):
        target = tmp_path / "out.bin"
        atomic_write(target, b"hello")
        assert target.read_bytes() == b"hello"

    def test_replaces_existing(self, tmp_path):
        target = write_file(tmp_path / "out.bin", b"old")
        atomic_write(target, b"new")
        assert target.read_bytes() == b"new"

    def test_failed_sync_cleans_up(self, tmp_path):
        """A failure before the rename removes the temp file."""
        target = tmp_path / "out.bin"

        with mock.patch("reshard.services.storage_utils.os.fsync", side_effect=OSError(5, "EIO")):
            with pytest.raises(OSError):
                atomic_write(target, b"data")

        assert os.listdir(tmp_path) == []


class TestEnsureDir:
    def test_creates_nested(self, tmp_path):
        path = ensure_dir(tmp_path / "ab" / "cd" / "ef")
        assert path.is_dir()

    def test_existing_is_fine(self, tmp_path):
        assert ensure_dir(tmp_path) == tmp_path

    def test_blocked_by_file(self, tmp_path):
        """A file in the way raises DirectoryCreateFailure."""
        write_file(tmp_path / "ab", b"")

        with pytest.raises(DirectoryCreateFailure):
            ensure_dir(tmp_path / "ab" / "cd")
