"""Tests for shard path classification and random name generation."""

import pytest

from reshard.core.config import ShardLayout
from reshard.services.layout import random_name, valid_dir_structure


class TestValidDirStructure:
    """Path classifier against a 2 level, 2 character layout."""

    @pytest.fixture
    def layout(self):
        return ShardLayout(depth=2, length=2)

    @pytest.mark.parametrize(
        "path,valid",
        [
            ("/", False),
            ("", False),
            ("/a/a/a/name", False),
            ("/name", False),
            ("name", False),
            ("/a/a/a/a/a/a/name", False),
            ("/aa/aa/aa/name/", False),
            ("aa/aa/aa/name", False),
            ("aa/name", False),
            ("aa/aaa/name", False),
            ("a/aa/name", False),
            ("/aa/aa/name", True),
            ("./aa/aa/name", True),
            ("aa/aa/name", True),
            ("//////aa/aa/name", True),
            ("//aa/aa/name", True),
            ("/aa//////aa/name", True),
            ("aa/./aa/name", True),
        ],
    )
    def test_file_paths(self, layout, path, valid):
        """File paths need exactly depth levels of the right width."""
        assert valid_dir_structure(path, layout) is valid

    @pytest.mark.parametrize(
        "path,valid",
        [
            ("aa/bb/", True),
            ("/aa/bb/", True),
            ("aa//bb/", True),
            ("aa/", False),
            ("aa/bb/cc/", False),
            ("aa/b/", False),
            ("aaa/bb/", False),
        ],
    )
    def test_directory_paths(self, layout, path, valid):
        """Paths with a trailing separator are checked as directories."""
        assert valid_dir_structure(path, layout) is valid

    def test_filename_length_unconstrained(self, layout):
        """Only directory levels are length checked."""
        assert valid_dir_structure("aa/bb/x", layout)
        assert valid_dir_structure("aa/bb/" + "f" * 200 + ".sia", layout)

    def test_default_layout(self):
        """Default layout is three levels of two characters."""
        layout = ShardLayout()
        assert valid_dir_structure("bb/bb/bb/file.sia", layout)
        assert not valid_dir_structure("bb/bb/file.sia", layout)
        assert not valid_dir_structure("bb/bb/bb/bb/file.sia", layout)


class TestRandomName:
    """Name generator output."""

    @pytest.mark.parametrize(
        "layout",
        [
            ShardLayout(),
            ShardLayout(depth=1, length=1),
            ShardLayout(depth=2, length=2),
            ShardLayout(depth=4, length=3, stem_length=5),
            ShardLayout(depth=5, length=4, stem_length=40),
        ],
    )
    def test_generated_names_are_valid(self, layout):
        """Every generated name is classified as correctly placed."""
        for _ in range(500):
            assert valid_dir_structure(random_name(layout), layout)

    def test_known_bytes(self):
        """Hex digest is sliced into levels followed by the stem."""
        name = random_name(ShardLayout(), token_bytes=lambda n: bytes(range(n)))
        assert name == "00/01/02/030405060708090a0b0c0d0e0f"

    def test_requests_enough_bytes(self):
        """Odd hex lengths round up to whole bytes and are trimmed."""
        layout = ShardLayout(depth=4, length=3, stem_length=5)
        requested = []

        def token_bytes(n):
            requested.append(n)
            return b"\xff" * n

        name = random_name(layout, token_bytes=token_bytes)

        assert requested == [9]
        parts = name.split("/")
        assert [len(p) for p in parts] == [3, 3, 3, 3, 5]

    def test_default_shape(self):
        """Default names follow a 2/2/2/26 structure of lowercase hex."""
        name = random_name(ShardLayout())
        parts = name.split("/")
        assert [len(p) for p in parts] == [2, 2, 2, 26]
        assert set("".join(parts)) <= set("0123456789abcdef")

    def test_names_differ(self):
        """Names come from a random source."""
        names = {random_name(ShardLayout()) for _ in range(100)}
        assert len(names) == 100
