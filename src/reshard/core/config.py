"""reshard configuration management.

The shard shape and the file naming conventions are plain values that get
threaded into every component that needs them. The classifier and the name
generator must always be given the same ``ShardLayout``; otherwise freshly
generated names would be considered misplaced on the next run.

Configuration can optionally be loaded from a YAML file (``--config``) and
is otherwise built from defaults plus CLI flags.
"""

from pathlib import Path

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from ..errors import ConfigError
from .config_base import ConfigModel
from .paths import (
    COMPANION_SUFFIX,
    DEFAULT_DIR_DEPTH,
    DEFAULT_DIR_LENGTH,
    DEFAULT_LOG_FILE,
    DEFAULT_ROOT,
    DEFAULT_STEM_LENGTH,
    PRIMARY_EXTENSION,
    SENTINEL_NAME,
)


class ShardLayout(BaseModel):
    """Shape of the sharded directory tree."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    depth: int = Field(default=DEFAULT_DIR_DEPTH, ge=1)
    """Number of shard directory levels below the root."""

    length: int = Field(default=DEFAULT_DIR_LENGTH, ge=1)
    """Characters per shard directory level."""

    stem_length: int = Field(default=DEFAULT_STEM_LENGTH, ge=1)
    """Hex characters in a generated filename stem."""

    @property
    def hex_chars(self) -> int:
        """Total hex characters in a generated relative name."""
        return self.depth * self.length + self.stem_length

    @property
    def random_bytes(self) -> int:
        """Random bytes needed to produce ``hex_chars`` hex characters."""
        return (self.hex_chars + 1) // 2


class FileConventions(BaseModel):
    """Naming conventions for managed files and directory sentinels."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    primary_extension: str = PRIMARY_EXTENSION
    """Extension of the files that get resharded."""

    companion_suffix: str = COMPANION_SUFFIX
    """Token inserted before the extension to name a primary's companion."""

    sentinel_name: str = SENTINEL_NAME
    """Name of the metadata marker file kept in each directory."""

    @field_validator("primary_extension")
    @classmethod
    def _dotted(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2 or "/" in v:
            raise ValueError("Must be a dotted file extension such as '.sia'")
        return v

    @field_validator("companion_suffix", "sentinel_name")
    @classmethod
    def _plain_name(cls, v: str) -> str:
        if not v or "/" in v:
            raise ValueError("Must be a non-empty name without path separators")
        return v

    @model_validator(mode="after")
    def _sentinel_not_managed(self) -> "FileConventions":
        if self.sentinel_name.endswith(self.primary_extension):
            raise ValueError("sentinel_name must not carry the primary extension")
        return self

    def is_primary(self, name: str) -> bool:
        """Whether a file name carries the primary extension."""
        return name.endswith(self.primary_extension)

    def base_name(self, path: str | Path) -> str:
        """Path with the primary extension stripped."""
        path = str(path)
        if path.endswith(self.primary_extension):
            return path[: -len(self.primary_extension)]
        return path

    def is_companion(self, path: str | Path) -> bool:
        """Whether a primary-extension path names a companion file."""
        return self.base_name(path).endswith(self.companion_suffix)

    def companion_path(self, path: str | Path) -> Path:
        """Companion counterpart of a primary file path.

        Example:
            ``a/file.sia`` -> ``a/file-extended.sia``
        """
        return Path(self.base_name(path) + self.companion_suffix + self.primary_extension)


class ReshardConfig(ConfigModel):
    """Main configuration model for a reshard run."""

    root: Path = DEFAULT_ROOT
    """Root of the tree to reorganize."""

    log_file: Path = DEFAULT_LOG_FILE
    """Append-only log of newly used shard directories."""

    layout: ShardLayout = Field(default_factory=ShardLayout)
    """Shard shape shared by the classifier and the name generator."""

    files: FileConventions = Field(default_factory=FileConventions)
    """Managed file naming conventions."""

    def with_overrides(self, **overrides) -> "ReshardConfig":
        """Return a copy with CLI overrides applied.

        ``None`` values are ignored. ``depth`` and ``length`` update the
        layout; everything else is a top-level field.
        """
        overrides = {k: v for k, v in overrides.items() if v is not None}
        layout_fields = {k: overrides.pop(k) for k in ("depth", "length") if k in overrides}
        data = self.model_dump()
        data.update(overrides)
        if layout_fields:
            data["layout"] = {**data["layout"], **layout_fields}
        try:
            return type(self).model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration override: {e}") from e
