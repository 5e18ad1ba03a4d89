"""Configuration and defaults for reshard."""

from .config import FileConventions, ReshardConfig, ShardLayout

__all__ = ["FileConventions", "ReshardConfig", "ShardLayout"]
