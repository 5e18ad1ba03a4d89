"""YAML-backed pydantic base for reshard configuration."""

from pathlib import Path
from typing import NoReturn, TypeVar

import typer
import yaml
from pydantic import BaseModel, ValidationError
from rich.console import Console

T = TypeVar("T", bound="ConfigModel")
console = Console(stderr=True)


def _config_exit(headline: str, details: list[str]) -> NoReturn:
    """Report an unusable configuration file and exit with status 1."""
    console.print(f"[red]{headline}[/red]")
    for line in details:
        console.print(f"  {line}", markup=False)
    raise typer.Exit(1)


class ConfigModel(BaseModel):
    """Model that reads and writes itself as YAML."""

    @classmethod
    def from_yaml(cls: type[T], path: Path) -> T:
        """
        Load and validate a configuration file.

        Unset keys keep their defaults, so an empty file is valid.

        Raises:
            typer.Exit: If the file is missing, unreadable, not YAML, or fails validation
        """
        path = Path(path)
        try:
            text = path.read_text()
        except FileNotFoundError:
            _config_exit(f"Configuration file not found: {path}", [])
        except OSError as e:
            _config_exit(f"Cannot read configuration file {path}", [str(e)])

        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            where = [f"line {mark.line + 1}, column {mark.column + 1}"] if mark else []
            _config_exit(f"{path.name} is not valid YAML", where + [str(e)])
        if not isinstance(data, dict):
            _config_exit(f"{path.name} must hold a mapping of settings", [])

        try:
            return cls(**data)
        except ValidationError as e:
            _config_exit(
                f"{path.name} is not a valid {cls.__name__}",
                [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
            )

    @classmethod
    def load_or_default(cls: type[T], path: Path | None) -> T:
        """Load ``path`` when given, otherwise return the defaults."""
        return cls.from_yaml(path) if path else cls()

    def to_yaml_string(self) -> str:
        return yaml.safe_dump(self.model_dump(mode="json"), sort_keys=False)

    def to_yaml(self, path: Path):
        Path(path).write_text(self.to_yaml_string())
