"""Console output for reshard commands."""
from typing import Any, Dict

from rich.console import Console
from rich.table import Table

console = Console()


def _status(style: str, mark: str, message: str) -> None:
    console.print(f"[{style}]{mark} {message}[/{style}]")


def success(message: str) -> None:
    _status("green", "✓", message)


def warning(message: str) -> None:
    _status("yellow", "!", message)


def error(message: str) -> None:
    _status("red", "✗", message)


def info(message: str) -> None:
    console.print(message)


def section(title: str) -> None:
    """Bold heading preceded by a blank line."""
    console.print()
    console.rule(f"[bold]{title}[/bold]", align="left")


def info_dict(data: Dict[str, Any]) -> None:
    """Print ``key: value`` lines, indented under the current section."""
    for key, value in data.items():
        console.print(f"  {key}: {value}", markup=False)


def stats_table(title: str, data: Dict[str, Any]) -> None:
    """Print run counters as a two-column table."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Counter")
    table.add_column("Value", justify="right")
    for key, value in data.items():
        table.add_row(key.replace("_", " "), str(value))
    console.print(table)
