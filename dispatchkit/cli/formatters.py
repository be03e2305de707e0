"""
CLI-specific formatting functions for human-readable output.

This module handles presentation formatting for the CLI, including:
- JSON and YAML rendering
- Rich tables for dispatch results and strategy listings
"""

import json
from typing import Any, Dict, List

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table


def format_output(data: Any, format_type: str) -> str:
    """Format data according to the specified format type."""
    if format_type == "yaml":
        return yaml.safe_dump(_to_plain(data), default_flow_style=False, sort_keys=False)
    elif format_type == "table":
        return format_table_output(data)
    else:
        # Default to JSON
        return json.dumps(data, indent=2, default=str)


def format_table_output(data: Any) -> str:
    """Format data as a table."""
    if isinstance(data, dict) and "strategies" in data:
        return format_strategies_table(data["family"], data["strategies"])
    elif isinstance(data, dict):
        return format_result_table(data)
    else:
        # Fallback to JSON for unknown data structures
        return json.dumps(data, indent=2, default=str)


def format_strategies_table(family: str, strategies: List[str]) -> str:
    """Format registered strategy keys as a table."""
    if not strategies:
        return f"No {family} strategies registered."

    table = Table(title=f"{family} strategies", show_header=True, header_style="bold magenta")
    table.add_column("#", style="yellow", justify="right", width=4)
    table.add_column("Key", style="cyan")

    for index, key in enumerate(strategies, start=1):
        table.add_row(str(index), escape(str(key)))

    return _render(table)


def format_result_table(result: Dict[str, Any]) -> str:
    """Format a single dispatch result as a field/value table."""
    table = Table(show_header=True, header_style="bold magenta", show_lines=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    for field, value in result.items():
        table.add_row(escape(str(field)), "" if value is None else escape(str(value)))

    return _render(table)


def _render(table: Table) -> str:
    # Capture Rich output as string
    console = Console(width=120, legacy_windows=False, force_terminal=False)
    with console.capture() as capture:
        console.print(table)
    return capture.get()


def _to_plain(data: Any) -> Any:
    # yaml.safe_dump only handles builtin types
    return json.loads(json.dumps(data, default=str))
