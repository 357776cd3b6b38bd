"""Shared CLI output and logging helpers.

While serving, stdout carries the protocol stream, so logs and diagnostics
always go through :data:`err_console`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from incidentio_mcp.protocol.models import ToolDescriptor  # noqa: TC001

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: int | str = logging.INFO) -> None:
    """Route all logging to stderr through rich."""
    if isinstance(level, str) and level not in logging.getLevelNamesMapping():
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def print_tools_table(tools: Iterable[ToolDescriptor]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")
    table.add_column("Optional")

    for tool in tools:
        properties = tool.input_schema.get("properties", {})
        required = list(tool.input_schema.get("required", []))
        optional = [name for name in properties if name not in required]
        table.add_row(
            tool.name,
            _truncate(tool.description),
            ", ".join(required) or "-",
            ", ".join(optional) or "-",
        )

    console.print(table)


def print_tools_json(tools: Iterable[ToolDescriptor]) -> None:
    """Print tool descriptors exactly as ``tools/list`` returns them."""
    data = {"tools": [t.model_dump(by_alias=True) for t in tools]}
    click.echo(json.dumps(data, indent=2))


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
