"""Rendering helpers for tables and JSON output."""

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from nixbrew.cli.output import machine_output
from nixbrew.core.nix.types import VersionQuery
from nixbrew.core.registry import PackageInfo


def print_table(table: Table) -> None:
    # stderr, consistent with the user_output convention
    console = Console(stderr=True, width=200)
    console.print(table)


def emit_json(data: Any) -> None:
    machine_output(json.dumps(data, indent=2))


def channel_versions_table(results: list[tuple[str, VersionQuery]]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("channel", style="cyan", no_wrap=True)
    table.add_column("version", no_wrap=True)
    for channel, query in results:
        if query.success and query.version is not None:
            version_cell = query.version
        else:
            version_cell = "[dim]unavailable[/dim]"
        table.add_row(channel, version_cell)
    return table


def channel_versions_json(results: list[tuple[str, VersionQuery]]) -> list[dict[str, Any]]:
    return [
        {"channel": channel, "available": query.success, "version": query.version}
        for channel, query in results
    ]


def history_table(entries: list[PackageInfo]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("version", no_wrap=True)
    table.add_column("installed", no_wrap=True)
    table.add_column("reference", style="cyan", no_wrap=True)
    for i, info in enumerate(entries, start=1):
        version_cell = info.version if info.version is not None else "[dim]latest[/dim]"
        table.add_row(str(i), version_cell, info.installed_at, info.reference)
    return table
