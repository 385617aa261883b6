"""perftrace categories command - print the trace category allow-list."""

import click
from rich.console import Console
from rich.table import Table

from perftrace.config.constants import TRACE_CATEGORIES, TRACE_CATEGORIES_VERSION


@click.command()
def categories_command() -> None:
    """Print the categories enabled when a trace is recorded."""
    table = Table(title=f"Trace categories (v{TRACE_CATEGORIES_VERSION})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Category")
    for i, category in enumerate(TRACE_CATEGORIES, start=1):
        table.add_row(str(i), category)
    Console().print(table)
