"""perftrace serve command - launch Chromium and serve the tools over MCP stdio."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console

from perftrace import __version__
from perftrace.config.loader import load_config, load_engine
from perftrace.core.errors import ConfigError, DriverError
from perftrace.core.logging import configure_logging, get_logger

if TYPE_CHECKING:
    from perftrace.config.models import PerfTraceConfig
    from perftrace.trace.protocols import TraceEngine

# stdout belongs to the MCP stdio transport while serving
err_console = Console(stderr=True)


@click.command()
@click.option("--url", default=None, help="Page to open before serving")
@click.option("--headed", is_flag=True, help="Show the browser window")
@click.option("--engine", "engine_path", default=None, help="Trace engine 'module:callable'")
@click.option(
    "--config-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory containing .perftrace/config.yaml (default: cwd)",
)
@click.pass_context
def serve_command(
    ctx: click.Context,
    url: str | None,
    headed: bool,
    engine_path: str | None,
    config_root: Path | None,
) -> None:
    """Launch Chromium and serve the performance tools over MCP stdio."""
    overrides: dict[str, dict[str, Any]] = {}
    if headed:
        overrides["browser"] = {"headless": False}
    if engine_path:
        overrides["tracing"] = {"engine": engine_path}

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    try:
        config = load_config(config_root, **overrides)
        if verbose:
            config.logging.level = "DEBUG"
        configure_logging(config=config.logging)
        engine = load_engine(config.tracing.engine)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    err_console.print(f"[bold]perftrace[/bold] {__version__} serving on stdio")
    try:
        asyncio.run(_serve(config, engine, url))
    except DriverError as e:
        raise click.ClickException(e.message) from e


async def _serve(config: PerfTraceConfig, engine: TraceEngine, url: str | None) -> None:
    from perftrace.drivers.playwright import launch_page
    from perftrace.mcp.context import AppContext
    from perftrace.mcp.server import create_mcp_server

    log = get_logger("perftrace.cli")
    async with launch_page(config.browser) as driver:
        if url:
            await driver.goto(url, wait_until="load")
        context = AppContext.create(driver, engine, config)
        mcp = create_mcp_server(context)
        log.info("mcp_server_running", page_url=driver.url())
        await mcp.run_async(transport="stdio")
