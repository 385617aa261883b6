"""perftrace CLI - perftrace command."""

import click

from perftrace import __version__
from perftrace.cli.categories import categories_command
from perftrace.cli.serve import serve_command


@click.group()
@click.version_option(version=__version__, prog_name="perftrace")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """perftrace - browser performance tracing tools for AI agents."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


cli.add_command(serve_command, name="serve")
cli.add_command(categories_command, name="categories")


if __name__ == "__main__":
    cli()
