"""CLI entrypoint."""

import click

from archscan import __version__
from .commands.scan import scan
from .commands.inspect import inspect


@click.group()
@click.version_option(version=__version__, prog_name="archscan")
def cli():
    """archscan - list installed macOS applications by CPU architecture."""
    pass


cli.add_command(scan)
cli.add_command(inspect)


if __name__ == "__main__":
    cli()
