"""Inspect command."""

import click
from pathlib import Path

from archscan import inspect_executable
from archscan.errors import ArchitectureDetectionError
from cli.commands.options import build_prober, prober_option, verbosity_options


@click.command()
@click.argument("executable", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@prober_option
@verbosity_options
def inspect(executable: Path, prober: str, verbose: bool, quiet: bool):
    """Show the architecture descriptor and category of one executable."""
    architecture_prober = build_prober(prober, verbose, quiet)

    try:
        descriptor, architecture = inspect_executable(executable, architecture_prober)
    except ArchitectureDetectionError as e:
        click.echo(f"❌ Error determining architecture: {e}", err=True)
        raise click.Abort()

    click.echo(f"{executable}")
    click.echo(f"  Descriptor: {descriptor}")
    click.echo(f"  Category:   {architecture.value}")
