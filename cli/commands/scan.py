"""Scan command."""

import sys

import click

from archscan import render_json, render_report, scan_applications
from archscan.errors import DirectoryOpenError
from cli.commands.options import build_prober, prober_option, verbosity_options


@click.command()
@prober_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Report format",
)
@verbosity_options
def scan(prober: str, output_format: str, verbose: bool, quiet: bool):
    """Classify every application in /Applications by CPU architecture."""
    # Keep JSON on stdout parseable
    log_stream = sys.stderr if output_format == "json" else None
    architecture_prober = build_prober(prober, verbose, quiet, log_stream)

    try:
        result = scan_applications(prober=architecture_prober)
    except DirectoryOpenError as e:
        click.echo(f"Error opening directory: {e}", err=True)
        raise click.Abort()

    if output_format == "json":
        click.echo(render_json(result))
    else:
        click.echo(render_report(result))
