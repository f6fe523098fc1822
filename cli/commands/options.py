"""Options shared by the scan and inspect commands."""

from typing import Optional, TextIO

import click

from archscan.probers import PROBER_NAMES, ArchitectureProber, ProberFactory
from cli.config import ConfigError, Settings, get_settings
from cli.log import configure_logging


def prober_option(f):
    return click.option(
        "--prober",
        type=click.Choice(PROBER_NAMES),
        default=None,
        help="How to detect architectures: the file(1) utility or Mach-O header parsing",
    )(f)


def verbosity_options(f):
    f = click.option("--verbose", "-v", is_flag=True, help="Show per-bundle classification details")(f)
    f = click.option("--quiet", "-q", is_flag=True, help="Only show errors and the report")(f)
    return f


def load_settings() -> Settings:
    try:
        return get_settings()
    except ConfigError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()


def build_prober(prober: str, verbose: bool, quiet: bool, log_stream: Optional[TextIO] = None) -> ArchitectureProber:
    """Apply config and command-line overrides, then build the prober."""
    settings = load_settings()

    level = settings.log_level
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    configure_logging(level, log_stream)

    return ProberFactory.get_prober(prober or settings.prober, settings.file_command)
