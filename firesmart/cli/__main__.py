import logging

import click
from importlib.metadata import version as importlib_version

from .analyze import analyze, emergency, optimize, report, simulate
from .zones import detect, find_safe_zone

LOG_LEVELS = ["error", "warning", "info", "debug"]

_LOGGER = logging.getLogger(__name__)


@click.group()
@click.option("--log-level", type=click.Choice(LOG_LEVELS), default="warning")
def cli(log_level: str) -> None:
    level = getattr(logging, log_level.upper())
    logging.basicConfig(level=level)
    _LOGGER.debug("firesmart version: %s", get_version())


@cli.command()
def version() -> None:
    """Print installed package version."""
    print(get_version())


def get_version() -> str:
    return importlib_version("firesmart")


cli.add_command(report)
cli.add_command(analyze)
cli.add_command(emergency)
cli.add_command(optimize)
cli.add_command(simulate)
cli.add_command(detect)
cli.add_command(find_safe_zone)

if __name__ == "__main__":
    cli()
