"""Command line interface for cssif."""

import logging

import click

from cssif import __version__

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@click.group()
@click.version_option(version=__version__, prog_name="cssif")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log transform details to stderr.")
def cli(verbose: bool) -> None:
    """Rewrite CSS if() functions into native @media/@supports rules."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)


from cssif.cli.check import check  # noqa: E402
from cssif.cli.transform import transform  # noqa: E402

for command in (transform, check):
    cli.add_command(command)
