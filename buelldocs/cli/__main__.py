"""BuellDocs CLI - Command-line interface for pay stubs and statements."""

import logging
import os

import click

from buelldocs import __version__

from .documents_commands import documents as documents_group
from .paystub_commands import paystubs as paystubs_group
from .settings_commands import settings as settings_group
from .statement_commands import statement as statement_group


def configure_logging() -> None:
    """Configure logging based on the LOG_LEVEL environment variable."""
    level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.version_option(version=__version__, prog_name="buelldocs")
def cli():
    """BuellDocs - Pay stub and bank statement figures.

    Configuration is loaded from (in order):

    \b
    1. BUELLDOCS_CONFIG_PATH environment variable
    2. ~/.config/buelldocs/ (XDG default)

    Set LOG_LEVEL=DEBUG to see calculation details.
    """
    configure_logging()


cli.add_command(paystubs_group)
cli.add_command(statement_group)
cli.add_command(documents_group)
cli.add_command(settings_group)


def main():
    cli()


if __name__ == "__main__":
    main()
