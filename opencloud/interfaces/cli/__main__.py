"""Entry point for running the opencloud CLI.

Executing ``python -m opencloud.interfaces.cli`` (or the ``opencloud``
console script) invokes the top-level group below.
"""

import click

from .schema import schema
from .token import token


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def cli() -> None:
    """opencloud command-line interface."""


cli.add_command(token)
cli.add_command(schema)


if __name__ == "__main__":
    cli()
