# src/costgraph/cli/main.py
"""
This module is the main entry point for the costgraph CLI.

It aggregates the command groups (pods, services).
"""

import logging

import typer

from ..core.config import config
from . import pods, services

# --- Setup Logger ---
logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="costgraph",
    help="Query the cluster resource graph and attribute node cost to pods.",
    add_completion=False,
)


def version_callback(value: bool):
    if value:
        from .. import __version__

        typer.echo(f"costgraph version: {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of costgraph.
    """
    from .. import __version__

    typer.echo(f"costgraph version: {__version__}")


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """
    costgraph CLI main entry point.
    """
    pass


app.add_typer(pods.app, name="pods")
app.add_typer(services.app, name="services")


if __name__ == "__main__":
    app()
