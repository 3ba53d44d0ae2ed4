# src/costgraph/cli/services.py
"""
Implements the `services` commands of the costgraph CLI.
"""

import typer
from typing_extensions import Annotated

from ..reporters.console_reporter import ConsoleReporter
from ..storage.service_repository import ServiceRepository
from .utils import run_with_store

app = typer.Typer(help="Query services in the resource graph.", add_completion=False)


@app.command()
def live():
    """List all live services."""
    services = run_with_store(lambda store: ServiceRepository(store).retrieve_all_live_services())
    ConsoleReporter().report_entities(services, title="Live Services")


@app.command()
def hierarchy(name: Annotated[str, typer.Argument(help="Service name.")]):
    """Show a service and the pods it selects."""
    payload = run_with_store(lambda store: ServiceRepository(store).retrieve_service_hierarchy(name))
    ConsoleReporter().report_payload(payload)
