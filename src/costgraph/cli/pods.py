# src/costgraph/cli/pods.py
"""
Implements the `pods` commands of the costgraph CLI.
"""

import asyncio
import logging
import traceback
from typing import List, Optional

import typer
from typing_extensions import Annotated

from ..core.exceptions import CostGraphError
from ..core.k8s_client import KubernetesClient
from ..core.processor import CostProcessor
from ..models.graph import ALL
from ..reporters.console_reporter import ConsoleReporter
from ..storage.dgraph_store import DgraphStore
from ..storage.pod_repository import PodRepository
from .utils import parse_label_options, run_with_store

logger = logging.getLogger(__name__)

app = typer.Typer(help="Query pods in the resource graph and report their cost.", add_completion=False)


@app.command()
def live():
    """List all live pods."""
    pods = run_with_store(lambda store: PodRepository(store).retrieve_all_live_pods())
    ConsoleReporter().report_entities(pods, title="Live Pods")


@app.command()
def interactions(
    name: Annotated[str, typer.Argument(help="Pod name, or '*' for all pods.")] = ALL,
    orphan: Annotated[bool, typer.Option("--orphan", help="Include pods without outbound interactions.")] = False,
):
    """Show inbound and outbound interactions."""
    raw = run_with_store(lambda store: PodRepository(store).retrieve_pods_interactions(name, orphan))
    ConsoleReporter().report_raw(raw)


@app.command()
def hierarchy(name: Annotated[str, typer.Argument(help="Pod name.")]):
    """Show a pod and its containers."""
    payload = run_with_store(lambda store: PodRepository(store).retrieve_pod_hierarchy(name))
    ConsoleReporter().report_payload(payload)


@app.command()
def metrics(name: Annotated[str, typer.Argument(help="Pod name.")]):
    """Show resource requests and cost of a pod and its containers."""
    payload = run_with_store(lambda store: PodRepository(store).retrieve_pod_metrics(name))
    ConsoleReporter().report_payload(payload)


@app.command("by-labels")
def by_labels(
    label: Annotated[
        List[str],
        typer.Option("--label", "-l", help="key=value; repeat a key for alternatives."),
    ],
):
    """List the uids of pods matching every label key."""
    mapping = parse_label_options(label)
    try:
        uids = run_with_store(lambda store: PodRepository(store).retrieve_pods_uids_by_labels_filter(mapping))
    except CostGraphError as e:
        logger.error(f"Failed to select pods by labels: {e}")
        raise typer.Exit(code=1)
    for uid in uids:
        typer.echo(uid)


@app.command()
def cost(
    label: Annotated[str, typer.Option("--label", "-l", help="Label selecting the pods, as key=value.")],
    use_graph_prices: Annotated[
        bool,
        typer.Option("--graph-prices/--default-prices", help="Read per-pod prices from the graph."),
    ] = True,
    hours: Annotated[Optional[float], typer.Option("--hours", help="Billing period in hours.", min=0.0)] = None,
):
    """Attribute node cost to the pods selected by a label."""

    async def _cost_async():
        async with KubernetesClient() as k8s_client, DgraphStore() as store:
            repository = PodRepository(store) if use_graph_prices else None
            processor = CostProcessor(k8s_client, pod_repository=repository, period_hours=hours)
            pod_costs = await processor.pods_cost_for_label(label)
            return pod_costs, processor.summarize(pod_costs)

    try:
        pod_costs, summary = asyncio.run(_cost_async())
    except ValueError as e:
        raise typer.BadParameter(str(e))
    except CostGraphError as e:
        logger.error(f"An error occurred during cost attribution: {e}")
        logger.debug("Cost attribution failed: %s", traceback.format_exc())
        raise typer.Exit(code=1)

    ConsoleReporter().report_pod_costs(pod_costs, summary)
