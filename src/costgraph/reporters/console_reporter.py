# src/costgraph/reporters/console_reporter.py
"""
A reporter that displays query and cost results in formatted console tables.
"""

import logging
from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from ..models.cost import CostSummary, PodCost
from ..models.graph import GraphEntity, JSONDataWrapper

logger = logging.getLogger(__name__)


class ConsoleReporter:
    """
    Renders costgraph data to the console using the 'rich' library.
    """

    def __init__(self):
        self.console = Console()

    def report_pod_costs(self, pod_costs: List[PodCost], summary: Optional[CostSummary] = None):
        """
        Displays the per-pod cost breakdown, sorted by total cost, followed by
        the summary totals.
        """
        if not pod_costs:
            self.console.print("No pods to report.", style="yellow")
            return

        table = Table(
            title="Pods Cost Details",
            header_style="bold magenta",
            show_lines=True,
        )
        table.add_column("Pod Name", style="cyan")
        table.add_column("Namespace", style="cyan")
        table.add_column("Node", style="blue")
        table.add_column("Compute Share (%)", style="dim", justify="right")
        table.add_column("Persistent Volume Claims", style="dim")
        table.add_column("Total Cost ($)", style="green", justify="right")
        table.add_column("CPU Cost ($)", justify="right")
        table.add_column("Memory Cost ($)", justify="right")
        table.add_column("Storage Cost ($)", justify="right")

        for item in sorted(pod_costs, key=lambda p: p.cost.total, reverse=True):
            table.add_row(
                item.pod_name,
                item.namespace,
                item.node_name or "",
                f"{item.node_cost_percentage * 100.0:.2f}",
                "\n".join(item.pvcs),
                f"{item.cost.total:.6f}",
                f"{item.cost.cpu:.6f}",
                f"{item.cost.memory:.6f}",
                f"{item.cost.storage:.6f}",
            )
        self.console.print(table)

        if summary is not None:
            self.report_summary(summary)

    def report_summary(self, summary: CostSummary):
        table = Table(title="Total Cost Summary", header_style="bold magenta")
        table.add_column("Pods", justify="right")
        table.add_column("Total Cost ($)", style="green", justify="right")
        table.add_column("CPU Cost ($)", justify="right")
        table.add_column("Memory Cost ($)", justify="right")
        table.add_column("Storage Cost ($)", justify="right")
        table.add_row(
            str(summary.pod_count),
            f"{summary.cost.total:.6f}",
            f"{summary.cost.cpu:.6f}",
            f"{summary.cost.memory:.6f}",
            f"{summary.cost.storage:.6f}",
        )
        self.console.print(table)

    def report_entities(self, entities: Sequence[GraphEntity], title: str):
        if not entities:
            self.console.print("No data to report.", style="yellow")
            return
        table = Table(title=title, header_style="bold magenta")
        table.add_column("UID", style="dim")
        table.add_column("XID", style="dim")
        table.add_column("Name", style="cyan")
        for entity in entities:
            table.add_row(entity.uid, entity.xid or "", entity.name)
        self.console.print(table)

    def report_payload(self, payload: JSONDataWrapper):
        if payload.is_empty:
            self.console.print("No data to report.", style="yellow")
            return
        self.console.print_json(payload.model_dump_json(by_alias=True, exclude_none=True))

    def report_raw(self, raw: Optional[bytes]):
        if not raw:
            self.console.print("No data to report.", style="yellow")
            return
        self.console.print_json(raw.decode("utf-8"))
