# src/costgraph/core/processor.py
"""
Attributes node cost to the pods selected by a label.

For every pod the host node is read once per run, the pod's share of that
node is derived from its requests, the storage of its claims is summed, and
the Cost Attribution Engine turns all of it into a cost breakdown.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..collectors.pod_collector import PodCollector
from ..models.cost import CostSummary, PodCost
from ..models.node import NodeInfo, PodDescriptor
from ..storage.pod_repository import PodRepository
from .config import config
from .cost import BYTES_PER_GB, aggregate_costs, compute_cost, node_cost_percentage, resolve_prices
from .k8s_client import KubernetesClient

logger = logging.getLogger(__name__)


class CostProcessor:
    """
    Computes per-pod costs for a label selection.

    ``pod_repository`` is optional: with it, prices stored on the pod vertices
    are used; without it (or for pods without stored prices) the configured
    default unit prices apply.
    """

    def __init__(
        self,
        k8s_client: KubernetesClient,
        pod_repository: Optional[PodRepository] = None,
        period_hours: Optional[float] = None,
    ):
        self.k8s_client = k8s_client
        self.pod_collector = PodCollector(k8s_client)
        self.pod_repository = pod_repository
        self.period_hours = period_hours if period_hours is not None else config.COST_PERIOD_HOURS

    async def pods_cost_for_label(self, label: str) -> List[PodCost]:
        """Returns the cost breakdown of every pod matching ``label``."""
        pods = await self.pod_collector.collect(label)
        nodes: Dict[str, Optional[NodeInfo]] = {}
        results: List[PodCost] = []

        for pod in pods:
            node = await self._node_for(pod, nodes)
            share = 0.0
            cpu_usage = memory_usage = 0.0
            if node is not None:
                share = node_cost_percentage(
                    pod.cpu_request,
                    pod.memory_request,
                    node.cpu_capacity_cores,
                    node.memory_capacity_bytes,
                )
                cpu_usage = node.cpu_capacity_cores * self.period_hours
                memory_usage = node.memory_capacity_bytes / BYTES_PER_GB * self.period_hours

            storage_bytes = 0
            for claim in pod.pvcs:
                storage_bytes += await self.k8s_client.get_pvc_capacity(claim, pod.namespace)
            storage_usage = storage_bytes / BYTES_PER_GB * self.period_hours

            cpu_price, memory_price = await self._prices_for(pod)
            cost = compute_cost(
                cpu_price,
                memory_price,
                cpu_usage,
                memory_usage,
                storage_usage,
                config.DEFAULT_STORAGE_PRICE,
                share,
            )
            results.append(
                PodCost(
                    pod_name=pod.name,
                    namespace=pod.namespace,
                    node_name=pod.node_name,
                    node_cost_percentage=share,
                    pvcs=list(pod.pvcs),
                    cost=cost,
                )
            )

        logger.info("Computed cost for %d pods matching '%s'.", len(results), label)
        return results

    @staticmethod
    def summarize(pod_costs: List[PodCost]) -> CostSummary:
        return CostSummary(pod_count=len(pod_costs), cost=aggregate_costs(p.cost for p in pod_costs))

    async def _node_for(self, pod: PodDescriptor, nodes: Dict[str, Optional[NodeInfo]]) -> Optional[NodeInfo]:
        if not pod.node_name:
            logger.warning("Pod '%s' is not scheduled on a node; no compute cost attributed.", pod.name)
            return None
        if pod.node_name not in nodes:
            nodes[pod.node_name] = await self.k8s_client.get_node(pod.node_name)
        return nodes[pod.node_name]

    async def _prices_for(self, pod: PodDescriptor) -> Tuple[float, float]:
        if self.pod_repository is None:
            return resolve_prices(None, None)
        return await self.pod_repository.get_price_per_resource_for_pod(pod.name)
