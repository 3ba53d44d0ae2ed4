# src/costgraph/storage/pod_repository.py
"""
Read operations over the pod vertices of the cluster graph.
"""

import logging
import math
from typing import Iterable, List, Mapping, Optional, Tuple

from ..core.cost import resolve_prices
from ..core.exceptions import CostGraphError, GraphStoreError
from ..models.graph import ALL, JSONDataWrapper, Pod
from ..query import builder
from ..query.decoder import decode_hierarchy, decode_reply
from ..query.dedup import remove_duplicates
from ..query.labels import compile_label_filter
from .base_repository import GraphStore

logger = logging.getLogger(__name__)


def _usable_price(name: str, predicate: str, value: Optional[float]) -> Optional[float]:
    """A stored price that is negative or not finite counts as missing."""
    if value is None or (math.isfinite(value) and value >= 0):
        return value
    logger.warning(f"Ignoring invalid stored {predicate} {value!r} for pod '{name}'; using the default.")
    return None


class PodRepository:
    """
    Queries about pods: liveness, interactions, hierarchy, metrics and label
    selection.

    Listing calls meant for display log failures and return an empty result.
    Calls whose result feeds further computation raise instead.
    """

    def __init__(self, store: GraphStore):
        self.store = store

    async def retrieve_all_live_pods(self) -> List[Pod]:
        """Returns all pods without endTime, or an empty list on failure."""
        try:
            data = await self.store.execute_query(builder.build_all_live_pods_query())
            pods = decode_reply(data, "pods", Pod)
        except GraphStoreError as e:
            logger.error(f"unable to retrieve all live pods: {e}")
            return []
        logger.debug(f"Retrieved {len(pods)} live pods.")
        return pods

    async def retrieve_pods_interactions(self, name: str, is_orphan: bool = False) -> Optional[bytes]:
        """
        Returns the raw inbound/outbound interaction payload of a pod (or of
        all pods for the wildcard), or None on failure.
        """
        query = builder.build_pods_interactions_query(name, is_orphan)
        try:
            return await self.store.execute_query_raw(query)
        except GraphStoreError as e:
            logger.error(
                "Error while retrieving pods interactions. Name: (%s), isOrphan: (%s), error: (%s)",
                name,
                is_orphan,
                e,
            )
            return None

    async def retrieve_pod_hierarchy(self, name: str) -> JSONDataWrapper:
        """Returns the pod with its containers."""
        if not name or name == ALL:
            logger.error("wrong type of query for pod, a single pod name is required")
            return JSONDataWrapper()
        return await self._retrieve_wrapper(builder.build_pod_hierarchy_query(name), name)

    async def retrieve_pod_metrics(self, name: str) -> JSONDataWrapper:
        """Returns resource requests and cost of the pod and its containers."""
        if not name or name == ALL:
            logger.error("wrong type of query for pod, a single pod name is required")
            return JSONDataWrapper()
        cpu_price, memory_price = await self.get_price_per_resource_for_pod(name)
        return await self._retrieve_wrapper(builder.build_pod_metrics_query(name, cpu_price, memory_price), name)

    async def get_price_per_resource_for_pod(self, name: str) -> Tuple[float, float]:
        """
        Stored (cpuPrice, memoryPrice) of a pod. Any price the pod lacks, or
        a failed lookup, falls back to the configured defaults.
        """
        try:
            data = await self.store.execute_query(builder.build_pod_prices_query(name))
            pods = decode_reply(data, "pod", Pod)
        except CostGraphError as e:
            logger.warning(f"Could not read stored prices for pod '{name}', using defaults: {e}")
            return resolve_prices(None, None)
        if not pods:
            return resolve_prices(None, None)
        return resolve_prices(
            _usable_price(name, "cpuPrice", pods[0].cpu_price),
            _usable_price(name, "memoryPrice", pods[0].memory_price),
        )

    async def retrieve_pods_interactions_for_all_live_pods_with_count(self) -> List[Pod]:
        """
        Returns live pods with their outbound pods (and counts) and the services
        selecting them. Failures are raised.
        """
        data = await self.store.execute_query(builder.build_pods_interactions_with_count_query())
        return decode_reply(data, "pods", Pod)

    async def retrieve_pods_uids_by_labels_filter(self, labels: Mapping[str, Iterable[str]]) -> List[str]:
        """
        Returns the uids of pods matching every label key, any listed value per
        key. Failures are raised; an empty mapping matches nothing.
        """
        label_filter = compile_label_filter(labels)
        if label_filter.is_empty:
            logger.debug("Empty label filter; no pod can match.")
            return []
        data = await self.store.execute_query(builder.build_pod_uids_by_label_filter_query(label_filter))
        return remove_duplicates(decode_reply(data, "pods", Pod))

    async def _retrieve_wrapper(self, query: builder.GraphQuery, name: str) -> JSONDataWrapper:
        try:
            data = await self.store.execute_query(query)
            return decode_hierarchy(data)
        except GraphStoreError as e:
            logger.error(f"Error while retrieving data for pod '{name}': {e}")
            return JSONDataWrapper()
