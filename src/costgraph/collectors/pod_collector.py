# src/costgraph/collectors/pod_collector.py
"""
Lists the pods selected by a label, with their host node, mounted
persistent volume claims and summed resource requests.
"""

import logging
from typing import List

from ..core.k8s_client import KubernetesClient
from ..models.node import PodDescriptor
from ..utils.k8s_utils import label_selector_from_mapping, parse_label
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


class PodCollector(BaseCollector):
    """
    Connects to the K8s API through an explicitly passed client handle.
    """

    def __init__(self, k8s_client: KubernetesClient):
        self.k8s_client = k8s_client

    async def collect(self, label: str) -> List[PodDescriptor]:
        """
        Fetches the pods matching ``label`` (of the form ``key=value``).

        Raises:
            ValueError: The label is malformed.
            OrchestratorError: The Kubernetes API call failed.
        """
        selector = label_selector_from_mapping(parse_label(label))
        pods = await self.k8s_client.list_pods(label_selector=selector)
        if not pods:
            logger.info("No pods found for label '%s'.", label)
        logger.debug(f"Collected {len(pods)} pods for label '{label}'.")
        return pods
