import logging
from typing import List, Optional

from kubernetes_asyncio import client, config as k8s_config
from kubernetes_asyncio.client.rest import ApiException

from ..models.node import NodeInfo, PodDescriptor
from ..utils.k8s_utils import parse_bytes, parse_cpu_cores
from .config import config
from .exceptions import OrchestratorError

logger = logging.getLogger(__name__)


class KubernetesClient:
    """
    Explicit handle on the Kubernetes API.

    Configuration is loaded into this handle's own client configuration, so
    several handles (or a fake in tests) can coexist without shared state.
    Use ``async with KubernetesClient() as k8s:`` or ``open()``/``close()``.
    """

    def __init__(self, kubeconfig: Optional[str] = None, context: Optional[str] = None):
        self.kubeconfig = kubeconfig or config.KUBECONFIG
        self.context = context or config.KUBE_CONTEXT
        self._api_client: Optional[client.ApiClient] = None
        self._core: Optional[client.CoreV1Api] = None

    async def _load_configuration(self) -> client.Configuration:
        configuration = client.Configuration()

        # Try in-cluster config first
        try:
            logger.debug("Attempting to load in-cluster Kubernetes config...")
            k8s_config.load_incluster_config(client_configuration=configuration)
            logger.info("Loaded in-cluster Kubernetes configuration.")
            return configuration
        except k8s_config.ConfigException:
            logger.debug("In-cluster config not found.")

        # Try local kubeconfig
        try:
            logger.debug("Attempting to load local kubeconfig...")
            await k8s_config.load_kube_config(
                config_file=self.kubeconfig,
                context=self.context,
                client_configuration=configuration,
            )
            logger.info("Loaded Kubernetes configuration from kubeconfig file.")
            return configuration
        except k8s_config.ConfigException as e:
            raise OrchestratorError(f"Failed to load any Kubernetes configuration: {e}") from e

    async def open(self) -> "KubernetesClient":
        if self._core is None:
            configuration = await self._load_configuration()
            self._api_client = client.ApiClient(configuration=configuration)
            self._core = client.CoreV1Api(self._api_client)
        return self

    async def close(self):
        """Close the Kubernetes API client if it exists."""
        if self._api_client is not None:
            await self._api_client.close()
            logger.debug("Kubernetes client closed.")
        self._api_client = None
        self._core = None

    async def __aenter__(self) -> "KubernetesClient":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    @property
    def core(self) -> client.CoreV1Api:
        if self._core is None:
            raise OrchestratorError("Kubernetes client is not open; call open() first.")
        return self._core

    async def list_pods(self, label_selector: str = "") -> List[PodDescriptor]:
        """Lists pods across all namespaces matching ``label_selector``."""
        try:
            pod_list = await self.core.list_pod_for_all_namespaces(label_selector=label_selector, watch=False)
        except ApiException as e:
            raise OrchestratorError(f"Kubernetes API error while listing pods: {e}") from e

        pods = []
        for pod in pod_list.items:
            spec = pod.spec
            pvcs = []
            cpu = 0.0
            memory = 0
            if spec:
                for volume in spec.volumes or []:
                    if volume.persistent_volume_claim is not None:
                        pvcs.append(volume.persistent_volume_claim.claim_name)
                for container in spec.containers or []:
                    requests = (container.resources.requests if container.resources else None) or {}
                    cpu += parse_cpu_cores(requests.get("cpu"))
                    memory += parse_bytes(requests.get("memory"))

            pods.append(
                PodDescriptor(
                    name=pod.metadata.name,
                    namespace=pod.metadata.namespace or "default",
                    node_name=spec.node_name if spec else None,
                    pvcs=pvcs,
                    cpu_request=cpu,
                    memory_request=memory,
                )
            )
        logger.debug(f"Listed {len(pods)} pods for selector '{label_selector}'.")
        return pods

    async def get_node(self, name: str) -> NodeInfo:
        """Reads the allocatable capacity of a node."""
        try:
            node = await self.core.read_node(name)
        except ApiException as e:
            raise OrchestratorError(f"Kubernetes API error while reading node '{name}': {e}") from e

        status = node.status
        capacity = (status.allocatable or status.capacity or {}) if status else {}
        labels = node.metadata.labels or {}
        return NodeInfo(
            name=node.metadata.name,
            instance_type=labels.get("node.kubernetes.io/instance-type")
            or labels.get("beta.kubernetes.io/instance-type"),
            cpu_capacity_cores=parse_cpu_cores(capacity.get("cpu")),
            memory_capacity_bytes=parse_bytes(capacity.get("memory")),
        )

    async def get_pvc_capacity(self, name: str, namespace: str) -> int:
        """Capacity in bytes of a bound claim; 0 when unknown."""
        try:
            pvc = await self.core.read_namespaced_persistent_volume_claim(name, namespace)
        except ApiException as e:
            if e.status == 404:
                logger.warning("Persistent volume claim %s/%s not found.", namespace, name)
                return 0
            raise OrchestratorError(f"Kubernetes API error while reading claim '{namespace}/{name}': {e}") from e

        capacity = (pvc.status.capacity if pvc.status else None) or {}
        if "storage" not in capacity and pvc.spec and pvc.spec.resources:
            capacity = pvc.spec.resources.requests or {}
        return parse_bytes(capacity.get("storage"))
