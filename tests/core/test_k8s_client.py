# tests/core/test_k8s_client.py

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from kubernetes_asyncio.client import models as k8s
from kubernetes_asyncio.client.rest import ApiException
from kubernetes_asyncio.config import ConfigException

from costgraph.core.exceptions import OrchestratorError
from costgraph.core.k8s_client import KubernetesClient


def _open_client(core_api):
    """Returns a KubernetesClient wired to a mocked CoreV1Api."""
    k8s_client = KubernetesClient()
    k8s_client._core = core_api
    return k8s_client


@pytest.fixture
def core_api():
    api = MagicMock()
    resources = k8s.V1ResourceRequirements(requests={"cpu": "500m", "memory": "1Gi"})
    sidecar = k8s.V1ResourceRequirements(requests={"cpu": "250m"})
    pod = k8s.V1Pod(
        metadata=k8s.V1ObjectMeta(name="web-1", namespace="shop"),
        spec=k8s.V1PodSpec(
            node_name="node-a",
            containers=[
                k8s.V1Container(name="app", resources=resources),
                k8s.V1Container(name="proxy", resources=sidecar),
                k8s.V1Container(name="init-less"),
            ],
            volumes=[
                k8s.V1Volume(
                    name="data",
                    persistent_volume_claim=k8s.V1PersistentVolumeClaimVolumeSource(claim_name="data-web-1"),
                ),
                k8s.V1Volume(name="scratch", empty_dir=k8s.V1EmptyDirVolumeSource()),
            ],
        ),
    )
    api.list_pod_for_all_namespaces = AsyncMock(return_value=k8s.V1PodList(items=[pod]))
    api.read_node = AsyncMock(
        return_value=k8s.V1Node(
            metadata=k8s.V1ObjectMeta(name="node-a", labels={"node.kubernetes.io/instance-type": "m5.large"}),
            status=k8s.V1NodeStatus(
                allocatable={"cpu": "1930m", "memory": "7Gi"},
                capacity={"cpu": "2", "memory": "8Gi"},
            ),
        )
    )
    api.read_namespaced_persistent_volume_claim = AsyncMock(
        return_value=k8s.V1PersistentVolumeClaim(
            metadata=k8s.V1ObjectMeta(name="data-web-1", namespace="shop"),
            status=k8s.V1PersistentVolumeClaimStatus(capacity={"storage": "10Gi"}),
        )
    )
    return api


@pytest.mark.asyncio
async def test_list_pods_sums_requests_and_collects_claims(core_api):
    pods = await _open_client(core_api).list_pods("app=web")

    core_api.list_pod_for_all_namespaces.assert_awaited_once_with(label_selector="app=web", watch=False)
    assert len(pods) == 1
    pod = pods[0]
    assert pod.name == "web-1"
    assert pod.namespace == "shop"
    assert pod.node_name == "node-a"
    assert pod.pvcs == ["data-web-1"]
    assert pod.cpu_request == pytest.approx(0.75)
    assert pod.memory_request == 1024**3


@pytest.mark.asyncio
async def test_list_pods_wraps_api_errors(core_api):
    core_api.list_pod_for_all_namespaces.side_effect = ApiException(status=403, reason="Forbidden")

    with pytest.raises(OrchestratorError):
        await _open_client(core_api).list_pods("app=web")


@pytest.mark.asyncio
async def test_get_node_prefers_allocatable(core_api):
    node = await _open_client(core_api).get_node("node-a")

    assert node.name == "node-a"
    assert node.instance_type == "m5.large"
    assert node.cpu_capacity_cores == pytest.approx(1.93)
    assert node.memory_capacity_bytes == 7 * 1024**3


@pytest.mark.asyncio
async def test_get_pvc_capacity_reads_status(core_api):
    capacity = await _open_client(core_api).get_pvc_capacity("data-web-1", "shop")

    core_api.read_namespaced_persistent_volume_claim.assert_awaited_once_with("data-web-1", "shop")
    assert capacity == 10 * 1024**3


@pytest.mark.asyncio
async def test_get_pvc_capacity_falls_back_to_requests(core_api):
    core_api.read_namespaced_persistent_volume_claim.return_value = k8s.V1PersistentVolumeClaim(
        spec=k8s.V1PersistentVolumeClaimSpec(
            resources=k8s.V1VolumeResourceRequirements(requests={"storage": "5Gi"}),
        ),
    )

    assert await _open_client(core_api).get_pvc_capacity("data-web-1", "shop") == 5 * 1024**3


@pytest.mark.asyncio
async def test_missing_pvc_counts_as_zero(core_api):
    core_api.read_namespaced_persistent_volume_claim.side_effect = ApiException(status=404, reason="Not Found")

    assert await _open_client(core_api).get_pvc_capacity("gone", "shop") == 0


def test_core_requires_an_open_client():
    with pytest.raises(OrchestratorError):
        KubernetesClient().core


@pytest.mark.asyncio
@patch("costgraph.core.k8s_client.k8s_config.load_kube_config", new_callable=AsyncMock)
@patch("costgraph.core.k8s_client.k8s_config.load_incluster_config")
async def test_open_falls_back_to_kubeconfig(mock_incluster, mock_kubeconfig):
    mock_incluster.side_effect = ConfigException("not in cluster")

    k8s_client = KubernetesClient(kubeconfig="/tmp/kubeconfig", context="dev")
    async with k8s_client:
        assert k8s_client.core is not None
        mock_kubeconfig.assert_awaited_once()
        assert mock_kubeconfig.await_args.kwargs["config_file"] == "/tmp/kubeconfig"
        assert mock_kubeconfig.await_args.kwargs["context"] == "dev"

    with pytest.raises(OrchestratorError):
        k8s_client.core


@pytest.mark.asyncio
@patch("costgraph.core.k8s_client.k8s_config.load_kube_config", new_callable=AsyncMock)
@patch("costgraph.core.k8s_client.k8s_config.load_incluster_config")
async def test_open_raises_when_no_configuration(mock_incluster, mock_kubeconfig):
    mock_incluster.side_effect = ConfigException("not in cluster")
    mock_kubeconfig.side_effect = ConfigException("no kubeconfig")

    with pytest.raises(OrchestratorError):
        await KubernetesClient().open()
