# src/costgraph/models/node.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NodeInfo(BaseModel):
    """
    Pydantic model for the capacity of a Kubernetes node.

    Attributes:
        name: Node name
        instance_type: Instance type (e.g., 'm5.large', 'b3-8', 'Standard_D2ps_v6')
        cpu_capacity_cores: CPU capacity in cores
        memory_capacity_bytes: Memory capacity in bytes
    """

    model_config = ConfigDict(frozen=False, extra="forbid")

    name: str = Field(..., description="Node name")
    instance_type: Optional[str] = Field(None, description="Instance type")
    cpu_capacity_cores: float = Field(0.0, description="CPU capacity in cores")
    memory_capacity_bytes: int = Field(0, description="Memory capacity in bytes")


class PodDescriptor(BaseModel):
    """
    A pod as listed by the Kubernetes API, with its requests summed over
    all containers.
    """

    name: str = Field(..., description="The name of the Kubernetes pod.")
    namespace: str = Field("default", description="The namespace the pod belongs to.")
    node_name: Optional[str] = Field(None, description="The node the pod is scheduled on.")
    pvcs: List[str] = Field(default_factory=list, description="Claim names of mounted persistent volumes.")
    cpu_request: float = Field(0.0, description="CPU request in cores.")
    memory_request: int = Field(0, description="Memory request in bytes.")
