# src/costgraph/models/cost.py
"""
Pydantic models for derived cost figures. Costs are never stored in the
graph; they are computed per pod and summed across a pod set.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class Cost(BaseModel):
    """Cost breakdown in dollars. ``total`` is always cpu + memory + storage."""

    total: float = Field(0.0, ge=0, description="Total cost.")
    cpu: float = Field(0.0, ge=0, description="CPU share of the host node cost.")
    memory: float = Field(0.0, ge=0, description="Memory share of the host node cost.")
    storage: float = Field(0.0, ge=0, description="Cost of the claimed persistent volumes.")


class PodCost(BaseModel):
    """Cost attribution for a single pod."""

    pod_name: str = Field(..., description="The name of the Kubernetes pod.")
    namespace: str = Field("default", description="The namespace the pod belongs to.")
    node_name: Optional[str] = Field(None, description="The node where the pod is running.")
    node_cost_percentage: float = Field(0.0, ge=0, le=1, description="Share of the host node cost.")
    pvcs: List[str] = Field(default_factory=list, description="Persistent volume claims mounted by the pod.")
    cost: Cost = Field(default_factory=Cost)


class CostSummary(BaseModel):
    """Totals across a pod set."""

    pod_count: int = 0
    cost: Cost = Field(default_factory=Cost)
