# src/costgraph/models/graph.py
"""
Pydantic models for the resource nodes stored in the cluster graph.

Field names follow Python conventions while the JSON names used by the
graph store are kept as aliases, so a reply can be validated as-is. Every
field has a default: a predicate missing from a reply is a normal case
(Dgraph simply omits it), never a decoding error.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Reserved name meaning "no name filter, operate over the whole node type".
ALL = "*"


class GraphEntity(BaseModel):
    """Common identifiers carried by every resource node."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    uid: str = Field("", description="Internal graph identifier.")
    xid: Optional[str] = Field(None, description="External stable identifier.")
    name: str = Field("", description="Resource name.")


class PodInteraction(BaseModel):
    """An outbound pod edge, optionally carrying an interaction count."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    count: float = 0.0


class NamedRef(BaseModel):
    """A neighbour node projected by name only."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""


class Pod(GraphEntity):
    """A pod vertex. Absence of ``end_time`` means the pod is live."""

    is_pod: Optional[bool] = Field(None, alias="isPod")
    start_time: Optional[str] = Field(None, alias="startTime")
    end_time: Optional[str] = Field(None, alias="endTime")
    cpu_price: Optional[float] = Field(None, alias="cpuPrice", description="$ per vCPU-hour.")
    memory_price: Optional[float] = Field(None, alias="memoryPrice", description="$ per GB-hour.")
    node_cost_percentage: Optional[float] = Field(None, alias="nodeCostPercentage")
    pods: List[PodInteraction] = Field(default_factory=list, alias="pod")
    services: List[NamedRef] = Field(default_factory=list, alias="cid")

    @property
    def is_live(self) -> bool:
        return self.end_time is None


class Container(GraphEntity):
    is_container: Optional[bool] = Field(None, alias="isContainer")
    end_time: Optional[str] = Field(None, alias="endTime")
    pods: List[NamedRef] = Field(default_factory=list, alias="pod")


class Service(GraphEntity):
    is_service: Optional[bool] = Field(None, alias="isService")
    end_time: Optional[str] = Field(None, alias="endTime")
    pods: List[NamedRef] = Field(default_factory=list, alias="pod")

    @property
    def is_live(self) -> bool:
        return self.end_time is None


class Label(GraphEntity):
    is_label: Optional[bool] = Field(None, alias="isLabel")
    key: str = ""
    value: str = ""


class PersistentVolumeClaim(GraphEntity):
    is_persistent_volume_claim: Optional[bool] = Field(None, alias="isPersistentVolumeClaim")
    storage_capacity: Optional[float] = Field(None, alias="storageCapacity")


class HierarchyChild(BaseModel):
    """One child of a hierarchy or metrics reply."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    type: str = ""
    cpu_request: Optional[float] = Field(None, alias="cpuRequest")
    memory_request: Optional[float] = Field(None, alias="memoryRequest")
    storage_request: Optional[float] = Field(None, alias="storageRequest")
    cpu_cost: Optional[float] = Field(None, alias="cpuCost")
    memory_cost: Optional[float] = Field(None, alias="memoryCost")
    storage_cost: Optional[float] = Field(None, alias="storageCost")


class HierarchyParent(HierarchyChild):
    children: List[HierarchyChild] = Field(default_factory=list)


class JSONDataWrapper(BaseModel):
    """
    Opaque payload handed back for hierarchy and metrics lookups.
    An empty wrapper (``data`` is None) means "no data or failure".
    """

    data: Optional[HierarchyParent] = None

    @property
    def is_empty(self) -> bool:
        return self.data is None
