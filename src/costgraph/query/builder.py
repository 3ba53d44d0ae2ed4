# src/costgraph/query/builder.py
"""
Builds DQL query text for every read the application performs.

Names and label values supplied by callers are never concatenated into the
query text: they are declared as typed query variables (``$name: string``)
and shipped next to the text in ``GraphQuery.variables``. The only values
rendered into the text are prices, which are formatted from floats.
"""

from dataclasses import dataclass, field
from typing import Dict

from ..core.cost import format_price
from ..core.exceptions import InvalidTargetError
from ..models.graph import ALL
from .labels import LabelFilter

NAME_VAR = "$name"


@dataclass(frozen=True)
class GraphQuery:
    """Query text plus the variables it declares."""

    text: str
    variables: Dict[str, str] = field(default_factory=dict)


def _header(operation: str, variables: Dict[str, str]) -> str:
    if not variables:
        return "query {"
    declared = ", ".join(f"{var}: string" for var in variables)
    return f"query {operation}({declared}) {{"


def _require_target(name: str, intent: str) -> None:
    if not name or name == ALL:
        raise InvalidTargetError(f"{intent} needs exactly one target resource, got {name!r}")


def build_all_live_pods_query() -> GraphQuery:
    text = """query {
    pods(func: has(isPod)) @filter(NOT has(endTime)) {
        uid
        xid
        name
    }
}"""
    return GraphQuery(text)


def build_all_live_services_query() -> GraphQuery:
    text = """query {
    services(func: has(isService)) @filter(NOT has(endTime)) {
        uid
        xid
        name
    }
}"""
    return GraphQuery(text)


def build_pods_interactions_query(name: str, is_orphan: bool) -> GraphQuery:
    """
    Inbound and outbound interactions of one pod, or of all pods when ``name``
    is the wildcard. Without ``is_orphan`` the wildcard form keeps only pods
    having an outbound ``pod`` edge.
    """
    variables: Dict[str, str] = {}
    if name == ALL:
        pod_filter = "" if is_orphan else " @filter(has(pod))"
    else:
        variables[NAME_VAR] = name
        pod_filter = f" @filter(eq(name, {NAME_VAR}))"

    text = f"""{_header("podsInteractions", variables)}
    pods(func: has(isPod)){pod_filter} {{
        name
        outbound: pod {{
            name
        }}
        inbound: ~pod @filter(has(isPod)) {{
            name
        }}
    }}
}}"""
    return GraphQuery(text, variables)


def build_hierarchy_query(root_tag: str, edge: str, name: str, child_filter: str = "") -> GraphQuery:
    """
    Two level traversal from the resource tagged ``root_tag`` and named
    ``name`` to its children reached through ``edge`` (``~edge`` walks the
    relation backwards). ``child_filter`` is a DQL filter body such as
    ``has(isContainer)``; it is part of the schema, never caller input.
    """
    _require_target(name, "hierarchy query")
    variables = {NAME_VAR: name}
    filter_clause = f" @filter({child_filter})" if child_filter else ""
    text = f"""{_header("hierarchy", variables)}
    parent(func: has({root_tag})) @filter(eq(name, {NAME_VAR})) {{
        name
        type
        children: {edge}{filter_clause} {{
            name
            type
        }}
    }}
}}"""
    return GraphQuery(text, variables)


def build_pod_hierarchy_query(name: str) -> GraphQuery:
    return build_hierarchy_query("isPod", "~pod", name, "has(isContainer)")


def build_service_hierarchy_query(name: str) -> GraphQuery:
    return build_hierarchy_query("isService", "pod", name, "has(isPod)")


def build_pod_prices_query(name: str) -> GraphQuery:
    _require_target(name, "price lookup")
    variables = {NAME_VAR: name}
    text = f"""{_header("podPrices", variables)}
    pod(func: has(isPod)) @filter(eq(name, {NAME_VAR})) {{
        cpuPrice
        memoryPrice
    }}
}}"""
    return GraphQuery(text, variables)


def build_pod_metrics_query(name: str, cpu_price: float, memory_price: float) -> GraphQuery:
    """
    Resource requests of a pod and its containers with their cost, using the
    given unit prices rendered with 11 fractional digits.
    """
    _require_target(name, "metrics query")
    cpu = format_price(cpu_price)
    memory = format_price(memory_price)
    variables = {NAME_VAR: name}
    text = f"""{_header("podMetrics", variables)}
    parent(func: has(isPod)) @filter(eq(name, {NAME_VAR})) {{
        name
        type
        podCpu as cpuRequest
        podMemory as memoryRequest
        storageRequest
        cpuCost: math(podCpu * {cpu})
        memoryCost: math(podMemory * {memory})
        children: ~pod @filter(has(isContainer)) {{
            name
            type
            containerCpu as cpuRequest
            containerMemory as memoryRequest
            cpuCost: math(containerCpu * {cpu})
            memoryCost: math(containerMemory * {memory})
        }}
    }}
}}"""
    return GraphQuery(text, variables)


def build_pods_interactions_with_count_query() -> GraphQuery:
    text = """query {
    pods(func: has(isPod)) @filter(NOT has(endTime)) {
        name
        pod {
            name
            count
        }
        cid: ~pod @filter(has(isService)) {
            name
        }
    }
}"""
    return GraphQuery(text)


def build_pod_uids_by_label_filter_query(label_filter: LabelFilter) -> GraphQuery:
    """
    One ``var`` block per label key binds the pods reachable through
    ``~label`` from the matching label nodes; the final block keeps the pods
    present in every set.
    """
    if label_filter.is_empty:
        blocks = [f"""    var(func: has(isLabel)) @filter({label_filter.expression}) {{
        podUIDs0 as ~label @filter(has(isPod)) {{
            name
        }}
    }}"""]
        names = ["podUIDs0"]
    else:
        blocks = []
        names = []
        for index, clause in enumerate(label_filter.clauses):
            var_name = f"podUIDs{index}"
            names.append(var_name)
            blocks.append(f"""    var(func: has(isLabel)) @filter({clause}) {{
        {var_name} as ~label @filter(has(isPod)) {{
            name
        }}
    }}""")

    intersection = ""
    if len(names) > 1:
        intersection = " @filter(" + " AND ".join(f"uid({var_name})" for var_name in names[1:]) + ")"

    body = "\n".join(blocks)
    text = f"""{_header("podsByLabels", label_filter.variables)}
{body}
    pods(func: uid({names[0]})){intersection} {{
        uid
        name
    }}
}}"""
    return GraphQuery(text, dict(label_filter.variables))
