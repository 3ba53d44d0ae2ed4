# src/costgraph/core/cost.py
"""
Cost attribution: turns per-unit prices and a pod's share of its host node
into a cost breakdown, and sums breakdowns across a pod set.
"""

import logging
import math
from typing import Iterable, Optional, Tuple

from ..models.cost import Cost
from .config import config

logger = logging.getLogger(__name__)

BYTES_PER_GB = 1024**3
PRICE_DECIMALS = 11


def format_price(value: float) -> str:
    """Fixed-point rendering with 11 fractional digits, as stored in the graph."""
    if not math.isfinite(value):
        raise ValueError(f"Price must be a finite number, got {value!r}")
    return f"{value:.{PRICE_DECIMALS}f}"


def resolve_prices(cpu_price: Optional[float], memory_price: Optional[float]) -> Tuple[float, float]:
    """Substitute the configured default unit price for any missing one."""
    if cpu_price is None:
        logger.debug("No stored CPU price; using default %s", config.DEFAULT_CPU_PRICE)
        cpu_price = config.DEFAULT_CPU_PRICE
    if memory_price is None:
        logger.debug("No stored memory price; using default %s", config.DEFAULT_MEMORY_PRICE)
        memory_price = config.DEFAULT_MEMORY_PRICE
    return cpu_price, memory_price


def _check(name: str, value: float) -> float:
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{name} must be a finite, non-negative number, got {value!r}")
    return float(value)


def compute_cost(
    price_per_cpu_unit: Optional[float],
    price_per_memory_unit: Optional[float],
    cpu_usage: float,
    memory_usage: float,
    storage_usage: float = 0.0,
    storage_price: Optional[float] = None,
    node_cost_percentage: float = 1.0,
) -> Cost:
    """Compute the cost of one pod.

    Args:
        price_per_cpu_unit: $ per vCPU-hour, or None to use the default.
        price_per_memory_unit: $ per GB-hour, or None to use the default.
        cpu_usage: vCPU-hours of the host node over the period.
        memory_usage: GB-hours of the host node over the period.
        storage_usage: GB-hours of the volumes claimed by the pod.
        storage_price: $ per GB-hour, or None to use the default.
        node_cost_percentage: the pod's share (0..1) of the host node.

    CPU and memory are scaled by the node share; storage belongs to the pod
    alone. ``total`` is the sum of the three components.
    """
    cpu_price, memory_price = resolve_prices(price_per_cpu_unit, price_per_memory_unit)
    if storage_price is None:
        storage_price = config.DEFAULT_STORAGE_PRICE

    cpu_price = _check("price_per_cpu_unit", cpu_price)
    memory_price = _check("price_per_memory_unit", memory_price)
    storage_price = _check("storage_price", storage_price)
    share = _check("node_cost_percentage", node_cost_percentage)

    cpu = cpu_price * _check("cpu_usage", cpu_usage) * share
    memory = memory_price * _check("memory_usage", memory_usage) * share
    storage = storage_price * _check("storage_usage", storage_usage)

    return Cost(total=cpu + memory + storage, cpu=cpu, memory=memory, storage=storage)


def aggregate_costs(costs: Iterable[Cost]) -> Cost:
    """Sum each cost field independently."""
    total = cpu = memory = storage = 0.0
    for cost in costs:
        total += cost.total
        cpu += cost.cpu
        memory += cost.memory
        storage += cost.storage
    return Cost(total=total, cpu=cpu, memory=memory, storage=storage)


def node_cost_percentage(
    cpu_request: float,
    memory_request: float,
    node_cpu: float,
    node_memory: float,
) -> float:
    """
    Share of a node attributable to a pod: the mean of its CPU and memory
    request fractions, clamped to [0, 1]. A node dimension of zero adds nothing.
    """
    cpu_fraction = cpu_request / node_cpu if node_cpu > 0 else 0.0
    memory_fraction = memory_request / node_memory if node_memory > 0 else 0.0
    share = (cpu_fraction + memory_fraction) / 2.0
    return min(max(share, 0.0), 1.0)
