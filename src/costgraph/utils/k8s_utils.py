from decimal import Decimal, InvalidOperation
from typing import Dict, Optional, Union

# Longest suffixes first so "Mi" is not mistaken for "M".
_QUANTITY_SUFFIXES = (
    ("Ki", Decimal(1024)),
    ("Mi", Decimal(1024) ** 2),
    ("Gi", Decimal(1024) ** 3),
    ("Ti", Decimal(1024) ** 4),
    ("Pi", Decimal(1024) ** 5),
    ("Ei", Decimal(1024) ** 6),
    ("n", Decimal("1e-9")),
    ("u", Decimal("1e-6")),
    ("m", Decimal("1e-3")),
    ("k", Decimal(10) ** 3),
    ("M", Decimal(10) ** 6),
    ("G", Decimal(10) ** 9),
    ("T", Decimal(10) ** 12),
    ("P", Decimal(10) ** 15),
    ("E", Decimal(10) ** 18),
)


def parse_quantity(quantity: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Parse a Kubernetes quantity ("500m", "1Gi", "2") to Decimal.
    Unparseable input yields 0.
    """
    if quantity is None:
        return Decimal(0)
    if isinstance(quantity, (int, float, Decimal)):
        return Decimal(quantity)

    text = str(quantity).strip()
    multiplier = Decimal(1)
    for suffix, factor in _QUANTITY_SUFFIXES:
        if text.endswith(suffix):
            text = text[: -len(suffix)]
            multiplier = factor
            break

    try:
        return Decimal(text) * multiplier
    except InvalidOperation:
        return Decimal(0)


def parse_cpu_cores(cpu: Optional[str]) -> float:
    """Converts K8s CPU string to cores."""
    if not cpu:
        return 0.0
    return float(parse_quantity(cpu))


def parse_bytes(quantity: Optional[str]) -> int:
    """Converts K8s memory or storage string to bytes."""
    if not quantity:
        return 0
    return int(parse_quantity(quantity))


def parse_label(label: str) -> Dict[str, str]:
    """Parses a 'key=value' label into a one-entry mapping."""
    parts = label.split("=")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f"Label should be of form key=val, got '{label}'")
    return {parts[0].strip(): parts[1].strip()}


def label_selector_from_mapping(labels: Dict[str, str]) -> str:
    """Renders an equality-based label selector ('a=1,b=2')."""
    return ",".join(f"{key}={value}" for key, value in sorted(labels.items()))
