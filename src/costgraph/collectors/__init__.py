from .pod_collector import PodCollector

__all__ = [
    "PodCollector",
]
