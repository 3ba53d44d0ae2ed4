# src/costgraph/collectors/base_collector.py
"""
This module defines the abstract base class for data collectors reading
from the orchestrator API.
"""

from abc import ABC, abstractmethod
from typing import Any, List


class BaseCollector(ABC):
    """
    Abstract Base Class for all collectors.
    """

    @abstractmethod
    async def collect(self, *args, **kwargs) -> List[Any]:
        """
        Fetch data from the source, parse it, and return a list of
        Pydantic models.
        """
        pass
