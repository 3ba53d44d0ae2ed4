# src/costgraph/storage/base_repository.py
from abc import ABC, abstractmethod
from typing import Any, Dict

from ..query.builder import GraphQuery


class GraphStore(ABC):
    """
    Abstract base class for graph stores.
    Defines the contract the query layer relies on: run one read-only query.
    """

    @abstractmethod
    async def execute_query(self, query: GraphQuery) -> Dict[str, Any]:
        """
        Runs a query and returns its decoded reply.

        Args:
            query: The query text and its variables.

        Returns:
            The reply as a mapping of query block alias to a list of nodes.

        Raises:
            StoreUnavailableError: The store could not be reached.
            QueryError: The store rejected the query.
            DecodeError: The reply was not JSON.
        """
        pass

    @abstractmethod
    async def execute_query_raw(self, query: GraphQuery) -> bytes:
        """
        Runs a query and returns the reply's data section as JSON bytes,
        without any reshaping.
        """
        pass

    async def close(self):
        """
        Clean up resources (e.g., close HTTP sessions).
        """
        pass
