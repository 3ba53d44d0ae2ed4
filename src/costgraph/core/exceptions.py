class CostGraphError(Exception):
    """Base exception for costgraph."""

    pass


class GraphStoreError(CostGraphError):
    """Base exception for graph store related errors."""

    pass


class StoreUnavailableError(GraphStoreError):
    """Raised when the graph store cannot be reached."""

    pass


class QueryError(GraphStoreError):
    """Raised when the graph store rejects or fails a query."""

    pass


class DecodeError(QueryError):
    """Raised when a reply cannot be decoded into the expected schema."""

    pass


class InvalidTargetError(CostGraphError):
    """Raised when the wildcard sentinel is used where one resource is required."""

    pass


class InvalidLabelFilterError(CostGraphError, ValueError):
    """Raised when a label filter mapping is malformed."""

    pass


class OrchestratorError(CostGraphError):
    """Raised when the Kubernetes API call fails."""

    pass
