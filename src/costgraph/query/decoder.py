# src/costgraph/query/decoder.py
"""
Turns the graph store's reply (a mapping of query alias to a list of nodes)
into typed models.
"""

import logging
from typing import Any, List, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..core.exceptions import DecodeError
from ..models.graph import HierarchyParent, JSONDataWrapper

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_reply(data: Any, alias: str, model: Type[ModelT]) -> List[ModelT]:
    """
    Validate every node under ``alias`` as ``model``.

    Dgraph leaves out a block that matched nothing, so a missing alias
    decodes to an empty list. Anything that does not fit the schema raises
    DecodeError.
    """
    if not isinstance(data, Mapping):
        raise DecodeError(f"Expected a mapping of query blocks, got {type(data).__name__}")

    nodes = data.get(alias)
    if nodes is None:
        return []
    if not isinstance(nodes, list):
        raise DecodeError(f"Block '{alias}' is not a list of nodes")

    try:
        return [model.model_validate(node) for node in nodes]
    except ValidationError as e:
        raise DecodeError(f"Block '{alias}' does not match {model.__name__}: {e}") from e


def decode_hierarchy(data: Any, alias: str = "parent") -> JSONDataWrapper:
    """Wrap the first node under ``alias``; an empty wrapper when there is none."""
    parents = decode_reply(data, alias, HierarchyParent)
    if not parents:
        return JSONDataWrapper()
    if len(parents) > 1:
        logger.debug("Hierarchy query matched %d roots; keeping the first", len(parents))
    return JSONDataWrapper(data=parents[0])
