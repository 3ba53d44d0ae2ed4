import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, TypeVar

import typer

from ..storage.dgraph_store import DgraphStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_with_store(action: Callable[[DgraphStore], Awaitable[T]]) -> T:
    """Opens a Dgraph store, runs ``action`` with it and always closes it."""

    async def _run() -> T:
        async with DgraphStore() as store:
            return await action(store)

    return asyncio.run(_run())


def parse_label_options(labels: List[str]) -> Dict[str, List[str]]:
    """Groups repeated 'key=value' options by key."""
    mapping: Dict[str, List[str]] = {}
    for label in labels:
        key, sep, value = label.partition("=")
        if not sep or not key or not value:
            raise typer.BadParameter(f"Invalid label '{label}'. Use the form key=value.")
        mapping.setdefault(key.strip(), []).append(value.strip())
    return mapping
