# src/costgraph/storage/service_repository.py

import logging
from typing import List

from ..core.exceptions import GraphStoreError
from ..models.graph import ALL, JSONDataWrapper, Service
from ..query import builder
from ..query.decoder import decode_hierarchy, decode_reply
from .base_repository import GraphStore

logger = logging.getLogger(__name__)


class ServiceRepository:
    """
    Queries about service vertices. Both calls are display listings: failures
    are logged and an empty result is returned.
    """

    def __init__(self, store: GraphStore):
        self.store = store

    async def retrieve_all_live_services(self) -> List[Service]:
        try:
            data = await self.store.execute_query(builder.build_all_live_services_query())
            return decode_reply(data, "services", Service)
        except GraphStoreError as e:
            logger.error(f"unable to retrieve all live services: {e}")
            return []

    async def retrieve_service_hierarchy(self, name: str) -> JSONDataWrapper:
        """Returns the service with the pods it selects."""
        if not name or name == ALL:
            logger.error("wrong type of query for service, a single service name is required")
            return JSONDataWrapper()
        try:
            data = await self.store.execute_query(builder.build_service_hierarchy_query(name))
            return decode_hierarchy(data)
        except GraphStoreError as e:
            logger.error(f"Error while retrieving hierarchy for service '{name}': {e}")
            return JSONDataWrapper()
