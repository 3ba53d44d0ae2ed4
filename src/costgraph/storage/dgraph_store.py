# src/costgraph/storage/dgraph_store.py
"""
Graph store backed by the Dgraph HTTP API.

Queries are POSTed to ``/query`` as JSON (``{"query": ..., "variables": ...}``)
so every caller-supplied value travels as a typed query variable.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from ..core.config import config
from ..core.exceptions import DecodeError, QueryError, StoreUnavailableError
from ..query.builder import GraphQuery
from ..utils.http_client import get_async_http_client
from .base_repository import GraphStore

logger = logging.getLogger(__name__)


class DgraphStore(GraphStore):
    """
    Runs read-only DQL queries against Dgraph.

    The store owns one ``httpx.AsyncClient``; use it as an async context
    manager or call ``open()`` and ``close()`` explicitly.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        access_token: Optional[str] = None,
        verify: Optional[bool] = None,
        best_effort: Optional[bool] = None,
    ):
        self.url = (url or config.DGRAPH_URL).rstrip("/")
        self.access_token = access_token if access_token is not None else config.DGRAPH_ACCESS_TOKEN
        self.verify = config.DGRAPH_VERIFY_CERTS if verify is None else verify
        self.best_effort = config.DGRAPH_BEST_EFFORT if best_effort is None else best_effort
        self._client: Optional[httpx.AsyncClient] = None

    async def open(self) -> "DgraphStore":
        if self._client is None:
            headers = {}
            if self.access_token:
                headers["X-Dgraph-AccessToken"] = self.access_token
            self._client = get_async_http_client(base_url=self.url, verify=self.verify, headers=headers)
            logger.debug("Dgraph store opened for %s", self.url)
        return self

    async def close(self):
        """Close the HTTP client if it exists."""
        if self._client is not None:
            await self._client.aclose()
            logger.debug("Dgraph store for %s closed.", self.url)
            self._client = None

    async def __aenter__(self) -> "DgraphStore":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _params(self) -> Dict[str, str]:
        params = {"ro": "true"}
        if self.best_effort:
            params["be"] = "true"
        return params

    async def _post(self, query: GraphQuery) -> Dict[str, Any]:
        if self._client is None:
            await self.open()

        body = {"query": query.text}
        if query.variables:
            body["variables"] = query.variables

        try:
            resp = await self._client.post("/query", params=self._params(), json=body)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise QueryError(f"Dgraph returned HTTP {e.response.status_code}: {e.response.text[:200]}") from e
        except httpx.HTTPError as e:
            raise StoreUnavailableError(f"Could not reach Dgraph at {self.url}: {e}") from e

        try:
            payload = resp.json()
        except ValueError as e:
            logger.debug("Raw response content from Dgraph: %s", resp.text[:500])
            raise DecodeError("Dgraph sent a non-JSON response") from e

        if not isinstance(payload, dict):
            raise DecodeError(f"Unexpected Dgraph response of type {type(payload).__name__}")

        errors = payload.get("errors")
        if errors:
            messages = "; ".join(str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors)
            raise QueryError(f"Dgraph rejected the query: {messages}")

        return payload

    async def execute_query(self, query: GraphQuery) -> Dict[str, Any]:
        payload = await self._post(query)
        data = payload.get("data")
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DecodeError(f"Dgraph 'data' is a {type(data).__name__}, expected an object")
        return data

    async def execute_query_raw(self, query: GraphQuery) -> bytes:
        payload = await self._post(query)
        return json.dumps(payload.get("data") or {}).encode("utf-8")
