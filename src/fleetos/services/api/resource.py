# src/fleetos/services/api/resource.py
from __future__ import annotations

import logging
from typing import Any, Mapping

from fleetos.config.const import API_PREFIX

from .client import ApiHttpClient
from .query import ResourceQuery, build_request

__all__ = ["ResourceClient", "unwrap_records"]

_log = logging.getLogger("fleetos.api.resource")


def unwrap_records(body: Any) -> list[dict[str, Any]]:
    """Accept both OData ``{"d": [...]}`` envelopes and bare lists."""
    if isinstance(body, Mapping):
        if "d" in body:
            body = body["d"]
        else:
            return [dict(body)]
    if isinstance(body, list):
        return [dict(item) for item in body if isinstance(item, Mapping)]
    return []


class ResourceClient:
    """CRUD over named remote resources. One transport call per operation."""

    def __init__(self, http: ApiHttpClient, *, prefix: str = API_PREFIX) -> None:
        self.http = http
        self.prefix = prefix

    async def _send(self, query: ResourceQuery, method: str) -> Any:
        req = build_request(query, method, prefix=self.prefix)
        _log.debug("resource: %s %s", req.method, req.path, extra={"params": req.params})
        return await self.http.request(req.method, req.path, json=req.body, params=req.params or None)

    async def get(self, query: ResourceQuery) -> list[dict[str, Any]]:
        return unwrap_records(await self._send(query, "GET"))

    async def get_one(self, query: ResourceQuery) -> dict[str, Any] | None:
        if query.id is None:
            raise ValueError("get_one requires a query with an id")
        records = unwrap_records(await self._send(query, "GET"))
        return records[0] if records else None

    async def post(self, query: ResourceQuery) -> dict[str, Any]:
        """Created record, or ``{}`` when the server answers without one (empty or text body)."""
        records = unwrap_records(await self._send(query, "POST"))
        return records[0] if records else {}

    async def patch(self, query: ResourceQuery) -> None:
        await self._send(query, "PATCH")

    async def delete(self, query: ResourceQuery) -> None:
        await self._send(query, "DELETE")
