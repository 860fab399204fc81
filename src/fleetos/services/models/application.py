# src/fleetos/services/models/application.py
from __future__ import annotations

import logging
from typing import Any

from fleetos.services.api.client import ApiHttpClient
from fleetos.services.api.errors import ApplicationNotFound, InvalidDeviceType
from fleetos.services.api.models import Application, ApplicationSummary
from fleetos.services.api.query import ResourceQuery
from fleetos.services.api.resource import ResourceClient
from fleetos.services.api.session import SessionContext

from .device_types import DeviceTypeCatalog

__all__ = ["ApplicationModel"]

_log = logging.getLogger("fleetos.models.application")

RESOURCE = "application"


class ApplicationModel:
    """Operations over the ``application`` resource."""

    def __init__(
        self,
        resources: ResourceClient,
        http: ApiHttpClient,
        session: SessionContext,
        catalog: DeviceTypeCatalog,
    ) -> None:
        self.resources = resources
        self.http = http
        self.session = session
        self.catalog = catalog

    async def get_all(self) -> list[ApplicationSummary]:
        """Applications of the current user with live device counters, by name."""
        user_id = await self.session.get_user_id()
        records = await self.resources.get(
            ResourceQuery(
                resource=RESOURCE,
                filter={"user": user_id},
                expand="device",
                orderby="app_name asc",
            )
        )
        return [ApplicationSummary.from_record(record) for record in records]

    async def get(self, name: str) -> Application:
        records = await self.resources.get(ResourceQuery(resource=RESOURCE, filter={"app_name": name}))
        if not records:
            raise ApplicationNotFound(name)
        return Application.from_record(records[0])

    async def has(self, name: str) -> bool:
        try:
            await self.get(name)
        except ApplicationNotFound:
            return False
        return True

    async def has_any(self) -> bool:
        return bool(await self.get_all())

    async def get_by_id(self, app_id: int | str) -> Application:
        record = await self.resources.get_one(ResourceQuery(resource=RESOURCE, id=app_id))
        if record is None:
            raise ApplicationNotFound(app_id)
        return Application.from_record(record)

    async def create(self, name: str, device_type: str) -> Application:
        """Create an application; ``device_type`` may be a display name or a slug."""
        slug = await self.catalog.get_device_slug(device_type)
        if slug is None:
            raise InvalidDeviceType(device_type)
        record = await self.resources.post(
            ResourceQuery(resource=RESOURCE, body={"app_name": name, "device_type": slug})
        )
        _log.info("application created", extra={"app_name": name, "device_type": slug})
        if record.get("id") is None:
            return await self.get(name)
        return Application.from_record(record)

    async def remove(self, name: str) -> None:
        await self.get(name)
        await self.resources.delete(ResourceQuery(resource=RESOURCE, filter={"app_name": name}))
        _log.info("application removed", extra={"app_name": name})

    async def restart(self, name: str) -> None:
        application = await self.get(name)
        await self.http.send("POST", f"/application/{application.id}/restart")
        _log.info("application restarted", extra={"app_name": name})

    async def get_api_key(self, name: str) -> Any:
        """Mint a new API key for the application. Every call issues a fresh key."""
        application = await self.get(name)
        response = await self.http.send("POST", f"/application/{application.id}/generate-api-key")
        return response.body
