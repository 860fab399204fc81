# src/fleetos/services/models/device.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

from fleetos.services.api.client import ApiHttpClient
from fleetos.services.api.errors import (
    ApplicationNotFound,
    DeviceNotFound,
    DeviceNotWebAccessible,
    DeviceOffline,
    IncompatibleDeviceType,
)
from fleetos.services.api.ids import DeviceUuid
from fleetos.services.api.models import Device, DeviceDetails, DeviceTypeManifest
from fleetos.services.api.query import ResourceQuery
from fleetos.services.api.resource import ResourceClient

from .application import ApplicationModel
from .config import ConfigModel
from .device_types import DeviceTypeCatalog
from .registration import DeviceRegistration

__all__ = ["DeviceModel"]

_log = logging.getLogger("fleetos.models.device")

RESOURCE = "device"


class DeviceModel:
    """Operations over the ``device`` resource.

    Write operations (``remove``, ``rename``, ``note``, ``identify`` and the
    device URL toggles) check that the device exists first and raise
    :class:`DeviceNotFound` before touching it.  The check and the write are
    separate requests; a concurrent change in between is not detected.
    """

    def __init__(
        self,
        resources: ResourceClient,
        http: ApiHttpClient,
        applications: ApplicationModel,
        catalog: DeviceTypeCatalog,
        config: ConfigModel,
        registration: DeviceRegistration,
    ) -> None:
        self.resources = resources
        self.http = http
        self.applications = applications
        self.catalog = catalog
        self.config = config
        self.registration = registration

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------
    async def get_all(self) -> list[DeviceDetails]:
        records = await self.resources.get(
            ResourceQuery(resource=RESOURCE, expand="application", orderby="name asc")
        )
        return [DeviceDetails.from_record(record) for record in records]

    async def get_all_by_application(self, name: str) -> list[DeviceDetails]:
        if not await self.applications.has(name):
            raise ApplicationNotFound(name)
        records = await self.resources.get(
            ResourceQuery(
                resource=RESOURCE,
                filter={"application": {"app_name": name}},
                expand="application",
                orderby="name asc",
            )
        )
        return [DeviceDetails.from_record(record) for record in records]

    async def get(self, uuid: str) -> DeviceDetails:
        records = await self.resources.get(
            ResourceQuery(resource=RESOURCE, filter={"uuid": uuid}, expand="application")
        )
        if not records:
            raise DeviceNotFound(uuid)
        return DeviceDetails.from_record(records[0])

    async def get_by_name(self, name: str) -> list[DeviceDetails]:
        """All devices called ``name``; names are not unique."""
        records = await self.resources.get(
            ResourceQuery(resource=RESOURCE, filter={"name": name}, expand="application")
        )
        if not records:
            raise DeviceNotFound(name)
        return [DeviceDetails.from_record(record) for record in records]

    async def get_name(self, uuid: str) -> str:
        return (await self.get(uuid)).device.name

    async def get_application_name(self, uuid: str) -> str | None:
        return (await self.get(uuid)).application_name

    async def has(self, uuid: str) -> bool:
        try:
            await self.get(uuid)
        except DeviceNotFound:
            return False
        return True

    async def is_online(self, uuid: str) -> bool:
        return (await self.get(uuid)).device.is_online

    async def get_local_ip_addresses(self, uuid: str) -> list[str]:
        device = (await self.get(uuid)).device
        if not device.is_online:
            raise DeviceOffline(uuid)
        return device.local_ip_addresses()

    # ------------------------------------------------------------------
    # writes
    # ------------------------------------------------------------------
    async def _ensure_exists(self, uuid: str) -> None:
        if not await self.has(uuid):
            raise DeviceNotFound(uuid)

    async def _patch(self, uuid: str, body: Mapping[str, Any]) -> None:
        await self.resources.patch(ResourceQuery(resource=RESOURCE, filter={"uuid": uuid}, body=body))

    async def remove(self, uuid: str) -> None:
        await self.get(uuid)
        await self.resources.delete(ResourceQuery(resource=RESOURCE, filter={"uuid": uuid}))
        _log.info("device removed", extra={"uuid": uuid})

    async def identify(self, uuid: str) -> None:
        await self._ensure_exists(uuid)
        await self.http.send("POST", "/blink", json={"uuid": uuid})

    async def rename(self, uuid: str, new_name: str) -> None:
        await self._ensure_exists(uuid)
        await self._patch(uuid, {"name": new_name})
        _log.info("device renamed", extra={"uuid": uuid, "device_name": new_name})

    async def note(self, uuid: str, note: str) -> None:
        await self._ensure_exists(uuid)
        await self._patch(uuid, {"note": note})

    async def move(self, uuid: str, application_name: str) -> None:
        details, application = await asyncio.gather(
            self.get(uuid),
            self.applications.get(application_name),
        )
        if details.device.device_type != application.device_type:
            raise IncompatibleDeviceType(
                application_name,
                device_type=details.device.device_type,
                application_device_type=application.device_type,
            )
        await self._patch(uuid, {"application": application.id})
        _log.info("device moved", extra={"uuid": uuid, "app_name": application_name})

    async def restart(self, uuid: str) -> Any:
        device = (await self.get(uuid)).device
        response = await self.http.send("POST", f"/device/{device.id}/restart")
        return response.body

    # ------------------------------------------------------------------
    # device types
    # ------------------------------------------------------------------
    async def get_display_name(self, slug: str) -> str | None:
        return await self.catalog.get_display_name(slug)

    async def get_device_slug(self, name_or_slug: str) -> str | None:
        return await self.catalog.get_device_slug(name_or_slug)

    async def get_supported_device_types(self) -> list[str]:
        return await self.catalog.get_supported_device_types()

    async def get_manifest_by_slug(self, slug: str) -> DeviceTypeManifest:
        return await self.catalog.get_manifest_by_slug(slug)

    async def get_manifest_by_application(self, application_name: str) -> DeviceTypeManifest:
        application = await self.applications.get(application_name)
        return await self.get_manifest_by_slug(application.device_type)

    # ------------------------------------------------------------------
    # registration
    # ------------------------------------------------------------------
    def generate_uuid(self) -> DeviceUuid:
        return self.registration.generate_uuid()

    async def register(self, application_name: str, uuid: str) -> Device:
        return await self.registration.register(application_name, uuid)

    # ------------------------------------------------------------------
    # device URLs
    # ------------------------------------------------------------------
    async def has_device_url(self, uuid: str) -> bool:
        return (await self.get(uuid)).device.is_web_accessible

    async def get_device_url(self, uuid: str) -> str:
        if not await self.has_device_url(uuid):
            raise DeviceNotWebAccessible(uuid)
        config = await self.config.get_all()
        return f"https://{uuid}.{config.device_urls_base}"

    async def enable_device_url(self, uuid: str) -> None:
        await self._ensure_exists(uuid)
        await self._patch(uuid, {"is_web_accessible": True})

    async def disable_device_url(self, uuid: str) -> None:
        await self._ensure_exists(uuid)
        await self._patch(uuid, {"is_web_accessible": False})
