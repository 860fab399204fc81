# src/fleetos/services/models/registration.py
from __future__ import annotations

import asyncio
import logging

from pydantic import BaseModel

from fleetos.services.api.errors import DeviceNotFound
from fleetos.services.api.ids import DeviceUuid, generate_uuid
from fleetos.services.api.models import Device
from fleetos.services.api.query import ResourceQuery
from fleetos.services.api.resource import ResourceClient
from fleetos.services.api.session import SessionContext

from .application import ApplicationModel

__all__ = ["DeviceRegistration", "DeviceRegistrationRequest"]

_log = logging.getLogger("fleetos.models.registration")


class DeviceRegistrationRequest(BaseModel):
    """Body of the device registration request."""

    user: int | str
    application: int
    device_type: str
    uuid: str


class DeviceRegistration:
    """Provisions a new device identity and binds it to an application.

    The steps are:

    1. generate a UUID locally (:meth:`generate_uuid`, no network);
    2. concurrently resolve the session user id, a freshly minted
       application API key and the target application;
    3. post one registration request carrying all of the above.

    A failure in step 2 aborts before anything is sent to the registration
    endpoint.  Nothing is retried; after a failed registration the caller must
    start over with a new UUID.
    """

    def __init__(self, resources: ResourceClient, session: SessionContext, applications: ApplicationModel) -> None:
        self.resources = resources
        self.session = session
        self.applications = applications

    @staticmethod
    def generate_uuid() -> DeviceUuid:
        return generate_uuid()

    async def register(self, application_name: str, uuid: str) -> Device:
        user_id, api_key, application = await asyncio.gather(
            self.session.get_user_id(),
            self.applications.get_api_key(application_name),
            self.applications.get(application_name),
        )
        payload = DeviceRegistrationRequest(
            user=user_id,
            application=application.id,
            device_type=application.device_type,
            uuid=uuid,
        )
        _log.debug("registration: submitting", extra={"uuid": uuid, "application_id": application.id})
        record = await self.resources.post(
            ResourceQuery(resource="device", body=payload.model_dump(), options={"apikey": api_key})
        )
        _log.info("device registered", extra={"uuid": uuid, "app_name": application_name})
        if record.get("id") is None:
            # accepted without echoing the record; read it back by uuid
            record = await self._fetch(uuid)
        return Device.from_record(record)

    async def _fetch(self, uuid: str) -> dict:
        records = await self.resources.get(ResourceQuery(resource="device", filter={"uuid": uuid}))
        if not records:
            raise DeviceNotFound(uuid)
        return records[0]
