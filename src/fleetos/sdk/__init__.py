"""fleetos SDK public facade."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from fleetos.services.api.client import ApiHttpClient
from fleetos.services.api.resource import ResourceClient
from fleetos.services.api.session import SessionContext
from fleetos.services.models import (
    ApplicationModel,
    ConfigModel,
    DeviceModel,
    DeviceRegistration,
    DeviceTypeCatalog,
)
from fleetos.services.settings import FleetSettings, load_settings

from .compat import run_sync, with_callback

__all__ = ["Fleet", "run_sync", "with_callback"]


@dataclass(slots=True)
class Fleet:
    """Wires the transport, session and models for one caller.

    The session belongs to the caller: replace its token with
    ``fleet.session.set_token(...)`` at any time.
    """

    settings: FleetSettings
    session: SessionContext
    http: ApiHttpClient
    resources: ResourceClient
    config: ConfigModel
    catalog: DeviceTypeCatalog
    application: ApplicationModel
    registration: DeviceRegistration
    device: DeviceModel

    @classmethod
    def from_settings(
        cls,
        settings: FleetSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "Fleet":
        settings = settings or load_settings()
        session = SessionContext(settings.auth.token)
        http = ApiHttpClient.from_settings(settings, session=session, transport=transport)
        session.bind_http(http)
        resources = ResourceClient(http, prefix=settings.api.prefix)
        config = ConfigModel(http, device_urls_base=settings.devices.urls_base)
        catalog = DeviceTypeCatalog(config.get_device_types)
        application = ApplicationModel(resources, http, session, catalog)
        registration = DeviceRegistration(resources, session, application)
        device = DeviceModel(resources, http, application, catalog, config, registration)
        return cls(
            settings=settings,
            session=session,
            http=http,
            resources=resources,
            config=config,
            catalog=catalog,
            application=application,
            registration=registration,
            device=device,
        )
