"""Resource access primitives for the fleet API."""
from .client import ApiHttpClient, ApiHttpError, ApiResponse
from .errors import (
    ApplicationNotFound,
    DeviceNotFound,
    DeviceNotWebAccessible,
    DeviceOffline,
    FleetError,
    IncompatibleDeviceType,
    InvalidDeviceType,
    UnsupportedDeviceType,
)
from .ids import DeviceUuid, generate_uuid, is_device_uuid
from .models import Application, ApplicationSummary, Device, DeviceDetails, DeviceTypeManifest
from .query import Direction, OrderBy, ResourceQuery, ResourceRequest, build_request
from .resource import ResourceClient
from .session import SessionContext

__all__ = [
    "ApiHttpClient",
    "ApiHttpError",
    "ApiResponse",
    "ApplicationNotFound",
    "DeviceNotFound",
    "DeviceNotWebAccessible",
    "DeviceOffline",
    "FleetError",
    "IncompatibleDeviceType",
    "InvalidDeviceType",
    "UnsupportedDeviceType",
    "DeviceUuid",
    "generate_uuid",
    "is_device_uuid",
    "Application",
    "ApplicationSummary",
    "Device",
    "DeviceDetails",
    "DeviceTypeManifest",
    "Direction",
    "OrderBy",
    "ResourceQuery",
    "ResourceRequest",
    "build_request",
    "ResourceClient",
    "SessionContext",
]
