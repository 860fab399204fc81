"""Error kinds raised by the fleet data-access layer.

Transport failures are not wrapped here: :class:`fleetos.services.api.client.ApiHttpError`
reaches the caller unchanged.
"""
from __future__ import annotations

from typing import Any

__all__ = [
    "FleetError",
    "ApplicationNotFound",
    "DeviceNotFound",
    "InvalidDeviceType",
    "IncompatibleDeviceType",
    "UnsupportedDeviceType",
    "DeviceOffline",
    "DeviceNotWebAccessible",
]


class FleetError(RuntimeError):
    """Base class for domain errors of the fleet models."""


class ApplicationNotFound(FleetError):
    def __init__(self, identifier: Any) -> None:
        super().__init__(f"Application not found: {identifier}")
        self.identifier = identifier


class DeviceNotFound(FleetError):
    def __init__(self, identifier: Any) -> None:
        super().__init__(f"Device not found: {identifier}")
        self.identifier = identifier


class InvalidDeviceType(FleetError):
    def __init__(self, identifier: str) -> None:
        super().__init__(f"Invalid device type: {identifier}")
        self.identifier = identifier


class IncompatibleDeviceType(FleetError):
    """Raised when a device would be bound to an application of another device type."""

    def __init__(self, application: str, *, device_type: str, application_device_type: str) -> None:
        super().__init__(
            f"Incompatible application: {application} "
            f"(device type {device_type!r}, application device type {application_device_type!r})"
        )
        self.application = application
        self.device_type = device_type
        self.application_device_type = application_device_type


class UnsupportedDeviceType(FleetError):
    def __init__(self, slug: str) -> None:
        super().__init__(f"Unsupported device: {slug}")
        self.slug = slug


class DeviceOffline(FleetError):
    def __init__(self, uuid: str) -> None:
        super().__init__(f"The device is offline: {uuid}")
        self.uuid = uuid


class DeviceNotWebAccessible(FleetError):
    def __init__(self, uuid: str) -> None:
        super().__init__(f"Device is not web accessible: {uuid}")
        self.uuid = uuid
