"""Domain models of the fleet API: applications, devices, device types."""
from .application import ApplicationModel
from .config import ConfigModel, RemoteConfig
from .device import DeviceModel
from .device_types import DeviceTypeCatalog
from .registration import DeviceRegistration, DeviceRegistrationRequest

__all__ = [
    "ApplicationModel",
    "ConfigModel",
    "RemoteConfig",
    "DeviceModel",
    "DeviceTypeCatalog",
    "DeviceRegistration",
    "DeviceRegistrationRequest",
]
