"""Typed records built from raw resource rows.

Derived values (device counters, ``application_name``) are computed into the
summary/detail wrappers; the fetched row itself is never modified.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

__all__ = [
    "Application",
    "ApplicationSummary",
    "Device",
    "DeviceDetails",
    "DeviceTypeManifest",
    "related_id",
    "related_record",
]


def _frozen(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(raw))


def related_record(value: Any) -> Mapping[str, Any] | None:
    """Expanded navigation property: a one-element list or a mapping."""
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, Mapping):
        return value
    return None


def related_id(value: Any) -> int | None:
    record = related_record(value)
    if record is not None:
        raw = record.get("id", record.get("__id"))
        return int(raw) if raw is not None else None
    if isinstance(value, (int, str)) and str(value).isdigit():
        return int(value)
    return None


@dataclass(frozen=True, slots=True)
class Application:
    id: int
    app_name: str
    device_type: str
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> "Application":
        return cls(
            id=int(data["id"]),
            app_name=str(data.get("app_name", "")),
            device_type=str(data.get("device_type", "")),
            raw=_frozen(data),
        )


@dataclass(frozen=True, slots=True)
class ApplicationSummary:
    application: Application
    online_devices: int
    devices_length: int

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> "ApplicationSummary":
        devices = data.get("device") or []
        if not isinstance(devices, list):
            devices = []
        online = sum(1 for device in devices if isinstance(device, Mapping) and device.get("is_online") is True)
        return cls(application=Application.from_record(data), online_devices=online, devices_length=len(devices))


@dataclass(frozen=True, slots=True)
class Device:
    id: int
    uuid: str
    name: str
    device_type: str
    application_id: int | None = None
    ip_address: str | None = None
    vpn_address: str | None = None
    is_online: bool = False
    is_web_accessible: bool = False
    note: str | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> "Device":
        return cls(
            id=int(data["id"]),
            uuid=str(data.get("uuid", "")),
            name=str(data.get("name", "")),
            device_type=str(data.get("device_type", "")),
            application_id=related_id(data.get("application")),
            ip_address=data.get("ip_address"),
            vpn_address=data.get("vpn_address"),
            is_online=bool(data.get("is_online", False)),
            is_web_accessible=bool(data.get("is_web_accessible", False)),
            note=data.get("note"),
            raw=_frozen(data),
        )

    def local_ip_addresses(self) -> list[str]:
        """Addresses from ``ip_address`` without the VPN address, order preserved."""
        addresses = (self.ip_address or "").split()
        return [address for address in addresses if address != self.vpn_address]


@dataclass(frozen=True, slots=True)
class DeviceDetails:
    device: Device
    application_name: str | None

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> "DeviceDetails":
        application = related_record(data.get("application"))
        name = application.get("app_name") if application is not None else None
        return cls(device=Device.from_record(data), application_name=name)


@dataclass(frozen=True, slots=True)
class DeviceTypeManifest:
    slug: str
    name: str
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> "DeviceTypeManifest":
        return cls(slug=str(data.get("slug", "")), name=str(data.get("name", "")), raw=_frozen(data))
