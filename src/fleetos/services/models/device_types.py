"""Read-only lookups over the device-type catalog published by the API."""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Mapping, Sequence

from fleetos.services.api.errors import UnsupportedDeviceType
from fleetos.services.api.models import DeviceTypeManifest

__all__ = ["DeviceTypeCatalog"]

DeviceTypesSource = Callable[[], Awaitable[Sequence[Mapping[str, Any]]]]


class DeviceTypeCatalog:
    def __init__(self, source: DeviceTypesSource) -> None:
        # fetched on every lookup; the catalog keeps no copy
        self._source = source

    async def get_device_types(self) -> list[DeviceTypeManifest]:
        return [DeviceTypeManifest.from_record(item) for item in await self._source()]

    async def get_display_name(self, slug: str) -> str | None:
        for manifest in await self.get_device_types():
            if manifest.slug == slug:
                return manifest.name
        return None

    async def get_device_slug(self, name_or_slug: str) -> str | None:
        """Canonical slug for a display name or a slug; ``None`` when neither matches."""
        manifests = await self.get_device_types()
        for manifest in manifests:
            if manifest.name == name_or_slug:
                return manifest.slug
        for manifest in manifests:
            if manifest.slug == name_or_slug:
                return manifest.slug
        return None

    async def get_supported_device_types(self) -> list[str]:
        return [manifest.name for manifest in await self.get_device_types()]

    async def get_manifest_by_slug(self, slug: str) -> DeviceTypeManifest:
        for manifest in await self.get_device_types():
            if manifest.slug == slug:
                return manifest
        raise UnsupportedDeviceType(slug)
