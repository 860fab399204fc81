# src/fleetos/services/models/config.py
from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from fleetos.config.const import CONFIG_PATH, DEVICE_URLS_BASE
from fleetos.services.api.client import ApiHttpClient

__all__ = ["ConfigModel", "RemoteConfig"]

_log = logging.getLogger("fleetos.models.config")


class RemoteConfig(BaseModel):
    """Public configuration published by the API (``GET /config``)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    device_types: list[dict[str, Any]] = Field(default_factory=list, alias="deviceTypes")
    device_urls_base: str | None = Field(default=None, alias="deviceUrlsBase")


class ConfigModel:
    def __init__(self, http: ApiHttpClient, *, device_urls_base: str = DEVICE_URLS_BASE) -> None:
        self.http = http
        self.device_urls_base = device_urls_base

    async def get_all(self) -> RemoteConfig:
        body = await self.http.request("GET", CONFIG_PATH)
        config = RemoteConfig.model_validate(body if isinstance(body, dict) else {})
        if not config.device_urls_base:
            _log.debug("config: deviceUrlsBase missing, using %s", self.device_urls_base)
            config.device_urls_base = self.device_urls_base
        return config

    async def get_device_types(self) -> list[dict[str, Any]]:
        config = await self.get_all()
        return config.device_types
