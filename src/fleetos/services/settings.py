from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from fleetos.config import const

__all__ = [
    "ApiSettings",
    "AuthSettings",
    "DeviceSettings",
    "FleetSettings",
    "base_dir",
    "config_path",
    "load_settings",
    "save_settings",
]


def base_dir() -> Path:
    override = os.environ.get("FLEETOS_HOME", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / const.HOME_DIRNAME


def config_path() -> Path:
    p = base_dir() / const.CONFIG_FILENAME
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


@dataclass
class ApiSettings:
    base_url: str = const.API_URL
    prefix: str = const.API_PREFIX
    timeout: float = const.API_TIMEOUT
    # bool or path to a CA bundle
    verify: bool | str = True


@dataclass
class AuthSettings:
    token: str | None = None


@dataclass
class DeviceSettings:
    urls_base: str = const.DEVICE_URLS_BASE


@dataclass
class FleetSettings:
    api: ApiSettings = field(default_factory=ApiSettings)
    auth: AuthSettings = field(default_factory=AuthSettings)
    devices: DeviceSettings = field(default_factory=DeviceSettings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "api": asdict(self.api),
            "auth": asdict(self.auth),
            "devices": asdict(self.devices),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "FleetSettings":
        data = data if isinstance(data, dict) else {}
        api_raw = data.get("api") if isinstance(data.get("api"), dict) else {}
        auth_raw = data.get("auth") if isinstance(data.get("auth"), dict) else {}
        devices_raw = data.get("devices") if isinstance(data.get("devices"), dict) else {}
        timeout = api_raw.get("timeout")
        try:
            timeout_value = float(timeout) if timeout is not None else const.API_TIMEOUT
        except (TypeError, ValueError):
            timeout_value = const.API_TIMEOUT
        verify = api_raw.get("verify", True)
        return cls(
            api=ApiSettings(
                base_url=api_raw.get("base_url") or const.API_URL,
                prefix=api_raw.get("prefix") or const.API_PREFIX,
                timeout=timeout_value,
                verify=verify if isinstance(verify, (bool, str)) else True,
            ),
            auth=AuthSettings(token=auth_raw.get("token") or None),
            devices=DeviceSettings(urls_base=devices_raw.get("urls_base") or const.DEVICE_URLS_BASE),
        )

    def apply_env(self) -> None:
        api_url = os.environ.get("FLEETOS_API_URL", "").strip()
        if api_url:
            self.api.base_url = api_url
        token = os.environ.get("FLEETOS_TOKEN", "").strip()
        if token:
            self.auth.token = token
        urls_base = os.environ.get("FLEETOS_DEVICE_URLS_BASE", "").strip()
        if urls_base:
            self.devices.urls_base = urls_base


def load_settings(path: Path | None = None, *, env: bool = True) -> FleetSettings:
    """Read ``config.yaml`` (written with defaults when absent) and apply env overrides."""
    path = path or config_path()
    if not path.exists():
        settings = FleetSettings()
        save_settings(settings, path)
    else:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        settings = FleetSettings.from_dict(data)
    if env:
        settings.apply_env()
    return settings


def save_settings(settings: FleetSettings, path: Path | None = None) -> Path:
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(settings.to_dict(), allow_unicode=True, sort_keys=False),
        encoding="utf-8",
    )
    try:
        os.chmod(path, 0o600)
    except PermissionError:
        pass
    return path
