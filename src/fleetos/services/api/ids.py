"""Device identifiers.

A device UUID is 31 bytes of ``secrets`` randomness rendered as 62 lowercase
hexadecimal characters.  It is issued client-side, before registration, and
stays the device's permanent external identity afterwards.
"""
from __future__ import annotations

import re
import secrets
from typing import NewType

__all__ = ["DeviceUuid", "UUID_BYTES", "UUID_LENGTH", "generate_uuid", "is_device_uuid"]

DeviceUuid = NewType("DeviceUuid", str)

UUID_BYTES = 31
UUID_LENGTH = UUID_BYTES * 2

_UUID_RE = re.compile(rf"^[0-9a-f]{{{UUID_LENGTH}}}$")


def generate_uuid() -> DeviceUuid:
    return DeviceUuid(secrets.token_hex(UUID_BYTES))


def is_device_uuid(value: str) -> bool:
    return bool(_UUID_RE.match(value or ""))
