from __future__ import annotations

import pytest

from fleetos.services.api.errors import (
    ApplicationNotFound,
    DeviceNotFound,
    DeviceNotWebAccessible,
    DeviceOffline,
    IncompatibleDeviceType,
    UnsupportedDeviceType,
)

UUID_A = "a" * 62
UUID_B = "b" * 62
UUID_C = "c" * 62
MISSING = "f" * 62


@pytest.mark.anyio
async def test_get_all_carries_application_name(devices):
    items = await devices.get_all()
    assert [item.device.name for item in items] == ["camera", "camera", "sprinkler"]
    assert {item.device.uuid: item.application_name for item in items} == {
        UUID_A: "Garden",
        UUID_B: "Garden",
        UUID_C: "Beagles",
    }


@pytest.mark.anyio
async def test_get_all_by_application(devices, backend):
    items = await devices.get_all_by_application("Garden")
    assert {item.device.uuid for item in items} == {UUID_A, UUID_B}
    assert backend.calls_of("get", "device")[0].filter == {"application": {"app_name": "Garden"}}
    assert await devices.get_all_by_application("Empty") == []


@pytest.mark.anyio
async def test_get_all_by_unknown_application(devices, backend):
    with pytest.raises(ApplicationNotFound):
        await devices.get_all_by_application("Nope")
    assert backend.calls_of("get", "device") == []


@pytest.mark.anyio
async def test_single_device_reads(devices):
    assert await devices.get_name(UUID_A) == "sprinkler"
    assert await devices.get_application_name(UUID_C) == "Beagles"
    assert await devices.is_online(UUID_A)
    assert not await devices.is_online(UUID_B)
    assert await devices.has(UUID_A)
    assert not await devices.has(MISSING)
    with pytest.raises(DeviceNotFound):
        await devices.get(MISSING)


@pytest.mark.anyio
async def test_get_by_name_returns_every_match(devices):
    items = await devices.get_by_name("camera")
    assert {item.device.uuid for item in items} == {UUID_B, UUID_C}
    with pytest.raises(DeviceNotFound):
        await devices.get_by_name("toaster")


@pytest.mark.anyio
async def test_local_ip_addresses(devices):
    assert await devices.get_local_ip_addresses(UUID_A) == ["10.0.0.1"]
    with pytest.raises(DeviceOffline):
        await devices.get_local_ip_addresses(UUID_B)


@pytest.mark.anyio
@pytest.mark.parametrize(
    "operation, args",
    [
        ("remove", ()),
        ("identify", ()),
        ("rename", ("new",)),
        ("note", ("hello",)),
        ("enable_device_url", ()),
        ("disable_device_url", ()),
    ],
)
async def test_writes_on_missing_device_touch_nothing(devices, backend, http, operation, args):
    with pytest.raises(DeviceNotFound):
        await getattr(devices, operation)(MISSING, *args)
    assert backend.calls_of("patch") == []
    assert backend.calls_of("delete") == []
    assert http.calls == []


@pytest.mark.anyio
async def test_rename_and_note_patch_by_uuid(devices, backend):
    await devices.rename(UUID_A, "hose")
    await devices.note(UUID_A, "north bed")
    patches = backend.calls_of("patch", "device")
    assert [p.body for p in patches] == [{"name": "hose"}, {"note": "north bed"}]
    assert all(p.filter == {"uuid": UUID_A} for p in patches)
    assert await devices.get_name(UUID_A) == "hose"


@pytest.mark.anyio
async def test_remove_and_identify(devices, backend, http):
    await devices.identify(UUID_B)
    assert http.calls == [("POST", "/blink", {"uuid": UUID_B})]
    await devices.remove(UUID_B)
    assert not await devices.has(UUID_B)


@pytest.mark.anyio
async def test_move_to_compatible_application(devices, backend):
    await devices.move(UUID_A, "Attic")
    assert backend.calls_of("patch", "device")[0].body == {"application": 11}
    assert await devices.get_application_name(UUID_A) == "Attic"


@pytest.mark.anyio
async def test_move_to_incompatible_application_is_refused(devices, backend):
    with pytest.raises(IncompatibleDeviceType):
        await devices.move(UUID_A, "Beagles")
    assert backend.calls_of("patch") == []


@pytest.mark.anyio
async def test_move_to_unknown_application(devices, backend):
    with pytest.raises(ApplicationNotFound):
        await devices.move(UUID_A, "Nope")
    assert backend.calls_of("patch") == []


@pytest.mark.anyio
async def test_restart_returns_response_body(devices, http):
    assert await devices.restart(UUID_A) == "OK"
    assert http.paths() == ["/device/100/restart"]


@pytest.mark.anyio
async def test_device_url(devices):
    assert not await devices.has_device_url(UUID_A)
    with pytest.raises(DeviceNotWebAccessible):
        await devices.get_device_url(UUID_A)
    assert await devices.get_device_url(UUID_B) == f"https://{UUID_B}.fleetos.io"


@pytest.mark.anyio
async def test_device_url_falls_back_to_local_base(devices, http):
    http.device_urls_base = None
    assert await devices.get_device_url(UUID_B) == f"https://{UUID_B}.local.test"


@pytest.mark.anyio
async def test_enable_then_disable_device_url(devices):
    await devices.enable_device_url(UUID_A)
    assert await devices.has_device_url(UUID_A)
    assert await devices.get_device_url(UUID_A) == f"https://{UUID_A}.fleetos.io"
    await devices.disable_device_url(UUID_A)
    assert not await devices.has_device_url(UUID_A)


@pytest.mark.anyio
async def test_device_type_lookups(devices):
    assert await devices.get_device_slug("Raspberry Pi") == "raspberry-pi"
    assert await devices.get_device_slug("raspberry-pi") == "raspberry-pi"
    assert await devices.get_device_slug("Toaster") is None
    assert await devices.get_display_name("beaglebone-black") == "BeagleBone Black"
    assert await devices.get_display_name("toaster") is None
    assert "Raspberry Pi 2" in await devices.get_supported_device_types()


@pytest.mark.anyio
async def test_manifests(devices):
    assert (await devices.get_manifest_by_slug("raspberry-pi2")).name == "Raspberry Pi 2"
    assert (await devices.get_manifest_by_application("Beagles")).slug == "beaglebone-black"
    with pytest.raises(UnsupportedDeviceType):
        await devices.get_manifest_by_slug("toaster")
    with pytest.raises(ApplicationNotFound):
        await devices.get_manifest_by_application("Nope")
