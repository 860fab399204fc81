from __future__ import annotations

import copy
from typing import Any, Mapping

import pytest

from fleetos.services.api.client import ApiResponse
from fleetos.services.api.query import Direction, ResourceQuery
from fleetos.services.models import (
    ApplicationModel,
    ConfigModel,
    DeviceModel,
    DeviceRegistration,
    DeviceTypeCatalog,
)

DEVICE_TYPES = [
    {"slug": "raspberry-pi", "name": "Raspberry Pi"},
    {"slug": "raspberry-pi2", "name": "Raspberry Pi 2"},
    {"slug": "beaglebone-black", "name": "BeagleBone Black"},
]

UUID_A = "a" * 62
UUID_B = "b" * 62
UUID_C = "c" * 62


def _seed() -> dict[str, list[dict[str, Any]]]:
    return {
        "application": [
            {"id": 10, "app_name": "Garden", "device_type": "raspberry-pi", "user": 1},
            {"id": 11, "app_name": "Attic", "device_type": "raspberry-pi", "user": 1},
            {"id": 12, "app_name": "Beagles", "device_type": "beaglebone-black", "user": 1},
            {"id": 13, "app_name": "Empty", "device_type": "raspberry-pi2", "user": 1},
            {"id": 14, "app_name": "Foreign", "device_type": "raspberry-pi", "user": 2},
        ],
        "device": [
            {
                "id": 100,
                "uuid": UUID_A,
                "name": "sprinkler",
                "device_type": "raspberry-pi",
                "application": 10,
                "is_online": True,
                "is_web_accessible": False,
                "ip_address": "10.0.0.1 10.0.0.2",
                "vpn_address": "10.0.0.2",
                "note": None,
            },
            {
                "id": 101,
                "uuid": UUID_B,
                "name": "camera",
                "device_type": "raspberry-pi",
                "application": 10,
                "is_online": False,
                "is_web_accessible": True,
                "ip_address": "192.168.1.4 10.1.0.9",
                "vpn_address": "10.1.0.9",
                "note": "porch",
            },
            {
                "id": 102,
                "uuid": UUID_C,
                "name": "camera",
                "device_type": "beaglebone-black",
                "application": 12,
                "is_online": True,
                "is_web_accessible": False,
                "ip_address": "10.2.0.5",
                "vpn_address": "10.2.0.5",
                "note": None,
            },
        ],
    }


class FakeResources:
    """In-memory stand-in for :class:`ResourceClient` with equality filters."""

    def __init__(self) -> None:
        self.tables = _seed()
        self.calls: list[tuple[str, ResourceQuery]] = []
        self._next_id = 1000

    # -- helpers -----------------------------------------------------------
    def _related(self, record: Mapping[str, Any], key: str) -> dict[str, Any] | None:
        if key == "application":
            for app in self.tables["application"]:
                if app["id"] == record.get("application"):
                    return app
        return None

    def _matches(self, record: Mapping[str, Any], flt: Mapping[str, Any]) -> bool:
        for key, value in flt.items():
            if isinstance(value, Mapping):
                related = self._related(record, key)
                if related is None or not self._matches(related, value):
                    return False
            elif record.get(key) != value:
                return False
        return True

    def _expand(self, resource: str, record: dict[str, Any], expand: tuple[str, ...]) -> dict[str, Any]:
        row = copy.deepcopy(record)
        if resource == "device" and "application" in expand:
            related = self._related(record, "application")
            row["application"] = [copy.deepcopy(related)] if related else []
        if resource == "application" and "device" in expand:
            row["device"] = [copy.deepcopy(d) for d in self.tables["device"] if d["application"] == record["id"]]
        return row

    def _select(self, query: ResourceQuery) -> list[dict[str, Any]]:
        rows = self.tables[query.resource]
        if query.id is not None:
            rows = [r for r in rows if r["id"] == query.id]
        if query.filter:
            rows = [r for r in rows if self._matches(r, query.filter)]
        return rows

    # -- ResourceClient surface -------------------------------------------
    async def get(self, query: ResourceQuery) -> list[dict[str, Any]]:
        self.calls.append(("get", query))
        rows = [self._expand(query.resource, r, query.expand) for r in self._select(query)]
        if query.orderby is not None:
            rows.sort(key=lambda r: r.get(query.orderby.field), reverse=query.orderby.direction is Direction.DESC)
        return rows

    async def get_one(self, query: ResourceQuery) -> dict[str, Any] | None:
        self.calls.append(("get_one", query))
        rows = self._select(query)
        return copy.deepcopy(rows[0]) if rows else None

    async def post(self, query: ResourceQuery) -> dict[str, Any]:
        self.calls.append(("post", query))
        self._next_id += 1
        record = {"id": self._next_id, **dict(query.body or {})}
        self.tables[query.resource].append(record)
        return copy.deepcopy(record)

    async def patch(self, query: ResourceQuery) -> None:
        self.calls.append(("patch", query))
        for row in self._select(query):
            row.update(dict(query.body or {}))

    async def delete(self, query: ResourceQuery) -> None:
        self.calls.append(("delete", query))
        doomed = self._select(query)
        self.tables[query.resource] = [r for r in self.tables[query.resource] if r not in doomed]

    def calls_of(self, kind: str, resource: str | None = None) -> list[ResourceQuery]:
        return [q for k, q in self.calls if k == kind and (resource is None or q.resource == resource)]


class FakeHttp:
    """Records action requests; answers ``/config`` and action endpoints."""

    def __init__(self, *, device_urls_base: str | None = "fleetos.io") -> None:
        self.calls: list[tuple[str, str, Any]] = []
        self.device_urls_base = device_urls_base
        self._keys = 0

    async def send(self, method: str, path: str, *, json: Any | None = None, **_: Any) -> ApiResponse:
        self.calls.append((method, path, json))
        if path.endswith("/generate-api-key"):
            self._keys += 1
            return ApiResponse(status_code=200, body=f"key-{self._keys}")
        if path.startswith("/device/") and path.endswith("/restart"):
            return ApiResponse(status_code=200, body="OK")
        return ApiResponse(status_code=200, body=None)

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        if path == "/config":
            self.calls.append((method, path, None))
            payload: dict[str, Any] = {"deviceTypes": copy.deepcopy(DEVICE_TYPES)}
            if self.device_urls_base:
                payload["deviceUrlsBase"] = self.device_urls_base
            return payload
        return (await self.send(method, path, **kwargs)).body

    def paths(self) -> list[str]:
        return [path for _, path, _ in self.calls]


class FakeSession:
    def __init__(self, user_id: int = 1) -> None:
        self.user_id = user_id
        self.lookups = 0

    async def get_user_id(self) -> int:
        self.lookups += 1
        return self.user_id


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def backend() -> FakeResources:
    return FakeResources()


@pytest.fixture()
def http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def config(http: FakeHttp) -> ConfigModel:
    return ConfigModel(http, device_urls_base="local.test")


@pytest.fixture()
def catalog(config: ConfigModel) -> DeviceTypeCatalog:
    return DeviceTypeCatalog(config.get_device_types)


@pytest.fixture()
def applications(backend, http, session, catalog) -> ApplicationModel:
    return ApplicationModel(backend, http, session, catalog)


@pytest.fixture()
def registration(backend, session, applications) -> DeviceRegistration:
    return DeviceRegistration(backend, session, applications)


@pytest.fixture()
def devices(backend, http, applications, catalog, config, registration) -> DeviceModel:
    return DeviceModel(backend, http, applications, catalog, config, registration)


