"""Structured resource queries and their translation into OData-style requests.

A :class:`ResourceQuery` describes *what* to read or write (resource, single id
or filter tree, expansions, ordering, body).  :func:`build_request` turns it
into a :class:`ResourceRequest` that the resource client hands to the transport.
Nothing in this module performs I/O.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence

__all__ = [
    "Direction",
    "OrderBy",
    "ResourceQuery",
    "ResourceRequest",
    "build_request",
    "compile_filter",
    "format_value",
]


class _StrEnum(str, Enum):
    def __str__(self) -> str:  # pragma: no cover - convenience for logging only
        return str(self.value)


class Direction(_StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class OrderBy:
    field: str
    direction: Direction = Direction.ASC

    @classmethod
    def parse(cls, value: "str | OrderBy") -> "OrderBy":
        if isinstance(value, OrderBy):
            return value
        parts = str(value).split()
        if not parts or len(parts) > 2:
            raise ValueError(f"invalid orderby: {value!r}")
        direction = Direction(parts[1].lower()) if len(parts) == 2 else Direction.ASC
        return cls(field=parts[0], direction=direction)

    def render(self) -> str:
        return f"{self.field} {self.direction.value}"


def _normalize_expand(value: str | Sequence[str] | None) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value)


@dataclass(frozen=True, slots=True)
class ResourceQuery:
    """Description of a single operation against a named resource.

    ``id`` selects at most one record and cannot be combined with ``filter``.
    ``filter`` maps field names to equality values; a nested mapping filters
    on a related resource (``{"application": {"app_name": "MyApp"}}``).
    ``options`` carries extra query parameters sent verbatim (``apikey``).
    """

    resource: str
    id: int | str | None = None
    filter: Mapping[str, Any] | None = None
    expand: tuple[str, ...] = ()
    orderby: OrderBy | str | None = None
    body: Mapping[str, Any] | None = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.resource or not str(self.resource).strip():
            raise ValueError("resource must not be empty")
        if self.id is not None and self.filter:
            raise ValueError("id and filter are mutually exclusive")
        object.__setattr__(self, "expand", _normalize_expand(self.expand))
        if self.orderby is not None:
            object.__setattr__(self, "orderby", OrderBy.parse(self.orderby))


@dataclass(frozen=True, slots=True)
class ResourceRequest:
    method: str
    path: str
    params: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] | None = None


def format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    text = str(value).replace("'", "''")
    return f"'{text}'"


def _predicates(filter_tree: Mapping[str, Any], prefix: str = "") -> list[str]:
    clauses: list[str] = []
    for key, value in filter_tree.items():
        path = f"{prefix}/{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            clauses.extend(_predicates(value, path))
        else:
            clauses.append(f"{path} eq {format_value(value)}")
    return clauses


def compile_filter(filter_tree: Mapping[str, Any]) -> str:
    return " and ".join(_predicates(filter_tree))


def _resource_path(prefix: str, query: ResourceQuery) -> str:
    base = f"/{prefix.strip('/')}/{query.resource}" if prefix else f"/{query.resource}"
    if query.id is None:
        return base
    return f"{base}({format_value(query.id)})"


def build_request(query: ResourceQuery, method: str = "GET", *, prefix: str = "") -> ResourceRequest:
    params: dict[str, str] = {}
    if query.filter:
        params["$filter"] = compile_filter(query.filter)
    if query.expand:
        params["$expand"] = ",".join(query.expand)
    if query.orderby is not None:
        params["$orderby"] = query.orderby.render()
    for key, value in query.options.items():
        params[str(key)] = str(value)
    body = dict(query.body) if query.body is not None else None
    return ResourceRequest(method=method.upper(), path=_resource_path(prefix, query), params=params, body=body)
