# src/fleetos/services/api/client.py
from __future__ import annotations

import logging
import ssl
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, MutableMapping

import httpx

if TYPE_CHECKING:  # pragma: no cover
    from fleetos.services.api.session import SessionContext
    from fleetos.services.settings import FleetSettings

_log = logging.getLogger("fleetos.api.http")


class ApiHttpError(RuntimeError):
    """Raised when the fleet API returns an error response or cannot be reached."""

    def __init__(self, message: str, *, status_code: int, error_code: str | None = None, payload: Any | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.payload = payload


@dataclass(slots=True)
class ApiResponse:
    status_code: int
    body: Any
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class ApiHttpClient:
    """Async HTTP client for the fleet API.

    A fresh ``httpx.AsyncClient`` is opened per call; the client itself holds no
    connection state.  The bearer token is read from ``session`` on every call.
    """

    base_url: str = "https://api.fleetos.io"
    timeout: float = 15.0
    verify: str | bool | ssl.SSLContext = True
    session: "SessionContext | None" = None
    # default headers applied to every request (can be overridden/extended)
    default_headers: dict[str, str] = field(default_factory=dict)
    # test hook: an httpx transport (e.g. httpx.MockTransport)
    transport: httpx.AsyncBaseTransport | None = None

    @classmethod
    def from_settings(
        cls,
        settings: "FleetSettings",
        *,
        session: "SessionContext | None" = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ApiHttpClient":
        return cls(
            base_url=settings.api.base_url,
            timeout=settings.api.timeout,
            verify=settings.api.verify,
            session=session,
            transport=transport,
        )

    def _headers(self, headers: Mapping[str, str] | None) -> MutableMapping[str, str]:
        merged: MutableMapping[str, str] = dict(self.default_headers)
        if self.session is not None:
            merged.update(self.session.authorization_headers())
        if headers:
            merged.update({str(k): str(v) for k, v in headers.items()})
        return merged

    async def send(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> ApiResponse:
        """Perform exactly one request; no retries."""
        _log.debug("api: %s %s", method, path, extra={"params": dict(params or {})})
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=timeout or self.timeout,
                verify=self.verify,
                transport=self.transport,
            ) as client:
                response = await client.request(
                    method,
                    path,
                    params=params,
                    json=json,
                    headers=self._headers(headers),
                )
        except httpx.RequestError as exc:  # pragma: no cover - network errors are environment specific
            raise ApiHttpError(f"{method} {path} failed: {exc}", status_code=0) from exc

        content: Any | None = None
        if response.content:
            try:
                content = response.json()
            except ValueError:
                content = response.text

        if response.status_code >= 400:
            error_code: str | None = None
            message = response.text or f"HTTP {response.status_code}"
            if isinstance(content, Mapping):
                detail = content.get("detail") or content.get("message") or content.get("error")
                if isinstance(detail, str):
                    message = detail
                code = content.get("code") or content.get("error")
                if isinstance(code, str):
                    error_code = code
            _log.debug("api: %s %s -> %s", method, path, response.status_code)
            raise ApiHttpError(message, status_code=response.status_code, error_code=error_code, payload=content)

        return ApiResponse(status_code=response.status_code, body=content, headers=dict(response.headers))

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self.send(method, path, **kwargs)
        return response.body


__all__ = ["ApiHttpClient", "ApiHttpError", "ApiResponse"]
