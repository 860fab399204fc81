"""Authenticated principal of the current caller.

The session is owned by whoever builds it (CLI, SDK user); models only read
from it.  The user id is looked up on demand and never cached here.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Mapping

from fleetos.config.const import WHOAMI_PATH

__all__ = ["SessionContext", "WhoAmI"]

_log = logging.getLogger("fleetos.api.session")

WhoAmI = Callable[[], Awaitable[Mapping[str, Any]]]


class SessionContext:
    def __init__(self, token: str | None = None, *, whoami: WhoAmI | None = None) -> None:
        self._token = token or None
        self._whoami = whoami

    @property
    def token(self) -> str | None:
        return self._token

    def set_token(self, token: str | None) -> None:
        self._token = token or None

    def bind(self, whoami: WhoAmI) -> None:
        self._whoami = whoami

    def authorization_headers(self) -> dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    async def get_user_id(self) -> int | str:
        if self._whoami is None:
            raise RuntimeError("session is not bound to a whoami endpoint")
        profile = await self._whoami()
        user_id = profile.get("id") if isinstance(profile, Mapping) else None
        if user_id is None:
            raise RuntimeError("whoami response does not contain a user id")
        _log.debug("session: resolved user id %s", user_id)
        return user_id

    def bind_http(self, http: Any) -> None:
        """Resolve the user id through ``GET /user/v1/whoami`` on ``http``."""

        async def _whoami() -> Mapping[str, Any]:
            body = await http.request("GET", WHOAMI_PATH)
            return body if isinstance(body, Mapping) else {}

        self.bind(_whoami)
