"""
Stored language preference.

The root router remembers the language segment a visitor last used so a
later visit to ``/`` can send them straight back. ``PreferenceStore`` is the
read/write contract; ``CookiePreferenceStore`` keeps the value in a cookie.
"""

from __future__ import annotations

import logging
from typing import Protocol

from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class PreferenceStore(Protocol):
    def get(self) -> str | None: ...

    def set(self, value: str) -> None: ...

    def clear(self) -> None: ...


class CookiePreferenceStore:
    """PreferenceStore reading the request cookie and writing to the response.

    Writes are buffered until ``apply`` is called with the outgoing response,
    since the response does not exist while the routing decision is made.
    """

    _UNSET = object()

    def __init__(self, request: Request, cookie_name: str = "language", max_age: int = 60 * 60 * 24 * 90):
        self.cookie_name = cookie_name
        self.max_age = max_age
        self._value: str | None = request.cookies.get(cookie_name) or None
        self._pending: object = self._UNSET

    def get(self) -> str | None:
        return self._value

    def set(self, value: str) -> None:
        self._value = value
        self._pending = value

    def clear(self) -> None:
        self._value = None
        self._pending = None

    def apply(self, response: Response) -> Response:
        """Write buffered changes to ``response`` as Set-Cookie headers."""
        if self._pending is self._UNSET:
            return response

        if self._pending is None:
            response.delete_cookie(self.cookie_name, path="/")
            logger.debug(f"Cleared '{self.cookie_name}' preference cookie")
        else:
            response.set_cookie(
                self.cookie_name,
                str(self._pending),
                max_age=self.max_age,
                path="/",
                httponly=False,
                samesite="lax",
            )
        return response
