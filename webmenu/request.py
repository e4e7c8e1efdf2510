"""Request state consulted when deciding which menu items are active."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

_CURRENT_REQUEST: ContextVar[Optional["MenuRequest"]] = ContextVar(
    "webmenu_current_request", default=None
)


@dataclass(frozen=True, slots=True)
class MenuRequest:
    """Read-only view of the request a menu is rendered for.

    ``path`` carries no scheme or host, ``full_url`` includes the query string
    and ``url`` is the same address without it.
    """

    path: str
    full_url: str
    url: str
    route_params: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_url(
        cls, url: str, route_params: Optional[Mapping[str, str]] = None
    ) -> "MenuRequest":
        """Derive path, full URL and query-less URL from a single address."""

        parsed = urlsplit(url.strip())
        path = parsed.path or "/"
        if not path.startswith("/"):
            path = f"/{path}"
        without_query = urlunsplit((parsed.scheme, parsed.netloc, parsed.path, "", ""))
        return cls(
            path=path,
            full_url=url.strip(),
            url=without_query or path,
            route_params=dict(route_params or {}),
        )

    def describe(self) -> Dict[str, str]:
        return {"path": self.path, "url": self.url}


def current_request() -> Optional[MenuRequest]:
    """Return the request bound to the current context, if any."""

    return _CURRENT_REQUEST.get()


@contextmanager
def bind_request(request: Optional[MenuRequest]) -> Iterator[Optional[MenuRequest]]:
    """Bind ``request`` as the current request for the duration of the block."""

    token = _CURRENT_REQUEST.set(request)
    try:
        yield request
    finally:
        _CURRENT_REQUEST.reset(token)


__all__ = ["MenuRequest", "bind_request", "current_request"]
