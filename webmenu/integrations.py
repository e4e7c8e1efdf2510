"""Glue between menus and the web stack (FastAPI/Starlette requests, Jinja2 templates)."""

from __future__ import annotations

from typing import Iterable, Union

from fastapi import Request
from jinja2 import Environment
from markupsafe import Markup

from .menu import Menu
from .request import MenuRequest


def request_from_starlette(request: Request) -> MenuRequest:
    """Convert an incoming Starlette/FastAPI request into a :class:`MenuRequest`."""

    full_url = str(request.url)
    return MenuRequest(
        path=request.url.path or "/",
        full_url=full_url,
        url=str(request.url.replace(query="", fragment="")),
        route_params={key: str(value) for key, value in request.path_params.items()},
    )


async def menu_request_dependency(request: Request) -> MenuRequest:
    """FastAPI dependency yielding the :class:`MenuRequest` for the current call."""

    return request_from_starlette(request)


def install_jinja_globals(env: Environment, menu: Menu) -> Environment:
    """Expose ``menu`` and a ``render_menu(name)`` helper to templates rendered by ``env``."""

    def render_menu(names: Union[str, Iterable[str]] = "default") -> Markup:
        return Markup(menu.render(names))

    env.globals["menu"] = menu
    env.globals["render_menu"] = render_menu
    return env


__all__ = ["install_jinja_globals", "menu_request_dependency", "request_from_starlette"]
