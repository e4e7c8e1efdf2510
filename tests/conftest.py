"""Shared pytest fixtures for the webmenu test-suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator, Mapping, Optional

import sys

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from webmenu.config import MenuConfig, configure
from webmenu.items import ItemList
from webmenu.request import MenuRequest, bind_request


@pytest.fixture(autouse=True)
def reset_defaults() -> Iterator[None]:
    """Restore the process-wide option defaults after every test."""

    yield
    configure(MenuConfig())


@pytest.fixture
def make_request() -> Callable[..., MenuRequest]:
    """Return a factory building requests from an URL or a bare path."""

    def _make(url: str, route_params: Optional[Mapping[str, str]] = None) -> MenuRequest:
        return MenuRequest.from_url(url, route_params)

    return _make


@pytest.fixture
def active_request(make_request: Callable[..., MenuRequest]) -> Callable[..., object]:
    """Return a context manager factory binding a request for ``path``."""

    def _bind(url: str, route_params: Optional[Mapping[str, str]] = None):
        return bind_request(make_request(url, route_params))

    return _bind


@pytest.fixture
def nested_menu() -> ItemList:
    """Return a three level menu.

    main
      - a  (a1, a2 (a2x))
      - b  (b1)
    """

    a2_children = ItemList(name="a2-list").add("a/2/x", "A2X")
    a_children = ItemList(name="a-list").add("a/1", "A1").add("a/2", "A2", a2_children)
    b_children = ItemList(name="b-list").add("b/1", "B1")
    return ItemList(name="main").add("a", "A", a_children).add("b", "B", b_children)
