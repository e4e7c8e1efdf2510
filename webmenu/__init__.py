"""Build hierarchical menus and render them to HTML.

FastAPI request adapters and Jinja2 template globals live in
:mod:`webmenu.integrations`, which is not imported here so the core package
stays free of the web stack.
"""

from .config import MenuConfig, configure, get_default_options, load_menu_config
from .errors import (
    ConfigError,
    EmptyItemListError,
    InvalidLinkError,
    MenuError,
    TreeCycleError,
    UnknownOptionError,
)
from .items import Content, ContentType, Item, ItemList, Link, Raw
from .menu import Menu, MenuHandler
from .request import MenuRequest, bind_request, current_request

__all__ = [
    "ConfigError",
    "Content",
    "ContentType",
    "EmptyItemListError",
    "InvalidLinkError",
    "Item",
    "ItemList",
    "Link",
    "Menu",
    "MenuConfig",
    "MenuError",
    "MenuHandler",
    "MenuRequest",
    "Raw",
    "TreeCycleError",
    "UnknownOptionError",
    "bind_request",
    "configure",
    "current_request",
    "get_default_options",
    "load_menu_config",
]
