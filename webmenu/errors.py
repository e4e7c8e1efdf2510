"""Exception hierarchy raised by the menu builder."""

from __future__ import annotations


class MenuError(Exception):
    """Base class for every error raised by :mod:`webmenu`."""


class InvalidLinkError(MenuError, ValueError):
    """Raised when a link URL template cannot be parsed."""


class EmptyItemListError(MenuError, IndexError):
    """Raised when an operation needs the last item of an empty list."""


class UnknownOptionError(MenuError, KeyError):
    """Raised when an option key is not part of the option table."""


class TreeCycleError(MenuError, ValueError):
    """Raised when attaching children would make the menu tree cyclic."""


class ConfigError(MenuError, ValueError):
    """Raised when configuration overrides cannot be applied."""


__all__ = [
    "ConfigError",
    "EmptyItemListError",
    "InvalidLinkError",
    "MenuError",
    "TreeCycleError",
    "UnknownOptionError",
]
