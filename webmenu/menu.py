"""Registry of named menus and helpers acting on several lists at once."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from .config import MenuConfig
from .items import ItemList
from .markup import join_fragments
from .request import MenuRequest
from .tracing import log_event

_LOGGER = logging.getLogger(__name__)


class MenuHandler:
    """An ordered group of :class:`ItemList` objects handled as one.

    Fluent mutations are applied to every list of the group, so
    ``menu.handler(["main", "footer"]).add("about", "About")`` adds the
    link to both menus.
    """

    def __init__(self, item_lists: Optional[Iterable[ItemList]] = None) -> None:
        self._item_lists: List[ItemList] = list(item_lists or [])

    def __len__(self) -> int:
        return len(self._item_lists)

    def __iter__(self) -> Iterator[ItemList]:
        return iter(list(self._item_lists))

    def get_item_lists(self) -> List[ItemList]:
        return list(self._item_lists)

    def add_item_list(self, item_list: ItemList) -> "MenuHandler":
        self._item_lists.append(item_list)
        return self

    def _each(self, method: str, *args: Any, **kwargs: Any) -> "MenuHandler":
        for item_list in self._item_lists:
            getattr(item_list, method)(*args, **kwargs)
        return self

    def add(self, url: str, value: Optional[str] = None, *args: Any, **kwargs: Any) -> "MenuHandler":
        return self._each("add", url, value, *args, **kwargs)

    def raw(self, markup: Optional[str], *args: Any, **kwargs: Any) -> "MenuHandler":
        return self._each("raw", markup, *args, **kwargs)

    def attach(self, item_list: ItemList) -> "MenuHandler":
        return self._each("attach", item_list)

    def active_pattern(self, pattern: Any) -> "MenuHandler":
        return self._each("active_pattern", pattern)

    def prefix(self, prefix: str) -> "MenuHandler":
        return self._each("prefix", prefix)

    def prefix_parents(self, prefix_parents: bool = True) -> "MenuHandler":
        return self._each("prefix_parents", prefix_parents)

    def prefix_handler(self, prefix_handler: bool = True) -> "MenuHandler":
        return self._each("prefix_handler", prefix_handler)

    def set_option(self, key: str, value: Any) -> "MenuHandler":
        return self._each("set_option", key, value)

    def bind(self, request: Optional[MenuRequest]) -> "MenuHandler":
        return self._each("bind", request)

    def find(self, name: str) -> Optional[ItemList]:
        """Search every list of the group for a (nested) list named ``name``."""

        for item_list in self._item_lists:
            found = item_list.find_item_list_by_name(name)
            if found is not None:
                return found
        return None

    def render(self) -> str:
        return join_fragments(item_list.render() for item_list in self._item_lists)

    def __html__(self) -> str:
        return self.render()

    def __str__(self) -> str:
        return self.render()


class Menu:
    """Keeps named root item lists so menus can be declared once and rendered anywhere."""

    def __init__(self, config: Optional[MenuConfig] = None) -> None:
        self._config = config
        self._handlers: Dict[str, ItemList] = {}

    @property
    def config(self) -> Optional[MenuConfig]:
        return self._config

    def handler(
        self,
        names: Union[str, Iterable[str]] = "default",
        attributes: Optional[Mapping[str, Any]] = None,
        element: Optional[str] = None,
    ) -> MenuHandler:
        """Return the menus called ``names``, creating missing ones."""

        if isinstance(names, str):
            names = [names]

        handler = MenuHandler()
        for name in names:
            item_list = self._handlers.get(name)
            if item_list is None:
                item_list = self.items(name, attributes=attributes, element=element)
                if self._config is not None:
                    item_list.set_options(self._config.to_options())
                self._handlers[name] = item_list
                log_event(_LOGGER, logging.DEBUG, "menu.handler_created", name=name)
            handler.add_item_list(item_list)
        return handler

    def items(
        self,
        name: Optional[str] = None,
        attributes: Optional[Mapping[str, Any]] = None,
        element: Optional[str] = None,
    ) -> ItemList:
        """Create a free-standing item list, typically used as children.

        The list carries no option overrides of its own; once nested it
        inherits them from the root list it ends up under.
        """

        return ItemList(name=name, attributes=attributes, element=element)

    def get_item_list(self, name: str) -> Optional[ItemList]:
        return self._handlers.get(name)

    def has_handler(self, name: str) -> bool:
        return name in self._handlers

    def all_handlers(self) -> MenuHandler:
        return MenuHandler(self._handlers.values())

    def find(self, name: str) -> Optional[ItemList]:
        return self.all_handlers().find(name)

    def render(self, names: Union[str, Iterable[str]] = "default") -> str:
        """Render the named menus; unknown names render as an empty string."""

        if isinstance(names, str):
            names = [names]
        return join_fragments(
            self._handlers[name].render() for name in names if name in self._handlers
        )

    def reset(self) -> None:
        self._handlers.clear()


__all__ = ["Menu", "MenuHandler"]
