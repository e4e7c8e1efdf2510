"""Ordered containers of menu items and the queries that walk them."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Union

from ..errors import EmptyItemListError, TreeCycleError
from ..markup import join_fragments, render_element
from ..tracing import log_event, trace
from .contents import Content, ContentType, Link, Raw
from .item import Item, PatternLike
from .node import MenuObject

_LOGGER = logging.getLogger(__name__)


class ItemList(MenuObject):
    """A named, ordered list of :class:`Item` objects.

    Mutating methods return the list itself so menus can be declared as one
    fluent chain::

        menu = ItemList(name="main")
        menu.add("home", "Home").add("users", "Users").active_pattern(r"/user/\\d+")
    """

    element_option = "item_list.element"

    def __init__(
        self,
        items: Optional[Iterable[Item]] = None,
        name: Optional[str] = None,
        attributes: Optional[Mapping[str, Any]] = None,
        element: Optional[str] = None,
    ) -> None:
        super().__init__(attributes=attributes, element=element)
        self._items: List[Item] = list(items or [])
        self._name = name

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> Item:
        return self._items[index]

    def get_items(self) -> List[Item]:
        return list(self._items)

    def get_name(self) -> Optional[str]:
        return self._name

    def on_item(self) -> Item:
        """Return the most recently added item."""

        if not self._items:
            raise EmptyItemListError("ItemList has no items to target")
        return self._items[-1]

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------
    def add(
        self,
        url: str,
        value: Optional[str] = None,
        children: Optional["ItemList"] = None,
        link_attributes: Optional[Mapping[str, Any]] = None,
        item_attributes: Optional[Mapping[str, Any]] = None,
        item_element: Optional[str] = None,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> "ItemList":
        """Add a link item, optionally with a list of children.

        ``url`` may contain ``{name}`` placeholders resolved from ``parameters``
        and the request's route parameters. A placeholder neither of them
        provides raises :class:`InvalidLinkError` and leaves the list untouched.
        """

        content = Link(url, value, link_attributes, parameters=parameters, request=self.get_request())
        self.add_content(content, children, item_attributes, item_element)
        return self

    def raw(
        self,
        markup: Optional[str],
        children: Optional["ItemList"] = None,
        item_attributes: Optional[Mapping[str, Any]] = None,
        item_element: Optional[str] = None,
    ) -> "ItemList":
        """Add an item holding trusted markup such as a separator image."""

        self.add_content(Raw(markup), children, item_attributes, item_element)
        return self

    def add_content(
        self,
        content: Content,
        children: Optional["ItemList"] = None,
        item_attributes: Optional[Mapping[str, Any]] = None,
        item_element: Optional[str] = None,
    ) -> Item:
        """Wrap ``content`` in a new item, append it and return the item."""

        if children is not None and (children is self or children in self._ancestor_lists()):
            raise TreeCycleError("An item list cannot be nested inside itself")

        item = Item(self, content, children=children, element=item_element, attributes=item_attributes)
        if children is not None:
            children.set_parent(item)
        self._items.append(item)
        return item

    def active_pattern(self, pattern: Union[PatternLike, Sequence[PatternLike]]) -> "ItemList":
        """Mark the last added item active when the request path matches ``pattern``."""

        patterns = list(pattern) if isinstance(pattern, (list, tuple)) else [pattern]
        self.on_item().set_active_patterns(patterns)
        return self

    def attach(self, item_list: "ItemList") -> "ItemList":
        """Splice the items of ``item_list`` (by reference) into this list.

        The items are re-parented to this list, so its rendering options and
        URL prefixes apply to them from now on.
        """

        items = item_list.get_items()
        ancestors = set(map(id, self.iter_ancestors()))
        for item in items:
            if id(item) in ancestors:
                raise TreeCycleError("Cannot attach an item that contains this list")
        for item in items:
            item.set_parent(self)
        self._items.extend(items)
        return self

    def name(self, name: Optional[str]) -> "ItemList":
        self._name = name
        return self

    # ------------------------------------------------------------------
    # Prefixes
    # ------------------------------------------------------------------
    def prefix(self, prefix: str) -> "ItemList":
        """Prefix the URLs of this list (and nested lists) with ``prefix``."""

        self.set_option("item_list.prefix", prefix)
        return self

    def prefix_parents(self, prefix_parents: bool = True) -> "ItemList":
        """Prefix URLs with the names of the enclosing item lists."""

        self.set_option("item_list.prefix_parents", prefix_parents)
        return self

    def prefix_handler(self, prefix_handler: bool = True) -> "ItemList":
        """Prefix URLs with the name of the list at the very top of the tree."""

        self.set_option("item_list.prefix_handler", prefix_handler)
        return self

    def _ancestor_lists(self) -> List["ItemList"]:
        return [node for node in self.iter_ancestors() if isinstance(node, ItemList)]

    def get_prefixes(self) -> List[str]:
        """Return the URL segments placed in front of relative links of this list."""

        lineage = [*reversed(self._ancestor_lists()), self]
        root = lineage[0]
        segments: List[Optional[str]] = []

        with_handler = bool(self.get_option("item_list.prefix_handler"))
        if with_handler:
            segments.append(root.get_name())

        if self.get_option("item_list.prefix_parents"):
            for item_list in lineage:
                if with_handler and item_list is root:
                    continue
                segments.append(item_list.get_name())

        segments.append(self.get_option("item_list.prefix"))
        return [str(segment).strip("/") for segment in segments if segment and str(segment).strip("/")]

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def get_items_with_depth(self) -> Dict[int, List[Item]]:
        """Map each depth (direct children = 1) to the items found there."""

        results: Dict[int, List[Item]] = {}
        self._collect_items(self._items, 1, results)
        return results

    def _collect_items(self, items: Iterable[Item], depth: int, results: Dict[int, List[Item]]) -> None:
        for item in items:
            results.setdefault(depth, []).append(item)
            children = item.get_item_list()
            if children is not None:
                self._collect_items(children.get_items(), depth + 1, results)

    def get_item_lists_with_depth(self) -> Dict[int, List["ItemList"]]:
        """Map each depth (this list = 1) to the item lists found there."""

        results: Dict[int, List[ItemList]] = {}
        self._collect_item_lists(self, 1, results)
        return results

    def _collect_item_lists(
        self, item_list: "ItemList", depth: int, results: Dict[int, List["ItemList"]]
    ) -> None:
        results.setdefault(depth, []).append(item_list)
        for item in item_list.get_items():
            children = item.get_item_list()
            if children is not None:
                self._collect_item_lists(children, depth + 1, results)

    def get_all_items(self) -> List[Item]:
        return [item for items in self.get_items_with_depth().values() for item in items]

    def get_all_item_lists(self) -> List["ItemList"]:
        return [lst for lists in self.get_item_lists_with_depth().values() for lst in lists]

    def get_all_item_lists_including_this_one(self) -> List["ItemList"]:
        # The receiver already sits at depth 1 of get_item_lists_with_depth().
        return self.get_all_item_lists()

    def get_items_by_content_type(self, content_type: Union[ContentType, str, type]) -> List[Item]:
        """Return every item whose content is of ``content_type`` (e.g. ``Raw``)."""

        kind = ContentType.coerce(content_type)
        return [item for item in self.get_all_items() if item.get_content().kind is kind]

    def get_item_lists_at_depth(self, depth: int) -> List["ItemList"]:
        return list(self.get_item_lists_with_depth().get(depth, []))

    def get_item_lists_at_depth_range(self, start: int, end: int) -> List["ItemList"]:
        return [
            item_list
            for depth, item_lists in self.get_item_lists_with_depth().items()
            if start <= depth <= end
            for item_list in item_lists
        ]

    def get_items_at_depth(self, depth: int) -> List[Item]:
        return list(self.get_items_with_depth().get(depth, []))

    def get_items_at_depth_range(self, start: int, end: int) -> List[Item]:
        return [
            item
            for depth, items in self.get_items_with_depth().items()
            if start <= depth <= end
            for item in items
        ]

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def find_item_list_by_name(self, name: str) -> Optional["ItemList"]:
        """Return the first list in this subtree (itself included) named ``name``."""

        for item_list in self.get_all_item_lists_including_this_one():
            if item_list.get_name() == name:
                return item_list
        return None

    def find_by_name(self, name: str) -> Optional["ItemList"]:
        return self.find_item_list_by_name(name)

    def find(self, name: str) -> Optional["ItemList"]:
        return self.find_item_list_by_name(name)

    def find_item_list_by_attribute(self, key: str, value: Any) -> Optional["ItemList"]:
        for item_list in self.get_all_item_lists_including_this_one():
            if item_list.get_attribute(key) == value:
                return item_list
        return None

    def find_item_by_url(self, url: str) -> Optional[Item]:
        """Return the first link item whose unevaluated URL equals ``url``."""

        for item in self.get_items_by_content_type(ContentType.LINK):
            if item.get_content().get_url() == url:
                return item
        return None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, depth: int = 0) -> Optional[str]:
        """Render the list, or return ``None`` when ``depth`` exceeds ``max_depth``."""

        if depth == 0:
            with trace("menu.render", logger=_LOGGER, level=logging.DEBUG, menu=self._name, items=len(self)) as span:
                html = self._render(depth)
                span.note(length=len(html) if html is not None else None)
                return html
        return self._render(depth)

    def _render(self, depth: int) -> Optional[str]:
        max_depth = self.get_option("max_depth")
        if max_depth and depth > max_depth:
            log_event(
                _LOGGER,
                logging.DEBUG,
                "menu.depth_suppressed",
                menu=self._name,
                depth=depth,
                max_depth=max_depth,
            )
            return None

        contents = join_fragments(item.render(depth + 1) for item in self._items)

        element = self.element
        if element:
            contents = render_element(element, contents, self.attributes)
        return contents

    def __html__(self) -> str:
        return self.render() or ""

    def __str__(self) -> str:
        return self.render() or ""

    def __repr__(self) -> str:
        return f"ItemList(name={self._name!r}, items={len(self._items)})"


__all__ = ["ItemList"]
