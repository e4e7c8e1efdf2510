"""A single entry of a menu."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Iterable, List, Mapping, Optional, Union

from ..markup import class_tokens, decode_entities, remove_class, render_element
from ..request import MenuRequest
from ..tracing import log_event
from .contents import Content
from .node import MenuObject

if TYPE_CHECKING:
    from .item_list import ItemList

_LOGGER = logging.getLogger(__name__)

PatternLike = Union[str, "re.Pattern[str]"]


class Item(MenuObject):
    """Wraps one :class:`Content` and an optional list of children.

    Items are created by :meth:`ItemList.add`, :meth:`ItemList.raw` or
    :meth:`ItemList.add_content`; the owning list is kept as a weak
    back-reference while the children list is owned by the item.
    """

    element_option = "item.element"

    def __init__(
        self,
        item_list: "ItemList",
        content: Content,
        children: Optional["ItemList"] = None,
        element: Optional[str] = None,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(attributes=attributes, element=element)
        self.set_parent(item_list)
        self.children = children
        self.active_patterns: List[re.Pattern[str]] = []
        self._state_classes: List[str] = []
        self.value = content.set_parent(self)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def stop(self) -> Optional["ItemList"]:
        """Break off a fluent chain and return the owning list."""

        return self.parent

    def get_content(self) -> Content:
        return self.value

    def get_item_list(self) -> Optional["ItemList"]:
        return self.children

    def has_children(self) -> bool:
        return self.children is not None and len(self.children) > 0

    def set_active_patterns(self, patterns: Iterable[PatternLike]) -> "Item":
        """Add regular expressions matched against the current request path."""

        for pattern in patterns:
            compiled = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)
            self.active_patterns.append(compiled)
        return self

    def get_url(self) -> Optional[str]:
        """Return the evaluated URL of link content, ``None`` for raw content."""

        return self.value.get_evaluated_url() if self.value.is_link() else None

    # ------------------------------------------------------------------
    # Active state
    # ------------------------------------------------------------------
    def is_active(self, request: Optional[MenuRequest] = None) -> bool:
        """Check whether this item matches the current request."""

        request = request or self.get_request()
        if request is None:
            return False

        url = self.get_url()
        if url is not None:
            if url.strip("/") == request.path.strip("/"):
                return True
            if url == request.full_url or url == request.url:
                return True

        return any(pattern.search(request.path) for pattern in self.active_patterns)

    def has_active_child(self, request: Optional[MenuRequest] = None) -> bool:
        """Check whether any descendant, at any depth, is active."""

        if not self.has_children():
            return False

        request = request or self.get_request()
        if request is None:
            return False

        for child in self.children or ():
            if child.is_active(request) or child.has_active_child(request):
                return True
        return False

    def _add_active_classes(self) -> None:
        """Replace the state classes of the previous render with the current ones."""

        remove_class(self.attributes, *self._state_classes)
        self._state_classes = []

        request = self.get_request()
        wanted: List[Optional[str]] = []
        if self.is_active(request):
            wanted.append(self.get_option("item.active_class"))
            log_event(_LOGGER, logging.DEBUG, "item.active", url=self.get_url(), request=request)
        if self.has_active_child(request):
            wanted.append(self.get_option("item.active_child_class"))

        # Tokens the caller set themselves are never taken away again.
        present = class_tokens(self.attributes.get("class"))
        for token in class_tokens(" ".join(name for name in wanted if name)):
            if token not in present and token not in self._state_classes:
                self._state_classes.append(token)
        self.add_class(*self._state_classes)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, depth: int = 0) -> str:
        """Render the content, the children and the optional wrapping element."""

        value = self.value.render()
        self._add_active_classes()

        children = self.children
        if children is not None and len(children) > 0:
            value += children.render(depth + 1) or ""

        element = self.element
        if element:
            value = render_element(element, value, self.attributes)

        return decode_entities(value)

    def __repr__(self) -> str:
        return f"Item({self.value!r}, children={len(self.children) if self.children else 0})"


__all__ = ["Item"]
