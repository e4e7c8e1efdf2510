"""Behaviour shared by every node of a menu tree."""

from __future__ import annotations

import weakref
from typing import Any, Dict, Iterator, Mapping, Optional

from ..config import get_default_option, get_default_options
from ..errors import UnknownOptionError
from ..markup import add_class, class_tokens
from ..request import MenuRequest, current_request


class MenuObject:
    """Base class for :class:`Item` and :class:`ItemList`.

    A node keeps a weak back-reference to its parent, its own option overrides,
    the attributes of its HTML element and the element name itself. Options
    are resolved by walking the parent chain and falling back to the
    configured defaults.
    """

    #: Option consulted when no explicit element was set on the node.
    element_option: str = ""

    def __init__(
        self,
        attributes: Optional[Mapping[str, Any]] = None,
        element: Optional[str] = None,
    ) -> None:
        self._parent_ref: Optional[weakref.ReferenceType[MenuObject]] = None
        self._options: Dict[str, Any] = {}
        self._request: Optional[MenuRequest] = None
        self._element: Optional[str] = element
        self.attributes: Dict[str, Any] = dict(attributes or {})

    # ------------------------------------------------------------------
    # Tree links
    # ------------------------------------------------------------------
    @property
    def parent(self) -> Optional["MenuObject"]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def get_parent(self) -> Optional["MenuObject"]:
        return self.parent

    def set_parent(self, parent: Optional["MenuObject"]) -> "MenuObject":
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        return self

    def has_parent(self) -> bool:
        return self.parent is not None

    def iter_ancestors(self) -> Iterator["MenuObject"]:
        """Yield the parent chain, nearest first."""

        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def get_root(self) -> "MenuObject":
        root: MenuObject = self
        for ancestor in self.iter_ancestors():
            root = ancestor
        return root

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------
    def get_option(self, key: Optional[str] = None) -> Any:
        """Return the nearest override for ``key`` or the configured default.

        Without ``key`` the fully resolved option table is returned.
        """

        if key is None:
            resolved = get_default_options()
            chain = [self, *self.iter_ancestors()]
            for node in reversed(chain):
                resolved.update(node._options)
            return resolved

        if key in self._options:
            return self._options[key]
        for ancestor in self.iter_ancestors():
            if key in ancestor._options:
                return ancestor._options[key]
        return get_default_option(key)

    def set_option(self, key: str, value: Any) -> "MenuObject":
        if key not in get_default_options():
            raise UnknownOptionError(key)
        self._options[key] = value
        return self

    def set_options(self, options: Mapping[str, Any]) -> "MenuObject":
        for key, value in options.items():
            self.set_option(key, value)
        return self

    def get_options(self) -> Dict[str, Any]:
        """Return only the overrides stored on this node."""

        return dict(self._options)

    # ------------------------------------------------------------------
    # Request
    # ------------------------------------------------------------------
    def bind(self, request: Optional[MenuRequest]) -> "MenuObject":
        """Render this subtree against ``request`` instead of the context-bound one."""

        self._request = request
        return self

    def get_request(self) -> Optional[MenuRequest]:
        if self._request is not None:
            return self._request
        for ancestor in self.iter_ancestors():
            if ancestor._request is not None:
                return ancestor._request
        return current_request()

    # ------------------------------------------------------------------
    # Element & attributes
    # ------------------------------------------------------------------
    @property
    def element(self) -> Optional[str]:
        if self._element is not None:
            return self._element or None
        return self.get_option(self.element_option) or None

    def set_element(self, element: Optional[str]) -> "MenuObject":
        """Set the wrapping element; an empty string disables the wrapper."""

        self._element = element
        return self

    def get_element(self) -> Optional[str]:
        return self.element

    def set_attributes(self, attributes: Optional[Mapping[str, Any]]) -> "MenuObject":
        self.attributes = dict(attributes or {})
        return self

    def set_attribute(self, key: str, value: Any) -> "MenuObject":
        self.attributes[key] = value
        return self

    def get_attribute(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def add_class(self, *class_names: Optional[str]) -> "MenuObject":
        add_class(self.attributes, *class_names)
        return self

    def has_class(self, class_name: str) -> bool:
        return class_name in class_tokens(self.attributes.get("class"))


__all__ = ["MenuObject"]
