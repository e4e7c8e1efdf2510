"""Renderable payloads carried by menu items."""

from __future__ import annotations

import enum
import weakref
from abc import ABC, abstractmethod
from string import Formatter
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlsplit

from ..errors import InvalidLinkError
from ..markup import merge_attributes, render_element
from ..request import MenuRequest, current_request

if TYPE_CHECKING:
    from .item import Item

_FORMATTER = Formatter()


class ContentType(str, enum.Enum):
    """Tag identifying the variant of a :class:`Content`."""

    LINK = "link"
    RAW = "raw"

    @classmethod
    def coerce(cls, value: Any) -> "ContentType":
        """Accept a member, its value, or one of the content classes."""

        if isinstance(value, cls):
            return value
        if isinstance(value, type) and issubclass(value, Content):
            return value.kind
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown content type '{value}'") from exc


class Content(ABC):
    """Common contract of link and raw content."""

    kind: ContentType

    def __init__(self) -> None:
        self._parent_ref: Optional[weakref.ReferenceType[Item]] = None

    @property
    def parent(self) -> Optional["Item"]:
        return self._parent_ref() if self._parent_ref is not None else None

    def set_parent(self, item: Optional["Item"]) -> "Content":
        self._parent_ref = weakref.ref(item) if item is not None else None
        return self

    def is_link(self) -> bool:
        return self.kind is ContentType.LINK

    def get_url(self) -> Optional[str]:
        return None

    def get_evaluated_url(self) -> Optional[str]:
        return None

    @abstractmethod
    def render(self) -> str:
        """Return the markup for this content."""

    def __str__(self) -> str:
        return self.render()


def _parse_template(url: str) -> List[Tuple[str, Optional[str]]]:
    """Split ``url`` into ``(literal, placeholder)`` pairs, validating the syntax."""

    try:
        parsed = list(_FORMATTER.parse(url))
    except ValueError as exc:
        raise InvalidLinkError(f"Malformed URL template '{url}': {exc}") from exc

    segments: List[Tuple[str, Optional[str]]] = []
    for literal, field_name, format_spec, conversion in parsed:
        if field_name is not None:
            if not field_name or not field_name.isidentifier():
                raise InvalidLinkError(
                    f"URL template '{url}' has an invalid placeholder '{{{field_name}}}'"
                )
            if format_spec or conversion:
                raise InvalidLinkError(
                    f"URL template '{url}' must not use format specs in '{{{field_name}}}'"
                )
        segments.append((literal, field_name))
    return segments


def is_absolute_url(url: str) -> bool:
    """Return True for URLs that must never be prefixed."""

    if url.startswith(("//", "#", "?")):
        return True
    return bool(urlsplit(url).scheme)


class Link(Content):
    """An anchor pointing to a (possibly templated) URL.

    Every ``{name}`` placeholder must be resolvable when the link is built,
    either from ``parameters`` or from the route parameters of ``request``
    (the context-bound request when omitted). Later renders substitute the
    route parameters of the request they run under.
    """

    kind = ContentType.LINK

    def __init__(
        self,
        url: str,
        value: Optional[str] = None,
        attributes: Optional[Mapping[str, Any]] = None,
        parameters: Optional[Mapping[str, Any]] = None,
        request: Optional[MenuRequest] = None,
    ) -> None:
        super().__init__()
        if not isinstance(url, str):
            raise InvalidLinkError(f"Link URL must be a string, got {type(url).__name__}")
        self._segments = _parse_template(url)
        self.url = url
        self.value = value
        self.attributes: Dict[str, Any] = dict(attributes or {})
        self.parameters: Dict[str, Any] = dict(parameters or {})
        self._route_values = self._resolve_at_construction(request or current_request())

    def _resolve_at_construction(self, request: Optional[MenuRequest]) -> Dict[str, Any]:
        route_params = request.route_params if request is not None else {}
        values = {name: route_params[name] for name in self.placeholders if route_params.get(name) is not None}
        missing = [
            name
            for name in self.placeholders
            if name not in values and self.parameters.get(name) is None
        ]
        if missing:
            raise InvalidLinkError(
                f"URL template '{self.url}' has no value for {', '.join(sorted(set(missing)))}"
            )
        return values

    @property
    def placeholders(self) -> List[str]:
        return [name for _, name in self._segments if name]

    def get_url(self) -> str:
        """Return the URL exactly as it was given."""

        return self.url

    def get_evaluated_url(self) -> str:
        """Return the URL with placeholders resolved and list prefixes applied."""

        url = self._substitute()
        if is_absolute_url(url):
            return url

        prefixes = self._prefixes()
        if not prefixes:
            return url
        segments = [*prefixes, url.strip("/")]
        return "/" + "/".join(segment for segment in segments if segment)

    def _substitute(self) -> str:
        if not self.placeholders:
            return "".join(literal for literal, _ in self._segments)

        values: Dict[str, Any] = dict(self._route_values)
        item = self.parent
        request = item.get_request() if item is not None else current_request()
        if request is not None:
            values.update((key, val) for key, val in request.route_params.items() if val is not None)
        values.update((key, val) for key, val in self.parameters.items() if val is not None)

        parts: List[str] = []
        for literal, name in self._segments:
            parts.append(literal)
            if name is not None:
                parts.append(str(values[name]))
        return "".join(parts)

    def _prefixes(self) -> List[str]:
        item = self.parent
        item_list = item.parent if item is not None else None
        if item_list is None:
            return []
        return item_list.get_prefixes()

    def render(self) -> str:
        attributes = merge_attributes({"href": self.get_evaluated_url()}, self.attributes)
        return render_element("a", self.value, attributes)

    def __repr__(self) -> str:
        return f"Link(url={self.url!r}, value={self.value!r})"


class Raw(Content):
    """Trusted markup inserted without escaping."""

    kind = ContentType.RAW

    def __init__(self, markup: Optional[str]) -> None:
        super().__init__()
        self.markup = markup

    def render(self) -> str:
        return self.markup or ""

    def __repr__(self) -> str:
        return f"Raw(markup={self.markup!r})"


__all__ = ["Content", "ContentType", "Link", "Raw", "is_absolute_url"]
