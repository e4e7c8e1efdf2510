"""Minimal HTML element serialization used by the menu renderer."""

from __future__ import annotations

import html
from typing import Any, Dict, Iterable, List, Mapping, Optional

_VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


def render_attributes(attributes: Optional[Mapping[str, Any]]) -> str:
    """Serialise ``attributes`` into a string with a leading space per attribute.

    ``None`` and ``False`` values are skipped, ``True`` renders a bare
    attribute and lists are joined with spaces (handy for ``class``).
    """

    parts: List[str] = []
    for name, value in (attributes or {}).items():
        if value is None or value is False:
            continue
        key = html.escape(str(name), quote=True)
        if value is True:
            parts.append(f" {key}")
            continue
        if isinstance(value, (list, tuple)):
            value = " ".join(str(token) for token in value if token)
        parts.append(f' {key}="{html.escape(str(value), quote=True)}"')
    return "".join(parts)


def render_element(
    tag: Optional[str],
    content: Optional[str] = None,
    attributes: Optional[Mapping[str, Any]] = None,
) -> str:
    """Return ``content`` wrapped in ``tag``; without a tag the content is returned as-is."""

    body = content or ""
    if not tag:
        return body

    name = tag.strip().lower()
    opening = f"<{name}{render_attributes(attributes)}"
    if name in _VOID_ELEMENTS:
        return f"{opening}>"
    return f"{opening}>{body}</{name}>"


def decode_entities(markup: Optional[str]) -> str:
    """Collapse HTML entities (``&amp;``, ``&quot;`` ...) back into characters."""

    return html.unescape(markup or "")


def class_tokens(value: Any) -> List[str]:
    """Split a ``class`` attribute value into its individual tokens."""

    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(token) for token in value if token]
    return str(value).split()


def add_class(attributes: Dict[str, Any], *class_names: Optional[str]) -> Dict[str, Any]:
    """Append class tokens to ``attributes['class']`` without duplicating them."""

    tokens = class_tokens(attributes.get("class"))
    for class_name in class_names:
        for token in class_tokens(class_name):
            if token not in tokens:
                tokens.append(token)
    if tokens:
        attributes["class"] = " ".join(tokens)
    return attributes


def remove_class(attributes: Dict[str, Any], *class_names: Optional[str]) -> Dict[str, Any]:
    """Drop class tokens from ``attributes['class']``; an emptied attribute is removed."""

    doomed = {token for class_name in class_names for token in class_tokens(class_name)}
    tokens = [token for token in class_tokens(attributes.get("class")) if token not in doomed]
    if tokens:
        attributes["class"] = " ".join(tokens)
    else:
        attributes.pop("class", None)
    return attributes


def merge_attributes(*mappings: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge attribute mappings left to right, combining ``class`` tokens."""

    merged: Dict[str, Any] = {}
    for mapping in mappings:
        for key, value in (mapping or {}).items():
            if key == "class":
                add_class(merged, *class_tokens(value))
            else:
                merged[key] = value
    return merged


def join_fragments(fragments: Iterable[Optional[str]]) -> str:
    """Concatenate rendered fragments, ignoring suppressed (``None``) ones."""

    return "".join(fragment for fragment in fragments if fragment)


__all__ = [
    "add_class",
    "class_tokens",
    "decode_entities",
    "join_fragments",
    "merge_attributes",
    "render_attributes",
    "remove_class",
    "render_element",
]
