"""Configuration helpers for menu rendering defaults."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError, UnknownOptionError

_LOGGER = logging.getLogger(__name__)
_ENV_PREFIX = "WEBMENU_"

# Option keys as consulted by the menu tree, mapped to MenuConfig fields.
OPTION_FIELDS: Dict[str, str] = {
    "item_list.element": "item_list_element",
    "item.element": "item_element",
    "item.active_class": "active_class",
    "item.active_child_class": "active_child_class",
    "max_depth": "max_depth",
    "item_list.prefix": "prefix",
    "item_list.prefix_parents": "prefix_parents",
    "item_list.prefix_handler": "prefix_handler",
}


class MenuConfig(BaseModel):
    """Default rendering options applied to every menu tree."""

    item_list_element: str = Field(
        default="ul",
        description="HTML element wrapping an item list (empty for none)",
    )
    item_element: str = Field(
        default="li",
        description="HTML element wrapping a single item (empty for none)",
    )
    active_class: str = Field(
        default="active",
        description="Class added to items matching the current request",
    )
    active_child_class: str = Field(
        default="active-child",
        description="Class added to items with an active descendant",
    )
    max_depth: int = Field(
        default=0,
        description="Maximum render depth, 0 renders the whole tree",
    )
    prefix: str = Field(default="", description="Static URL prefix for links")
    prefix_parents: bool = Field(
        default=False,
        description="Prefix links with the names of their parent item lists",
    )
    prefix_handler: bool = Field(
        default=False,
        description="Prefix links with the name of the root item list",
    )

    @field_validator("item_list_element", "item_element", mode="before")
    @classmethod
    def _normalise_element(cls, value: str | None) -> str:
        return (value or "").strip().lower()

    @field_validator("active_class", "active_child_class", mode="before")
    @classmethod
    def _normalise_class(cls, value: str | None) -> str:
        text = (value or "").strip()
        if any(char.isspace() for char in text):
            raise ValueError(f"Class name '{value}' must not contain whitespace")
        return text

    @field_validator("max_depth", mode="before")
    @classmethod
    def _ensure_depth(cls, value: Any) -> int:
        depth = int(value or 0)
        if depth < 0:
            raise ValueError("max_depth must be zero or positive")
        return depth

    @field_validator("prefix", mode="before")
    @classmethod
    def _normalise_prefix(cls, value: str | None) -> str:
        return (value or "").strip().strip("/")

    @classmethod
    def load(cls, path: Path | None = None) -> "MenuConfig":
        """Load configuration from a JSON file and ``WEBMENU_*`` environment overrides."""

        data: Dict[str, Any] = {}

        if path is not None and path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                _LOGGER.warning("Unable to decode menu config at %s: %s", path, exc)
                data = {}
            if not isinstance(data, dict):
                _LOGGER.warning("Ignoring menu config at %s: expected a JSON object", path)
                data = {}

        for field_name in cls.model_fields:
            env_value = os.environ.get(f"{_ENV_PREFIX}{field_name.upper()}")
            if env_value is not None:
                data[field_name] = _coerce_env(field_name, env_value)

        known = {key: value for key, value in data.items() if key in cls.model_fields}
        try:
            return cls(**known)
        except ValidationError as exc:
            raise ConfigError(f"Invalid menu configuration: {exc}") from exc

    def to_options(self) -> Dict[str, Any]:
        """Return the dotted option table consulted by the menu tree."""

        return {key: getattr(self, field) for key, field in OPTION_FIELDS.items()}


def _coerce_env(field_name: str, raw: str) -> Any:
    if field_name in {"prefix_parents", "prefix_handler"}:
        lowered = raw.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off", ""}:
            return False
        raise ConfigError(f"Invalid boolean for {_ENV_PREFIX}{field_name.upper()}: {raw!r}")
    return raw


_DEFAULT_OPTIONS: Dict[str, Any] = MenuConfig().to_options()


def configure(config: MenuConfig) -> None:
    """Replace the process-wide default option layer."""

    global _DEFAULT_OPTIONS
    _DEFAULT_OPTIONS = config.to_options()
    _LOGGER.debug("Menu defaults configured: %s", _DEFAULT_OPTIONS)


def get_default_options() -> Dict[str, Any]:
    """Return a copy of the default option layer."""

    return dict(_DEFAULT_OPTIONS)


def get_default_option(key: str) -> Any:
    """Return a single default option, raising for unknown keys."""

    if key not in _DEFAULT_OPTIONS:
        raise UnknownOptionError(key)
    return _DEFAULT_OPTIONS[key]


def load_menu_config(path: Path | None = None) -> MenuConfig:
    """Helper to load the menu configuration."""

    return MenuConfig.load(path)


__all__ = [
    "MenuConfig",
    "OPTION_FIELDS",
    "configure",
    "get_default_option",
    "get_default_options",
    "load_menu_config",
]
