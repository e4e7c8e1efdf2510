"""Tests for :mod:`webmenu.config`."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict

import pytest
from pydantic import ValidationError

from webmenu.config import MenuConfig, configure, get_default_options, load_menu_config
from webmenu.errors import ConfigError, UnknownOptionError
from webmenu.items import ItemList


def test_menu_config_loads_file_and_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Given a JSON config When MenuConfig.load is invoked Then file and env overrides are merged."""

    payload: Dict[str, object] = {"active_class": "current", "max_depth": 2, "unknown": "ignored"}
    config_path = tmp_path / "menu.json"
    config_path.write_text(json.dumps(payload), encoding="utf-8")
    monkeypatch.setenv("WEBMENU_MAX_DEPTH", "3")
    monkeypatch.setenv("WEBMENU_PREFIX_HANDLER", "yes")

    config = MenuConfig.load(config_path)

    assert config.active_class == "current"
    assert config.max_depth == 3
    assert config.prefix_handler is True


def test_load_menu_config_defaults_when_missing(tmp_path: Path) -> None:
    """Given no config file When load_menu_config is executed Then defaults are returned."""

    config = load_menu_config(tmp_path / "missing.json")

    assert isinstance(config, MenuConfig)
    assert config.item_list_element == "ul"
    assert config.item_element == "li"
    assert config.max_depth == 0


def test_malformed_config_file_is_logged_and_ignored(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Given broken JSON When loaded Then a warning is logged and defaults are used."""

    config_path = tmp_path / "menu.json"
    config_path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        config = MenuConfig.load(config_path)

    assert config == MenuConfig()
    assert "Unable to decode menu config" in caplog.text


def test_invalid_env_override_raises_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given an invalid boolean or depth When loaded Then ConfigError is raised."""

    monkeypatch.setenv("WEBMENU_PREFIX_PARENTS", "maybe")
    with pytest.raises(ConfigError):
        MenuConfig.load()

    monkeypatch.delenv("WEBMENU_PREFIX_PARENTS")
    monkeypatch.setenv("WEBMENU_MAX_DEPTH", "-1")
    with pytest.raises(ConfigError):
        MenuConfig.load()


def test_validators_normalise_values() -> None:
    """Given untidy values When MenuConfig is built Then they are normalised or rejected."""

    config = MenuConfig(item_list_element=" NAV ", item_element=None, prefix="/shop/")

    assert config.item_list_element == "nav"
    assert config.item_element == ""
    assert config.prefix == "shop"
    with pytest.raises(ValidationError):
        MenuConfig(active_class="two words")


def test_to_options_and_configure_change_defaults() -> None:
    """Given a custom config When configured Then new item lists use its option table."""

    config = MenuConfig(item_list_element="ol", active_class="on")

    configure(config)
    menu = ItemList().add("a", "A")

    assert get_default_options() == config.to_options()
    assert menu.get_option("item.active_class") == "on"
    assert menu.render() == '<ol><li><a href="a">A</a></li></ol>'


def test_unknown_option_keys_are_rejected() -> None:
    """Given an option outside the table When set or read Then UnknownOptionError is raised."""

    menu = ItemList()

    with pytest.raises(UnknownOptionError):
        menu.set_option("item.colour", "red")
    with pytest.raises(KeyError):
        menu.get_option("item.colour")
