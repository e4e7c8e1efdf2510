"""Tests for :mod:`webmenu.menu`."""

from __future__ import annotations

from webmenu.config import MenuConfig
from webmenu.items import ItemList
from webmenu.menu import Menu, MenuHandler
from webmenu.request import MenuRequest


def test_handler_creates_named_lists_on_demand() -> None:
    """Given a fresh registry When a handler is requested twice Then the same root list is reused."""

    menu = Menu()

    first = menu.handler("main").add("home", "Home")
    second = menu.handler("main").add("about", "About")

    assert isinstance(first, MenuHandler)
    assert first.get_item_lists()[0] is second.get_item_lists()[0]
    assert menu.get_item_list("main").get_name() == "main"
    assert len(menu.get_item_list("main")) == 2
    assert menu.has_handler("main")


def test_handler_with_several_names_applies_mutations_to_each() -> None:
    """Given two menus in one handler When a link is added Then both menus contain it."""

    menu = Menu()

    menu.handler(["main", "footer"]).add("about", "About").prefix("site")

    for name in ("main", "footer"):
        item_list = menu.get_item_list(name)
        assert len(item_list) == 1
        assert item_list.on_item().get_content().get_evaluated_url() == "/site/about"


def test_render_concatenates_menus_and_skips_unknown() -> None:
    """Given two menus When rendered together Then their markup is concatenated in order."""

    menu = Menu()
    menu.handler("main").add("a", "A")
    menu.handler("footer", attributes={"class": "footer"}).raw("<small>c</small>")

    assert menu.render(["main", "missing", "footer"]) == (
        '<ul><li><a href="a">A</a></li></ul>'
        '<ul class="footer"><li><small>c</small></li></ul>'
    )
    assert menu.render("missing") == ""
    assert str(menu.handler("main")) == '<ul><li><a href="a">A</a></li></ul>'


def test_registry_config_is_applied_to_created_lists() -> None:
    """Given a registry config When lists are created Then they carry its options."""

    menu = Menu(MenuConfig(item_list_element="nav", item_element="", active_class="is-active"))
    menu.handler("main").add("a", "A").bind(MenuRequest.from_url("/a"))

    assert menu.render("main") == '<nav><a href="a">A</a></nav>'
    assert menu.items().get_options() == {}


def test_nested_free_standing_list_inherits_handler_options() -> None:
    """Given options set on a handler When a list from items() is nested Then the handler options reach it."""

    menu = Menu(MenuConfig(active_class="is-active"))
    children = menu.items().add("a/b", "B")
    menu.handler("main").set_option("max_depth", 1).add("a", "A", children)

    html = menu.render("main")

    assert children.get_option("max_depth") == 1
    assert children.get_option("item.active_class") == "is-active"
    assert html == '<ul><li><a href="a">A</a></li></ul>'


def test_find_searches_all_handlers() -> None:
    """Given nested lists in several menus When searching by name Then the nested list is found."""

    menu = Menu()
    admin = menu.items("admin").add("admin/users", "Users")
    menu.handler("main").add("home", "Home")
    menu.handler("side").add("admin", "Admin", admin)

    assert menu.find("admin") is admin
    assert menu.find("nothing") is None
    assert len(menu.all_handlers()) == 2


def test_handler_attach_and_active_pattern() -> None:
    """Given a handler When attaching a list and adding a pattern Then the last item gets the pattern."""

    menu = Menu()
    extra = ItemList().add("reports", "Reports")

    menu.handler("main").attach(extra).active_pattern(r"^/reports/")
    main = menu.get_item_list("main")

    assert main.on_item().is_active(MenuRequest.from_url("/reports/2024"))


def test_reset_clears_handlers() -> None:
    """Given registered menus When reset Then no menus remain."""

    menu = Menu()
    menu.handler("main")

    menu.reset()

    assert not menu.has_handler("main")
