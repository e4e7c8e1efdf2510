"""Menu tree nodes: item lists, items and their contents."""

from .contents import Content, ContentType, Link, Raw
from .item import Item
from .item_list import ItemList
from .node import MenuObject

__all__ = ["Content", "ContentType", "Item", "ItemList", "Link", "MenuObject", "Raw"]
