"""Tag view entries for a single item."""

from __future__ import annotations

from typing import Callable

from markview.repository.model import Item, Tag
from markview.view.model import TagView


def build_tag_views(item: Item, tag_route: Callable[[Tag], str]) -> list[TagView]:
    """One entry per tag in the item's stored order; duplicates are kept."""
    return [TagView(name=tag.name, absolute_route=tag_route(tag)) for tag in item.metadata.tags]
