"""Default content rendering."""

from __future__ import annotations

from markview.repository.model import Item


class RawContentRenderer:
    """Returns the item's markdown body as-is, trimmed."""

    def render(self, item: Item) -> str:
        return item.content.strip()
