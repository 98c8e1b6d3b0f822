"""Reverse index from tags to the items that carry them.

Updated incrementally as items are loaded or unloaded. Not thread-safe:
callers serialize ``add``/``remove``.
"""

from __future__ import annotations

import logging
from typing import Iterator

from markview.repository.model import Item, ItemList, Tag

logger = logging.getLogger(__name__)


class TagMap:
    """Tag → ItemList. A tag is present only while its list is non-empty."""

    def __init__(self) -> None:
        self._map: dict[Tag, ItemList] = {}

    def add(self, item: Item) -> None:
        """Index the item under each of its declared tags."""
        for tag in item.metadata.tags:
            itemlist = self._map.get(tag)
            if itemlist is None:
                self._map[tag] = ItemList(item)
            else:
                itemlist.add(item)
        logger.debug("Indexed %s under %d tag(s)", item.path, len(item.metadata.tags))

    def remove(self, item: Item) -> None:
        """Drop the item from every indexed tag, not only its current ones.

        Metadata may have changed since the item was added, so all lists are
        scanned. Tags left without items are deleted.
        """
        for tag in list(self._map):
            itemlist = self._map[tag].remove(item)
            if itemlist.is_empty():
                del self._map[tag]
                logger.debug("Dropped empty tag %s", tag)

    # ── Queries ───────────────────────────────────────────────

    def items(self, tag: Tag | str) -> list[Item]:
        """Items carrying the tag, in insertion order. Unknown tag → []."""
        if not isinstance(tag, Tag):
            try:
                tag = Tag(tag)
            except ValueError:
                return []
        itemlist = self._map.get(tag)
        return list(itemlist) if itemlist is not None else []

    def tags(self) -> list[Tag]:
        return sorted(self._map, key=lambda t: t.name)

    def counts(self) -> dict[str, int]:
        """Tag name → number of items, for tag clouds."""
        return {tag.name: len(self._map[tag]) for tag in self.tags()}

    def __contains__(self, tag: object) -> bool:
        return tag in self._map

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)
