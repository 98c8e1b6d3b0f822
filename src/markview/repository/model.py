"""Repository item tree and metadata types.

The loader owns the tree. Everything downstream (tag index, projector) only
reads it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterator


class ItemType(str, Enum):
    """Item types the projector knows how to map."""

    PRESENTATION = "presentation"
    REPOSITORY = "repository"
    DOCUMENT = "document"
    MESSAGE = "message"
    LOCATION = "location"


RECOGNIZED_ITEM_TYPES = frozenset(t.value for t in ItemType)

_WHITESPACE = re.compile(r"\s+")


def normalize_tag_name(name: str) -> str:
    """Lower-case, trim, and join inner whitespace runs with hyphens."""
    return _WHITESPACE.sub("-", name.strip()).lower()


@dataclass(frozen=True)
class Tag:
    """A label attached to an item. Equal names are the same map key."""

    name: str

    def __post_init__(self) -> None:
        normalized = normalize_tag_name(str(self.name))
        if not normalized:
            raise ValueError(f"Invalid tag name: {self.name!r}")
        object.__setattr__(self, "name", normalized)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Location:
    """A named reference to another item in the repository."""

    name: str

    def __str__(self) -> str:
        return self.name.strip()


@dataclass
class GeoInformation:
    """Postal address and coordinates. Empty strings mean absent."""

    street: str = ""
    city: str = ""
    postcode: str = ""
    country: str = ""
    latitude: str = ""
    longitude: str = ""
    map_type: str = ""
    zoom: int = 0


@dataclass
class MetaData:
    language: str = ""
    creation_date: datetime | None = None
    last_modified_date: datetime | None = None
    item_type: str = ItemType.DOCUMENT.value
    tags: list[Tag] = field(default_factory=list)
    locations: list[Location] = field(default_factory=list)
    geo: GeoInformation = field(default_factory=GeoInformation)

    def __post_init__(self) -> None:
        if isinstance(self.item_type, ItemType):
            self.item_type = self.item_type.value


@dataclass(eq=False)
class Item:
    """A node in the content tree. Hashable by identity."""

    path: str
    title: str = ""
    description: str = ""
    content: str = ""
    metadata: MetaData = field(default_factory=MetaData)
    children: list[Item] = field(default_factory=list)
    level: int = 0
    parent: Item | None = field(default=None, repr=False)

    @property
    def name(self) -> str:
        """Last path segment, or empty string for the root."""
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    def add_child(self, child: Item) -> Item:
        child.parent = self
        child.level = self.level + 1
        self.children.append(child)
        return child

    def walk(self) -> Iterator[Item]:
        """Yield this item and all descendants, depth-first, in child order."""
        yield self
        for child in self.children:
            yield from child.walk()


class ItemList:
    """Ordered collection of items.

    ``add`` is idempotent: an item already in the list is not appended again.
    ``remove`` of an absent item is a no-op.
    """

    def __init__(self, *items: Item) -> None:
        self._items: list[Item] = []
        for item in items:
            self.add(item)

    def add(self, item: Item) -> ItemList:
        if item not in self._items:
            self._items.append(item)
        return self

    def remove(self, item: Item) -> ItemList:
        self._items = [i for i in self._items if i is not item]
        return self

    def is_empty(self) -> bool:
        return not self._items

    def __contains__(self, item: object) -> bool:
        return any(i is item for i in self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ItemList({', '.join(i.path for i in self._items)})"
