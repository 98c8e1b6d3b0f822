"""Content repository: items, metadata, tag index and the markdown loader."""

from markview.repository.model import (
    GeoInformation,
    Item,
    ItemList,
    ItemType,
    Location,
    MetaData,
    Tag,
)
from markview.repository.tagmap import TagMap

__all__ = [
    "GeoInformation",
    "Item",
    "ItemList",
    "ItemType",
    "Location",
    "MetaData",
    "Tag",
    "TagMap",
]
