"""Default route computation for items and tags."""

from __future__ import annotations

from markview.config import RoutesConfig
from markview.repository.model import Item, Tag


class PathRoutes:
    """Routes derived from an item's repository path.

    The root item maps to ``index``; every other item to its path. Both get
    the configured extension, and absolute routes are prefixed with
    ``base_url``.
    """

    def __init__(self, config: RoutesConfig | None = None) -> None:
        self.config = config or RoutesConfig()

    def relative_route(self, item: Item) -> str:
        path = item.path.strip("/") or "index"
        return f"{path}{self.config.extension}"

    def absolute_route(self, item: Item) -> str:
        return self._absolute(self.relative_route(item))

    def tag_route(self, tag: Tag) -> str:
        prefix = self.config.tag_prefix.strip("/")
        route = f"{tag.name}{self.config.extension}"
        return self._absolute(f"{prefix}/{route}" if prefix else route)

    def _absolute(self, route: str) -> str:
        return self.config.base_url.rstrip("/") + "/" + route
