"""Collaborator protocols the projector is built from."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from markview.repository.model import Item, Tag


@runtime_checkable
class ItemResolver(Protocol):
    """Looks up items by the name used in a location reference."""

    def resolve(self, name: str) -> Item | None:
        """Return the named item, or None when there is no such item."""
        ...


@runtime_checkable
class RouteComputer(Protocol):
    """Computes routes for items and tags. Must be deterministic."""

    def relative_route(self, item: Item) -> str: ...

    def absolute_route(self, item: Item) -> str: ...

    def tag_route(self, tag: Tag) -> str: ...


@runtime_checkable
class ContentRenderer(Protocol):
    """Produces the display content of an item without altering its type or tags."""

    def render(self, item: Item) -> str: ...
