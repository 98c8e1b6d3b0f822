"""View-model types. Plain data, ready for templating or JSON output."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Iterator


@dataclass
class TagView:
    name: str
    absolute_route: str


@dataclass
class GeoLocation:
    """Display-ready geo data plus the raw fields it was derived from."""

    place_name: str = ""
    address: str = ""
    coordinates: str = ""

    street: str = ""
    city: str = ""
    postcode: str = ""
    country: str = ""
    latitude: str = ""
    longitude: str = ""
    map_type: str = ""
    zoom: int = 0


@dataclass
class ViewModel:
    """Projection of one repository item and, via ``children``, its subtree."""

    level: int = 0
    relative_route: str = ""
    absolute_route: str = ""
    title: str = ""
    description: str = ""
    content: str = ""
    language_tag: str = ""
    creation_date: str = ""
    last_modified_date: str = ""
    type: str = ""
    tags: list[TagView] = field(default_factory=list)
    locations: list[ViewModel] = field(default_factory=list)
    geo_location: GeoLocation = field(default_factory=GeoLocation)
    children: list[ViewModel] = field(default_factory=list)

    def walk(self) -> Iterator[ViewModel]:
        """Yield this model and all child models, depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def error_model(
    title: str,
    description: str,
    relative_route: str,
    absolute_route: str,
    level: int = 0,
) -> ViewModel:
    """A childless model reporting a mapping problem at a navigable route."""
    return ViewModel(
        level=level,
        relative_route=relative_route,
        absolute_route=absolute_route,
        title=title,
        description=description,
        type="error",
    )
