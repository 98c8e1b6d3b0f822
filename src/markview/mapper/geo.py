"""Geo data and location-reference projection."""

from __future__ import annotations

from markview.repository.model import GeoInformation, Item
from markview.view.model import GeoLocation


def derive_geo_view(item: Item) -> GeoLocation:
    """Build the display geo view for an item. Always returns a populated view."""
    geo = item.metadata.geo or GeoInformation()
    return GeoLocation(
        place_name=place_name(item.title, geo),
        address=address(geo),
        coordinates=coordinates(geo),
        street=geo.street,
        city=geo.city,
        postcode=geo.postcode,
        country=geo.country,
        latitude=geo.latitude,
        longitude=geo.longitude,
        map_type=geo.map_type,
        zoom=geo.zoom,
    )


def place_name(title: str, geo: GeoInformation) -> str:
    if title == "" or geo.city == "":
        return ""
    return ", ".join([title, geo.city, geo.country])


def address(geo: GeoInformation) -> str:
    # Plain field join: empty components keep their separators.
    return ", ".join([geo.street, geo.postcode, geo.city, geo.country])


def coordinates(geo: GeoInformation) -> str:
    if geo.latitude == "" or geo.longitude == "":
        return ""
    return f"{geo.latitude}; {geo.longitude}"
