"""Recursive projection of repository items into view models.

The projector is total: unknown item types become error models in place,
unresolved location references are dropped, and missing geo fields stay
empty. Nothing here raises for a well-formed item tree.
"""

from __future__ import annotations

import json
import logging
import weakref
from datetime import datetime

from markview.config import ViewConfig
from markview.mapper.geo import derive_geo_view
from markview.mapper.interfaces import ContentRenderer, ItemResolver, RouteComputer
from markview.mapper.tags import build_tag_views
from markview.repository.model import RECOGNIZED_ITEM_TYPES, Item
from markview.view.model import ViewModel, error_model

logger = logging.getLogger(__name__)

UNRECOGNIZED_TITLE = "Item type not recognized"


class Projector:
    """Maps an item tree onto a view-model tree.

    Every projected item's model is kept in ``self._models`` (weakly keyed by
    item identity) so callers can look it up later without touching the item.
    Items dropped from the tree fall out of the cache once unreferenced.
    """

    def __init__(
        self,
        resolver: ItemResolver,
        routes: RouteComputer,
        renderer: ContentRenderer,
        config: ViewConfig | None = None,
    ) -> None:
        self.resolver = resolver
        self.routes = routes
        self.renderer = renderer
        self.config = config or ViewConfig()
        self._models: weakref.WeakKeyDictionary[Item, ViewModel] = (
            weakref.WeakKeyDictionary()
        )

    def project(self, item: Item) -> ViewModel:
        """Project an item and, transitively, its children."""
        item_type = item.metadata.item_type
        if item_type in RECOGNIZED_ITEM_TYPES:
            model = self._model(item)
            model.children = [self.project(child) for child in item.children]
        else:
            logger.warning("No mapper for item %s of type %r", item.path, item_type)
            model = error_model(
                UNRECOGNIZED_TITLE,
                "There is no mapper available for items of type "
                + json.dumps(item_type, ensure_ascii=False),
                self.routes.relative_route(item),
                self.routes.absolute_route(item),
                level=item.level,
            )

        self._models[item] = model
        return model

    def model_for(self, item: Item) -> ViewModel | None:
        """The model produced by the last projection of ``item``, if any."""
        return self._models.get(item)

    def forget(self, item: Item) -> None:
        """Drop the cached models of ``item`` and its descendants."""
        for node in item.walk():
            self._models.pop(node, None)

    def resolve_locations(self, item: Item) -> list[ViewModel]:
        """Single-level models for each resolvable location reference, in order."""
        models: list[ViewModel] = []
        for location in item.metadata.locations:
            target = self.resolver.resolve(str(location))
            if target is None:
                logger.debug("Location %r of %s not found, skipping", str(location), item.path)
                continue
            models.append(self._model(target, expand_locations=False))
        return models

    # ── Single-item projection ────────────────────────────────

    def _model(self, item: Item, expand_locations: bool = True) -> ViewModel:
        meta = item.metadata
        return ViewModel(
            level=item.level,
            relative_route=self.routes.relative_route(item),
            absolute_route=self.routes.absolute_route(item),
            title=item.title,
            description=item.description,
            content=self.renderer.render(item),
            language_tag=self._language_tag(meta.language),
            creation_date=self._format_date(meta.creation_date),
            last_modified_date=self._format_date(meta.last_modified_date),
            type=meta.item_type,
            tags=build_tag_views(item, self.routes.tag_route),
            locations=self.resolve_locations(item) if expand_locations else [],
            geo_location=derive_geo_view(item),
        )

    def _language_tag(self, language: str) -> str:
        language = language.strip()
        if len(language) < 2:
            return self.config.default_language
        return language[:2].lower()

    def _format_date(self, value: datetime | None) -> str:
        if value is None:
            return ""
        # Naive datetimes render an empty %Z; drop the dangling space.
        return value.strftime(self.config.date_format).rstrip()


def project(
    item: Item,
    resolver: ItemResolver,
    routes: RouteComputer,
    renderer: ContentRenderer,
) -> ViewModel:
    """Project ``item`` with a throwaway projector."""
    return Projector(resolver, routes, renderer).project(item)
