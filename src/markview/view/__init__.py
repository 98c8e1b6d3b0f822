"""View models handed to the presentation layer."""

from markview.view.model import GeoLocation, TagView, ViewModel, error_model

__all__ = ["GeoLocation", "TagView", "ViewModel", "error_model"]
