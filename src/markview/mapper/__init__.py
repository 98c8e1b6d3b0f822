"""Item tree → view-model tree projection."""

from markview.mapper.projector import Projector, project

__all__ = ["Projector", "project"]
