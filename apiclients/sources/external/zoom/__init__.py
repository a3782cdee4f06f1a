"""Zoom data source module."""
from apiclients.sources.external.zoom.zoom import ZoomDataSource

__all__ = ["ZoomDataSource"]
