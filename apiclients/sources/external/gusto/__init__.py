"""Gusto data source module."""
from apiclients.sources.external.gusto.gusto import GustoDataSource

__all__ = ["GustoDataSource"]
