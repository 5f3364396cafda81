"""Application services for the Wine API."""

from wine_api.services.query_engine import InvalidQuery, VarietyStats, WineQueryEngine

__all__ = [
    "InvalidQuery",
    "VarietyStats",
    "WineQueryEngine",
]
