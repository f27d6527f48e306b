"""Matchers for ordering, filtering and featuring catalog records."""

from .featured import select_daily_feature
from .filters import apply_filter
from .ordering import chronological_key, sort_records
from .resolver import QueryResolver, QueryTranslator
from .search import CatalogSearch

__all__ = [
    "CatalogSearch",
    "QueryResolver",
    "QueryTranslator",
    "apply_filter",
    "chronological_key",
    "select_daily_feature",
    "sort_records",
]
