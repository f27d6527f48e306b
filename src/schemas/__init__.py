"""Schema definitions for Catalog Distiller."""

from .extraction import ExtractionResult
from .featured import DailyFeature
from .issue_record import IssueRecord
from .query import QueryDescriptor

__all__ = [
    "DailyFeature",
    "ExtractionResult",
    "IssueRecord",
    "QueryDescriptor",
]
