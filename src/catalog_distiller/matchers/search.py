"""Catalog search combining query resolution and filtering."""

import logging
from collections.abc import Iterable

from schemas.issue_record import IssueRecord

from .filters import apply_filter
from .resolver import QueryResolver, QueryTranslator

logger = logging.getLogger(__name__)


class CatalogSearch:
    """Search box behavior over an in-memory catalog.

    Example:
        search = CatalogSearch(translator=None)
        results = search.search(records, "fall of x")
    """

    def __init__(self, translator: QueryTranslator | None = None):
        self.resolver = QueryResolver(translator)

    def search(self, records: Iterable[IssueRecord], raw_query: str) -> list[IssueRecord]:
        """Resolve a raw query and apply it to the records.

        A blank query matches nothing.

        Args:
            records: Catalog records, in the order results should keep
            raw_query: Text typed by the user

        Returns:
            Matching records in input order
        """
        if not raw_query.strip():
            return []

        descriptor = self.resolver.resolve(raw_query)
        results = apply_filter(records, descriptor)
        logger.info(f"Query {raw_query!r} matched {len(results)} issues")
        return results
