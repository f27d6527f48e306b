"""Cumulative record filtering driven by a QueryDescriptor."""

from collections.abc import Iterable

from schemas.issue_record import IssueRecord
from schemas.query import QueryDescriptor


def apply_filter(
    records: Iterable[IssueRecord], descriptor: QueryDescriptor
) -> list[IssueRecord]:
    """Keep the records matching every field set on the descriptor.

    Year, month and text filters combine with AND semantics and preserve
    the relative order of the input. Unset or blank fields do not filter.

    Args:
        records: Records to filter
        descriptor: Query filter to apply

    Returns:
        Matching records in input order
    """
    results = list(records)

    if descriptor.year:
        results = [r for r in results if r.year == descriptor.year]

    if descriptor.month:
        month = descriptor.month.lower()
        results = [r for r in results if r.month.lower() == month]

    if descriptor.text:
        text = descriptor.text.lower()
        results = [r for r in results if text in r.search_index]

    return results
