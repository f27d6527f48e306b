"""Canonical chronological ordering of issue records."""

from collections.abc import Iterable

from schemas.issue_record import IssueRecord, month_index


def chronological_key(record: IssueRecord) -> tuple[int, int]:
    """Sort key: year, then calendar month."""
    return record.year, month_index(record.month)


def sort_records(records: Iterable[IssueRecord]) -> list[IssueRecord]:
    """Return records ordered by (year, month).

    The sort is stable, so issues from the same month keep their input
    order.
    """
    return sorted(records, key=chronological_key)
