"""Daily featured-year selection."""

from collections.abc import Sequence
from datetime import date

from schemas.featured import DailyFeature
from schemas.issue_record import MONTHS, IssueRecord


def select_daily_feature(catalog: Sequence[IssueRecord], today: date) -> DailyFeature:
    """Pick the featured year and its issues for a calendar day.

    The featured year rotates through the distinct catalog years by
    day-of-year (January 1 is day 1), so the pick is stable for a given
    day and catalog. Featured issues are the records from the current
    calendar month of that year, in catalog order.

    Args:
        catalog: Full catalog, normally in chronological order
        today: The date to select for

    Returns:
        DailyFeature; featured_year is None when the catalog is empty
    """
    month = MONTHS[today.month - 1]
    unique_years = sorted({record.year for record in catalog})
    if not unique_years:
        return DailyFeature(month=month)

    day_of_year = today.timetuple().tm_yday
    featured_year = unique_years[day_of_year % len(unique_years)]

    return DailyFeature(
        featured_year=featured_year,
        month=month,
        issues=[r for r in catalog if r.month == month and r.year == featured_year],
    )
