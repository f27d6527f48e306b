"""Daily feature schema."""

from pydantic import BaseModel, Field

from .issue_record import IssueRecord


class DailyFeature(BaseModel):
    """The featured year for one calendar day.

    Attributes:
        featured_year: Year selected by day-of-year rotation (None if the
            catalog is empty)
        month: Current calendar month name
        issues: Records from that month of the featured year
    """

    featured_year: int | None = None
    month: str
    issues: list[IssueRecord] = Field(default_factory=list)
