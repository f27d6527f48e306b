"""Issue record schema.

An IssueRecord is one catalog issue recovered from a spreadsheet export.
Records are immutable; the search index is always recomputed from the
other fields and is never read back from storage.
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

UNCOLLECTED_COLLECTION = "Uncollected / Single Issue"
UNCOLLECTED_FORMAT = "Not Printed"
UNKNOWN_FORMAT = "Unknown"
UNCOLLECTED_TOKENS = "uncollected missing"

MIN_YEAR = 1900
MAX_YEAR = 2100


def canonical_month(name: str | None) -> str | None:
    """Return the properly-cased month name, or None if it is not a month.

    Examples:
        >>> canonical_month("march")
        'March'
        >>> canonical_month("Mar") is None
        True
    """
    if not name:
        return None
    lowered = name.lower()
    for month in MONTHS:
        if month.lower() == lowered:
            return month
    return None


def month_index(name: str | None) -> int:
    """Return the 0-based calendar index of a month name, or -1."""
    month = canonical_month(name)
    if month is None:
        return -1
    return MONTHS.index(month)


def is_plausible_year(year: int) -> bool:
    return MIN_YEAR < year < MAX_YEAR


class IssueRecord(BaseModel):
    """A single catalog issue.

    Attributes:
        month: Canonical month name
        year: Publication year, strictly between 1900 and 2100
        issue_number: Issue identifier as printed (e.g. "1A")
        collection: Collected edition name, or the uncollected sentinel
        format: Edition format ("Omnibus", "TPB", "Not Printed", "Unknown")
        is_uncollected: True when no collection name was present
        search_index: Lower-cased text blob used for substring search
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    month: str
    year: int
    issue_number: str = Field(alias="issueNumber")
    collection: str
    format: str
    is_uncollected: bool = Field(default=False, alias="isUncollected")

    @model_validator(mode="after")
    def _check_invariants(self) -> "IssueRecord":
        if canonical_month(self.month) != self.month:
            raise ValueError(f"month must be a canonical month name, got {self.month!r}")
        if not is_plausible_year(self.year):
            raise ValueError(f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {self.year}")
        if self.is_uncollected and (
            self.collection != UNCOLLECTED_COLLECTION or self.format != UNCOLLECTED_FORMAT
        ):
            raise ValueError("uncollected issues must carry the uncollected sentinels")
        return self

    @computed_field(alias="searchIndex")
    @property
    def search_index(self) -> str:
        # Uncollected issues index the marker tokens instead of the sentinels.
        if self.is_uncollected:
            collection, format_, tokens = "", "", UNCOLLECTED_TOKENS
        else:
            collection, format_, tokens = self.collection, self.format, ""
        return (
            f"{self.month} {self.year} {self.issue_number} {collection} {format_} {tokens}"
        ).lower()

    @classmethod
    def from_cells(
        cls,
        month: str,
        year: int,
        issue_number: str,
        collection_name: str = "",
        format: str = "",
    ) -> "IssueRecord":
        """Build a record from one scanned issue triple.

        A blank collection name, or one that already reads as the
        uncollected sentinel, marks the issue as uncollected and replaces
        both collection and format with the uncollected sentinels. A blank
        format on a collected issue becomes "Unknown".

        Args:
            month: Canonical month name from the row anchor
            year: Year from the row anchor
            issue_number: Non-empty issue number cell
            collection_name: Collection cell (may be empty)
            format: Format cell (may be empty)

        Returns:
            The new IssueRecord
        """
        is_uncollected = not collection_name or collection_name == UNCOLLECTED_COLLECTION
        return cls(
            month=month,
            year=year,
            issue_number=issue_number,
            collection=UNCOLLECTED_COLLECTION if is_uncollected else collection_name,
            format=UNCOLLECTED_FORMAT if is_uncollected else (format or UNKNOWN_FORMAT),
            is_uncollected=is_uncollected,
        )

    def __str__(self) -> str:
        return f"{self.month} {self.year} #{self.issue_number} - {self.collection} ({self.format})"
