"""Extraction result schema."""

from pydantic import BaseModel, Field

from .issue_record import IssueRecord


class ExtractionResult(BaseModel):
    """Outcome of scanning one spreadsheet export.

    Attributes:
        records: Issues in file order, then column-scan order within a line
        lines_scanned: Number of non-blank lines inspected
        lines_skipped: Non-blank lines without a month/year anchor
    """

    records: list[IssueRecord] = Field(default_factory=list)
    lines_scanned: int = 0
    lines_skipped: int = 0

    @property
    def no_data_found(self) -> bool:
        """True when non-blank input produced zero records."""
        return self.lines_scanned > 0 and not self.records
