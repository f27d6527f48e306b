"""Anchor-based extractor for hand-maintained spreadsheet exports.

Rows in these exports have no fixed schema. Each line is scanned for the
first cell pair that looks like a month name followed by a year; every cell
after that anchor is read as a run of (issue number, collection, format)
triples. Lines without an anchor are skipped.
"""

import logging
import re
from pathlib import Path

from schemas.extraction import ExtractionResult
from schemas.issue_record import IssueRecord, canonical_month, is_plausible_year

logger = logging.getLogger(__name__)

# A comma is a delimiter only when an even number of quotes follow it.
CELL_DELIMITER = re.compile(r',(?=(?:(?:[^"]*"){2})*[^"]*$)')
LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")
BYTE_ORDER_MARK = "\ufeff"


def split_cells(line: str) -> list[str]:
    """Split one CSV line into trimmed cells.

    Commas inside double-quoted fields are not delimiters. Each cell is
    trimmed (including any byte order mark) and loses one leading and one
    trailing double quote.

    Examples:
        >>> split_cells('a, "b, c" ,d')
        ['a', 'b, c', 'd']
    """
    cells = []
    for cell in CELL_DELIMITER.split(line):
        cell = cell.strip().strip(BYTE_ORDER_MARK).strip()
        if cell.startswith('"'):
            cell = cell[1:]
        if cell.endswith('"'):
            cell = cell[:-1]
        cells.append(cell)
    return cells


def parse_leading_int(cell: str) -> int | None:
    """Parse the leading integer of a cell, ignoring any trailing text.

    Examples:
        >>> parse_leading_int("1995x")
        1995
        >>> parse_leading_int("x1995") is None
        True
    """
    match = LEADING_INT.match(cell)
    if match is None:
        return None
    return int(match.group(1))


class CSVExtractor:
    """Recovers IssueRecords from a ragged CSV export.

    The extractor never raises for malformed rows: a line without a
    month/year anchor inside the first ``anchor_window`` cells yields no
    records.

    Example:
        extractor = CSVExtractor()
        result = extractor.extract_file(Path("timeline.csv"))
        if result.no_data_found:
            ...
    """

    ANCHOR_WINDOW = 15

    def __init__(self, anchor_window: int = ANCHOR_WINDOW):
        self.anchor_window = anchor_window

    def extract(self, raw_text: str) -> ExtractionResult:
        """Extract issue records from the full text of one export.

        Args:
            raw_text: Newline-delimited CSV text

        Returns:
            ExtractionResult with records in file order
        """
        records: list[IssueRecord] = []
        lines_scanned = 0
        lines_skipped = 0

        raw_text = raw_text.removeprefix(BYTE_ORDER_MARK)

        for line_number, line in enumerate(raw_text.split("\n"), start=1):
            if not line.strip():
                continue
            lines_scanned += 1

            row_records = self.extract_line(line)
            if row_records is None:
                lines_skipped += 1
                logger.debug(f"Line {line_number}: no month/year anchor, skipped")
                continue

            records.extend(row_records)

        if lines_scanned and not records:
            logger.warning(
                f"No issues found in {lines_scanned} lines; "
                "check that rows carry Month and Year columns"
            )
        else:
            logger.info(
                f"Extracted {len(records)} issues from {lines_scanned} lines "
                f"({lines_skipped} skipped)"
            )

        return ExtractionResult(
            records=records,
            lines_scanned=lines_scanned,
            lines_skipped=lines_skipped,
        )

    def extract_file(self, path: Path, encoding: str = "utf-8-sig") -> ExtractionResult:
        """Read an export from disk and extract its records.

        The default encoding drops the byte order mark Excel writes at the
        start of "CSV UTF-8" exports.
        """
        return self.extract(path.read_text(encoding=encoding, errors="replace"))

    def extract_line(self, line: str) -> list[IssueRecord] | None:
        """Extract the issues on one line.

        Returns:
            The line's records (possibly empty), or None when the line has
            no anchor
        """
        row = split_cells(line)
        anchor = self.find_anchor(row)
        if anchor is None:
            return None

        column, month, year = anchor
        return self.scan_issues(row, column + 2, month, year)

    def find_anchor(self, row: list[str]) -> tuple[int, str, int] | None:
        """Find the leftmost month cell followed by a plausible year.

        Only the first ``anchor_window`` cells are considered as month
        candidates.

        Returns:
            (column, canonical month, year), or None
        """
        for column in range(min(self.anchor_window, len(row) - 1)):
            month = canonical_month(row[column])
            if month is None:
                continue
            year = parse_leading_int(row[column + 1])
            if year is not None and is_plausible_year(year):
                return column, month, year
        return None

    def scan_issues(
        self, row: list[str], start: int, month: str, year: int
    ) -> list[IssueRecord]:
        """Read issue triples from ``start`` to the end of the row.

        A non-empty issue cell consumes a full triple. An empty issue cell
        advances a single column so that a stray blank does not shift the
        alignment of the triples after it.
        """
        records = []
        column = start

        while column < len(row):
            issue_number = row[column]
            if not issue_number:
                column += 1
                continue

            collection_name = row[column + 1] if column + 1 < len(row) else ""
            format_ = row[column + 2] if column + 2 < len(row) else ""
            records.append(
                IssueRecord.from_cells(month, year, issue_number, collection_name, format_)
            )
            column += 3

        return records
