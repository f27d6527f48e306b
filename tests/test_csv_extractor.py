"""Tests for the CSVExtractor."""

import pytest

from catalog_distiller.extractors import CSVExtractor, parse_leading_int, split_cells
from schemas.issue_record import UNCOLLECTED_COLLECTION


@pytest.fixture
def extractor():
    return CSVExtractor()


class TestSplitCells:
    """Tests for split_cells()."""

    def test_plain_commas(self):
        """Unquoted cells split on every comma."""
        assert split_cells("a,b,,c") == ["a", "b", "", "c"]

    def test_quoted_comma_is_not_a_delimiter(self):
        """Commas inside double quotes stay in the cell."""
        assert split_cells('X-Men,"Fall of X, Vol 1",TPB') == ["X-Men", "Fall of X, Vol 1", "TPB"]

    def test_cells_are_trimmed(self):
        """Whitespace and a trailing carriage return are trimmed."""
        assert split_cells(" a , b ,c\r") == ["a", "b", "c"]

    def test_strips_one_quote_each_side(self):
        """Only one leading and one trailing quote are removed."""
        assert split_cells('"a",""b""') == ["a", '"b"']

    def test_empty_line(self):
        """An empty line is a single empty cell."""
        assert split_cells("") == [""]

    def test_byte_order_mark_is_trimmed(self):
        """A byte order mark is trimmed like whitespace."""
        assert split_cells("\ufeffJanuary,1995") == ["January", "1995"]


class TestParseLeadingInt:
    """Tests for parse_leading_int()."""

    def test_plain_integer(self):
        assert parse_leading_int("1995") == 1995

    def test_trailing_text_is_ignored(self):
        """Lenient parsing: '1995x' reads as 1995 (kept for compatibility)."""
        assert parse_leading_int("1995x") == 1995
        assert parse_leading_int("1995.5") == 1995

    def test_no_leading_digits(self):
        assert parse_leading_int("x1995") is None
        assert parse_leading_int("") is None

    def test_non_ascii_digits_are_not_numbers(self):
        """Only ASCII digits are read, so Arabic-Indic numerals are not a year."""
        assert parse_leading_int("Ù¡Ù©Ù©Ù¥") is None


class TestFindAnchor:
    """Tests for CSVExtractor.find_anchor()."""

    def test_finds_leftmost_month_year_pair(self, extractor):
        """The first month followed by a plausible year wins."""
        row = ["Title", "May", "1993", "June", "1994"]

        assert extractor.find_anchor(row) == (1, "May", 1993)

    def test_month_match_is_case_insensitive(self, extractor):
        """Month cells are matched ignoring case and return the canonical name."""
        assert extractor.find_anchor(["april", "2001"]) == (0, "April", 2001)

    def test_skips_month_without_plausible_year(self, extractor):
        """A month followed by an out-of-range year is not an anchor."""
        row = ["May", "1900", "notes", "June", "2000"]

        assert extractor.find_anchor(row) == (3, "June", 2000)

    @pytest.mark.parametrize("year", ["1900", "2100", "12", "n/a", ""])
    def test_rejects_implausible_years(self, extractor, year):
        """Years must be strictly between 1900 and 2100."""
        assert extractor.find_anchor(["May", year]) is None

    def test_window_is_first_fifteen_cells(self, extractor):
        """An anchor starting at cell 14 is found, one at cell 15 is not."""
        found = [""] * 14 + ["May", "1993"]
        missed = [""] * 15 + ["May", "1993"]

        assert extractor.find_anchor(found) == (14, "May", 1993)
        assert extractor.find_anchor(missed) is None

    def test_month_in_last_cell_is_not_an_anchor(self, extractor):
        """A trailing month has no year cell after it."""
        assert extractor.find_anchor(["Title", "May"]) is None


class TestExtract:
    """Tests for CSVExtractor.extract()."""

    def test_two_issues_on_one_row(self, extractor):
        """An issue with a blank collection becomes an uncollected record."""
        text = "Uncanny X-Men,January,1995,1,X-Men Omnibus Vol 1,Omnibus,2,,\n"

        records = extractor.extract(text).records

        assert len(records) == 2
        first, second = records
        assert (first.month, first.year, first.issue_number) == ("January", 1995, "1")
        assert first.collection == "X-Men Omnibus Vol 1"
        assert first.format == "Omnibus"
        assert first.is_uncollected is False
        assert (second.month, second.year, second.issue_number) == ("January", 1995, "2")
        assert second.collection == UNCOLLECTED_COLLECTION
        assert second.format == "Not Printed"
        assert second.is_uncollected is True

    def test_blank_collection_then_next_triple(self, extractor):
        """Scanning stays aligned after an issue with a blank collection."""
        text = "Title,June,1996,5,,,6,Vol2,TPB"

        records = extractor.extract(text).records

        assert [r.issue_number for r in records] == ["5", "6"]
        assert records[0].is_uncollected is True
        assert records[1].collection == "Vol2"
        assert records[1].format == "TPB"

    def test_single_blank_cell_resynchronizes(self, extractor):
        """A stray blank issue cell advances one column, not three."""
        text = "June,1996,,7,Vol3,OHC,,,8,Vol4,Omnibus"

        records = extractor.extract(text).records

        assert [(r.issue_number, r.collection, r.format) for r in records] == [
            ("7", "Vol3", "OHC"),
            ("8", "Vol4", "Omnibus"),
        ]

    def test_missing_trailing_cells(self, extractor):
        """A final issue without collection or format cells is uncollected."""
        records = extractor.extract("June,1996,9").records

        assert len(records) == 1
        assert records[0].issue_number == "9"
        assert records[0].is_uncollected is True

    def test_missing_format_is_unknown(self, extractor):
        """A collected issue without a format cell gets 'Unknown'."""
        records = extractor.extract("June,1996,9,Vol5").records

        assert records[0].format == "Unknown"

    def test_anchor_without_issues(self, extractor):
        """A row with an anchor but no issue numbers yields no records."""
        result = extractor.extract("Title,June,1996,,,\n")

        assert result.records == []
        assert result.lines_skipped == 0

    def test_only_leftmost_anchor_is_used(self, extractor):
        """Cells after the anchor are issues even if they look like an anchor."""
        records = extractor.extract("May,1993,June,1994,TPB").records

        assert len(records) == 1
        assert records[0].month == "May"
        assert records[0].issue_number == "June"
        assert records[0].collection == "1994"
        assert records[0].format == "TPB"

    def test_lenient_year_cell(self, extractor):
        """A year cell with trailing text still anchors the row."""
        records = extractor.extract("May,1995x,1,Vol1,TPB").records

        assert records[0].year == 1995

    def test_no_anchor_anywhere(self, extractor):
        """Text with no month/year pair yields nothing."""
        result = extractor.extract("a,b,c\nMonth,Year,Issue\nMay,n/a,1\n")

        assert result.records == []
        assert result.lines_scanned == 3
        assert result.lines_skipped == 3
        assert result.no_data_found is True

    def test_empty_input(self, extractor):
        """Empty input scans nothing and is not a no-data condition."""
        result = extractor.extract("")

        assert result.records == []
        assert result.lines_scanned == 0
        assert result.no_data_found is False

    def test_sample_export(self, extractor, sample_csv_text):
        """Records keep file order, then column order within a line."""
        result = extractor.extract(sample_csv_text)

        assert [(r.month, r.year, r.issue_number) for r in result.records] == [
            ("January", 1995, "1"),
            ("January", 1995, "2"),
            ("March", 1991, "5"),
            ("February", 1992, "10"),
            ("February", 1992, "11"),
            ("December", 1991, "45"),
        ]
        assert result.lines_scanned == 7
        assert result.lines_skipped == 3

    def test_quoted_collection_with_comma(self, extractor, sample_csv_text):
        """A quoted collection name keeps its comma."""
        records = extractor.extract(sample_csv_text).records

        assert records[2].collection == "Fall of X, Vol 1"
        assert records[2].format == "OHC"

    def test_crlf_line_endings(self, extractor):
        """Windows line endings are trimmed from the last cell."""
        records = extractor.extract("May,1993,1,Vol1,TPB\r\nJune,1993,2,Vol1,TPB\r\n").records

        assert [r.format for r in records] == ["TPB", "TPB"]

    def test_uncollected_iff_sentinel_collection(self, extractor, sample_csv_text):
        """Every extracted record is uncollected exactly when it has the sentinel."""
        for record in extractor.extract(sample_csv_text).records:
            assert record.is_uncollected == (record.collection == UNCOLLECTED_COLLECTION)

    def test_warns_when_no_issues_found(self, extractor, caplog):
        """An unanchored export logs a warning."""
        extractor.extract("nothing,to,see\n")

        assert "No issues found" in caplog.text

    def test_byte_order_mark_in_raw_text(self, extractor):
        """Text decoded without stripping the BOM still anchors its first row."""
        records = extractor.extract("\ufeffJanuary,1995,1,Vol1,TPB\n").records

        assert len(records) == 1
        assert records[0].month == "January"

    def test_non_ascii_year_does_not_anchor(self, extractor):
        """A year written in non-ASCII digits is not a year."""
        result = extractor.extract("May,١٩٩٥,1,Vol1,TPB\n")

        assert result.records == []
        assert result.lines_skipped == 1


class TestExtractFile:
    """Tests for CSVExtractor.extract_file()."""

    def test_reads_from_disk(self, extractor, tmp_path, sample_csv_text):
        """extract_file reads the export and extracts it."""
        path = tmp_path / "timeline.csv"
        path.write_text(sample_csv_text)

        result = extractor.extract_file(path)

        assert len(result.records) == 6

    def test_excel_byte_order_mark(self, extractor, tmp_path):
        """The first row of a "CSV UTF-8" export with a BOM is kept."""
        path = tmp_path / "timeline.csv"
        path.write_text("January,1995,1,Vol1,TPB\nMarch,1995,2,Vol1,TPB\n", encoding="utf-8-sig")

        result = extractor.extract_file(path)

        assert [r.month for r in result.records] == ["January", "March"]
        assert result.lines_skipped == 0
