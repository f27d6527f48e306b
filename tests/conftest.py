"""Pytest fixtures for Catalog Distiller tests."""

import pytest

from schemas.issue_record import IssueRecord


@pytest.fixture
def sample_csv_text():
    """A small hand-maintained timeline export.

    Rows carry a leading title column of varying width, a blank padding
    row, a header row without a year, and one line with no anchor at all.
    """
    return (
        "Series,Month,Year,Issue,Collection,Format\n"
        "Uncanny X-Men,January,1995,1,X-Men Omnibus Vol 1,Omnibus,2,,\n"
        ",,,,,,\n"
        "Uncanny X-Men,Extra note,March,1991,\"5\",\"Fall of X, Vol 1\",OHC\n"
        "X-Force,February,1992,10,Fall of X Vol 2,,11,Fall of X Vol 2,TPB\n"
        "free text row with no dates at all\n"
        "Wolverine,December,1991,45,Wolverine Epic Collection,TPB\n"
    )


@pytest.fixture
def sample_records():
    """Records in deliberately non-chronological order."""
    return [
        IssueRecord.from_cells("March", 1993, "3", "X-Men Omnibus Vol 2", "Omnibus"),
        IssueRecord.from_cells("January", 1991, "1", "Fall of X Vol 1", "TPB"),
        IssueRecord.from_cells("December", 1991, "12"),
        IssueRecord.from_cells("February", 1991, "2", "Fall of X Vol 1", ""),
        IssueRecord.from_cells("March", 1991, "1A", "X-Men Omnibus Vol 1", "Omnibus"),
        IssueRecord.from_cells("March", 1993, "4"),
    ]
