"""Extractors for recovering issue records from raw spreadsheet exports."""

from .csv_extractor import CSVExtractor, parse_leading_int, split_cells

__all__ = ["CSVExtractor", "parse_leading_int", "split_cells"]
