# ledgermatch/core/csv_reader.py

"""
Statement tokenizing.

Uses the standard csv grammar, so quoted fields may contain commas,
quotes and line breaks. Fully blank rows are dropped before rows are
numbered.
"""

import csv
import io

from ledgermatch.core.normalizers import clean_cell


def read_records(csv_data: str) -> list[list[str]]:
    """Split statement text into non-blank rows of trimmed cells."""
    if not csv_data or not csv_data.strip():
        return []

    reader = csv.reader(io.StringIO(csv_data.lstrip("\ufeff")), skipinitialspace=True)
    records = []
    for row in reader:
        cells = [clean_cell(value) for value in row]
        if any(cells):
            records.append(cells)
    return records


def read_header(csv_data: str) -> list[str]:
    """Header names from the first non-blank row."""
    records = read_records(csv_data)
    return records[0] if records else []


def to_row(headers: list[str], values: list[str]) -> dict[str, str]:
    """Key a row by header name; short rows are padded with empty values."""
    return {
        header: values[index] if index < len(values) else ""
        for index, header in enumerate(headers)
    }
