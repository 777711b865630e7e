# ledgermatch/core/normalizers.py

"""
Parsing utilities for raw statement values.

Bank exports disagree on date layouts and number formatting; everything
here turns a raw cell into a Python value or None.
"""

from datetime import date, datetime
from typing import Any
import re

MONTH_ABBREVIATIONS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

# Tried in order when the declared layout does not fit
FALLBACK_DATE_FORMATS = [
    '%Y-%m-%d',
    '%Y/%m/%d',
    '%d/%m/%Y',
    '%d-%m-%Y',
    '%d %b %Y',
    '%d-%b-%Y',
    '%b %d, %Y',
]


def parse_amount(amount: Any) -> float | None:
    """
    Parse a monetary cell.

    Everything except digits, '.' and '-' is stripped first, so currency
    symbols and thousands separators are tolerated. Returns None when
    nothing numeric is left, which keeps "not present" apart from an
    explicit zero.
    """
    if amount is None:
        return None

    if isinstance(amount, bool):
        return None

    if isinstance(amount, (int, float)):
        return float(amount)

    cleaned = re.sub(r'[^\d.-]', '', str(amount))
    if not cleaned:
        return None

    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_date(value: str | None, date_format: str) -> date | None:
    """
    Parse a date cell according to a bank's declared layout.

    Supported layouts: DD/MM/YYYY, DD-MM-YYYY, DD-MMM-YYYY and YYYY-MM-DD.
    Falls back to a generic parse when the declared layout does not fit.
    """
    if not value:
        return None

    value = value.strip()
    parsed = None

    if date_format in ('DD/MM/YYYY', 'DD-MM-YYYY'):
        parts = re.split(r'[/-]', value)
        if len(parts) == 3 and all(p.isdigit() for p in parts) and len(parts[2]) == 4:
            parsed = _safe_date(int(parts[2]), int(parts[1]), int(parts[0]))
    elif date_format == 'DD-MMM-YYYY':
        parts = value.split('-')
        if len(parts) == 3 and parts[0].isdigit() and len(parts[2]) == 4 and parts[2].isdigit():
            month = MONTH_ABBREVIATIONS.get(parts[1].lower())
            if month is not None:
                parsed = _safe_date(int(parts[2]), month, int(parts[0]))
    elif date_format == 'YYYY-MM-DD':
        parsed = _parse_iso(value)

    if parsed is not None:
        return parsed

    return _parse_generic(value)


def clean_cell(value: Any) -> str:
    """Trim whitespace around a CSV cell; quoting is already undone by the reader."""
    if value is None:
        return ""
    return str(value).strip()


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _parse_iso(value: str) -> date | None:
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
    except ValueError:
        return None


def _parse_generic(value: str) -> date | None:
    parsed = _parse_iso(value)
    if parsed is not None:
        return parsed

    for fmt in FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue

    return None
