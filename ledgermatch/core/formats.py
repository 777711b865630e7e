# ledgermatch/core/formats.py

"""
Known bank statement layouts and header-based format detection.
"""

import csv
import logging

from ledgermatch.models import (
    AmountWithTypeColumns,
    BankFormat,
    DebitCreditColumns,
)
from ledgermatch.core.csv_reader import read_header

logger = logging.getLogger(__name__)

GENERIC_FORMAT_KEY = "GENERIC"

# Share of a format's required columns that must appear in the header
DETECTION_THRESHOLD = 0.7


# ============================================
# Registry
# ============================================

BANK_FORMATS: dict[str, BankFormat] = {
    "MAYBANK": BankFormat(
        name="Maybank",
        date_column="Date",
        description_column="Description",
        reference_column="Reference",
        amounts=DebitCreditColumns(debit_column="Debit", credit_column="Credit"),
        balance_column="Balance",
        date_format="DD/MM/YYYY",
        skip_rows=1,
    ),
    "CIMB": BankFormat(
        name="CIMB Bank",
        date_column="Transaction Date",
        description_column="Description",
        reference_column="Reference No",
        amounts=AmountWithTypeColumns(amount_column="Amount", type_column="Dr/Cr"),
        balance_column="Balance",
        date_format="DD-MM-YYYY",
        skip_rows=2,
    ),
    "PUBLIC_BANK": BankFormat(
        name="Public Bank",
        date_column="Date",
        description_column="Transaction Details",
        amounts=DebitCreditColumns(debit_column="Withdrawal", credit_column="Deposit"),
        balance_column="Balance",
        date_format="DD/MM/YYYY",
        skip_rows=1,
    ),
    "HONG_LEONG": BankFormat(
        name="Hong Leong Bank",
        date_column="Date",
        description_column="Description",
        reference_column="Ref No",
        amounts=DebitCreditColumns(debit_column="Debit Amount", credit_column="Credit Amount"),
        balance_column="Balance",
        date_format="DD-MMM-YYYY",
        skip_rows=1,
    ),
    "RHB": BankFormat(
        name="RHB Bank",
        date_column="Transaction Date",
        description_column="Transaction Description",
        amounts=AmountWithTypeColumns(amount_column="Amount", type_column="Transaction Type"),
        balance_column="Available Balance",
        date_format="DD/MM/YYYY",
        skip_rows=1,
    ),
    GENERIC_FORMAT_KEY: BankFormat(
        name="Generic Format",
        date_column="date",
        description_column="description",
        reference_column="reference",
        amounts=DebitCreditColumns(debit_column="debit", credit_column="credit"),
        balance_column="balance",
        date_format="YYYY-MM-DD",
        skip_rows=1,
    ),
}


def get_bank_format(key: str) -> BankFormat:
    """Look up a registered format by key (case-insensitive)."""
    try:
        return BANK_FORMATS[key.strip().upper()]
    except KeyError:
        raise KeyError(f"Unknown bank format: {key}") from None


# ============================================
# Detection
# ============================================

def detect_bank_format(csv_data: str) -> BankFormat | None:
    """
    Infer the statement layout from its header row.

    A column counts as present when its name and some header contain one
    another ("Transaction Date" satisfies "Date"). The first registered
    format with at least 70% of its required columns present wins; the
    generic format is returned when none does, and None when there is no
    header at all.
    """
    try:
        headers = [h.lower() for h in read_header(csv_data) if h]
    except csv.Error as e:
        logger.warning(f"Could not read statement header: {e}")
        return None

    if not headers:
        return None

    for key, bank_format in BANK_FORMATS.items():
        if key == GENERIC_FORMAT_KEY:
            continue

        required = [c.lower() for c in bank_format.detection_columns()]
        match_count = sum(
            1 for col in required
            if any(col in header or header in col for header in headers)
        )

        if match_count >= len(required) * DETECTION_THRESHOLD:
            logger.info(f"Detected bank format {bank_format.name} ({match_count}/{len(required)} columns)")
            return bank_format

    logger.info("No known bank format matched; using generic format")
    return BANK_FORMATS[GENERIC_FORMAT_KEY]
