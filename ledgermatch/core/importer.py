# ledgermatch/core/importer.py

"""
Bank statement import.

Turns raw CSV statement text into normalized transactions. Every row is
parsed and validated on its own: a bad row becomes an error message,
never an exception, and the rest of the batch still imports.
"""

import csv
import logging
import secrets
import string
from datetime import date, datetime, timezone
from typing import Optional

from ledgermatch.models import (
    AmountColumn,
    AmountWithTypeColumns,
    BankFormat,
    DebitCreditColumns,
    ImportedTransaction,
    ImportResult,
    ImportSummary,
)
from ledgermatch.core.csv_reader import read_records, to_row
from ledgermatch.core.normalizers import parse_amount, parse_date
from ledgermatch.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Matched as substrings of the type label, debit words first
DEBIT_INDICATORS = ("DR", "DEBIT", "WITHDRAWAL")
CREDIT_INDICATORS = ("CR", "CREDIT", "DEPOSIT")


class RowError(ValueError):
    """A statement row that cannot be turned into a transaction."""


def import_bank_transactions(
    csv_data: str,
    bank_format: BankFormat,
    bank_account_id: str,
    import_batch_id: str,
    today: Optional[date] = None,
) -> ImportResult:
    """
    Import statement text laid out as `bank_format`.

    Rows are validated independently; duplicates within the batch are
    kept out of the accepted list and reported as warnings. `success` is
    False only when the statement is empty, its header lacks the format's
    required columns, or at least one row was rejected.
    """
    if today is None:
        today = date.today()

    try:
        records = read_records(csv_data)
    except csv.Error as e:
        return _failed([f"CSV parsing failed: {e}"], bank_account_id, import_batch_id)

    if not records:
        return _failed(["CSV file is empty"], bank_account_id, import_batch_id)

    headers = records[0]

    # ============================================
    # Check the header before touching any row
    # ============================================
    missing = [c for c in bank_format.required_columns() if c not in headers]
    if missing:
        logger.warning(
            f"Statement for {bank_account_id} does not fit format {bank_format.name}: "
            f"missing {', '.join(missing)}"
        )
        return _failed(
            [f"Missing required columns for {bank_format.name}: {', '.join(missing)}"],
            bank_account_id,
            import_batch_id,
        )

    warnings: list[str] = []
    absent = [c for c in bank_format.optional_columns() if c not in headers]
    if absent:
        warnings.append(f"Optional columns not found and will be ignored: {', '.join(absent)}")

    # ============================================
    # Parse and validate rows
    # ============================================
    data_rows = records[bank_format.skip_rows:]
    if not data_rows:
        warnings.append("No transaction rows found")

    errors: list[str] = []
    accepted: list[tuple[int, ImportedTransaction]] = []

    for index, values in enumerate(data_rows):
        row_number = index + bank_format.skip_rows + 1
        row = to_row(headers, values)

        try:
            fields = parse_transaction_row(row, bank_format)
        except RowError as e:
            errors.append(f"Row {row_number}: {e}")
            continue

        row_errors, row_warnings = validate_transaction(fields, row_number, today)
        warnings.extend(row_warnings)
        if row_errors:
            errors.extend(row_errors)
            continue

        accepted.append((row_number, ImportedTransaction(**fields)))

    # ============================================
    # Drop duplicates, first occurrence wins
    # ============================================
    duplicate_indexes = set(find_duplicate_transactions([t for _, t in accepted]))
    transactions = []
    for index, (row_number, transaction) in enumerate(accepted):
        if index in duplicate_indexes:
            warnings.append(f"Row {row_number}: Duplicate transaction detected")
        else:
            transactions.append(transaction)

    summary = ImportSummary(
        total_rows=len(data_rows),
        valid_transactions=len(transactions),
        duplicates=len(duplicate_indexes),
        errors=len(errors),
    )

    logger.info(
        f"Imported {summary.valid_transactions}/{summary.total_rows} rows for account "
        f"{bank_account_id} (batch {import_batch_id}): {summary.duplicates} duplicates, "
        f"{summary.errors} errors"
    )

    return ImportResult(
        success=not errors,
        transactions=transactions,
        errors=errors,
        warnings=warnings,
        summary=summary,
        bank_account_id=bank_account_id,
        import_batch_id=import_batch_id,
    )


def parse_transaction_row(row: dict[str, str], bank_format: BankFormat) -> dict:
    """
    Extract transaction fields from one keyed row.

    Raises RowError when the date or description is missing or the date
    cannot be parsed. Amount signs are left as found so validation can
    reject negative debit/credit columns.
    """
    date_str = row.get(bank_format.date_column, "")
    if not date_str:
        raise RowError(f"Missing date in column '{bank_format.date_column}'")

    transaction_date = parse_date(date_str, bank_format.date_format)
    if transaction_date is None:
        raise RowError(f"Invalid date format: {date_str}")

    description = row.get(bank_format.description_column, "").strip()
    if not description:
        raise RowError(f"Missing description in column '{bank_format.description_column}'")

    debit_amount, credit_amount = derive_amounts(row, bank_format)

    balance = None
    if bank_format.balance_column:
        balance = parse_amount(row.get(bank_format.balance_column))

    return {
        "transaction_date": transaction_date,
        "description": description,
        "reference": _optional(row, bank_format.reference_column),
        "debit_amount": debit_amount,
        "credit_amount": credit_amount,
        "balance": balance,
        "transaction_type": _optional(row, bank_format.type_column),
        "raw_data": dict(row),
    }


def derive_amounts(row: dict[str, str], bank_format: BankFormat) -> tuple[float, float]:
    """Return (debit, credit) according to the format's amount columns."""
    amounts = bank_format.amounts

    if isinstance(amounts, DebitCreditColumns):
        debit = parse_amount(row.get(amounts.debit_column)) or 0.0
        credit = parse_amount(row.get(amounts.credit_column)) or 0.0
        return debit, credit

    if isinstance(amounts, AmountWithTypeColumns):
        amount = parse_amount(row.get(amounts.amount_column)) or 0.0
        indicator = row.get(amounts.type_column, "").strip().upper()

        if any(word in indicator for word in DEBIT_INDICATORS):
            return abs(amount), 0.0
        if any(word in indicator for word in CREDIT_INDICATORS):
            return 0.0, abs(amount)
        return _split_signed(amount)

    if isinstance(amounts, AmountColumn):
        return _split_signed(parse_amount(row.get(amounts.amount_column)) or 0.0)

    raise RowError(f"Unsupported amount columns: {amounts!r}")


def validate_transaction(
    fields: dict,
    row_number: int,
    today: date,
) -> tuple[list[str], list[str]]:
    """
    Check a parsed row.

    Returns (errors, warnings). Errors reject the row; warnings keep it.
    """
    errors: list[str] = []
    warnings: list[str] = []

    transaction_date: date = fields["transaction_date"]
    debit = fields["debit_amount"]
    credit = fields["credit_amount"]
    description: str = fields["description"]

    if transaction_date > today:
        warnings.append(f"Row {row_number}: Transaction date is in the future")

    if transaction_date < _years_before(today, settings.stale_transaction_years):
        warnings.append(
            f"Row {row_number}: Transaction date is more than "
            f"{settings.stale_transaction_years} years old"
        )

    if debit == 0 and credit == 0:
        errors.append(f"Row {row_number}: Transaction must have either debit or credit amount")

    if debit < 0:
        errors.append(f"Row {row_number}: Debit amount cannot be negative")

    if credit < 0:
        errors.append(f"Row {row_number}: Credit amount cannot be negative")

    if debit > 0 and credit > 0:
        errors.append(f"Row {row_number}: Transaction cannot have both debit and credit amounts")

    if len(description) > settings.max_description_length:
        warnings.append(
            f"Row {row_number}: Description is very long ({len(description)} characters)"
        )

    return errors, warnings


def duplicate_key(transaction: ImportedTransaction) -> tuple[str, str, float, float]:
    """Identity of a statement line within one import batch."""
    return (
        transaction.transaction_date.isoformat(),
        transaction.description,
        transaction.debit_amount,
        transaction.credit_amount,
    )


def find_duplicate_transactions(transactions: list[ImportedTransaction]) -> list[int]:
    """Indexes of transactions whose key was already seen earlier in the list."""
    seen: set[tuple] = set()
    duplicates: list[int] = []

    for index, transaction in enumerate(transactions):
        key = duplicate_key(transaction)
        if key in seen:
            duplicates.append(index)
        else:
            seen.add(key)

    return duplicates


def generate_import_batch_id(bank_account_id: str, now: Optional[datetime] = None) -> str:
    """Build a batch id such as IMPORT-12345678-2024-01-15T10-30-00-000000-a1b2c3."""
    if now is None:
        now = datetime.now(timezone.utc)

    timestamp = now.replace(tzinfo=None).isoformat(timespec="microseconds")
    timestamp = timestamp.replace(":", "-").replace(".", "-")
    alphabet = string.ascii_lowercase + string.digits
    suffix = "".join(secrets.choice(alphabet) for _ in range(6))
    return f"IMPORT-{bank_account_id[-8:]}-{timestamp}-{suffix}"


def _split_signed(amount: float) -> tuple[float, float]:
    if amount < 0:
        return abs(amount), 0.0
    return 0.0, amount


def _optional(row: dict[str, str], column: Optional[str]) -> Optional[str]:
    if not column:
        return None
    return row.get(column, "").strip() or None


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # 29 February
        return day.replace(year=day.year - years, day=28)


def _failed(errors: list[str], bank_account_id: str, import_batch_id: str) -> ImportResult:
    return ImportResult(
        success=False,
        errors=errors,
        summary=ImportSummary(errors=len(errors)),
        bank_account_id=bank_account_id,
        import_batch_id=import_batch_id,
    )
