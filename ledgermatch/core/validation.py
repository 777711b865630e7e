# ledgermatch/core/validation.py

"""
Pre-commit checks for a selected match.

Runs after scoring, before a reviewer or an automated job records the
pairing. Only a direction mismatch makes a match invalid; large amount
or date gaps are reported as warnings.
"""

from ledgermatch.models import ImportedTransaction, MatchCandidate, MatchValidation

# Percent of the candidate amount
MAX_AMOUNT_DIFFERENCE_PERCENT = 10

MAX_DATE_DIFFERENCE_DAYS = 30


def validate_match(
    transaction: ImportedTransaction,
    candidate: MatchCandidate,
) -> MatchValidation:
    """Check a (transaction, candidate) pair before it is applied."""
    errors: list[str] = []
    warnings: list[str] = []

    if transaction.is_outgoing != candidate.is_outgoing:
        errors.append("Transaction direction does not match candidate type")

    amount_difference = abs(transaction.amount - candidate.amount)
    percent_difference = amount_difference / candidate.amount * 100
    if percent_difference > MAX_AMOUNT_DIFFERENCE_PERCENT:
        warnings.append(f"Large amount difference: {percent_difference:.1f}%")

    days_difference = abs((transaction.transaction_date - candidate.date).days)
    if days_difference > MAX_DATE_DIFFERENCE_DAYS:
        warnings.append(f"Large date difference: {days_difference} days")

    return MatchValidation(valid=not errors, errors=errors, warnings=warnings)
