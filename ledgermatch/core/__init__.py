# ledgermatch/core/__init__.py

from ledgermatch.core.importer import (
    import_bank_transactions,
    find_duplicate_transactions,
    generate_import_batch_id,
)
from ledgermatch.core.formats import BANK_FORMATS, detect_bank_format, get_bank_format
from ledgermatch.core.matching import (
    auto_match_transactions,
    classify_match,
    filter_candidates_by_date_range,
    filter_candidates_by_direction,
    find_best_match,
    group_matches_by_confidence,
    resolve_config,
    transaction_id,
)
from ledgermatch.core.confidence import calculate_match_score
from ledgermatch.core.similarity import string_similarity
from ledgermatch.core.validation import validate_match
from ledgermatch.core.normalizers import parse_amount, parse_date

__all__ = [
    "import_bank_transactions",
    "find_duplicate_transactions",
    "generate_import_batch_id",
    "BANK_FORMATS",
    "detect_bank_format",
    "get_bank_format",
    "auto_match_transactions",
    "classify_match",
    "filter_candidates_by_date_range",
    "filter_candidates_by_direction",
    "find_best_match",
    "group_matches_by_confidence",
    "resolve_config",
    "transaction_id",
    "calculate_match_score",
    "string_similarity",
    "validate_match",
    "parse_amount",
    "parse_date",
]
