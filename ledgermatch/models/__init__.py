# ledgermatch/models/__init__.py

from ledgermatch.models.statement import (
    AmountColumn,
    AmountWithTypeColumns,
    BankFormat,
    DateFormat,
    DebitCreditColumns,
    ImportedTransaction,
    ImportResult,
    ImportSummary,
)
from ledgermatch.models.match import (
    AutoMatchResult,
    CandidateType,
    GroupedMatches,
    MatchCandidate,
    MatchingConfig,
    MatchResult,
    MatchScore,
    MatchSummary,
    MatchTier,
    MatchValidation,
    OUTGOING_CANDIDATE_TYPES,
)

__all__ = [
    # Statement
    "AmountColumn",
    "AmountWithTypeColumns",
    "BankFormat",
    "DateFormat",
    "DebitCreditColumns",
    "ImportedTransaction",
    "ImportResult",
    "ImportSummary",
    # Match
    "AutoMatchResult",
    "CandidateType",
    "GroupedMatches",
    "MatchCandidate",
    "MatchingConfig",
    "MatchResult",
    "MatchScore",
    "MatchSummary",
    "MatchTier",
    "MatchValidation",
    "OUTGOING_CANDIDATE_TYPES",
]
