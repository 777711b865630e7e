# ledgermatch/models/match.py

import datetime
from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict, Field

from ledgermatch.models.statement import ImportedTransaction


# ============================================
# Candidates
# ============================================

CandidateType = Literal["PAYMENT", "RECEIPT", "BILL", "INVOICE"]

# Document types that represent money leaving the account
OUTGOING_CANDIDATE_TYPES: frozenset[str] = frozenset({"PAYMENT", "BILL"})


class MatchCandidate(BaseModel):
    """An accounting document a bank transaction may be reconciled against."""

    model_config = ConfigDict(frozen=True)

    type: CandidateType
    id: str
    number: str
    date: datetime.date
    amount: float = Field(gt=0)
    description: str = ""
    supplier_id: Optional[str] = None
    customer_id: Optional[str] = None
    reference: Optional[str] = None

    @property
    def is_outgoing(self) -> bool:
        return self.type in OUTGOING_CANDIDATE_TYPES


# ============================================
# Matching Configuration
# ============================================

class MatchingConfig(BaseModel):
    """Thresholds and weights for one matching run."""

    model_config = ConfigDict(frozen=True)

    # Confidence thresholds
    auto_match_threshold: float = Field(default=90, ge=0, le=100)
    suggest_match_threshold: float = Field(default=70, ge=0, le=100)

    # Tolerances
    amount_tolerance: float = Field(default=0.01, ge=0)
    date_tolerance: int = Field(default=7, ge=0, description="Days")

    # Weights
    exact_amount_weight: float = Field(default=40, ge=0)
    date_proximity_weight: float = Field(default=20, ge=0)
    reference_match_weight: float = Field(default=25, ge=0)
    description_match_weight: float = Field(default=15, ge=0)

    # Description matching
    description_similarity_threshold: float = Field(default=0.6, ge=0, le=1)
    enable_fuzzy_matching: bool = True


# ============================================
# Scores and Matches
# ============================================

MatchTier = Literal["automatic", "suggested", "unmatched"]


class MatchScore(BaseModel):
    """Weighted score of one (transaction, candidate) pair."""

    confidence: float = Field(ge=0, le=100)
    reasons: list[str] = Field(default_factory=list)
    amount_difference: float
    date_difference: int


class MatchResult(BaseModel):
    """The selected candidate for a transaction."""

    model_config = ConfigDict(frozen=True)

    transaction_id: str
    candidate: MatchCandidate
    confidence: float = Field(ge=0, le=100)
    match_reasons: list[str] = Field(default_factory=list)
    amount_difference: float
    date_difference: int


class MatchSummary(BaseModel):
    """Totals for one auto-match run."""

    total_transactions: int
    automatic_matches: int
    suggested_matches: int
    unmatched: int
    average_confidence: float


class AutoMatchResult(BaseModel):
    """Result of matching a batch of transactions."""

    matches: list[MatchResult] = Field(default_factory=list)
    unmatched: list[ImportedTransaction] = Field(default_factory=list)
    summary: MatchSummary


class GroupedMatches(BaseModel):
    """Matches bucketed by confidence tier."""

    automatic: list[MatchResult] = Field(default_factory=list)
    suggested: list[MatchResult] = Field(default_factory=list)
    low_confidence: list[MatchResult] = Field(default_factory=list)


# ============================================
# Validation
# ============================================

class MatchValidation(BaseModel):
    """Pre-commit check of a selected pair."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
