# ledgermatch/core/matching.py

"""
Core transaction matching engine.

Pairs imported bank transactions with accounting documents: filter the
candidates to the transaction's direction, score each one, keep the best,
and classify it against the configured thresholds.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from typing import Any, Mapping, Optional
import logging
import uuid

from ledgermatch.models import (
    AutoMatchResult,
    GroupedMatches,
    ImportedTransaction,
    MatchCandidate,
    MatchingConfig,
    MatchResult,
    MatchSummary,
    MatchTier,
)
from ledgermatch.core.confidence import calculate_match_score

logger = logging.getLogger(__name__)

# Namespace for deterministic transaction ids
TRANSACTION_NAMESPACE = uuid.UUID("6f1c2a9e-4b7d-5e3a-9c1f-2d8b7a6e5f40")

DEFAULT_DATE_BUFFER_DAYS = 30


def resolve_config(config: MatchingConfig | Mapping[str, Any] | None = None) -> MatchingConfig:
    """Documented defaults, overridden by whatever fields the caller supplied."""
    if config is None:
        return MatchingConfig()
    if isinstance(config, MatchingConfig):
        return config
    return MatchingConfig(**config)


def transaction_id(transaction: ImportedTransaction) -> str:
    """Stable id derived from the transaction's date, description and amounts."""
    key = "|".join([
        transaction.transaction_date.isoformat(),
        transaction.description,
        f"{transaction.debit_amount:.2f}",
        f"{transaction.credit_amount:.2f}",
    ])
    return f"TXN_{uuid.uuid5(TRANSACTION_NAMESPACE, key).hex}"


# ============================================
# Candidate filtering
# ============================================

def filter_candidates_by_direction(
    transaction: ImportedTransaction,
    candidates: list[MatchCandidate],
) -> list[MatchCandidate]:
    """
    Keep candidates flowing the same way as the transaction.

    Debits pair with payments and bills; credits with receipts and invoices.
    """
    return [c for c in candidates if c.is_outgoing == transaction.is_outgoing]


def filter_candidates_by_date_range(
    candidates: list[MatchCandidate],
    start_date: date,
    end_date: date,
    buffer_days: int = DEFAULT_DATE_BUFFER_DAYS,
) -> list[MatchCandidate]:
    """Drop candidates dated outside the statement period plus a buffer."""
    window_start = start_date - timedelta(days=buffer_days)
    window_end = end_date + timedelta(days=buffer_days)

    return [c for c in candidates if window_start <= c.date <= window_end]


# ============================================
# Selection
# ============================================

def find_best_match(
    transaction: ImportedTransaction,
    candidates: list[MatchCandidate],
    config: MatchingConfig,
) -> Optional[MatchResult]:
    """
    Highest-confidence candidate for one transaction, or None.

    Only a strictly higher score replaces the current best, so on ties
    the candidate listed first wins. Candidates scoring zero are never
    returned.
    """
    best: Optional[MatchResult] = None
    best_confidence = 0.0

    for candidate in filter_candidates_by_direction(transaction, candidates):
        score = calculate_match_score(transaction, candidate, config)

        if score.confidence > best_confidence:
            best_confidence = score.confidence
            best = MatchResult(
                transaction_id=transaction_id(transaction),
                candidate=candidate,
                confidence=score.confidence,
                match_reasons=score.reasons,
                amount_difference=score.amount_difference,
                date_difference=score.date_difference,
            )

    return best


def classify_match(confidence: float, config: MatchingConfig | None = None) -> MatchTier:
    """Tier a confidence score against the config's thresholds."""
    config = resolve_config(config)

    if confidence >= config.auto_match_threshold:
        return "automatic"
    elif confidence >= config.suggest_match_threshold:
        return "suggested"
    else:
        return "unmatched"


def auto_match_transactions(
    transactions: list[ImportedTransaction],
    candidates: list[MatchCandidate],
    config: MatchingConfig | Mapping[str, Any] | None = None,
    max_workers: Optional[int] = None,
) -> AutoMatchResult:
    """
    Main matching function.

    Finds the best candidate for every transaction independently. A best
    match at or above the suggestion threshold becomes a MatchResult;
    everything else is returned as unmatched. With max_workers > 1 the
    per-transaction searches run on a thread pool; results keep the
    input order either way.
    """
    config = resolve_config(config)

    def best_for(transaction: ImportedTransaction) -> Optional[MatchResult]:
        return find_best_match(transaction, candidates, config)

    if max_workers and max_workers > 1 and len(transactions) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            best_matches = list(executor.map(best_for, transactions))
    else:
        best_matches = [best_for(t) for t in transactions]

    matches: list[MatchResult] = []
    unmatched: list[ImportedTransaction] = []

    for transaction, best in zip(transactions, best_matches):
        if best is not None and best.confidence >= config.suggest_match_threshold:
            matches.append(best)
        else:
            unmatched.append(transaction)

    # ============================================
    # Calculate summary
    # ============================================
    tiers = [classify_match(m.confidence, config) for m in matches]
    average = sum(m.confidence for m in matches) / len(matches) if matches else 0.0

    summary = MatchSummary(
        total_transactions=len(transactions),
        automatic_matches=tiers.count("automatic"),
        suggested_matches=tiers.count("suggested"),
        unmatched=len(unmatched),
        average_confidence=round(average, 2),
    )

    logger.info(
        f"Matched {len(matches)}/{len(transactions)} transactions against "
        f"{len(candidates)} candidates ({summary.automatic_matches} automatic, "
        f"{summary.suggested_matches} suggested)"
    )

    return AutoMatchResult(matches=matches, unmatched=unmatched, summary=summary)


def group_matches_by_confidence(
    matches: list[MatchResult],
    config: MatchingConfig | Mapping[str, Any] | None = None,
) -> GroupedMatches:
    """Bucket matches into automatic, suggested and low-confidence tiers."""
    config = resolve_config(config)
    grouped = GroupedMatches()

    for match in matches:
        tier = classify_match(match.confidence, config)
        if tier == "automatic":
            grouped.automatic.append(match)
        elif tier == "suggested":
            grouped.suggested.append(match)
        else:
            grouped.low_confidence.append(match)

    return grouped
