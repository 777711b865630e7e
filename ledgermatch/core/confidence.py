# ledgermatch/core/confidence.py

"""
Confidence scoring for transaction matching.

Four weighted factors, each worth up to its configured weight:
- Amount match:    40 by default
- Date proximity:  20
- Reference:       25
- Description:     15

Confidence is the earned total over the sum of weights, scaled to 0-100,
so configs whose weights do not add up to 100 still score on that scale.
"""

from ledgermatch.models import (
    ImportedTransaction,
    MatchCandidate,
    MatchingConfig,
    MatchScore,
)
from ledgermatch.core.similarity import common_keywords, string_similarity


def calculate_match_score(
    transaction: ImportedTransaction,
    candidate: MatchCandidate,
    config: MatchingConfig,
) -> MatchScore:
    """
    Score how likely a bank transaction and a document are the same payment.

    Returns a MatchScore with the confidence, human-readable reasons for
    every factor that contributed, and the raw amount and date deltas.
    """
    reasons: list[str] = []

    amount_difference = abs(transaction.amount - candidate.amount)
    date_difference = abs((transaction.transaction_date - candidate.date).days)

    total = (
        _score_amount(amount_difference, candidate.amount, config, reasons)
        + _score_date(date_difference, config, reasons)
        + _score_reference(transaction.reference, candidate, config, reasons)
        + _score_description(transaction.description, candidate.description, config, reasons)
    )
    max_possible = (
        config.exact_amount_weight
        + config.date_proximity_weight
        + config.reference_match_weight
        + config.description_match_weight
    )

    confidence = (total / max_possible * 100) if max_possible > 0 else 0.0

    return MatchScore(
        confidence=min(round(confidence, 2), 100.0),
        reasons=reasons,
        amount_difference=amount_difference,
        date_difference=date_difference,
    )


def _score_amount(
    difference: float,
    candidate_amount: float,
    config: MatchingConfig,
    reasons: list[str],
) -> float:
    weight = config.exact_amount_weight

    if difference <= config.amount_tolerance:
        reasons.append("Exact amount match")
        return weight
    elif difference <= candidate_amount * 0.01:
        reasons.append("Close amount match (within 1%)")
        return weight * 0.8
    elif difference <= candidate_amount * 0.05:
        reasons.append("Approximate amount match (within 5%)")
        return weight * 0.5

    return 0.0


def _score_date(days: int, config: MatchingConfig, reasons: list[str]) -> float:
    weight = config.date_proximity_weight

    if days <= 1:
        reasons.append("Same or next day")
        return weight
    elif config.date_tolerance > 0 and days <= config.date_tolerance:
        reasons.append(f"Within {days} days")
        return weight * (1 - days / config.date_tolerance)

    return 0.0


def _score_reference(
    reference: str | None,
    candidate: MatchCandidate,
    config: MatchingConfig,
    reasons: list[str],
) -> float:
    if not reference:
        return 0.0

    weight = config.reference_match_weight
    ours = reference.lower()

    if candidate.reference:
        theirs = candidate.reference.lower()
        if ours == theirs:
            reasons.append("Exact reference match")
            return weight
        if ours in theirs or theirs in ours:
            reasons.append("Partial reference match")
            return weight * 0.7
        return 0.0

    number = candidate.number.lower()
    if number and (number in ours or ours in number):
        reasons.append("Reference matches document number")
        return weight * 0.8

    return 0.0


def _score_description(
    description: str,
    candidate_description: str,
    config: MatchingConfig,
    reasons: list[str],
) -> float:
    weight = config.description_match_weight
    ours = description.lower()
    theirs = candidate_description.lower()

    if config.enable_fuzzy_matching:
        similarity = string_similarity(ours, theirs)
        if similarity >= config.description_similarity_threshold:
            reasons.append(f"Description similarity: {round(similarity * 100)}%")
            return weight * similarity
        return 0.0

    # Keyword overlap
    shared, word_count = common_keywords(ours, theirs)
    if shared:
        reasons.append(f"Common keywords: {', '.join(shared)}")
        return weight * len(shared) / word_count

    return 0.0
