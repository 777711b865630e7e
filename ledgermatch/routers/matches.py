# ledgermatch/routers/matches.py

"""
Matching routes.

The endpoint that runs the matching engine, plus match validation and
tier grouping for review screens.
"""

from datetime import date
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ValidationError
from typing import Any, Optional

from ledgermatch.core.matching import (
    auto_match_transactions,
    filter_candidates_by_date_range,
    group_matches_by_confidence,
    resolve_config,
)
from ledgermatch.core.validation import validate_match
from ledgermatch.models import (
    AutoMatchResult,
    GroupedMatches,
    ImportedTransaction,
    MatchCandidate,
    MatchResult,
    MatchValidation,
)
from ledgermatch.config import get_settings

settings = get_settings()
router = APIRouter()


class AutoMatchRequest(BaseModel):
    transactions: list[ImportedTransaction]
    candidates: list[MatchCandidate]
    config: Optional[dict[str, Any]] = None
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    buffer_days: Optional[int] = None


class ValidateMatchRequest(BaseModel):
    transaction: ImportedTransaction
    candidate: MatchCandidate


class GroupMatchesRequest(BaseModel):
    matches: list[MatchResult]
    config: Optional[dict[str, Any]] = None


def _config_or_422(config: Optional[dict[str, Any]]):
    try:
        return resolve_config(config)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False, include_input=False),
        )


# ============================================
# Main Matching Endpoint
# ============================================

@router.post("/auto", response_model=AutoMatchResult)
async def run_auto_match(request: AutoMatchRequest):
    """
    Match transactions against candidate documents.

    1. Optionally narrows candidates to the statement period plus a buffer
    2. Runs the matching engine
    """
    config = _config_or_422(request.config)
    candidates = request.candidates

    if request.period_start and request.period_end:
        if request.period_end < request.period_start:
            raise HTTPException(
                status_code=400,
                detail="period_end must not be before period_start"
            )

        buffer_days = request.buffer_days
        if buffer_days is None:
            buffer_days = settings.date_range_buffer_days

        candidates = filter_candidates_by_date_range(
            candidates,
            request.period_start,
            request.period_end,
            buffer_days,
        )

    return auto_match_transactions(
        request.transactions,
        candidates,
        config,
        max_workers=settings.match_workers,
    )


# ============================================
# Review helpers
# ============================================

@router.post("/validate", response_model=MatchValidation)
async def validate(request: ValidateMatchRequest):
    """Sanity-check a pairing before it is committed."""
    return validate_match(request.transaction, request.candidate)


@router.post("/group", response_model=GroupedMatches)
async def group(request: GroupMatchesRequest):
    """Bucket matches by confidence tier."""
    config = _config_or_422(request.config)
    return group_matches_by_confidence(request.matches, config)
