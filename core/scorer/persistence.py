#!/usr/bin/env python3
"""
Persistence Operations - Database operations for candidate scores.

Handles saving scored candidates, creating or updating the single Score row
per (candidate, job) pair. Deterministic fields are overwritten in place;
manual_rank and the AI ranking fields are left alone unless invalidation is
requested.
"""

import logging
from typing import Dict, Optional

from sqlalchemy import func

from database.models import Score
from core.scorer.models import ScoredCandidate

logger = logging.getLogger(__name__)


def _to_float(value):
    """Convert value to native Python float for database compatibility."""
    if value is None:
        return 0.0
    return float(value)


def _apply_record(score: Score, record: Dict) -> None:
    score.total_score = _to_float(record['total_score'])
    score.skill_match_score = _to_float(record['skill_match_score'])
    score.title_score = _to_float(record['title_score'])
    score.seniority_score = _to_float(record['seniority_score'])
    score.recency_score = _to_float(record['recency_score'])
    score.gap_penalty = _to_float(record['gap_penalty'])
    score.missing_must_have = list(record['missing_must_have'])
    score.explanation = record['explanation']
    score.weights = dict(record['weights'])


def save_score_to_db(
    scored: ScoredCandidate,
    repo,
    existing: Optional[Score] = None,
    invalidate_ai_rank: bool = False,
) -> Score:
    """
    Save a scored candidate to the database.

    Args:
        scored: ScoredCandidate with candidate_id and job_id set
        repo: Any repository bound to the session (ScoreRepository preferred)
        existing: Pre-fetched Score row for the pair, skips the lookup
        invalidate_ai_rank: Clear ai_rank / ai_rank_reason on an existing row

    Returns:
        Score record that was created or updated
    """
    record = scored.breakdown.to_record()

    if existing is None:
        existing = repo.db.query(Score).filter(
            Score.candidate_id == scored.candidate_id,
            Score.job_id == scored.job_id
        ).one_or_none()

    if existing:
        score = existing
        _apply_record(score, record)
        if invalidate_ai_rank:
            score.ai_rank = None
            score.ai_rank_reason = None
        score.updated_at = func.now()
    else:
        score = Score(
            candidate_id=scored.candidate_id,
            job_id=scored.job_id,
        )
        _apply_record(score, record)
        repo.db.add(score)

    repo.db.flush()
    logger.debug(
        f"Saved score {score.total_score:.2f} for candidate {scored.candidate_id} "
        f"on job {scored.job_id}"
    )
    return score
