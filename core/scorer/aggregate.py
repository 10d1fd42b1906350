#!/usr/bin/env python3
"""
Score Aggregation - Weighted combination of sub-scores into a total.

    raw_total   = skills*w.skills + title*w.title + seniority*w.seniority
                  + recency*w.recency - gap_penalty*w.gaps
    total_score = clamp(raw_total / sum(w), 0, 100)

Dividing by sum(w) keeps the total on the 0..100 scale for any non-negative
weight vector, whether or not it sums to 1.0.
"""

from typing import Any, Dict, List, Optional
import logging

from core.scorer.models import ScoreBreakdown, ScoreWeights
from core.scorer.explanation import ExplanationContext, build_explanation

logger = logging.getLogger(__name__)

SCORE_PRECISION = 2


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _sub_score(name: str, value: Any) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid %s=%r; defaulting to 0.0", name, value)
        return 0.0
    if v != v:  # NaN
        logger.warning("Invalid %s=NaN; defaulting to 0.0", name)
        return 0.0
    clamped = _clamp(v, 0.0, 100.0)
    if clamped != v:
        logger.warning("Corrected %s from %r to %r", name, v, clamped)
    return clamped


def _round(x: float) -> float:
    return round(x, SCORE_PRECISION)


class ScoreAggregator:
    """Combines sub-scores and the gap penalty under a caller-supplied weight vector."""

    def aggregate(
        self,
        skill_match_score: float,
        title_score: float,
        seniority_score: float,
        recency_score: float,
        gap_penalty: float,
        weights: ScoreWeights,
        missing_must_have: Optional[List[str]] = None,
        context: Optional[ExplanationContext] = None,
    ) -> ScoreBreakdown:
        if not isinstance(weights, ScoreWeights):
            weights = ScoreWeights.from_dict(weights)

        skills = _sub_score("skill_match_score", skill_match_score)
        title = _sub_score("title_score", title_score)
        seniority = _sub_score("seniority_score", seniority_score)
        recency = _sub_score("recency_score", recency_score)
        gaps = _sub_score("gap_penalty", gap_penalty)

        contributions: Dict[str, float] = {
            'skills': skills * weights.skills,
            'title': title * weights.title,
            'seniority': seniority * weights.seniority,
            'recency': recency * weights.recency,
        }
        gap_deduction = gaps * weights.gaps
        raw_total = sum(contributions.values()) - gap_deduction
        total = _round(_clamp(raw_total / weights.total, 0.0, 100.0))

        missing = list(missing_must_have or [])
        explanation = build_explanation(
            context or ExplanationContext(),
            total_score=total,
            title_score=title,
            gap_penalty=gaps,
            missing_must_have=missing,
            contributions=contributions,
        )

        components: Dict[str, Any] = {
            'weighted': {k: v / weights.total for k, v in contributions.items()},
            'gap_deduction': gap_deduction / weights.total,
            'raw_total': raw_total,
            'weight_sum': weights.total,
        }

        logger.debug(
            "Aggregated total %.2f (skills=%.1f, title=%.1f, seniority=%.1f, recency=%.1f, gaps=%.1f)",
            total, skills, title, seniority, recency, gaps
        )

        return ScoreBreakdown(
            total_score=total,
            skill_match_score=_round(skills),
            title_score=_round(title),
            seniority_score=_round(seniority),
            recency_score=_round(recency),
            gap_penalty=_round(gaps),
            missing_must_have=missing,
            explanation=explanation,
            weights=weights,
            components=components,
        )
