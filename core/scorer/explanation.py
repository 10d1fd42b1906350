#!/usr/bin/env python3
"""
Explanation Builder - Templated natural-language summary of a score.

Always built from the sub-scores of the current aggregation.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

SUB_SCORE_LABELS: Dict[str, str] = {
    'skills': 'skill coverage',
    'title': 'role title alignment',
    'seniority': 'seniority',
    'recency': 'recent activity',
}


@dataclass
class ExplanationContext:
    """Who and what the explanation talks about."""
    candidate_name: Optional[str] = None
    job_title: Optional[str] = None
    years_experience: Optional[float] = None
    last_role_title: Optional[str] = None


def match_quality(total_score: float) -> str:
    if total_score >= 80:
        return "excellent"
    if total_score >= 70:
        return "very good"
    if total_score >= 60:
        return "good"
    if total_score >= 50:
        return "fair"
    return "poor"


def _format_years(years: float) -> str:
    return f"{years:g}"


def top_drivers(contributions: Dict[str, float], limit: int = 2) -> List[str]:
    """Sub-score keys with the largest positive weighted contribution."""
    ranked = sorted(
        ((key, value) for key, value in contributions.items() if value > 0),
        key=lambda kv: (-kv[1], kv[0])
    )
    return [key for key, _ in ranked[:limit]]


def build_explanation(
    context: ExplanationContext,
    total_score: float,
    title_score: float,
    gap_penalty: float,
    missing_must_have: List[str],
    contributions: Dict[str, float],
) -> str:
    parts: List[str] = []

    name = context.candidate_name or "The candidate"
    position = f"the {context.job_title} position" if context.job_title else "this position"
    parts.append(f"{name} is a {match_quality(total_score)} match for {position} ({total_score:.0f}/100).")

    drivers = top_drivers(contributions)
    if drivers:
        labels = [SUB_SCORE_LABELS[d] for d in drivers]
        parts.append(f"The score is driven mainly by {' and '.join(labels)}.")

    if not missing_must_have:
        parts.append("The candidate meets all required skills.")
    else:
        parts.append(
            f"However, they are missing {len(missing_must_have)} critical skill(s): "
            f"{', '.join(missing_must_have)}."
        )

    if context.years_experience is None:
        parts.append("Years of experience could not be determined from the resume.")
    elif context.years_experience >= 5:
        parts.append(
            f"With {_format_years(context.years_experience)} years of experience, "
            f"they demonstrate strong seniority for this role."
        )
    else:
        parts.append(
            f"With {_format_years(context.years_experience)} years of experience, "
            f"they may need additional mentoring."
        )

    if not context.last_role_title:
        parts.append("Their most recent role could not be identified.")
    elif title_score >= 80:
        parts.append("Their current role aligns well with the position.")
    elif title_score >= 60:
        parts.append("Their current role has some relevance to the position.")
    else:
        parts.append("Their current role differs significantly from the position.")

    if gap_penalty <= 0:
        parts.append("No significant employment gaps were detected.")
    elif gap_penalty <= 15:
        parts.append("There are minor employment gaps that should be discussed during interview.")
    else:
        parts.append("There are significant employment gaps that require clarification.")

    return ' '.join(parts)
