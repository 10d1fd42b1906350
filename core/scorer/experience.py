#!/usr/bin/env python3
"""
Experience Scores - Seniority (years of experience) and recency (how long ago
the last role ended) mapped onto 0..100.

Unknown inputs score 0: they contribute nothing, and are not penalized again
elsewhere.
"""

from datetime import date
from typing import Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta

# (minimum years, score), checked top-down
SENIORITY_BANDS: Sequence[Tuple[float, float]] = (
    (8.0, 100.0),
    (5.0, 85.0),
    (3.0, 70.0),
    (1.0, 55.0),
    (0.0, 30.0),
)

# (maximum months since last role ended, score), checked top-down
RECENCY_BANDS: Sequence[Tuple[int, float]] = (
    (1, 100.0),
    (3, 90.0),
    (6, 80.0),
    (12, 70.0),
    (24, 50.0),
)
RECENCY_FLOOR = 30.0


def seniority_score(years_experience: Optional[float]) -> float:
    if years_experience is None:
        return 0.0
    try:
        years = float(years_experience)
    except (TypeError, ValueError):
        return 0.0
    for min_years, score in SENIORITY_BANDS:
        if years >= min_years:
            return score
    return 0.0


def months_between(start: date, end: date) -> int:
    """Whole months from start to end; 0 if end precedes start."""
    if end <= start:
        return 0
    diff = relativedelta(end, start)
    return diff.years * 12 + diff.months


def recency_score(last_role_end: Optional[date], as_of: date) -> float:
    if last_role_end is None:
        return 0.0
    months = months_between(last_role_end, as_of)
    for max_months, score in RECENCY_BANDS:
        if months <= max_months:
            return score
    return RECENCY_FLOOR


def last_role_end(timeline: Sequence, as_of: date) -> Optional[date]:
    """End date of the most recently ended role; ongoing roles end at as_of."""
    latest = None
    for entry in timeline or []:
        end = as_of if getattr(entry, 'is_current', False) else getattr(entry, 'end_date', None)
        if end is None:
            continue
        if latest is None or end > latest:
            latest = end
    return latest
