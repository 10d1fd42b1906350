#!/usr/bin/env python3
"""
Penalty Calculations - Employment gap penalty.

The curve is linear and saturating: penalty = min(100, total_months * k).
One long gap and several short gaps with the same total cost the same.
The weight applied to the penalty is tuned separately through ScoreWeights.gaps,
so k is kept as a plain slope.
"""

from typing import Any, Dict, Iterable, List, Tuple
import logging

from core.config_loader import ScorerConfig

logger = logging.getLogger(__name__)

MAX_PENALTY = 100.0


def _gap_months(gap: Any) -> float:
    """Accepts ExperienceGap objects or {'months': n} dicts."""
    raw = gap.get('months', 0) if isinstance(gap, dict) else getattr(gap, 'months', 0)
    try:
        months = float(raw or 0)
    except (TypeError, ValueError):
        logger.warning("Invalid gap months=%r; treating as 0", raw)
        return 0.0
    return max(0.0, months)


class GapPenaltyCalculator:
    """Derives a 0..100 penalty from detected employment gaps."""

    def __init__(self, config: ScorerConfig):
        self.per_month = max(0.0, float(config.gap_penalty_per_month))

    def penalty(self, gaps: Iterable[Any]) -> float:
        total_months = sum(_gap_months(g) for g in (gaps or []))
        return min(MAX_PENALTY, total_months * self.per_month)

    def penalty_with_details(self, gaps: Iterable[Any]) -> Tuple[float, List[Dict[str, Any]]]:
        """Penalty plus a per-gap breakdown for explanations."""
        gaps = list(gaps or [])
        details = []
        for gap in gaps:
            months = _gap_months(gap)
            if months <= 0:
                continue
            start = gap.get('start') if isinstance(gap, dict) else getattr(gap, 'start', None)
            end = gap.get('end') if isinstance(gap, dict) else getattr(gap, 'end', None)
            details.append({
                'type': 'employment_gap',
                'months': months,
                'amount': months * self.per_month,
                'reason': f"{int(months)} month gap",
                'details': f"{start} to {end}",
            })
        return self.penalty(gaps), details
