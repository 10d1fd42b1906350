#!/usr/bin/env python3
"""
AI Ranking Models - Results of the secondary AI ranking overlay.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict

UNRANKED_REASON = "Standard evaluation based on profile analysis"
DEFAULT_REASON = "AI ranking analysis"


@dataclass
class AIRankingResult:
    """One candidate's AI rank (1..N) and the model's reason."""
    candidate_id: int
    rank: int
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AIRankingResult':
        return cls(
            candidate_id=int(data['candidate_id']),
            rank=int(data['rank']),
            reason=str(data.get('reason') or ''),
        )
