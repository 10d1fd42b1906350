#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring inputs and results.
"""

import math
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field, asdict

from core.exceptions import ValidationError

WEIGHT_FIELDS = ('skills', 'title', 'seniority', 'recency', 'gaps')


@dataclass(frozen=True)
class ScoreWeights:
    """
    Weight vector applied by the aggregator.

    Values must be non-negative and finite. They are not required to sum to
    1.0: the aggregator divides by their sum.
    """
    skills: float
    title: float
    seniority: float
    recency: float
    gaps: float

    def __post_init__(self):
        for name in WEIGHT_FIELDS:
            raw = getattr(self, name)
            if isinstance(raw, bool):
                raise ValidationError(f"Weight '{name}' must be a number, got {raw!r}")
            try:
                value = float(raw)
            except (TypeError, ValueError):
                raise ValidationError(f"Weight '{name}' must be a number, got {raw!r}")
            if not math.isfinite(value):
                raise ValidationError(f"Weight '{name}' must be finite, got {raw!r}")
            # A negative weight would invert the direction of its term
            if value < 0:
                raise ValidationError(f"Weight '{name}' must be non-negative, got {value}")
            object.__setattr__(self, name, value)

        if self.total <= 0:
            raise ValidationError("At least one weight must be positive")

    @property
    def total(self) -> float:
        return self.skills + self.title + self.seniority + self.recency + self.gaps

    def is_normalized(self, epsilon: float = 0.01) -> bool:
        """UI-level check: do the weights sum to 1.0 within epsilon?"""
        return abs(self.total - 1.0) <= epsilon

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreWeights":
        if not isinstance(data, dict):
            raise ValidationError(f"Weights must be a mapping, got {type(data).__name__}")
        missing = [name for name in WEIGHT_FIELDS if name not in data]
        if missing:
            raise ValidationError(f"Weights missing field(s): {', '.join(missing)}")
        return cls(**{name: data[name] for name in WEIGHT_FIELDS})


@dataclass
class JobRequirements:
    """
    Must-have and nice-to-have skills, each an ordered set.

    Repeats within a list collapse (first spelling wins). The two lists must
    be disjoint after normalization.
    """
    must: List[str] = field(default_factory=list)
    nice: List[str] = field(default_factory=list)

    def __post_init__(self):
        from core.scorer.normalize import dedupe_skills, normalize_skill

        self.must = dedupe_skills(self.must)
        self.nice = dedupe_skills(self.nice)
        must_keys = {normalize_skill(s) for s in self.must}
        overlap = [s for s in self.nice if normalize_skill(s) in must_keys]
        if overlap:
            raise ValidationError(
                f"Skills cannot be both must-have and nice-to-have: {', '.join(overlap)}"
            )

    def to_dict(self) -> Dict[str, List[str]]:
        return {'must': list(self.must), 'nice': list(self.nice)}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "JobRequirements":
        data = data or {}
        return cls(must=list(data.get('must') or []), nice=list(data.get('nice') or []))


@dataclass
class JobProfile:
    """What the scorer needs to know about a job."""
    id: Optional[int]
    title: str
    requirements: JobRequirements = field(default_factory=JobRequirements)


@dataclass
class SkillMatchResult:
    """Skill coverage of a candidate against a job's must/nice lists."""
    skill_match_score: float = 0.0
    missing_must_have: List[str] = field(default_factory=list)
    matched_must_have: List[str] = field(default_factory=list)
    matched_nice_to_have: List[str] = field(default_factory=list)
    missing_nice_to_have: List[str] = field(default_factory=list)


@dataclass
class ScoreBreakdown:
    """All deterministic score fields produced by one aggregation."""
    total_score: float
    skill_match_score: float
    title_score: float
    seniority_score: float
    recency_score: float
    gap_penalty: float
    missing_must_have: List[str]
    explanation: str
    weights: ScoreWeights
    components: Dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> Dict[str, Any]:
        """Column values for a Score row (excluding identity and AI fields)."""
        return {
            'total_score': self.total_score,
            'skill_match_score': self.skill_match_score,
            'title_score': self.title_score,
            'seniority_score': self.seniority_score,
            'recency_score': self.recency_score,
            'gap_penalty': self.gap_penalty,
            'missing_must_have': list(self.missing_must_have),
            'explanation': self.explanation,
            'weights': self.weights.to_dict(),
        }


@dataclass
class ScoredCandidate:
    """Complete scoring result for a (candidate, job) pair."""
    candidate_id: Optional[int]
    job_id: Optional[int]
    breakdown: ScoreBreakdown
    skill_match: Optional[SkillMatchResult] = None

    @property
    def total_score(self) -> float:
        return self.breakdown.total_score
