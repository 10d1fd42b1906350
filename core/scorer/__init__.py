#!/usr/bin/env python3
"""
Scoring Module - Deterministic candidate scoring.

Public API:
- ScoreWeights, JobProfile, JobRequirements: scoring inputs
- ScoreBreakdown, ScoredCandidate: scoring results
- SkillMatcher, TitleMatcher, GapPenaltyCalculator, ScoreAggregator: the factors

The scorer is split into focused, single-responsibility modules:

- models.py: Data structures (ScoreWeights, ScoreBreakdown, ScoredCandidate)
- normalize.py: Skill name normalization and aliases
- skills.py: Weighted must-have / nice-to-have coverage
- title.py: Title similarity and seniority words
- experience.py: Seniority and recency bands
- penalties.py: Employment gap penalty
- aggregate.py: Weighted total and explanation
- persistence.py: Database operations (save_score_to_db)
- service.py: ScoringService orchestrator (import it from core.scorer.service)
"""

from core.scorer.models import (
    ScoreWeights,
    JobProfile,
    JobRequirements,
    ScoreBreakdown,
    ScoredCandidate,
    SkillMatchResult,
)
from core.scorer.skills import SkillMatcher
from core.scorer.title import TitleMatcher
from core.scorer.penalties import GapPenaltyCalculator
from core.scorer.aggregate import ScoreAggregator

__all__ = [
    'ScoreWeights',
    'JobProfile',
    'JobRequirements',
    'ScoreBreakdown',
    'ScoredCandidate',
    'SkillMatchResult',
    'SkillMatcher',
    'TitleMatcher',
    'GapPenaltyCalculator',
    'ScoreAggregator',
]
