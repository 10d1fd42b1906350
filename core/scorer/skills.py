#!/usr/bin/env python3
"""
Skill Coverage - Weighted must-have / nice-to-have skill matching.

A candidate skill satisfies a job skill when, after normalization, it equals
or contains the job skill ("react.js" satisfies "react"). Containment also
lets "javascript" satisfy "java"; that behavior is kept as-is because changing
it would change scores. Use the alias table in normalize.py to steer specific
spellings.
"""

from typing import Iterable, Sequence
import logging

from core.config_loader import ScorerConfig
from core.scorer.models import SkillMatchResult
from core.scorer.normalize import normalize_skill, dedupe_skills

logger = logging.getLogger(__name__)


def is_satisfied(job_skill: str, candidate_skills: Sequence[str]) -> bool:
    """True if any normalized candidate skill equals or contains the job skill."""
    target = normalize_skill(job_skill)
    if not target:
        return False
    return any(target in normalize_skill(c) for c in candidate_skills if c)


class SkillMatcher:
    """Computes skill coverage and the ordered list of missing must-haves."""

    def __init__(self, config: ScorerConfig):
        self.must_weight = max(0.0, float(config.must_weight))
        self.nice_weight = max(0.0, float(config.nice_weight))

    def match(
        self,
        must: Sequence[str],
        nice: Sequence[str],
        candidate_skills: Iterable[str]
    ) -> SkillMatchResult:
        """
        Score = 100 * weighted satisfied / weighted total.

        Args:
            must: Job must-have skills in declared order
            nice: Job nice-to-have skills in declared order
            candidate_skills: Candidate skill names (any case)

        Returns:
            SkillMatchResult; missing_must_have keeps the job's declared order
        """
        must = dedupe_skills(must)
        nice = dedupe_skills(nice)
        candidate = [c for c in (candidate_skills or []) if c]

        result = SkillMatchResult()
        for skill in must:
            if is_satisfied(skill, candidate):
                result.matched_must_have.append(skill)
            else:
                result.missing_must_have.append(skill)

        for skill in nice:
            if is_satisfied(skill, candidate):
                result.matched_nice_to_have.append(skill)
            else:
                result.missing_nice_to_have.append(skill)

        total_weight = self.must_weight * len(must) + self.nice_weight * len(nice)
        if total_weight <= 0:
            # No job skills defined: nothing to cover
            result.skill_match_score = 0.0
            return result

        satisfied_weight = (
            self.must_weight * len(result.matched_must_have)
            + self.nice_weight * len(result.matched_nice_to_have)
        )
        result.skill_match_score = 100.0 * satisfied_weight / total_weight

        logger.debug(
            "Skill match %.1f (must %d/%d, nice %d/%d)",
            result.skill_match_score,
            len(result.matched_must_have), len(must),
            len(result.matched_nice_to_have), len(nice)
        )
        return result
