#!/usr/bin/env python3
"""
Scoring Service - Deterministic multi-factor scoring of one candidate for one job.

Combines:
- Skill coverage (weighted must-have / nice-to-have)
- Title similarity (last role vs job title)
- Seniority (years of experience)
- Recency (time since the last role ended)
- Gap penalty (employment gaps)

score_candidate() is pure: no I/O, same inputs give the same ScoredCandidate.
score_and_save() wraps it with loading and persistence.
"""

from datetime import date
from typing import Any, Dict, Optional, Union
import logging

from core.config_loader import ScorerConfig
from core.exceptions import JobNotFoundError, CandidateNotFoundError
from core.scorer.models import JobProfile, ScoredCandidate, ScoreWeights
from core.scorer.skills import SkillMatcher
from core.scorer.title import TitleMatcher
from core.scorer.penalties import GapPenaltyCalculator
from core.scorer.experience import seniority_score, recency_score, last_role_end
from core.scorer.aggregate import ScoreAggregator
from core.scorer.explanation import ExplanationContext
from core.scorer.persistence import save_score_to_db
from database.uow import uow
from etl.resume.models import CandidateProfile

logger = logging.getLogger(__name__)


def resolve_weights(
    weights: Optional[Union[ScoreWeights, Dict[str, Any]]],
    config: ScorerConfig
) -> ScoreWeights:
    """Caller weights, validated; configured defaults when none are given."""
    if weights is None:
        return config.default_weights.to_score_weights()
    if isinstance(weights, ScoreWeights):
        return weights
    return ScoreWeights.from_dict(weights)


class ScoringService:
    """
    Scores candidate profiles against jobs.

    Holds only configuration and stateless matchers, so one instance can be
    shared by the threads of a rescore pass.
    """

    def __init__(self, config: Optional[ScorerConfig] = None, session_factory=None):
        self.config = config or ScorerConfig()
        self.session_factory = session_factory
        self.skill_matcher = SkillMatcher(self.config)
        self.title_matcher = TitleMatcher(self.config)
        self.gap_calculator = GapPenaltyCalculator(self.config)
        self.aggregator = ScoreAggregator()

    def score_candidate(
        self,
        job: Any,
        profile: Any,
        weights: Optional[Union[ScoreWeights, Dict[str, Any]]] = None,
        as_of: Optional[date] = None
    ) -> ScoredCandidate:
        """
        Score one candidate profile for one job.

        Args:
            job: JobProfile (or a Job row)
            profile: CandidateProfile (or a Candidate row)
            weights: ScoreWeights or a dict of the five weights; configured defaults if None
            as_of: Reference date for recency (defaults to today)

        Returns:
            ScoredCandidate with the full ScoreBreakdown
        """
        job = job if isinstance(job, JobProfile) else job.to_job_profile()
        profile = profile if isinstance(profile, CandidateProfile) else profile.to_profile()
        weights = resolve_weights(weights, self.config)
        as_of = as_of or date.today()

        skill_match = self.skill_matcher.match(
            job.requirements.must,
            job.requirements.nice,
            profile.skill_names
        )
        title = self.title_matcher.match(job.title, profile.last_role_title)
        seniority = seniority_score(profile.years_experience)
        recency = recency_score(last_role_end(profile.experience_timeline, as_of), as_of)
        gap_penalty = self.gap_calculator.penalty(profile.experience_gaps)

        breakdown = self.aggregator.aggregate(
            skill_match_score=skill_match.skill_match_score,
            title_score=title,
            seniority_score=seniority,
            recency_score=recency,
            gap_penalty=gap_penalty,
            weights=weights,
            missing_must_have=skill_match.missing_must_have,
            context=ExplanationContext(
                candidate_name=profile.name,
                job_title=job.title,
                years_experience=profile.years_experience,
                last_role_title=profile.last_role_title,
            ),
        )

        logger.debug(f"Scored candidate {profile.id} for job {job.id}: {breakdown.total_score:.2f}")
        return ScoredCandidate(
            candidate_id=profile.id,
            job_id=job.id,
            breakdown=breakdown,
            skill_match=skill_match,
        )

    def score_and_save(
        self,
        job_id: Any,
        candidate_id: Any,
        weights: Optional[Union[ScoreWeights, Dict[str, Any]]] = None,
        as_of: Optional[date] = None
    ) -> ScoredCandidate:
        """
        Load, score and upsert a single (candidate, job) pair.

        Raises:
            JobNotFoundError / CandidateNotFoundError when either side is missing
        """
        weights = resolve_weights(weights, self.config)

        with uow(self.session_factory) as work:
            job = work.jobs.get_by_id(job_id)
            if job is None:
                raise JobNotFoundError(job_id)
            candidate = work.candidates.get_by_id(candidate_id)
            if candidate is None:
                raise CandidateNotFoundError(candidate_id)

            scored = self.score_candidate(job, candidate, weights, as_of=as_of)
            save_score_to_db(scored, work.scores)
            work.candidates.attach_to_job(job_id, candidate_id)

        logger.info(f"Saved score {scored.total_score:.2f} for candidate {candidate_id} on job {job_id}")
        return scored
