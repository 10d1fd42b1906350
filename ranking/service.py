#!/usr/bin/env python3
"""
AI Ranking Service - Optional secondary ranking of a job's candidates.

Asks an LLMProvider for a holistic 1..N ordering of the candidates already
scored for a job and stores it next to the deterministic scores. The overlay
only ever writes ai_rank and ai_rank_reason.

Usage:
    from ranking.service import AIRankingService

    service = AIRankingService(provider=OpenAIService(...))
    rankings = service.rank_candidates(job_id)
    service.save_ai_rankings(job_id, rankings)
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from core.config_loader import AIRankingConfig
from core.exceptions import JobNotFoundError, NotFoundError, ValidationError
from core.llm.interfaces import LLMProvider
from core.llm.schema_models import RankingEntry, RankingResponse
from database.uow import uow
from ranking.cache import RankingCache, compute_data_hash
from ranking.models import AIRankingResult, DEFAULT_REASON, UNRANKED_REASON

logger = logging.getLogger(__name__)


def normalize_rankings(payload: Any, candidate_ids: List[int]) -> List[AIRankingResult]:
    """
    Turn a raw provider response into a complete 1..N ranking.

    Entries that fail validation or name unknown candidates are dropped; a
    candidate ranked twice keeps its best rank. Candidates the model left out
    follow the ranked ones in their given order. Ranks are renumbered 1..N.
    """
    try:
        envelope = RankingResponse.model_validate(payload)
    except PydanticValidationError as e:
        logger.warning(f"Invalid AI ranking response: {e.error_count()} error(s)")
        return []

    known = set(candidate_ids)
    entries = []
    for raw in envelope.rankings:
        try:
            entry = RankingEntry.model_validate(raw)
        except PydanticValidationError:
            logger.warning(f"Dropping malformed ranking entry: {raw!r}")
            continue
        if entry.candidate_id not in known:
            logger.warning(f"Dropping ranking for unknown candidate {entry.candidate_id}")
            continue
        entries.append(entry)

    entries.sort(key=lambda e: e.rank)

    results: List[AIRankingResult] = []
    seen = set()
    for entry in entries:
        if entry.candidate_id in seen:
            continue
        seen.add(entry.candidate_id)
        reason = (entry.reason or '').strip() or DEFAULT_REASON
        results.append(AIRankingResult(candidate_id=entry.candidate_id, rank=0, reason=reason))

    for candidate_id in candidate_ids:
        if candidate_id not in seen:
            results.append(AIRankingResult(candidate_id=candidate_id, rank=0, reason=UNRANKED_REASON))

    for i, result in enumerate(results, start=1):
        result.rank = i
    return results


def build_candidate_summary(candidate, score) -> Dict[str, Any]:
    return {
        'id': candidate.id,
        'name': candidate.name,
        'years_experience': candidate.years_experience or 0,
        'last_role_title': candidate.last_role_title or 'Not specified',
        'skills': [s.skill for s in candidate.skills],
        'current_score': round(score.total_score) if score is not None else 0,
        'missing_must_have': list(score.missing_must_have or []) if score is not None else [],
        'experience_gaps': len(candidate.experience_gaps or []),
    }


def build_ranking_prompt(job_title: str, requirements: Dict[str, List[str]], summaries: List[Dict[str, Any]]) -> str:
    lines = [
        f"Job Title: {job_title}",
        "Job Requirements:",
        f"Must-have skills: {', '.join(requirements.get('must') or []) or 'None specified'}",
        f"Nice-to-have skills: {', '.join(requirements.get('nice') or []) or 'None specified'}",
        "",
        "Candidates to rank:",
    ]
    for i, c in enumerate(summaries, start=1):
        lines.extend([
            f"{i}. {c['name']} (ID: {c['id']})",
            f"   - Experience: {c['years_experience']} years",
            f"   - Last Role: {c['last_role_title']}",
            f"   - Skills: {', '.join(c['skills']) or 'None listed'}",
            f"   - Missing Must-Have Skills: {', '.join(c['missing_must_have']) or 'None'}",
            f"   - Experience Gaps: {c['experience_gaps']} periods",
        ])
    lines.extend([
        "",
        f"Rank from 1 (best fit) to {len(summaries)} (lowest fit).",
        'Respond with JSON: {"rankings": [{"candidateId": 123, "rank": 1, "reason": "..."}]}',
    ])
    return "\n".join(lines)


class AIRankingService:
    """
    Main AI ranking service.

    This service coordinates:
    1. Loading the job and its scored candidates
    2. Prompting the provider and validating its answer
    3. Caching results per job and candidate set
    4. Writing ai_rank / ai_rank_reason through a narrow update
    """

    def __init__(
        self,
        provider: LLMProvider,
        config: Optional[AIRankingConfig] = None,
        session_factory=None,
        cache: Optional[RankingCache] = None
    ):
        self.provider = provider
        self.config = config or AIRankingConfig()
        self.session_factory = session_factory
        self.cache = cache or RankingCache(
            redis_url=self.config.redis_url,
            ttl_seconds=self.config.cache_ttl_seconds,
        )

    def _load_inputs(self, job_id: Any):
        with uow(self.session_factory) as work:
            job = work.jobs.get_by_id(job_id)
            if job is None:
                raise JobNotFoundError(job_id)
            scores = work.scores.get_scores_for_job(job_id)
            candidates = work.candidates.get_for_job(job_id)
            summaries = [build_candidate_summary(c, scores.get(c.id)) for c in candidates]
            job_title = job.title
            requirements = dict(job.requirements or {})

        # Stable order: current score, best first
        summaries.sort(key=lambda s: (-s['current_score'], s['id']))
        return job_title, requirements, summaries

    def rank_candidates(self, job_id: Any) -> List[AIRankingResult]:
        """
        Rank all candidates linked to a job.

        Returns:
            AIRankingResult list with ranks 1..N, or [] when there is nothing
            to rank or the provider fails

        Raises:
            JobNotFoundError: Unknown job
        """
        job_title, requirements, summaries = self._load_inputs(job_id)
        if not summaries:
            logger.info(f"No candidates to rank for job {job_id}")
            return []

        candidate_ids = [s['id'] for s in summaries]
        data_hash = compute_data_hash({'title': job_title, 'requirements': requirements, 'candidates': summaries})
        cached = self.cache.get(job_id, candidate_ids, data_hash)
        if cached is not None:
            logger.info(f"Using cached AI ranking for job {job_id}")
            return cached

        prompt = build_ranking_prompt(job_title, requirements, summaries)
        logger.info(f"Requesting AI ranking for job {job_id} with {len(summaries)} candidates")
        try:
            payload = self.provider.rank_candidates(prompt)
        except Exception as e:
            logger.error(f"AI ranking failed for job {job_id}: {e}")
            return []

        results = normalize_rankings(payload, candidate_ids)
        if results:
            self.cache.set(job_id, candidate_ids, data_hash, results)
        return results

    def save_ai_rankings(self, job_id: Any, rankings: List[AIRankingResult]) -> int:
        """
        Write ai_rank / ai_rank_reason for existing score rows.

        Rankings for candidates without a score row are skipped; no
        deterministic field is ever written here.

        Returns:
            Number of score rows updated
        """
        updated = 0
        with uow(self.session_factory) as work:
            for ranking in rankings:
                if work.scores.update_ai_rank(job_id, ranking.candidate_id, ranking.rank, ranking.reason):
                    updated += 1
        logger.info(f"Saved {updated}/{len(rankings)} AI rankings for job {job_id}")
        return updated

    def rank_and_save(self, job_id: Any) -> int:
        rankings = self.rank_candidates(job_id)
        if not rankings:
            return 0
        return self.save_ai_rankings(job_id, rankings)


def set_manual_rank(job_id: Any, candidate_id: Any, rank: Optional[int], session_factory=None) -> Optional[int]:
    """
    Set (or clear with None) a recruiter's manual rank for a scored candidate.

    Raises:
        ValidationError: rank is not a positive integer or None
        NotFoundError: No score exists for the pair
    """
    if rank is not None and (isinstance(rank, bool) or not isinstance(rank, int) or rank < 1):
        raise ValidationError(f"Manual rank must be a positive integer or None, got {rank!r}")

    with uow(session_factory) as work:
        score = work.scores.set_manual_rank(job_id, candidate_id, rank)
        if score is None:
            raise NotFoundError(f"No score for candidate {candidate_id} on job {job_id}")

    logger.info(f"Manual rank for candidate {candidate_id} on job {job_id} set to {rank}")
    return rank
