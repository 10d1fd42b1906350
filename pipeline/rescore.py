"""Job-wide rescore pipeline.

Recomputes every linked candidate's score for a job under one weight vector
and replaces the stored scores atomically. Used when a recruiter changes the
score weights or edits the job's requirements.
"""

import time
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Union

from core.config_loader import RescoreConfig
from core.exceptions import JobNotFoundError, RescoreSupersededError
from core.scorer.models import ScoreWeights, ScoredCandidate
from core.scorer.persistence import save_score_to_db
from core.scorer.service import ScoringService, resolve_weights
from database.uow import uow
from pipeline.control import RescoreController, rescore_controller

logger = logging.getLogger(__name__)


@dataclass
class RescoreResult:
    """Outcome of one committed rescore pass."""
    job_id: Any
    rescored_count: int
    generation: int
    weights: Dict[str, float]
    execution_time: float = 0.0


class RescoreOrchestrator:
    """
    Runs rescore passes: load profiles once, score in a bounded thread pool,
    then write every score, the job's weight vector and its new generation in
    a single transaction.
    """

    def __init__(
        self,
        scoring_service: Optional[ScoringService] = None,
        config: Optional[RescoreConfig] = None,
        session_factory=None,
        controller: Optional[RescoreController] = None
    ):
        self.scoring_service = scoring_service or ScoringService(session_factory=session_factory)
        self.config = config or RescoreConfig()
        self.session_factory = session_factory
        self.controller = controller or rescore_controller

    def rescore_job(
        self,
        job_id: Any,
        weights: Optional[Union[ScoreWeights, Dict[str, Any]]] = None,
        invalidate_ai_rank: bool = False,
        as_of: Optional[date] = None
    ) -> int:
        """
        Rescore every candidate linked to a job.

        Args:
            job_id: Job to rescore
            weights: New weight vector (configured defaults if None)
            invalidate_ai_rank: Clear ai_rank / ai_rank_reason on rewritten scores
            as_of: Reference date for recency (defaults to today)

        Returns:
            Number of scores written

        Raises:
            ValidationError: Malformed weights (before any work is done)
            JobNotFoundError: Unknown job
            RescoreSupersededError: A newer rescore of the same job was requested
        """
        return self.run(job_id, weights, invalidate_ai_rank, as_of).rescored_count

    def run(
        self,
        job_id: Any,
        weights: Optional[Union[ScoreWeights, Dict[str, Any]]] = None,
        invalidate_ai_rank: bool = False,
        as_of: Optional[date] = None
    ) -> RescoreResult:
        """rescore_job() returning the full RescoreResult."""
        weights = resolve_weights(weights, self.scoring_service.config)
        as_of = as_of or date.today()
        ticket = self.controller.next_ticket(job_id)

        with self.controller.job_lock(job_id):
            self._ensure_current(job_id, ticket)
            start = time.time()
            logger.info(f"Rescoring job {job_id} (ticket {ticket}) with weights {weights.to_dict()}")

            with uow(self.session_factory) as work:
                job = work.jobs.lock_for_update(job_id)
                if job is None:
                    raise JobNotFoundError(job_id)

                job_profile = job.to_job_profile()
                profiles = [c.to_profile() for c in work.candidates.get_for_job(job_id)]
                scored = self._score_all(job_profile, profiles, weights, as_of)

                self._ensure_current(job_id, ticket)

                existing = work.scores.get_scores_for_job(job_id)
                generation = work.jobs.mark_rescored(job, weights.to_dict())
                for result in scored:
                    save_score_to_db(
                        result,
                        work.scores,
                        existing=existing.get(result.candidate_id),
                        invalidate_ai_rank=invalidate_ai_rank,
                    )

                # Last chance to abandon: raising here rolls the whole pass back
                self._ensure_current(job_id, ticket)

            elapsed = time.time() - start
            logger.info(
                f"Rescored {len(scored)} candidates for job {job_id} "
                f"(generation {generation}) in {elapsed:.2f}s"
            )
            return RescoreResult(
                job_id=job_id,
                rescored_count=len(scored),
                generation=generation,
                weights=weights.to_dict(),
                execution_time=elapsed,
            )

    def on_requirements_changed(self, job_id: Any, as_of: Optional[date] = None) -> int:
        """Rescore a job after its requirements changed, keeping its current weights."""
        with uow(self.session_factory) as work:
            job = work.jobs.get_by_id(job_id)
            if job is None:
                raise JobNotFoundError(job_id)
            stored_weights = dict(job.score_weights) if job.score_weights else None

        logger.info(f"Requirements changed for job {job_id}; rescoring")
        return self.rescore_job(job_id, stored_weights, as_of=as_of)

    def _score_all(
        self,
        job_profile,
        profiles: List,
        weights: ScoreWeights,
        as_of: date
    ) -> List[ScoredCandidate]:
        if not profiles:
            return []
        workers = max(1, min(self.config.max_workers, len(profiles)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(
                lambda p: self.scoring_service.score_candidate(job_profile, p, weights, as_of=as_of),
                profiles
            ))

    def _ensure_current(self, job_id: Any, ticket: int) -> None:
        latest = self.controller.latest_ticket(job_id)
        if latest != ticket:
            logger.info(f"Rescore of job {job_id} (ticket {ticket}) superseded by ticket {latest}")
            raise RescoreSupersededError(job_id, ticket, latest)


def rescore_job(
    job_id: Any,
    weights: Optional[Union[ScoreWeights, Dict[str, Any]]] = None,
    invalidate_ai_rank: bool = False,
    as_of: Optional[date] = None
) -> int:
    """Rescore with a default orchestrator bound to the configured database."""
    return RescoreOrchestrator().rescore_job(job_id, weights, invalidate_ai_rank, as_of)
