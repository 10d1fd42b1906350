import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from database.models import Score
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ScoreRepository(BaseRepository):
    def get_existing_score(self, candidate_id: Any, job_id: Any) -> Optional[Score]:
        stmt = select(Score).where(
            Score.candidate_id == candidate_id,
            Score.job_id == job_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_scores_for_job(self, job_id: Any) -> Dict[int, Score]:
        """Existing scores of a job keyed by candidate id (one query)."""
        stmt = select(Score).where(Score.job_id == job_id)
        return {s.candidate_id: s for s in self.db.execute(stmt).scalars().all()}

    def get_ranked_scores(self, job_id: Any) -> List[Score]:
        """Manual rank first (ascending, unranked last), then total score descending."""
        stmt = (
            select(Score)
            .where(Score.job_id == job_id)
            .order_by(
                Score.manual_rank.is_(None),
                Score.manual_rank,
                Score.total_score.desc(),
                Score.candidate_id,
            )
        )
        return list(self.db.execute(stmt).scalars().all())

    def update_ai_rank(
        self,
        job_id: Any,
        candidate_id: Any,
        ai_rank: Optional[int],
        ai_rank_reason: Optional[str]
    ) -> bool:
        """Write only the AI fields; False when no score row exists."""
        score = self.get_existing_score(candidate_id, job_id)
        if score is None:
            logger.warning(f"No score for candidate {candidate_id} on job {job_id}; skipping AI rank")
            return False
        score.ai_rank = ai_rank
        score.ai_rank_reason = ai_rank_reason
        return True

    def set_manual_rank(self, job_id: Any, candidate_id: Any, manual_rank: Optional[int]) -> Optional[Score]:
        score = self.get_existing_score(candidate_id, job_id)
        if score is None:
            return None
        score.manual_rank = manual_rank
        return score

    def clear_ai_ranks(self, job_id: Any) -> int:
        count = 0
        for score in self.get_scores_for_job(job_id).values():
            if score.ai_rank is not None or score.ai_rank_reason is not None:
                score.ai_rank = None
                score.ai_rank_reason = None
                count += 1
        if count > 0:
            logger.info(f"Cleared AI ranks on {count} scores for job {job_id}")
        return count
