import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from database.models import Job, JobCandidate
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class JobRepository(BaseRepository):
    def get_by_id(self, job_id: Any) -> Optional[Job]:
        stmt = select(Job).where(Job.id == job_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def lock_for_update(self, job_id: Any) -> Optional[Job]:
        """Load the job row with SELECT ... FOR UPDATE (a no-op on SQLite)."""
        stmt = select(Job).where(Job.id == job_id).with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def create_job(
        self,
        title: str,
        requirements: Optional[Dict[str, List[str]]] = None,
        description: Optional[str] = None,
        status: str = 'active'
    ) -> Job:
        from core.scorer.models import JobRequirements

        if requirements is None and description:
            from etl.job import extract_requirements

            normalized = extract_requirements(description)
            logger.info(
                f"Derived {len(normalized.must)} must-have and {len(normalized.nice)} "
                f"nice-to-have skills from the description of {title!r}"
            )
        else:
            # Validates disjoint must/nice and collapses duplicates
            normalized = JobRequirements.from_dict(requirements)
        job = Job(
            title=title,
            description=description,
            requirements=normalized.to_dict(),
            status=status,
            rescore_generation=0,
        )
        self.db.add(job)
        self.db.flush()
        logger.info(f"Created job {job.id}: {title}")
        return job

    def update_requirements(self, job: Job, requirements: Dict[str, List[str]]) -> Job:
        from core.scorer.models import JobRequirements

        job.requirements = JobRequirements.from_dict(requirements).to_dict()
        self.db.flush()
        return job

    def mark_rescored(self, job: Job, weights: Dict[str, float]) -> int:
        """Record the weight vector of a committed pass; returns the new generation."""
        job.score_weights = dict(weights)
        job.rescore_generation = (job.rescore_generation or 0) + 1
        self.db.flush()
        return job.rescore_generation

    def get_candidate_ids(self, job_id: Any) -> List[int]:
        stmt = (
            select(JobCandidate.candidate_id)
            .where(JobCandidate.job_id == job_id)
            .order_by(JobCandidate.candidate_id)
        )
        return list(self.db.execute(stmt).scalars().all())
