import logging
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from database.models import Candidate, CandidateSkill, JobCandidate
from database.repositories.base import BaseRepository
from etl.resume.models import ProfileFragment

logger = logging.getLogger(__name__)


class CandidateRepository(BaseRepository):
    def get_by_id(self, candidate_id: Any) -> Optional[Candidate]:
        stmt = (
            select(Candidate)
            .options(selectinload(Candidate.skills))
            .where(Candidate.id == candidate_id)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_for_job(self, job_id: Any) -> List[Candidate]:
        """Candidates currently linked to the job, with skills loaded."""
        stmt = (
            select(Candidate)
            .join(JobCandidate, JobCandidate.candidate_id == Candidate.id)
            .options(selectinload(Candidate.skills))
            .where(JobCandidate.job_id == job_id)
            .order_by(Candidate.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def save_candidate_profile(
        self,
        fragment: ProfileFragment,
        name: Optional[str] = None,
        email: Optional[str] = None,
        raw_text: str = '',
        job_id: Any = None
    ) -> Candidate:
        """Store an extracted profile; optionally link it to a job pool."""
        candidate = Candidate(
            name=name or fragment.name or 'Unknown Candidate',
            email=email or fragment.email,
            raw_text=raw_text or '',
            years_experience=fragment.years_experience,
            last_role_title=fragment.last_role_title,
            experience_timeline=[e.to_dict() for e in fragment.timeline],
            experience_gaps=[g.to_dict() for g in fragment.gaps],
        )
        candidate.skills = [
            CandidateSkill(skill=s.skill, proficiency=s.proficiency or 'unknown')
            for s in fragment.skills
        ]
        self.db.add(candidate)
        self.db.flush()

        if job_id is not None:
            self.attach_to_job(job_id, candidate.id)

        logger.info(
            f"Saved candidate {candidate.id} ({len(fragment.skills)} skills, "
            f"{len(fragment.timeline)} timeline entries)"
        )
        return candidate

    def attach_to_job(self, job_id: Any, candidate_id: Any) -> JobCandidate:
        stmt = select(JobCandidate).where(
            JobCandidate.job_id == job_id,
            JobCandidate.candidate_id == candidate_id
        )
        link = self.db.execute(stmt).scalar_one_or_none()
        if link is None:
            link = JobCandidate(job_id=job_id, candidate_id=candidate_id)
            self.db.add(link)
            self.db.flush()
        return link
