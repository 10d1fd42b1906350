from sqlalchemy import Column, Integer, Text, TIMESTAMP, Index, func
from sqlalchemy.orm import relationship

from .base import Base, JSONType


class Job(Base):
    """
    A job opening candidates are ranked against.

    requirements holds {"must": [...], "nice": [...]} as entered.
    score_weights is the weight vector of the last committed rescore, and
    rescore_generation counts committed rescore passes.
    """
    __tablename__ = 'job'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text)
    requirements = Column(JSONType, nullable=False, default=dict)
    status = Column(Text, nullable=False, default='active')  # draft|active|closed

    score_weights = Column(JSONType, nullable=True)
    rescore_generation = Column(Integer, nullable=False, default=0)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    candidate_links = relationship("JobCandidate", back_populates="job", cascade="all, delete-orphan")
    scores = relationship("Score", back_populates="job", passive_deletes='all')

    __table_args__ = (
        Index('idx_job_status', 'status'),
    )

    def to_job_profile(self):
        from core.scorer.models import JobProfile, JobRequirements

        return JobProfile(
            id=self.id,
            title=self.title or '',
            requirements=JobRequirements.from_dict(self.requirements),
        )
