from sqlalchemy import Column, Integer, Text, Numeric, TIMESTAMP, ForeignKey, UniqueConstraint, Index, func
from sqlalchemy.orm import relationship

from .base import Base, JSONType


class Score(Base):
    """
    The current score of one candidate for one job.

    Deterministic fields are overwritten in place by every (re)score.
    manual_rank, ai_rank and ai_rank_reason belong to separate write paths
    and survive a rescore unless it explicitly invalidates them.
    """
    __tablename__ = 'score'

    id = Column(Integer, primary_key=True, autoincrement=True)
    candidate_id = Column(Integer, ForeignKey('candidate.id', ondelete='CASCADE'), nullable=False)
    job_id = Column(Integer, ForeignKey('job.id', ondelete='RESTRICT'), nullable=False)

    total_score = Column(Numeric(5, 2, asdecimal=False), nullable=False, default=0)
    skill_match_score = Column(Numeric(5, 2, asdecimal=False), nullable=False, default=0)
    title_score = Column(Numeric(5, 2, asdecimal=False), nullable=False, default=0)
    seniority_score = Column(Numeric(5, 2, asdecimal=False), nullable=False, default=0)
    recency_score = Column(Numeric(5, 2, asdecimal=False), nullable=False, default=0)
    gap_penalty = Column(Numeric(5, 2, asdecimal=False), nullable=False, default=0)

    missing_must_have = Column(JSONType, nullable=False, default=list)
    explanation = Column(Text, nullable=False, default='')
    weights = Column(JSONType, nullable=False, default=dict)

    manual_rank = Column(Integer, nullable=True)
    ai_rank = Column(Integer, nullable=True)
    ai_rank_reason = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    job = relationship("Job", back_populates="scores")
    candidate = relationship("Candidate", back_populates="scores")

    __table_args__ = (
        UniqueConstraint('candidate_id', 'job_id', name='uq_score_candidate_job'),
        Index('idx_score_job', 'job_id'),
        Index('idx_score_total', 'total_score'),
    )
