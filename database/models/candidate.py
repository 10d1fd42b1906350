from sqlalchemy import Column, Integer, Text, Float, TIMESTAMP, ForeignKey, UniqueConstraint, Index, func
from sqlalchemy.orm import relationship

from .base import Base, JSONType


class Candidate(Base):
    """
    An extracted candidate profile.

    experience_timeline and experience_gaps store the serialized
    TimelineEntry / ExperienceGap dicts; gaps are a cache that can always be
    recomputed from the timeline.
    """
    __tablename__ = 'candidate'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(Text)
    raw_text = Column(Text, nullable=False, default='')

    years_experience = Column(Float, nullable=True)
    last_role_title = Column(Text, nullable=True)
    experience_timeline = Column(JSONType, nullable=False, default=list)
    experience_gaps = Column(JSONType, nullable=False, default=list)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    skills = relationship(
        "CandidateSkill",
        back_populates="candidate",
        cascade="all, delete-orphan",
        order_by="CandidateSkill.id",
    )
    job_links = relationship("JobCandidate", back_populates="candidate", cascade="all, delete-orphan")
    scores = relationship("Score", back_populates="candidate", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_candidate_email', 'email'),
    )

    def to_profile(self):
        """Scorer-facing CandidateProfile built from the stored columns."""
        from etl.resume.models import CandidateProfile, TimelineEntry, ExperienceGap, SkillEntry

        timeline = [TimelineEntry.from_dict(e) for e in (self.experience_timeline or [])]
        gaps = [ExperienceGap.from_dict(g) for g in (self.experience_gaps or [])]
        return CandidateProfile(
            id=self.id,
            name=self.name,
            email=self.email,
            raw_text=self.raw_text or '',
            years_experience=self.years_experience,
            last_role_title=self.last_role_title,
            experience_timeline=[e for e in timeline if e is not None],
            experience_gaps=[g for g in gaps if g is not None],
            skills=[SkillEntry(skill=s.skill, proficiency=s.proficiency or 'unknown') for s in self.skills],
        )


class CandidateSkill(Base):
    __tablename__ = 'candidate_skill'

    id = Column(Integer, primary_key=True, autoincrement=True)
    candidate_id = Column(Integer, ForeignKey('candidate.id', ondelete='CASCADE'), nullable=False)
    skill = Column(Text, nullable=False)
    proficiency = Column(Text, nullable=False, default='unknown')  # beginner|intermediate|advanced|expert|unknown

    candidate = relationship("Candidate", back_populates="skills")

    __table_args__ = (
        UniqueConstraint('candidate_id', 'skill', name='uq_candidate_skill'),
    )


class JobCandidate(Base):
    """Links a candidate to the job pool it was uploaded for."""
    __tablename__ = 'job_candidate'

    job_id = Column(Integer, ForeignKey('job.id', ondelete='CASCADE'), primary_key=True)
    candidate_id = Column(Integer, ForeignKey('candidate.id', ondelete='CASCADE'), primary_key=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    job = relationship("Job", back_populates="candidate_links")
    candidate = relationship("Candidate", back_populates="job_links")
