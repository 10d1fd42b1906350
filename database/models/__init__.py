from .base import Base, JSONType
from .job import Job
from .candidate import Candidate, CandidateSkill, JobCandidate
from .score import Score

__all__ = [
    'Base',
    'JSONType',
    'Job',
    'Candidate',
    'CandidateSkill',
    'JobCandidate',
    'Score',
]
